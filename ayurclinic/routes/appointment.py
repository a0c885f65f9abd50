from datetime import datetime

from flask import Blueprint, request, jsonify
from flask_jwt_extended import jwt_required

from ayurclinic.errors import NotFound, PermissionDenied, ValidationError
from ayurclinic.models import Appointment, AppointmentStatus, Role
from ayurclinic.repositories import ClinicStore
from ayurclinic.services.prescription_service import (
    build_therapy_list,
    mark_completed,
    save_prescription,
)
from ayurclinic.services.therapy_planner import parse_time_of_day
from ayurclinic.utils.audit import log_audit
from ayurclinic.utils.decorators import require_role, get_current_user
from ayurclinic.utils.pagination import page_args, paginated

appointment_bp = Blueprint('appointment', __name__, url_prefix='/api/appointments')


def _parse_date(value):
    try:
        return datetime.strptime(value, '%Y-%m-%d').date()
    except (TypeError, ValueError):
        raise ValidationError('Invalid date format. Use YYYY-MM-DD')


def _load_visible(store, appointment_id, user):
    appointment = store.get_appointment(appointment_id)
    if not appointment:
        raise NotFound('Appointment not found')
    if user.role == Role.ADMIN:
        return appointment
    if user.id not in (appointment.patient_id, appointment.doctor_id):
        raise NotFound('Appointment not found')
    return appointment


def _load_for_doctor(store, appointment_id, user):
    appointment = _load_visible(store, appointment_id, user)
    if appointment.doctor_id != user.id:
        raise PermissionDenied('Only the assigned doctor can change this appointment')
    return appointment


@appointment_bp.route('', methods=['GET'])
@jwt_required()
@require_role()
def list_appointments():
    """
    List the caller's appointments (all of them for admins).
    Query params:
        date: YYYY-MM-DD (optional)
        status: confirmed | completed | cancelled (optional)
        page, limit: Pagination
    """
    user = get_current_user()
    page, limit = page_args()

    query = ClinicStore().appointments_for(user)

    filter_date = request.args.get('date', type=str)
    if filter_date:
        query = query.filter(Appointment.date == _parse_date(filter_date))

    status = request.args.get('status', type=str)
    if status:
        try:
            query = query.filter(Appointment.status == AppointmentStatus(status))
        except ValueError:
            return jsonify({'success': False, 'error': f'Unknown status: {status}'}), 400

    items, pagination = paginated(
        query.order_by(Appointment.date.desc(), Appointment.time.asc()), page, limit
    )

    return jsonify({
        'success': True,
        'data': [a.to_dict() for a in items],
        'pagination': pagination,
    }), 200


@appointment_bp.route('/<int:appointment_id>', methods=['GET'])
@jwt_required()
@require_role()
def get_appointment(appointment_id):
    """Single appointment with its therapy sessions."""
    store = ClinicStore()
    appointment = _load_visible(store, appointment_id, get_current_user())
    data = appointment.to_dict()
    data['therapy_sessions'] = [s.to_dict() for s in store.sessions_for_appointment(appointment.id)]
    return jsonify({'success': True, 'data': data}), 200


@appointment_bp.route('', methods=['POST'])
@jwt_required()
@require_role('patient')
def create_appointment():
    """
    Book an appointment with a doctor.
    Body: { doctor_id, date: YYYY-MM-DD, time: HH:MM, reason }
    """
    data = request.get_json(silent=True)

    if not data:
        return jsonify({
            'success': False,
            'error': 'Request body must be JSON'
        }), 400

    for field in ('doctor_id', 'date', 'time'):
        if not data.get(field):
            return jsonify({
                'success': False,
                'error': f'Field "{field}" is required'
            }), 400

    appointment_date = _parse_date(data['date'])
    appointment_time = parse_time_of_day(data['time']).strftime('%H:%M')

    reason = data.get('reason') or ''
    if not isinstance(reason, str):
        return jsonify({'success': False, 'error': 'Field "reason" must be a string'}), 400

    store = ClinicStore()
    try:
        doctor_id = int(data['doctor_id'])
    except (TypeError, ValueError):
        return jsonify({'success': False, 'error': 'doctor_id must be an integer'}), 400
    doctor = store.get_user_with_role(doctor_id, Role.DOCTOR)
    if not doctor:
        return jsonify({
            'success': False,
            'error': f'Doctor with ID {data["doctor_id"]} not found'
        }), 404

    patient = get_current_user()
    appointment = Appointment(
        patient_id=patient.id,
        patient_name=patient.display_name,
        doctor_id=doctor.id,
        doctor_name=doctor.display_name,
        date=appointment_date,
        time=appointment_time,
        reason=reason.strip(),
        status=AppointmentStatus.CONFIRMED,
    )
    store.add_appointment(appointment)

    log_audit('appointment', 'create', user_id=patient.id, entity_id=appointment.id)

    return jsonify({
        'success': True,
        'message': 'Appointment booked successfully',
        'data': appointment.to_dict()
    }), 201


@appointment_bp.route('/<int:appointment_id>/prescription', methods=['POST'])
@jwt_required()
@require_role('doctor')
def prescribe(appointment_id):
    """
    Save the doctor's prescription and schedule the therapy sessions.

    Body:
        prescription: free-text notes
        therapies: [{therapy_type, duration, therapist_id, sessions}, ...]

    Every therapy entry is validated before anything is written. A store
    failure is reported generically; sessions written before it remain.
    """
    data = request.get_json(silent=True)
    if data is None:
        return jsonify({'success': False, 'error': 'Request body must be JSON'}), 400

    doctor = get_current_user()
    store = ClinicStore()
    appointment = _load_for_doctor(store, appointment_id, doctor)
    if appointment.status == AppointmentStatus.CANCELLED:
        raise ValidationError('Cannot prescribe for a cancelled appointment')

    notes = data.get('prescription') or ''
    if not isinstance(notes, str):
        raise ValidationError('Field "prescription" must be a string')
    notes = notes.strip()
    therapies = build_therapy_list(store, data.get('therapies'))

    sessions = save_prescription(store, appointment, notes, therapies, doctor.id)

    log_audit(
        'appointment',
        'prescribe',
        user_id=doctor.id,
        entity_id=appointment.id,
        details={'therapies': len(therapies), 'sessions': len(sessions)},
    )

    return jsonify({
        'success': True,
        'message': 'Prescription saved',
        'data': appointment.to_dict(),
        'sessions_created': len(sessions),
    }), 200


@appointment_bp.route('/<int:appointment_id>/complete', methods=['POST'])
@jwt_required()
@require_role('doctor')
def complete_appointment(appointment_id):
    doctor = get_current_user()
    store = ClinicStore()
    appointment = _load_for_doctor(store, appointment_id, doctor)
    mark_completed(store, appointment)

    log_audit('appointment', 'complete', user_id=doctor.id, entity_id=appointment.id)

    return jsonify({
        'success': True,
        'message': 'Appointment marked as completed',
        'data': appointment.to_dict()
    }), 200


@appointment_bp.route('/<int:appointment_id>/cancel', methods=['POST'])
@jwt_required()
@require_role('patient', 'doctor')
def cancel_appointment(appointment_id):
    """Cancel a confirmed appointment (owning patient or assigned doctor)."""
    user = get_current_user()
    store = ClinicStore()
    appointment = _load_visible(store, appointment_id, user)
    if appointment.status != AppointmentStatus.CONFIRMED:
        raise ValidationError(f'Only confirmed appointments can be cancelled (status: {appointment.status.value})')

    store.set_appointment_status(appointment, AppointmentStatus.CANCELLED)
    log_audit('appointment', 'cancel', user_id=user.id, entity_id=appointment.id)

    return jsonify({
        'success': True,
        'message': 'Appointment cancelled',
        'data': appointment.to_dict()
    }), 200
