import logging

from flask import Blueprint, request, jsonify
from flask_jwt_extended import jwt_required

from ayurclinic.models import Feedback, Role
from ayurclinic.repositories import ClinicStore
from ayurclinic.services.sentiment_service import classify_sentiment
from ayurclinic.utils.decorators import require_role, get_current_user

logger = logging.getLogger(__name__)

feedback_bp = Blueprint('feedback', __name__, url_prefix='/api/feedback')


@feedback_bp.route('', methods=['POST'])
@jwt_required()
@require_role('patient')
def submit_feedback():
    """
    Patient feedback about a doctor, tagged with a sentiment.
    Body: { doctor_id, text, rating?, appointment_id? }
    """
    data = request.get_json(silent=True) or {}
    text = data.get('text') or ''
    if not isinstance(text, str):
        return jsonify({'success': False, 'error': 'Field "text" must be a string'}), 400
    text = text.strip()
    if not text:
        return jsonify({'success': False, 'error': 'Field "text" is required'}), 400

    store = ClinicStore()
    try:
        doctor_id = int(data.get('doctor_id'))
    except (TypeError, ValueError):
        return jsonify({'success': False, 'error': 'Field "doctor_id" is required'}), 400
    if not store.get_user_with_role(doctor_id, Role.DOCTOR):
        return jsonify({'success': False, 'error': f'Doctor with ID {doctor_id} not found'}), 404

    rating = data.get('rating')
    if rating is not None:
        try:
            rating = int(rating)
        except (TypeError, ValueError):
            rating = 0
        if not 1 <= rating <= 5:
            return jsonify({'success': False, 'error': 'rating must be between 1 and 5'}), 400

    patient = get_current_user()
    appointment_id = data.get('appointment_id')
    if appointment_id is not None:
        try:
            appointment_id = int(appointment_id)
        except (TypeError, ValueError):
            return jsonify({'success': False, 'error': 'appointment_id must be an integer'}), 400
        appointment = store.get_appointment(appointment_id)
        if not appointment or appointment.patient_id != patient.id:
            return jsonify({'success': False, 'error': 'Appointment not found'}), 404

    feedback = Feedback(
        patient_id=patient.id,
        doctor_id=doctor_id,
        appointment_id=appointment_id,
        text=text,
        rating=rating,
        sentiment=classify_sentiment(text),
    )
    store.add_feedback(feedback)
    logger.info("Feedback %s stored for doctor %s (%s)", feedback.id, doctor_id, feedback.sentiment.value)

    return jsonify({'success': True, 'message': 'Thank you for your feedback', 'data': feedback.to_dict()}), 201


@feedback_bp.route('', methods=['GET'])
@jwt_required()
@require_role('admin', 'doctor')
def list_feedback():
    items = ClinicStore().feedback_for(get_current_user()).order_by(Feedback.created_at.desc()).all()
    return jsonify({'success': True, 'data': [f.to_dict() for f in items]}), 200
