from flask import Blueprint, request, jsonify
from flask_jwt_extended import jwt_required

from ayurclinic.models import SessionStatus, TherapySession
from ayurclinic.repositories import ClinicStore
from ayurclinic.utils.audit import log_audit
from ayurclinic.utils.decorators import require_role, get_current_user
from ayurclinic.utils.pagination import page_args, paginated

therapy_session_bp = Blueprint('therapy_session', __name__, url_prefix='/api/therapy-sessions')


@therapy_session_bp.route('', methods=['GET'])
@jwt_required()
@require_role()
def list_sessions():
    """
    Therapy sessions visible to the caller: assigned (therapist), own
    (patient), prescribed (doctor) or all (admin).
    Query params:
        status: scheduled | in-progress | completed | cancelled (optional)
        appointment_id: (optional)
        page, limit: Pagination
    """
    page, limit = page_args(default_limit=50)
    query = ClinicStore().sessions_for(get_current_user())

    status = request.args.get('status', type=str)
    if status:
        try:
            query = query.filter(TherapySession.status == SessionStatus(status))
        except ValueError:
            return jsonify({'success': False, 'error': f'Unknown status: {status}'}), 400

    appointment_id = request.args.get('appointment_id', type=int)
    if appointment_id:
        query = query.filter(TherapySession.appointment_id == appointment_id)

    items, pagination = paginated(
        query.order_by(TherapySession.scheduled_at.asc(), TherapySession.id.asc()), page, limit
    )
    return jsonify({
        'success': True,
        'data': [s.to_dict() for s in items],
        'pagination': pagination,
    }), 200


@therapy_session_bp.route('/<int:session_id>', methods=['PATCH'])
@jwt_required()
@require_role('therapist')
def update_session(session_id):
    """
    Therapist updates one of their sessions.
    Body: { status?, notes? }
    """
    therapist = get_current_user()
    store = ClinicStore()
    session = store.get_session(session_id)
    if not session or session.therapist_id != therapist.id:
        return jsonify({'success': False, 'error': 'Therapy session not found'}), 404

    data = request.get_json(silent=True) or {}
    if 'status' not in data and 'notes' not in data:
        return jsonify({'success': False, 'error': 'Nothing to update: send status and/or notes'}), 400

    status = None
    if 'status' in data:
        try:
            status = SessionStatus(data.get('status'))
        except ValueError:
            allowed = ', '.join(s.value for s in SessionStatus)
            return jsonify({'success': False, 'error': f'status must be one of: {allowed}'}), 400

    notes = data.get('notes')
    if notes is not None and not isinstance(notes, str):
        return jsonify({'success': False, 'error': 'notes must be a string'}), 400

    previous = session.status.value
    store.update_session(session, status=status, notes=notes)

    log_audit(
        'therapy_session',
        'update',
        user_id=therapist.id,
        entity_id=session.id,
        details={'from': previous, 'to': session.status.value},
    )

    return jsonify({'success': True, 'data': session.to_dict()}), 200
