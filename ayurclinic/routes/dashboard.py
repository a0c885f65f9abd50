from datetime import datetime, timedelta

from flask import Blueprint, jsonify, current_app
from flask_jwt_extended import jwt_required

from ayurclinic.models import SessionStatus, TherapySession
from ayurclinic.repositories import ClinicStore
from ayurclinic.services.dashboards import build_dashboard
from ayurclinic.services.reminders import due_reminders
from ayurclinic.utils.decorators import require_role, get_current_user

dashboard_bp = Blueprint('dashboard', __name__, url_prefix='/api')


@dashboard_bp.route('/dashboard', methods=['GET'])
@jwt_required()
@require_role()
def dashboard_home():
    """Dashboard for whichever role the caller has."""
    return jsonify({'success': True, **build_dashboard(ClinicStore(), get_current_user())}), 200


@dashboard_bp.route('/reminders', methods=['GET'])
@jwt_required()
@require_role('patient')
def my_reminders():
    """The patient's sessions that start inside the reminder window."""
    now = datetime.utcnow()
    window = timedelta(hours=current_app.config['REMINDER_WINDOW_HOURS'])
    sessions = (
        ClinicStore().sessions_for(get_current_user())
        .filter(TherapySession.status == SessionStatus.SCHEDULED, TherapySession.scheduled_at > now)
        .order_by(TherapySession.scheduled_at.asc())
        .all()
    )
    return jsonify({
        'success': True,
        'window_hours': current_app.config['REMINDER_WINDOW_HOURS'],
        'data': [s.to_dict() for s in due_reminders(sessions, now, window, include_sent=True)],
    }), 200
