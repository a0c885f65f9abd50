"""
Celery tasks for therapy session reminders
"""
import logging
from datetime import datetime

from flask import current_app

from ayurclinic.extensions import celery
from ayurclinic.repositories import ClinicStore
from ayurclinic.services.reminders import dispatch_due_reminders

logger = logging.getLogger(__name__)


@celery.task(name='tasks.send_session_reminders')
def send_session_reminders():
    """
    Email patients whose scheduled sessions start within
    REMINDER_WINDOW_HOURS. Runs on the beat schedule set in create_app.

    Returns:
        dict: Send results
    """
    try:
        sent = dispatch_due_reminders(ClinicStore(), current_app.config['REMINDER_WINDOW_HOURS'])
        return {
            'success': True,
            'sent_count': sent,
            'timestamp': datetime.utcnow().isoformat()
        }
    except Exception as e:
        logger.error(f"Error sending session reminders: {e}", exc_info=True)
        return {'success': False, 'error': str(e)}
