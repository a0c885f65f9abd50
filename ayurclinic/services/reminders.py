"""
Session reminders: which scheduled sessions start soon enough to remind the
patient about.
"""
import logging
from datetime import datetime, timedelta

from ayurclinic.models import SessionStatus
from ayurclinic.services.email_service import send_session_reminder_email

logger = logging.getLogger(__name__)


def is_within_reminder_window(scheduled_at, now, window):
    """True when the session starts after ``now`` and by ``now + window``."""
    return now < scheduled_at <= now + window


def due_reminders(sessions, now, window, include_sent=False):
    """Scheduled sessions inside the window; already-reminded ones only with ``include_sent``."""
    return [
        s for s in sessions
        if s.status == SessionStatus.SCHEDULED
        and (include_sent or s.reminder_sent_at is None)
        and is_within_reminder_window(s.scheduled_at, now, window)
    ]


def dispatch_due_reminders(store, window_hours, now=None):
    """
    Email every patient whose session falls in the reminder window and
    stamp the session. Returns the number of reminders sent.
    """
    now = now or datetime.utcnow()
    window = timedelta(hours=window_hours)
    sent = 0
    for session in store.pending_reminder_sessions(now, now + window):
        patient = store.get_user(session.patient_id)
        if not patient:
            logger.warning("Reminder skipped: patient %s not found for session %s", session.patient_id, session.id)
            continue
        if send_session_reminder_email(patient.email, patient.display_name, session):
            store.mark_reminder_sent(session, now)
            sent += 1
    logger.info("Sent %d session reminders", sent)
    return sent
