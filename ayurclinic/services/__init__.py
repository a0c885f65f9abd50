from .therapy_planner import (
    TherapyPrescription,
    SessionPlan,
    validate_therapy_entry,
    expand_prescription,
)

from .prescription_service import build_therapy_list, save_prescription, mark_completed

from .sentiment_service import classify_sentiment, summarize_by_doctor

from .chat_service import ask_assistant

from .reminders import is_within_reminder_window, due_reminders, dispatch_due_reminders

from .dashboards import build_dashboard

from .email_service import send_welcome_email, send_session_reminder_email

__all__ = [
    # Prescriptions
    "TherapyPrescription",
    "SessionPlan",
    "validate_therapy_entry",
    "expand_prescription",
    "build_therapy_list",
    "save_prescription",
    "mark_completed",
    # Feedback
    "classify_sentiment",
    "summarize_by_doctor",
    # Chat
    "ask_assistant",
    # Reminders
    "is_within_reminder_window",
    "due_reminders",
    "dispatch_due_reminders",
    # Dashboards
    "build_dashboard",
    # Email Services
    "send_welcome_email",
    "send_session_reminder_email",
]
