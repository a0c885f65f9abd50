from .enums import Role, AppointmentStatus, SessionStatus, Sentiment
from .user import User
from .doctor import DoctorProfile
from .therapist import TherapistProfile
from .patient import PatientProfile
from .appointment import Appointment
from .therapy_session import TherapySession
from .feedback import Feedback
from .audit_log import AuditLog

__all__ = [
    "Role", "AppointmentStatus", "SessionStatus", "Sentiment",
    "User", "DoctorProfile", "TherapistProfile", "PatientProfile",
    "Appointment", "TherapySession", "Feedback", "AuditLog",
]
