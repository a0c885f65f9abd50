from .auth import auth_bp
from .users import users_bp
from .appointment import appointment_bp
from .therapy_session import therapy_session_bp
from .feedback import feedback_bp
from .chat import chat_bp
from .dashboard import dashboard_bp
from .health import health_bp

__all__ = [
    'auth_bp', 'users_bp', 'appointment_bp', 'therapy_session_bp',
    'feedback_bp', 'chat_bp', 'dashboard_bp', 'health_bp',
]
