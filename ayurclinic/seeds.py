"""
Seed helpers for a fresh database.
"""
import logging

from ayurclinic.extensions import db
from ayurclinic.models import User, Role

logger = logging.getLogger(__name__)


def create_admin(email, password, name="Clinic Admin"):
    """Create an admin user. Returns (user, created)."""
    email = email.strip().lower()
    existing = User.query.filter_by(email=email).first()
    if existing:
        return existing, False

    admin = User(email=email, name=name, role=Role.ADMIN, is_active=True)
    admin.set_password(password)
    db.session.add(admin)
    db.session.commit()
    logger.info("Seeded admin account %s", email)
    return admin, True
