"""
Query and write access to the clinic tables.

Every write method commits on its own. Callers that issue several writes
get no grouping across them.
"""
import json
import logging
from datetime import datetime

from ayurclinic.extensions import db
from ayurclinic.models import (
    Appointment,
    AppointmentStatus,
    Feedback,
    Role,
    SessionStatus,
    TherapySession,
    User,
)

logger = logging.getLogger(__name__)


class ClinicStore:

    # -------------------------------
    # Users
    # -------------------------------

    def get_user(self, user_id):
        return User.query.get(user_id)

    def get_user_by_email(self, email):
        return User.query.filter(db.func.lower(User.email) == (email or '').strip().lower()).first()

    def get_user_with_role(self, user_id, role):
        return User.query.filter_by(id=user_id, role=role, is_active=True).first()

    def list_therapists(self):
        return (
            User.query.filter_by(role=Role.THERAPIST, is_active=True)
            .order_by(User.name.asc())
            .all()
        )

    def count_users_by_role(self):
        counts = {role.value: 0 for role in Role}
        rows = db.session.query(User.role, db.func.count(User.id)).group_by(User.role).all()
        for role, total in rows:
            counts[role.value] = total
        return counts

    # -------------------------------
    # Appointments
    # -------------------------------

    def get_appointment(self, appointment_id):
        return Appointment.query.get(appointment_id)

    def appointments_for(self, user):
        """Base query of the appointments a user may see."""
        query = Appointment.query
        if user.role == Role.PATIENT:
            query = query.filter(Appointment.patient_id == user.id)
        elif user.role == Role.DOCTOR:
            query = query.filter(Appointment.doctor_id == user.id)
        elif user.role != Role.ADMIN:
            query = query.filter(db.false())
        return query

    def count_appointments_by_status(self):
        counts = {status.value: 0 for status in AppointmentStatus}
        rows = (
            db.session.query(Appointment.status, db.func.count(Appointment.id))
            .group_by(Appointment.status)
            .all()
        )
        for status, total in rows:
            counts[status.value] = total
        return counts

    def add_appointment(self, appointment):
        return self._commit(appointment)

    def update_appointment_prescription(self, appointment, notes, therapies, prescribed_at=None):
        appointment.prescription = notes
        appointment.therapies_json = json.dumps([t.to_dict() for t in therapies])
        appointment.prescribed_at = prescribed_at or datetime.utcnow()
        return self._commit(appointment)

    def set_appointment_status(self, appointment, status):
        appointment.status = status
        return self._commit(appointment)

    # -------------------------------
    # Therapy sessions
    # -------------------------------

    def get_session(self, session_id):
        return TherapySession.query.get(session_id)

    def sessions_for(self, user):
        """Base query of the therapy sessions a user may see."""
        query = TherapySession.query
        if user.role == Role.THERAPIST:
            query = query.filter(TherapySession.therapist_id == user.id)
        elif user.role == Role.PATIENT:
            query = query.filter(TherapySession.patient_id == user.id)
        elif user.role == Role.DOCTOR:
            query = query.filter(TherapySession.doctor_id == user.id)
        elif user.role != Role.ADMIN:
            query = query.filter(db.false())
        return query

    def sessions_for_appointment(self, appointment_id):
        return (
            TherapySession.query.filter_by(appointment_id=appointment_id)
            .order_by(TherapySession.id.asc())
            .all()
        )

    def pending_reminder_sessions(self, start, end):
        return (
            TherapySession.query.filter(
                TherapySession.status == SessionStatus.SCHEDULED,
                TherapySession.reminder_sent_at.is_(None),
                TherapySession.scheduled_at > start,
                TherapySession.scheduled_at <= end,
            )
            .order_by(TherapySession.scheduled_at.asc())
            .all()
        )

    def add_session(self, plan):
        session = TherapySession(
            patient_id=plan.patient_id,
            patient_name=plan.patient_name,
            therapy_type=plan.therapy_type,
            duration=plan.duration,
            therapist_id=plan.therapist_id,
            therapist_name=plan.therapist_name,
            status=plan.status,
            session_number=plan.session_number,
            total_sessions=plan.total_sessions,
            doctor_id=plan.doctor_id,
            appointment_id=plan.appointment_id,
            scheduled_at=plan.scheduled_at,
            created_at=plan.created_at,
        )
        return self._commit(session)

    def update_session(self, session, status=None, notes=None):
        if status is not None:
            session.status = status
        if notes is not None:
            session.notes = notes
        return self._commit(session)

    def mark_reminder_sent(self, session, sent_at=None):
        session.reminder_sent_at = sent_at or datetime.utcnow()
        return self._commit(session)

    # -------------------------------
    # Feedback
    # -------------------------------

    def add_feedback(self, feedback):
        return self._commit(feedback)

    def feedback_for(self, user):
        query = Feedback.query
        if user.role == Role.DOCTOR:
            query = query.filter(Feedback.doctor_id == user.id)
        elif user.role == Role.PATIENT:
            query = query.filter(Feedback.patient_id == user.id)
        elif user.role != Role.ADMIN:
            query = query.filter(db.false())
        return query

    def all_feedback(self):
        return Feedback.query.order_by(Feedback.created_at.desc()).all()

    # -------------------------------
    # Helpers
    # -------------------------------

    def _commit(self, record):
        try:
            db.session.add(record)
            db.session.commit()
        except Exception:
            db.session.rollback()
            raise
        return record
