"""
Role dashboards. Every role gets its own Dashboard subclass; ``build_dashboard``
picks the one registered for the caller's role.
"""
from datetime import datetime, timedelta

from flask import current_app

from ayurclinic.models import (
    Appointment,
    AppointmentStatus,
    Role,
    Sentiment,
    SessionStatus,
    TherapySession,
)
from ayurclinic.services.reminders import due_reminders

UPCOMING_LIMIT = 10


class Dashboard:
    role = None
    title = None

    def __init__(self, store, user, now=None):
        self.store = store
        self.user = user
        self.now = now or datetime.utcnow()

    def build(self):
        return {
            'role': self.role.value,
            'title': self.title,
            'user': {'id': self.user.id, 'name': self.user.display_name},
            'data': self.collect(),
        }

    def collect(self):
        raise NotImplementedError


class AdminDashboard(Dashboard):
    role = Role.ADMIN
    title = 'Admin Dashboard'

    def collect(self):
        sentiments = {s.value: 0 for s in Sentiment}
        for fb in self.store.all_feedback():
            sentiments[fb.sentiment.value] += 1
        return {
            'users_by_role': self.store.count_users_by_role(),
            'appointments_by_status': self.store.count_appointments_by_status(),
            'feedback_sentiment': sentiments,
        }


class DoctorDashboard(Dashboard):
    role = Role.DOCTOR
    title = 'Doctor Dashboard'

    def collect(self):
        today = self.now.date()
        confirmed = self.store.appointments_for(self.user).filter(
            Appointment.status == AppointmentStatus.CONFIRMED
        )
        todays = confirmed.filter(Appointment.date == today).order_by(Appointment.time.asc()).all()
        upcoming = (
            confirmed.filter(Appointment.date > today)
            .order_by(Appointment.date.asc(), Appointment.time.asc())
            .limit(UPCOMING_LIMIT)
            .all()
        )
        awaiting = confirmed.filter(Appointment.prescribed_at.isnot(None)).all()
        return {
            'greeting': f'Hello, Dr. {self.user.display_name}!',
            'today': [a.to_dict() for a in todays],
            'upcoming': [a.to_dict() for a in upcoming],
            'awaiting_completion': [a.to_dict() for a in awaiting],
        }


class TherapistDashboard(Dashboard):
    role = Role.THERAPIST
    title = 'Therapist Dashboard'

    def collect(self):
        start = datetime.combine(self.now.date(), datetime.min.time())
        end = start + timedelta(days=1)
        mine = self.store.sessions_for(self.user)
        todays = (
            mine.filter(TherapySession.scheduled_at >= start, TherapySession.scheduled_at < end)
            .order_by(TherapySession.scheduled_at.asc())
            .all()
        )
        upcoming = (
            mine.filter(
                TherapySession.status == SessionStatus.SCHEDULED,
                TherapySession.scheduled_at >= end,
            )
            .order_by(TherapySession.scheduled_at.asc())
            .limit(UPCOMING_LIMIT)
            .all()
        )
        return {
            'today': [s.to_dict() for s in todays],
            'upcoming': [s.to_dict() for s in upcoming],
        }


class PatientDashboard(Dashboard):
    role = Role.PATIENT
    title = 'Patient Dashboard'

    def collect(self):
        today = self.now.date()
        appointments = (
            self.store.appointments_for(self.user)
            .filter(
                Appointment.status == AppointmentStatus.CONFIRMED,
                Appointment.date >= today,
            )
            .order_by(Appointment.date.asc(), Appointment.time.asc())
            .all()
        )
        sessions = (
            self.store.sessions_for(self.user)
            .filter(
                TherapySession.status == SessionStatus.SCHEDULED,
                TherapySession.scheduled_at >= self.now,
            )
            .order_by(TherapySession.scheduled_at.asc())
            .all()
        )
        window = timedelta(hours=current_app.config.get('REMINDER_WINDOW_HOURS', 24))
        return {
            'upcoming_appointments': [a.to_dict() for a in appointments],
            'upcoming_sessions': [s.to_dict() for s in sessions[:UPCOMING_LIMIT]],
            'reminders': [s.to_dict() for s in due_reminders(sessions, self.now, window, include_sent=True)],
        }


DASHBOARDS = {
    Role.ADMIN: AdminDashboard,
    Role.DOCTOR: DoctorDashboard,
    Role.THERAPIST: TherapistDashboard,
    Role.PATIENT: PatientDashboard,
}


def build_dashboard(store, user, now=None):
    return DASHBOARDS[user.role](store, user, now=now).build()
