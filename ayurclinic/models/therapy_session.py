from datetime import datetime

from ayurclinic.extensions import db
from .base import enum_column
from .enums import SessionStatus


class TherapySession(db.Model):
    """
    One scheduled occurrence of a prescribed therapy.

    References its originating appointment but is not owned by it; rows are
    never deleted, only moved through SessionStatus by the therapist.
    """
    __tablename__ = 'therapy_sessions'

    id = db.Column(db.Integer, primary_key=True)

    patient_id = db.Column(db.Integer, db.ForeignKey('users.id'), nullable=False, index=True)
    patient_name = db.Column(db.String(200), nullable=False)

    therapy_type = db.Column(db.String(120), nullable=False)
    duration = db.Column(db.Integer, nullable=False)  # minutes

    therapist_id = db.Column(db.Integer, db.ForeignKey('users.id'), nullable=False, index=True)
    therapist_name = db.Column(db.String(200), nullable=False)

    status = enum_column(SessionStatus, nullable=False, default=SessionStatus.SCHEDULED, index=True)
    session_number = db.Column(db.Integer, nullable=False)
    total_sessions = db.Column(db.Integer, nullable=False)

    doctor_id = db.Column(db.Integer, db.ForeignKey('users.id'), nullable=False, index=True)
    appointment_id = db.Column(db.Integer, db.ForeignKey('appointments.id'), nullable=False, index=True)

    scheduled_at = db.Column(db.DateTime, nullable=False, index=True)
    notes = db.Column(db.Text, nullable=True)
    reminder_sent_at = db.Column(db.DateTime, nullable=True)

    created_at = db.Column(db.DateTime, default=datetime.utcnow, nullable=False)
    updated_at = db.Column(db.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False)

    appointment = db.relationship('Appointment', backref=db.backref('therapy_sessions', lazy='dynamic'), lazy=True)

    def to_dict(self):
        return {
            'id': self.id,
            'patient_id': self.patient_id,
            'patient_name': self.patient_name,
            'therapy_type': self.therapy_type,
            'duration': self.duration,
            'therapist_id': self.therapist_id,
            'therapist_name': self.therapist_name,
            'status': self.status.value,
            'session_number': self.session_number,
            'total_sessions': self.total_sessions,
            'doctor_id': self.doctor_id,
            'appointment_id': self.appointment_id,
            'scheduled_at': self.scheduled_at.isoformat() if self.scheduled_at else None,
            'notes': self.notes,
            'reminder_sent_at': self.reminder_sent_at.isoformat() if self.reminder_sent_at else None,
            'created_at': self.created_at.isoformat() if self.created_at else None,
        }

    def __repr__(self):
        return f"<TherapySession {self.therapy_type} {self.session_number}/{self.total_sessions} - {self.patient_name}>"
