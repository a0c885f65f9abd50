import json

from ayurclinic.extensions import db
from .base import TimestampMixin, enum_column
from .enums import AppointmentStatus


class Appointment(db.Model, TimestampMixin):
    """
    A doctor-patient encounter.

    The therapy prescription list is owned by value: it lives on the row as
    JSON (list of {therapy_type, duration, therapist_id, therapist_name, sessions}).
    """
    __tablename__ = 'appointments'

    id = db.Column(db.Integer, primary_key=True)

    patient_id = db.Column(db.Integer, db.ForeignKey('users.id'), nullable=False, index=True)
    patient_name = db.Column(db.String(200), nullable=False)
    doctor_id = db.Column(db.Integer, db.ForeignKey('users.id'), nullable=False, index=True)
    doctor_name = db.Column(db.String(200), nullable=False)

    date = db.Column(db.Date, nullable=False, index=True)
    time = db.Column(db.String(5), nullable=False)  # "HH:MM"
    reason = db.Column(db.Text, default='')

    status = enum_column(AppointmentStatus, nullable=False, default=AppointmentStatus.CONFIRMED, index=True)

    prescription = db.Column(db.Text, nullable=True)
    therapies_json = db.Column(db.Text, nullable=True)
    prescribed_at = db.Column(db.DateTime, nullable=True)

    patient = db.relationship('User', foreign_keys=[patient_id], lazy=True)
    doctor = db.relationship('User', foreign_keys=[doctor_id], lazy=True)

    @property
    def therapies(self):
        if self.therapies_json:
            try:
                data = json.loads(self.therapies_json)
                if isinstance(data, list):
                    return data
            except (TypeError, json.JSONDecodeError):
                pass
        return []

    @property
    def is_prescribed(self):
        return self.prescribed_at is not None

    def to_dict(self):
        return {
            'id': self.id,
            'patient_id': self.patient_id,
            'patient_name': self.patient_name,
            'doctor_id': self.doctor_id,
            'doctor_name': self.doctor_name,
            'date': self.date.isoformat() if self.date else None,
            'time': self.time,
            'reason': self.reason or '',
            'status': self.status.value,
            'prescription': self.prescription,
            'therapies': self.therapies,
            'prescribed_at': self.prescribed_at.isoformat() if self.prescribed_at else None,
            'created_at': self.created_at.isoformat() if self.created_at else None,
            'updated_at': self.updated_at.isoformat() if self.updated_at else None,
        }

    def __repr__(self):
        return f"<Appointment {self.patient_id} - {self.doctor_name} on {self.date} {self.time}>"
