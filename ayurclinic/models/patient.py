import json

from ayurclinic.extensions import db
from .base import TimestampMixin


def _json_list(raw):
    if raw:
        try:
            data = json.loads(raw)
            if isinstance(data, list):
                return data
        except (TypeError, json.JSONDecodeError):
            pass
    return []


class PatientProfile(db.Model, TimestampMixin):
    __tablename__ = 'patients'

    id = db.Column(db.Integer, primary_key=True)
    user_id = db.Column(db.Integer, db.ForeignKey('users.id'), unique=True, nullable=False, index=True)

    name = db.Column(db.String(200), nullable=False)
    email = db.Column(db.String(120), nullable=False)
    phone = db.Column(db.String(20), default='')

    medical_history_json = db.Column(db.Text, nullable=True)
    reports_json = db.Column(db.Text, nullable=True)

    user = db.relationship('User', backref=db.backref('patient_profile', uselist=False), lazy=True)

    @property
    def medical_history(self):
        return _json_list(self.medical_history_json)

    @property
    def reports(self):
        return _json_list(self.reports_json)

    def to_dict(self):
        return {
            'id': self.id,
            'user_id': self.user_id,
            'name': self.name,
            'email': self.email,
            'phone': self.phone or '',
            'medical_history': self.medical_history,
            'reports': self.reports,
        }

    def __repr__(self):
        return f"<PatientProfile {self.name} (user={self.user_id})>"
