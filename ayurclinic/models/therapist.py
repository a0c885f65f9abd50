import json

from ayurclinic.extensions import db
from .base import TimestampMixin


class TherapistProfile(db.Model, TimestampMixin):
    __tablename__ = 'therapists'

    id = db.Column(db.Integer, primary_key=True)
    user_id = db.Column(db.Integer, db.ForeignKey('users.id'), unique=True, nullable=False, index=True)

    # JSON list of therapy labels, e.g. ["Abhyanga", "Shirodhara"]
    skills_json = db.Column(db.Text, nullable=True)

    user = db.relationship('User', backref=db.backref('therapist_profile', uselist=False), lazy=True)

    @property
    def skills(self):
        if self.skills_json:
            try:
                data = json.loads(self.skills_json)
                if isinstance(data, list):
                    return data
            except (TypeError, json.JSONDecodeError):
                pass
        return []

    @skills.setter
    def skills(self, value):
        self.skills_json = json.dumps(list(value or []))

    def __repr__(self):
        return f"<TherapistProfile user={self.user_id}>"
