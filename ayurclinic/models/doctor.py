from ayurclinic.extensions import db
from .base import TimestampMixin


class DoctorProfile(db.Model, TimestampMixin):
    __tablename__ = 'doctors'

    id = db.Column(db.Integer, primary_key=True)
    user_id = db.Column(db.Integer, db.ForeignKey('users.id'), unique=True, nullable=False, index=True)
    specialization = db.Column(db.String(200), default='')

    user = db.relationship('User', backref=db.backref('doctor_profile', uselist=False), lazy=True)

    def __repr__(self):
        return f"<DoctorProfile user={self.user_id}>"
