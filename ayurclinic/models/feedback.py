from ayurclinic.extensions import db
from .base import TimestampMixin, enum_column
from .enums import Sentiment


class Feedback(db.Model, TimestampMixin):
    __tablename__ = 'feedback'

    id = db.Column(db.Integer, primary_key=True)
    patient_id = db.Column(db.Integer, db.ForeignKey('users.id'), nullable=False, index=True)
    doctor_id = db.Column(db.Integer, db.ForeignKey('users.id'), nullable=False, index=True)
    appointment_id = db.Column(db.Integer, db.ForeignKey('appointments.id'), nullable=True, index=True)

    text = db.Column(db.Text, nullable=False)
    rating = db.Column(db.Integer, nullable=True)  # 1..5
    sentiment = enum_column(Sentiment, nullable=False, default=Sentiment.NEUTRAL, index=True)

    def to_dict(self):
        return {
            'id': self.id,
            'patient_id': self.patient_id,
            'doctor_id': self.doctor_id,
            'appointment_id': self.appointment_id,
            'text': self.text,
            'rating': self.rating,
            'sentiment': self.sentiment.value,
            'created_at': self.created_at.isoformat() if self.created_at else None,
        }

    def __repr__(self):
        return f"<Feedback {self.id} doctor={self.doctor_id} {self.sentiment.value}>"
