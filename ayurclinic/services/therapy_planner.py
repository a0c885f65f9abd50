"""
Therapy prescription planning.

Turns a doctor's therapy prescriptions into the list of sessions to write.
Nothing in here touches the database: ``expand_prescription`` is a pure
function of the appointment, the prescriptions and a timestamp, so the
writes (and their failure modes) stay in ``prescription_service``.
"""
from dataclasses import dataclass, asdict
from datetime import datetime, date, time, timedelta
from typing import Iterable, List, Optional

from ayurclinic.errors import ValidationError
from ayurclinic.models.enums import SessionStatus

TIME_FORMAT = '%H:%M'


@dataclass(frozen=True)
class TherapyPrescription:
    therapy_type: str
    duration: int
    therapist_id: int
    therapist_name: str
    sessions: int

    def to_dict(self):
        return asdict(self)


@dataclass(frozen=True)
class SessionPlan:
    patient_id: int
    patient_name: str
    therapy_type: str
    duration: int
    therapist_id: int
    therapist_name: str
    status: SessionStatus
    session_number: int
    total_sessions: int
    doctor_id: int
    appointment_id: int
    scheduled_at: datetime
    created_at: datetime


def _positive_int(value, field, label):
    """Whole numbers only: ints, integral floats and digit strings."""
    if isinstance(value, bool):
        number = None
    elif isinstance(value, int):
        number = value
    elif isinstance(value, float) and value.is_integer():
        number = int(value)
    elif isinstance(value, str) and value.strip().isdigit():
        number = int(value.strip())
    else:
        number = None
    if number is None or number < 1:
        raise ValidationError(f'{label}: {field} must be a positive integer')
    return number


def _text(entry, field, label):
    value = entry.get(field)
    if value is None:
        return ''
    if not isinstance(value, str):
        raise ValidationError(f'{label}: {field} must be a string')
    return value.strip()


def validate_therapy_entry(entry: dict, index: int = 1) -> TherapyPrescription:
    """
    Check one therapy entry from the prescription form and normalise it.

    An entry is rejected when it is missing the therapy type, the duration or
    the therapist, or when it asks for fewer than one session.
    """
    label = f'Therapy {index}'
    if not isinstance(entry, dict):
        raise ValidationError(f'{label}: must be an object')

    therapy_type = _text(entry, 'therapy_type', label)
    if not therapy_type:
        raise ValidationError(f'{label}: therapy_type is required')

    if entry.get('duration') in (None, ''):
        raise ValidationError(f'{label}: duration is required')
    duration = _positive_int(entry.get('duration'), 'duration', label)

    if entry.get('therapist_id') in (None, ''):
        raise ValidationError(f'{label}: therapist_id is required')
    therapist_id = _positive_int(entry.get('therapist_id'), 'therapist_id', label)

    sessions = _positive_int(entry.get('sessions', 1), 'sessions', label)

    return TherapyPrescription(
        therapy_type=therapy_type,
        duration=duration,
        therapist_id=therapist_id,
        therapist_name=_text(entry, 'therapist_name', label),
        sessions=sessions,
    )


def parse_time_of_day(value: str) -> time:
    if not isinstance(value, str):
        raise ValidationError('Invalid time format. Use HH:MM')
    try:
        return datetime.strptime(value.strip(), TIME_FORMAT).time()
    except ValueError:
        raise ValidationError('Invalid time format. Use HH:MM')


def session_start(day: date, time_of_day: str, session_number: int) -> datetime:
    """Start of the n-th session: ``day + (n - 1)`` days at ``time_of_day``."""
    return datetime.combine(day + timedelta(days=session_number - 1), parse_time_of_day(time_of_day))


def expand_prescription(
    appointment,
    therapies: Iterable[TherapyPrescription],
    doctor_id: int,
    created_at: Optional[datetime] = None,
) -> List[SessionPlan]:
    """
    One SessionPlan per requested session, in prescription order then
    session order. Day offsets restart at zero for every prescription.

    ``appointment`` needs ``id``, ``patient_id``, ``patient_name``, ``date``
    and ``time`` (``HH:MM``).
    """
    if appointment.date is None:
        raise ValidationError('Appointment has no date')
    parse_time_of_day(appointment.time)
    created_at = created_at or datetime.utcnow()

    plans = []
    for therapy in therapies:
        for number in range(1, therapy.sessions + 1):
            plans.append(SessionPlan(
                patient_id=appointment.patient_id,
                patient_name=appointment.patient_name,
                therapy_type=therapy.therapy_type,
                duration=therapy.duration,
                therapist_id=therapy.therapist_id,
                therapist_name=therapy.therapist_name,
                status=SessionStatus.SCHEDULED,
                session_number=number,
                total_sessions=therapy.sessions,
                doctor_id=doctor_id,
                appointment_id=appointment.id,
                scheduled_at=session_start(appointment.date, appointment.time, number),
                created_at=created_at,
            ))
    return plans
