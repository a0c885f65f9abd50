"""
Saving a doctor's prescription.

The session rows and the appointment update are separate commits, issued in
prescription order then session order. A failure stops the sequence where it
happened; rows written before it stay. Saving the same prescription twice
writes two full sets of sessions.
"""
import logging
from datetime import datetime
from typing import List

from ayurclinic.errors import PrescriptionSaveError, ValidationError
from ayurclinic.models import AppointmentStatus, Role
from ayurclinic.services.therapy_planner import (
    TherapyPrescription,
    expand_prescription,
    validate_therapy_entry,
)

logger = logging.getLogger(__name__)


def build_therapy_list(store, entries) -> List[TherapyPrescription]:
    """
    Validate every therapy entry from a request body and fill in the
    therapist's display name from the directory. Raises ValidationError on
    the first bad entry, before anything is written.
    """
    if entries is None:
        return []
    if not isinstance(entries, list):
        raise ValidationError('therapies must be a list')

    therapies = []
    for idx, entry in enumerate(entries, start=1):
        therapy = validate_therapy_entry(entry, idx)
        therapist = store.get_user_with_role(therapy.therapist_id, Role.THERAPIST)
        if not therapist:
            raise ValidationError(f'Therapy {idx}: therapist {therapy.therapist_id} not found')
        therapies.append(TherapyPrescription(
            therapy_type=therapy.therapy_type,
            duration=therapy.duration,
            therapist_id=therapist.id,
            therapist_name=therapist.display_name,
            sessions=therapy.sessions,
        ))
    return therapies


def save_prescription(store, appointment, notes, therapies, doctor_id, now=None):
    """
    Write one TherapySession per requested session, then attach the notes
    and the therapy list to the appointment.

    Returns the created sessions. Any store failure is logged and re-raised
    as PrescriptionSaveError; sessions already written are not removed.
    """
    now = now or datetime.utcnow()
    plans = expand_prescription(appointment, therapies, doctor_id, created_at=now)

    created = []
    try:
        for plan in plans:
            created.append(store.add_session(plan))
        store.update_appointment_prescription(appointment, notes, therapies, prescribed_at=now)
    except Exception as e:
        logger.error(
            "Saving prescription for appointment %s failed after %d of %d sessions: %s",
            appointment.id, len(created), len(plans), e, exc_info=True,
        )
        raise PrescriptionSaveError() from e

    logger.info(
        "Prescription saved for appointment %s: %d therapies, %d sessions",
        appointment.id, len(therapies), len(created),
    )
    return created


def mark_completed(store, appointment):
    if not appointment.is_prescribed:
        raise ValidationError('Save a prescription before completing the appointment')
    if appointment.status == AppointmentStatus.CANCELLED:
        raise ValidationError('Cancelled appointments cannot be completed')
    return store.set_appointment_status(appointment, AppointmentStatus.COMPLETED)
