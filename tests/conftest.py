from datetime import date

import pytest
from flask import Flask
from flask_jwt_extended import create_access_token

from ayurclinic import create_app
from ayurclinic.extensions import db
from ayurclinic.models import (
    Appointment,
    AppointmentStatus,
    DoctorProfile,
    PatientProfile,
    Role,
    TherapistProfile,
    User,
)


@pytest.fixture
def app() -> Flask:
    app = create_app("testing")
    with app.app_context():
        db.create_all()
        yield app
        db.session.remove()
        db.drop_all()


@pytest.fixture
def client(app: Flask):
    return app.test_client()


@pytest.fixture
def make_user(app):
    counter = {"n": 0}

    def _make(role="patient", name=None, email=None, password="secret123", is_active=True):
        counter["n"] += 1
        role = Role(role)
        email = email or f"{role.value}{counter['n']}@example.com"
        user = User(
            email=email,
            name=name or f"{role.value.title()} {counter['n']}",
            phone="555-0100",
            role=role,
            is_active=is_active,
        )
        user.set_password(password)
        db.session.add(user)
        db.session.flush()
        if role == Role.DOCTOR:
            db.session.add(DoctorProfile(user_id=user.id, specialization="Kayachikitsa"))
        elif role == Role.THERAPIST:
            profile = TherapistProfile(user_id=user.id)
            profile.skills = ["Abhyanga", "Shirodhara"]
            db.session.add(profile)
        elif role == Role.PATIENT:
            db.session.add(PatientProfile(user_id=user.id, name=user.name, email=user.email))
        db.session.commit()
        return user

    return _make


@pytest.fixture
def auth_header(app):
    def _header(user):
        token = create_access_token(identity=str(user.id), additional_claims={"role": user.role.value})
        return {"Authorization": f"Bearer {token}"}

    return _header


@pytest.fixture
def make_appointment(app):
    def _make(patient, doctor, on=date(2025, 6, 1), at="10:00", status=AppointmentStatus.CONFIRMED):
        appointment = Appointment(
            patient_id=patient.id,
            patient_name=patient.name,
            doctor_id=doctor.id,
            doctor_name=doctor.name,
            date=on,
            time=at,
            reason="Joint pain",
            status=status,
        )
        db.session.add(appointment)
        db.session.commit()
        return appointment

    return _make


@pytest.fixture
def clinic(make_user, make_appointment):
    """A patient, a doctor, two therapists and one confirmed appointment."""
    patient = make_user("patient", name="Asha Rao")
    doctor = make_user("doctor", name="Vaidya Kumar")
    therapist = make_user("therapist", name="Meera Nair")
    other_therapist = make_user("therapist", name="Ravi Menon")
    appointment = make_appointment(patient, doctor)
    return {
        "patient": patient,
        "doctor": doctor,
        "therapist": therapist,
        "other_therapist": other_therapist,
        "appointment": appointment,
    }
