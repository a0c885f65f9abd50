from datetime import datetime

import pytest

from ayurclinic.models import SessionStatus, TherapySession
from ayurclinic.repositories import ClinicStore
from ayurclinic.services.prescription_service import save_prescription
from ayurclinic.services.therapy_planner import TherapyPrescription


@pytest.fixture
def sessions(clinic):
    therapies = [
        TherapyPrescription("Abhyanga", 45, clinic["therapist"].id, "Meera Nair", 2),
        TherapyPrescription("Shirodhara", 30, clinic["other_therapist"].id, "Ravi Menon", 1),
    ]
    return save_prescription(
        ClinicStore(), clinic["appointment"], "", therapies, clinic["doctor"].id,
        now=datetime(2025, 5, 31, 18, 0),
    )


def test_therapist_sees_only_assigned_sessions(client, clinic, sessions, auth_header):
    resp = client.get("/api/therapy-sessions", headers=auth_header(clinic["therapist"]))

    data = resp.get_json()["data"]
    assert [s["therapy_type"] for s in data] == ["Abhyanga", "Abhyanga"]
    assert [s["scheduled_at"] for s in data] == ["2025-06-01T10:00:00", "2025-06-02T10:00:00"]


def test_patient_and_doctor_see_all_sessions_of_the_prescription(client, clinic, sessions, auth_header):
    for user in (clinic["patient"], clinic["doctor"]):
        resp = client.get("/api/therapy-sessions", headers=auth_header(user))
        assert resp.get_json()["pagination"]["total"] == 3


def test_filter_by_status(client, clinic, sessions, auth_header):
    resp = client.get("/api/therapy-sessions?status=completed", headers=auth_header(clinic["patient"]))
    bad = client.get("/api/therapy-sessions?status=done", headers=auth_header(clinic["patient"]))

    assert resp.get_json()["data"] == []
    assert bad.status_code == 400


def test_therapist_updates_status_and_notes(client, clinic, sessions, auth_header):
    target = sessions[0]

    resp = client.patch(
        f"/api/therapy-sessions/{target.id}",
        json={"status": "completed", "notes": "Responded well"},
        headers=auth_header(clinic["therapist"]),
    )

    assert resp.status_code == 200
    stored = TherapySession.query.get(target.id)
    assert stored.status == SessionStatus.COMPLETED
    assert stored.notes == "Responded well"
    assert stored.scheduled_at == datetime(2025, 6, 1, 10, 0)


def test_in_progress_status_is_accepted(client, clinic, sessions, auth_header):
    resp = client.patch(
        f"/api/therapy-sessions/{sessions[1].id}",
        json={"status": "in-progress"},
        headers=auth_header(clinic["therapist"]),
    )

    assert resp.get_json()["data"]["status"] == "in-progress"


def test_other_therapist_cannot_update(client, clinic, sessions, auth_header):
    resp = client.patch(
        f"/api/therapy-sessions/{sessions[0].id}",
        json={"status": "cancelled"},
        headers=auth_header(clinic["other_therapist"]),
    )

    assert resp.status_code == 404
    assert TherapySession.query.get(sessions[0].id).status == SessionStatus.SCHEDULED


def test_update_rejects_unknown_status_and_empty_body(client, clinic, sessions, auth_header):
    url = f"/api/therapy-sessions/{sessions[0].id}"
    headers = auth_header(clinic["therapist"])

    assert client.patch(url, json={"status": "done"}, headers=headers).status_code == 400
    assert client.patch(url, json={}, headers=headers).status_code == 400


def test_patients_cannot_update_sessions(client, clinic, sessions, auth_header):
    resp = client.patch(
        f"/api/therapy-sessions/{sessions[0].id}",
        json={"status": "cancelled"},
        headers=auth_header(clinic["patient"]),
    )

    assert resp.status_code == 403
