from datetime import datetime, timedelta

import pytest

from ayurclinic.models import SessionStatus, TherapySession
from ayurclinic.repositories import ClinicStore
from ayurclinic.services import reminders
from ayurclinic.services.prescription_service import save_prescription
from ayurclinic.services.reminders import dispatch_due_reminders, due_reminders, is_within_reminder_window
from ayurclinic.services.therapy_planner import TherapyPrescription

NOW = datetime(2025, 5, 31, 12, 0)
DAY = timedelta(hours=24)


@pytest.mark.parametrize(
    "scheduled_at, expected",
    [
        (NOW, False),
        (NOW + timedelta(minutes=1), True),
        (NOW + DAY, True),
        (NOW + DAY + timedelta(seconds=1), False),
        (NOW - timedelta(hours=1), False),
    ],
)
def test_reminder_window_bounds(scheduled_at, expected):
    assert is_within_reminder_window(scheduled_at, NOW, DAY) is expected


@pytest.fixture
def sessions(clinic):
    therapies = [TherapyPrescription("Abhyanga", 45, clinic["therapist"].id, "Meera Nair", 3)]
    return save_prescription(ClinicStore(), clinic["appointment"], "", therapies, clinic["doctor"].id, now=NOW)


def test_due_reminders_picks_sessions_in_window(sessions):
    due = due_reminders(sessions, NOW, DAY)

    assert [s.session_number for s in due] == [1]


def test_due_reminders_skips_cancelled_and_already_sent(sessions):
    store = ClinicStore()
    store.mark_reminder_sent(sessions[0], NOW)

    assert due_reminders(sessions, NOW, timedelta(days=3)) == sessions[1:]
    assert due_reminders(sessions, NOW, DAY, include_sent=True) == sessions[:1]

    store.update_session(sessions[0], status=SessionStatus.CANCELLED)
    assert due_reminders(sessions, NOW, DAY, include_sent=True) == []


def test_dispatch_emails_and_stamps_sessions(clinic, sessions, monkeypatch):
    emailed = []

    def fake_send(email, name, session):
        emailed.append((email, name, session.session_number))
        return True

    monkeypatch.setattr(reminders, "send_session_reminder_email", fake_send)

    sent = dispatch_due_reminders(ClinicStore(), 24, now=NOW)
    again = dispatch_due_reminders(ClinicStore(), 24, now=NOW)

    assert sent == 1
    assert again == 0
    assert emailed == [(clinic["patient"].email, "Asha Rao", 1)]
    assert TherapySession.query.get(sessions[0].id).reminder_sent_at == NOW


def test_dispatch_without_mail_leaves_sessions_pending(sessions):
    assert dispatch_due_reminders(ClinicStore(), 48, now=NOW) == 0
    assert all(s.reminder_sent_at is None for s in sessions)


def test_reminders_endpoint_for_patient(client, clinic, auth_header):
    now = datetime.utcnow().replace(second=0, microsecond=0)
    store = ClinicStore()
    clinic["appointment"].date = (now + timedelta(hours=2)).date()
    clinic["appointment"].time = (now + timedelta(hours=2)).strftime("%H:%M")
    store.add_appointment(clinic["appointment"])
    therapies = [TherapyPrescription("Abhyanga", 45, clinic["therapist"].id, "Meera Nair", 3)]
    save_prescription(store, clinic["appointment"], "", therapies, clinic["doctor"].id)

    resp = client.get("/api/reminders", headers=auth_header(clinic["patient"]))

    body = resp.get_json()
    assert resp.status_code == 200
    assert body["window_hours"] == 24
    assert [s["session_number"] for s in body["data"]] == [1]


def test_reminders_endpoint_is_patient_only(client, clinic, auth_header):
    assert client.get("/api/reminders", headers=auth_header(clinic["doctor"])).status_code == 403


def test_reminder_task_reports_count(app, monkeypatch):
    from tasks import reminder_tasks

    monkeypatch.setattr(reminder_tasks, "dispatch_due_reminders", lambda store, window_hours: window_hours // 12)

    result = reminder_tasks.send_session_reminders()

    assert result["success"] is True
    assert result["sent_count"] == 2
