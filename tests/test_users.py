from ayurclinic.models import AuditLog, DoctorProfile, Feedback, Sentiment, TherapistProfile, User
from ayurclinic.extensions import db


def _staff(**overrides):
    body = {
        "name": "Meera Nair",
        "email": "meera@example.com",
        "phone": "555-0102",
        "password": "secret123",
        "role": "therapist",
    }
    body.update(overrides)
    return body


def test_admin_creates_therapist(client, make_user, auth_header):
    admin = make_user("admin")

    resp = client.post("/api/users", json=_staff(skills=["Abhyanga"]), headers=auth_header(admin))

    assert resp.status_code == 201
    assert resp.get_json()["message"] == "Therapist added successfully!"
    user = User.query.filter_by(email="meera@example.com").first()
    assert TherapistProfile.query.filter_by(user_id=user.id).first().skills == ["Abhyanga"]
    assert AuditLog.query.filter_by(entity_type="user", action="create").count() == 1


def test_admin_creates_doctor(client, make_user, auth_header):
    admin = make_user("admin")

    resp = client.post(
        "/api/users",
        json=_staff(email="kumar@example.com", role="doctor", specialization="Panchakarma"),
        headers=auth_header(admin),
    )

    assert resp.status_code == 201
    user = User.query.filter_by(email="kumar@example.com").first()
    assert DoctorProfile.query.filter_by(user_id=user.id).first().specialization == "Panchakarma"


def test_create_user_requires_all_fields(client, make_user, auth_header):
    admin = make_user("admin")

    resp = client.post("/api/users", json=_staff(phone=""), headers=auth_header(admin))

    assert resp.status_code == 400
    assert resp.get_json()["error"] == "All fields are required."


def test_create_user_rejects_patient_or_admin_role(client, make_user, auth_header):
    admin = make_user("admin")

    resp = client.post("/api/users", json=_staff(role="admin"), headers=auth_header(admin))

    assert resp.status_code == 400


def test_only_admin_manages_users(client, make_user, auth_header):
    doctor = make_user("doctor")

    assert client.get("/api/users", headers=auth_header(doctor)).status_code == 403
    assert client.post("/api/users", json=_staff(), headers=auth_header(doctor)).status_code == 403


def test_list_users_by_role(client, make_user, auth_header):
    admin = make_user("admin")
    make_user("doctor")
    make_user("therapist")
    make_user("therapist")

    resp = client.get("/api/users?role=therapist", headers=auth_header(admin))

    assert resp.status_code == 200
    assert resp.get_json()["total"] == 2


def test_feedback_summary_counts_per_doctor(client, make_user, auth_header):
    admin = make_user("admin")
    patient = make_user("patient")
    kumar = make_user("doctor", name="Vaidya Kumar")
    iyer = make_user("doctor", name="Vaidya Iyer")
    for doctor, sentiment in [
        (kumar, Sentiment.POSITIVE),
        (kumar, Sentiment.POSITIVE),
        (kumar, Sentiment.NEGATIVE),
        (iyer, Sentiment.NEUTRAL),
    ]:
        db.session.add(Feedback(patient_id=patient.id, doctor_id=doctor.id, text="...", sentiment=sentiment))
    # feedback pointing at a non-doctor is ignored
    db.session.add(Feedback(patient_id=patient.id, doctor_id=patient.id, text="...", sentiment=Sentiment.NEGATIVE))
    db.session.commit()

    resp = client.get("/api/users/feedback-summary", headers=auth_header(admin))

    rows = {row["doctor_name"]: row for row in resp.get_json()["data"]}
    assert set(rows) == {"Vaidya Kumar", "Vaidya Iyer"}
    assert rows["Vaidya Kumar"]["counts"] == {"positive": 2, "negative": 1, "neutral": 0}
    assert rows["Vaidya Kumar"]["percentages"] == {"positive": 67, "negative": 33, "neutral": 0}
    assert rows["Vaidya Iyer"]["total"] == 1


def test_therapist_directory_for_doctors(client, clinic, auth_header):
    resp = client.get("/api/therapists", headers=auth_header(clinic["doctor"]))

    names = [t["name"] for t in resp.get_json()["data"]]
    assert names == ["Meera Nair", "Ravi Menon"]


def test_patients_cannot_read_therapist_directory(client, clinic, auth_header):
    assert client.get("/api/therapists", headers=auth_header(clinic["patient"])).status_code == 403


def test_doctor_list_for_booking(client, clinic, auth_header):
    resp = client.get("/api/doctors", headers=auth_header(clinic["patient"]))

    assert [d["name"] for d in resp.get_json()["data"]] == ["Vaidya Kumar"]


def test_create_therapist_rejects_skills_that_are_not_a_list(client, make_user, auth_header):
    admin = make_user("admin")

    resp = client.post("/api/users", json=_staff(skills="Abhyanga"), headers=auth_header(admin))

    assert resp.status_code == 400
    assert resp.get_json()["error"] == "skills must be a list of strings"
    assert User.query.filter_by(email="meera@example.com").count() == 0
