from ayurclinic.models import PatientProfile, Role, User


def _signup(client, **overrides):
    body = {
        "name": "Asha Rao",
        "email": "asha@example.com",
        "phone": "555-0101",
        "password": "secret123",
        "confirm_password": "secret123",
    }
    body.update(overrides)
    return client.post("/api/auth/signup", json=body)


def test_signup_creates_patient_and_profile(client):
    resp = _signup(client)

    assert resp.status_code == 201
    user = User.query.filter_by(email="asha@example.com").first()
    assert user.role == Role.PATIENT
    assert user.check_password("secret123")
    profile = PatientProfile.query.filter_by(user_id=user.id).first()
    assert profile.name == "Asha Rao"
    assert profile.medical_history == []


def test_signup_name_defaults_to_email_prefix(client):
    resp = _signup(client, name="", email="vikram@example.com")

    assert resp.status_code == 201
    assert resp.get_json()["data"]["name"] == "vikram"


def test_signup_rejects_mismatched_passwords(client):
    resp = _signup(client, confirm_password="different")

    assert resp.status_code == 400
    assert resp.get_json()["error"] == "Passwords do not match"


def test_signup_rejects_short_password(client):
    resp = _signup(client, password="abc", confirm_password="abc")

    assert resp.status_code == 400
    assert "at least 6" in resp.get_json()["error"]


def test_signup_rejects_duplicate_email(client):
    _signup(client)
    resp = _signup(client, email="ASHA@example.com")

    assert resp.status_code == 400
    assert resp.get_json()["error"] == "This email is already registered."


def test_login_returns_tokens_and_dashboard_path(client, make_user):
    make_user("doctor", email="kumar@example.com")

    resp = client.post(
        "/api/auth/login",
        json={"email": "kumar@example.com", "password": "secret123", "role": "doctor"},
    )

    body = resp.get_json()
    assert resp.status_code == 200
    assert body["redirect"] == "/doctor"
    assert body["access_token"]
    assert body["data"]["login_count"] == 1


def test_login_with_wrong_role_is_refused(client, make_user):
    make_user("therapist", email="meera@example.com")

    resp = client.post(
        "/api/auth/login",
        json={"email": "meera@example.com", "password": "secret123", "role": "doctor"},
    )

    assert resp.status_code == 403
    assert resp.get_json()["error"] == (
        "This account is registered as therapist. Please select the correct role."
    )


def test_login_requires_role_selection(client, make_user):
    make_user("patient", email="p@example.com")

    resp = client.post("/api/auth/login", json={"email": "p@example.com", "password": "secret123"})

    assert resp.status_code == 400
    assert resp.get_json()["error"] == "Please select your role"


def test_login_bad_password(client, make_user):
    make_user("patient", email="p@example.com")

    resp = client.post(
        "/api/auth/login",
        json={"email": "p@example.com", "password": "wrong-pass", "role": "patient"},
    )

    assert resp.status_code == 401


def test_login_inactive_account(client, make_user):
    make_user("doctor", email="gone@example.com", is_active=False)

    resp = client.post(
        "/api/auth/login",
        json={"email": "gone@example.com", "password": "secret123", "role": "doctor"},
    )

    assert resp.status_code == 403


def test_me_restores_user_with_profile(client, make_user, auth_header):
    patient = make_user("patient", name="Asha Rao")

    resp = client.get("/api/auth/me", headers=auth_header(patient))

    data = resp.get_json()["data"]
    assert resp.status_code == 200
    assert data["role"] == "patient"
    assert data["profile"]["name"] == "Asha Rao"


def test_me_requires_token(client):
    assert client.get("/api/auth/me").status_code == 401
