from ayurclinic.models import Role, User
from ayurclinic.seeds import create_admin


def test_health_endpoints(client):
    assert client.get("/health").get_json()["status"] == "healthy"
    assert client.get("/health/ready").get_json()["database"] == "connected"


def test_unknown_endpoint_is_json(client):
    resp = client.get("/api/nowhere")

    assert resp.status_code == 404
    assert resp.get_json() == {"success": False, "error": "Endpoint not found"}


def test_create_admin_is_idempotent(app):
    admin, created = create_admin("Admin@Clinic.com", "secret123")
    again, created_again = create_admin("admin@clinic.com", "other-pass")

    assert created is True
    assert created_again is False
    assert again.id == admin.id
    assert admin.role == Role.ADMIN
    assert admin.check_password("secret123")


def test_seed_admin_command(app):
    runner = app.test_cli_runner()

    result = runner.invoke(args=["seed-admin", "--email", "root@clinic.com", "--password", "secret123"])

    assert "Admin root@clinic.com created." in result.output
    assert User.query.filter_by(email="root@clinic.com").count() == 1
