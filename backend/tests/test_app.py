"""Smoke tests for the application factory, docs and CLI."""

from chemistry.models.user import User


def test_health(client):
    response = client.get("/api/v1/health")

    assert response.status_code == 200
    assert response.get_json()["status"] == "ok"


def test_openapi_document_served(client):
    response = client.get("/openapi/cms.yaml")

    assert response.status_code == 200
    assert b"Chemistry CMS API" in response.data


def test_testing_config(app):
    assert app.config["TESTING"] is True
    assert app.config["CHEMISTRY_NOT_FOUND_PATH"] == "404"
    assert app.config["CHEMISTRY_CASE_SENSITIVE_PATHS"] is False


def test_create_user_command(app):
    runner = app.test_cli_runner()

    result = runner.invoke(args=["create-user", "Admin@Example.com", "--role", "admin", "--password", "pw-123456"])

    assert result.exit_code == 0, result.output
    user = User.query.filter_by(email="admin@example.com").one()
    assert user.role == "admin"
    assert user.check_password("pw-123456")


def test_create_user_twice(app, make_user):
    make_user(email="admin@example.com", role="admin")

    result = app.test_cli_runner().invoke(args=["create-user", "admin@example.com", "--password", "pw"])

    assert result.exit_code != 0
    assert "already exists" in result.output
