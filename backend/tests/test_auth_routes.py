"""
Authentication route tests.

Verifies:
- Sign-in through the login form and redirect to the requested page
- Credential failures are shown on the form and change nothing
- Unsafe post-login targets are ignored
- Logout clears the principal and the persisted slot
- /api/auth/session reflects the current principal
"""

from urllib.parse import urlparse

import pytest

from medibill.permissions import Role
from medibill.services.session_storage import DatabaseSessionStorage
from medibill.services.session_service import deserialize_principal

from conftest import PASSWORD


def _path(response):
    return urlparse(response.headers["Location"]).path


class TestLogin:

    def test_success_redirects_to_dashboard(self, app, client, session_store):
        response = client.post("/login", data={"username": "cashier", "password": PASSWORD})

        assert response.status_code == 302
        assert _path(response) == "/"
        assert session_store.principal.role == Role.CASHIER

        with app.app_context():
            persisted = DatabaseSessionStorage().get("medibill_user")
        assert deserialize_principal(persisted) == session_store.principal

    def test_success_redirects_to_next(self, client):
        response = client.post(
            "/login",
            data={"username": "manager", "password": PASSWORD, "next": "/admin/employees"},
        )
        assert _path(response) == "/admin/employees"
        assert client.get("/admin/employees").status_code == 200

    @pytest.mark.parametrize("target", [
        "//evil.example.com/",
        "https://evil.example.com/",
        "/\\evil.example.com/",
        "admin",
    ])
    def test_unsafe_next_is_ignored(self, client, target):
        response = client.post(
            "/login",
            data={"username": "cashier", "password": PASSWORD, "next": target},
        )
        assert response.headers["Location"] == "/"

    def test_branch_is_forwarded(self, client, authenticator):
        client.post("/login", data={"username": "cashier", "password": PASSWORD, "branch": " 4 "})
        assert authenticator.calls[-1].branch_id == "4"

    def test_blank_branch_is_omitted(self, client, authenticator):
        client.post("/login", data={"username": "cashier", "password": PASSWORD, "branch": ""})
        assert authenticator.calls[-1].branch_id is None

    def test_wrong_password(self, app, client, session_store):
        response = client.post("/login", data={"username": "cashier", "password": "nope"})

        assert response.status_code == 401
        assert b"Invalid username or password" in response.data
        assert session_store.principal is None
        with app.app_context():
            assert DatabaseSessionStorage().get("medibill_user") is None

    def test_failed_sign_in_keeps_existing_session(self, client, login_as, session_store):
        manager = login_as(Role.MANAGER)

        response = client.post("/login", data={"username": "cashier", "password": "nope"})

        assert response.status_code == 401
        assert session_store.principal == manager

    @pytest.mark.parametrize("data", [
        {"username": "cashier"},
        {"password": PASSWORD},
        {"username": "   ", "password": PASSWORD},
    ])
    def test_missing_fields(self, client, authenticator, data):
        response = client.post("/login", data=data)

        assert response.status_code == 400
        assert b"Username and password are required" in response.data
        assert authenticator.calls == []

    def test_unexpected_error_is_logged(self, client, authenticator, caplog):
        def explode(credentials):
            raise RuntimeError("connection pool exhausted")

        authenticator.authenticate = explode

        with caplog.at_level("ERROR", logger="medibill"):
            response = client.post("/login", data={"username": "cashier", "password": PASSWORD})

        assert response.status_code == 500
        assert b"Login failed. Please try again." in response.data
        assert b"connection pool exhausted" not in response.data
        assert "Failed to login user" in caplog.text

    def test_superseded_sign_in(self, client, authenticator, session_store):
        real_authenticate = authenticator.authenticate

        def logout_midway(credentials):
            session_store.logout()
            return real_authenticate(credentials)

        authenticator.authenticate = logout_midway

        response = client.post("/login", data={"username": "cashier", "password": PASSWORD})

        assert response.status_code == 409
        assert session_store.principal is None

    def test_get_when_authenticated_redirects(self, client, login_as):
        login_as(Role.PHARMACIST)
        response = client.get("/login?next=/inventory")
        assert response.status_code == 302
        assert _path(response) == "/inventory"


class TestLogout:

    def test_logout_clears_session(self, app, client, login_as, session_store):
        login_as(Role.SUPER_ADMIN)

        response = client.post("/logout")

        assert response.status_code == 302
        assert _path(response) == "/login"
        assert session_store.principal is None
        with app.app_context():
            assert DatabaseSessionStorage().get("medibill_user") is None
        assert client.get("/admin").status_code == 302

    def test_logout_when_anonymous(self, client):
        response = client.post("/logout")
        assert response.status_code == 302
        assert _path(response) == "/login"


class TestSessionEndpoint:

    def test_anonymous(self, client):
        response = client.get("/api/auth/session")

        assert response.status_code == 200
        assert response.get_json() == {
            "is_authenticated": False,
            "principal": None,
            "resources": [],
            "grants": {},
            "is_admin": False,
            "is_manager": False,
            "is_pharmacist": False,
            "is_cashier": False,
        }

    def test_pharmacist(self, client, login_as):
        login_as(Role.PHARMACIST)

        body = client.get("/api/auth/session").get_json()

        assert body["is_authenticated"] is True
        assert body["principal"] == {
            "id": "pharmacist-1",
            "name": "Pharmacist User",
            "role": "PHARMACIST",
            "branch": "Main Branch",
            "branchId": "2",
        }
        assert "prescriptions" in body["resources"]
        assert "users" not in body["resources"]
        assert body["grants"]["prescriptions"] == ["manage"]
        assert body["grants"]["products"] == ["read", "update"]
        assert body["is_pharmacist"] is True
        assert body["is_manager"] is False
