"""
Pytest fixtures for MediBill backend tests.

Provides an application wired to an in-memory database, a fake
authentication service, and principals for every role.
"""

import pytest

from medibill import create_app
from medibill.extensions import db
from medibill.permissions import Role
from medibill.services.auth_service import AuthenticationError, AuthFailureReason
from medibill.services.session_service import Principal


PASSWORD = "Password123!"


def make_principal(role: Role, **overrides) -> Principal:
    """Build a principal for `role` with predictable identity fields."""
    fields = {
        "id": f"{role.value.lower()}-1",
        "display_name": f"{role.value.title().replace('_', ' ')} User",
        "role": role,
        "branch_id": "2",
        "branch_name": "Main Branch",
    }
    fields.update(overrides)
    return Principal(**fields)


class FakeAuthenticator:
    """Authentication service double keyed by username."""

    def __init__(self, accounts=None):
        self.accounts = dict(accounts or {})
        self.calls = []

    def authenticate(self, credentials):
        self.calls.append(credentials)
        account = self.accounts.get(credentials.username)
        if account is None or account[0] != credentials.password:
            raise AuthenticationError(
                "Invalid username or password",
                AuthFailureReason.INVALID_CREDENTIALS,
            )
        return account[1]


@pytest.fixture
def authenticator():
    return FakeAuthenticator({
        role.value.lower(): (PASSWORD, make_principal(role)) for role in Role
    })


@pytest.fixture
def app(authenticator):
    """Create application for testing."""
    app = create_app(
        {
            "TESTING": True,
            "SECRET_KEY": "test",
            "SQLALCHEMY_DATABASE_URI": "sqlite:///:memory:",
            "SESSION_STORAGE": "database",
        },
        authenticator=authenticator,
    )

    yield app

    with app.app_context():
        db.session.remove()
        db.drop_all()


@pytest.fixture
def client(app):
    """Create test client."""
    return app.test_client()


@pytest.fixture
def session_store(app):
    return app.extensions["medibill"]["session_store"]


@pytest.fixture
def login_as(app, session_store):
    """Log a principal of the given role into the app's session store."""
    def _login(role: Role, **overrides) -> Principal:
        with app.app_context():
            return session_store.login(make_principal(role, **overrides))
    return _login
