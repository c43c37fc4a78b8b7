"""
CLI command tests.

Verifies:
- perms list/check read the grant table
- nav show previews the sidebar for a role
- session show/clear act on the persisted slot
"""

from medibill.extensions import db
from medibill.models import SessionSlot
from medibill.permissions import Role


class TestPermsCommands:

    def test_check_granted(self, app):
        result = app.test_cli_runner().invoke(args=["perms", "check", "MANAGER", "employees", "delete"])
        assert result.exit_code == 0
        assert "GRANTED MANAGER -> employees:delete" in result.output

    def test_check_denied(self, app):
        result = app.test_cli_runner().invoke(args=["perms", "check", "cashier", "users", "read"])
        assert result.exit_code == 0
        assert "DENIED  CASHIER -> users:read" in result.output

    def test_check_unknown_role(self, app):
        result = app.test_cli_runner().invoke(args=["perms", "check", "JANITOR", "users", "read"])
        assert result.exit_code != 0
        assert "Unknown role 'JANITOR'" in result.output

    def test_list_single_role(self, app):
        result = app.test_cli_runner().invoke(args=["perms", "list", "--role", "PRODUCT_OWNER"])
        assert result.exit_code == 0
        assert "analytics" in result.output
        assert "CASHIER" not in result.output
        assert "Total: 7 grants" in result.output

    def test_list_all(self, app):
        result = app.test_cli_runner().invoke(args=["perms", "list"])
        assert result.exit_code == 0
        for role in Role:
            assert role.value in result.output


class TestNavCommands:

    def test_show_for_pharmacist(self, app):
        result = app.test_cli_runner().invoke(args=["nav", "show", "--role", "PHARMACIST"])
        assert result.exit_code == 0
        assert "Sidebar for PHARMACIST:" in result.output
        assert "- Prescriptions (/prescriptions)" in result.output
        assert "Administration" not in result.output

    def test_show_nests_children(self, app):
        result = app.test_cli_runner().invoke(args=["nav", "show", "--role", "MANAGER"])
        assert "  - Administration (/admin)" in result.output
        assert "    - Employee Management (/admin/employees)" in result.output

    def test_role_is_required(self, app):
        result = app.test_cli_runner().invoke(args=["nav", "show"])
        assert result.exit_code != 0


class TestSessionCommands:

    def test_show_without_session(self, app):
        result = app.test_cli_runner().invoke(args=["session", "show"])
        assert result.exit_code == 0
        assert "No active session." in result.output

    def test_show_with_session(self, app, login_as):
        login_as(Role.MANAGER)
        result = app.test_cli_runner().invoke(args=["session", "show"])
        assert "Principal: Manager User (ID: manager-1)" in result.output
        assert "Role:      MANAGER" in result.output
        assert "Branch:    Main Branch (2)" in result.output

    def test_clear(self, app, login_as, session_store):
        login_as(Role.CASHIER)

        result = app.test_cli_runner().invoke(args=["session", "clear"])

        assert result.exit_code == 0
        assert "PASS Session cleared." in result.output
        assert session_store.principal is None
        with app.app_context():
            assert db.session.query(SessionSlot).count() == 0

    def test_clear_without_session(self, app):
        result = app.test_cli_runner().invoke(args=["session", "clear"])
        assert result.exit_code == 0
        assert "PASS No active session; slot cleared." in result.output
