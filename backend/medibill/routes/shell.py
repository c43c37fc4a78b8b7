# Overview: Protected application shell; every page is a placeholder behind its route guard.

# Route table:
# - authenticated staff:       /, /pos, /customers, /invoices, /refunds, /checkin,
#                              /shifts, /performance, /settings
# - manager/admin:             /inventory-transfers, /commission
# - + pharmacist:              /inventory
# - + cashier:                 /reports
# - sidebar guards:            /prescriptions, /admin/branches
# - super admin:               /admin, /admin/reports
# - super admin/product owner: /admin/users, /admin/roles, /superadmin
# - super admin/manager:       /admin/employees

from flask import Blueprint, jsonify, render_template

from ..decorators import guard_required, login_required, role_required
from ..guards import CAN_MANAGE_USERS, GuardSpec
from ..permissions import Action, Resource, Role, get_grant_matrix


shell_bp = Blueprint("shell", __name__)


def _page(title: str, description: str):
    return render_template("shell/page.html", title=title, description=description)


# -- ALL AUTHENTICATED STAFF --

@shell_bp.get("/")
@login_required
def dashboard():
    return render_template("shell/dashboard.html", title="Dashboard")


@shell_bp.get("/pos")
@login_required
def pos():
    return _page("POS", "Point of sale terminal.")


@shell_bp.get("/customers")
@login_required
def customers():
    return _page("Customers", "Customer directory.")


@shell_bp.get("/invoices")
@login_required
def invoices():
    return _page("Invoices", "Issued invoices.")


@shell_bp.get("/refunds")
@login_required
def refunds():
    return _page("Refunds", "Refund requests and approvals.")


@shell_bp.get("/checkin")
@login_required
def checkin():
    return _page("Employee Check-In", "Clock in and out of shifts.")


@shell_bp.get("/shifts")
@login_required
def shifts():
    return _page("Shift Management", "Open and close register shifts.")


@shell_bp.get("/performance")
@login_required
def performance():
    return _page("Performance", "Sales performance tracking.")


@shell_bp.get("/settings")
@login_required
def settings():
    return _page("Settings", "Application settings.")


# -- MANAGER & ADMIN --

@shell_bp.get("/inventory-transfers")
@role_required(Role.MANAGER, Role.SUPER_ADMIN)
def inventory_transfers():
    return _page("Inventory Transfers", "Stock transfers between branches.")


@shell_bp.get("/commission")
@role_required(Role.MANAGER, Role.SUPER_ADMIN)
def commission():
    return _page("Commission Tracking", "Staff commission overview.")


@shell_bp.get("/inventory")
@role_required(Role.MANAGER, Role.SUPER_ADMIN, Role.PHARMACIST)
def inventory():
    return _page("Inventory", "Products and stock levels.")


@shell_bp.get("/reports")
@role_required(Role.MANAGER, Role.SUPER_ADMIN, Role.PHARMACIST, Role.CASHIER)
def reports():
    return _page("Reports", "Sales and profit reports.")


@shell_bp.get("/prescriptions")
@guard_required(GuardSpec(
    roles=(Role.PHARMACIST, Role.MANAGER, Role.SUPER_ADMIN),
    resource=Resource.PRESCRIPTIONS,
    action=Action.READ,
))
def prescriptions():
    return _page("Prescriptions", "Prescription records.")


# -- ADMINISTRATION --

@shell_bp.get("/admin")
@role_required(Role.SUPER_ADMIN)
def admin_dashboard():
    return _page("Admin Dashboard", "Organisation-wide administration.")


@shell_bp.get("/admin/users")
@role_required(Role.SUPER_ADMIN, Role.PRODUCT_OWNER)
def admin_users():
    return _page("User Management", "Staff accounts and roles.")


@shell_bp.get("/admin/employees")
@role_required(Role.SUPER_ADMIN, Role.MANAGER)
def admin_employees():
    return _page("Employee Management", "Employee records.")


@shell_bp.get("/admin/branches")
@guard_required(GuardSpec(
    roles=(Role.PRODUCT_OWNER, Role.SUPER_ADMIN),
    resource=Resource.BRANCHES,
    action=Action.MANAGE,
))
def admin_branches():
    return _page("Branch Management", "Branches and their details.")


@shell_bp.get("/admin/roles")
@role_required(Role.SUPER_ADMIN, Role.PRODUCT_OWNER)
def admin_roles():
    return render_template("shell/roles.html", title="Role Management", matrix=get_grant_matrix())


@shell_bp.get("/admin/reports")
@role_required(Role.SUPER_ADMIN)
def admin_reports():
    return _page("Admin Reports", "Cross-branch reporting.")


@shell_bp.get("/superadmin")
@role_required(Role.SUPER_ADMIN, Role.PRODUCT_OWNER)
def superadmin():
    return _page("Super Admin", "Platform administration.")


# -- JSON --

@shell_bp.get("/api/roles")
@guard_required(CAN_MANAGE_USERS)
def roles_route():
    """Read-only grant matrix for the role management screen."""
    return jsonify({"roles": get_grant_matrix()}), 200
