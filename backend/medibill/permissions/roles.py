# Overview: Closed set of staff roles and the role groups used by convenience guards.

from enum import Enum


class Role(str, Enum):
    """Job functions a principal can hold. Grants are enumerated per role, never inherited."""
    PRODUCT_OWNER = "PRODUCT_OWNER"
    SUPER_ADMIN = "SUPER_ADMIN"
    MANAGER = "MANAGER"
    PHARMACIST = "PHARMACIST"
    CASHIER = "CASHIER"


ROLE_LABELS = {
    Role.PRODUCT_OWNER: "Product Owner",
    Role.SUPER_ADMIN: "Super Admin",
    Role.MANAGER: "Manager",
    Role.PHARMACIST: "Pharmacist",
    Role.CASHIER: "Cashier",
}


# -- ROLE GROUPS --
# Explicit sets, not a hierarchy: each group lists every member role.

ADMIN_ROLES = frozenset({Role.SUPER_ADMIN, Role.PRODUCT_OWNER})
MANAGER_ROLES = frozenset({Role.MANAGER, Role.SUPER_ADMIN, Role.PRODUCT_OWNER})
PHARMACIST_ROLES = frozenset({Role.PHARMACIST, Role.MANAGER, Role.SUPER_ADMIN, Role.PRODUCT_OWNER})
CASHIER_ROLES = frozenset({
    Role.CASHIER,
    Role.PHARMACIST,
    Role.MANAGER,
    Role.SUPER_ADMIN,
    Role.PRODUCT_OWNER,
})


def parse_role(value) -> Role | None:
    """Look up a role by name, case-insensitively. Returns None for anything unknown."""
    if isinstance(value, Role):
        return value
    if not isinstance(value, str):
        return None
    try:
        return Role(value.strip().upper())
    except ValueError:
        return None


def role_label(role: Role) -> str:
    return ROLE_LABELS.get(role, str(role))
