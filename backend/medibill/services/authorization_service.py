# Overview: Service-layer authorization queries over a principal snapshot.

"""
Authorization Evaluator

Pure, side-effect-free checks. Every function takes the principal snapshot it
should judge; nothing here reads the session store, logs, or touches storage.

DESIGN PRINCIPLES:
- Fail closed: a missing principal is denied everything
- Default deny: unknown roles, resources and actions are not granted
- Cheap: plain set/dict lookups, safe to call on every render
"""

from ..permissions import (
    ADMIN_ROLES,
    MANAGER_ROLES,
    PHARMACIST_ROLES,
    CASHIER_ROLES,
    accessible_resources,
    is_granted,
)


def has_role(principal, roles) -> bool:
    """True if the principal holds any of the given roles."""
    if principal is None:
        return False
    return principal.role in roles


def has_permission(principal, resource: str, action: str) -> bool:
    """True if the principal's role is granted `action` (or manage) on `resource`."""
    if principal is None:
        return False
    return is_granted(principal.role, resource, action)


def can_access(principal, resource: str) -> bool:
    """True if the principal's role holds any grant on `resource`."""
    if principal is None:
        return False
    return resource in accessible_resources(principal.role)


def is_admin(principal) -> bool:
    return has_role(principal, ADMIN_ROLES)


def is_manager(principal) -> bool:
    return has_role(principal, MANAGER_ROLES)


def is_pharmacist(principal) -> bool:
    return has_role(principal, PHARMACIST_ROLES)


def is_cashier(principal) -> bool:
    return has_role(principal, CASHIER_ROLES)


def role_flags(principal) -> dict:
    """Convenience flags for templates and the session endpoint."""
    return {
        "is_admin": is_admin(principal),
        "is_manager": is_manager(principal),
        "is_pharmacist": is_pharmacist(principal),
        "is_cashier": is_cashier(principal),
    }
