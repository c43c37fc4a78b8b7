# Overview: Permission system package.
# Re-exports the registry, identifiers and role definitions.

from .definitions import Action, Resource
from .roles import (
    Role,
    ROLE_LABELS,
    ADMIN_ROLES,
    MANAGER_ROLES,
    PHARMACIST_ROLES,
    CASHIER_ROLES,
    parse_role,
    role_label,
)
from .registry import ROLE_PERMISSIONS, grants_for, is_granted, accessible_resources
from .helpers import get_all_resources, get_grant_matrix, describe_role

__all__ = [
    "Action",
    "Resource",
    "Role",
    "ROLE_LABELS",
    "ADMIN_ROLES",
    "MANAGER_ROLES",
    "PHARMACIST_ROLES",
    "CASHIER_ROLES",
    "parse_role",
    "role_label",
    "ROLE_PERMISSIONS",
    "grants_for",
    "is_granted",
    "accessible_resources",
    "get_all_resources",
    "get_grant_matrix",
    "describe_role",
]
