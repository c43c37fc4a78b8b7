# Overview: Declarative allow/fallback decisions composed from role, resource and action checks.

"""
Guard Composer

A GuardSpec describes one access decision point. check_guard() evaluates it
against a principal snapshot in a fixed order and stops at the first failure:

1. no principal                                   -> fallback
2. roles listed and the role check fails          -> fallback
3. resource set and the role cannot access it     -> fallback
4. resource and action set and action not granted -> fallback
5. otherwise                                      -> allowed

The same evaluation backs both consumption styles:
- predicate form: check_guard(spec, principal) -> bool (navigation filtering)
- structural form: role_guard(spec, principal, allowed, fallback) (rendering)

Denial is a normal outcome here, never an exception.
"""

from dataclasses import dataclass, field
from typing import Iterable

from .permissions import (
    Action,
    Resource,
    Role,
    ADMIN_ROLES,
    MANAGER_ROLES,
    PHARMACIST_ROLES,
    CASHIER_ROLES,
    parse_role,
)
from .services import authorization_service


def _normalize_roles(roles: Iterable) -> frozenset:
    if isinstance(roles, (str, Role)):
        roles = [roles]

    normalized = set()
    for value in roles:
        role = parse_role(value)
        if role is None:
            raise ValueError(f"Unknown role in guard: {value!r}")
        normalized.add(role)
    return frozenset(normalized)


@dataclass(frozen=True)
class GuardSpec:
    """
    One access decision point.

    roles:       any-of role filter (empty = no role filter)
    resource:    capability domain the principal must be able to access
    action:      action required on `resource` (ignored without a resource)
    require_all: principal must hold every listed role
    """
    roles: frozenset = field(default_factory=frozenset)
    resource: str | None = None
    action: str | None = None
    require_all: bool = False

    def __post_init__(self):
        roles = _normalize_roles(self.roles or ())
        object.__setattr__(self, "roles", roles)

        # Principals carry exactly one role, so an all-of filter over several
        # roles could never pass.
        if self.require_all and len(roles) > 1:
            raise ValueError(
                "require_all needs at most one role while principals hold a single role: "
                + ", ".join(sorted(role.value for role in roles))
            )


def _role_check(spec: GuardSpec, principal) -> bool:
    if spec.require_all:
        return spec.roles <= principal.roles
    return authorization_service.has_role(principal, spec.roles)


def check_guard(spec: GuardSpec, principal) -> bool:
    """Predicate form: True when `principal` passes every check in `spec`."""
    if principal is None:
        return False

    if spec.roles and not _role_check(spec, principal):
        return False

    if spec.resource:
        if not authorization_service.can_access(principal, spec.resource):
            return False

        if spec.action and not authorization_service.has_permission(
            principal, spec.resource, spec.action
        ):
            return False

    return True


def role_guard(spec: GuardSpec, principal, allowed, fallback=None):
    """
    Structural form: return the allowed branch or the fallback branch.

    Callables are invoked lazily, so the branch that is not selected is never
    rendered.
    """
    branch = allowed if check_guard(spec, principal) else fallback
    if callable(branch):
        return branch()
    return branch


def guard_spec(spec: GuardSpec | None = None, **kwargs) -> GuardSpec:
    """Accept either a ready GuardSpec or its fields as keywords (template helper)."""
    if spec is not None:
        if kwargs:
            raise TypeError("Pass either a GuardSpec or keyword fields, not both")
        return spec
    return GuardSpec(**kwargs)


# -- PREDEFINED GUARDS --

ADMIN_ONLY = GuardSpec(roles=ADMIN_ROLES)
MANAGER_ONLY = GuardSpec(roles=MANAGER_ROLES)
PHARMACIST_ONLY = GuardSpec(roles=PHARMACIST_ROLES)
CASHIER_ONLY = GuardSpec(roles=CASHIER_ROLES)

CAN_MANAGE_USERS = GuardSpec(resource=Resource.USERS, action=Action.MANAGE)
CAN_MANAGE_PRODUCTS = GuardSpec(resource=Resource.PRODUCTS, action=Action.MANAGE)
CAN_VIEW_REPORTS = GuardSpec(resource=Resource.REPORTS, action=Action.READ)
CAN_MANAGE_SETTINGS = GuardSpec(resource=Resource.SETTINGS, action=Action.MANAGE)
