# Overview: Read-only views over the grant table for the CLI and role screens.

from .registry import ROLE_PERMISSIONS, grants_for
from .roles import Role, role_label


def get_all_resources():
    """Sorted list of every resource granted to at least one role."""
    resources = set()
    for grants in ROLE_PERMISSIONS.values():
        resources.update(grants)
    return sorted(resources)


def describe_role(role: Role) -> dict:
    """Full grant listing for one role."""
    grants = grants_for(role)
    return {
        "role": role.value,
        "label": role_label(role),
        "resources": {
            resource: sorted(actions) for resource, actions in sorted(grants.items())
        },
    }


def get_grant_matrix(role: Role | None = None):
    """Flat (role, resource, actions) rows, optionally for a single role."""
    roles = [role] if role is not None else list(Role)
    rows = []
    for current in roles:
        for resource, actions in sorted(grants_for(current).items()):
            rows.append({
                "role": current.value,
                "label": role_label(current),
                "resource": resource,
                "actions": sorted(actions),
            })
    return rows
