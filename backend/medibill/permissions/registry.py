# Overview: Static role -> resource -> actions grant table and its lookups.

"""
Role-Permission Registry

Every role lists its own grants in full. Roles overlap in practice but never
inherit from each other, so editing one role cannot widen another.

The table is frozen at import time. Changing a grant means editing this
module and redeploying; there is no runtime mutation API.

Lookups are default-deny: an unknown role, resource, or action is simply not
granted. Nothing here raises for a missing key.
"""

from types import MappingProxyType
from typing import Mapping

from .definitions import Action, Resource
from .roles import Role


_MANAGE = frozenset({Action.MANAGE})
_READ = frozenset({Action.READ})


def _freeze(table):
    return MappingProxyType({
        role: MappingProxyType({
            resource: frozenset(actions) for resource, actions in grants.items()
        })
        for role, grants in table.items()
    })


ROLE_PERMISSIONS = _freeze({
    Role.PRODUCT_OWNER: {
        Resource.USERS: _MANAGE,
        Resource.BRANCHES: _MANAGE,
        Resource.SETTINGS: _MANAGE,
        Resource.INTEGRATIONS: _MANAGE,
        Resource.BACKUP: _MANAGE,
        Resource.ANALYTICS: _READ,
        Resource.BILLING: _MANAGE,
    },
    Role.SUPER_ADMIN: {
        Resource.USERS: _MANAGE,
        Resource.EMPLOYEES: _MANAGE,
        Resource.BRANCHES: _MANAGE,
        Resource.PRODUCTS: _MANAGE,
        Resource.CATEGORIES: _MANAGE,
        Resource.SUPPLIERS: _MANAGE,
        Resource.SALES: _MANAGE,
        Resource.REPORTS: _MANAGE,
        Resource.DASHBOARD: _READ,
        Resource.SETTINGS: _MANAGE,
        Resource.INTEGRATIONS: _MANAGE,
        Resource.BACKUP: _MANAGE,
        Resource.COMMISSIONS: _MANAGE,
        Resource.CUSTOMERS: _MANAGE,
        Resource.REFUNDS: _MANAGE,
    },
    Role.MANAGER: {
        Resource.USERS: {Action.CREATE, Action.READ, Action.UPDATE},
        Resource.EMPLOYEES: _MANAGE,
        Resource.PRODUCTS: _MANAGE,
        Resource.CATEGORIES: _MANAGE,
        Resource.SUPPLIERS: _MANAGE,
        Resource.SALES: {Action.READ, Action.UPDATE},
        Resource.REPORTS: {Action.READ, Action.EXPORT},
        Resource.DASHBOARD: _READ,
        Resource.REFUNDS: {Action.APPROVE, Action.REJECT},
        Resource.CUSTOMERS: _MANAGE,
        Resource.COMMISSIONS: _READ,
        Resource.SETTINGS: _READ,
    },
    Role.PHARMACIST: {
        Resource.PRODUCTS: {Action.READ, Action.UPDATE},
        Resource.PRESCRIPTIONS: _MANAGE,
        Resource.CUSTOMERS: {Action.READ, Action.UPDATE},
        Resource.MEDICATION_HISTORY: _READ,
        Resource.SALES: {Action.READ, Action.UPDATE},
        Resource.STOCK_MOVEMENTS: {Action.READ, Action.UPDATE},
        Resource.DASHBOARD: _READ,
        Resource.REPORTS: _READ,
        Resource.CATEGORIES: _READ,
    },
    Role.CASHIER: {
        Resource.SALES: {Action.CREATE, Action.READ},
        Resource.RECEIPTS: {Action.CREATE, Action.READ},
        Resource.REFUNDS: {Action.CREATE, Action.READ},
        Resource.PRODUCTS: _READ,
        Resource.CUSTOMERS: {Action.READ, Action.CREATE, Action.UPDATE},
        Resource.CATEGORIES: _READ,
        Resource.DASHBOARD: _READ,
        Resource.REPORTS: _READ,
    },
})

_NO_GRANTS: Mapping[str, frozenset] = MappingProxyType({})


def grants_for(role) -> Mapping[str, frozenset]:
    """Return the resource -> actions mapping for a role (empty for unknown roles)."""
    if not isinstance(role, str):
        return _NO_GRANTS
    return ROLE_PERMISSIONS.get(role, _NO_GRANTS)


def is_granted(role, resource: str, action: str) -> bool:
    """True iff the role holds `action` or `manage` on `resource`."""
    if not isinstance(resource, str) or not isinstance(action, str):
        return False
    actions = grants_for(role).get(resource)
    if not actions:
        return False
    return action in actions or Action.MANAGE in actions


def accessible_resources(role) -> frozenset:
    """Every resource the role holds at least one action on."""
    return frozenset(grants_for(role))
