# Overview: Static sidebar definition and its per-principal filtering.

"""
Navigation Filter

NAVIGATION is the built-in sidebar tree. Deployments may replace it through
the NAVIGATION_CONFIG setting (a list of dicts, see load_navigation()).

Filtering rules:
- depth-first, declared order
- an entry is kept when its own guard passes, whether or not any child does
- children of a hidden entry are never visited
"""

from dataclasses import dataclass, field, replace

from .guards import GuardSpec, check_guard
from .permissions import Action, Resource, Role


NAVIGATION_VERSION = 2


@dataclass(frozen=True)
class NavigationEntry:
    label: str
    target: str
    guard: GuardSpec = field(default_factory=GuardSpec)
    icon: str | None = None
    children: tuple = ()

    def to_dict(self) -> dict:
        return {
            "label": self.label,
            "target": self.target,
            "icon": self.icon,
            "children": [child.to_dict() for child in self.children],
        }


class VisibleEntries:
    """
    Lazy view of the entries a principal may see.

    Nothing is evaluated until iteration, and every iter() walks the tree
    again, so the view can be consumed more than once.
    """

    def __init__(self, entries, principal):
        self._entries = tuple(entries)
        self._principal = principal

    def __iter__(self):
        return _walk(self._entries, self._principal)

    def __repr__(self) -> str:
        return f"VisibleEntries(roots={len(self._entries)})"


def _walk(entries, principal):
    for entry in entries:
        if not check_guard(entry.guard, principal):
            continue
        yield entry
        if entry.children:
            yield from _walk(entry.children, principal)


def visible_entries(entries, principal) -> VisibleEntries:
    """Flat, depth-first sequence of entries whose guard passes for `principal`."""
    return VisibleEntries(entries, principal)


def visible_tree(entries, principal) -> tuple:
    """Pruned copy of the tree keeping only entries whose guard passes."""
    kept = []
    for entry in entries:
        if not check_guard(entry.guard, principal):
            continue
        kept.append(replace(entry, children=visible_tree(entry.children, principal)))
    return tuple(kept)


def load_navigation(raw) -> tuple:
    """
    Build navigation entries from configuration.

    Each item: {"label", "target", "roles"?, "resource"?, "action"?,
    "require_all"?, "icon"?, "children"?}. Unknown roles raise ValueError.
    """
    if not isinstance(raw, (list, tuple)):
        raise ValueError("Navigation config must be a list of entries")

    entries = []
    for item in raw:
        if not isinstance(item, dict):
            raise ValueError("Navigation entry must be an object")
        try:
            label = item["label"]
            target = item["target"]
        except KeyError as exc:
            raise ValueError(f"Navigation entry missing {exc.args[0]!r}") from exc

        guard = GuardSpec(
            roles=item.get("roles") or (),
            resource=item.get("resource"),
            action=item.get("action"),
            require_all=bool(item.get("require_all", False)),
        )
        entries.append(NavigationEntry(
            label=label,
            target=target,
            guard=guard,
            icon=item.get("icon"),
            children=load_navigation(item.get("children") or []),
        ))
    return tuple(entries)


def _entry(label, target, roles, resource, action, icon, children=()):
    return NavigationEntry(
        label=label,
        target=target,
        guard=GuardSpec(roles=roles, resource=resource, action=action),
        icon=icon,
        children=tuple(children),
    )


_ALL_ROLES = (Role.PRODUCT_OWNER, Role.SUPER_ADMIN, Role.MANAGER, Role.PHARMACIST, Role.CASHIER)


NAVIGATION = (
    _entry("Dashboard", "/", _ALL_ROLES, Resource.DASHBOARD, Action.READ, "layout-dashboard"),
    _entry(
        "Inventory", "/inventory",
        (Role.SUPER_ADMIN, Role.MANAGER, Role.PHARMACIST),
        Resource.PRODUCTS, Action.READ, "package",
    ),
    _entry(
        "POS", "/pos",
        (Role.SUPER_ADMIN, Role.MANAGER, Role.CASHIER),
        Resource.SALES, Action.CREATE, "shopping-cart",
    ),
    _entry(
        "Customers", "/customers",
        (Role.SUPER_ADMIN, Role.MANAGER, Role.PHARMACIST, Role.CASHIER),
        Resource.CUSTOMERS, Action.READ, "users",
    ),
    _entry(
        "Prescriptions", "/prescriptions",
        (Role.PHARMACIST, Role.MANAGER, Role.SUPER_ADMIN),
        Resource.PRESCRIPTIONS, Action.READ, "pill",
    ),
    _entry("Reports", "/reports", _ALL_ROLES, Resource.REPORTS, Action.READ, "bar-chart"),
    NavigationEntry(
        label="Administration",
        target="/admin",
        guard=GuardSpec(roles=(Role.PRODUCT_OWNER, Role.SUPER_ADMIN, Role.MANAGER)),
        icon="shield",
        children=(
            _entry(
                "User Management", "/admin/users",
                (Role.PRODUCT_OWNER, Role.SUPER_ADMIN),
                Resource.USERS, Action.MANAGE, "user-cog",
            ),
            _entry(
                "Employee Management", "/admin/employees",
                (Role.SUPER_ADMIN, Role.MANAGER),
                Resource.EMPLOYEES, Action.MANAGE, "user-check",
            ),
            _entry(
                "Branch Management", "/admin/branches",
                (Role.PRODUCT_OWNER, Role.SUPER_ADMIN),
                Resource.BRANCHES, Action.MANAGE, "building",
            ),
        ),
    ),
    _entry(
        "Settings", "/settings",
        (Role.PRODUCT_OWNER, Role.SUPER_ADMIN, Role.MANAGER),
        Resource.SETTINGS, Action.READ, "settings",
    ),
)
