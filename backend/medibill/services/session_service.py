# Overview: Service-layer ownership of the current principal; login, logout and startup hydration.

"""
Session Store

Owns the single principal tracked by this running client. Three transitions:

- login(principal): any state -> Authenticated, slot written
- logout(): -> Unauthenticated, slot cleared (idempotent)
- hydrate(): startup only; slot parsed -> Authenticated, else Unauthenticated

SECURITY:
- Fail closed: an unreadable slot is discarded and never trusted
- Every mutation bumps a generation number; a sign-in whose remote check
  finishes after a later login/logout/sign-in is dropped, so a stale response
  cannot resurrect a session
- Readers take a snapshot of the principal; the lock only guards the swap

The store implements the policy of when to read, write and clear the slot.
Storage itself is delegated to a SessionStorage backend.
"""

import json
import logging
import threading
from dataclasses import dataclass

from ..guards import check_guard
from ..permissions import Role, parse_role
from . import authorization_service


logger = logging.getLogger(__name__)

DEFAULT_STORAGE_KEY = "medibill_user"


@dataclass(frozen=True)
class Principal:
    """
    The authenticated actor. Created on successful authentication, dropped on
    logout, read-only everywhere else.
    """
    id: str
    display_name: str
    role: Role
    branch_id: str | None = None
    branch_name: str | None = None

    @property
    def roles(self) -> frozenset:
        return frozenset({self.role})

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "name": self.display_name,
            "role": self.role.value,
            "branch": self.branch_name,
            "branchId": self.branch_id,
        }

    @classmethod
    def from_dict(cls, data) -> "Principal":
        """
        Build a principal from its persisted/wire form.

        Raises ValueError for anything that is not a complete principal,
        including an unknown role.
        """
        if not isinstance(data, dict):
            raise ValueError("Principal data must be an object")

        missing = [field for field in ("id", "name", "role") if data.get(field) in (None, "")]
        if missing:
            raise ValueError(f"Principal data missing: {', '.join(missing)}")

        principal_id = data["id"]
        if isinstance(principal_id, bool) or not isinstance(principal_id, (str, int)):
            raise ValueError("Principal id must be a string or integer")

        name = data["name"]
        if not isinstance(name, str):
            raise ValueError("Principal name must be a string")

        role = parse_role(data["role"])
        if role is None:
            raise ValueError(f"Unknown role: {data['role']!r}")

        branch_id = _optional_text(data.get("branchId"), "branchId")
        branch_name = _optional_text(data.get("branch"), "branch")

        return cls(
            id=str(principal_id),
            display_name=name,
            role=role,
            branch_id=branch_id,
            branch_name=branch_name,
        )


def _optional_text(value, field: str) -> str | None:
    if value is None:
        return None
    if isinstance(value, bool) or not isinstance(value, (str, int)):
        raise ValueError(f"Principal {field} must be a string")
    return str(value)


def serialize_principal(principal: Principal) -> str:
    return json.dumps(principal.to_dict(), sort_keys=True)


def deserialize_principal(raw: str) -> Principal:
    """Parse a persisted slot value. Raises ValueError on any malformed input."""
    try:
        data = json.loads(raw)
    except (TypeError, ValueError, RecursionError) as exc:
        raise ValueError(f"Slot is not valid JSON: {exc}") from exc
    return Principal.from_dict(data)


class SessionStore:
    """Current-principal holder for one client process."""

    def __init__(self, storage, authenticator=None, storage_key: str = DEFAULT_STORAGE_KEY):
        self._storage = storage
        self._authenticator = authenticator
        self._storage_key = storage_key
        self._principal: Principal | None = None
        self._generation = 0
        self._lock = threading.RLock()

    @property
    def principal(self) -> Principal | None:
        return self._principal

    @property
    def is_authenticated(self) -> bool:
        return self._principal is not None

    @property
    def storage_key(self) -> str:
        return self._storage_key

    @property
    def storage(self):
        return self._storage

    @property
    def authenticator(self):
        return self._authenticator

    # -- transitions --

    def login(self, principal: Principal) -> Principal:
        """Make `principal` current and persist it. Supersedes any in-flight sign-in."""
        if not isinstance(principal, Principal):
            raise TypeError("login() requires a Principal")

        with self._lock:
            self._generation += 1
            self._apply_login(principal)
        return principal

    def logout(self) -> None:
        """Drop the current principal and clear the slot. Safe to call repeatedly."""
        with self._lock:
            self._generation += 1
            previous = self._principal
            self._principal = None
            self._storage.remove(self._storage_key)

        if previous is not None:
            logger.info("Principal %s (%s) logged out", previous.id, previous.role.value)

    def hydrate(self) -> Principal | None:
        """
        Restore the principal persisted by a previous run.

        An absent slot leaves the session unauthenticated. A corrupt slot is
        removed and logged; it is never surfaced as an error.
        """
        with self._lock:
            self._generation += 1
            raw = self._storage.get(self._storage_key)
            if raw is None:
                self._principal = None
                return None

            try:
                principal = deserialize_principal(raw)
            except ValueError as exc:
                logger.warning(
                    "Discarding unreadable session slot %r: %s", self._storage_key, exc
                )
                self._storage.remove(self._storage_key)
                self._principal = None
                return None

            self._principal = principal

        logger.info("Restored session for principal %s (%s)", principal.id, principal.role.value)
        return principal

    def sign_in(self, credentials) -> Principal | None:
        """
        Verify credentials with the authentication service and log in.

        Returns the new principal, or None when a later login/logout/sign-in
        was issued while this one was waiting on the remote check.
        AuthenticationError propagates unchanged and leaves the session as-is.
        """
        if self._authenticator is None:
            raise RuntimeError("No authentication service configured")

        with self._lock:
            self._generation += 1
            ticket = self._generation

        principal = self._authenticator.authenticate(credentials)

        with self._lock:
            if ticket != self._generation:
                logger.info(
                    "Discarding superseded sign-in result for principal %s", principal.id
                )
                return None
            self._apply_login(principal)
        return principal

    def _apply_login(self, principal: Principal) -> None:
        # Slot first: a failed write leaves the previous session untouched
        self._storage.set(self._storage_key, serialize_principal(principal))
        self._principal = principal
        logger.info("Principal %s (%s) logged in", principal.id, principal.role.value)

    # -- context surface --

    def has_role(self, roles) -> bool:
        return authorization_service.has_role(self._principal, roles)

    def has_permission(self, resource: str, action: str) -> bool:
        return authorization_service.has_permission(self._principal, resource, action)

    def can_access(self, resource: str) -> bool:
        return authorization_service.can_access(self._principal, resource)

    def check(self, spec) -> bool:
        return check_guard(spec, self._principal)
