# Overview: Key-value backends for the persisted session slot.

"""
Persisted Session Storage

The session store decides *when* to read, write or clear the slot; these
classes only decide *where*. Values are opaque strings.

Backends:
- InMemorySessionStorage: process-local dict, lost on restart
- DatabaseSessionStorage: session_slots table, survives restarts
  (requires an application context)
"""

from typing import Protocol

from ..extensions import db
from ..models import SessionSlot


class SessionStorage(Protocol):
    def get(self, key: str) -> str | None: ...

    def set(self, key: str, value: str) -> None: ...

    def remove(self, key: str) -> None: ...


class InMemorySessionStorage:
    """Dict-backed storage for tests and ephemeral terminals."""

    def __init__(self, initial: dict | None = None):
        self._values: dict[str, str] = dict(initial or {})

    def get(self, key: str) -> str | None:
        return self._values.get(key)

    def set(self, key: str, value: str) -> None:
        self._values[key] = value

    def remove(self, key: str) -> None:
        self._values.pop(key, None)


class DatabaseSessionStorage:
    """Storage backed by the session_slots table."""

    def get(self, key: str) -> str | None:
        slot = db.session.get(SessionSlot, key)
        if slot is None:
            return None
        return slot.value

    def set(self, key: str, value: str) -> None:
        slot = db.session.get(SessionSlot, key)
        if slot is None:
            slot = SessionSlot(key=key, value=value)
            db.session.add(slot)
        else:
            slot.value = value

        try:
            db.session.commit()
        except Exception:
            db.session.rollback()
            raise

    def remove(self, key: str) -> None:
        db.session.query(SessionSlot).filter_by(key=key).delete()
        try:
            db.session.commit()
        except Exception:
            db.session.rollback()
            raise


def build_storage(config) -> SessionStorage:
    """Choose a storage backend from the SESSION_STORAGE setting."""
    backend = (config.get("SESSION_STORAGE") or "database").lower()
    if backend == "memory":
        return InMemorySessionStorage()
    if backend == "database":
        return DatabaseSessionStorage()
    raise ValueError(f"Unknown SESSION_STORAGE backend: {backend}")
