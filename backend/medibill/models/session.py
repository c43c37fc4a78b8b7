from __future__ import annotations

from ..extensions import db


class SessionSlot(db.Model):
    """
    Durable key-value slot holding the serialized principal of this terminal.

    WHY: The client shell survives restarts. Only the serialized principal is
    stored here; no business records are persisted.
    """
    __tablename__ = "session_slots"

    key = db.Column(db.String(128), primary_key=True)
    value = db.Column(db.Text, nullable=False)
    updated_at = db.Column(
        db.DateTime(timezone=True),
        nullable=False,
        server_default=db.func.now(),
        onupdate=db.func.now(),
    )

    def to_dict(self) -> dict:
        return {
            "key": self.key,
            "value": self.value,
            "updated_at": self.updated_at.isoformat() if self.updated_at else None,
        }
