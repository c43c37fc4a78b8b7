# Overview: Model package exports.

from .session import SessionSlot

__all__ = ["SessionSlot"]
