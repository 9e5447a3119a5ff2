"""Persistence adapters (JSON session file)."""

from getgrip.shared.infrastructure.persistence.session_store import SessionStore

__all__ = ["SessionStore"]
