"""GetGrip Admin package."""

from .shared.core.event_bus import EventBus

__all__ = ["EventBus"]
