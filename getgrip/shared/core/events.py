"""Canonical event definitions for the GetGrip admin dashboard."""

from __future__ import annotations

import time
from typing import Any, Dict, List, Literal, Optional

from .event_bus import EventPayload

# Session lifecycle
TOPIC_SESSION_CHANGED = "session.changed"

# Upload batches
TOPIC_UPLOAD_BATCH_START = "upload.batch.start"
TOPIC_UPLOAD_BATCH_END = "upload.batch.end"

# Catalog mutations
TOPIC_CATALOG_CHANGED = "catalog.changed"

# Feedback
TOPIC_LOGS_EVENT = "logs.event"


def create_session_changed_event(
    reason: Literal["login", "logout", "profile"],
    user: Optional[Dict[str, Any]] = None,
) -> EventPayload:
    """Create a session change event.

    Args:
        reason: What caused the change
        user: Serialized profile, ``None`` after logout
    """
    return {
        "reason": reason,
        "user": user,
        "logged_in": user is not None,
    }


def create_upload_batch_start_event(field: str, file_count: int) -> EventPayload:
    return {
        "field": field,
        "file_count": file_count,
    }


def create_upload_batch_end_event(
    field: str,
    urls: List[str],
    failed: int,
    cancelled: bool = False,
) -> EventPayload:
    """Create an upload batch completion event."""
    return {
        "field": field,
        "urls": urls,
        "failed": failed,
        "cancelled": cancelled,
    }


def create_catalog_changed_event(
    resource: str,
    action: Literal["created", "updated", "deleted"],
    resource_id: Optional[str] = None,
) -> EventPayload:
    return {
        "resource": resource,
        "action": action,
        "id": resource_id,
    }


def create_logs_event(
    message: str,
    level: Literal["info", "warning", "error", "success"] = "info",
    topic: str | None = None,
) -> EventPayload:
    """Create a Log event."""
    return {
        "message": message,
        "level": level,
        "topic": topic,
        "ts": time.time(),
    }
