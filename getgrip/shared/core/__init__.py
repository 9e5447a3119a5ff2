"""
Shared Core Module
==================

Event system, configuration, logging and the error taxonomy.
"""

# Event System
from .event_bus import EventBus, EventPayload
from . import events

# Errors
from .exceptions import (
    GripError,
    TransportError,
    HttpStatusError,
    ApiFailure,
    ClientValidationError,
    SessionExpiredError,
    error_message,
    handle_http_errors,
)

# Configuration
from .configuration import (
    ConfigManager,
    SystemConfig,
    get_config_manager,
    get_config,
    ValidationLevel,
)
from .logging_config import configure_logging

__all__ = [
    # Event System
    "EventBus",
    "EventPayload",
    "events",
    # Errors
    "GripError",
    "TransportError",
    "HttpStatusError",
    "ApiFailure",
    "ClientValidationError",
    "SessionExpiredError",
    "error_message",
    "handle_http_errors",
    # Configuration
    "ConfigManager",
    "SystemConfig",
    "get_config_manager",
    "get_config",
    "ValidationLevel",
    "configure_logging",
]
