"""
Shared Infrastructure Module
=============================

Technical adapters for external systems (REST API, session file).
"""

# API
from getgrip.shared.infrastructure.api.client import ApiClient, ApiEnvelope
from getgrip.shared.infrastructure.api import endpoints

# Persistence
from getgrip.shared.infrastructure.persistence.session_store import SessionStore

__all__ = [
    # API
    "ApiClient",
    "ApiEnvelope",
    "endpoints",
    # Persistence
    "SessionStore",
]
