"""
GetGrip Shared Kernel
=====================

Business logic and API adapters used by the admin dashboard.

Architecture:
- core: EventBus, configuration, logging, error taxonomy
- infrastructure: Technical adapters (REST API, session file)
- domain: Business logic (session, pagination, uploads, catalog, analytics)
"""

__version__ = "1.0.0"

__all__ = []
