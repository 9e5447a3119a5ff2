"""
Shared Domain Module
====================

Business logic for session, pagination, uploads, catalog and analytics.
"""

# Session
from getgrip.shared.domain.session.session_manager import SessionManager

# Pagination
from getgrip.shared.domain.pagination.store import PaginationStore, create_pagination_store

# Uploads
from getgrip.shared.domain.uploads.coordinator import UploadCoordinator, UploadField, UploadMode

# Catalog
from getgrip.shared.domain.catalog.service import CatalogService
from getgrip.shared.domain.catalog.cascade import CascadingModelFilter

# Analytics
from getgrip.shared.domain.analytics.service import AnalyticsService, DashboardSummary
from getgrip.shared.domain.analytics.explorer import VisitorExplorer

__all__ = [
    # Session
    "SessionManager",
    # Pagination
    "PaginationStore",
    "create_pagination_store",
    # Uploads
    "UploadCoordinator",
    "UploadField",
    "UploadMode",
    # Catalog
    "CatalogService",
    "CascadingModelFilter",
    # Analytics
    "AnalyticsService",
    "DashboardSummary",
    "VisitorExplorer",
]
