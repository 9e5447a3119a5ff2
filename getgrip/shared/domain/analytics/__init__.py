"""Product click and visitor analytics."""

from .service import AnalyticsService, DashboardSummary
from .explorer import VisitorExplorer, format_timestamp, truncate_user_agent

__all__ = [
    "AnalyticsService",
    "DashboardSummary",
    "VisitorExplorer",
    "format_timestamp",
    "truncate_user_agent",
]
