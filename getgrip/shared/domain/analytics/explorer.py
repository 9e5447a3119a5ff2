"""Unique-visitor list with a per-visitor visit history drill-down.

Two independent pagination stores drive the view: one for the outer list of
unique visitors and one for the expanded visitor's visit history.
"""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Optional

from getgrip.shared.core.exceptions import GripError
from getgrip.shared.domain.analytics.service import AnalyticsService
from getgrip.shared.domain.models import VisitorDetail, VisitorStats
from getgrip.shared.domain.pagination.store import PaginationStore, create_pagination_store

logger = logging.getLogger(__name__)

USER_AGENT_PREVIEW = 60


class VisitorExplorer:
    """State and actions of the analytics visitor section."""

    def __init__(
        self,
        analytics: AnalyticsService,
        visitor_page_size: int = 10,
        detail_page_size: int = 10,
    ):
        self.analytics = analytics
        self.visitors: PaginationStore = create_pagination_store(visitor_page_size)
        self.history: PaginationStore = create_pagination_store(detail_page_size)
        self.stats: Optional[VisitorStats] = None
        self.selected_ip: Optional[str] = None
        self.detail: Optional[VisitorDetail] = None
        self.detail_loading = False

    async def load_visitors(self) -> Optional[VisitorStats]:
        """Fetch the current outer page; failures leave the previous snapshot."""
        try:
            stats = await self.analytics.visitor_stats(self.visitors.page, self.visitors.limit)
        except GripError as e:
            logger.error(f"Error fetching visitor stats: {e}")
            return self.stats

        self.stats = stats
        if stats.pagination is not None:
            self.visitors.set_total_items(stats.pagination.total)
        return stats

    async def toggle_visitor(self, ip: str) -> None:
        """Expand a visitor's history, or collapse it when already open."""
        if self.selected_ip == ip:
            self.close_detail()
            return
        self.selected_ip = ip
        self.detail = None
        self.history.reset()
        await self._load_detail(ip, 1)

    async def change_page(self, page: int) -> bool:
        """Move the outer list; any open detail closes. Out-of-range is ignored."""
        if page < 1 or page > self.visitors.total_pages:
            return False
        self.close_detail()
        self.visitors.set_page(page)
        await self.load_visitors()
        return True

    async def change_detail_page(self, page: int) -> bool:
        if self.selected_ip is None or page < 1 or page > self.history.total_pages:
            return False
        self.history.set_page(page)
        await self._load_detail(self.selected_ip, page)
        return True

    def close_detail(self) -> None:
        self.selected_ip = None
        self.detail = None
        self.history.reset()

    def reset(self) -> None:
        """Forget everything, as when leaving the analytics page."""
        self.close_detail()
        self.visitors.reset()
        self.stats = None

    async def _load_detail(self, ip: str, page: int) -> None:
        self.detail_loading = True
        try:
            detail = await self.analytics.visitor_detail(ip, page, self.history.limit)
        except GripError as e:
            logger.error(f"Error fetching visitor detail for {ip}: {e}")
            return
        finally:
            self.detail_loading = False

        if self.selected_ip != ip:
            logger.debug(f"Dropping detail for {ip}; selection moved on")
            return
        self.detail = detail
        if detail.pagination is not None:
            self.history.set_total_items(detail.pagination.total)


def truncate_user_agent(user_agent: str, limit: int = USER_AGENT_PREVIEW) -> str:
    if len(user_agent) <= limit:
        return user_agent
    return user_agent[:limit] + "..."


def format_timestamp(value: str) -> str:
    """``2026-10-17T14:05:00Z`` -> ``17 Oct 2026, 02:05 PM``; unparseable input is returned as is."""
    if not value:
        return ""
    try:
        moment = datetime.fromisoformat(value.replace("Z", "+00:00"))
    except ValueError:
        return value
    return moment.strftime("%d %b %Y, %I:%M %p")
