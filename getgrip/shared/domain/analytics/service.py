"""Read-only analytics calls: product clicks, visitors, dashboard totals."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, List, Type, TypeVar

from pydantic import BaseModel, ValidationError

from getgrip.shared.core.exceptions import ApiFailure
from getgrip.shared.domain.catalog.service import PRODUCTS, CatalogService
from getgrip.shared.domain.models import Product, ProductStats, VisitorDetail, VisitorStats
from getgrip.shared.infrastructure.api import endpoints
from getgrip.shared.infrastructure.api.client import ApiClient

logger = logging.getLogger(__name__)

M = TypeVar("M", bound=BaseModel)


@dataclass
class DashboardSummary:
    """Headline numbers computed from the product list."""

    total_products: int = 0
    total_clicks: int = 0
    active_products: int = 0
    featured_products: int = 0
    top_products: List[Product] = field(default_factory=list)
    recent_products: List[Product] = field(default_factory=list)

    @classmethod
    def from_products(cls, products: List[Product], size: int = 5) -> "DashboardSummary":
        by_clicks = sorted(products, key=lambda p: p.click_count, reverse=True)
        # ISO timestamps sort chronologically as strings
        by_created = sorted(products, key=lambda p: p.created_at or "", reverse=True)
        return cls(
            total_products=len(products),
            total_clicks=sum(p.click_count for p in products),
            active_products=sum(1 for p in products if p.is_active),
            featured_products=sum(1 for p in products if p.featured),
            top_products=by_clicks[:size],
            recent_products=by_created[:size],
        )


class AnalyticsService:
    def __init__(self, api: ApiClient, catalog: CatalogService):
        self.api = api
        self.catalog = catalog

    async def product_stats(self) -> ProductStats:
        envelope = await self.api.get(endpoints.PRODUCTS_ADMIN_STATS)
        return _parse(ProductStats, envelope.unwrap("Failed to load product stats"), "Failed to load product stats")

    async def visitor_stats(self, page: int, limit: int) -> VisitorStats:
        envelope = await self.api.get(endpoints.VISITORS_STATS, params={"page": page, "limit": limit})
        return _parse(VisitorStats, envelope.unwrap("Failed to load visitor stats"), "Failed to load visitor stats")

    async def visitor_detail(self, ip: str, page: int, limit: int) -> VisitorDetail:
        envelope = await self.api.get(
            endpoints.visitor_by_ip_path(ip), params={"page": page, "limit": limit}
        )
        data = envelope.unwrap("Failed to load visitor detail") or {}
        if isinstance(data, dict):
            data.setdefault("ip", ip)
        return _parse(VisitorDetail, data, "Failed to load visitor detail")

    async def dashboard_summary(self, size: int = 5) -> DashboardSummary:
        products = await self.catalog.list(PRODUCTS)
        return DashboardSummary.from_products(products, size)


def _parse(model: Type[M], data: Any, fallback: str) -> M:
    """Validate a stats payload; a malformed one is reported as ApiFailure."""
    try:
        return model.model_validate(data or {})
    except ValidationError as e:
        logger.warning(f"{fallback}: malformed payload: {e}")
        raise ApiFailure(fallback, payload=data) from e
