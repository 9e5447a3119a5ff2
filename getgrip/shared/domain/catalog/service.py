"""CRUD access to the catalog collections (products, brands, models, categories)."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Type

from pydantic import ValidationError

from getgrip.shared.core import events
from getgrip.shared.core.event_bus import EventBus
from getgrip.shared.core.exceptions import ApiFailure
from getgrip.shared.domain.models import ApiModel, Brand, Category, PhoneModel, Product
from getgrip.shared.infrastructure.api import endpoints
from getgrip.shared.infrastructure.api.client import ApiClient

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Resource:
    """One REST collection and the model its documents parse into."""

    key: str
    path: str
    model: Type[ApiModel]
    label: str


PRODUCTS = Resource("products", endpoints.PRODUCTS, Product, "product")
BRANDS = Resource("brands", endpoints.BRANDS, Brand, "brand")
PHONE_MODELS = Resource("phone-models", endpoints.PHONE_MODELS, PhoneModel, "phone model")
CATEGORIES = Resource("categories", endpoints.CATEGORIES, Category, "category")

RESOURCES: Dict[str, Resource] = {r.key: r for r in (PRODUCTS, BRANDS, PHONE_MODELS, CATEGORIES)}


class CatalogService:
    """Typed CRUD calls. Errors propagate as GripError subclasses."""

    def __init__(
        self,
        api: ApiClient,
        event_bus: Optional[EventBus] = None,
        product_list_limit: int = 100,
    ):
        self.api = api
        self.event_bus = event_bus
        self.product_list_limit = product_list_limit

    async def list(self, resource: Resource, params: Optional[Dict[str, Any]] = None) -> List[Any]:
        if resource is PRODUCTS and params is None:
            params = {"limit": self.product_list_limit}
        envelope = await self.api.get(resource.path, params=params)
        rows = envelope.unwrap(f"Failed to load {resource.label}s") or []
        return self._parse_many(resource, rows)

    async def list_active(self, resource: Resource, params: Optional[Dict[str, Any]] = None) -> List[Any]:
        """Active rows only, for select options."""
        return [row for row in await self.list(resource, params) if row.is_active]

    async def list_phone_models(self, brand_name: Optional[str] = None) -> List[PhoneModel]:
        params = {"brand": brand_name} if brand_name else None
        return await self.list(PHONE_MODELS, params)

    async def get(self, resource: Resource, resource_id: str) -> Any:
        envelope = await self.api.get(endpoints.resource_path(resource.path, resource_id))
        data = envelope.unwrap(f"Failed to load {resource.label}")
        try:
            return resource.model.model_validate(data)
        except ValidationError as e:
            raise ApiFailure(f"Failed to load {resource.label}", payload=data) from e

    async def create(self, resource: Resource, payload: Dict[str, Any]) -> Any:
        envelope = await self.api.post(resource.path, payload)
        data = envelope.unwrap(f"Failed to create {resource.label}")
        created = self._parse_optional(resource, data)
        logger.info(f"Created {resource.label} {getattr(created, 'id', '')}")
        await self._announce(resource, "created", getattr(created, "id", None))
        return created

    async def update(self, resource: Resource, resource_id: str, payload: Dict[str, Any]) -> Any:
        envelope = await self.api.put(endpoints.resource_path(resource.path, resource_id), payload)
        data = envelope.unwrap(f"Failed to update {resource.label}")
        logger.info(f"Updated {resource.label} {resource_id}")
        await self._announce(resource, "updated", resource_id)
        return self._parse_optional(resource, data)

    async def delete(self, resource: Resource, resource_id: str) -> None:
        envelope = await self.api.delete(endpoints.resource_path(resource.path, resource_id))
        envelope.unwrap(f"Failed to delete {resource.label}")
        logger.info(f"Deleted {resource.label} {resource_id}")
        await self._announce(resource, "deleted", resource_id)

    def _parse_many(self, resource: Resource, rows: Any) -> List[Any]:
        parsed = []
        for row in rows if isinstance(rows, list) else []:
            try:
                parsed.append(resource.model.model_validate(row))
            except ValidationError as e:
                logger.warning(f"Skipping malformed {resource.label}: {e}")
        return parsed

    def _parse_optional(self, resource: Resource, data: Any) -> Any:
        # mutations may answer with the document or with nothing useful
        if not isinstance(data, dict):
            return None
        try:
            return resource.model.model_validate(data)
        except ValidationError as e:
            logger.debug(f"Unparseable {resource.label} in mutation response: {e}")
            return None

    async def _announce(self, resource: Resource, action: str, resource_id: Optional[str]) -> None:
        if self.event_bus is not None:
            await self.event_bus.publish(
                events.TOPIC_CATALOG_CHANGED,
                events.create_catalog_changed_event(resource.key, action, resource_id),
            )
