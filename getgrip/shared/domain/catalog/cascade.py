"""Brand -> phone model dependency of the product form."""

from __future__ import annotations

import logging
from typing import List, Optional

from getgrip.shared.core.exceptions import GripError
from getgrip.shared.domain.catalog.service import BRANDS, CatalogService
from getgrip.shared.domain.models import Brand, PhoneModel

logger = logging.getLogger(__name__)


class CascadingModelFilter:
    """Keeps the selected phone model valid for the selected brand.

    Whenever the brand changes, the model options are re-fetched for that
    brand (by name) and a model that is not among them is deselected. An
    empty brand or a failed fetch leaves no options and no model, so an
    invalid (brand, model) pair can never be submitted.
    """

    def __init__(self, catalog: CatalogService):
        self.catalog = catalog
        self.brands: List[Brand] = []
        self.brand_id = ""
        self.models: List[PhoneModel] = []
        self.model_id = ""
        self._generation = 0

    async def load_brands(self) -> List[Brand]:
        """Load active brands as parent options; failures leave the list empty."""
        try:
            self.brands = await self.catalog.list_active(BRANDS)
        except GripError as e:
            logger.error(f"Error fetching brands: {e}")
            self.brands = []
        return self.brands

    def brand(self, brand_id: str) -> Optional[Brand]:
        return next((b for b in self.brands if b.id == brand_id), None)

    async def select_brand(self, brand_id: str) -> List[PhoneModel]:
        """Change the parent selection and refresh the model options."""
        self._generation += 1
        generation = self._generation
        self.brand_id = brand_id or ""
        self.models = []

        if not self.brand_id:
            self.model_id = ""
            return self.models

        brand = self.brand(self.brand_id)
        if brand is None:
            logger.warning(f"Brand {self.brand_id} is not among the loaded brands")
            self.model_id = ""
            return self.models

        try:
            models = [m for m in await self.catalog.list_phone_models(brand.name) if m.is_active]
        except GripError as e:
            if generation == self._generation:
                logger.error(f"Error fetching phone models for brand {brand.name}: {e}")
                self.models = []
                self.model_id = ""
            return self.models

        if generation != self._generation:
            # a newer brand selection owns the options now
            logger.debug(f"Discarding stale phone models for brand {brand.name}")
            return self.models

        self.models = models
        if not any(m.id == self.model_id for m in models):
            self.model_id = ""
        return self.models

    def select_model(self, model_id: str) -> None:
        """Pick a model from the current options (``""`` clears)."""
        if model_id and not any(m.id == model_id for m in self.models):
            raise ValueError(f"Phone model {model_id} is not available for the selected brand")
        self.model_id = model_id or ""

    async def restore(self, brand_id: str, model_id: str) -> None:
        """Load a saved (brand, model) pair, as when editing a product."""
        self.model_id = model_id or ""
        await self.select_brand(brand_id)
