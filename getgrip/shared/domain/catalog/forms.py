"""Add/edit form drafts and their conversion to API payloads."""

from __future__ import annotations

from typing import Any, ClassVar, Dict, List, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field

from getgrip.shared.core.exceptions import ClientValidationError
from getgrip.shared.domain.catalog.service import (
    BRANDS,
    CATEGORIES,
    PHONE_MODELS,
    PRODUCTS,
    CatalogService,
    Resource,
)
from getgrip.shared.domain.models import Brand, Category, PhoneModel, Product, ref_id


def _to_number(value: str, field: str) -> float | int:
    try:
        number = float(value)
    except (TypeError, ValueError):
        raise ClientValidationError(f"{field} must be a number", field=field) from None
    return int(number) if number.is_integer() else number


class CatalogForm(BaseModel):
    """Pending submission state of one add/edit screen."""
    model_config = ConfigDict(validate_assignment=True)

    resource: ClassVar[Resource]
    required: ClassVar[Tuple[str, ...]] = ("name",)

    def check(self) -> None:
        """Reject empty required fields before anything is sent."""
        for name in self.required:
            value = getattr(self, name)
            if value is None or (isinstance(value, str) and not value.strip()):
                label = name.replace("_", " ").capitalize()
                raise ClientValidationError(f"{label} is required", field=name)

    def to_payload(self) -> Dict[str, Any]:
        raise NotImplementedError


class ProductForm(CatalogForm):
    resource: ClassVar[Resource] = PRODUCTS
    required: ClassVar[Tuple[str, ...]] = (
        "name", "description", "price", "category", "phone_brand", "phone_model", "amazon_link",
    )

    name: str = ""
    description: str = ""
    price: str = ""
    discount_price: str = ""
    category: str = ""
    phone_brand: str = ""
    phone_model: str = ""
    amazon_link: str = ""
    images: List[str] = Field(default_factory=list)
    is_active: bool = True
    featured: bool = False

    @classmethod
    def from_resource(cls, product: Product) -> "ProductForm":
        return cls(
            name=product.name,
            description=product.description,
            price=_format_number(product.price),
            discount_price=_format_number(product.discount_price) if product.discount_price else "",
            category=ref_id(product.category),
            phone_brand=ref_id(product.phone_brand),
            phone_model=ref_id(product.phone_model),
            amazon_link=product.amazon_link,
            images=list(product.images),
            is_active=product.is_active,
            featured=product.featured,
        )

    def to_payload(self) -> Dict[str, Any]:
        payload: Dict[str, Any] = {
            "name": self.name,
            "description": self.description,
            "price": _to_number(self.price, "price"),
            "category": self.category,
            "phoneBrand": self.phone_brand,
            "phoneModel": self.phone_model,
            "amazonLink": self.amazon_link,
            "images": list(self.images),
            "isActive": self.is_active,
            "featured": self.featured,
        }
        if self.discount_price.strip():
            payload["discountPrice"] = _to_number(self.discount_price, "discount_price")
        return payload


class BrandForm(CatalogForm):
    resource: ClassVar[Resource] = BRANDS

    name: str = ""
    logo: List[str] = Field(default_factory=list)
    is_active: bool = True

    @classmethod
    def from_resource(cls, brand: Brand) -> "BrandForm":
        return cls(name=brand.name, logo=[brand.logo] if brand.logo else [], is_active=brand.is_active)

    def to_payload(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "logo": self.logo[0] if self.logo else "",
            "isActive": self.is_active,
        }


class PhoneModelForm(CatalogForm):
    resource: ClassVar[Resource] = PHONE_MODELS
    required: ClassVar[Tuple[str, ...]] = ("name", "brand")

    name: str = ""
    brand: str = ""
    image: List[str] = Field(default_factory=list)
    is_active: bool = True

    @classmethod
    def from_resource(cls, phone_model: PhoneModel) -> "PhoneModelForm":
        return cls(
            name=phone_model.name,
            brand=ref_id(phone_model.brand),
            image=[phone_model.image] if phone_model.image else [],
            is_active=phone_model.is_active,
        )

    def to_payload(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "brand": self.brand,
            "image": self.image[0] if self.image else "",
            "isActive": self.is_active,
        }


class CategoryForm(CatalogForm):
    resource: ClassVar[Resource] = CATEGORIES

    name: str = ""
    description: str = ""
    is_active: bool = True

    @classmethod
    def from_resource(cls, category: Category) -> "CategoryForm":
        return cls(name=category.name, description=category.description, is_active=category.is_active)

    def to_payload(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "description": self.description,
            "isActive": self.is_active,
        }


async def save_form(catalog: CatalogService, form: CatalogForm, resource_id: Optional[str] = None) -> Any:
    """Create (no id) or update (id) the form's resource.

    Raises:
        ClientValidationError: Before any request, for local input problems
        GripError: With the server's message or a create/update fallback
    """
    form.check()
    payload = form.to_payload()
    if resource_id:
        return await catalog.update(form.resource, resource_id, payload)
    return await catalog.create(form.resource, payload)


def _format_number(value: Optional[float]) -> str:
    if value is None:
        return ""
    return str(int(value)) if float(value).is_integer() else str(value)
