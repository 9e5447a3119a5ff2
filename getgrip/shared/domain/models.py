"""Typed views of the API payloads.

The backend speaks camelCase with Mongo-style ``_id`` keys; these models
accept that shape and expose snake_case attributes.
"""

from __future__ import annotations

from typing import Any, Dict, List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel


class ApiModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="ignore")


# ============================================================================
# References: a related document is either a bare id or the populated object
# ============================================================================


class RefId(ApiModel):
    """A relation the API returned as a bare identifier."""
    kind: Literal["id"] = "id"
    id: str


class Populated(ApiModel):
    """A relation the API expanded into the related document."""
    kind: Literal["populated"] = "populated"
    id: str
    name: Optional[str] = None
    attrs: Dict[str, Any] = Field(default_factory=dict)


Ref = Union[RefId, Populated]


def normalize_ref(value: Any) -> Optional[Ref]:
    """Turn an API relation field into a Ref.

    Accepts ``None``/``""`` (no relation), an id string, a populated dict
    carrying ``_id`` (or ``id``), or an existing Ref.
    """
    if value is None or value == "":
        return None
    if isinstance(value, (RefId, Populated)):
        return value
    if isinstance(value, str):
        return RefId(id=value)
    if isinstance(value, dict):
        ref_id = value.get("_id") or value.get("id")
        if not ref_id:
            raise ValueError(f"Populated reference without an id: {value!r}")
        attrs = {k: v for k, v in value.items() if k not in ("_id", "id", "name")}
        return Populated(id=str(ref_id), name=value.get("name"), attrs=attrs)
    raise ValueError(f"Unsupported reference value: {value!r}")


def ref_id(ref: Optional[Ref]) -> str:
    """Identifier of a reference, ``""`` when unset."""
    return ref.id if ref is not None else ""


def ref_name(ref: Optional[Ref], default: str = "N/A") -> str:
    if isinstance(ref, Populated) and ref.name:
        return ref.name
    return default


# ============================================================================
# Catalog
# ============================================================================


class User(ApiModel):
    id: str = Field(default="", alias="_id")
    name: str = ""
    email: str = ""
    role: str = "admin"

    @property
    def is_admin(self) -> bool:
        return self.role == "admin"


class Brand(ApiModel):
    id: str = Field(alias="_id")
    name: str
    logo: str = ""
    is_active: bool = True


class Category(ApiModel):
    id: str = Field(alias="_id")
    name: str
    description: str = ""
    is_active: bool = True


class PhoneModel(ApiModel):
    id: str = Field(alias="_id")
    name: str
    brand: Optional[Ref] = None
    image: str = ""
    is_active: bool = True

    @field_validator("brand", mode="before")
    @classmethod
    def _normalize_brand(cls, value: Any) -> Optional[Ref]:
        return normalize_ref(value)


class Product(ApiModel):
    id: str = Field(alias="_id")
    name: str
    description: str = ""
    price: float = 0
    discount_price: Optional[float] = None
    category: Optional[Ref] = None
    phone_brand: Optional[Ref] = None
    phone_model: Optional[Ref] = None
    amazon_link: str = ""
    images: List[str] = Field(default_factory=list)
    is_active: bool = True
    featured: bool = False
    click_count: int = 0
    created_at: Optional[str] = None

    @field_validator("category", "phone_brand", "phone_model", mode="before")
    @classmethod
    def _normalize_refs(cls, value: Any) -> Optional[Ref]:
        return normalize_ref(value)


# ============================================================================
# Analytics
# ============================================================================


class PaginationInfo(ApiModel):
    page: int = 1
    limit: int = 10
    total: int = 0
    pages: int = 0


class TopProduct(ApiModel):
    name: str
    click_count: int = 0
    amazon_link: str = ""


class ProductStats(ApiModel):
    total_products: int = 0
    active_products: int = 0
    featured_products: int = 0
    total_clicks: int = 0
    top_products: List[TopProduct] = Field(default_factory=list)


class UniqueVisitor(ApiModel):
    ip: str
    total_visits: int = 0
    last_visit: str = ""
    first_visit: str = ""
    last_page: str = ""
    last_user_agent: str = ""


class DailyVisits(ApiModel):
    date: str = Field(alias="_id")
    count: int = 0


class VisitorStats(ApiModel):
    total_visits: int = 0
    unique_visitors: int = 0
    today_visits: int = 0
    visits_per_day: List[DailyVisits] = Field(default_factory=list)
    recent_visitors: List[UniqueVisitor] = Field(default_factory=list)
    pagination: Optional[PaginationInfo] = None


class Visit(ApiModel):
    id: str = Field(alias="_id")
    page: str = ""
    referrer: str = ""
    user_agent: str = ""
    created_at: str = ""


class VisitorDetail(ApiModel):
    ip: str
    total_visits: int = 0
    first_visit: str = ""
    last_visit: str = ""
    visits: List[Visit] = Field(default_factory=list)
    pagination: Optional[PaginationInfo] = None
