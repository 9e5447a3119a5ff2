"""Catalog CRUD, form drafts and the brand -> model cascade."""

from .service import BRANDS, CATEGORIES, PHONE_MODELS, PRODUCTS, RESOURCES, CatalogService, Resource
from .cascade import CascadingModelFilter
from .forms import BrandForm, CategoryForm, PhoneModelForm, ProductForm, save_form

__all__ = [
    "BRANDS",
    "CATEGORIES",
    "PHONE_MODELS",
    "PRODUCTS",
    "RESOURCES",
    "CatalogService",
    "Resource",
    "CascadingModelFilter",
    "BrandForm",
    "CategoryForm",
    "PhoneModelForm",
    "ProductForm",
    "save_form",
]
