"""API paths consumed by the dashboard (relative to ``ApiConfig.base_url``)."""

from __future__ import annotations

from urllib.parse import quote

# Auth
AUTH_LOGIN = "/auth/login"
AUTH_ME = "/auth/me"

# Catalog collections
PRODUCTS = "/products"
PRODUCTS_ADMIN_STATS = "/products/admin/stats"
BRANDS = "/brands"
PHONE_MODELS = "/phone-models"
CATEGORIES = "/categories"

# Upload
UPLOAD_SINGLE = "/upload/single"

# Visitors
VISITORS_STATS = "/visitors/stats"


def resource_path(collection: str, resource_id: str) -> str:
    """``/brands`` + ``abc`` -> ``/brands/abc``."""
    return f"{collection}/{quote(resource_id, safe='')}"


def visitor_by_ip_path(ip: str) -> str:
    return f"{VISITORS_STATS}/ip/{quote(ip, safe='')}"


def file_url(uploads_base_url: str, filename: str) -> str:
    """Full public URL of a stored upload."""
    return f"{uploads_base_url.rstrip('/')}/{filename.lstrip('/')}"


def public_url(uploads_base_url: str, url: str) -> str:
    """Absolute URLs pass through; bare or relative upload paths get the uploads prefix."""
    if "://" in url:
        return url
    return file_url(uploads_base_url, url.rsplit("/", 1)[-1])
