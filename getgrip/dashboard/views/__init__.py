"""Views package - Streamlit page implementations for the dashboard.

Each page follows the same pattern: a render function that takes a Session
object and renders the UI.
"""

from .login import render_login
from .overview import render_dashboard
from .products import render_products
from .brands import render_brands
from .phone_models import render_phone_models
from .categories import render_categories
from .analytics import render_analytics
from .settings import render_settings

__all__ = [
    'render_login',
    'render_dashboard',
    'render_products',
    'render_brands',
    'render_phone_models',
    'render_categories',
    'render_analytics',
    'render_settings',
]
