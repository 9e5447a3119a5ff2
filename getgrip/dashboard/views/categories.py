"""Categories page."""

import streamlit as st

from getgrip.dashboard.session import Session
from getgrip.dashboard.views.catalog_page import CatalogPage
from getgrip.shared.domain.catalog.forms import CategoryForm
from getgrip.shared.domain.catalog.service import CATEGORIES
from getgrip.shared.domain.models import Category


class CategoriesPage(CatalogPage):
    resource = CATEGORIES
    icon = "🗂️"
    form_class = CategoryForm

    def _render_card(self, row: Category):
        st.markdown(f"**{row.name}**")
        if row.description:
            st.caption(row.description)
        self._render_status(row.is_active)

    def _render_fields(self, form: CategoryForm, prefix: str):
        form.name = st.text_input(
            "Category Name *", value=form.name, placeholder="Clear Cases", key=f"{prefix}_name"
        )
        form.description = st.text_area(
            "Description", value=form.description, placeholder="Category description...", key=f"{prefix}_description"
        )
        form.is_active = st.checkbox("Active", value=form.is_active, key=f"{prefix}_active")


def render_categories(session: Session):
    """Render the categories page."""
    CategoriesPage(session).render()
