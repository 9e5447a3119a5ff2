"""Brands page - phone brands with their logos."""

import streamlit as st

from getgrip.dashboard.session import Session
from getgrip.dashboard.views.catalog_page import CatalogPage
from getgrip.shared.domain.catalog.forms import BrandForm
from getgrip.shared.domain.catalog.service import BRANDS
from getgrip.shared.domain.models import Brand
from getgrip.shared.domain.uploads.coordinator import UploadMode
from getgrip.shared.infrastructure.api.endpoints import public_url


class BrandsPage(CatalogPage):
    resource = BRANDS
    icon = "🏷️"
    form_class = BrandForm

    def _render_card(self, row: Brand):
        col1, col2 = st.columns([1, 4])
        with col1:
            if row.logo:
                st.image(public_url(self.services.config.api.uploads_base_url, row.logo), width=64)
        with col2:
            st.markdown(f"**{row.name}**")
            self._render_status(row.is_active)

    def _render_fields(self, form: BrandForm, prefix: str):
        form.name = st.text_input("Brand Name *", value=form.name, placeholder="Apple", key=f"{prefix}_name")
        self._render_upload(self._upload_field("logo", UploadMode.SINGLE, form.logo), "Brand Logo", prefix)
        form.is_active = st.checkbox("Active", value=form.is_active, key=f"{prefix}_active")

    def _collect(self, form: BrandForm):
        form.logo = self._upload_field("logo", UploadMode.SINGLE, form.logo).urls


def render_brands(session: Session):
    """Render the brands page."""
    BrandsPage(session).render()
