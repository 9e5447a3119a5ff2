"""Phone Models page - models grouped under a brand."""

import logging
from typing import List

import streamlit as st

from getgrip.dashboard.runtime import run_async
from getgrip.dashboard.session import Session
from getgrip.dashboard.views.catalog_page import CatalogPage
from getgrip.shared.core.exceptions import GripError
from getgrip.shared.domain.catalog.forms import PhoneModelForm
from getgrip.shared.domain.catalog.service import BRANDS, PHONE_MODELS
from getgrip.shared.domain.models import Brand, PhoneModel, ref_name
from getgrip.shared.domain.uploads.coordinator import UploadMode
from getgrip.shared.infrastructure.api.endpoints import public_url

logger = logging.getLogger(__name__)


class PhoneModelsPage(CatalogPage):
    resource = PHONE_MODELS
    icon = "📱"
    form_class = PhoneModelForm

    def _render_card(self, row: PhoneModel):
        col1, col2 = st.columns([1, 4])
        with col1:
            if row.image:
                st.image(public_url(self.services.config.api.uploads_base_url, row.image), width=64)
        with col2:
            st.markdown(f"**{row.name}**")
            st.caption(f"Brand: {ref_name(row.brand)}")
            self._render_status(row.is_active)

    def _prepare(self, form: PhoneModelForm):
        try:
            brands = run_async(self.services.catalog.list_active(BRANDS))
        except GripError as e:
            logger.error(f"Error fetching brands: {e}")
            brands = []
        st.session_state[f"{self.resource.key}_brand_options"] = brands

    def _render_fields(self, form: PhoneModelForm, prefix: str):
        brands: List[Brand] = st.session_state.get(f"{self.resource.key}_brand_options", [])
        names = {b.id: b.name for b in brands}
        options = [""] + [b.id for b in brands]

        form.name = st.text_input("Model Name *", value=form.name, placeholder="iPhone 15 Pro", key=f"{prefix}_name")
        form.brand = st.selectbox(
            "Brand *",
            options,
            index=options.index(form.brand) if form.brand in options else 0,
            format_func=lambda brand_id: names.get(brand_id, "Select a brand"),
            key=f"{prefix}_brand",
        )
        self._render_upload(self._upload_field("image", UploadMode.SINGLE, form.image), "Model Image", prefix)
        form.is_active = st.checkbox("Active", value=form.is_active, key=f"{prefix}_active")

    def _collect(self, form: PhoneModelForm):
        form.image = self._upload_field("image", UploadMode.SINGLE, form.image).urls


def render_phone_models(session: Session):
    """Render the phone models page."""
    PhoneModelsPage(session).render()
