"""Products page - catalog cards and the product form.

The form's brand and model selects are driven by the cascading filter so a
model that does not belong to the chosen brand can never be submitted.
"""

import logging
from typing import List

import streamlit as st

from getgrip.dashboard.runtime import run_async
from getgrip.dashboard.session import Session
from getgrip.dashboard.views.catalog_page import CatalogPage
from getgrip.shared.core.exceptions import GripError
from getgrip.shared.domain.catalog.forms import ProductForm
from getgrip.shared.domain.catalog.service import CATEGORIES, PRODUCTS
from getgrip.shared.domain.models import Category, Product, ref_name
from getgrip.shared.domain.uploads.coordinator import UploadMode

logger = logging.getLogger(__name__)


class ProductsPage(CatalogPage):
    resource = PRODUCTS
    icon = "🛍️"
    form_class = ProductForm

    def _render_card(self, row: Product):
        st.markdown(f"**{row.name}**")
        price = f"₹{row.discount_price or row.price:g}"
        if row.discount_price:
            price += f" ~~₹{row.price:g}~~"
        col1, col2, col3 = st.columns(3)
        with col1:
            st.markdown(f"Price: {price}")
            st.markdown(f"Clicks: {row.click_count}")
        with col2:
            st.markdown(f"Brand: {ref_name(row.phone_brand)}")
            st.markdown(f"Model: {ref_name(row.phone_model)}")
        with col3:
            st.markdown(f"Category: {ref_name(row.category)}")
            self._render_status(row.is_active)
        if row.amazon_link:
            st.markdown(f"[🔗 View on Amazon]({row.amazon_link})")

    def _prepare(self, form: ProductForm):
        cascade = self.session.cascade()
        run_async(cascade.load_brands())
        run_async(cascade.restore(form.phone_brand, form.phone_model))
        form.phone_brand = cascade.brand_id
        form.phone_model = cascade.model_id

        try:
            categories = run_async(self.services.catalog.list_active(CATEGORIES))
        except GripError as e:
            logger.error(f"Error fetching categories: {e}")
            categories = []
        st.session_state[f"{self.resource.key}_category_options"] = categories

    def _render_fields(self, form: ProductForm, prefix: str):
        form.name = st.text_input(
            "Product Name *", value=form.name, placeholder="iPhone 15 Pro Clear Case", key=f"{prefix}_name"
        )
        form.description = st.text_area(
            "Description *", value=form.description, placeholder="Product description...", key=f"{prefix}_description"
        )

        col1, col2 = st.columns(2)
        with col1:
            form.price = st.text_input("Price (₹) *", value=form.price, placeholder="499", key=f"{prefix}_price")
        with col2:
            form.discount_price = st.text_input(
                "Discount Price (₹)", value=form.discount_price, placeholder="399", key=f"{prefix}_discount"
            )

        self._render_brand_and_model(form, prefix)
        self._render_category(form, prefix)

        form.amazon_link = st.text_input(
            "Amazon Link *", value=form.amazon_link, placeholder="https://amazon.in/dp/...", key=f"{prefix}_amazon"
        )
        self._render_upload(self._upload_field("images", UploadMode.MULTIPLE, form.images), "Product Images", prefix)

        col1, col2 = st.columns(2)
        with col1:
            form.is_active = st.checkbox("Active", value=form.is_active, key=f"{prefix}_active")
        with col2:
            form.featured = st.checkbox("Featured", value=form.featured, key=f"{prefix}_featured")

    def _render_brand_and_model(self, form: ProductForm, prefix: str):
        cascade = self.session.cascade()
        brand_names = {b.id: b.name for b in cascade.brands}
        brand_options = [""] + [b.id for b in cascade.brands]

        col1, col2 = st.columns(2)
        with col1:
            brand_id = st.selectbox(
                "Phone Brand *",
                brand_options,
                index=brand_options.index(cascade.brand_id) if cascade.brand_id in brand_options else 0,
                format_func=lambda i: brand_names.get(i, "Select a brand"),
                key=f"{prefix}_brand",
            )
            if brand_id != cascade.brand_id:
                run_async(cascade.select_brand(brand_id))

        model_names = {m.id: m.name for m in cascade.models}
        model_options = [""] + [m.id for m in cascade.models]
        placeholder = "Select a model" if cascade.brand_id else "Select brand first"
        with col2:
            model_id = st.selectbox(
                "Phone Model *",
                model_options,
                index=model_options.index(cascade.model_id) if cascade.model_id in model_options else 0,
                format_func=lambda i: model_names.get(i, placeholder),
                # options change with the brand
                key=f"{prefix}_model_{cascade.brand_id or 'none'}",
                disabled=not cascade.brand_id,
            )
            cascade.select_model(model_id)

        form.phone_brand = cascade.brand_id
        form.phone_model = cascade.model_id

    def _render_category(self, form: ProductForm, prefix: str):
        categories: List[Category] = st.session_state.get(f"{self.resource.key}_category_options", [])
        names = {c.id: c.name for c in categories}
        options = [""] + [c.id for c in categories]
        form.category = st.selectbox(
            "Category *",
            options,
            index=options.index(form.category) if form.category in options else 0,
            format_func=lambda i: names.get(i, "Select a category"),
            key=f"{prefix}_category",
        )

    def _collect(self, form: ProductForm):
        form.images = self._upload_field("images", UploadMode.MULTIPLE, form.images).urls


def render_products(session: Session):
    """Render the products page."""
    ProductsPage(session).render()
