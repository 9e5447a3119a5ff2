"""Dashboard page - catalog totals, top and recent products."""

import logging

import pandas as pd
import streamlit as st

from getgrip.dashboard.runtime import run_async
from getgrip.dashboard.session import Session
from getgrip.shared.core.exceptions import GripError
from getgrip.shared.domain.analytics.service import DashboardSummary
from getgrip.shared.domain.models import Product, ref_name

logger = logging.getLogger(__name__)


class OverviewPage:
    """Dashboard page implementation."""

    def __init__(self, session: Session):
        self.session = session

    def render(self):
        st.header("📊 Dashboard")

        services = self.session.services
        try:
            summary = run_async(services.analytics.dashboard_summary(services.config.ui.recent_products))
        except GripError as e:
            logger.error(f"Error fetching dashboard data: {e}")
            summary = DashboardSummary()

        self._render_metrics(summary)

        col1, col2 = st.columns(2)
        with col1:
            st.subheader("🔥 Top Products")
            self._render_table(summary.top_products, "No clicks recorded yet")
        with col2:
            st.subheader("🆕 Recent Products")
            self._render_table(summary.recent_products, "No products yet")

    def _render_metrics(self, summary: DashboardSummary):
        col1, col2, col3, col4 = st.columns(4)
        with col1:
            st.metric("📦 Total Products", summary.total_products)
        with col2:
            st.metric("👆 Total Clicks", summary.total_clicks)
        with col3:
            st.metric("✅ Active Products", summary.active_products)
        with col4:
            st.metric("⭐ Featured", summary.featured_products)

    def _render_table(self, products: list[Product], empty_text: str):
        if not products:
            st.info(empty_text)
            return
        df = pd.DataFrame([
            {
                "Name": p.name,
                "Brand": ref_name(p.phone_brand),
                "Price": p.discount_price or p.price,
                "Clicks": p.click_count,
            }
            for p in products
        ])
        st.dataframe(df, hide_index=True, width='stretch')


def render_dashboard(session: Session):
    """Render the dashboard page."""
    page = OverviewPage(session)
    page.render()
