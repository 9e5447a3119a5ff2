"""Analytics page - product clicks and site visitors.

The visitor section nests two paginations: the list of unique visitors and,
for the expanded visitor, that visitor's visit history.
"""

import logging
from typing import Optional

import pandas as pd
import plotly.express as px
import streamlit as st

from getgrip.dashboard.components.pagination_bar import pagination_bar
from getgrip.dashboard.runtime import run_async
from getgrip.dashboard.session import Session
from getgrip.shared.core.exceptions import GripError
from getgrip.shared.domain.analytics.explorer import VisitorExplorer, format_timestamp, truncate_user_agent
from getgrip.shared.domain.models import ProductStats, UniqueVisitor, VisitorStats

logger = logging.getLogger(__name__)


class AnalyticsPage:
    """Analytics page implementation."""

    def __init__(self, session: Session):
        self.session = session
        self.explorer: VisitorExplorer = session.visitor_explorer()

    def render(self):
        st.header("📈 Analytics")

        stats = self._load_product_stats()
        if stats is not None:
            self._render_product_stats(stats)

        if self.explorer.stats is None:
            run_async(self.explorer.load_visitors())
        visitor_stats = self.explorer.stats
        if visitor_stats is None:
            st.info("Visitor statistics are unavailable right now.")
            return

        st.markdown("---")
        col1, col2 = st.columns([4, 1])
        with col1:
            st.subheader("🌐 Site Visitors")
        with col2:
            if st.button("🔄 Refresh", key="refresh_visitors"):
                run_async(self.explorer.load_visitors())
                st.rerun()

        self._render_visitor_metrics(visitor_stats)
        self._render_visits_chart(visitor_stats)
        self._render_visitor_list(visitor_stats)

    def _load_product_stats(self) -> Optional[ProductStats]:
        try:
            return run_async(self.session.services.analytics.product_stats())
        except GripError as e:
            logger.error(f"Error fetching product stats: {e}")
            return None

    def _render_product_stats(self, stats: ProductStats):
        col1, col2, col3, col4 = st.columns(4)
        with col1:
            st.metric("📦 Total Products", stats.total_products)
        with col2:
            st.metric("👆 Total Clicks", stats.total_clicks)
        with col3:
            st.metric("✅ Active Products", stats.active_products)
        with col4:
            st.metric("⭐ Featured", stats.featured_products)

        st.subheader("🔥 Top Products by Clicks")
        if not stats.top_products:
            st.info("No click data yet.")
            return
        df = pd.DataFrame([
            {"Product": p.name, "Clicks": p.click_count, "Amazon": p.amazon_link}
            for p in stats.top_products
        ])
        st.dataframe(
            df,
            hide_index=True,
            width='stretch',
            column_config={"Amazon": st.column_config.LinkColumn("Amazon", display_text="View on Amazon")},
        )

    def _render_visitor_metrics(self, stats: VisitorStats):
        col1, col2, col3 = st.columns(3)
        with col1:
            st.metric("👁️ Total Visits", stats.total_visits)
        with col2:
            st.metric("👥 Unique Visitors", stats.unique_visitors)
        with col3:
            st.metric("📅 Today's Visits", stats.today_visits)

    def _render_visits_chart(self, stats: VisitorStats):
        if not stats.visits_per_day:
            return
        fig = px.bar(
            x=[day.date for day in stats.visits_per_day],
            y=[day.count for day in stats.visits_per_day],
            labels={'x': 'Date', 'y': 'Visits'},
            title="Visits per Day",
        )
        fig.update_layout(height=320)
        st.plotly_chart(fig, width='stretch')

    def _render_visitor_list(self, stats: VisitorStats):
        visitors = self.explorer.visitors
        st.markdown(
            f"**Unique Visitors**: Page {visitors.page} of {max(visitors.total_pages, 1)} "
            f"({visitors.total_items} visitors)"
        )

        if not stats.recent_visitors:
            st.info("No visitors recorded yet.")
            return

        for visitor in stats.recent_visitors:
            self._render_visitor_row(visitor)

        requested = pagination_bar(visitors, key="visitors")
        if requested is not None and run_async(self.explorer.change_page(requested)):
            st.rerun()

    def _render_visitor_row(self, visitor: UniqueVisitor):
        expanded = self.explorer.selected_ip == visitor.ip
        with st.container(border=True):
            col1, col2, col3 = st.columns([2, 1, 3])
            with col1:
                label = f"{'▼' if expanded else '▶'} {visitor.ip}"
                if st.button(label, key=f"visitor_{visitor.ip}"):
                    run_async(self.explorer.toggle_visitor(visitor.ip))
                    st.rerun()
            with col2:
                st.markdown(f"**{visitor.total_visits}** visits")
            with col3:
                st.caption(f"Last visit: {format_timestamp(visitor.last_visit)} | {visitor.last_page or '/'}")
                if visitor.last_user_agent:
                    st.caption(truncate_user_agent(visitor.last_user_agent))

            if expanded:
                self._render_visitor_detail()

    def _render_visitor_detail(self):
        detail = self.explorer.detail
        if detail is None:
            st.info("Loading visit history..." if self.explorer.detail_loading else "Visit history unavailable.")
            return

        history = self.explorer.history
        st.caption(
            f"First visit: {format_timestamp(detail.first_visit)} | "
            f"Showing {len(detail.visits)} of {history.total_items} visits"
        )
        if detail.visits:
            df = pd.DataFrame([
                {
                    "Time": format_timestamp(visit.created_at),
                    "Page": visit.page,
                    "Referrer": visit.referrer or "-",
                    "User Agent": truncate_user_agent(visit.user_agent),
                }
                for visit in detail.visits
            ])
            st.dataframe(df, hide_index=True, width='stretch')

        requested = pagination_bar(history, key=f"history_{detail.ip}")
        if requested is not None and run_async(self.explorer.change_detail_page(requested)):
            st.rerun()


def render_analytics(session: Session):
    """Render the analytics page."""
    page = AnalyticsPage(session)
    page.render()
