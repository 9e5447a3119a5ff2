"""Settings page - stored profile and session controls."""

import streamlit as st

from getgrip.dashboard.runtime import run_async
from getgrip.dashboard.session import Session


def render_settings(session: Session):
    st.header("⚙️ Settings")

    user = session.services.session_manager.user
    st.subheader("Account Information")
    col1, col2, col3 = st.columns(3)
    with col1:
        st.markdown("Name")
        st.markdown(f"**{user.name if user and user.name else 'Admin'}**")
    with col2:
        st.markdown("Email")
        st.markdown(f"**{user.email if user and user.email else '-'}**")
    with col3:
        st.markdown("Role")
        st.markdown(f"**{(user.role if user else 'admin').capitalize()}**")

    if st.button("🔄 Refresh Profile"):
        if run_async(session.services.session_manager.refresh_profile()) is None:
            st.rerun()
        st.success("Profile refreshed")

    st.markdown("---")
    st.subheader("About GetGrip Admin")
    config = session.services.config
    st.markdown("""
    This admin panel allows you to manage phone cover products.

    Products are linked to Amazon for purchases: when users click "Buy Now", they are redirected to Amazon.
    You can track clicks and see which products are performing best in the Analytics section.
    """)
    st.caption(f"API: `{config.api.base_url}` | Uploads: `{config.api.uploads_base_url}`")
