"""Main Streamlit application entry point for GetGrip Admin.

Run with: streamlit run getgrip/dashboard/app.py

This application provides a web-based interface for:
- Managing products, brands, phone models and categories
- Uploading product, logo and model images
- Tracking product clicks and site visitors
"""

import logging

import streamlit as st

from getgrip.dashboard.runtime import load_config, run_async
from getgrip.dashboard.session import Session, notice_icon
from getgrip.dashboard.views import (
    render_analytics,
    render_brands,
    render_categories,
    render_dashboard,
    render_login,
    render_phone_models,
    render_products,
    render_settings,
)

logger = logging.getLogger(__name__)

VIEWS = {
    "📊 Dashboard": ("dashboard", render_dashboard),
    "🛍️ Products": ("products", render_products),
    "🏷️ Brands": ("brands", render_brands),
    "📱 Phone Models": ("phone_models", render_phone_models),
    "🗂️ Categories": ("categories", render_categories),
    "📈 Analytics": ("analytics", render_analytics),
    "⚙️ Settings": ("settings", render_settings),
}


def main():
    """Main Streamlit application entry point."""
    config = load_config()
    st.set_page_config(
        page_title=config.ui.page_title,
        page_icon="📱",
        layout=config.ui.layout,
        initial_sidebar_state="expanded"
    )

    session = Session()
    session.initialize()

    for notice in session.pop_notices():
        st.toast(notice["message"], icon=notice_icon(notice["level"]))

    manager = session.services.session_manager
    if not manager.is_logged_in:
        render_login(session)
        return

    # Validate the stored token once per browser session
    if not st.session_state.get('profile_checked'):
        st.session_state['profile_checked'] = True
        if run_async(manager.refresh_profile()) is None:
            st.rerun()

    render_main_app(session)


def render_main_app(session: Session):
    """Render the main application interface with navigation."""
    manager = session.services.session_manager
    user = manager.user

    with st.sidebar:
        st.title("📱 GetGrip Admin")
        st.markdown("---")

        st.markdown("### 📋 Navigation")
        for page_label, (page_id, _) in VIEWS.items():
            if st.button(
                page_label,
                key=f"nav_{page_id}",
                type="primary" if session.page == page_id else "secondary",
            ):
                session.leave_page(page_id)
                st.rerun()

        st.markdown("---")
        if user is not None:
            st.markdown(f"**{user.name or 'Admin'}**")
            st.caption(user.email)
        if st.button("🚪 Logout"):
            run_async(manager.logout())
            st.session_state['profile_checked'] = False
            st.rerun()

    renderers = {page_id: render for page_id, render in VIEWS.values()}
    render = renderers.get(session.page, render_dashboard)
    try:
        render(session)
    except Exception as e:
        logger.exception(f"Error rendering page '{session.page}'")
        st.error(f"Error rendering page: {e}")
        st.markdown("**Debug Info:**")
        st.code(str(e))


if __name__ == "__main__":
    main()
