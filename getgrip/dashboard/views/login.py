"""Login gate shown while no session is stored."""

import streamlit as st

from getgrip.dashboard.runtime import run_async
from getgrip.dashboard.session import Session
from getgrip.shared.core.exceptions import GripError, error_message


def render_login(session: Session):
    """Render the login form; a successful login reruns into the dashboard."""
    manager = session.services.session_manager

    _, center, _ = st.columns([1, 2, 1])
    with center:
        st.title("📱 GetGrip Admin")
        st.markdown("Login to manage products, brands and analytics.")

        with st.form("login_form"):
            email = st.text_input("Email", placeholder="admin@getgrip.com")
            password = st.text_input("Password", type="password")
            submitted = st.form_submit_button("Login", type="primary", disabled=manager.is_loading)

        if submitted:
            if not email or not password:
                st.error("Email and password are required")
                return
            try:
                with st.spinner("Logging in..."):
                    run_async(manager.login(email, password))
            except GripError as e:
                st.error(error_message(e, "Login failed"))
                return
            st.rerun()
