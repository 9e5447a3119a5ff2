"""Two-step delete confirmation shared by the list views."""

import logging

import streamlit as st

from getgrip.dashboard.runtime import run_async
from getgrip.dashboard.session import Session
from getgrip.shared.core.exceptions import GripError, error_message
from getgrip.shared.domain.catalog.service import Resource

logger = logging.getLogger(__name__)


def confirm_delete(session: Session, resource: Resource, resource_id: str, name: str) -> None:
    """Ask before deleting; only one row can be pending at a time."""
    if session.pending_delete != (resource.key, resource_id):
        return

    st.warning(f"Are you sure you want to delete this {resource.label} (**{name}**)?")
    col1, col2 = st.columns(2)
    with col1:
        if st.button("🗑️ Delete", key=f"confirm_delete_{resource_id}", type="primary"):
            try:
                run_async(session.services.catalog.delete(resource, resource_id))
            except GripError as e:
                logger.error(f"Error deleting {resource.label} {resource_id}: {e}")
                st.error(error_message(e, f"Failed to delete {resource.label}"))
                return
            session.pending_delete = None
            st.rerun()
    with col2:
        if st.button("Cancel", key=f"cancel_delete_{resource_id}"):
            session.pending_delete = None
            st.rerun()
