"""Shared list + add/edit flow of the catalog pages.

Each catalog page shows a list of cards with Edit/Delete actions, or the
add/edit form when ``Session.editing`` holds a draft for its resource.
"""

import logging
from typing import Any, List, Optional

import streamlit as st

from getgrip.dashboard.components.confirm_delete import confirm_delete
from getgrip.dashboard.components.file_upload import file_upload
from getgrip.dashboard.runtime import run_async
from getgrip.dashboard.session import Session
from getgrip.shared.core.exceptions import GripError, error_message
from getgrip.shared.domain.catalog.forms import CatalogForm, save_form
from getgrip.shared.domain.catalog.service import Resource
from getgrip.shared.domain.uploads.coordinator import UploadField, UploadMode

logger = logging.getLogger(__name__)


class CatalogPage:
    """Base page; subclasses supply the card, the form type and its fields."""

    resource: Resource
    icon: str = "📁"
    form_class: type[CatalogForm]

    def __init__(self, session: Session):
        self.session = session
        self.services = session.services

    @property
    def label(self) -> str:
        return self.resource.label.title()

    def render(self):
        resource_id = self.session.editing(self.resource.key)
        if resource_id is None:
            self._render_list()
        else:
            self._render_editor(resource_id)

    # ------------------------------------------------------------------
    # List
    # ------------------------------------------------------------------

    def _render_list(self):
        col1, col2 = st.columns([4, 1])
        with col1:
            st.header(f"{self.icon} {self.label}s")
        with col2:
            if st.button(f"➕ Add {self.label}", key=f"add_{self.resource.key}", type="primary"):
                self.session.start_editing(self.resource.key)
                st.rerun()

        rows = self._load_rows()
        if not rows:
            st.info(f"No {self.resource.label}s found")
            return

        st.markdown(f"**{len(rows)} {self.resource.label}(s)**")
        for row in rows:
            with st.container(border=True):
                col1, col2 = st.columns([5, 1])
                with col1:
                    self._render_card(row)
                with col2:
                    if st.button("✏️ Edit", key=f"edit_{row.id}"):
                        self.session.start_editing(self.resource.key, row.id)
                        st.rerun()
                    if st.button("🗑️ Delete", key=f"delete_{row.id}"):
                        self.session.pending_delete = (self.resource.key, row.id)
                        st.rerun()
                confirm_delete(self.session, self.resource, row.id, row.name)

    def _load_rows(self) -> List[Any]:
        try:
            return run_async(self.services.catalog.list(self.resource))
        except GripError as e:
            logger.error(f"Error fetching {self.resource.label}s: {e}")
            st.error(error_message(e, f"Failed to load {self.resource.label}s"))
            return []

    def _render_card(self, row: Any):
        st.markdown(f"**{row.name}**")
        self._render_status(row.is_active)

    def _render_status(self, is_active: bool):
        st.markdown("🟢 Active" if is_active else "🔴 Inactive")

    # ------------------------------------------------------------------
    # Add / edit
    # ------------------------------------------------------------------

    def _render_editor(self, resource_id: str):
        is_edit = bool(resource_id)
        st.header(f"{self.icon} {'Edit' if is_edit else 'Add'} {self.label}")
        if st.button(f"← Back to {self.label}s", key=f"back_{self.resource.key}"):
            self.session.stop_editing(self.resource.key)
            st.rerun()

        form = self._get_draft(resource_id)
        if form is None:
            return

        prefix = f"{self.resource.key}_{resource_id or 'new'}"
        self._render_fields(form, prefix)

        action = "update" if is_edit else "create"
        if st.button(f"{action.capitalize()} {self.label}", key=f"{prefix}_save", type="primary"):
            self._collect(form)
            try:
                run_async(save_form(self.services.catalog, form, resource_id or None))
            except GripError as e:
                st.error(error_message(e, f"Failed to {action} {self.resource.label}"))
                return
            self.session.stop_editing(self.resource.key)
            st.rerun()

    def _get_draft(self, resource_id: str) -> Optional[CatalogForm]:
        drafts = st.session_state['drafts']
        if self.resource.key in drafts:
            return drafts[self.resource.key]

        if resource_id:
            try:
                row = run_async(self.services.catalog.get(self.resource, resource_id))
            except GripError as e:
                logger.error(f"Error fetching {self.resource.label} {resource_id}: {e}")
                st.error(error_message(e, f"Failed to load {self.resource.label}"))
                return None
            form = self.form_class.from_resource(row)
        else:
            form = self.form_class()

        self._prepare(form)
        return self.session.draft(self.resource.key, lambda: form)

    def _prepare(self, form: CatalogForm):
        """Hook run once when a draft is created."""

    def _render_fields(self, form: CatalogForm, prefix: str):
        raise NotImplementedError

    def _collect(self, form: CatalogForm):
        """Copy state held outside the widgets (uploads) into the form."""

    def _upload_field(self, name: str, mode: UploadMode, urls: List[str]) -> UploadField:
        return self.session.upload_field(
            f"{self.resource.key}.{name}",
            lambda: self.services.upload_field(name, mode, urls),
        )

    def _render_upload(self, field: UploadField, label: str, prefix: str):
        config = self.services.config
        file_upload(
            field,
            label,
            key=f"{prefix}_{field.name}",
            accept=config.upload.accept,
            uploads_base_url=config.api.uploads_base_url,
        )
