"""Session state management wrapper for the Streamlit dashboard.

Provides typed access to st.session_state and centralized initialization of
the per-browser services and view state (form drafts, upload fields, the
brand -> model cascade and the visitor explorer).
"""

from typing import Callable, Dict, List, Optional, Tuple

import streamlit as st

from getgrip.dashboard.runtime import Services, build_services, load_config
from getgrip.shared.core import events
from getgrip.shared.core.event_bus import EventPayload
from getgrip.shared.domain.analytics.explorer import VisitorExplorer
from getgrip.shared.domain.catalog.cascade import CascadingModelFilter
from getgrip.shared.domain.catalog.forms import CatalogForm
from getgrip.shared.domain.catalog.service import RESOURCES
from getgrip.shared.domain.uploads.coordinator import UploadField


class Session:
    """Wrapper around st.session_state for type safety and centralized management."""

    @property
    def services(self) -> Services:
        """Services bound to this browser session."""
        return st.session_state['services']

    @property
    def page(self) -> str:
        """Get current navigation page."""
        return st.session_state.get('page', 'dashboard')

    @page.setter
    def page(self, value: str):
        st.session_state['page'] = value

    @property
    def pending_delete(self) -> Optional[Tuple[str, str]]:
        """(resource key, id) awaiting delete confirmation."""
        return st.session_state.get('pending_delete')

    @pending_delete.setter
    def pending_delete(self, value: Optional[Tuple[str, str]]):
        st.session_state['pending_delete'] = value

    def editing(self, resource_key: str) -> Optional[str]:
        """``None`` shows the list, ``""`` a new draft, an id an edit draft."""
        return st.session_state['editing'].get(resource_key)

    def start_editing(self, resource_key: str, resource_id: str = ""):
        self.discard_draft(resource_key)
        st.session_state['editing'][resource_key] = resource_id

    def stop_editing(self, resource_key: str):
        self.discard_draft(resource_key)
        st.session_state['editing'][resource_key] = None

    def draft(self, resource_key: str, factory: Callable[[], CatalogForm]) -> CatalogForm:
        drafts: Dict[str, CatalogForm] = st.session_state['drafts']
        if resource_key not in drafts:
            drafts[resource_key] = factory()
        return drafts[resource_key]

    def upload_field(self, key: str, factory: Callable[[], UploadField]) -> UploadField:
        fields: Dict[str, UploadField] = st.session_state['upload_fields']
        if key not in fields:
            fields[key] = factory()
        return fields[key]

    def cascade(self) -> CascadingModelFilter:
        if st.session_state.get('cascade') is None:
            st.session_state['cascade'] = self.services.cascade()
        return st.session_state['cascade']

    def visitor_explorer(self) -> VisitorExplorer:
        if st.session_state.get('visitor_explorer') is None:
            st.session_state['visitor_explorer'] = self.services.visitor_explorer()
        return st.session_state['visitor_explorer']

    def discard_draft(self, resource_key: str):
        """Drop a form draft together with its upload fields and cascade."""
        st.session_state['drafts'].pop(resource_key, None)
        fields: Dict[str, UploadField] = st.session_state['upload_fields']
        for key in [k for k in fields if k.startswith(f"{resource_key}.")]:
            fields.pop(key).coordinator.close()
        if resource_key == 'products':
            st.session_state['cascade'] = None

    def add_notice(self, payload: EventPayload):
        st.session_state['notices'].append(payload)

    def pop_notices(self) -> List[EventPayload]:
        notices = st.session_state['notices']
        st.session_state['notices'] = []
        return notices

    def initialize(self):
        """Initialize session with default values."""
        if 'initialized' not in st.session_state:
            st.session_state['initialized'] = True
            st.session_state['page'] = 'dashboard'
            st.session_state['notices'] = []
            self._reset_view_state()
            services = build_services(load_config())
            st.session_state['services'] = services
            self._subscribe(services)

    def leave_page(self, page: str):
        """Navigate away, closing whatever the current page owns."""
        if page != 'analytics' and st.session_state.get('visitor_explorer') is not None:
            st.session_state['visitor_explorer'].reset()
        self.page = page

    def clear_all(self):
        """Reset view state, as after logout."""
        for field in st.session_state.get('upload_fields', {}).values():
            field.coordinator.close()
        self._reset_view_state()
        st.session_state['page'] = 'dashboard'

    def _reset_view_state(self):
        st.session_state['editing'] = {key: None for key in RESOURCES}
        st.session_state['drafts'] = {}
        st.session_state['upload_fields'] = {}
        st.session_state['cascade'] = None
        st.session_state['visitor_explorer'] = None
        st.session_state['pending_delete'] = None

    def _subscribe(self, services: Services):
        bus = services.event_bus

        async def on_session_changed(payload: EventPayload) -> None:
            if payload["reason"] == "logout":
                self.clear_all()

        async def on_catalog_changed(payload: EventPayload) -> None:
            label = RESOURCES[payload["resource"]].label.capitalize()
            await bus.publish(
                events.TOPIC_LOGS_EVENT,
                events.create_logs_event(f"{label} {payload['action']}.", "success", payload["resource"]),
            )

        async def on_upload_end(payload: EventPayload) -> None:
            if payload["urls"] and not payload["cancelled"]:
                await bus.publish(
                    events.TOPIC_LOGS_EVENT,
                    events.create_logs_event(f"{len(payload['urls'])} file(s) uploaded.", "info", payload["field"]),
                )

        async def on_log(payload: EventPayload) -> None:
            self.add_notice(payload)

        bus.subscribe(events.TOPIC_SESSION_CHANGED, on_session_changed)
        bus.subscribe(events.TOPIC_CATALOG_CHANGED, on_catalog_changed)
        bus.subscribe(events.TOPIC_UPLOAD_BATCH_END, on_upload_end)
        bus.subscribe(events.TOPIC_LOGS_EVENT, on_log)


def notice_icon(level: str) -> str:
    return {"success": "✅", "warning": "⚠️", "error": "❌"}.get(level, "ℹ️")

