"""Process-level wiring for the Streamlit dashboard.

Streamlit reruns the script top to bottom on every interaction, so the
async services are driven with one short event loop per call. The API
client opens a short-lived httpx client per request when it is not used as
a context manager, which keeps it independent of any particular loop.
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Coroutine, TypeVar

import streamlit as st
from dotenv import load_dotenv

from getgrip.shared.core.configuration import SystemConfig, ValidationLevel, get_config
from getgrip.shared.core.event_bus import EventBus
from getgrip.shared.core.logging_config import configure_logging
from getgrip.shared.domain.analytics.explorer import VisitorExplorer
from getgrip.shared.domain.analytics.service import AnalyticsService
from getgrip.shared.domain.catalog.cascade import CascadingModelFilter
from getgrip.shared.domain.catalog.service import CatalogService
from getgrip.shared.domain.session.session_manager import SessionManager
from getgrip.shared.domain.uploads.coordinator import UploadCoordinator, UploadField, UploadMode
from getgrip.shared.infrastructure.api.client import ApiClient
from getgrip.shared.infrastructure.persistence.session_store import SessionStore

logger = logging.getLogger(__name__)

T = TypeVar("T")

LOG_DIR = Path("data") / "logs"


def run_async(coro: Coroutine[Any, Any, T]) -> T:
    """Drive one coroutine to completion from Streamlit's script thread."""
    return asyncio.run(coro)


@st.cache_resource(show_spinner=False)
def load_config() -> SystemConfig:
    """Configuration and logging, set up once per server process."""
    load_dotenv(dotenv_path=Path.cwd() / ".env")
    configure_logging(LOG_DIR)
    return get_config(ValidationLevel.LENIENT)


@dataclass
class Services:
    """Everything one browser session talks to."""

    config: SystemConfig
    event_bus: EventBus
    api: ApiClient
    session_manager: SessionManager
    catalog: CatalogService
    analytics: AnalyticsService

    def upload_field(self, name: str, mode: UploadMode, urls=None) -> UploadField:
        coordinator = UploadCoordinator(
            self.api,
            max_size_bytes=self.config.upload.max_size_bytes,
            event_bus=self.event_bus,
        )
        return UploadField(name, coordinator, mode, urls)

    def cascade(self) -> CascadingModelFilter:
        return CascadingModelFilter(self.catalog)

    def visitor_explorer(self) -> VisitorExplorer:
        return VisitorExplorer(
            self.analytics,
            visitor_page_size=self.config.pagination.visitor_page_size,
            detail_page_size=self.config.pagination.detail_page_size,
        )


def build_services(config: SystemConfig) -> Services:
    store = SessionStore(config.storage.session_file)
    event_bus = EventBus()
    api = ApiClient(config.api.base_url, token_provider=store.token, timeout=config.api.timeout)
    catalog = CatalogService(api, event_bus, product_list_limit=config.pagination.product_list_limit)
    logger.debug(f"Services built against {config.api.base_url}")
    return Services(
        config=config,
        event_bus=event_bus,
        api=api,
        session_manager=SessionManager(store, api, event_bus),
        catalog=catalog,
        analytics=AnalyticsService(api, catalog),
    )
