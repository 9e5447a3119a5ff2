"""
Shared pytest fixtures for GetGrip tests.

HTTP is faked with ``httpx.MockTransport``: each test hands a request
handler to ``make_api`` and gets a real ``ApiClient`` wired to it.
"""

from typing import Callable

import httpx
import pytest

from getgrip.shared.core.event_bus import EventBus
from getgrip.shared.infrastructure.api.client import ApiClient
from getgrip.shared.infrastructure.persistence.session_store import SessionStore
from tests.helpers import BASE_URL, EventRecorder

Handler = Callable[[httpx.Request], httpx.Response]


@pytest.fixture
def session_store(tmp_path) -> SessionStore:
    return SessionStore(tmp_path / "session.json")


@pytest.fixture
def event_bus() -> EventBus:
    return EventBus()


@pytest.fixture
def recorder(event_bus: EventBus) -> EventRecorder:
    return EventRecorder(event_bus)


@pytest.fixture
def make_api(session_store: SessionStore) -> Callable[[Handler], ApiClient]:
    """Factory for an ApiClient backed by a MockTransport handler."""

    def _make(handler: Handler) -> ApiClient:
        return ApiClient(
            BASE_URL,
            token_provider=session_store.token,
            transport=httpx.MockTransport(handler),
        )

    return _make
