"""Response builders and recorders shared by the test modules."""

import json
from typing import Any, Dict, List, Optional

import httpx

from getgrip.shared.core.event_bus import EventBus, EventPayload

BASE_URL = "http://api.test/api"


def envelope(data: Any = None, success: bool = True, message: Optional[str] = None, status: int = 200) -> httpx.Response:
    """Build a ``{success, data, message}`` JSON response."""
    body: Dict[str, Any] = {"success": success, "data": data}
    if message is not None:
        body["message"] = message
    return httpx.Response(status, json=body)


def request_json(request: httpx.Request) -> Dict[str, Any]:
    return json.loads(request.content or b"{}")


def api_path(request: httpx.Request) -> str:
    """Request path relative to the API base (``/api/brands`` -> ``/brands``)."""
    return request.url.path.removeprefix("/api")


class EventRecorder:
    """Subscribes to topics and keeps every payload it receives."""

    def __init__(self, bus: EventBus):
        self.bus = bus
        self.received: List[tuple[str, EventPayload]] = []

    def listen(self, *topics: str) -> "EventRecorder":
        for topic in topics:
            self.bus.subscribe(topic, self._handler_for(topic))
        return self

    def _handler_for(self, topic: str):
        async def handler(payload: EventPayload) -> None:
            self.received.append((topic, payload))
        return handler

    def payloads(self, topic: str) -> List[EventPayload]:
        return [payload for t, payload in self.received if t == topic]
