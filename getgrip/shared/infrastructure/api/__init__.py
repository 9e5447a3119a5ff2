"""REST API adapter (httpx)."""

from getgrip.shared.infrastructure.api.client import ApiClient, ApiEnvelope

__all__ = ["ApiClient", "ApiEnvelope"]
