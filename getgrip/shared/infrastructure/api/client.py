"""Async HTTP client for the GetGrip REST API.

Every call attaches ``Authorization: Bearer <token>`` when the session store
holds a token and returns the parsed ``{success, data, message}`` envelope.
"""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import Any, AsyncIterator, Callable, Dict, Optional

import httpx
from pydantic import BaseModel, ConfigDict, ValidationError

from getgrip.shared.core.exceptions import (
    ApiFailure,
    HttpStatusError,
    TransportError,
    handle_http_errors,
)

logger = logging.getLogger(__name__)

TokenProvider = Callable[[], Optional[str]]


class ApiEnvelope(BaseModel):
    """Response envelope shared by all endpoints."""
    model_config = ConfigDict(extra='allow')

    success: bool = False
    data: Any = None
    message: Optional[str] = None

    def unwrap(self, fallback: str = "Request failed") -> Any:
        """Return ``data`` or raise ApiFailure with the server's message."""
        if not self.success:
            raise ApiFailure(self.message or fallback, payload=self.data)
        return self.data


class ApiClient:
    """Thin wrapper over ``httpx.AsyncClient``.

    Use it as an async context manager to share one connection pool across
    several calls (an upload batch, a page load). Calls made outside a
    context open a short-lived client each.
    """

    def __init__(
        self,
        base_url: str,
        token_provider: Optional[TokenProvider] = None,
        timeout: float = 30.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.base_url = base_url
        self.token_provider = token_provider
        self.timeout = timeout
        self._transport = transport
        self._client: Optional[httpx.AsyncClient] = None

    async def __aenter__(self) -> "ApiClient":
        self._client = self._build_client()
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        client, self._client = self._client, None
        if client is not None:
            await client.aclose()

    def _build_client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            base_url=self.base_url,
            timeout=self.timeout,
            transport=self._transport,
        )

    @asynccontextmanager
    async def _open(self) -> AsyncIterator[httpx.AsyncClient]:
        if self._client is not None:
            yield self._client
            return
        async with self._build_client() as client:
            yield client

    def _auth_headers(self) -> Dict[str, str]:
        token = self.token_provider() if self.token_provider else None
        if token:
            return {"Authorization": f"Bearer {token}"}
        return {}

    async def _request(
        self,
        method: str,
        path: str,
        *,
        json: Optional[Dict[str, Any]] = None,
        params: Optional[Dict[str, Any]] = None,
        files: Optional[Dict[str, Any]] = None,
    ) -> ApiEnvelope:
        headers = self._auth_headers()
        if files is None:
            headers["Content-Type"] = "application/json"

        logger.debug(f"{method} {path} params={params}")
        with handle_http_errors(path):
            async with self._open() as client:
                response = await client.request(
                    method, path, json=json, params=params, files=files, headers=headers
                )

        try:
            body = response.json() if response.content else {}
        except ValueError:
            body = None

        if not response.is_success:
            message = body.get("message") if isinstance(body, dict) else None
            logger.warning(f"{method} {path} failed with status {response.status_code}")
            raise HttpStatusError(response.status_code, message)

        if body is None:
            raise TransportError(f"Invalid response body for {path}")
        if not isinstance(body, dict):
            return ApiEnvelope(success=True, data=body)
        try:
            return ApiEnvelope.model_validate(body)
        except ValidationError as e:
            raise TransportError(f"Invalid response body for {path}", original_error=e) from e

    async def get(self, path: str, params: Optional[Dict[str, Any]] = None) -> ApiEnvelope:
        return await self._request("GET", path, params=params)

    async def post(self, path: str, json: Optional[Dict[str, Any]] = None) -> ApiEnvelope:
        return await self._request("POST", path, json=json or {})

    async def put(self, path: str, json: Optional[Dict[str, Any]] = None) -> ApiEnvelope:
        return await self._request("PUT", path, json=json or {})

    async def delete(self, path: str) -> ApiEnvelope:
        return await self._request("DELETE", path)

    async def upload(
        self,
        path: str,
        filename: str,
        content: bytes,
        content_type: str = "application/octet-stream",
    ) -> ApiEnvelope:
        """POST one file as multipart form data under the ``file`` field."""
        return await self._request(
            "POST", path, files={"file": (filename, content, content_type)}
        )
