"""Error taxonomy for calls against the GetGrip REST API."""

from __future__ import annotations

from collections.abc import Generator
from contextlib import contextmanager
from typing import Any, Optional

import httpx


class GripError(Exception):
    """Base exception for all dashboard errors."""

    def __init__(self, message: str, original_error: Optional[Exception] = None) -> None:
        super().__init__(message)
        self.message = message
        self.original_error = original_error


class TransportError(GripError):
    """Raised when the API could not be reached or returned an unreadable body."""


class HttpStatusError(GripError):
    """Raised when the API answers with a non-2xx status."""

    def __init__(
        self,
        status_code: int,
        message: Optional[str] = None,
        original_error: Optional[Exception] = None,
    ) -> None:
        super().__init__(message or f"HTTP error! status: {status_code}", original_error)
        self.status_code = status_code


class ApiFailure(GripError):
    """Raised when the API envelope reports ``success: false``."""

    def __init__(self, message: str, payload: Any = None) -> None:
        super().__init__(message)
        self.payload = payload


class ClientValidationError(GripError):
    """Raised before any request when local input is invalid."""

    def __init__(self, message: str, field: Optional[str] = None) -> None:
        super().__init__(message)
        self.field = field


class SessionExpiredError(GripError):
    """Raised when the stored token is no longer accepted."""

    def __init__(self, message: str = "Session expired") -> None:
        super().__init__(message)


def error_message(error: Exception, fallback: str = "Something went wrong") -> str:
    """Return the user-facing text for an error, or ``fallback``."""
    if isinstance(error, GripError) and error.message:
        return error.message
    return fallback


@contextmanager
def handle_http_errors(path: Optional[str] = None) -> Generator[None, None, None]:
    """
    Context manager that catches httpx exceptions and raises the
    matching GripError subclass.

    Usage:
        with handle_http_errors("/brands"):
            response = await client.get("/brands")
    """
    where = f" for {path}" if path else ""
    try:
        yield
    except httpx.TimeoutException as e:
        raise TransportError(f"Request timed out{where}", original_error=e) from e
    except httpx.HTTPError as e:
        raise TransportError(f"Network error{where}: {e}", original_error=e) from e
