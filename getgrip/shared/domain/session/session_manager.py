"""Session Manager: the single owner of the persisted login session."""

from __future__ import annotations

import json
import logging
from typing import Any, Dict, Optional

from pydantic import ValidationError

from getgrip.shared.core import events
from getgrip.shared.core.event_bus import EventBus
from getgrip.shared.core.exceptions import (
    ApiFailure,
    GripError,
    SessionExpiredError,
    error_message,
)
from getgrip.shared.domain.models import User
from getgrip.shared.infrastructure.api import endpoints
from getgrip.shared.infrastructure.api.client import ApiClient, ApiEnvelope
from getgrip.shared.infrastructure.persistence.session_store import (
    TOKEN_KEY,
    USER_KEY,
    SessionStore,
)

logger = logging.getLogger(__name__)


class SessionManager:
    """Reads and writes the token/user pair and announces every change.

    Components never touch the session store directly; they receive this
    manager and subscribe to ``session.changed`` on the event bus.
    """

    def __init__(self, store: SessionStore, api: ApiClient, event_bus: EventBus):
        self.store = store
        self.api = api
        self.event_bus = event_bus
        self.is_loading = False
        self.error: Optional[str] = None

    @property
    def token(self) -> Optional[str]:
        return self.store.token()

    @property
    def user(self) -> Optional[User]:
        """Stored profile, ``None`` if missing or corrupt."""
        raw = self.store.get(USER_KEY)
        if not raw:
            return None
        try:
            return User.model_validate(json.loads(raw))
        except (json.JSONDecodeError, ValidationError):
            logger.warning("Stored user profile is corrupt, ignoring it")
            return None

    @property
    def is_logged_in(self) -> bool:
        return bool(self.token) and self.user is not None

    async def login(self, email: str, password: str) -> User:
        """Authenticate and persist the token and profile.

        Raises:
            GripError: With the server's message (or "Login failed")
        """
        self.is_loading = True
        self.error = None
        try:
            envelope = await self.api.post(
                endpoints.AUTH_LOGIN, {"email": email, "password": password}
            )
            data: Dict[str, Any] = envelope.unwrap("Login failed") or {}
            token = data.get("token") if isinstance(data, dict) else None
            if not token:
                raise ApiFailure("Login failed", payload=data)

            try:
                user = User.model_validate(data)
            except ValidationError as e:
                raise ApiFailure("Login failed", payload=data) from e
            self.store.set(TOKEN_KEY, token)
            self.store.set(USER_KEY, json.dumps(data))
            logger.info(f"Logged in as {user.email}")
        except GripError as e:
            self.error = error_message(e, "Login failed")
            logger.warning(f"Login failed for {email}: {self.error}")
            raise
        finally:
            self.is_loading = False

        await self._announce("login", user)
        return user

    async def refresh_profile(self) -> Optional[User]:
        """Re-fetch the profile for the stored token.

        Any failure is treated as an invalid session and logs out instead of
        raising.
        """
        if not self.token:
            return None

        try:
            envelope = await self.api.get(endpoints.AUTH_ME)
            user = self._parse_profile(envelope)
        except GripError as e:
            logger.info(f"Profile fetch rejected, logging out: {e}")
            await self.logout()
            return None

        self.store.set(USER_KEY, user.model_dump_json(by_alias=True))
        await self._announce("profile", user)
        return user

    @staticmethod
    def _parse_profile(envelope: ApiEnvelope) -> User:
        try:
            return User.model_validate(envelope.unwrap("Session expired") or {})
        except (ApiFailure, ValidationError) as e:
            raise SessionExpiredError() from e

    async def logout(self) -> None:
        self.store.remove(TOKEN_KEY)
        self.store.remove(USER_KEY)
        logger.info("Session cleared")
        await self._announce("logout", None)

    async def _announce(self, reason: str, user: Optional[User]) -> None:
        payload = user.model_dump(by_alias=True) if user else None
        await self.event_bus.publish(
            events.TOPIC_SESSION_CHANGED,
            events.create_session_changed_event(reason, payload),
        )
