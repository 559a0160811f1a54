"""
Session context and auth lifecycle.

SessionContext is the identity a request acts as. It is built once per request
by the dependencies in kalakar.core.dependencies and passed explicitly to the
services that need it.

AuthLifecycle is owned by the application lifespan: it subscribes to the
Supabase auth state feed on startup and unsubscribes on shutdown.
"""

from dataclasses import dataclass
from typing import Any, Callable, Optional
from supabase import Client
import logging

logger = logging.getLogger(__name__)

USER_TYPE_USER = "user"
USER_TYPE_CREATOR = "creator"


@dataclass(frozen=True)
class SessionContext:
    user_id: str
    email: Optional[str] = None
    user_type: str = USER_TYPE_USER
    full_name: Optional[str] = None
    access_token: Optional[str] = None

    @property
    def is_creator(self) -> bool:
        return self.user_type == USER_TYPE_CREATOR

    def is_self(self, user_id: Optional[str]) -> bool:
        return user_id is not None and user_id == self.user_id

    @classmethod
    def from_user(cls, user: Any, access_token: Optional[str] = None) -> "SessionContext":
        """Build a context from a Supabase auth user object."""
        metadata = getattr(user, "user_metadata", None) or {}
        user_type = metadata.get("user_type")
        if user_type not in (USER_TYPE_USER, USER_TYPE_CREATOR):
            user_type = USER_TYPE_USER
        return cls(
            user_id=user.id,
            email=getattr(user, "email", None),
            user_type=user_type,
            full_name=metadata.get("full_name"),
            access_token=access_token,
        )


class AuthLifecycle:
    def __init__(self, client_factory: Callable[[], Client]):
        self._client_factory = client_factory
        self._subscription = None
        self.current_user_id: Optional[str] = None

    @property
    def started(self) -> bool:
        return self._subscription is not None

    def start(self) -> None:
        if self._subscription is not None:
            return
        client = self._client_factory()
        self._subscription = client.auth.on_auth_state_change(self._on_change)
        logger.info("Subscribed to auth state changes")

    def stop(self) -> None:
        if self._subscription is None:
            return
        try:
            self._subscription.unsubscribe()
        except Exception as e:
            logger.warning(f"Failed to unsubscribe from auth state changes: {e}")
        self._subscription = None
        self.current_user_id = None
        logger.info("Unsubscribed from auth state changes")

    def _on_change(self, event: Any, session: Any) -> None:
        user = getattr(session, "user", None) if session else None
        self.current_user_id = user.id if user else None
        logger.info(f"Auth state change: {getattr(event, 'value', event)} (user={self.current_user_id})")
