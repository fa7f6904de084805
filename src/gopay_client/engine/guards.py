"""
Protected-page session guard.

Before a protected view renders, the guard checks that a credential is
stored and that the server still accepts it. Any failure is treated as an
invalid session: the credential is cleared and the caller is told where to
redirect.
"""

import logging
from typing import Optional

from pydantic import BaseModel

from ..clients.http_client import GoPayClient
from ..schemas.accounts import Account, normalize_profile
from ..services.auth import get_profile
from ..sessions.store import SessionStore
from .events import EventBus, SessionExpiredEvent, SessionReadyEvent
from .exceptions import ErrorKind, GoPayError

logger = logging.getLogger(__name__)

LOGIN_PATH = "/login"


class SessionState(BaseModel):
    """Outcome of a guard check.

    Attributes:
        authenticated: Whether the protected view may render.
        account: Normalized account when authenticated.
        redirect_to: Where to navigate when not authenticated.
        error: User-facing message of the failure that ended the session.
        error_kind: Kind of that failure, for views that want to offer a retry.
    """
    authenticated: bool
    account: Optional[Account] = None
    redirect_to: Optional[str] = None
    error: Optional[str] = None
    error_kind: Optional[ErrorKind] = None


def is_authenticated(store: SessionStore) -> bool:
    """Local check used by navigation; does not contact the server."""
    return store.is_authenticated()


class SessionGuard:
    """Fail-closed session bootstrap for protected views."""

    def __init__(
        self,
        client: GoPayClient,
        event_bus: Optional[EventBus] = None,
        login_path: str = LOGIN_PATH,
    ) -> None:
        self.client = client
        self.event_bus = event_bus or EventBus()
        self.login_path = login_path

    async def bootstrap(self) -> SessionState:
        """
        Verify the stored credential against /auth/me.

        Returns:
            SessionState with the normalized account, or with ``redirect_to``
            set when there is no usable session.
        """
        store = self.client.session_store
        if not store.get():
            logger.debug("No stored credential; redirecting to %s", self.login_path)
            return await self._expire("Not signed in", kind=None)

        try:
            profile = await get_profile(self.client)
        except GoPayError as exc:
            # Expired sessions and outages look the same here; both end the session.
            logger.warning("Session check failed (%s): %s", exc.kind.value, exc.user_message())
            store.clear()
            return await self._expire(exc.user_message(), kind=exc.kind)

        account = normalize_profile(profile)
        await self.event_bus.publish(SessionReadyEvent(account=account))
        return SessionState(authenticated=True, account=account)

    async def _expire(self, reason: str, kind: Optional[ErrorKind]) -> SessionState:
        await self.event_bus.publish(
            SessionExpiredEvent(reason=reason, redirect_to=self.login_path, kind=kind)
        )
        return SessionState(
            authenticated=False,
            redirect_to=self.login_path,
            error=reason if kind is not None else None,
            error_kind=kind,
        )
