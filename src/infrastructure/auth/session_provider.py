"""In-process identity provider backed by access tokens.

Holds the current session and fans auth events out to listeners, the way a
client SDK's ``onAuthStateChange`` does.
"""

from collections.abc import Callable
from typing import Optional

import structlog

from domain.entities.identity import AuthEventKind, Identity
from infrastructure.auth.provider import AuthEventListener, IAuthProvider

logger = structlog.get_logger()


class TokenSessionProvider:
    """IIdentityProvider implementation driven by token sign-in/refresh calls."""

    def __init__(self, auth_provider: IAuthProvider) -> None:
        self._auth = auth_provider
        self._identity: Optional[Identity] = None
        self._listeners: list[AuthEventListener] = []

    def get_current_identity(self) -> Optional[Identity]:
        return self._identity

    def subscribe(self, listener: AuthEventListener) -> Callable[[], None]:
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    async def sign_in(self, token: str) -> Optional[Identity]:
        """Start a session from an access token. Returns None if the token is invalid."""
        identity = await self._auth.validate_token(token)
        if identity is None:
            logger.info("sign_in_rejected")
            return None
        self._identity = identity
        self._emit(AuthEventKind.SIGNED_IN, identity)
        return identity

    async def refresh(self, token: str) -> Optional[Identity]:
        """Swap in a refreshed token. An invalid token ends the session."""
        identity = await self._auth.validate_token(token)
        if identity is None:
            self.sign_out()
            return None
        changed = self._identity is None or self._identity.id != identity.id
        self._identity = identity
        self._emit(AuthEventKind.SIGNED_IN if changed else AuthEventKind.TOKEN_REFRESHED, identity)
        return identity

    def sign_out(self) -> None:
        """End the session. Listeners are notified before this returns."""
        self._identity = None
        self._emit(AuthEventKind.SIGNED_OUT, None)

    def _emit(self, kind: AuthEventKind, identity: Optional[Identity]) -> None:
        for listener in list(self._listeners):
            listener(kind, identity)
