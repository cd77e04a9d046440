"""Identity provider protocols."""

from collections.abc import Callable
from typing import Optional, Protocol

from domain.entities.identity import AuthEventKind, Identity

AuthEventListener = Callable[[AuthEventKind, Optional[Identity]], None]


class IAuthProvider(Protocol):
    """Protocol for token validators."""

    async def validate_token(self, token: str) -> Optional[Identity]:
        """
        Validate an authentication token.

        Args:
            token: The bearer token to validate

        Returns:
            Identity if valid, None if invalid
        """
        ...


class IIdentityProvider(Protocol):
    """Protocol for session providers that emit lifecycle events."""

    def get_current_identity(self) -> Optional[Identity]:
        """The identity of the active session, or None when signed out."""
        ...

    def subscribe(self, listener: AuthEventListener) -> Callable[[], None]:
        """
        Register a listener for session events.

        Returns:
            A callable that removes the listener
        """
        ...
