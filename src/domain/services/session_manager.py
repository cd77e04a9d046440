"""Per-session authentication state machine.

Identity provider events drive the transitions::

    UNAUTHENTICATED --signed in--> RESOLVING --ensure_profile ok--> AUTHENTICATED
                                       |
                                       +--ensure_profile failed--> PROFILE_ERROR --retry--> RESOLVING

    any state --signed out--> UNAUTHENTICATED   (synchronous)

Resolutions are never cancelled. Each transition bumps a generation counter,
and a resolution only commits its result if the generation and the identity
it was started for are still current. Anything else is a stale result and is
dropped.
"""

import asyncio
from collections.abc import Callable, Coroutine
from dataclasses import dataclass, replace
from enum import StrEnum
from typing import Any

import structlog

from domain.entities.identity import AuthEventKind, Identity
from domain.entities.profile import Profile
from domain.services.profile_service import ProfileService
from infrastructure.auth.provider import IIdentityProvider

logger = structlog.get_logger()


class AuthStatus(StrEnum):
    """States of a user session."""

    UNAUTHENTICATED = "unauthenticated"
    RESOLVING = "resolving"
    AUTHENTICATED = "authenticated"
    PROFILE_ERROR = "profile_error"


@dataclass(frozen=True, slots=True)
class SessionState:
    """Immutable snapshot of the session."""

    status: AuthStatus = AuthStatus.UNAUTHENTICATED
    identity: Identity | None = None
    profile: Profile | None = None
    error: str | None = None


StateListener = Callable[[SessionState], None]


class AuthSessionManager:
    """Keeps one session's identity and profile consistent across auth events."""

    def __init__(self, profile_service: ProfileService) -> None:
        self._profiles = profile_service
        self._state = SessionState()
        self._generation = 0
        self._listeners: list[StateListener] = []
        self._tasks: set[asyncio.Task[None]] = set()
        self._detach_provider: Callable[[], None] | None = None

    @property
    def state(self) -> SessionState:
        return self._state

    @property
    def pending(self) -> frozenset[asyncio.Task[None]]:
        """Resolutions started from provider callbacks that have not finished."""
        return frozenset(self._tasks)

    def subscribe(self, listener: StateListener) -> Callable[[], None]:
        """Register a listener called synchronously on every state change."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def attach(self, provider: IIdentityProvider) -> None:
        """Follow an identity provider, starting from its current identity."""
        self.detach()
        self._detach_provider = provider.subscribe(self.handle_event)
        current = provider.get_current_identity()
        if current is not None:
            self.handle_event(AuthEventKind.INITIAL_SESSION, current)

    def detach(self) -> None:
        if self._detach_provider is not None:
            self._detach_provider()
            self._detach_provider = None

    # --- Event handling ---

    def handle_event(self, kind: AuthEventKind, identity: Identity | None) -> None:
        """Provider callback. Sign-out is applied before this returns."""
        work = self._dispatch(kind, identity)
        if work is None:
            return
        task = asyncio.ensure_future(work)
        self._tasks.add(task)
        task.add_done_callback(self._on_task_done)

    async def process_event(self, kind: AuthEventKind, identity: Identity | None) -> SessionState:
        """Apply an event and wait for any resolution it starts."""
        work = self._dispatch(kind, identity)
        if work is not None:
            await work
        return self._state

    def sign_out(self) -> None:
        """Drop identity and profile immediately, invalidating in-flight work."""
        was_signed_in = self._state.status is not AuthStatus.UNAUTHENTICATED
        self._generation += 1
        if was_signed_in:
            self._set_state(SessionState())
            logger.info("session_signed_out")

    async def retry(self) -> SessionState:
        """Re-run profile resolution after a failure."""
        current = self._state
        if current.status is not AuthStatus.PROFILE_ERROR or current.identity is None:
            return current
        generation = self._transition(SessionState(AuthStatus.RESOLVING, identity=current.identity))
        await self._resolve(current.identity, generation)
        return self._state

    # --- Internals ---

    def _dispatch(
        self, kind: AuthEventKind, identity: Identity | None
    ) -> Coroutine[Any, Any, None] | None:
        if kind is AuthEventKind.SIGNED_OUT or identity is None:
            self.sign_out()
            return None

        current = self._state
        if (
            current.status is AuthStatus.AUTHENTICATED
            and current.identity is not None
            and current.identity.id == identity.id
        ):
            # Same principal: re-read the profile, never re-create it.
            return self._refresh(identity, self._generation)

        generation = self._transition(SessionState(AuthStatus.RESOLVING, identity=identity))
        return self._resolve(identity, generation)

    async def _resolve(self, identity: Identity, generation: int) -> None:
        result = await self._profiles.ensure_profile(identity)
        if not self._is_current(identity, generation):
            logger.debug("stale_profile_resolution_discarded", user_id=str(identity.id))
            return

        if result.ok and result.data is not None:
            self._transition(
                SessionState(AuthStatus.AUTHENTICATED, identity=identity, profile=result.data)
            )
        else:
            reason = result.error or "Profile unavailable"
            logger.warning("profile_resolution_failed", user_id=str(identity.id), error=reason)
            self._transition(SessionState(AuthStatus.PROFILE_ERROR, identity=identity, error=reason))

    async def _refresh(self, identity: Identity, generation: int) -> None:
        result = await self._profiles.get_profile(identity.id)
        if not self._is_current(identity, generation):
            return
        if not result.ok or result.data is None:
            logger.warning(
                "profile_refresh_failed",
                user_id=str(identity.id),
                error=result.error or "profile missing",
            )
            return
        self._transition(replace(self._state, identity=identity, profile=result.data))

    def _on_task_done(self, task: asyncio.Task[None]) -> None:
        self._tasks.discard(task)
        if task.cancelled():
            return
        exc = task.exception()
        if exc is not None:
            logger.error("session_task_failed", error=str(exc), exc_info=exc)

    def _is_current(self, identity: Identity, generation: int) -> bool:
        current = self._state.identity
        return (
            generation == self._generation
            and current is not None
            and current.id == identity.id
        )

    def _transition(self, state: SessionState) -> int:
        self._generation += 1
        self._set_state(state)
        return self._generation

    def _set_state(self, state: SessionState) -> None:
        self._state = state
        for listener in list(self._listeners):
            listener(state)
