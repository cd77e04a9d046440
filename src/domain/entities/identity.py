"""Identity domain entity and authentication event kinds."""

from dataclasses import dataclass, field
from datetime import datetime
from enum import StrEnum
from typing import Any
from uuid import UUID


class AuthEventKind(StrEnum):
    """Session lifecycle events emitted by an identity provider."""

    SIGNED_IN = "signed_in"
    SIGNED_OUT = "signed_out"
    TOKEN_REFRESHED = "token_refreshed"
    USER_UPDATED = "user_updated"
    INITIAL_SESSION = "initial_session"


@dataclass(frozen=True)
class Identity:
    """Authenticated principal owned by the identity provider. Never mutated here."""

    id: UUID
    email: str
    metadata: dict[str, Any] = field(default_factory=dict, hash=False, compare=False)
    created_at: datetime | None = None

    @property
    def display_name(self) -> str | None:
        """Name supplied at signup, if any."""
        for key in ("name", "display_name", "full_name"):
            value = self.metadata.get(key)
            if isinstance(value, str) and value.strip():
                return value.strip()
        return None
