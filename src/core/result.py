"""Result type returned across the service boundary.

Services never raise store errors to their callers. Every public operation
returns a ``Result`` carrying either data or a human-readable reason.
"""

from dataclasses import dataclass
from typing import Generic, TypeVar

T = TypeVar("T")


@dataclass(frozen=True, slots=True)
class Result(Generic[T]):
    """Success value or failure reason, plus non-fatal warnings."""

    data: T | None = None
    error: str | None = None
    warnings: tuple[str, ...] = ()

    @property
    def ok(self) -> bool:
        return self.error is None

    @classmethod
    def success(cls, data: T | None, warnings: tuple[str, ...] = ()) -> "Result[T]":
        return cls(data=data, error=None, warnings=warnings)

    @classmethod
    def failure(cls, reason: str) -> "Result[T]":
        return cls(data=None, error=reason)
