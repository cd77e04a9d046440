"""Translate service results into HTTP errors."""

from typing import TypeVar

from core.exceptions import StoreUnavailableError
from core.result import Result

T = TypeVar("T")


def unwrap(result: Result[T]) -> T | None:
    """Return the result's data, raising StoreUnavailableError on failure."""
    if not result.ok:
        raise StoreUnavailableError(result.error or "Store operation failed")
    return result.data
