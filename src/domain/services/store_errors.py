"""Classification of record store failures shared by the services."""

from sqlalchemy.exc import IntegrityError, SQLAlchemyError

# Exceptions that mean "the store could not complete the call". Anything else
# is a programming error and propagates.
STORE_ERRORS: tuple[type[BaseException], ...] = (SQLAlchemyError, OSError)


def is_unique_violation(exc: IntegrityError) -> bool:
    """True if the integrity error came from a unique or primary key constraint."""
    orig = str(exc.orig).lower() if exc.orig else ""
    return "unique" in orig or "duplicate" in orig


def failure_reason(action: str, exc: BaseException) -> str:
    """Human-readable reason for a failed store call."""
    detail = getattr(exc, "orig", None) or exc
    return f"Failed to {action}: {detail}"
