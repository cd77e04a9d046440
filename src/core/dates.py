"""Datetime normalization shared by the services and the store."""

from datetime import datetime, timezone


def as_naive_utc(value: datetime) -> datetime:
    """Naive UTC. Timestamps are stored without a zone, so aware values are converted first."""
    if value.tzinfo is not None:
        return value.astimezone(timezone.utc).replace(tzinfo=None)
    return value
