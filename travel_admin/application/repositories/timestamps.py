"""Conversion of store timestamp representations to timezone-aware datetimes."""

from datetime import datetime, timezone
from typing import Any

OLDEST = datetime.min.replace(tzinfo=timezone.utc)


def to_datetime(value: Any) -> datetime | None:
    """Normalise a stored timestamp.

    Accepts datetimes (naive ones are taken as UTC), ISO-8601 strings,
    epoch seconds, and provider timestamp objects exposing ``to_datetime()``.
    """
    if value is None:
        return None
    if isinstance(value, datetime):
        return value if value.tzinfo else value.replace(tzinfo=timezone.utc)
    if isinstance(value, str):
        return to_datetime(datetime.fromisoformat(value))
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return datetime.fromtimestamp(value, tz=timezone.utc)
    converter = getattr(value, "to_datetime", None)
    if callable(converter):
        return to_datetime(converter())
    raise ValueError(f"Unsupported timestamp representation: {value!r}")


def sort_key(value: Any) -> datetime:
    """Sort key that places missing timestamps last in descending order."""
    return to_datetime(value) or OLDEST
