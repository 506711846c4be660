"""Date-time canonicalization for credential fields."""

from __future__ import annotations

from datetime import datetime, timezone

# yyyy-MM-dd'T'HH:mm:ss'Z'
TIME_FORMAT = "%Y-%m-%dT%H:%M:%SZ"


def canonicalize_date(value: datetime) -> datetime:
    """Convert to UTC and truncate to whole seconds.

    A naive datetime is taken to be UTC already.
    """
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc).replace(microsecond=0)


def format_date(value: datetime) -> str:
    """Render a datetime as `YYYY-MM-DDTHH:MM:SSZ`.

    Sub-second components are truncated, never rounded.

    Args:
        value: The instant to format.

    Returns:
        The canonical UTC text.
    """
    value = canonicalize_date(value)
    # isoformat zero-pads the year, strftime("%Y") does not on every platform
    return value.replace(tzinfo=None).isoformat() + "Z"


def parse_date(text: str) -> datetime:
    """Parse ISO-8601 date-time text such as `2024-01-01T00:00:00Z`.

    Text without an offset is taken to be UTC.

    Raises:
        ValueError: If the value is not an ISO-8601 date-time string.
    """
    if not isinstance(text, str):
        raise ValueError(f"Invalid date-time: {text!r}")
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    return canonicalize_date(datetime.fromisoformat(text))
