"""UTC timestamp helpers.

Rows store naive datetimes that are UTC by convention. Everything sent to
clients goes through ``to_utc_iso`` so it carries an explicit ``Z`` marker.
"""
from datetime import datetime, timezone


def utcnow() -> datetime:
    """Current time as a naive UTC datetime, the form stored in the database."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


def parse_timestamp(value: datetime | str) -> datetime:
    """Parse a datetime or a raw storage string such as ``2026-01-13 18:29:18``."""
    if isinstance(value, datetime):
        return value
    text = value.strip()
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    return datetime.fromisoformat(text.replace(" ", "T", 1))


def to_utc_iso(value: datetime | str) -> str:
    """Format as ``YYYY-MM-DDTHH:MM:SS.mmmZ``. Naive values are taken as UTC."""
    dt = parse_timestamp(value)
    if dt.tzinfo is not None:
        dt = dt.astimezone(timezone.utc).replace(tzinfo=None)
    return dt.isoformat(timespec="milliseconds") + "Z"
