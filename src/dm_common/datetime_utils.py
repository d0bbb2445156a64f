"""UTC datetime utilities."""

from datetime import datetime, timezone


def utc_now() -> datetime:
    """Return timezone-aware UTC now."""
    return datetime.now(timezone.utc)


def to_unix_seconds(dt: datetime) -> int:
    return int(dt.timestamp())


def iso_or_none(dt: datetime | None) -> str | None:
    return dt.isoformat() if dt is not None else None
