"""UTC helpers. Timestamps in the activity log are timezone-aware UTC."""

from datetime import UTC, datetime


def utc_now() -> datetime:
    return datetime.now(UTC)


def ensure_utc(dt: datetime | None) -> datetime | None:
    """Attach UTC to naive values and convert aware ones to UTC."""
    if dt is None:
        return None
    if dt.tzinfo is None:
        return dt.replace(tzinfo=UTC)
    return dt.astimezone(UTC)


def parse_datetime_or_none(raw: str | None) -> datetime | None:
    """Parse an ISO 8601 date or datetime query value into UTC.

    Blank or unparsable input yields None (treated as "no bound"), never
    an error. A bare date means midnight UTC of that day.
    """
    if raw is None or not raw.strip():
        return None
    try:
        return ensure_utc(datetime.fromisoformat(raw.strip()))
    except ValueError:
        return None
