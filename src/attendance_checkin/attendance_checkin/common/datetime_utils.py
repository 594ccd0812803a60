from __future__ import annotations

from datetime import date, datetime, time, timezone
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from ..core.constants import DAY_FORMAT
from ..core.exceptions import ValidationError


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    try:
        return datetime.strptime(value, DAY_FORMAT).date()
    except (TypeError, ValueError):
        raise ValidationError(f"Invalid date '{value}', expected YYYY-MM-DD")


def parse_iso_datetime(value: str, tz: ZoneInfo) -> datetime:
    """Parse an ISO-8601 timestamp.

    Accepts a trailing ``Z``. Naive values are read as wall-clock time in ``tz``.
    """
    if not isinstance(value, str) or not value.strip():
        raise ValidationError("dateTime must be an ISO-8601 string")
    text = value.strip()
    if text.endswith(("Z", "z")):
        text = text[:-1] + "+00:00"
    try:
        parsed = datetime.fromisoformat(text)
    except ValueError:
        raise ValidationError(f"Invalid dateTime '{value}'")
    return ensure_aware(parsed, tz)


def now_utc() -> datetime:
    """Current time (UTC, timezone-aware).

    Note: Wrapped so tests can inject a fixed clock.
    """
    return datetime.now(timezone.utc)


def load_timezone(name: str) -> ZoneInfo:
    try:
        return ZoneInfo(name)
    except (ZoneInfoNotFoundError, ValueError):
        raise ValueError(f"Unknown reporting timezone: {name!r}")


def ensure_aware(dt: datetime, tz: ZoneInfo) -> datetime:
    if dt.tzinfo is None:
        return dt.replace(tzinfo=tz)
    return dt


def calendar_day(dt: datetime, tz: ZoneInfo) -> date:
    """Calendar day of an instant as seen in the reporting timezone."""
    return ensure_aware(dt, tz).astimezone(tz).date()


def day_bounds_utc(day: date, tz: ZoneInfo) -> tuple[datetime, datetime]:
    """First and last instant of ``day`` in ``tz``, both expressed in UTC."""
    start = datetime.combine(day, time.min, tzinfo=tz)
    end = datetime.combine(day, time.max, tzinfo=tz)
    return start.astimezone(timezone.utc), end.astimezone(timezone.utc)


def format_utc(dt: datetime) -> str:
    """ISO 8601 in UTC with a 'Z' suffix."""
    iso = dt.astimezone(timezone.utc).isoformat()
    if iso.endswith("+00:00"):
        return iso[: -len("+00:00")] + "Z"
    return iso
