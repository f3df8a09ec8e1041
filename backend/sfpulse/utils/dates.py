"""
Date helpers shared by the filters and the orchestrators.

Timestamps coming from upstream APIs are normalized to timezone-aware UTC for
comparisons. Week keys (``week_of``) are stored as naive UTC midnights, like
the rest of the database timestamps.
"""
from datetime import date, datetime, time, timedelta, timezone
from email.utils import parsedate_to_datetime
from typing import Optional, Union

DateLike = Union[str, date, datetime]


def _as_utc(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def parse_datetime(value: Optional[DateLike]) -> Optional[datetime]:
    """
    Parse ISO 8601 or RFC 2822 timestamps into aware UTC datetimes

    Returns None when the value cannot be parsed.
    """
    if value is None:
        return None
    if isinstance(value, datetime):
        return _as_utc(value)
    if isinstance(value, date):
        return datetime.combine(value, time.min, tzinfo=timezone.utc)

    text = str(value).strip()
    if not text:
        return None

    try:
        if text.endswith("Z"):
            text = text[:-1] + "+00:00"
        return _as_utc(datetime.fromisoformat(text))
    except ValueError:
        pass

    # RSS pubDate, e.g. "Tue, 21 Oct 2025 14:03:00 GMT"
    try:
        return _as_utc(parsedate_to_datetime(text))
    except (TypeError, ValueError, IndexError):
        return None


def start_of_day(value: DateLike) -> datetime:
    """Midnight UTC of the given day"""
    parsed = parse_datetime(value)
    if parsed is None:
        raise ValueError(f"Invalid date: {value!r}")
    return parsed.replace(hour=0, minute=0, second=0, microsecond=0)


def normalize_week(value: DateLike) -> datetime:
    """Naive UTC midnight used as the ``week_of`` key"""
    return start_of_day(value).replace(tzinfo=None)


def most_recent_sunday(now: Optional[datetime] = None) -> datetime:
    """Naive midnight of the latest Sunday on or before ``now``"""
    now = now or datetime.utcnow()
    # Monday=0 ... Sunday=6
    days_since_sunday = (now.weekday() + 1) % 7
    sunday = now - timedelta(days=days_since_sunday)
    return datetime.combine(sunday.date(), time.min)


def monday_of_week(value: datetime) -> date:
    """Monday of the ISO week containing ``value`` (Sundays belong to the previous week)"""
    return (value - timedelta(days=value.weekday())).date()
