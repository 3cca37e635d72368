"""
Timezone helpers.

Everything is stored and compared in UTC.

Conventions:
- `utc_now()`: delivery log and campaign timestamps
- `to_utc(dt)`: normalize datetimes coming from the database or the API
- `to_epoch_millis(dt)`: numeric form used by audience rules
"""

from datetime import datetime, timezone

TZ_UTC = timezone.utc


def utc_now() -> datetime:
    """
    Current datetime in UTC (timezone-aware).

    Returns:
        datetime in UTC with tzinfo
    """
    return datetime.now(TZ_UTC)


def to_utc(dt: datetime) -> datetime:
    """
    Convert a datetime to UTC.

    Args:
        dt: datetime to convert (naive values are assumed to be UTC)

    Returns:
        datetime in UTC
    """
    if dt.tzinfo is None:
        return dt.replace(tzinfo=TZ_UTC)
    return dt.astimezone(TZ_UTC)


def to_epoch_millis(dt: datetime) -> float:
    """Milliseconds since epoch, in UTC."""
    return to_utc(dt).timestamp() * 1000


def iso_utc(dt: datetime | None = None) -> str:
    """
    ISO 8601 string in UTC.

    Convenient for database inserts.

    Args:
        dt: datetime to format (default: now)

    Returns:
        ISO 8601 string in UTC
    """
    if dt is None:
        dt = utc_now()
    return to_utc(dt).isoformat()
