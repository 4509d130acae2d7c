"""Date helpers shared by expiry checks and meal planning."""

from datetime import UTC, datetime, timedelta


def as_utc(value: datetime) -> datetime:
    """Attach UTC to naive datetimes (SQLite drops the offset on read)."""
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value.astimezone(UTC)


def days_until(value: datetime, now: datetime | None = None) -> int:
    """Whole days from ``now`` until ``value``, rounded up."""
    now = now or datetime.now(UTC)
    seconds = (as_utc(value) - now).total_seconds()
    days, remainder = divmod(seconds, 86400)
    return int(days) + (1 if remainder > 0 else 0)


def start_of_week(value: datetime) -> datetime:
    """Monday 00:00 of the week containing ``value``."""
    monday = value - timedelta(days=value.weekday())
    return monday.replace(hour=0, minute=0, second=0, microsecond=0)


def end_of_week(value: datetime) -> datetime:
    """Sunday 23:59:59.999999 of the week containing ``value``."""
    return start_of_week(value) + timedelta(days=7, microseconds=-1)
