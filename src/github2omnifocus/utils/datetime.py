"""Utilities for due date handling."""

from datetime import datetime

END_OF_DAY_HOUR = 17


def now_local() -> datetime:
    """Get current local datetime (timezone aware)."""
    return datetime.now().astimezone()


def end_of_today(now: datetime | None = None) -> datetime:
    """The "end of today": 5pm local time on the current day."""
    now = now or now_local()
    return now.replace(hour=END_OF_DAY_HOUR, minute=0, second=0, microsecond=0)


def to_epoch_ms(dt: datetime) -> int:
    """Convert datetime to milliseconds since the epoch."""
    return int(dt.timestamp() * 1000)
