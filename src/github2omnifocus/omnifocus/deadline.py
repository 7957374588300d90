"""Deadline inference for Taskmaster tasks.

Taskmaster issues are labelled with the period they are planned for: a
half, quarter or week of the year ("2H", "3Q", "12W") or a month ("Mar").
The deadline is the last second of that period in the current year.
"""

import logging
import re
from collections.abc import Iterable
from datetime import datetime, timedelta

from ..utils.datetime import now_local

logger = logging.getLogger(__name__)

PERIOD_PATTERN = re.compile(r"^(\d+)([HQW])$", re.IGNORECASE)

MONTH_ABBREVIATIONS = (
    "jan", "feb", "mar", "apr", "may", "jun", "jul", "aug", "sep", "oct", "nov", "dec",
)  # fmt: skip

_ONE_SECOND = timedelta(seconds=1)


def deadline(tags: Iterable[str], now: datetime | None = None) -> datetime | None:
    """Deadline implied by the first period or month tag, or None."""
    now = now or now_local()
    for tag in tags:
        match = PERIOD_PATTERN.match(tag.strip())
        if match:
            try:
                return end_of_period(int(match.group(1)), match.group(2).upper(), now)
            except (OverflowError, ValueError):
                logger.debug("Ignoring out of range period tag: %s", tag)
                continue

        month = month_number(tag)
        if month is not None:
            return _start_of_month(now, month + 1) - _ONE_SECOND
    return None


def end_of_period(number: int, unit: str, now: datetime) -> datetime:
    """Last second of the ``number``-th half ("H"), quarter ("Q") or week ("W")."""
    if unit == "H":
        return _start_of_month(now, 6 * number + 1) - _ONE_SECOND
    if unit == "Q":
        return _start_of_month(now, 3 * number + 1) - _ONE_SECOND
    if unit == "W":
        return _start_of_month(now, 1) + timedelta(days=7 * number) - _ONE_SECOND
    raise ValueError(f"Unknown period unit: {unit}")


def month_number(tag: str) -> int | None:
    """1-12 for a month abbreviation like "Jan" (any case), else None."""
    try:
        return MONTH_ABBREVIATIONS.index(tag.strip().lower()) + 1
    except ValueError:
        return None


def _start_of_month(now: datetime, month: int) -> datetime:
    """Midnight on the 1st of ``month`` of now's year; months past 12 roll over."""
    year = now.year + (month - 1) // 12
    month = (month - 1) % 12 + 1
    return now.replace(year=year, month=month, day=1, hour=0, minute=0, second=0, microsecond=0)
