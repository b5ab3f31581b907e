from __future__ import annotations

from datetime import datetime, timedelta, timezone, tzinfo
from typing import Callable


def end_of_day(value: datetime, tz: tzinfo | None = None) -> datetime:
    """
    Last second of the calendar day `value` falls on. The day is taken in `tz`
    when given, otherwise in the timezone `value` already carries.
    """
    if tz is not None:
        value = value.astimezone(tz)
    return value.replace(hour=23, minute=59, second=59, microsecond=0)


def later_of(*values: datetime | None) -> datetime | None:
    present = [v for v in values if v is not None]
    return max(present) if present else None


def safe_view_date(
    view_date: datetime | None,
    due_date: datetime | None,
    stop_date: datetime | None = None,
    start_date: datetime | None = None,
) -> datetime | None:
    """
    The later of the view and due dates. Evaluations with neither fall back
    to the stop date and then the start date.
    """
    return later_of(view_date, due_date) or stop_date or start_date


def push_due_for_min_gap(
    start_date: datetime,
    due_date: datetime,
    min_hours: int,
) -> datetime:
    """Due date moved later, if needed, so it is at least `min_hours` after start."""
    earliest = start_date + timedelta(hours=min_hours)
    if due_date < earliest:
        return earliest
    return due_date


Clock = Callable[[], datetime]


def utc_now() -> datetime:
    return datetime.now(timezone.utc)
