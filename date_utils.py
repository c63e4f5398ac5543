#!/usr/bin/env python3
"""Day-granularity date helpers for the picker engine.

Everything here works on ``datetime.date`` values. ``start_of_day`` is the
single entry point that reduces a ``datetime`` to its calendar day; all other
helpers normalize their inputs through it before comparing.
"""

from __future__ import annotations

from datetime import date, datetime, timedelta
from typing import Optional, Tuple

from dateutil.relativedelta import relativedelta

from models import DateRange


def start_of_day(value: date) -> date:
    if isinstance(value, datetime):
        return value.date()
    return date(value.year, value.month, value.day)


def is_same_day(a: date, b: date) -> bool:
    return (a.year, a.month, a.day) == (b.year, b.month, b.day)


def order_dates(a: date, b: date) -> Tuple[date, date]:
    return (a, b) if start_of_day(a) <= start_of_day(b) else (b, a)


def add_days(value: date, days: int) -> date:
    return start_of_day(value) + timedelta(days=days)


def add_months(value: date, months: int) -> date:
    """Shift by whole months, pinned to day 1 of the target month."""
    return start_of_month(value) + relativedelta(months=months)


def _weekday_index(value: date, start_week_on_monday: bool) -> int:
    # date.weekday() is Monday-based; shift for Sunday-first weeks.
    if start_week_on_monday:
        return value.weekday()
    return (value.weekday() + 1) % 7


def start_of_week(value: date, start_week_on_monday: bool) -> date:
    return add_days(value, -_weekday_index(value, start_week_on_monday))


def end_of_week(value: date, start_week_on_monday: bool) -> date:
    return add_days(start_of_week(value, start_week_on_monday), 6)


def start_of_month(value: date) -> date:
    return date(value.year, value.month, 1)


def end_of_month(value: date) -> date:
    return start_of_month(value) + relativedelta(months=1, days=-1)


def is_date_disabled(
    value: date,
    min_date: Optional[date] = None,
    max_date: Optional[date] = None,
) -> bool:
    day = start_of_day(value)
    if min_date is not None and day < start_of_day(min_date):
        return True
    if max_date is not None and day > start_of_day(max_date):
        return True
    return False


def is_between(value: date, start: date, end: date) -> bool:
    """Strict membership: the endpoints themselves are excluded."""
    return start_of_day(start) < start_of_day(value) < start_of_day(end)


def is_same_month(a: date, b: date) -> bool:
    return (a.year, a.month) == (b.year, b.month)


def normalize_range(value: Optional[DateRange]) -> Optional[DateRange]:
    if value is None:
        return None
    return DateRange(
        start=start_of_day(value.start) if value.start is not None else None,
        end=start_of_day(value.end) if value.end is not None else None,
    )


def normalize_preset_range(value: Optional[DateRange]) -> Optional[DateRange]:
    """Normalize and reorder a range; ``None`` when an endpoint is missing."""
    if value is None or value.start is None or value.end is None:
        return None
    start, end = order_dates(start_of_day(value.start), start_of_day(value.end))
    return DateRange(start=start, end=end)


__all__ = [
    "add_days",
    "add_months",
    "end_of_month",
    "end_of_week",
    "is_between",
    "is_date_disabled",
    "is_same_day",
    "is_same_month",
    "normalize_preset_range",
    "normalize_range",
    "order_dates",
    "start_of_day",
    "start_of_month",
    "start_of_week",
]
