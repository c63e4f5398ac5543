#!/usr/bin/env python3
"""Month grid construction — no UI dependencies."""

from __future__ import annotations

import calendar
from datetime import date
from typing import List, Optional, Sequence, Tuple

from date_utils import add_months, start_of_month
from formatting import DEFAULT_LOCALE, format_month_label
from models import CalendarDay, CalendarMonth


def get_calendar_days(month_date: date, start_week_on_monday: bool) -> List[CalendarDay]:
    """Return the cells of a month view, padded to whole 7-day rows.

    Leading cells borrow from the previous month and trailing cells from the
    next one; both are flagged ``current_month=False``. Rows start on Monday
    or Sunday depending on ``start_week_on_monday``. Spillover days before
    ``date.min`` or after ``date.max`` are left out, so the first and last
    supported months may come back short of whole rows.
    """
    cal = calendar.Calendar(firstweekday=calendar.MONDAY if start_week_on_monday else calendar.SUNDAY)
    return [
        CalendarDay(date=date(year, month, day), current_month=month == month_date.month)
        for year, month, day in cal.itermonthdays3(month_date.year, month_date.month)
        if date.min.year <= year <= date.max.year
    ]


def build_month_grid(
    month_date: date,
    start_week_on_monday: bool,
    *,
    locale: Optional[str] = DEFAULT_LOCALE,
) -> CalendarMonth:
    first = start_of_month(month_date)
    return CalendarMonth(
        month_date=first,
        label=format_month_label(first, locale),
        days=tuple(get_calendar_days(first, start_week_on_monday)),
    )


def build_calendar_months(
    view_month: date,
    count: int,
    start_week_on_monday: bool,
    *,
    locale: Optional[str] = DEFAULT_LOCALE,
) -> List[CalendarMonth]:
    return [
        build_month_grid(add_months(view_month, offset), start_week_on_monday, locale=locale)
        for offset in range(count)
    ]


def weeks_of(days: Sequence[CalendarDay]) -> List[Tuple[CalendarDay, ...]]:
    return [tuple(days[idx : idx + 7]) for idx in range(0, len(days), 7)]


__all__ = [
    "build_calendar_months",
    "build_month_grid",
    "get_calendar_days",
    "weeks_of",
]
