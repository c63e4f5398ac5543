#!/usr/bin/env python3
"""Built-in presets and preset resolution."""

from __future__ import annotations

import logging
from datetime import date
from typing import Iterable, List, Optional, Sequence, TypeVar

from date_utils import (
    add_days,
    add_months,
    end_of_month,
    end_of_week,
    normalize_preset_range,
    start_of_day,
    start_of_month,
    start_of_week,
)
from models import (
    DateRange,
    DateSource,
    DerivedDate,
    DerivedRange,
    PresetContext,
    RangeDatePreset,
    RangeSource,
    ResolvedRangeDatePreset,
    ResolvedSingleDatePreset,
    SingleDatePreset,
    StaticDate,
    StaticRange,
)

logger = logging.getLogger(__name__)

T = TypeVar("T")


def _last_week(context: PresetContext) -> DateRange:
    current_week_start = start_of_week(context.today, context.start_week_on_monday)
    return DateRange(add_days(current_week_start, -7), add_days(current_week_start, -1))


def _last_month(context: PresetContext) -> DateRange:
    month = add_months(context.today, -1)
    return DateRange(start_of_month(month), end_of_month(month))


def _next_week(context: PresetContext) -> DateRange:
    start = add_days(end_of_week(context.today, context.start_week_on_monday), 1)
    return DateRange(start, add_days(start, 6))


def _next_month(context: PresetContext) -> DateRange:
    month = add_months(context.today, 1)
    return DateRange(start_of_month(month), end_of_month(month))


DEFAULT_SINGLE_PRESETS: Sequence[SingleDatePreset] = (
    SingleDatePreset("yesterday", "Yesterday", get_date=lambda ctx: add_days(ctx.today, -1)),
    SingleDatePreset("today", "Today", get_date=lambda ctx: ctx.today),
    SingleDatePreset("tomorrow", "Tomorrow", get_date=lambda ctx: add_days(ctx.today, 1)),
)

DEFAULT_RANGE_PRESETS: Sequence[RangeDatePreset] = (
    RangeDatePreset("last-week", "Last Week", get_range=_last_week),
    RangeDatePreset("last-month", "Last Month", get_range=_last_month),
    RangeDatePreset("next-week", "Next Week", get_range=_next_week),
    RangeDatePreset("next-month", "Next Month", get_range=_next_month),
)


def resolve_date_source(source: Optional[DateSource], context: PresetContext) -> Optional[date]:
    if isinstance(source, DerivedDate):
        value = source.fn(context)
    elif isinstance(source, StaticDate):
        value = source.value
    else:
        return None
    if not isinstance(value, date):
        return None
    return start_of_day(value)


def resolve_range_source(source: Optional[RangeSource], context: PresetContext) -> Optional[DateRange]:
    if isinstance(source, DerivedRange):
        value = source.fn(context)
    elif isinstance(source, StaticRange):
        value = source.value
    else:
        return None
    if not isinstance(value, DateRange):
        return None
    return normalize_preset_range(value)


def _first_resolved(candidates: Iterable[Optional[T]]) -> Optional[T]:
    # Lazy: a static fallback is only consulted when the generator yields nothing.
    return next((value for value in candidates if value is not None), None)


def resolve_single_presets(
    presets: Iterable[SingleDatePreset],
    context: PresetContext,
) -> List[ResolvedSingleDatePreset]:
    """Resolve declarations in order, dropping those that yield no date."""
    resolved: List[ResolvedSingleDatePreset] = []
    for preset in presets:
        value = _first_resolved(
            resolve_date_source(source, context) for source in preset.sources
        )
        if value is None:
            logger.debug("Dropping single preset %r: no date resolved", preset.id)
            continue
        resolved.append(ResolvedSingleDatePreset(id=preset.id, label=preset.label, date=value))
    return resolved


def resolve_range_presets(
    presets: Iterable[RangeDatePreset],
    context: PresetContext,
) -> List[ResolvedRangeDatePreset]:
    """Resolve declarations in order, dropping those missing an endpoint."""
    resolved: List[ResolvedRangeDatePreset] = []
    for preset in presets:
        value = _first_resolved(
            resolve_range_source(source, context) for source in preset.sources
        )
        if value is None:
            logger.debug("Dropping range preset %r: incomplete range", preset.id)
            continue
        resolved.append(ResolvedRangeDatePreset(id=preset.id, label=preset.label, range=value))
    return resolved


def single_presets_or_default(
    presets: Optional[Sequence[SingleDatePreset]],
) -> Sequence[SingleDatePreset]:
    return DEFAULT_SINGLE_PRESETS if presets is None else presets


def range_presets_or_default(
    presets: Optional[Sequence[RangeDatePreset]],
) -> Sequence[RangeDatePreset]:
    return DEFAULT_RANGE_PRESETS if presets is None else presets


__all__ = [
    "DEFAULT_RANGE_PRESETS",
    "DEFAULT_SINGLE_PRESETS",
    "range_presets_or_default",
    "resolve_date_source",
    "resolve_range_presets",
    "resolve_range_source",
    "resolve_single_presets",
    "single_presets_or_default",
]
