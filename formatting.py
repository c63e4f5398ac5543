#!/usr/bin/env python3
"""Locale-aware display strings.

Nothing in this module feeds back into selection logic: it only turns
already-normalized dates into text for the rendering layer.
"""

from __future__ import annotations

import logging
from datetime import date
from functools import lru_cache
from typing import List, Optional

from babel import Locale, UnknownLocaleError
from babel.dates import (
    format_date,
    format_skeleton,
    get_day_names,
    match_skeleton,
    tokenize_pattern,
    untokenize_pattern,
)

from models import DateRange

logger = logging.getLogger(__name__)

DEFAULT_LOCALE = "en-US"
EMPTY_ENDPOINT = "--"
INPUT_DATE_SKELETON = "yMMMd"


@lru_cache(maxsize=32)
def resolve_locale(identifier: Optional[str]) -> Locale:
    """Map ``en-US`` / ``en_US`` style identifiers to a Babel locale."""
    candidate = (identifier or DEFAULT_LOCALE).strip().replace("-", "_")
    try:
        return Locale.parse(candidate)
    except (UnknownLocaleError, ValueError):
        logger.warning("Unknown locale %r, falling back to %s", identifier, DEFAULT_LOCALE)
        return Locale.parse(DEFAULT_LOCALE.replace("-", "_"))


@lru_cache(maxsize=32)
def input_date_pattern(locale: Optional[str] = DEFAULT_LOCALE) -> str:
    """Locale pattern for year, short month name and a two-digit day.

    Babel resolves skeletons without widening fields, so the day field of the
    matched ``yMMMd`` pattern is padded here (``MMM d, y`` -> ``MMM dd, y``).
    """
    resolved = resolve_locale(locale)
    skeletons = resolved.datetime_skeletons
    key = INPUT_DATE_SKELETON
    if key not in skeletons:
        key = match_skeleton(key, skeletons)
    if key is None:
        return "MMM dd, y"
    tokens = [
        ("field", ("d", 2)) if kind == "field" and value == ("d", 1) else (kind, value)
        for kind, value in tokenize_pattern(skeletons[key].pattern)
    ]
    return untokenize_pattern(tokens)


def format_input_date(value: Optional[date], locale: Optional[str] = DEFAULT_LOCALE) -> str:
    if value is None:
        return ""
    return format_date(value, format=input_date_pattern(locale), locale=resolve_locale(locale))


def format_range_value(value: Optional[DateRange], locale: Optional[str] = DEFAULT_LOCALE) -> str:
    if value is None or value.start is None:
        return ""
    start = format_input_date(value.start, locale)
    if value.end is None:
        return f"{start} - ..."
    return f"{start} - {format_input_date(value.end, locale)}"


def format_endpoint(value: Optional[date], locale: Optional[str] = DEFAULT_LOCALE) -> str:
    return format_input_date(value, locale) if value is not None else EMPTY_ENDPOINT


def format_month_label(month_date: date, locale: Optional[str] = DEFAULT_LOCALE) -> str:
    return format_skeleton("yMMMM", month_date, locale=resolve_locale(locale))


def weekday_labels(start_week_on_monday: bool, locale: Optional[str] = DEFAULT_LOCALE) -> List[str]:
    # Babel keys weekdays Monday=0 .. Sunday=6.
    names = get_day_names("abbreviated", locale=resolve_locale(locale))
    order = list(range(7)) if start_week_on_monday else [6, 0, 1, 2, 3, 4, 5]
    return [str(names[idx]) for idx in order]


__all__ = [
    "DEFAULT_LOCALE",
    "EMPTY_ENDPOINT",
    "format_endpoint",
    "format_input_date",
    "format_month_label",
    "format_range_value",
    "input_date_pattern",
    "resolve_locale",
    "weekday_labels",
]
