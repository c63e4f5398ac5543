#!/usr/bin/env python3
"""Core models and validation helpers for ezdp."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Callable, List, Literal, Optional, Sequence, Tuple, Union

DATE_FMT = "%Y-%m-%d"

PickerMode = Literal["single", "range"]
MODES: Sequence[PickerMode] = ("single", "range")
MONTHS_TO_SHOW: Sequence[int] = (1, 2)


class ValidationError(Exception):
    pass


@dataclass(frozen=True)
class DateRange:
    start: Optional[date] = None
    end: Optional[date] = None

    @property
    def is_empty(self) -> bool:
        return self.start is None and self.end is None

    @property
    def is_complete(self) -> bool:
        return self.start is not None and self.end is not None


EMPTY_RANGE = DateRange()


@dataclass(frozen=True)
class CalendarDay:
    date: date
    current_month: bool


@dataclass(frozen=True)
class CalendarMonth:
    month_date: date
    label: str
    days: Tuple[CalendarDay, ...]


@dataclass(frozen=True)
class PresetContext:
    today: date
    start_week_on_monday: bool = False


# Preset sources are either a fixed value or a pure function of the context.


@dataclass(frozen=True)
class StaticDate:
    value: date


@dataclass(frozen=True)
class DerivedDate:
    fn: Callable[[PresetContext], Optional[date]]


@dataclass(frozen=True)
class StaticRange:
    value: DateRange


@dataclass(frozen=True)
class DerivedRange:
    fn: Callable[[PresetContext], Optional[DateRange]]


DateSource = Union[StaticDate, DerivedDate]
RangeSource = Union[StaticRange, DerivedRange]


@dataclass(frozen=True)
class SingleDatePreset:
    id: str
    label: str
    date: Optional[date] = None
    get_date: Optional[Callable[[PresetContext], Optional[date]]] = field(
        default=None, compare=False
    )

    @property
    def sources(self) -> Tuple[DateSource, ...]:
        """Candidate sources, generator first."""
        found: List[DateSource] = []
        if self.get_date is not None:
            found.append(DerivedDate(self.get_date))
        if self.date is not None:
            found.append(StaticDate(self.date))
        return tuple(found)


@dataclass(frozen=True)
class RangeDatePreset:
    id: str
    label: str
    range: Optional[DateRange] = None
    get_range: Optional[Callable[[PresetContext], Optional[DateRange]]] = field(
        default=None, compare=False
    )

    @property
    def sources(self) -> Tuple[RangeSource, ...]:
        found: List[RangeSource] = []
        if self.get_range is not None:
            found.append(DerivedRange(self.get_range))
        if self.range is not None:
            found.append(StaticRange(self.range))
        return tuple(found)


@dataclass(frozen=True)
class ResolvedSingleDatePreset:
    id: str
    label: str
    date: date


@dataclass(frozen=True)
class ResolvedRangeDatePreset:
    id: str
    label: str
    range: DateRange


def parse_date(value: str) -> date:
    """Parse an ISO ``YYYY-MM-DD`` string (a trailing time part is ignored)."""
    value = str(value).strip()
    if not value:
        raise ValidationError("Date value cannot be empty")

    try:
        return datetime.strptime(value[:10], DATE_FMT).date()
    except ValueError as exc:
        raise ValidationError(
            f"Invalid date format: '{value}'. Expected YYYY-MM-DD"
        ) from exc


def parse_month(value: str) -> date:
    """Parse ``YYYY-MM`` into the first day of that month."""
    value = str(value).strip()
    try:
        return datetime.strptime(value, "%Y-%m").date()
    except ValueError as exc:
        raise ValidationError(
            f"Invalid month format: '{value}'. Expected YYYY-MM"
        ) from exc


def normalize_mode(raw_mode: object | None) -> PickerMode:
    if raw_mode is None:
        raise ValidationError("Missing 'mode' value")
    mode = str(raw_mode).strip().lower()
    if mode not in MODES:
        valid = ", ".join(MODES)
        raise ValidationError(f"Invalid mode '{mode}'. Expected one of: {valid}")
    return mode  # type: ignore[return-value]


def normalize_months_to_show(raw_value: object) -> int:
    if isinstance(raw_value, bool):
        raise ValidationError("Months to show must be 1 or 2")
    try:
        months = int(raw_value)  # type: ignore[arg-type]
    except (TypeError, ValueError) as exc:
        raise ValidationError("Months to show must be 1 or 2") from exc
    if months not in MONTHS_TO_SHOW:
        raise ValidationError(f"Months to show must be 1 or 2, got {months}")
    return months


def single_preset_from_payload(data: dict) -> SingleDatePreset:
    preset_id, label = _preset_identity(data)
    raw_date = data.get("date")
    return SingleDatePreset(
        id=preset_id,
        label=label,
        date=parse_date(raw_date) if raw_date is not None else None,
    )


def range_preset_from_payload(data: dict) -> RangeDatePreset:
    preset_id, label = _preset_identity(data)
    raw_range = data.get("range")
    if raw_range is None:
        return RangeDatePreset(id=preset_id, label=label)
    if not isinstance(raw_range, dict):
        raise ValidationError(f"Preset '{preset_id}' range must be an object")
    start = raw_range.get("start")
    end = raw_range.get("end")
    return RangeDatePreset(
        id=preset_id,
        label=label,
        range=DateRange(
            start=parse_date(start) if start is not None else None,
            end=parse_date(end) if end is not None else None,
        ),
    )


def _preset_identity(data: dict) -> Tuple[str, str]:
    if not isinstance(data, dict):
        raise ValidationError("Preset declaration must be an object")
    preset_id = str(data.get("id") or "").strip()
    if not preset_id:
        raise ValidationError("Preset declaration requires an 'id'")
    label = str(data.get("label") or preset_id).strip()
    return preset_id, label


__all__ = [
    "CalendarDay",
    "CalendarMonth",
    "DATE_FMT",
    "DateRange",
    "DateSource",
    "DerivedDate",
    "DerivedRange",
    "EMPTY_RANGE",
    "MODES",
    "MONTHS_TO_SHOW",
    "PickerMode",
    "PresetContext",
    "RangeDatePreset",
    "RangeSource",
    "ResolvedRangeDatePreset",
    "ResolvedSingleDatePreset",
    "SingleDatePreset",
    "StaticDate",
    "StaticRange",
    "ValidationError",
    "normalize_mode",
    "normalize_months_to_show",
    "parse_date",
    "parse_month",
    "range_preset_from_payload",
    "single_preset_from_payload",
]
