from datetime import date, datetime

import pytest

from models import DateRange, PresetContext, RangeDatePreset, SingleDatePreset
from presets import (
    DEFAULT_RANGE_PRESETS,
    DEFAULT_SINGLE_PRESETS,
    range_presets_or_default,
    resolve_range_presets,
    resolve_single_presets,
    single_presets_or_default,
)

WEDNESDAY = date(2024, 3, 13)


def _context(monday_first: bool = False) -> PresetContext:
    return PresetContext(today=WEDNESDAY, start_week_on_monday=monday_first)


def _ranges(monday_first: bool = False) -> dict:
    resolved = resolve_range_presets(DEFAULT_RANGE_PRESETS, _context(monday_first))
    return {preset.id: preset.range for preset in resolved}


def test_default_single_presets() -> None:
    resolved = resolve_single_presets(DEFAULT_SINGLE_PRESETS, _context())

    assert [(p.id, p.label, p.date) for p in resolved] == [
        ("yesterday", "Yesterday", date(2024, 3, 12)),
        ("today", "Today", WEDNESDAY),
        ("tomorrow", "Tomorrow", date(2024, 3, 14)),
    ]


def test_default_range_presets_sunday_first() -> None:
    ranges = _ranges()

    assert list(ranges) == ["last-week", "last-month", "next-week", "next-month"]
    assert ranges["last-week"] == DateRange(date(2024, 3, 3), date(2024, 3, 9))
    assert ranges["last-month"] == DateRange(date(2024, 2, 1), date(2024, 2, 29))
    assert ranges["next-week"] == DateRange(date(2024, 3, 17), date(2024, 3, 23))
    assert ranges["next-month"] == DateRange(date(2024, 4, 1), date(2024, 4, 30))


def test_default_range_presets_monday_first() -> None:
    ranges = _ranges(monday_first=True)

    assert ranges["last-week"] == DateRange(date(2024, 3, 4), date(2024, 3, 10))
    assert ranges["next-week"] == DateRange(date(2024, 3, 18), date(2024, 3, 24))


def test_presets_reevaluate_against_context() -> None:
    later = PresetContext(today=date(2024, 12, 31))
    resolved = resolve_range_presets(DEFAULT_RANGE_PRESETS, later)
    by_id = {p.id: p.range for p in resolved}

    assert by_id["next-month"] == DateRange(date(2025, 1, 1), date(2025, 1, 31))


def test_static_single_preset_is_normalized() -> None:
    presets = [SingleDatePreset("launch", "Launch", date=datetime(2024, 5, 1, 17, 30))]

    resolved = resolve_single_presets(presets, _context())

    assert resolved[0].date == date(2024, 5, 1)
    assert type(resolved[0].date) is date


def test_static_range_preset_is_reordered() -> None:
    presets = [RangeDatePreset("backwards", "Backwards", range=DateRange(date(2024, 3, 20), date(2024, 3, 10)))]

    resolved = resolve_range_presets(presets, _context())

    assert resolved[0].range == DateRange(date(2024, 3, 10), date(2024, 3, 20))


def test_generator_wins_over_static_value() -> None:
    preset = SingleDatePreset(
        "both",
        "Both",
        date=date(2000, 1, 1),
        get_date=lambda ctx: ctx.today,
    )

    assert resolve_single_presets([preset], _context())[0].date == WEDNESDAY


def test_static_value_backs_up_empty_generator() -> None:
    preset = SingleDatePreset("both", "Both", date=date(2000, 1, 1), get_date=lambda ctx: None)

    assert resolve_single_presets([preset], _context())[0].date == date(2000, 1, 1)


def test_unresolvable_presets_are_dropped_in_order() -> None:
    singles = [
        SingleDatePreset("first", "First", date=date(2024, 1, 1)),
        SingleDatePreset("nothing", "Nothing"),
        SingleDatePreset("none", "None", get_date=lambda ctx: None),
        SingleDatePreset("last", "Last", get_date=lambda ctx: date(2023, 1, 1)),
    ]
    ranges = [
        RangeDatePreset("half", "Half", range=DateRange(date(2024, 1, 1), None)),
        RangeDatePreset("empty", "Empty"),
        RangeDatePreset("gen-half", "Gen half", get_range=lambda ctx: DateRange(None, ctx.today)),
        RangeDatePreset("ok", "Ok", get_range=lambda ctx: DateRange(ctx.today, ctx.today)),
    ]

    assert [p.id for p in resolve_single_presets(singles, _context())] == ["first", "last"]
    assert [p.id for p in resolve_range_presets(ranges, _context())] == ["ok"]


def test_presets_are_not_deduplicated() -> None:
    presets = [
        SingleDatePreset("a", "A", date=WEDNESDAY),
        SingleDatePreset("b", "B", date=WEDNESDAY),
    ]

    assert [p.id for p in resolve_single_presets(presets, _context())] == ["a", "b"]


def test_generator_errors_propagate() -> None:
    def broken(ctx):
        raise RuntimeError("boom")

    with pytest.raises(RuntimeError):
        resolve_single_presets([SingleDatePreset("bad", "Bad", get_date=broken)], _context())


def test_defaults_used_only_without_custom_list() -> None:
    custom = [SingleDatePreset("x", "X", date=WEDNESDAY)]

    assert single_presets_or_default(None) is DEFAULT_SINGLE_PRESETS
    assert single_presets_or_default(custom) is custom
    assert range_presets_or_default(None) is DEFAULT_RANGE_PRESETS
