from datetime import date

import pytest

from models import (
    DateRange,
    DerivedDate,
    DerivedRange,
    RangeDatePreset,
    SingleDatePreset,
    StaticDate,
    StaticRange,
    ValidationError,
    normalize_mode,
    normalize_months_to_show,
    parse_date,
    parse_month,
    range_preset_from_payload,
    single_preset_from_payload,
)


def test_parse_date_accepts_iso_and_ignores_time() -> None:
    assert parse_date("2024-03-15") == date(2024, 3, 15)
    assert parse_date(" 2024-03-15T13:45:00 ") == date(2024, 3, 15)


@pytest.mark.parametrize("raw", ["", "15/03/2024", "2024-13-01", "tomorrow"])
def test_parse_date_rejects_garbage(raw: str) -> None:
    with pytest.raises(ValidationError):
        parse_date(raw)


def test_parse_month_pins_first_day() -> None:
    assert parse_month("2024-02") == date(2024, 2, 1)
    with pytest.raises(ValidationError):
        parse_month("2024-2-30")


def test_normalize_mode_and_months() -> None:
    assert normalize_mode(" Range ") == "range"
    assert normalize_months_to_show("2") == 2
    with pytest.raises(ValidationError):
        normalize_mode("multi")
    with pytest.raises(ValidationError):
        normalize_months_to_show(3)
    with pytest.raises(ValidationError):
        normalize_months_to_show(True)


def test_date_range_states() -> None:
    assert DateRange().is_empty
    assert not DateRange(date(2024, 3, 1)).is_complete
    assert DateRange(date(2024, 3, 1), date(2024, 3, 2)).is_complete


def test_single_preset_sources_put_generator_first() -> None:
    def gen(ctx):
        return ctx.today

    preset = SingleDatePreset("x", "X", date=date(2024, 1, 1), get_date=gen)
    kinds = [type(source) for source in preset.sources]

    assert kinds == [DerivedDate, StaticDate]
    assert SingleDatePreset("empty", "Empty").sources == ()


def test_range_preset_sources() -> None:
    static = RangeDatePreset("s", "S", range=DateRange(date(2024, 1, 1), date(2024, 1, 2)))
    assert [type(source) for source in static.sources] == [StaticRange]

    derived = RangeDatePreset("d", "D", get_range=lambda ctx: None)
    assert [type(source) for source in derived.sources] == [DerivedRange]


def test_presets_from_payload() -> None:
    single = single_preset_from_payload({"id": "launch", "label": "Launch", "date": "2024-05-01"})
    assert single.date == date(2024, 5, 1)

    ranged = range_preset_from_payload(
        {"id": "q2", "range": {"start": "2024-04-01", "end": "2024-06-30"}}
    )
    assert ranged.label == "q2"
    assert ranged.range == DateRange(date(2024, 4, 1), date(2024, 6, 30))


def test_presets_from_payload_require_id() -> None:
    with pytest.raises(ValidationError):
        single_preset_from_payload({"label": "No id"})
    with pytest.raises(ValidationError):
        range_preset_from_payload({"id": "bad", "range": "2024-01-01"})
