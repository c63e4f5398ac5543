import logging
from datetime import date

from formatting import (
    format_endpoint,
    format_input_date,
    format_month_label,
    format_range_value,
    input_date_pattern,
    resolve_locale,
    weekday_labels,
)
from models import DateRange


def test_format_input_date_en_us() -> None:
    assert format_input_date(date(2024, 3, 15), "en-US") == "Mar 15, 2024"
    assert format_input_date(date(2024, 3, 5), "en-US") == "Mar 05, 2024"
    assert format_input_date(None, "en-US") == ""


def test_format_input_date_follows_locale() -> None:
    german = format_input_date(date(2024, 3, 5), "de-DE")

    assert german.startswith("05. ")
    assert "März" in german
    assert german.endswith("2024")


def test_input_date_pattern_pads_day() -> None:
    assert input_date_pattern("en-US") == "MMM dd, y"


def test_format_range_value_states() -> None:
    start, end = date(2024, 3, 10), date(2024, 3, 20)

    assert format_range_value(DateRange(start, end)) == "Mar 10, 2024 - Mar 20, 2024"
    assert format_range_value(DateRange(start, None)) == "Mar 10, 2024 - ..."
    assert format_range_value(DateRange()) == ""
    assert format_range_value(None) == ""


def test_format_endpoint_placeholder() -> None:
    assert format_endpoint(None) == "--"
    assert format_endpoint(date(2024, 3, 10)) == "Mar 10, 2024"


def test_format_month_label() -> None:
    assert format_month_label(date(2024, 3, 1), "en-US") == "March 2024"


def test_weekday_labels_follow_week_start() -> None:
    assert weekday_labels(False) == ["Sun", "Mon", "Tue", "Wed", "Thu", "Fri", "Sat"]
    assert weekday_labels(True) == ["Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun"]


def test_unknown_locale_falls_back(caplog) -> None:
    with caplog.at_level(logging.WARNING, logger="formatting"):
        locale = resolve_locale("zz-ZZ")

    assert str(locale) == "en_US"
    assert "zz-ZZ" in caplog.text
    assert format_input_date(date(2024, 3, 15), "zz-ZZ") == "Mar 15, 2024"
