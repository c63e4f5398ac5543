import json
from datetime import date

import pytest

from config import PickerConfig, config_from_mapping, load_config
from models import ValidationError


def test_defaults() -> None:
    config = PickerConfig()

    assert config.mode == "single"
    assert config.months_to_show == 1
    assert config.locale == "en-US"
    assert config.show_range_meta is True
    assert config.single_presets is None


def test_invalid_values_rejected_at_construction() -> None:
    with pytest.raises(ValidationError):
        PickerConfig(mode="multi")
    with pytest.raises(ValidationError):
        PickerConfig(mode="range", range_months_to_show=3)
    with pytest.raises(ValidationError):
        PickerConfig().with_overrides(range_months_to_show=0)


def test_months_to_show_only_applies_in_range_mode() -> None:
    assert PickerConfig(mode="range", range_months_to_show=2).months_to_show == 2
    assert PickerConfig(mode="single", range_months_to_show=2).months_to_show == 1


def test_load_config_missing_file_gives_defaults(tmp_path) -> None:
    assert load_config(tmp_path / "absent.json") == PickerConfig()


def test_load_config_reads_xdg_path(tmp_path, monkeypatch) -> None:
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path))
    target = tmp_path / "ezdp" / "config.json"
    target.parent.mkdir(parents=True)
    target.write_text(json.dumps({"mode": "range", "range_months_to_show": 2, "start_week_on_monday": True}))

    config = load_config()

    assert config.mode == "range"
    assert config.months_to_show == 2
    assert config.start_week_on_monday is True


def test_load_config_tolerates_trailing_commas(tmp_path) -> None:
    path = tmp_path / "config.json"
    path.write_text('{\n  "locale": "de-DE",\n  "min_date": "2024-01-01",\n}\n')

    config = load_config(path)

    assert config.locale == "de-DE"
    assert config.min_date == date(2024, 1, 1)


def test_load_config_unreadable_json_falls_back(tmp_path) -> None:
    path = tmp_path / "config.json"
    path.write_text("{not json")

    assert load_config(path) == PickerConfig()


def test_load_config_invalid_values_raise(tmp_path) -> None:
    path = tmp_path / "config.json"
    path.write_text(json.dumps({"max_date": "31/01/2024"}))

    with pytest.raises(ValidationError):
        load_config(path)


def test_config_from_mapping_presets() -> None:
    config = config_from_mapping(
        {
            "show_preset_panel": True,
            "single_presets": [{"id": "launch", "label": "Launch", "date": "2024-05-01"}],
            "range_presets": [{"id": "q2", "label": "Q2", "range": {"start": "2024-04-01", "end": "2024-06-30"}}],
        }
    )

    assert config.show_preset_panel is True
    assert config.single_presets[0].date == date(2024, 5, 1)
    assert config.range_presets[0].range.end == date(2024, 6, 30)


def test_config_from_mapping_type_errors() -> None:
    with pytest.raises(ValidationError):
        config_from_mapping({"disabled": "yes"})
    with pytest.raises(ValidationError):
        config_from_mapping({"single_presets": {"id": "x"}})
    with pytest.raises(ValidationError):
        config_from_mapping([])
