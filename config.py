#!/usr/bin/env python3
"""Picker configuration and loading from the XDG config file."""

from __future__ import annotations

import json
import re
from dataclasses import dataclass, replace
from datetime import date
from pathlib import Path
from typing import Any, Dict, Optional, Sequence, Tuple

from formatting import DEFAULT_LOCALE
from models import (
    PickerMode,
    RangeDatePreset,
    SingleDatePreset,
    ValidationError,
    normalize_mode,
    normalize_months_to_show,
    parse_date,
    range_preset_from_payload,
    single_preset_from_payload,
)
from paths import CONFIG_FILENAME, default_config_path


@dataclass(frozen=True)
class PickerConfig:
    mode: PickerMode = "single"
    range_months_to_show: int = 1
    show_range_meta: bool = True
    start_week_on_monday: bool = False
    locale: str = DEFAULT_LOCALE
    min_date: Optional[date] = None
    max_date: Optional[date] = None
    show_preset_panel: bool = False
    preset_panel_title: str = "Quick Select"
    single_preset_label: str = "Single Date"
    range_preset_label: str = "Date Range"
    single_presets: Optional[Tuple[SingleDatePreset, ...]] = None
    range_presets: Optional[Tuple[RangeDatePreset, ...]] = None
    placeholder: str = "Select a date"
    disabled: bool = False

    def __post_init__(self) -> None:
        object.__setattr__(self, "mode", normalize_mode(self.mode))
        object.__setattr__(
            self, "range_months_to_show", normalize_months_to_show(self.range_months_to_show)
        )
        if self.single_presets is not None:
            object.__setattr__(self, "single_presets", tuple(self.single_presets))
        if self.range_presets is not None:
            object.__setattr__(self, "range_presets", tuple(self.range_presets))

    @property
    def months_to_show(self) -> int:
        return self.range_months_to_show if self.mode == "range" else 1

    def with_overrides(self, **changes: Any) -> "PickerConfig":
        return replace(self, **changes)


_BOOL_FIELDS = (
    "show_range_meta",
    "start_week_on_monday",
    "show_preset_panel",
    "disabled",
)
_STR_FIELDS = (
    "locale",
    "preset_panel_title",
    "single_preset_label",
    "range_preset_label",
    "placeholder",
)


def config_from_mapping(raw: Dict[str, Any]) -> PickerConfig:
    """Build a config from decoded JSON; unknown keys are ignored."""
    if not isinstance(raw, dict):
        raise ValidationError("Config root must be an object")

    values: Dict[str, Any] = {}
    if "mode" in raw:
        values["mode"] = normalize_mode(raw["mode"])
    if "range_months_to_show" in raw:
        values["range_months_to_show"] = normalize_months_to_show(raw["range_months_to_show"])

    for key in _BOOL_FIELDS:
        if key in raw:
            if not isinstance(raw[key], bool):
                raise ValidationError(f"'{key}' must be true or false")
            values[key] = raw[key]

    for key in _STR_FIELDS:
        if key in raw:
            values[key] = str(raw[key])

    for key in ("min_date", "max_date"):
        if raw.get(key) is not None:
            values[key] = parse_date(raw[key])

    if raw.get("single_presets") is not None:
        values["single_presets"] = tuple(
            single_preset_from_payload(item) for item in _as_list(raw["single_presets"], "single_presets")
        )
    if raw.get("range_presets") is not None:
        values["range_presets"] = tuple(
            range_preset_from_payload(item) for item in _as_list(raw["range_presets"], "range_presets")
        )

    return PickerConfig(**values)


def load_config(path: Optional[Path] = None) -> PickerConfig:
    """Load config from the XDG path, falling back to defaults.

    A missing file or unreadable JSON yields the defaults. Well-formed JSON
    with invalid values raises ``ValidationError``.
    """

    config_path = Path(path).expanduser() if path is not None else default_config_path()
    raw: Dict[str, Any] = {}

    if config_path.exists():
        raw_text = config_path.read_text()
        try:
            raw = json.loads(raw_text)
        except json.JSONDecodeError:
            try:
                raw = json.loads(_strip_trailing_commas(raw_text))
            except json.JSONDecodeError:
                raw = {}

    return config_from_mapping(raw)


def _as_list(value: Any, label: str) -> Sequence[Any]:
    if not isinstance(value, list):
        raise ValidationError(f"'{label}' must be a list")
    return value


def _strip_trailing_commas(text: str) -> str:
    """Remove trailing commas before closing braces/brackets."""
    return re.sub(r",(\s*[}\]])", r"\1", text)


__all__ = ["PickerConfig", "config_from_mapping", "load_config", "CONFIG_FILENAME"]
