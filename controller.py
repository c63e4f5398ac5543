#!/usr/bin/env python3
"""Picker controller: composes grid, presets and selection for a renderer."""

from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from datetime import date
from typing import Callable, FrozenSet, List, Optional, Union

from calendar_grid import build_calendar_months
from config import PickerConfig
from date_utils import add_months, is_same_month, start_of_day, start_of_month
from formatting import format_endpoint, format_input_date, format_range_value, weekday_labels
from models import (
    CalendarDay,
    CalendarMonth,
    DateRange,
    PresetContext,
    ResolvedRangeDatePreset,
    ResolvedSingleDatePreset,
)
from presets import (
    range_presets_or_default,
    resolve_range_presets,
    resolve_single_presets,
    single_presets_or_default,
)
from selection import (
    Constraints,
    SelectionState,
    Transition,
    accepts_hover,
    apply_pick,
    classify_day,
    clear,
    commit_date,
    commit_range,
    select_today,
)
from state import PickerState

logger = logging.getLogger(__name__)

ResolvedPreset = Union[ResolvedSingleDatePreset, ResolvedRangeDatePreset]

HINT_SELECT_START = "Select start date"
HINT_SELECT_END = "Select an end date"
HINT_RANGE_SELECTED = "Range selected"


@dataclass(frozen=True)
class PickerUpdate:
    """Result of an interaction: next view state and the proposed selection."""

    view: PickerState
    selection: SelectionState
    changed: bool = False
    complete: bool = False

    @property
    def value(self) -> object:
        return self.selection.controlled_value()


@dataclass(frozen=True)
class RangeMeta:
    start_label: str
    end_label: str
    hint: str


@dataclass(frozen=True)
class PresetEntry:
    preset: ResolvedPreset
    enabled: bool


@dataclass(frozen=True)
class PresetPanel:
    title: str
    subtitle: str
    entries: List[PresetEntry]


class DatePickerController:
    """Stateless operations over a fixed :class:`PickerConfig`.

    The controller never keeps the selection or the view state; every call
    receives both and returns what they should become.
    """

    def __init__(
        self,
        config: Optional[PickerConfig] = None,
        *,
        today: Optional[Callable[[], date]] = None,
    ) -> None:
        self._config = config or PickerConfig()
        self._today = today or date.today

    @property
    def config(self) -> PickerConfig:
        return self._config

    @property
    def constraints(self) -> Constraints:
        return Constraints(self._config.min_date, self._config.max_date)

    @property
    def months_to_show(self) -> int:
        return self._config.months_to_show

    def today(self) -> date:
        return start_of_day(self._today())

    def preset_context(self) -> PresetContext:
        return PresetContext(today=self.today(), start_week_on_monday=self._config.start_week_on_monday)

    def empty_selection(self) -> SelectionState:
        return SelectionState(mode=self._config.mode)

    # View window

    def initial_state(self, selection: Optional[SelectionState] = None) -> PickerState:
        selection = selection or self.empty_selection()
        anchor = selection.anchor or self.today()
        return PickerState(view_month=anchor, synced_value=selection.controlled_value())

    def sync(self, view: PickerState, selection: SelectionState) -> PickerState:
        """Follow a new controlled value; manual navigation survives otherwise."""
        current = selection.controlled_value()
        if current == view.synced_value:
            return view
        next_view = replace(view, synced_value=current)
        anchor = selection.anchor
        if anchor is None or is_same_month(anchor, view.view_month):
            return next_view
        return next_view.with_view_month(anchor)

    def prev_month(self, view: PickerState) -> PickerState:
        if self._config.disabled:
            return view
        return view.with_view_month(add_months(view.view_month, -1))

    def next_month(self, view: PickerState) -> PickerState:
        if self._config.disabled:
            return view
        return view.with_view_month(add_months(view.view_month, 1))

    def visible_months(self, view: PickerState) -> List[CalendarMonth]:
        return build_calendar_months(
            view.view_month,
            self.months_to_show,
            self._config.start_week_on_monday,
            locale=self._config.locale,
        )

    def header_label(self, view: PickerState) -> str:
        return " - ".join(month.label for month in self.visible_months(view))

    def weekday_labels(self) -> List[str]:
        return weekday_labels(self._config.start_week_on_monday, self._config.locale)

    # Panel lifecycle

    def toggle_open(self, view: PickerState) -> PickerState:
        if view.is_open:
            return view.closed()
        if self._config.disabled:
            return view
        return view.opened()

    def close(self, view: PickerState) -> PickerState:
        return view.closed()

    def hover(self, view: PickerState, selection: SelectionState, day: date) -> PickerState:
        if not view.is_open or not accepts_hover(selection, day, self.constraints):
            return view
        return view.with_hover(start_of_day(day))

    def leave_grid(self, view: PickerState) -> PickerState:
        return view.with_hover(None)

    # Interactions

    def _finish(self, view: PickerState, transition: Transition) -> PickerUpdate:
        if not transition.changed:
            return PickerUpdate(view=view, selection=transition.state)
        next_view = view.closed() if transition.complete else view.with_hover(None)
        return PickerUpdate(
            view=next_view,
            selection=transition.state,
            changed=True,
            complete=transition.complete,
        )

    def select_day(self, view: PickerState, selection: SelectionState, day: date) -> PickerUpdate:
        if self._config.disabled:
            return PickerUpdate(view=view, selection=selection)
        return self._finish(view, apply_pick(selection, day, self.constraints))

    def go_to_today(self, view: PickerState, selection: SelectionState) -> PickerUpdate:
        if self._config.disabled:
            return PickerUpdate(view=view, selection=selection)
        today = self.today()
        update = self._finish(view, select_today(selection, today, self.constraints))
        if not update.changed:
            return update
        return PickerUpdate(
            view=update.view.with_view_month(today),
            selection=update.selection,
            changed=True,
            complete=True,
        )

    def clear(self, view: PickerState, selection: SelectionState) -> PickerUpdate:
        if self._config.disabled:
            return PickerUpdate(view=view, selection=selection)
        return self._finish(view, clear(selection))

    def can_go_to_today(self) -> bool:
        return not self._config.disabled and not self.constraints.is_disabled(self.today())

    def can_clear(self, selection: SelectionState) -> bool:
        return not self._config.disabled and not selection.is_empty

    # Presets

    def resolved_presets(self) -> List[ResolvedPreset]:
        context = self.preset_context()
        if self._config.mode == "range":
            return list(resolve_range_presets(range_presets_or_default(self._config.range_presets), context))
        return list(resolve_single_presets(single_presets_or_default(self._config.single_presets), context))

    def preset_enabled(self, preset: ResolvedPreset) -> bool:
        if isinstance(preset, ResolvedRangeDatePreset):
            endpoints = [preset.range.start, preset.range.end]
        else:
            endpoints = [preset.date]
        return not any(
            endpoint is None or self.constraints.is_disabled(endpoint) for endpoint in endpoints
        )

    def preset_panel(self) -> Optional[PresetPanel]:
        if not self._config.show_preset_panel:
            return None
        subtitle = (
            self._config.range_preset_label
            if self._config.mode == "range"
            else self._config.single_preset_label
        )
        return PresetPanel(
            title=self._config.preset_panel_title,
            subtitle=subtitle,
            entries=[PresetEntry(preset, self.preset_enabled(preset)) for preset in self.resolved_presets()],
        )

    def find_preset(self, preset_id: str) -> Optional[ResolvedPreset]:
        return next((preset for preset in self.resolved_presets() if preset.id == preset_id), None)

    def apply_preset(
        self,
        view: PickerState,
        selection: SelectionState,
        preset: Union[str, ResolvedPreset],
    ) -> PickerUpdate:
        """Commit a preset atomically and snap the window to its first day."""
        if self._config.disabled:
            return PickerUpdate(view=view, selection=selection)
        resolved = self.find_preset(preset) if isinstance(preset, str) else preset
        if resolved is None:
            logger.debug("Unknown preset %r", preset)
            return PickerUpdate(view=view, selection=selection)

        preset_mode = "range" if isinstance(resolved, ResolvedRangeDatePreset) else "single"
        if preset_mode != self._config.mode:
            logger.debug("Ignoring %s preset %r in %s mode", preset_mode, resolved.id, self._config.mode)
            return PickerUpdate(view=view, selection=selection)

        if isinstance(resolved, ResolvedRangeDatePreset):
            transition = commit_range(selection, resolved.range, self.constraints)
            anchor = resolved.range.start
        else:
            transition = commit_date(selection, resolved.date, self.constraints)
            anchor = resolved.date

        update = self._finish(view, transition)
        if not update.changed or anchor is None:
            return update
        return PickerUpdate(
            view=update.view.with_view_month(start_of_month(anchor)),
            selection=update.selection,
            changed=True,
            complete=True,
        )

    # Rendering helpers

    def classify(
        self,
        view: PickerState,
        selection: SelectionState,
        day: CalendarDay,
    ) -> FrozenSet[str]:
        return classify_day(
            day,
            selection,
            self.today(),
            hovered=view.hovered_date,
            constraints=self.constraints,
            months_shown=self.months_to_show,
        )

    def display_value(self, selection: SelectionState) -> str:
        if selection.mode == "range":
            return format_range_value(selection.range, self._config.locale)
        return format_input_date(selection.value, self._config.locale)

    def display_text(self, selection: SelectionState) -> str:
        return self.display_value(selection) or self._config.placeholder

    def range_hint(self, selection: SelectionState) -> str:
        if selection.mode != "range":
            return ""
        phase = selection.phase
        if phase == "picking_end":
            return HINT_SELECT_END
        if not selection.range.is_empty:
            return HINT_RANGE_SELECTED
        return HINT_SELECT_START

    def range_meta(self, selection: SelectionState) -> Optional[RangeMeta]:
        if selection.mode != "range" or not self._config.show_range_meta:
            return None
        value: DateRange = selection.range
        return RangeMeta(
            start_label=format_endpoint(value.start, self._config.locale),
            end_label=format_endpoint(value.end, self._config.locale),
            hint=self.range_hint(selection),
        )


__all__ = [
    "DatePickerController",
    "HINT_RANGE_SELECTED",
    "HINT_SELECT_END",
    "HINT_SELECT_START",
    "PickerUpdate",
    "PresetEntry",
    "PresetPanel",
    "RangeMeta",
]
