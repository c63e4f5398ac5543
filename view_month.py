#!/usr/bin/env python3
"""Plain-text month view rendering."""

from __future__ import annotations

from typing import FrozenSet, List, Tuple

from calendar_grid import weeks_of
from controller import DatePickerController
from models import CalendarDay, CalendarMonth
from selection import (
    DISABLED,
    IN_RANGE,
    OUTSIDE,
    OUTSIDE_HIDDEN,
    PREVIEW,
    RANGE_END,
    RANGE_START,
    SELECTED,
    SelectionState,
    TODAY,
)
from state import PickerState

CELL_WIDTH = 5

LEGEND = "[d] selected/endpoint  <d> preview endpoint  -d- in range  ~d~ preview  (d) today  d. other month  dx disabled"


def _brackets(tags: FrozenSet[str]) -> Tuple[str, str]:
    preview = PREVIEW in tags
    if SELECTED in tags or RANGE_START in tags or RANGE_END in tags:
        return ("<", ">") if preview else ("[", "]")
    if IN_RANGE in tags:
        return ("~", "~") if preview else ("-", "-")
    if TODAY in tags:
        return "(", ")"
    return " ", " "


def render_cell(day: CalendarDay, tags: FrozenSet[str]) -> str:
    if OUTSIDE_HIDDEN in tags:
        return " " * CELL_WIDTH
    left, right = _brackets(tags)
    if DISABLED in tags:
        right = "x"
    elif OUTSIDE in tags and right == " ":
        right = "."
    return f"{left}{day.date.day:2d}{right} "


class MonthView:
    """Renders the visible months of a picker as lines of text."""

    def __init__(self, controller: DatePickerController) -> None:
        self.controller = controller

    def render(self, view: PickerState, selection: SelectionState) -> List[str]:
        lines = [self.controller.header_label(view), ""]
        months = self.controller.visible_months(view)
        for idx, month in enumerate(months):
            if idx:
                lines.append("")
            if len(months) > 1:
                lines.append(month.label)
            lines.extend(self._render_month(month, view, selection))
        return lines

    def _render_month(
        self,
        month: CalendarMonth,
        view: PickerState,
        selection: SelectionState,
    ) -> List[str]:
        header = "".join(label[: CELL_WIDTH - 1].rjust(CELL_WIDTH - 1) + " " for label in self.controller.weekday_labels())
        rows = [header.rstrip()]
        for week in weeks_of(month.days):
            cells = [render_cell(day, self.controller.classify(view, selection, day)) for day in week]
            rows.append("".join(cells).rstrip())
        return rows


__all__ = ["MonthView", "render_cell", "CELL_WIDTH", "LEGEND"]
