#!/usr/bin/env python3
"""Transient view state for a picker instance.

This is the short-lived UI side of the picker (which month is on screen,
whether the panel is open, which day is hovered). It is never persisted and
is kept apart from the caller-owned selection.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from datetime import date
from typing import Optional

from date_utils import start_of_month


@dataclass(frozen=True)
class PickerState:
    view_month: date
    is_open: bool = False
    hovered_date: Optional[date] = None
    # Last controlled value the window was synchronized to.
    synced_value: object = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "view_month", start_of_month(self.view_month))

    def with_view_month(self, month: date) -> "PickerState":
        return replace(self, view_month=start_of_month(month))

    def with_hover(self, day: Optional[date]) -> "PickerState":
        if day == self.hovered_date:
            return self
        return replace(self, hovered_date=day)

    def opened(self) -> "PickerState":
        return replace(self, is_open=True)

    def closed(self) -> "PickerState":
        return replace(self, is_open=False, hovered_date=None)


__all__ = ["PickerState"]
