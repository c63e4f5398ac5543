#!/usr/bin/env python3
"""Selection state machine for single-date and date-range picking.

Every operation here is a pure reducer: it takes the caller-owned selection
plus an event and returns a :class:`Transition` describing the proposed next
selection. Nothing is stored between calls.

Range mode moves through three phases::

    empty --pick--> picking_end --pick--> committed --pick--> picking_end ...

The second pick is ordered against the first, so picking backwards swaps the
endpoints instead of being rejected.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from datetime import date
from typing import FrozenSet, Literal, Optional, Tuple

from date_utils import is_between, is_date_disabled, is_same_day, order_dates, start_of_day
from models import EMPTY_RANGE, CalendarDay, DateRange, PickerMode, normalize_mode

logger = logging.getLogger(__name__)

RangePhase = Literal["empty", "picking_end", "committed"]

DayTag = Literal[
    "outside-current-month",
    "outside-and-hidden",
    "selected",
    "range-start",
    "range-end",
    "in-range",
    "preview",
    "today",
    "disabled",
]

OUTSIDE = "outside-current-month"
OUTSIDE_HIDDEN = "outside-and-hidden"
SELECTED = "selected"
RANGE_START = "range-start"
RANGE_END = "range-end"
IN_RANGE = "in-range"
PREVIEW = "preview"
TODAY = "today"
DISABLED = "disabled"


@dataclass(frozen=True)
class Constraints:
    min_date: Optional[date] = None
    max_date: Optional[date] = None

    def is_disabled(self, value: date) -> bool:
        return is_date_disabled(value, self.min_date, self.max_date)


NO_CONSTRAINTS = Constraints()


@dataclass(frozen=True)
class SelectionState:
    """A normalized snapshot of the caller's controlled value."""

    mode: PickerMode = "single"
    value: Optional[date] = None
    range: DateRange = EMPTY_RANGE

    @classmethod
    def single(cls, value: Optional[date] = None) -> "SelectionState":
        return cls(mode="single", value=start_of_day(value) if value is not None else None)

    @classmethod
    def of_range(
        cls,
        start: Optional[date] = None,
        end: Optional[date] = None,
    ) -> "SelectionState":
        return cls.from_range(DateRange(start, end))

    @classmethod
    def from_range(cls, value: Optional[DateRange]) -> "SelectionState":
        if value is None:
            return cls(mode="range")
        start = start_of_day(value.start) if value.start is not None else None
        end = start_of_day(value.end) if value.end is not None else None
        if start is not None and end is not None:
            start, end = order_dates(start, end)
        return cls(mode="range", range=DateRange(start, end))

    @property
    def phase(self) -> RangePhase:
        return range_phase(self.range)

    @property
    def is_empty(self) -> bool:
        if self.mode == "range":
            return self.range.is_empty
        return self.value is None

    @property
    def anchor(self) -> Optional[date]:
        """The date the visible month follows: the value, or the range start."""
        if self.mode == "range":
            return self.range.start or self.range.end
        return self.value

    def controlled_value(self) -> object:
        return self.range if self.mode == "range" else self.value


@dataclass(frozen=True)
class Transition:
    state: SelectionState
    changed: bool = False
    complete: bool = False

    @property
    def value(self) -> object:
        return self.state.controlled_value()


def range_phase(value: DateRange) -> RangePhase:
    if value.start is None:
        return "empty"
    if value.end is None:
        return "picking_end"
    return "committed"


def _unchanged(state: SelectionState) -> Transition:
    return Transition(state=state)


def pick_single(state: SelectionState, picked: date, constraints: Constraints = NO_CONSTRAINTS) -> Transition:
    if constraints.is_disabled(picked):
        logger.debug("Ignoring pick on disabled day %s", picked)
        return _unchanged(state)
    return Transition(
        state=replace(state, mode="single", value=start_of_day(picked)),
        changed=True,
        complete=True,
    )


def pick_range(state: SelectionState, picked: date, constraints: Constraints = NO_CONSTRAINTS) -> Transition:
    if constraints.is_disabled(picked):
        logger.debug("Ignoring pick on disabled day %s", picked)
        return _unchanged(state)

    day = start_of_day(picked)
    start, end = state.range.start, state.range.end

    if start is None or end is not None:
        return Transition(
            state=replace(state, mode="range", range=DateRange(day, None)),
            changed=True,
        )

    if day < start:
        next_range = DateRange(day, start)
    else:
        next_range = DateRange(start, day)
    return Transition(
        state=replace(state, mode="range", range=next_range),
        changed=True,
        complete=True,
    )


def apply_pick(state: SelectionState, picked: date, constraints: Constraints = NO_CONSTRAINTS) -> Transition:
    if state.mode == "range":
        return pick_range(state, picked, constraints)
    return pick_single(state, picked, constraints)


def select_today(state: SelectionState, today: date, constraints: Constraints = NO_CONSTRAINTS) -> Transition:
    """Commit today in one step; a zero-length range in range mode."""
    if constraints.is_disabled(today):
        return _unchanged(state)
    day = start_of_day(today)
    if state.mode == "range":
        next_state = replace(state, range=DateRange(day, day))
    else:
        next_state = replace(state, value=day)
    return Transition(state=next_state, changed=True, complete=True)


def clear(state: SelectionState) -> Transition:
    if state.is_empty:
        return _unchanged(state)
    return Transition(
        state=SelectionState(mode=state.mode),
        changed=True,
    )


def commit_date(state: SelectionState, value: date, constraints: Constraints = NO_CONSTRAINTS) -> Transition:
    """Commit a single date directly, vetoed when the date is disabled."""
    if constraints.is_disabled(value):
        logger.debug("Vetoing commit of disabled day %s", value)
        return _unchanged(state)
    return Transition(
        state=SelectionState(mode="single", value=start_of_day(value)),
        changed=True,
        complete=True,
    )


def commit_range(state: SelectionState, value: DateRange, constraints: Constraints = NO_CONSTRAINTS) -> Transition:
    """Commit both endpoints atomically; any disabled endpoint vetoes it."""
    if value.start is None or value.end is None:
        return _unchanged(state)
    if constraints.is_disabled(value.start) or constraints.is_disabled(value.end):
        logger.debug("Vetoing range %s..%s: endpoint disabled", value.start, value.end)
        return _unchanged(state)
    return Transition(
        state=SelectionState.from_range(value),
        changed=True,
        complete=True,
    )


def is_preview_active(state: SelectionState, hovered: Optional[date]) -> bool:
    return state.mode == "range" and state.phase == "picking_end" and hovered is not None


def accepts_hover(state: SelectionState, day: date, constraints: Constraints = NO_CONSTRAINTS) -> bool:
    return state.mode == "range" and state.phase == "picking_end" and not constraints.is_disabled(day)


def effective_range(
    state: SelectionState,
    hovered: Optional[date] = None,
) -> Tuple[Optional[date], Optional[date]]:
    """Endpoints to highlight: committed ones, or start plus the hover preview."""
    if state.mode != "range":
        return None, None
    start, end = state.range.start, state.range.end
    if start is not None and end is not None:
        return order_dates(start, end)
    if start is not None and hovered is not None:
        return order_dates(start, start_of_day(hovered))
    return start, None


def classify_day(
    day: CalendarDay,
    state: SelectionState,
    today: date,
    *,
    hovered: Optional[date] = None,
    constraints: Constraints = NO_CONSTRAINTS,
    months_shown: int = 1,
) -> FrozenSet[str]:
    tags = set()
    value = day.date

    if not day.current_month:
        tags.add(OUTSIDE)
        if state.mode == "range" and months_shown == 2:
            tags.add(OUTSIDE_HIDDEN)

    if state.mode == "single":
        if state.value is not None and is_same_day(value, state.value):
            tags.add(SELECTED)
    else:
        start, end = effective_range(state, hovered)
        in_range = start is not None and end is not None and is_between(value, start, end)
        if start is not None and is_same_day(value, start):
            tags.add(RANGE_START)
        if end is not None and is_same_day(value, end):
            tags.add(RANGE_END)
        if in_range:
            tags.add(IN_RANGE)
        if is_preview_active(state, hovered) and tags & {RANGE_START, RANGE_END, IN_RANGE}:
            tags.add(PREVIEW)

    if is_same_day(value, today):
        tags.add(TODAY)
    if constraints.is_disabled(value):
        tags.add(DISABLED)
    return frozenset(tags)


def is_interactive(tags: FrozenSet[str]) -> bool:
    return DISABLED not in tags and OUTSIDE_HIDDEN not in tags


def selection_for(mode: object, value: object = None) -> SelectionState:
    """Build a state from a raw controlled value (date, DateRange or None)."""
    picker_mode = normalize_mode(mode)
    if picker_mode == "range":
        return SelectionState.from_range(value if isinstance(value, DateRange) else None)
    return SelectionState.single(value if isinstance(value, date) else None)


__all__ = [
    "Constraints",
    "DISABLED",
    "DayTag",
    "IN_RANGE",
    "NO_CONSTRAINTS",
    "OUTSIDE",
    "OUTSIDE_HIDDEN",
    "PREVIEW",
    "RANGE_END",
    "RANGE_START",
    "RangePhase",
    "SELECTED",
    "SelectionState",
    "TODAY",
    "Transition",
    "accepts_hover",
    "apply_pick",
    "classify_day",
    "clear",
    "commit_date",
    "commit_range",
    "effective_range",
    "is_interactive",
    "is_preview_active",
    "pick_range",
    "pick_single",
    "range_phase",
    "select_today",
    "selection_for",
]
