#!/usr/bin/env python3
"""Thin entrypoint for ezdp."""

from __future__ import annotations

import argparse
import logging
import sys
from datetime import date
from importlib.metadata import PackageNotFoundError, version
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence

from config import PickerConfig, load_config
from controller import DatePickerController, PickerUpdate
from models import ValidationError, normalize_months_to_show, parse_date, parse_month
from state import PickerState
from view_month import LEGEND, MonthView

try:
    __version__ = version("ezdp")
except PackageNotFoundError:  # pragma: no cover - fallback for source runs
    __version__ = "0.0.0"


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="ezdp",
        description="Preview date-picker grids and selections in the terminal.",
    )
    parser.add_argument("--version", action="store_true", help="Show version and exit")
    parser.add_argument("--config", type=Path, help="Config file (default: XDG config)")
    parser.add_argument("--mode", choices=["single", "range"], help="Selection mode")
    parser.add_argument("--months", help="Months shown in range mode (1 or 2)")
    parser.add_argument("--month", help="Month to display, YYYY-MM")
    parser.add_argument("--monday", action="store_true", default=None, help="Start weeks on Monday")
    parser.add_argument("--locale", help="Display locale, e.g. en-US")
    parser.add_argument("--min", dest="min_date", help="First selectable date, YYYY-MM-DD")
    parser.add_argument("--max", dest="max_date", help="Last selectable date, YYYY-MM-DD")
    parser.add_argument("--today-is", dest="today", help="Override today, YYYY-MM-DD")
    parser.add_argument(
        "--pick",
        action="append",
        default=[],
        metavar="DATE",
        help="Pick a date (repeatable, applied in order)",
    )
    parser.add_argument("--hover", metavar="DATE", help="Hover a date after picking")
    parser.add_argument("--preset", metavar="ID", help="Apply a preset by id")
    parser.add_argument("--today", dest="jump_today", action="store_true", help="Apply the today shortcut")
    parser.add_argument("--presets", action="store_true", help="List resolved presets")
    parser.add_argument("--legend", action="store_true", help="Print the cell legend")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    return parser


def _config_overrides(args: argparse.Namespace) -> Dict[str, Any]:
    overrides: Dict[str, Any] = {}
    if args.mode:
        overrides["mode"] = args.mode
    if args.months:
        overrides["range_months_to_show"] = normalize_months_to_show(args.months)
    if args.monday:
        overrides["start_week_on_monday"] = True
    if args.locale:
        overrides["locale"] = args.locale
    if args.min_date:
        overrides["min_date"] = parse_date(args.min_date)
    if args.max_date:
        overrides["max_date"] = parse_date(args.max_date)
    if args.presets:
        overrides["show_preset_panel"] = True
    return overrides


def run(args: argparse.Namespace, *, out=None) -> int:
    out = out or sys.stdout
    config: PickerConfig = load_config(args.config).with_overrides(**_config_overrides(args))

    fixed_today: Optional[date] = parse_date(args.today) if args.today else None
    controller = DatePickerController(
        config,
        today=(lambda: fixed_today) if fixed_today is not None else None,
    )

    selection = controller.empty_selection()
    view = controller.initial_state(selection)
    if args.month:
        view = view.with_view_month(parse_month(args.month))
    view = view.opened()

    def _accept(update: PickerUpdate) -> PickerState:
        nonlocal selection
        selection = update.selection
        next_view = update.view if update.view.is_open else update.view.opened()
        return controller.sync(next_view, selection)

    for raw in args.pick:
        view = _accept(controller.select_day(view, selection, parse_date(raw)))
    if args.preset:
        view = _accept(controller.apply_preset(view, selection, args.preset))
    if args.jump_today:
        view = _accept(controller.go_to_today(view, selection))
    if args.hover:
        view = controller.hover(view, selection, parse_date(args.hover))

    lines: List[str] = MonthView(controller).render(view, selection)

    meta = controller.range_meta(selection)
    if meta is not None:
        lines += ["", f"Start: {meta.start_label}   End: {meta.end_label}   {meta.hint}"]

    panel = controller.preset_panel()
    if panel is not None:
        lines += ["", f"{panel.title} / {panel.subtitle}"]
        for entry in panel.entries:
            marker = " " if entry.enabled else "x"
            lines.append(f" {marker} {entry.preset.id:<14} {entry.preset.label}")

    lines += ["", f"Value: {controller.display_text(selection)}"]
    if args.legend:
        lines += ["", LEGEND]

    print("\n".join(lines), file=out)
    return 0


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(list(argv) if argv is not None else None)

    if args.version:
        print(__version__)
        return 0

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        return run(args)
    except ValidationError as exc:
        print(str(exc), file=sys.stderr)
        return 1


if __name__ == "__main__":
    raise SystemExit(main())
