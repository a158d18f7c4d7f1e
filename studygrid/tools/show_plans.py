#!/usr/bin/env python3
from __future__ import annotations

import argparse
import json
import os
import sys
from pathlib import Path
from typing import List

from studygrid.document import date_label
from studygrid.patterns import describe_pattern
from studygrid.planfile import load_planner_file
from studygrid.state import PlannerApp
from studygrid.util.datekey import to_key, weekday_index
from studygrid.util.timeparse import WEEKDAY_LABELS, parse_date_yyyy_mm_dd
from studygrid.validate import ValidationError


def _die(msg: str, rc: int = 2) -> int:
    print(f"[studygrid-plans] ERROR: {msg}", file=sys.stderr)
    return rc


def render_text(app: PlannerApp, *, include_empty: bool = False) -> str:
    lines: List[str] = []
    for day in app.state.calendar:
        text = app.plan_for(day)
        if not text and not include_empty:
            continue
        head = f"{to_key(day)} ({WEEKDAY_LABELS[weekday_index(day)]}) {date_label(day, app.state.date_mode)}"
        lines.append(head)
        lines.extend(f"  {ln}" for ln in text.split("\n") if text)
    return "\n".join(lines)


def render_patterns(app: PlannerApp) -> str:
    lines: List[str] = []
    for p in app.state.patterns:
        chip, days = describe_pattern(p)
        lines.append(f"{chip} [{days}]")
    return "\n".join(lines)


def main(argv: List[str] | None = None) -> int:
    ap = argparse.ArgumentParser(
        prog="studygrid-plans",
        description="Print the plan each calendar day gets from a planner file (no rendering).",
    )
    ap.add_argument("--plan", required=True, help="Planner JSON file")
    ap.add_argument("--start", default=None, help="Override first day YYYY-MM-DD")
    ap.add_argument("--end", default=None, help="Override last day YYYY-MM-DD")
    ap.add_argument("--json", action="store_true", help="Emit JSON (the plan map, or the pattern list with --patterns)")
    ap.add_argument("--all", action="store_true", help="Also list days without a plan")
    ap.add_argument("--patterns", action="store_true", help="List the committed patterns instead of the plans")
    ns = ap.parse_args(argv)

    try:
        planner = load_planner_file(Path(ns.plan))
        app = PlannerApp()
        app.rename(planner.name)
        app.set_date_mode(planner.date_mode or os.getenv("STUDYGRID_DATE_MODE"))
        for p in planner.patterns:
            app.upsert_pattern(p)
        start = parse_date_yyyy_mm_dd(ns.start) if ns.start else planner.start
        end = parse_date_yyyy_mm_dd(ns.end) if ns.end else planner.end
        app.select_range(start, end)
        app.generate_calendar()
        app.apply_patterns()
        for key, text in planner.edits.items():
            app.edit_day(key, text)
    except FileNotFoundError as e:
        return _die(f"Missing planner file: {e.filename}")
    except (ValidationError, ValueError) as e:
        return _die(str(e))

    if ns.patterns:
        if ns.json:
            rows = [dict(zip(("chip", "days"), describe_pattern(p))) for p in app.state.patterns]
            print(json.dumps(rows, ensure_ascii=False, indent=2))
        else:
            print(render_patterns(app))
    elif ns.json:
        print(json.dumps(app.visible_plans(), ensure_ascii=False, indent=2))
    else:
        print(render_text(app, include_empty=bool(ns.all)))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
