from __future__ import annotations

import argparse
import datetime as dt
import os
import sys
import webbrowser
from pathlib import Path
from typing import List, Optional

from .export import FORMATS, RenderError
from .planfile import PlannerFile, load_planner_file, pattern_from_spec
from .state import PlannerApp
from .util.timeparse import parse_date_yyyy_mm_dd
from .validate import ValidationError

DEFAULT_OUT_DIR = "build"


def _die(msg: str, rc: int = 2) -> int:
    print(f"[studygrid] ERROR: {msg}", file=sys.stderr)
    return rc


def _date_arg(s: str):  # type: ignore[no-untyped-def]
    try:
        return parse_date_yyyy_mm_dd(s)
    except ValueError:
        raise argparse.ArgumentTypeError(f"expected YYYY-MM-DD, got {s!r}")


def build_app(ns: argparse.Namespace, planner: PlannerFile) -> PlannerApp:
    """Replay the planner file (plus CLI overrides) through the controller."""
    app = PlannerApp()
    app.rename(ns.name if ns.name is not None else planner.name)
    app.set_date_mode(ns.date_mode or planner.date_mode or os.getenv("STUDYGRID_DATE_MODE"))

    for p in planner.patterns:
        app.upsert_pattern(p)
    for spec in ns.pattern or []:
        app.upsert_pattern(pattern_from_spec(spec))

    app.select_range(ns.start or planner.start, ns.end or planner.end)
    app.generate_calendar()

    if not ns.no_apply:
        app.apply_patterns(merge=bool(ns.keep_edits))
    for key, text in planner.edits.items():
        app.edit_day(key, text)
    return app


def _resolve_out_dir(out: str, default_out: str) -> Path:
    out_dir = Path(out).expanduser()
    try:
        out_dir.mkdir(parents=True, exist_ok=True)
    except PermissionError as e:
        # Unwritable default (e.g. run from a read-only CWD): use the user dir.
        if out != default_out:
            raise SystemExit(f"Cannot create output directory '{out_dir}': {e}")
        out_dir = Path.home() / ".studygrid" / "build"
        out_dir.mkdir(parents=True, exist_ok=True)
        print(f"[studygrid] WARN: default output directory is not writable; using {out_dir}", file=sys.stderr)
    return out_dir


def main(argv: Optional[List[str]] = None) -> int:
    default_out = os.getenv("STUDYGRID_OUT_DIR") or DEFAULT_OUT_DIR
    ap = argparse.ArgumentParser(
        prog="studygrid",
        description="Fill a weekly planner grid from recurring study patterns and export it (PDF/PNG/HTML).",
    )
    ap.add_argument("--plan", default=None, help="Planner JSON file (name, range, patterns, edits)")
    ap.add_argument("--start", type=_date_arg, default=None, help="First day YYYY-MM-DD (overrides the file)")
    ap.add_argument("--end", type=_date_arg, default=None, help="Last day YYYY-MM-DD, inclusive (overrides the file)")
    ap.add_argument("--name", default=None, help="Planner name used for the title and file name")
    ap.add_argument(
        "--date-mode",
        choices=["day", "month-day"],
        default=None,
        help="Day cell label: 'day' (15) or 'month-day' (3/15). Default: env STUDYGRID_DATE_MODE or the file",
    )
    ap.add_argument(
        "--pattern",
        action="append",
        help="Extra pattern subject:unit:start:per_day[:weekdays], e.g. 민법:강:1:2:mon,wed (repeatable)",
    )
    ap.add_argument("--format", dest="fmt", choices=list(FORMATS), default="pdf", help="Output format (default: pdf)")
    ap.add_argument("--out", default=default_out, help=f"Output directory (default: env STUDYGRID_OUT_DIR or ./{DEFAULT_OUT_DIR})")
    ap.add_argument("--font", default=None, help="TTF/OTF font with Hangul glyphs (default: env STUDYGRID_FONT or system CJK font)")
    ap.add_argument("--keep-edits", action="store_true", help="Keep existing text on days no pattern fires on")
    ap.add_argument("--no-apply", action="store_true", help="Do not apply patterns (export manual edits only)")
    ap.add_argument("--no-open", action="store_true", help="Do not open the exported file")
    ns = ap.parse_args(argv)

    planner = PlannerFile()
    if ns.plan:
        plan_path = Path(ns.plan)
        if not plan_path.exists():
            return _die(f"Missing planner file: {plan_path}")
        try:
            planner = load_planner_file(plan_path)
        except ValidationError as e:
            return _die(f"Invalid planner file {plan_path}: {e}")

    try:
        app = build_app(ns, planner)
    except ValidationError as e:
        return _die(str(e))

    out_dir = _resolve_out_dir(ns.out, default_out)
    try:
        out_path = app.export(out_dir, fmt=ns.fmt, font_path=ns.font, today=dt.date.today())
    except ValidationError as e:
        return _die(str(e))
    except RenderError as e:
        return _die(str(e), rc=4)

    print(out_path.resolve())

    if not ns.no_open:
        try:
            webbrowser.open(out_path.resolve().as_uri())
        except Exception:
            pass
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
