"""Load planner input files (JSON).

Format:
  {
    "name": "민법 1회독",               (optional; default "나의 플래너")
    "start": "2025-03-01",             (optional here; may come from the CLI)
    "end": "2025-03-31",
    "date_mode": "day" | "month-day",  (optional; else $STUDYGRID_DATE_MODE, else "day")
    "patterns": [
      {"subject": "민법", "unit": "강", "start": 1,
       "per_day": 2, "weekdays": ["mon", "wed"]}
    ],
    "edits": {"2025-03-03": "모의고사"}   (manual day text, applied last)
  }

Pattern fields: subject (required), unit (preset or free text; default "강"),
start (default 1), per_day (default 1; 0 is committed as 1), weekdays (ints
0=Sun..6=Sat or names; empty/missing = every day). Ids are assigned
when the pattern is committed to the store.
"""

from __future__ import annotations

import datetime as dt
import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional

from .model import DEFAULT_PLANNER_NAME, DateMode, Pattern, Unit, coerce_unit
from .util.timeparse import parse_date_yyyy_mm_dd, parse_weekdays
from .validate import ValidationError, assert_valid_planner


@dataclass
class PlannerFile:
    name: str = DEFAULT_PLANNER_NAME
    start: Optional[dt.date] = None
    end: Optional[dt.date] = None
    date_mode: Optional[DateMode] = None  # None: not set in the file
    patterns: List[Pattern] = field(default_factory=list)
    edits: Dict[str, str] = field(default_factory=dict)


def _parse_date(raw: Optional[str], label: str) -> Optional[dt.date]:
    if raw is None or not str(raw).strip():
        return None
    try:
        return parse_date_yyyy_mm_dd(str(raw))
    except ValueError as ex:
        raise ValidationError(f"{label} must be YYYY-MM-DD (got {raw!r})") from ex


def pattern_from_obj(obj: Dict[str, Any]) -> Pattern:
    try:
        weekdays = parse_weekdays(obj.get("weekdays") or [])
    except ValueError as ex:
        raise ValidationError(str(ex)) from ex
    return Pattern(
        subject=str(obj.get("subject") or "").strip(),
        unit=coerce_unit(obj.get("unit", Unit.LECTURE)),
        start_number=int(obj.get("start", 1)),
        count_per_day=int(obj.get("per_day", 1)),
        weekdays=weekdays,
    )


def pattern_from_spec(spec: str) -> Pattern:
    """Inline form `subject:unit:start:per_day[:weekdays]`, e.g. `민법:강:1:2:mon,wed`."""
    parts = [p.strip() for p in str(spec).split(":")]
    if len(parts) not in (4, 5) or not parts[0]:
        raise ValidationError(f"Invalid pattern {spec!r} (expected subject:unit:start:per_day[:weekdays])")
    try:
        start = int(parts[2])
        per_day = int(parts[3])
    except ValueError as ex:
        raise ValidationError(f"Invalid pattern {spec!r}: start and per_day must be integers") from ex
    obj: Dict[str, Any] = {"subject": parts[0], "unit": parts[1], "start": start, "per_day": per_day}
    if len(parts) == 5:
        obj["weekdays"] = [w for w in parts[4].split(",") if w.strip()]
    return pattern_from_obj(obj)


def planner_from_obj(obj: Dict[str, Any]) -> PlannerFile:
    assert_valid_planner(obj)
    try:
        raw_mode = obj.get("date_mode")
        mode = DateMode.parse(raw_mode) if raw_mode and raw_mode.strip() else None
    except ValueError as ex:
        raise ValidationError(str(ex)) from ex
    name = obj.get("name")
    return PlannerFile(
        name=name if isinstance(name, str) and name.strip() else DEFAULT_PLANNER_NAME,
        start=_parse_date(obj.get("start"), "start"),
        end=_parse_date(obj.get("end"), "end"),
        date_mode=mode,
        patterns=[pattern_from_obj(p) for p in obj.get("patterns") or []],
        edits=dict(obj.get("edits") or {}),
    )


def load_planner_file(path: Path) -> PlannerFile:
    try:
        raw = json.loads(Path(path).read_text(encoding="utf-8"))
    except json.JSONDecodeError as ex:
        raise ValidationError(f"{path}: invalid JSON ({ex})") from ex
    return planner_from_obj(raw)


__all__ = ["PlannerFile", "load_planner_file", "pattern_from_obj", "pattern_from_spec", "planner_from_obj"]
