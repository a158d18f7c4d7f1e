"""Validation errors and planner-file checks (library-facing)."""

from __future__ import annotations

from typing import Any, Dict, List


class ValidationError(ValueError):
    """Raised when user input is rejected; the message is user-facing."""


MSG_RANGE_MISSING = "Select a start and end date."
MSG_RANGE_REVERSED = "The end date cannot be before the start date."
MSG_CALENDAR_REQUIRED = "Generate the calendar first."


def _require(cond: bool, msg: str, errs: List[str]) -> None:
    if not cond:
        errs.append(msg)


def _is_int(v: Any) -> bool:
    return isinstance(v, int) and not isinstance(v, bool)


def validate_pattern_obj(obj: Any, *, label: str = "pattern") -> List[str]:
    """Check the JSON shape of one pattern entry of a planner file."""
    if not isinstance(obj, dict):
        return [f"{label}: must be an object"]
    errs: List[str] = []

    subject = obj.get("subject")
    _require(isinstance(subject, str) and bool(subject.strip()), f"{label}.subject must be non-empty string", errs)
    unit = obj.get("unit", "")
    _require(isinstance(unit, str), f"{label}.unit must be string", errs)

    start = obj.get("start", 1)
    _require(_is_int(start) and start >= 0, f"{label}.start must be int >= 0", errs)
    per_day = obj.get("per_day", 1)
    _require(_is_int(per_day) and per_day >= 0, f"{label}.per_day must be int >= 0", errs)

    weekdays = obj.get("weekdays", [])
    if not isinstance(weekdays, list):
        errs.append(f"{label}.weekdays must be list")
    else:
        for i, w in enumerate(weekdays):
            _require(_is_int(w) or isinstance(w, str), f"{label}.weekdays[{i}] must be int or weekday name", errs)
    return errs


def validate_planner_obj(obj: Any, *, label: str = "planner") -> List[str]:
    if not isinstance(obj, dict):
        return [f"{label}: must be a JSON object"]
    errs: List[str] = []

    for k in ("name", "start", "end", "date_mode"):
        v = obj.get(k)
        if v is not None:
            _require(isinstance(v, str), f"{label}.{k} must be string", errs)

    patterns = obj.get("patterns", [])
    if not isinstance(patterns, list):
        errs.append(f"{label}.patterns must be list")
    else:
        for i, p in enumerate(patterns):
            errs.extend(validate_pattern_obj(p, label=f"{label}.patterns[{i}]"))

    edits = obj.get("edits", {})
    if not isinstance(edits, dict):
        errs.append(f"{label}.edits must be object")
    else:
        for k, v in edits.items():
            _require(isinstance(v, str), f"{label}.edits[{k!r}] must be string", errs)
    return errs


def assert_valid_planner(obj: Dict[str, Any]) -> None:
    errs = validate_planner_obj(obj)
    if errs:
        raise ValidationError(errs[0])


__all__ = [
    "MSG_CALENDAR_REQUIRED",
    "MSG_RANGE_MISSING",
    "MSG_RANGE_REVERSED",
    "ValidationError",
    "assert_valid_planner",
    "validate_pattern_obj",
    "validate_planner_obj",
]
