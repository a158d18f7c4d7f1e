# studygrid/state.py
from __future__ import annotations

import datetime as dt
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional

from .calendar import CalendarRange, build_calendar
from .export import export_planner
from .layout import grid_layout
from .model import DEFAULT_PLANNER_NAME, DateMode, GridLayoutMeta, Pattern, PlanMap
from .patterns import PatternStore
from .resolve import merge_plans, resolve_plans
from .util.datekey import DayLike, from_key, to_date, to_key
from .validate import MSG_CALENDAR_REQUIRED, ValidationError


@dataclass
class PlannerState:
    """Everything one planner session owns."""

    date_range: CalendarRange = field(default_factory=CalendarRange)
    calendar: List[dt.date] = field(default_factory=list)
    plans: PlanMap = field(default_factory=dict)
    patterns: PatternStore = field(default_factory=PatternStore)
    name: str = DEFAULT_PLANNER_NAME
    date_mode: DateMode = DateMode.DAY


class PlannerApp:
    """Single owner of a PlannerState; every mutation goes through here.

    Operations validate first and only then touch state, so a rejected call
    leaves the state exactly as it was.
    """

    def __init__(self, state: Optional[PlannerState] = None) -> None:
        self.state = state or PlannerState()

    # -- range / calendar ----------------------------------------------------
    def select_range(self, start: Optional[DayLike], end: Optional[DayLike]) -> None:
        self.state.date_range = CalendarRange.of(start, end)

    def clear_range(self) -> None:
        self.state.date_range = CalendarRange()

    def generate_calendar(self) -> List[dt.date]:
        """Rebuild the day sequence. Plans for days that fall out are kept but not shown."""
        days = build_calendar(self.state.date_range)
        self.state.calendar = days
        return days

    def layout(self) -> GridLayoutMeta:
        return grid_layout(self.state.calendar)

    # -- patterns --------------------------------------------------------------
    def upsert_pattern(self, pattern: Pattern) -> Pattern:
        return self.state.patterns.upsert(pattern)

    def remove_pattern(self, pattern_id: str) -> None:
        self.state.patterns.remove(pattern_id)

    def apply_patterns(self, *, merge: bool = False) -> PlanMap:
        """Regenerate plans from the patterns.

        Default replaces the whole plan map, dropping manual edits. With
        merge=True, entries survive on days no pattern fires on.
        """
        if not self.state.calendar:
            raise ValidationError(MSG_CALENDAR_REQUIRED)
        resolved = resolve_plans(self.state.calendar, self.state.patterns)
        self.state.plans = merge_plans(self.state.plans, resolved) if merge else resolved
        return self.state.plans

    # -- manual edits ----------------------------------------------------------
    def edit_day(self, key: str, text: str) -> None:
        self.state.plans[to_key(from_key(key))] = text

    def plan_for(self, day: DayLike) -> str:
        return self.state.plans.get(to_key(day), "")

    def visible_plans(self) -> PlanMap:
        """Plans for days of the current calendar only (orphans filtered out)."""
        out: PlanMap = {}
        for d in self.state.calendar:
            k = to_key(d)
            if k in self.state.plans:
                out[k] = self.state.plans[k]
        return out

    # -- settings --------------------------------------------------------------
    def rename(self, name: str) -> None:
        self.state.name = name

    def set_date_mode(self, mode: DateMode | str) -> None:
        try:
            self.state.date_mode = DateMode.parse(mode)
        except ValueError as ex:
            raise ValidationError(str(ex)) from ex

    def reset(self) -> None:
        """Back to a blank planner in one step."""
        self.state = PlannerState()

    # -- export ----------------------------------------------------------------
    def export(
        self,
        out_dir: Path,
        *,
        fmt: str = "pdf",
        font_path: Optional[str] = None,
        today: Optional[DayLike] = None,
    ) -> Path:
        s = self.state
        return export_planner(
            s.name,
            s.calendar,
            s.plans,
            out_dir,
            date_mode=s.date_mode,
            fmt=fmt,
            font_path=font_path,
            today=to_date(today) if today is not None else None,
        )


__all__ = ["PlannerApp", "PlannerState"]
