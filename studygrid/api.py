"""studygrid.api

Stable *library* entrypoint for studygrid.

Policy:
  - Only names listed in __all__ are considered public API.
  - Everything else is internal and may change without notice.
"""

from __future__ import annotations

from studygrid.calendar import MAX_SPAN_DAYS, CalendarRange, build_calendar
from studygrid.document import PlannerDocument, build_document
from studygrid.export import RenderError, export_filename, export_planner
from studygrid.layout import grid_layout
from studygrid.model import DateMode, GridLayoutMeta, Pattern, Unit
from studygrid.patterns import PatternStore
from studygrid.planfile import load_planner_file
from studygrid.resolve import resolve_plans
from studygrid.state import PlannerApp, PlannerState
from studygrid.util.datekey import from_key, to_key, weekday_index
from studygrid.validate import ValidationError

__all__ = [
    "MAX_SPAN_DAYS",
    "CalendarRange",
    "DateMode",
    "GridLayoutMeta",
    "Pattern",
    "PatternStore",
    "PlannerApp",
    "PlannerDocument",
    "PlannerState",
    "RenderError",
    "Unit",
    "ValidationError",
    "build_calendar",
    "build_document",
    "export_filename",
    "export_planner",
    "from_key",
    "grid_layout",
    "load_planner_file",
    "resolve_plans",
    "to_key",
    "weekday_index",
]
