"""Backend-independent description of an exported planner page.

The raster, PDF and HTML backends all consume a PlannerDocument; nothing in
here depends on a graphics library.
"""

from __future__ import annotations

import datetime as dt
import html
from dataclasses import dataclass
from typing import List, Mapping, Optional, Sequence, Tuple

from .layout import chunk_weeks, grid_layout
from .model import DateMode
from .util.datekey import to_key, weekday_index
from .util.timeparse import WEEKDAY_LABELS
from .validate import MSG_CALENDAR_REQUIRED, ValidationError

CELL_BLANK = "blank"
CELL_DAY = "day"


@dataclass(frozen=True)
class Cell:
    kind: str  # CELL_BLANK | CELL_DAY
    key: str = ""
    label: str = ""
    lines: Tuple[str, ...] = ()
    is_sunday: bool = False
    is_today: bool = False

    @property
    def text(self) -> str:
        return "\n".join(self.lines)


@dataclass(frozen=True)
class PlannerDocument:
    title: str
    subtitle: str
    header: Tuple[str, ...]
    cells: Tuple[Cell, ...]

    @property
    def weeks(self) -> List[List[Cell]]:
        return chunk_weeks(self.cells)


def date_label(day: dt.date, mode: DateMode) -> str:
    if mode is DateMode.MONTH_DAY:
        return f"{day.month}/{day.day}"
    return str(day.day)


def format_range(first: dt.date, last: dt.date) -> str:
    return f"{first:%Y.%m.%d} - {last:%Y.%m.%d}"


def plan_markup(text: str) -> str:
    """Plan text made safe for HTML embedding, newlines as <br>."""
    return html.escape(text or "", quote=True).replace("\n", "<br>")


def build_document(
    name: str,
    days: Sequence[dt.date],
    plans: Mapping[str, str],
    *,
    date_mode: DateMode = DateMode.DAY,
    today: Optional[dt.date] = None,
) -> PlannerDocument:
    if not days:
        raise ValidationError(MSG_CALENDAR_REQUIRED)

    meta = grid_layout(days)
    cells: List[Cell] = [Cell(kind=CELL_BLANK) for _ in range(meta.leading_blanks)]
    for day in days:
        key = to_key(day)
        text = plans.get(key) or ""
        cells.append(
            Cell(
                kind=CELL_DAY,
                key=key,
                label=date_label(day, date_mode),
                lines=tuple(text.split("\n")) if text else (),
                is_sunday=weekday_index(day) == 0,
                is_today=today is not None and day == today,
            )
        )
    cells.extend(Cell(kind=CELL_BLANK) for _ in range(meta.trailing_blanks))

    return PlannerDocument(
        title=name,
        subtitle=format_range(days[0], days[-1]),
        header=WEEKDAY_LABELS,
        cells=tuple(cells),
    )


__all__ = [
    "CELL_BLANK",
    "CELL_DAY",
    "Cell",
    "PlannerDocument",
    "build_document",
    "date_label",
    "format_range",
    "plan_markup",
]
