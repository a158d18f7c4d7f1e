# studygrid/layout.py
from __future__ import annotations

import datetime as dt
from typing import List, Sequence, TypeVar

from .model import GridLayoutMeta
from .util.datekey import weekday_index

T = TypeVar("T")


def grid_layout(days: Sequence[dt.date]) -> GridLayoutMeta:
    """Blank cells needed to pad `days` into whole Sunday-first weeks."""
    if not days:
        return GridLayoutMeta(leading_blanks=0, trailing_blanks=0)
    leading = weekday_index(days[0])
    trailing = (7 - (leading + len(days)) % 7) % 7
    return GridLayoutMeta(leading_blanks=leading, trailing_blanks=trailing)


def chunk_weeks(cells: Sequence[T]) -> List[List[T]]:
    return [list(cells[i : i + 7]) for i in range(0, len(cells), 7)]


__all__ = ["chunk_weeks", "grid_layout"]
