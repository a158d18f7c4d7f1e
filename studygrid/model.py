# studygrid/model.py
from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Dict, FrozenSet, Optional, Union


class DateMode(str, enum.Enum):
    """How a day cell labels its date in exports."""

    DAY = "day"  # "15"
    MONTH_DAY = "month-day"  # "3/15"

    @classmethod
    def parse(cls, value: Union["DateMode", str, None]) -> "DateMode":
        if isinstance(value, DateMode):
            return value
        s = str(value or "").strip().lower()
        if not s:
            return cls.DAY
        for m in cls:
            if m.value == s:
                return m
        raise ValueError(f"Unknown date mode: {value!r} (expected 'day' or 'month-day')")


class Unit(str, enum.Enum):
    LECTURE = "강"
    ROUND = "회"
    CHAPTER = "챕터"
    SECTION = "단원"
    PAGE = "페이지"
    PROBLEM = "문제"


UnitLabel = Union[Unit, str]


def unit_label(unit: UnitLabel) -> str:
    """Suffix printed after a pattern number; presets and free text alike."""
    if isinstance(unit, Unit):
        return unit.value
    return str(unit or "").strip()


def coerce_unit(value: UnitLabel) -> UnitLabel:
    if isinstance(value, Unit):
        return value
    s = str(value or "").strip()
    for u in Unit:
        if u.value == s:
            return u
    return s


@dataclass(frozen=True)
class Pattern:
    subject: str
    unit: UnitLabel = Unit.LECTURE
    start_number: int = 1
    count_per_day: int = 1
    weekdays: FrozenSet[int] = frozenset()  # empty = every weekday
    id: Optional[str] = None

    def fires_on(self, weekday: int) -> bool:
        return not self.weekdays or weekday in self.weekdays


@dataclass(frozen=True)
class GridLayoutMeta:
    leading_blanks: int
    trailing_blanks: int


# day-key (YYYY-MM-DD) -> multi-line plan text
PlanMap = Dict[str, str]


DEFAULT_PLANNER_NAME = "나의 플래너"


__all__ = [
    "DEFAULT_PLANNER_NAME",
    "DateMode",
    "GridLayoutMeta",
    "Pattern",
    "PlanMap",
    "Unit",
    "UnitLabel",
    "coerce_unit",
    "unit_label",
]
