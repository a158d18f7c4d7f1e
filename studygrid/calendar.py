# studygrid/calendar.py
from __future__ import annotations

import datetime as dt
from dataclasses import dataclass
from typing import List, Optional, Union

from .util.datekey import DayLike, to_date
from .validate import MSG_RANGE_MISSING, MSG_RANGE_REVERSED, ValidationError

MAX_SPAN_DAYS = 400


@dataclass(frozen=True)
class CalendarRange:
    """Inclusive day range as handed over by the date picker (either end may be unset)."""

    start: Optional[dt.date] = None
    end: Optional[dt.date] = None

    @classmethod
    def of(cls, start: Optional[DayLike], end: Optional[DayLike]) -> "CalendarRange":
        return cls(
            start=to_date(start) if start is not None else None,
            end=to_date(end) if end is not None else None,
        )

    @property
    def is_complete(self) -> bool:
        return self.start is not None and self.end is not None


def span_days(start: dt.date, end: dt.date) -> int:
    """Inclusive day count; date subtraction is calendar-based so DST never shifts it."""
    return (end - start).days + 1


def check_range(rng: CalendarRange) -> tuple[dt.date, dt.date]:
    if rng.start is None or rng.end is None:
        raise ValidationError(MSG_RANGE_MISSING)
    if rng.end < rng.start:
        raise ValidationError(MSG_RANGE_REVERSED)
    n = span_days(rng.start, rng.end)
    if n > MAX_SPAN_DAYS:
        raise ValidationError(f"The range is too long ({n} days, max {MAX_SPAN_DAYS}).")
    return rng.start, rng.end


def build_calendar(
    rng: Union[CalendarRange, DayLike, None],
    end: Optional[DayLike] = None,
) -> List[dt.date]:
    """Expand an inclusive range into its days, ascending.

    Accepts either a CalendarRange or a (start, end) pair.
    Raises ValidationError for a missing end, a reversed range or a span over
    MAX_SPAN_DAYS.
    """
    if not isinstance(rng, CalendarRange):
        rng = CalendarRange.of(rng, end)
    start, stop = check_range(rng)

    one_day = dt.timedelta(days=1)
    days: List[dt.date] = []
    d = start
    while d <= stop:
        days.append(d)
        d += one_day
    return days


__all__ = ["MAX_SPAN_DAYS", "CalendarRange", "build_calendar", "check_range", "span_days"]
