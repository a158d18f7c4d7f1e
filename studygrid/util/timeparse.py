# studygrid/util/timeparse.py
from __future__ import annotations

import datetime as dt
from typing import FrozenSet, Iterable, Union

# Sunday-first, matching weekday_index().
WEEKDAY_LABELS = ("일", "월", "화", "수", "목", "금", "토")

_WEEKDAY_NAMES = {
    "sun": 0, "sunday": 0,
    "mon": 1, "monday": 1,
    "tue": 2, "tuesday": 2,
    "wed": 3, "wednesday": 3,
    "thu": 4, "thursday": 4,
    "fri": 5, "friday": 5,
    "sat": 6, "saturday": 6,
}
for _i, _label in enumerate(WEEKDAY_LABELS):
    _WEEKDAY_NAMES[_label] = _i


def parse_date_yyyy_mm_dd(s: str) -> dt.date:
    return dt.datetime.strptime(s.strip(), "%Y-%m-%d").date()


def parse_weekday(v: Union[int, str]) -> int:
    if isinstance(v, bool):
        raise ValueError(f"Invalid weekday: {v!r}")
    if isinstance(v, int):
        idx = v
    else:
        s = str(v).strip().lower()
        if s.isdigit():
            idx = int(s)
        elif s in _WEEKDAY_NAMES:
            idx = _WEEKDAY_NAMES[s]
        else:
            raise ValueError(f"Invalid weekday: {v!r}")
    if not 0 <= idx <= 6:
        raise ValueError(f"Weekday out of range 0..6: {v!r}")
    return idx


def parse_weekdays(values: Union[str, Iterable[Union[int, str]], None]) -> FrozenSet[int]:
    """Accepts "mon,wed", "1,3", ["월", "수"] or [1, 3]. Empty means every day."""
    if values is None:
        return frozenset()
    if isinstance(values, str):
        values = [p for p in values.split(",") if p.strip()]
    return frozenset(parse_weekday(v) for v in values)
