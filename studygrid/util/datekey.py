# studygrid/util/datekey.py
from __future__ import annotations

import datetime as dt
import re
from typing import Union

from ..validate import ValidationError

DayLike = Union[dt.date, dt.datetime]

_KEY_RE = re.compile(r"^(\d{4})-(\d{2})-(\d{2})$")


def to_date(value: DayLike) -> dt.date:
    """Normalize a date/datetime to the local calendar day it falls on.

    Naive datetimes are taken as local wall-clock time. Aware datetimes are
    first converted to the system local zone. The time of day is dropped.
    """
    if isinstance(value, dt.datetime):
        if value.tzinfo is not None:
            value = value.astimezone()
        return dt.date(value.year, value.month, value.day)
    if isinstance(value, dt.date):
        return value
    raise TypeError(f"expected date or datetime, got {type(value).__name__}")


def to_key(value: DayLike) -> str:
    """Fixed-width, sortable "YYYY-MM-DD" key built from local y/m/d."""
    d = to_date(value)
    return f"{d.year:04d}-{d.month:02d}-{d.day:02d}"


def from_key(key: str) -> dt.date:
    m = _KEY_RE.match(str(key or "").strip())
    if not m:
        raise ValidationError(f"Invalid day key: {key!r} (expected YYYY-MM-DD)")
    y, mo, d = (int(x) for x in m.groups())
    try:
        return dt.date(y, mo, d)
    except ValueError as ex:
        raise ValidationError(f"Invalid day key: {key!r} ({ex})") from ex


def weekday_index(value: DayLike) -> int:
    """0=Sunday .. 6=Saturday."""
    return to_date(value).isoweekday() % 7
