# studygrid/patterns.py
from __future__ import annotations

import dataclasses
import uuid
from typing import Dict, Iterator, List, Optional

from .model import Pattern, coerce_unit, unit_label
from .util.timeparse import WEEKDAY_LABELS
from .validate import ValidationError


def _new_id() -> str:
    return uuid.uuid4().hex


def normalize_pattern(p: Pattern) -> Pattern:
    """Commit-time checks: per-day count 0 becomes 1, negatives are rejected."""
    if not isinstance(p.start_number, int) or p.start_number < 0:
        raise ValidationError(f"Start number must be an integer >= 0 (got {p.start_number!r}).")
    if not isinstance(p.count_per_day, int) or p.count_per_day < 0:
        raise ValidationError(f"Count per day must be an integer >= 1 (got {p.count_per_day!r}).")
    bad = sorted(w for w in p.weekdays if not isinstance(w, int) or not 0 <= w <= 6)
    if bad:
        raise ValidationError(f"Weekdays must be 0 (Sun) .. 6 (Sat), got {bad!r}.")
    return dataclasses.replace(
        p,
        subject=str(p.subject or "").strip(),
        unit=coerce_unit(p.unit),
        count_per_day=max(1, p.count_per_day),
        weekdays=frozenset(p.weekdays),
    )


class PatternStore:
    """Patterns keyed by id, iterated in insertion order.

    Resolution consumes patterns in this order, so it is also the tie-break
    when several patterns land on the same day.
    """

    def __init__(self, patterns: Optional[List[Pattern]] = None) -> None:
        self._items: Dict[str, Pattern] = {}
        for p in patterns or []:
            self.upsert(p)

    def upsert(self, pattern: Pattern) -> Pattern:
        p = normalize_pattern(pattern)
        if p.id is not None and p.id in self._items:
            # dict assignment to an existing key keeps its position
            self._items[p.id] = p
            return p
        p = dataclasses.replace(p, id=_new_id())
        self._items[p.id] = p  # type: ignore[index]
        return p

    def remove(self, pattern_id: str) -> None:
        self._items.pop(pattern_id, None)

    def get(self, pattern_id: str) -> Optional[Pattern]:
        return self._items.get(pattern_id)

    def clear(self) -> None:
        self._items.clear()

    def __iter__(self) -> Iterator[Pattern]:
        return iter(list(self._items.values()))

    def __len__(self) -> int:
        return len(self._items)

    def __contains__(self, pattern_id: object) -> bool:
        return pattern_id in self._items


def describe_pattern(p: Pattern) -> tuple[str, str]:
    """(chip text, weekday text) as shown in the pattern list."""
    chip = f"하루 {p.count_per_day}{unit_label(p.unit)} - {p.subject}"
    if p.weekdays:
        days = ", ".join(WEEKDAY_LABELS[d] for d in sorted(p.weekdays))
    else:
        days = "전체"
    return chip, days


__all__ = ["PatternStore", "describe_pattern", "normalize_pattern"]
