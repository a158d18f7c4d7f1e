# studygrid/resolve.py
from __future__ import annotations

import datetime as dt
from typing import Iterable, List, Sequence

from .model import Pattern, PlanMap, unit_label
from .util.datekey import to_key, weekday_index


def format_line(p: Pattern, current: int) -> str:
    """`민법 3강` for one unit a day, `민법 3-5강` for a batch."""
    unit = unit_label(p.unit)
    if p.count_per_day == 1:
        return f"{p.subject} {current}{unit}"
    last = current + p.count_per_day - 1
    return f"{p.subject} {current}-{last}{unit}"


def resolve_plans(days: Sequence[dt.date], patterns: Iterable[Pattern]) -> PlanMap:
    """
    Walk the calendar once, oldest day first, numbering every pattern continuously.

    Each pattern keeps one running counter for the whole range: it starts at
    start_number and moves by count_per_day only on days the pattern fires.
    Lines for one day follow pattern order. Days nothing fires on get no key.
    Counters live in this call only, so repeated calls give the same map.
    """
    pats: List[Pattern] = list(patterns)
    # [pattern_id, running value], index-aligned with pats
    counters: List[list] = [[p.id, int(p.start_number)] for p in pats]

    plans: PlanMap = {}
    for day in days:
        weekday = weekday_index(day)
        lines: List[str] = []
        for i, p in enumerate(pats):
            if not p.fires_on(weekday):
                continue
            current = counters[i][1]
            lines.append(format_line(p, current))
            counters[i][1] = current + p.count_per_day
        if lines:
            plans[to_key(day)] = "\n".join(lines)
    return plans


def merge_plans(previous: PlanMap, resolved: PlanMap) -> PlanMap:
    """Keep previous entries only where the fresh resolution has none."""
    out = dict(previous)
    out.update(resolved)
    return out


__all__ = ["format_line", "merge_plans", "resolve_plans"]
