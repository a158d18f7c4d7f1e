# studygrid/render/html.py
from __future__ import annotations

import html as _html
from typing import List

from ..document import CELL_DAY, Cell, PlannerDocument, plan_markup

CSS_BLOCK = r"""
body{margin:0;background:#fff}
.sheet{width:1200px;padding:40px;background:#fff;
  font-family:-apple-system,BlinkMacSystemFont,'Segoe UI','Apple SD Gothic Neo','Noto Sans KR','Malgun Gothic',sans-serif}
.title{text-align:center;margin-bottom:30px}
.title h1{font-size:24px;font-weight:700;color:#111827;margin:0}
.title p{font-size:14px;color:#6b7280;margin-top:8px}
.grid{display:grid;grid-template-columns:repeat(7,1fr);gap:6px}
.weekday{display:flex;align-items:center;justify-content:center;font-weight:700;font-size:14px;
  padding:10px;background:#f3f4f6;border:1px solid #d1d5db;border-radius:8px;color:#374151}
.blank{min-height:100px}
.day{border:1px solid #d1d5db;border-radius:8px;padding:10px;min-height:100px;background:#fff}
.day.today{border:2px solid #3b82f6}
.day .label{font-weight:700;font-size:14px;margin-bottom:8px;color:#374151}
.day.sunday .label{color:#dc2626}
.day .plan{font-size:12px;line-height:1.5;color:#111827;word-break:break-word}
"""

HTML_SHELL = r"""<!doctype html>
<html lang="ko">
<head>
<meta charset="utf-8">
<title>__TITLE__</title>
<style>__CSS_BLOCK__</style>
</head>
<body>
<div class="sheet">
__BODY_MARKUP__
</div>
</body>
</html>
"""

_MARKERS = ("__TITLE__", "__CSS_BLOCK__", "__BODY_MARKUP__")


def _cell_markup(cell: Cell) -> str:
    if cell.kind != CELL_DAY:
        return '<div class="blank"></div>'
    cls = ["day"]
    if cell.is_sunday:
        cls.append("sunday")
    if cell.is_today:
        cls.append("today")
    return (
        f'<div class="{" ".join(cls)}" data-key="{cell.key}">'
        f'<div class="label">{_html.escape(cell.label)}</div>'
        f'<div class="plan">{plan_markup(cell.text)}</div>'
        "</div>"
    )


def body_markup(doc: PlannerDocument) -> str:
    parts: List[str] = [
        '<div class="title">',
        f"<h1>{_html.escape(doc.title)}</h1>",
        f"<p>{_html.escape(doc.subtitle)}</p>",
        "</div>",
        '<div class="grid">',
    ]
    parts.extend(f'<div class="weekday">{_html.escape(w)}</div>' for w in doc.header)
    parts.extend(_cell_markup(c) for c in doc.cells)
    parts.append("</div>")
    return "\n".join(parts)


def build_html(doc: PlannerDocument) -> str:
    for marker in _MARKERS:
        n = HTML_SHELL.count(marker)
        if n != 1:
            raise RuntimeError(f"HTML_SHELL must contain {marker} exactly once (found {n})")

    values = {
        "__TITLE__": _html.escape(doc.title),
        "__CSS_BLOCK__": CSS_BLOCK,
        "__BODY_MARKUP__": body_markup(doc),
    }
    # Split the template only, so marker-like text inside plans is left alone.
    parts: List[str] = []
    rest = HTML_SHELL
    for marker in sorted(_MARKERS, key=HTML_SHELL.index):
        head, _sep, rest = rest.partition(marker)
        parts.append(head)
        parts.append(values[marker])
    parts.append(rest)
    return "".join(parts)
