"""Export boundary: planner state in, one downloadable file out.

Failure policy:
  - empty calendar -> ValidationError before anything is rendered
  - any raster / document assembly error -> logged, re-raised as RenderError
    with a generic message
  - the scratch directory is removed on every path, and the output file only
    appears once assembly finished
"""

from __future__ import annotations

import datetime as dt
import os
import re
import shutil
import tempfile
from pathlib import Path
from typing import Mapping, Optional, Sequence

from .document import PlannerDocument, build_document
from .model import DateMode
from .render.html import build_html
from .render.pdf import write_pdf
from .render.raster import DEFAULT_SCALE, rasterize
from .util.console import log
from .validate import MSG_CALENDAR_REQUIRED, ValidationError

FORMATS = ("pdf", "png", "html")

MSG_EXPORT_FAILED = "Export failed. See the log for details."

_UNSAFE_NAME_RE = re.compile(r'[\\/:*?"<>|\x00-\x1f]')


class RenderError(RuntimeError):
    """Raster or document assembly failed; the message is user-facing."""


def export_filename(planner_name: str, first_day: dt.date, fmt: str = "pdf") -> str:
    """`{name}_{YYYYMMDD}.{ext}`; path-hostile characters become `_`."""
    safe = _UNSAFE_NAME_RE.sub("_", planner_name or "").strip()
    return f"{safe}_{first_day:%Y%m%d}.{fmt}"


def _assemble(doc: PlannerDocument, fmt: str, scratch: Path, *, scale: int, font_path: Optional[str]) -> Path:
    if fmt == "html":
        target = scratch / "planner.html"
        target.write_text(build_html(doc), encoding="utf-8", newline="\n")
        return target

    image = rasterize(doc, scale=scale, font_path=font_path)
    png = scratch / "grid.png"
    image.save(png, format="PNG")
    if fmt == "png":
        return png

    target = scratch / "planner.pdf"
    write_pdf(png, target, title=doc.title)
    return target


def export_planner(
    name: str,
    days: Sequence[dt.date],
    plans: Mapping[str, str],
    out_dir: Path,
    *,
    date_mode: DateMode = DateMode.DAY,
    fmt: str = "pdf",
    scale: int = DEFAULT_SCALE,
    font_path: Optional[str] = None,
    today: Optional[dt.date] = None,
) -> Path:
    """Render the filled grid and write it into out_dir; returns the file path."""
    if not days:
        raise ValidationError(MSG_CALENDAR_REQUIRED)
    if fmt not in FORMATS:
        raise ValidationError(f"Unknown export format: {fmt!r} (expected one of {', '.join(FORMATS)})")

    doc = build_document(name, days, plans, date_mode=date_mode, today=today)
    out_path = Path(out_dir) / export_filename(name, days[0], fmt)

    try:
        with tempfile.TemporaryDirectory(prefix="studygrid-export-") as td:
            built = _assemble(doc, fmt, Path(td), scale=scale, font_path=font_path)
            out_path.parent.mkdir(parents=True, exist_ok=True)
            staged = out_path.with_name(out_path.name + ".part")
            shutil.copyfile(built, staged)
            os.replace(staged, out_path)
    except Exception as ex:
        log("export", "error", f"{fmt} export of {out_path.name!r} failed: {type(ex).__name__}: {ex}")
        staged = out_path.with_name(out_path.name + ".part")
        if staged.exists():
            staged.unlink()
        raise RenderError(MSG_EXPORT_FAILED) from ex

    log("export", "info", f"wrote {out_path} ({len(days)} days)")
    return out_path


__all__ = ["FORMATS", "MSG_EXPORT_FAILED", "RenderError", "export_filename", "export_planner"]
