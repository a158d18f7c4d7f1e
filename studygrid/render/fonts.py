# studygrid/render/fonts.py
from __future__ import annotations

import os
from pathlib import Path
from typing import Iterable, Optional

from PIL import ImageFont

from ..util.console import log

FONT_ENV = "STUDYGRID_FONT"

# Common locations of fonts that carry Hangul glyphs.
_CANDIDATES = (
    "/usr/share/fonts/opentype/noto/NotoSansCJK-Regular.ttc",
    "/usr/share/fonts/noto-cjk/NotoSansCJK-Regular.ttc",
    "/usr/share/fonts/google-noto-cjk/NotoSansCJK-Regular.ttc",
    "/usr/share/fonts/truetype/nanum/NanumGothic.ttf",
    "/usr/share/fonts/nanum/NanumGothic.ttf",
    "/System/Library/Fonts/AppleSDGothicNeo.ttc",
    "/Library/Fonts/AppleGothic.ttf",
    "C:/Windows/Fonts/malgun.ttf",
)


def find_font_path(explicit: Optional[str] = None, candidates: Iterable[str] = _CANDIDATES) -> Optional[str]:
    """Explicit path, then $STUDYGRID_FONT, then well-known CJK fonts."""
    for raw in (explicit, os.getenv(FONT_ENV)):
        if not raw:
            continue
        p = Path(raw).expanduser()
        if p.is_file():
            return str(p)
        log("fonts", "warn", f"font not found: {p}")
    for c in candidates:
        if Path(c).is_file():
            return c
    return None


class FontSet:
    """Fonts at device size, loaded once per raster run."""

    def __init__(self, path: Optional[str], scale: int) -> None:
        self.path = path
        self.scale = scale
        if path is None:
            log("fonts", "warn", "no CJK font found; Hangul may not render (set STUDYGRID_FONT)")
        self._cache: dict[int, ImageFont.ImageFont] = {}

    def size(self, logical_px: int):  # type: ignore[no-untyped-def]
        px = int(logical_px * self.scale)
        font = self._cache.get(px)
        if font is None:
            if self.path:
                font = ImageFont.truetype(self.path, px)
            else:
                font = ImageFont.load_default(size=px)
            self._cache[px] = font
        return font
