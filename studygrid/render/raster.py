# studygrid/render/raster.py
from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, List, Optional, Tuple

from PIL import Image, ImageDraw

from ..document import CELL_DAY, Cell, PlannerDocument
from .fonts import FontSet, find_font_path

# Logical (1x) geometry; everything is multiplied by the scale when drawn.
CONTENT_WIDTH = 1200
PADDING = 40
GAP = 6
RADIUS = 8
CELL_PAD = 10
CELL_MIN_HEIGHT = 100
HEADER_PAD = 10

TITLE_SIZE = 24
SUBTITLE_SIZE = 14
HEADER_SIZE = 14
LABEL_SIZE = 14
TEXT_SIZE = 12
TEXT_LINE_HEIGHT = 18  # 1.5 x TEXT_SIZE
LABEL_GAP = 8
TITLE_BLOCK_BOTTOM = 30
MIN_TITLE_SIZE = 12
ELLIPSIS = "\u2026"

WHITE = "#ffffff"
BORDER = "#d1d5db"
HEADER_FILL = "#f3f4f6"
HEADER_TEXT = "#374151"
TITLE_TEXT = "#111827"
SUBTITLE_TEXT = "#6b7280"
SUNDAY_TEXT = "#dc2626"
TODAY_OUTLINE = "#3b82f6"

DEFAULT_SCALE = 2


def wrap_line(text: str, max_width: float, measure: Callable[[str], float]) -> List[str]:
    """Break one plan line to fit max_width; words first, then characters."""
    if not text:
        return [""]
    out: List[str] = []
    cur = ""
    for word in text.split(" "):
        cand = f"{cur} {word}" if cur else word
        if measure(cand) <= max_width:
            cur = cand
            continue
        if cur:
            out.append(cur)
            cur = ""
        # a single word wider than the cell breaks anywhere
        for ch in word:
            if cur and measure(cur + ch) > max_width:
                out.append(cur)
                cur = ""
            cur += ch
    out.append(cur)
    return out


def fit_text(
    text: str,
    base_size: int,
    max_width: float,
    measure_at: Callable[[int], Callable[[str], float]],
    min_size: int = MIN_TITLE_SIZE,
) -> Tuple[int, str]:
    """Shrink the font until text fits max_width; at min_size, cut it with an ellipsis."""
    size = base_size
    while size > min_size and measure_at(size)(text) > max_width:
        size -= 1
    measure = measure_at(size)
    if measure(text) <= max_width:
        return size, text
    cut = text
    while cut and measure(cut + ELLIPSIS) > max_width:
        cut = cut[:-1]
    return size, cut + ELLIPSIS


@dataclass(frozen=True)
class _Geometry:
    scale: int

    def px(self, v: float) -> int:
        return int(round(v * self.scale))

    @property
    def col_width(self) -> float:
        return (CONTENT_WIDTH - 6 * GAP) / 7


class GridRasterizer:
    def __init__(self, *, scale: int = DEFAULT_SCALE, font_path: Optional[str] = None) -> None:
        self.g = _Geometry(scale=scale)
        self.fonts = FontSet(find_font_path(font_path), scale)
        self._probe = ImageDraw.Draw(Image.new("RGB", (1, 1), WHITE))

    def _measure(self, logical_size: int) -> Callable[[str], float]:
        font = self.fonts.size(logical_size)
        return lambda s: self._probe.textlength(s, font=font)

    def _cell_lines(self, cell: Cell) -> List[str]:
        measure = self._measure(TEXT_SIZE)
        max_w = self.g.px(self.g.col_width - 2 * CELL_PAD)
        out: List[str] = []
        for line in cell.lines:
            out.extend(wrap_line(line, max_w, measure))
        return out

    def _row_height(self, wrapped: List[List[str]]) -> float:
        tallest = max((len(lines) for lines in wrapped), default=0)
        need = 2 * CELL_PAD + LABEL_SIZE * 1.4 + LABEL_GAP + tallest * TEXT_LINE_HEIGHT
        return max(CELL_MIN_HEIGHT, need)

    def render(self, doc: PlannerDocument) -> Image.Image:
        g = self.g
        weeks = doc.weeks
        wrapped = [[self._cell_lines(c) for c in week] for week in weeks]
        row_heights = [self._row_height(w) for w in wrapped]

        title_h = TITLE_SIZE * 1.25 + 8 + SUBTITLE_SIZE * 1.4
        header_h = 2 * HEADER_PAD + HEADER_SIZE * 1.4
        grid_h = header_h + sum(row_heights) + GAP * len(row_heights)
        width = CONTENT_WIDTH + 2 * PADDING
        height = PADDING + title_h + TITLE_BLOCK_BOTTOM + grid_h + PADDING

        img = Image.new("RGB", (g.px(width), g.px(height)), WHITE)
        draw = ImageDraw.Draw(img)

        y = float(PADDING)
        self._center_text(draw, doc.title, y, TITLE_SIZE, TITLE_TEXT)
        y += TITLE_SIZE * 1.25 + 8
        self._center_text(draw, doc.subtitle, y, SUBTITLE_SIZE, SUBTITLE_TEXT)
        y += SUBTITLE_SIZE * 1.4 + TITLE_BLOCK_BOTTOM

        for col, label in enumerate(doc.header):
            x0 = PADDING + col * (g.col_width + GAP)
            box = (g.px(x0), g.px(y), g.px(x0 + g.col_width), g.px(y + header_h))
            draw.rounded_rectangle(box, radius=g.px(RADIUS), fill=HEADER_FILL, outline=BORDER, width=g.px(1))
            font = self.fonts.size(HEADER_SIZE)
            tw = draw.textlength(label, font=font)
            draw.text(
                ((box[0] + box[2] - tw) / 2, g.px(y + HEADER_PAD)),
                label,
                font=font,
                fill=HEADER_TEXT,
            )
        y += header_h + GAP

        for week, lines_by_cell, row_h in zip(weeks, wrapped, row_heights):
            for col, (cell, lines) in enumerate(zip(week, lines_by_cell)):
                x0 = PADDING + col * (g.col_width + GAP)
                if cell.kind == CELL_DAY:
                    self._day_cell(draw, cell, lines, x0, y, row_h)
            y += row_h + GAP
        return img

    def _center_text(self, draw: ImageDraw.ImageDraw, text: str, y: float, size: int, fill: str) -> None:
        g = self.g
        size, text = fit_text(text, size, g.px(CONTENT_WIDTH), self._measure)
        font = self.fonts.size(size)
        tw = draw.textlength(text, font=font)
        x = (g.px(CONTENT_WIDTH + 2 * PADDING) - tw) / 2
        draw.text((x, g.px(y)), text, font=font, fill=fill)

    def _day_cell(
        self,
        draw: ImageDraw.ImageDraw,
        cell: Cell,
        lines: List[str],
        x0: float,
        y0: float,
        h: float,
    ) -> None:
        g = self.g
        box = (g.px(x0), g.px(y0), g.px(x0 + g.col_width), g.px(y0 + h))
        outline, width = (TODAY_OUTLINE, 2) if cell.is_today else (BORDER, 1)
        draw.rounded_rectangle(box, radius=g.px(RADIUS), fill=WHITE, outline=outline, width=g.px(width))

        tx = g.px(x0 + CELL_PAD)
        ty = y0 + CELL_PAD
        draw.text(
            (tx, g.px(ty)),
            cell.label,
            font=self.fonts.size(LABEL_SIZE),
            fill=SUNDAY_TEXT if cell.is_sunday else HEADER_TEXT,
        )
        ty += LABEL_SIZE * 1.4 + LABEL_GAP
        font = self.fonts.size(TEXT_SIZE)
        for line in lines:
            draw.text((tx, g.px(ty)), line, font=font, fill=TITLE_TEXT)
            ty += TEXT_LINE_HEIGHT


def rasterize(doc: PlannerDocument, *, scale: int = DEFAULT_SCALE, font_path: Optional[str] = None) -> Image.Image:
    return GridRasterizer(scale=scale, font_path=font_path).render(doc)
