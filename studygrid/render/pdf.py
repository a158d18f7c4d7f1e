# studygrid/render/pdf.py
from __future__ import annotations

from pathlib import Path
from typing import Tuple, Union

from PIL import Image
from reportlab.lib.pagesizes import A4, landscape
from reportlab.lib.units import mm
from reportlab.lib.utils import ImageReader
from reportlab.pdfgen import canvas

PAGE_WIDTH_MM = 297


def image_size_mm(px_width: int, px_height: int) -> Tuple[float, float]:
    """Full page width; height keeps the raster's aspect ratio."""
    if px_width <= 0 or px_height <= 0:
        raise ValueError(f"empty raster: {px_width}x{px_height}")
    return float(PAGE_WIDTH_MM), px_height * PAGE_WIDTH_MM / px_width


def write_pdf(image: Union[Image.Image, str, Path], out_path: Path, *, title: str = "") -> Path:
    """One landscape A4 page with the image anchored at the top-left corner.

    Images taller than the page are clipped at the bottom edge.
    """
    reader = ImageReader(str(image) if isinstance(image, Path) else image)
    px_w, px_h = reader.getSize()
    w_mm, h_mm = image_size_mm(px_w, px_h)

    page_w, page_h = landscape(A4)
    pdf = canvas.Canvas(str(out_path), pagesize=(page_w, page_h))
    if title:
        pdf.setTitle(title)
    # reportlab's origin is bottom-left
    pdf.drawImage(reader, 0, page_h - h_mm * mm, width=w_mm * mm, height=h_mm * mm)
    pdf.showPage()
    pdf.save()
    return out_path
