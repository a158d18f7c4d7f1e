from __future__ import annotations

import contextlib
import datetime as dt
import io
import re
import tempfile
import unittest
from pathlib import Path
from unittest.mock import patch

from PIL import Image
from reportlab.lib.pagesizes import A4, landscape
from reportlab.lib.units import mm

from studygrid.calendar import build_calendar
from studygrid.document import build_document
from studygrid.export import MSG_EXPORT_FAILED, RenderError, export_filename, export_planner
from studygrid.render.pdf import image_size_mm, write_pdf
from studygrid.render.raster import CONTENT_WIDTH, PADDING, fit_text, rasterize, wrap_line
from studygrid.validate import MSG_CALENDAR_REQUIRED, ValidationError


class TestExportContract(unittest.TestCase):
    def setUp(self) -> None:
        self.days = build_calendar(dt.date(2025, 3, 1), dt.date(2025, 3, 31))
        self.plans = {"2025-03-03": "민법 1-2강\n기출 101-120문제", "2025-03-04": "<b>&</b>"}

    def test_filename_from_name_and_first_day(self) -> None:
        self.assertEqual(export_filename("나의 플래너", dt.date(2025, 3, 1)), "나의 플래너_20250301.pdf")
        self.assertEqual(export_filename("a/b:c", dt.date(2025, 12, 9), "png"), "a_b_c_20251209.png")

    def test_empty_calendar_aborts_without_a_file(self) -> None:
        with tempfile.TemporaryDirectory() as td:
            with patch("studygrid.export.rasterize") as raster:
                with self.assertRaises(ValidationError) as ctx:
                    export_planner("p", [], {}, Path(td))
            self.assertEqual(str(ctx.exception), MSG_CALENDAR_REQUIRED)
            raster.assert_not_called()
            self.assertEqual(list(Path(td).iterdir()), [])

    def test_unknown_format_rejected(self) -> None:
        with tempfile.TemporaryDirectory() as td:
            with self.assertRaises(ValidationError):
                export_planner("p", self.days, {}, Path(td), fmt="docx")

    def test_pdf_export_writes_one_page(self) -> None:
        with tempfile.TemporaryDirectory() as td, contextlib.redirect_stderr(io.StringIO()):
            out = export_planner("플래너", self.days, self.plans, Path(td))
            self.assertEqual(out.name, "플래너_20250301.pdf")
            data = out.read_bytes()
            self.assertTrue(data.startswith(b"%PDF"))
            self.assertIn(b"/MediaBox", data)
            self.assertIn(b"/Count 1", data)
            self.assertEqual(sorted(p.name for p in Path(td).iterdir()), [out.name])

    def test_pdf_page_is_landscape_a4(self) -> None:
        with tempfile.TemporaryDirectory() as td, contextlib.redirect_stderr(io.StringIO()):
            data = export_planner("p", self.days, self.plans, Path(td)).read_bytes()
        m = re.search(rb"/MediaBox\s*\[\s*([-\d.\s]+?)\s*\]", data)
        self.assertIsNotNone(m)
        box = [float(v) for v in m.group(1).split()]
        self.assertEqual(len(box), 4)
        for got, want in zip(box, (0.0, 0.0, 841.89, 595.28)):
            self.assertAlmostEqual(got, want, places=1)

    def test_pdf_image_anchored_top_left_full_width(self) -> None:
        page_w, page_h = landscape(A4)
        img = Image.new("RGB", (2560, 1280), "white")
        with tempfile.TemporaryDirectory() as td, patch("studygrid.render.pdf.canvas") as canvas_mod:
            write_pdf(img, Path(td) / "out.pdf")
        _args, kwargs = canvas_mod.Canvas.call_args
        self.assertEqual(kwargs["pagesize"], (page_w, page_h))
        pdf = canvas_mod.Canvas.return_value
        (_reader, x, y), draw_kwargs = pdf.drawImage.call_args
        self.assertEqual(x, 0)
        self.assertAlmostEqual(draw_kwargs["width"], 297 * mm)
        self.assertAlmostEqual(draw_kwargs["height"], 148.5 * mm)
        self.assertAlmostEqual(y, page_h - 148.5 * mm)
        pdf.showPage.assert_called_once_with()
        pdf.save.assert_called_once_with()

    def test_png_export_is_double_scale(self) -> None:
        with tempfile.TemporaryDirectory() as td, contextlib.redirect_stderr(io.StringIO()):
            out = export_planner("p", self.days, self.plans, Path(td), fmt="png")
            with Image.open(out) as img:
                self.assertEqual(img.width, 2 * (CONTENT_WIDTH + 2 * PADDING))
                self.assertGreater(img.height, 0)

    def test_html_export(self) -> None:
        with tempfile.TemporaryDirectory() as td, contextlib.redirect_stderr(io.StringIO()):
            out = export_planner("p", self.days, self.plans, Path(td), fmt="html")
            text = out.read_text(encoding="utf-8")
            self.assertEqual(out.suffix, ".html")
            self.assertIn("민법 1-2강<br>기출 101-120문제", text)
            self.assertIn("&lt;b&gt;&amp;&lt;/b&gt;", text)

    def test_render_failure_is_logged_and_scratch_removed(self) -> None:
        seen = []

        def broken(doc, fmt, scratch, **kwargs):  # type: ignore[no-untyped-def]
            seen.append(scratch)
            (scratch / "grid.png").write_bytes(b"partial")
            raise OSError("disk on fire")

        err = io.StringIO()
        with tempfile.TemporaryDirectory() as td:
            with patch("studygrid.export._assemble", side_effect=broken), contextlib.redirect_stderr(err):
                with self.assertRaises(RenderError) as ctx:
                    export_planner("p", self.days, self.plans, Path(td))
            self.assertEqual(str(ctx.exception), MSG_EXPORT_FAILED)
            self.assertIsInstance(ctx.exception.__cause__, OSError)
            self.assertEqual(list(Path(td).iterdir()), [])
        self.assertEqual(len(seen), 1)
        self.assertFalse(seen[0].exists())
        self.assertIn("[studygrid.export] ERROR:", err.getvalue())
        self.assertIn("disk on fire", err.getvalue())

    def test_pdf_image_spans_page_width(self) -> None:
        w, h = image_size_mm(2560, 1280)
        self.assertEqual(w, 297.0)
        self.assertAlmostEqual(h, 148.5)
        with self.assertRaises(ValueError):
            image_size_mm(0, 10)

    def test_fit_text_shrinks_then_cuts(self) -> None:
        def measure_at(size):  # type: ignore[no-untyped-def]
            return lambda s: len(s) * size

        self.assertEqual(fit_text("abc", 24, 100, measure_at), (24, "abc"))
        self.assertEqual(fit_text("abcdefghij", 24, 150, measure_at), (15, "abcdefghij"))
        self.assertEqual(fit_text("x" * 100, 24, 120, measure_at, min_size=12), (12, "x" * 9 + "…"))

    def test_long_title_stays_inside_padding(self) -> None:
        doc = build_document("Study plan " * 40, self.days[:7], {})
        with contextlib.redirect_stderr(io.StringIO()):
            img = rasterize(doc, scale=1)
        self.assertEqual(img.width, CONTENT_WIDTH + 2 * PADDING)
        title_band = (0, PADDING, PADDING - 2, PADDING + 30)
        left = img.crop(title_band).convert("L").getextrema()
        right = img.crop((img.width - PADDING + 2, PADDING, img.width, PADDING + 30)).convert("L").getextrema()
        self.assertEqual(left, (255, 255))
        self.assertEqual(right, (255, 255))

    def test_wrap_line_breaks_words_then_characters(self) -> None:
        measure = len  # one unit per character
        self.assertEqual(wrap_line("aa bb cc", 5, measure), ["aa bb", "cc"])
        self.assertEqual(wrap_line("abcdefgh", 3, measure), ["abc", "def", "gh"])
        self.assertEqual(wrap_line("", 3, measure), [""])


if __name__ == "__main__":
    unittest.main(verbosity=2)
