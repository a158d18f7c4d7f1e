from __future__ import annotations

import datetime as dt
import unittest

from studygrid.calendar import build_calendar
from studygrid.document import CELL_BLANK, CELL_DAY, build_document, date_label, format_range, plan_markup
from studygrid.model import DateMode
from studygrid.render.html import build_html
from studygrid.validate import ValidationError


class TestDocumentModelContract(unittest.TestCase):
    def setUp(self) -> None:
        # Sat 2025-03-01 .. Mon 2025-03-10
        self.days = build_calendar(dt.date(2025, 3, 1), dt.date(2025, 3, 10))

    def test_grid_cells_and_blanks(self) -> None:
        doc = build_document("민법", self.days, {})
        self.assertEqual(doc.title, "민법")
        self.assertEqual(doc.subtitle, "2025.03.01 - 2025.03.10")
        self.assertEqual(doc.header, ("일", "월", "화", "수", "목", "금", "토"))
        self.assertEqual(len(doc.cells) % 7, 0)
        kinds = [c.kind for c in doc.cells]
        self.assertEqual(kinds[:6], [CELL_BLANK] * 6)
        self.assertEqual(kinds.count(CELL_DAY), 10)
        self.assertEqual(kinds[-5:], [CELL_BLANK] * 5)
        self.assertEqual(len(doc.weeks), 3)
        self.assertTrue(all(len(w) == 7 for w in doc.weeks))

    def test_day_cells_carry_labels_plans_and_flags(self) -> None:
        plans = {"2025-03-02": "민법 1강\n기출 1-20문제", "2024-01-01": "orphan"}
        doc = build_document(
            "p", self.days, plans, date_mode=DateMode.MONTH_DAY, today=dt.date(2025, 3, 4)
        )
        day_cells = [c for c in doc.cells if c.kind == CELL_DAY]
        sunday = day_cells[1]
        self.assertEqual(sunday.key, "2025-03-02")
        self.assertEqual(sunday.label, "3/2")
        self.assertEqual(sunday.lines, ("민법 1강", "기출 1-20문제"))
        self.assertTrue(sunday.is_sunday)
        self.assertFalse(day_cells[0].is_sunday)
        self.assertEqual([c.key for c in day_cells if c.is_today], ["2025-03-04"])
        self.assertFalse(any("orphan" in c.text for c in doc.cells))

    def test_date_labels(self) -> None:
        d = dt.date(2025, 3, 15)
        self.assertEqual(date_label(d, DateMode.DAY), "15")
        self.assertEqual(date_label(d, DateMode.MONTH_DAY), "3/15")
        self.assertEqual(format_range(dt.date(2025, 1, 2), dt.date(2025, 12, 31)), "2025.01.02 - 2025.12.31")

    def test_empty_calendar_rejected(self) -> None:
        with self.assertRaises(ValidationError):
            build_document("p", [], {})

    def test_plan_markup_escapes_and_breaks_lines(self) -> None:
        self.assertEqual(
            plan_markup("<b>A & B</b>\n\"q\" 'x'"),
            "&lt;b&gt;A &amp; B&lt;/b&gt;<br>&quot;q&quot; &#x27;x&#x27;",
        )
        self.assertEqual(plan_markup(""), "")

    def test_html_backend(self) -> None:
        plans = {"2025-03-03": "<script>x</script>\n__TITLE__"}
        html = build_html(build_document("A&B", self.days, plans))
        self.assertIn("<title>A&amp;B</title>", html)
        self.assertIn("&lt;script&gt;x&lt;/script&gt;<br>__TITLE__", html)
        self.assertNotIn("<script>", html)
        self.assertEqual(html.count('class="weekday"'), 7)
        self.assertEqual(html.count('class="blank"'), 11)
        self.assertIn('class="day sunday" data-key="2025-03-02"', html)


if __name__ == "__main__":
    unittest.main(verbosity=2)
