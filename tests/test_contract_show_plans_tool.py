from __future__ import annotations

import contextlib
import io
import json
import os
import unittest
from pathlib import Path
from unittest.mock import patch

from studygrid.tools import show_plans

REPO_ROOT = Path(__file__).resolve().parents[1]
SAMPLE = REPO_ROOT / "samples" / "civil_law.json"


def _run(argv: list[str]) -> tuple[int, str, str]:
    out, err = io.StringIO(), io.StringIO()
    with contextlib.redirect_stdout(out), contextlib.redirect_stderr(err):
        rc = show_plans.main(argv)
    return rc, out.getvalue(), err.getvalue()


class TestShowPlansTool(unittest.TestCase):
    def test_json_plan_map(self) -> None:
        rc, out, err = _run(["--plan", str(SAMPLE), "--json"])
        self.assertEqual(rc, 0, err)
        plans = json.loads(out)

        self.assertEqual(plans["2025-03-01"], "특허법 1챕터\n기출 101-120문제")
        self.assertEqual(plans["2025-03-02"], "기출 121-140문제")
        self.assertEqual(plans["2025-03-03"], "민법 1-2강\n기출 141-160문제")
        self.assertEqual(plans["2025-03-08"], "특허법 2챕터\n기출 241-260문제")
        self.assertEqual(plans["2025-03-29"], "모의고사")
        self.assertEqual(plans["2025-03-31"], "민법 41-42강\n기출 701-720문제")
        self.assertEqual(len(plans), 31)

    def test_range_override_restarts_numbering(self) -> None:
        rc, out, err = _run(["--plan", str(SAMPLE), "--start", "2025-03-03", "--end", "2025-03-04", "--json"])
        self.assertEqual(rc, 0, err)
        self.assertEqual(
            json.loads(out),
            {
                "2025-03-03": "민법 1-2강\n기출 101-120문제",
                "2025-03-04": "민법 3-4강\n기출 121-140문제",
            },
        )

    def test_text_listing(self) -> None:
        rc, out, err = _run(["--plan", str(SAMPLE), "--start", "2025-03-01", "--end", "2025-03-02"])
        self.assertEqual(rc, 0, err)
        self.assertEqual(
            out.splitlines(),
            [
                "2025-03-01 (토) 3/1",
                "  특허법 1챕터",
                "  기출 101-120문제",
                "2025-03-02 (일) 3/2",
                "  기출 121-140문제",
            ],
        )

    def test_pattern_listing(self) -> None:
        rc, out, err = _run(["--plan", str(SAMPLE), "--patterns"])
        self.assertEqual(rc, 0, err)
        self.assertEqual(
            out.splitlines(),
            [
                "하루 2강 - 민법 [월, 화, 수, 목, 금]",
                "하루 1챕터 - 특허법 [토]",
                "하루 20문제 - 기출 [전체]",
            ],
        )

        rc, out, err = _run(["--plan", str(SAMPLE), "--patterns", "--json"])
        self.assertEqual(rc, 0, err)
        self.assertEqual(json.loads(out)[2], {"chip": "하루 20문제 - 기출", "days": "전체"})

    def test_file_date_mode_beats_env(self) -> None:
        with patch.dict(os.environ, {"STUDYGRID_DATE_MODE": "day"}):
            rc, out, err = _run(["--plan", str(SAMPLE), "--start", "2025-03-02", "--end", "2025-03-02"])
        self.assertEqual(rc, 0, err)
        self.assertEqual(out.splitlines()[0], "2025-03-02 (일) 3/2")

    def test_missing_file(self) -> None:
        rc, _out, err = _run(["--plan", "/nonexistent/planner.json"])
        self.assertEqual(rc, 2)
        self.assertIn("[studygrid-plans] ERROR: Missing planner file", err)

    def test_reversed_override_rejected(self) -> None:
        rc, _out, err = _run(["--plan", str(SAMPLE), "--start", "2025-03-10", "--end", "2025-03-01"])
        self.assertEqual(rc, 2)
        self.assertIn("end date cannot be before", err)


if __name__ == "__main__":
    unittest.main(verbosity=2)
