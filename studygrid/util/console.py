# studygrid/util/console.py
from __future__ import annotations

import sys
from typing import Any


def eprint(*args: Any) -> None:
    print(*args, file=sys.stderr)


def log(scope: str, level: str, msg: str) -> None:
    """Write one diagnostic line, e.g. `[studygrid.export] WARN: ...`."""
    eprint(f"[studygrid.{scope}] {level.upper()}: {msg}")
