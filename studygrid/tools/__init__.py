"""studygrid.tools package

Developer utilities (plan listing, etc.).

Kept free of eager imports so `python -m studygrid.tools.<name>` has no
import-time side effects.
"""

__all__: list[str] = []
