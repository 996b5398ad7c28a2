"""weft - dependency tracking, publishing, and vendoring for markdown workflows."""

from __future__ import annotations

__version__ = "0.1.0"

from weft.exceptions import WeftError  # noqa: E402
from weft.graph import DependencyGraph  # noqa: E402

__all__ = [
    "DependencyGraph",
    "WeftError",
    "__version__",
]
