"""Shared utilities for weft."""

from __future__ import annotations

from weft.utils.atomic import atomic_write_bytes, atomic_write_text

__all__ = [
    "atomic_write_bytes",
    "atomic_write_text",
]
