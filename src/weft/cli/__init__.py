"""CLI utilities for weft.

This module provides CLI-specific utilities including context management
and output formatting.
"""

from __future__ import annotations

from weft.cli.context import CLIContext, ExitCode, get_cli_context
from weft.cli.output import OutputFormat, format_error, format_json, format_warning

__all__ = [
    "CLIContext",
    "ExitCode",
    "OutputFormat",
    "format_error",
    "format_json",
    "format_warning",
    "get_cli_context",
]
