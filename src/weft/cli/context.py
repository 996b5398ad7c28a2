"""CLI context and exit codes for weft."""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum
from pathlib import Path

import click

from weft.config import WeftConfig

__all__ = [
    "CLIContext",
    "ExitCode",
    "get_cli_context",
]


class ExitCode(IntEnum):
    """Standard exit codes for the weft CLI.

    - 0 for success
    - 1 for failure
    - 130 for keyboard interrupt (128 + SIGINT=2)
    """

    SUCCESS = 0
    FAILURE = 1
    INTERRUPTED = 130


@dataclass(frozen=True, slots=True)
class CLIContext:
    """Type-safe CLI context containing global options and configuration.

    Attributes:
        config: Loaded weft configuration.
        config_path: Path to config file (if specified via --config).
        verbosity: Verbosity level (0=default, 1=INFO, 2+=DEBUG).
        quiet: Suppress non-essential output.
    """

    config: WeftConfig
    config_path: Path | None = None
    verbosity: int = 0
    quiet: bool = False

    @property
    def workflows_dir(self) -> Path:
        return self.config.workflows_dir


def get_cli_context(ctx: click.Context) -> CLIContext:
    """Fetch the CLIContext stored by the root command group."""
    return ctx.obj["cli_ctx"]
