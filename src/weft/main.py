"""CLI entry point for weft.

This module defines the Click-based command-line interface for weft.
"""

from __future__ import annotations

import logging
from pathlib import Path

import click

from weft import __version__
from weft.cli.commands import affected, order, publish, vendor
from weft.cli.context import CLIContext
from weft.config import load_config
from weft.exceptions import ConfigError
from weft.logging import bind_context, clear_context, configure_logging

_VERBOSITY_LEVELS = {
    "error": logging.ERROR,
    "warning": logging.WARNING,
    "info": logging.INFO,
    "debug": logging.DEBUG,
}


@click.group(invoke_without_command=True)
@click.version_option(version=__version__, prog_name="weft")
@click.option(
    "-c",
    "--config",
    "config_file",
    type=click.Path(exists=False, path_type=str),
    default=None,
    help="Path to config file (overrides ./weft.yaml).",
)
@click.option(
    "-v",
    "--verbose",
    count=True,
    help="Increase verbosity (-v for INFO, -vv for DEBUG).",
)
@click.option(
    "-q",
    "--quiet",
    is_flag=True,
    default=False,
    help="Suppress non-essential output (ERROR level only).",
)
@click.pass_context
def cli(
    ctx: click.Context,
    config_file: str | None,
    verbose: int,
    quiet: bool,
) -> None:
    """weft - dependency tracking and publishing for markdown workflows."""
    ctx.ensure_object(dict)

    # Load configuration first (before logging setup)
    config_path = Path(config_file) if config_file else None
    try:
        config = load_config(config_path)
    except ConfigError as e:
        error_parts = [f"Error: {e.message}"]
        if e.field:
            error_parts.append(f"  Field: {e.field}")
        if e.value is not None:
            error_parts.append(f"  Value: {e.value}")
        click.echo("\n".join(error_parts), err=True)
        ctx.exit(1)

    ctx.obj["cli_ctx"] = CLIContext(
        config=config,
        config_path=config_path,
        verbosity=verbose,
        quiet=quiet,
    )

    # Priority: quiet > verbose > config
    if quiet:
        level = logging.ERROR
    elif verbose > 0:
        level = logging.INFO if verbose == 1 else logging.DEBUG
    else:
        level = _VERBOSITY_LEVELS.get(config.verbosity, logging.WARNING)

    configure_logging(level=level)
    if ctx.invoked_subcommand is not None:
        bind_context(command=ctx.invoked_subcommand)
        ctx.call_on_close(clear_context)

    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())


cli.add_command(affected)
cli.add_command(order)
cli.add_command(publish)
cli.add_command(vendor)

if __name__ == "__main__":
    cli()
