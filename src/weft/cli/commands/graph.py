"""Dependency graph commands: ``weft affected`` and ``weft order``."""

from __future__ import annotations

import os

import click

from weft.cli.context import get_cli_context
from weft.cli.output import OutputFormat, format_json, format_warning
from weft.graph import DependencyGraph
from weft.logging import get_logger

logger = get_logger(__name__)

_format_option = click.option(
    "-f",
    "--format",
    "fmt",
    type=click.Choice([f.value for f in OutputFormat]),
    default=OutputFormat.TEXT.value,
    help="Output format.",
)


def _display(path: str) -> str:
    relative = os.path.relpath(path)
    return path if relative.startswith("..") else relative


def _load_graph(ctx: click.Context) -> DependencyGraph:
    cli_ctx = get_cli_context(ctx)
    graph = DependencyGraph(cli_ctx.workflows_dir)
    graph.build_graph()
    if not cli_ctx.quiet:
        for path, reason in sorted(graph.skipped.items()):
            click.echo(format_warning(f"skipped {_display(path)}: {reason}"), err=True)
    return graph


def _emit(paths: list[str], fmt: str) -> None:
    shown = [_display(p) for p in paths]
    if fmt == OutputFormat.JSON.value:
        click.echo(format_json(shown))
    else:
        for path in shown:
            click.echo(path)


@click.command()
@click.argument("file", type=click.Path(path_type=str))
@_format_option
@click.pass_context
def affected(ctx: click.Context, file: str, fmt: str) -> None:
    """List the top-level workflows to recompile after FILE changes.

    FILE need not exist: a deleted or not-yet-indexed fragment conservatively
    affects every top-level workflow.

    Examples:
        weft affected .github/workflows/shared/tools.md
        weft affected .github/workflows/shared/tools.md --format json
    """
    graph = _load_graph(ctx)
    result = graph.get_affected_workflows(file)
    logger.debug("affected_command_done", file=file, count=len(result))
    _emit(result, fmt)


@click.command()
@click.argument("files", nargs=-1, type=click.Path(path_type=str))
@_format_option
@click.pass_context
def order(ctx: click.Context, files: tuple[str, ...], fmt: str) -> None:
    """Print workflow files with every dependency before its importers.

    With no FILES, orders every file under the workflows directory.

    Examples:
        weft order
        weft order .github/workflows/a.md .github/workflows/shared/tools.md
    """
    graph = _load_graph(ctx)
    _emit(graph.topological_order(files or None), fmt)
