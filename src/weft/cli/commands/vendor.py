"""``weft vendor``: copy a workflow's include closure into another repository."""

from __future__ import annotations

from pathlib import Path

import click

from weft.cli.context import ExitCode, get_cli_context
from weft.cli.output import format_error
from weft.exceptions import FrontmatterParseError, VendorError
from weft.frontmatter import extract_markdown
from weft.vendor import FileTracker, collect_include_dependencies, copy_dependencies


@click.command()
@click.argument("file", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.argument("target", type=click.Path(file_okay=False, path_type=Path))
@click.option("--force", is_flag=True, default=False, help="Overwrite files whose content differs.")
@click.option("--dry-run", is_flag=True, default=False, help="Report changes without writing.")
@click.pass_context
def vendor(ctx: click.Context, file: Path, target: Path, force: bool, dry_run: bool) -> None:
    """Copy every fragment FILE includes, transitively, under TARGET.

    Include paths are taken relative to FILE's directory and keep their
    relative layout under TARGET. Files created by a run that fails are
    removed again.

    Examples:
        weft vendor ../flows/workflows/triage.md .github/workflows
        weft vendor ../flows/workflows/triage.md .github/workflows --force
    """
    settings = get_cli_context(ctx).config.vendor
    force = force or settings.force
    dry_run = dry_run or settings.dry_run

    try:
        body = extract_markdown(file.read_text(encoding="utf-8"), path=str(file))
    except FrontmatterParseError as e:
        click.echo(format_error(e.message), err=True)
        ctx.exit(ExitCode.FAILURE)
    except UnicodeDecodeError as e:
        click.echo(format_error(f"{file} is not valid UTF-8: {e.reason}"), err=True)
        ctx.exit(ExitCode.FAILURE)

    deps = collect_include_dependencies(body, file.parent)
    tracker = FileTracker()
    try:
        result = copy_dependencies(deps, target, dry_run=dry_run, force=force, tracker=tracker)
    except VendorError as e:
        tracker.rollback()
        click.echo(format_error(e.message), err=True)
        ctx.exit(ExitCode.FAILURE)

    prefix = "Would create" if dry_run else "Created"
    for path in result.created:
        click.echo(f"{prefix}: {path}")
    prefix = "Would overwrite" if dry_run else "Overwrote"
    for path in result.modified:
        click.echo(f"{prefix}: {path}")
    for path in result.skipped:
        click.echo(f"Skipped: {path}")
