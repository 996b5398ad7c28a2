"""``weft publish``: pin a workflow's local references to the origin repository."""

from __future__ import annotations

import os
from pathlib import Path

import click

from weft.cli.context import ExitCode, get_cli_context
from weft.cli.output import format_error
from weft.imports import to_posix
from weft.logging import get_logger
from weft.publish import rewrite_tree_for_publish
from weft.utils.atomic import atomic_write_text

logger = get_logger(__name__)


@click.command()
@click.argument("file", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option("--repo", "repo_slug", default=None, help="Origin repository (owner/repo).")
@click.option("--sha", "commit_sha", default=None, help="Commit SHA to pin references to.")
@click.option("--version", "version_tag", default=None, help="Tag to pin to when no SHA is given.")
@click.option(
    "--repo-root",
    type=click.Path(exists=True, file_okay=False, path_type=Path),
    default=Path("."),
    show_default=True,
    help="Repository root that FILE's references are relative to.",
)
@click.option(
    "-o",
    "--output-dir",
    type=click.Path(file_okay=False, path_type=Path),
    default=None,
    help="Write FILE and every local fragment it reaches here, rewritten.",
)
@click.pass_context
def publish(
    ctx: click.Context,
    file: Path,
    repo_slug: str | None,
    commit_sha: str | None,
    version_tag: str | None,
    repo_root: Path,
    output_dir: Path | None,
) -> None:
    """Rewrite FILE's local imports and includes into pinned workflowspecs.

    Prints the rewritten FILE, or with --output-dir writes the rewritten
    closure of local fragments under that directory.

    Examples:
        weft publish .github/workflows/triage.md --repo acme/flows --sha 0a1b2c...
        weft publish .github/workflows/triage.md --version v1.2.0 -o dist/
    """
    settings = get_cli_context(ctx).config.publish
    repo_slug = repo_slug or settings.repo_slug
    version_tag = version_tag or settings.version
    if not repo_slug:
        click.echo(
            format_error(
                "No origin repository given",
                suggestion="Pass --repo owner/repo or set publish.repo_slug in weft.yaml",
            ),
            err=True,
        )
        ctx.exit(ExitCode.FAILURE)

    entry = to_posix(os.path.relpath(file.resolve(), repo_root.resolve()))
    tree = rewrite_tree_for_publish(entry, repo_root, repo_slug, commit_sha, version_tag)

    if output_dir is None:
        click.echo(tree[entry], nl=False)
        return

    for relative, content in tree.items():
        atomic_write_text(output_dir / relative, content)
        logger.info("published_file_written", path=str(output_dir / relative))
    click.echo(f"Wrote {len(tree)} file(s) to {output_dir}")
