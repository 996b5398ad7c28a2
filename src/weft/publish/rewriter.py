"""Workflowspec rewriter.

Publishing a workflow for reuse in other repositories replaces every local
fragment reference with a workflowspec pinned to the origin repository::

    imports:                          imports:
      - shared/tools.md        ->       - acme/flows/.github/workflows/shared/tools.md@<sha>
    @include? shared/extra.md  ->     {{#import? acme/flows/.github/workflows/shared/extra.md@<sha>}}

References that already carry an ``@`` version are left alone, and so is
every line that is not a directive.
"""

from __future__ import annotations

import os
from collections import deque
from pathlib import Path

from weft.constants import IMPORTS_FIELD, SECTION_SEPARATOR
from weft.exceptions import FrontmatterParseError
from weft.frontmatter import (
    extract_frontmatter,
    extract_markdown,
    find_frontmatter_end,
    reconstruct_workflow_file,
)
from weft.imports import (
    extract_imports,
    format_import_directive,
    is_workflow_spec_format,
    iter_import_directives,
    parse_import_directive,
    parse_import_specs,
    resolve_import_path,
    split_section,
    to_posix,
)
from weft.logging import get_logger
from weft.spec import WorkflowSpec, build_workflow_spec_ref

__all__ = [
    "process_imports_with_workflow_spec",
    "process_includes_in_content",
    "process_includes_with_workflow_spec",
    "rewrite_imports_for_publish",
    "rewrite_tree_for_publish",
]

logger = get_logger(__name__)


def _spec_ref(spec: WorkflowSpec, path: str, section: str, commit_sha: str | None) -> str:
    ref = build_workflow_spec_ref(spec.repo_slug, path, commit_sha, spec.version)
    if section:
        ref = f"{ref}{SECTION_SEPARATOR}{section}"
    return ref


def process_imports_with_workflow_spec(
    content: str, spec: WorkflowSpec, commit_sha: str | None = None
) -> str:
    """Rewrite the front matter ``imports`` list into workflowspecs.

    Each local entry is resolved against ``spec.workflow_path`` and pinned
    to ``commit_sha`` (or ``spec.version``). ``{path, inputs}`` entries keep
    their inputs. The front matter is re-serialized in priority field order;
    the body is kept as-is.

    Content without front matter, without an ``imports`` list, or whose
    front matter cannot be parsed is returned unchanged.
    """
    try:
        parsed = extract_frontmatter(content)
    except FrontmatterParseError as e:
        logger.warning("imports_rewrite_skipped", path=spec.workflow_path, error=e.message)
        return content

    if not parsed.has_frontmatter or not isinstance(
        parsed.frontmatter.get(IMPORTS_FIELD), list
    ):
        return content

    rewritten = []
    for import_spec in parse_import_specs(parsed.frontmatter):
        if is_workflow_spec_format(import_spec.path):
            rewritten.append(import_spec)
            continue
        file_path, section = split_section(import_spec.path)
        if not file_path:
            rewritten.append(import_spec)
            continue
        resolved = resolve_import_path(file_path, spec.workflow_path)
        ref = _spec_ref(spec, resolved, section, commit_sha)
        logger.debug("import_rewritten", source=import_spec.path, target=ref)
        rewritten.append(import_spec.with_path(ref))

    frontmatter = dict(parsed.frontmatter)
    frontmatter[IMPORTS_FIELD] = [item.to_value() for item in rewritten]
    return reconstruct_workflow_file(frontmatter, parsed.markdown)


def process_includes_in_content(
    content: str, spec: WorkflowSpec, commit_sha: str | None = None
) -> str:
    """Rewrite body directives relative to the workflow's own location.

    Every local ``@include``/``@import``/``{{#import}}`` line becomes a
    ``{{#import[?] <workflowspec>}}`` line with the same indentation and
    section suffix. Section-only references and existing workflowspecs are
    kept verbatim. Lines inside a leading front matter block are never
    touched.
    """
    lines = content.split("\n")
    end = find_frontmatter_end(lines)
    body_start = 0 if end is None else end + 1
    for index in range(body_start, len(lines)):
        line = lines[index]
        directive = parse_import_directive(line)
        if directive is None or is_workflow_spec_format(directive.path):
            continue

        file_path, section = split_section(directive.path)
        if not file_path:
            logger.debug("section_only_include_kept", line=line)
            continue

        resolved = resolve_import_path(file_path, spec.workflow_path)
        ref = _spec_ref(spec, resolved, section, commit_sha)
        lines[index] = format_import_directive(ref, directive.optional, directive.indent)
    return "\n".join(lines)


def process_includes_with_workflow_spec(
    content: str,
    spec: WorkflowSpec,
    commit_sha: str | None,
    package_path: str | os.PathLike[str],
) -> tuple[str, list[str]]:
    """Rewrite package-relative directives and discover nested includes.

    Directive paths are taken relative to the package root without further
    resolution. A second directive naming an already-visited file is
    dropped from the output. Included files found under ``package_path``
    are then scanned, breadth first, for their own includes.

    Args:
        content: Workflow content to rewrite.
        spec: Spec of the workflow being installed.
        commit_sha: Commit to pin to, if known.
        package_path: Root the include paths are relative to.

    Returns:
        The rewritten content and every include path discovered, direct and
        nested, in discovery order.
    """
    visited: set[str] = set()
    discovered: list[str] = []
    output: list[str] = []

    for line in content.split("\n"):
        directive = parse_import_directive(line)
        if directive is None or is_workflow_spec_format(directive.path):
            output.append(line)
            continue

        file_path, section = split_section(directive.path)
        if not file_path:
            output.append(line)
            continue
        if file_path in visited:
            logger.info("duplicate_include_dropped", path=file_path)
            continue

        visited.add(file_path)
        discovered.append(file_path)
        ref = _spec_ref(spec, file_path, section, commit_sha)
        output.append(format_import_directive(ref, directive.optional, directive.indent))

    queue = deque(discovered)
    while queue:
        current = queue.popleft()
        source = Path(package_path) / current
        if not source.is_file():
            continue
        try:
            body = extract_markdown(source.read_text(encoding="utf-8"), path=str(source))
        except (OSError, UnicodeDecodeError, FrontmatterParseError) as e:
            logger.warning("nested_include_unreadable", path=str(source), error=str(e))
            continue

        for directive in iter_import_directives(body):
            nested = directive.file_path
            if not nested or nested in visited:
                continue
            visited.add(nested)
            discovered.append(nested)
            queue.append(nested)

    return "\n".join(output), discovered


def rewrite_imports_for_publish(
    content: str,
    origin_repo_slug: str,
    commit_sha: str | None,
    origin_version_tag: str | None,
    origin_file_path: str,
) -> str:
    """Rewrite one file's local references into pinned workflowspecs.

    Front matter ``imports`` are rewritten first, then body directives.
    A commit SHA is preferred over the version tag when both are given.

    Args:
        content: File content.
        origin_repo_slug: ``owner/repo`` being published from.
        commit_sha: Commit to pin to, if known.
        origin_version_tag: Tag to pin to when no SHA is given.
        origin_file_path: Repository-relative path of the file, used to
            resolve its relative references.

    Returns:
        The rewritten content.
    """
    spec = WorkflowSpec(
        repo_slug=origin_repo_slug,
        workflow_path=to_posix(origin_file_path),
        workflow_name=Path(origin_file_path).stem,
        version=origin_version_tag or "",
    )
    rewritten = process_imports_with_workflow_spec(content, spec, commit_sha)
    return process_includes_in_content(rewritten, spec, commit_sha)


def _local_dependencies(content: str, path: str) -> list[str]:
    try:
        edges = extract_imports(content, path)
        declared = [edge.dependency_path for edge in edges]
    except FrontmatterParseError as e:
        logger.warning("frontmatter_unparsable", path=path, error=e.message)
        declared = [directive.file_path for directive in iter_import_directives(content)]

    return [
        resolve_import_path(dep, path)
        for dep in declared
        if dep and not is_workflow_spec_format(dep)
    ]


def rewrite_tree_for_publish(
    entry_path: str,
    repo_root: str | os.PathLike[str],
    origin_repo_slug: str,
    commit_sha: str | None = None,
    origin_version_tag: str | None = None,
) -> dict[str, str]:
    """Rewrite a workflow and every local fragment it reaches.

    Files are visited with a worklist and a visited set, so cycles and
    diamonds are walked once each. References to files that do not exist
    are still rewritten but not followed.

    Args:
        entry_path: Repository-relative path of the workflow to publish.
        repo_root: Repository root on disk.
        origin_repo_slug: ``owner/repo`` being published from.
        commit_sha: Commit to pin to, if known.
        origin_version_tag: Tag to pin to when no SHA is given.

    Returns:
        Rewritten content keyed by repository-relative path, entry first.
    """
    root = Path(repo_root)
    start = to_posix(entry_path).lstrip("/")
    rewritten: dict[str, str] = {}
    visited = {start}
    worklist = deque([start])

    while worklist:
        current = worklist.popleft()
        source = root / current
        try:
            content = source.read_text(encoding="utf-8")
        except FileNotFoundError:
            logger.info("publish_target_missing", path=current)
            continue
        except UnicodeDecodeError as e:
            logger.warning("publish_target_undecodable", path=current, error=str(e))
            continue

        rewritten[current] = rewrite_imports_for_publish(
            content, origin_repo_slug, commit_sha, origin_version_tag, current
        )
        for dep in _local_dependencies(content, current):
            if dep not in visited:
                visited.add(dep)
                worklist.append(dep)

    logger.info("publish_tree_rewritten", entry=start, files=len(rewritten))
    return rewritten
