"""Import and include extraction.

Finds every dependency a workflow file declares, from its front matter
``imports`` list and from body directives, without reading any other file.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from weft.constants import IMPORTS_FIELD
from weft.frontmatter import extract_frontmatter
from weft.imports.directives import iter_import_directives
from weft.imports.models import EdgeOrigin, ImportEdge, ImportSpec, split_section
from weft.imports.resolver import is_workflow_spec_format
from weft.logging import get_logger

__all__ = [
    "extract_imports",
    "extract_imports_from_parts",
    "parse_import_specs",
]

logger = get_logger(__name__)


def parse_import_specs(frontmatter: Mapping[str, Any] | None) -> list[ImportSpec]:
    """Decode the ``imports`` field of a front matter mapping.

    Accepts a list of path strings and/or ``{path, inputs}`` objects. Any
    other shape of the field means "no imports"; entries of an unsupported
    shape inside a list are dropped.

    Args:
        frontmatter: Parsed front matter, or None.

    Returns:
        Import specs in declaration order.
    """
    if not frontmatter:
        return []

    field = frontmatter.get(IMPORTS_FIELD)
    if field is None:
        return []
    if not isinstance(field, list):
        logger.debug("imports_field_ignored", field_type=type(field).__name__)
        return []

    specs: list[ImportSpec] = []
    for item in field:
        spec = ImportSpec.from_value(item)
        if spec is None:
            logger.debug("import_entry_ignored", entry_type=type(item).__name__)
            continue
        specs.append(spec)
    return specs


def _edge_for(
    importer_path: str,
    declared: str,
    optional: bool,
    origin: EdgeOrigin,
    inputs: Mapping[str, Any] | None = None,
) -> ImportEdge | None:
    if is_workflow_spec_format(declared):
        return ImportEdge(
            importer_path=importer_path,
            dependency_path=declared,
            optional=optional,
            origin=origin,
            inputs=inputs,
        )

    file_path, section = split_section(declared)
    if not file_path:
        # Section-only reference into the importing file itself
        return None
    return ImportEdge(
        importer_path=importer_path,
        dependency_path=file_path,
        optional=optional,
        section=section,
        origin=origin,
        inputs=inputs,
    )


def extract_imports_from_parts(
    frontmatter: Mapping[str, Any] | None,
    markdown: str,
    file_path: str,
) -> list[ImportEdge]:
    """Extract edges from already-split front matter and body.

    Duplicate dependencies collapse to the first declaration; a dependency
    declared both optionally and as required is required.
    """
    candidates: list[ImportEdge] = []

    for spec in parse_import_specs(frontmatter):
        edge = _edge_for(
            file_path, spec.path, False, EdgeOrigin.FRONTMATTER, spec.inputs
        )
        if edge is not None:
            candidates.append(edge)

    for directive in iter_import_directives(markdown):
        edge = _edge_for(file_path, directive.path, directive.optional, EdgeOrigin.BODY)
        if edge is None:
            logger.debug("section_only_directive_skipped", line=directive.original)
            continue
        if directive.is_legacy:
            logger.warning(
                "deprecated_import_directive",
                path=file_path,
                line=directive.original.strip(),
                hint="use {{#import}} or @include",
            )
        candidates.append(edge)

    edges: dict[str, ImportEdge] = {}
    for edge in candidates:
        existing = edges.get(edge.dependency_path)
        if existing is None:
            edges[edge.dependency_path] = edge
        elif existing.optional and not edge.optional:
            edges[edge.dependency_path] = ImportEdge(
                importer_path=existing.importer_path,
                dependency_path=existing.dependency_path,
                optional=False,
                section=existing.section,
                origin=existing.origin,
                inputs=existing.inputs,
            )
    return list(edges.values())


def extract_imports(content: str, file_path: str) -> list[ImportEdge]:
    """Extract every import edge declared by one workflow file.

    Paths are returned as declared (section suffix stripped); resolution
    against the importing file is the caller's job.

    Args:
        content: Full file content.
        file_path: Path of the file the content belongs to.

    Returns:
        Deduplicated edges, front matter imports first, then body directives.

    Raises:
        FrontmatterParseError: If the front matter is malformed.

    Example:
        >>> edges = extract_imports("@include? shared/a.md#Tools\\n", "main.md")
        >>> [(e.dependency_path, e.optional, e.section) for e in edges]
        [('shared/a.md', True, 'Tools')]
    """
    parsed = extract_frontmatter(content, path=file_path)
    return extract_imports_from_parts(parsed.frontmatter, parsed.markdown, file_path)
