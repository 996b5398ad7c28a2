"""Import/include extraction and path resolution.

This package turns the dependency declarations of a workflow file into
``ImportEdge`` values and resolves their paths:

- models: ImportSpec, ImportDirective, ImportEdge
- directives: the body directive grammar
- extractor: extract_imports and the ``imports`` field decoder
- resolver: resolve_import_path and workflowspec detection
"""

from __future__ import annotations

from weft.imports.directives import (
    format_import_directive,
    iter_import_directives,
    parse_import_directive,
)
from weft.imports.extractor import (
    extract_imports,
    extract_imports_from_parts,
    parse_import_specs,
)
from weft.imports.models import (
    DirectiveKind,
    EdgeOrigin,
    ImportDirective,
    ImportEdge,
    ImportSpec,
    split_section,
)
from weft.imports.resolver import (
    is_workflow_spec_format,
    resolve_import_path,
    to_posix,
)

__all__ = [
    "DirectiveKind",
    "EdgeOrigin",
    "ImportDirective",
    "ImportEdge",
    "ImportSpec",
    "extract_imports",
    "extract_imports_from_parts",
    "format_import_directive",
    "is_workflow_spec_format",
    "iter_import_directives",
    "parse_import_directive",
    "parse_import_specs",
    "resolve_import_path",
    "split_section",
    "to_posix",
]
