"""Import path resolution.

Resolution is purely lexical: nothing here touches the filesystem, so the
same inputs always produce the same canonical path on every host.
"""

from __future__ import annotations

import posixpath

from weft.constants import WORKFLOW_SPEC_VERSION_SEPARATOR

__all__ = [
    "is_workflow_spec_format",
    "resolve_import_path",
    "to_posix",
]


def is_workflow_spec_format(path: str) -> bool:
    """Check whether a path is already a versioned workflowspec.

    The ``@`` version separator is the only reliable indicator; a path such
    as ``shared/mcp/arxiv.md`` has slashes too but is local.
    """
    return WORKFLOW_SPEC_VERSION_SEPARATOR in path


def to_posix(path: str) -> str:
    """Normalize host path separators to forward slashes."""
    return path.replace("\\", "/")


def resolve_import_path(import_path: str, importing_file_path: str) -> str:
    """Resolve an import path to its canonical repository path.

    Args:
        import_path: Path as declared in the importing file.
        importing_file_path: Location of the importing file. Relative imports
            resolve against its directory.

    Returns:
        - ``import_path`` unchanged when it is a workflowspec;
        - the path without its leading slash when it is repository-root
          relative (``/shared/a.md`` -> ``shared/a.md``);
        - otherwise the lexically normalized join of the importer's directory
          and the import path, in forward-slash form.

    Example:
        >>> resolve_import_path("../shared/a.md", ".github/workflows/ci/main.md")
        '.github/workflows/shared/a.md'
    """
    if is_workflow_spec_format(import_path):
        return import_path

    posix_import = to_posix(import_path)
    if posix_import.startswith("/"):
        return posix_import.lstrip("/")

    workflow_dir = posixpath.dirname(to_posix(importing_file_path))
    return posixpath.normpath(posixpath.join(workflow_dir, posix_import))
