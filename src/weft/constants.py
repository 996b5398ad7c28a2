"""weft constants.

Single source of truth for directory conventions, front-matter field
ordering, and directive spellings shared by the graph, rewriter, and
vendoring layers.
"""

from __future__ import annotations

# =============================================================================
# Filesystem Layout
# =============================================================================

#: Default workflows root, relative to the repository root
DEFAULT_WORKFLOWS_DIR: str = ".github/workflows"

#: Conventional subdirectory for shared fragments
SHARED_DIR_NAME: str = "shared"

#: Extension of workflow definition files
WORKFLOW_FILE_SUFFIX: str = ".md"

#: Project configuration file name
CONFIG_FILE_NAME: str = "weft.yaml"

# =============================================================================
# Front Matter
# =============================================================================

#: Front matter delimiter line
FRONTMATTER_DELIMITER: str = "---"

#: Top-level fields emitted first, in this order, when front matter is
#: re-serialized. Remaining fields follow alphabetically.
PRIORITY_WORKFLOW_FIELDS: tuple[str, ...] = (
    "on",
    "permissions",
    "if",
    "network",
    "imports",
    "safe-outputs",
    "steps",
)

#: Front matter key declaring imports
IMPORTS_FIELD: str = "imports"

# =============================================================================
# Workflowspec
# =============================================================================

#: Separator between a workflowspec path and its version or commit
WORKFLOW_SPEC_VERSION_SEPARATOR: str = "@"

#: Separator between a file path and a section name
SECTION_SEPARATOR: str = "#"

#: Default directory for short-form specs (owner/repo/name)
DEFAULT_SPEC_WORKFLOW_DIR: str = "workflows"
