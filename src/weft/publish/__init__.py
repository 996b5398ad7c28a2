"""Publishing: rewrite local fragment references into pinned workflowspecs."""

from __future__ import annotations

from weft.publish.rewriter import (
    process_imports_with_workflow_spec,
    process_includes_in_content,
    process_includes_with_workflow_spec,
    rewrite_imports_for_publish,
    rewrite_tree_for_publish,
)

__all__ = [
    "process_imports_with_workflow_spec",
    "process_includes_in_content",
    "process_includes_with_workflow_spec",
    "rewrite_imports_for_publish",
    "rewrite_tree_for_publish",
]
