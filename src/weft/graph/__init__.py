"""Workflow dependency graph.

- locator: discovers workflow files under a workflows root
- models: WorkflowFile, WorkflowNode
- dependency: DependencyGraph and the affected-workflow query
"""

from __future__ import annotations

from weft.graph.dependency import DependencyGraph, infer_repo_root
from weft.graph.locator import WorkflowLocator
from weft.graph.models import WorkflowFile, WorkflowNode

__all__ = [
    "DependencyGraph",
    "WorkflowFile",
    "WorkflowLocator",
    "WorkflowNode",
    "infer_repo_root",
]
