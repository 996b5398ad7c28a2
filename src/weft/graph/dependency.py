"""Workflow dependency graph for incremental recompilation.

The graph indexes every workflow file under a workflows root in both
directions:

- ``nodes[path].imports``: the files ``path`` depends on
- ``reverse_imports[dep]``: the files that depend on ``dep``

Every mutation updates both maps together, so for every ``p`` and every
``d`` in ``nodes[p].imports``, ``p`` is in ``reverse_imports[d]``. The
reverse index keeps an affected-set query proportional to the affected
set rather than the corpus.

Files directly inside the workflows root are top-level workflows (compile
targets); files in subdirectories are shared fragments.

The graph is not safe for concurrent use. Callers that mutate it from one
thread while querying from another must serialize access themselves.

Example:
    ```python
    graph = DependencyGraph(".github/workflows")
    graph.build_graph()

    # shared/tools.md was edited: which workflows need recompiling?
    for path in graph.get_affected_workflows(".github/workflows/shared/tools.md"):
        compile_workflow(path)
    ```
"""

from __future__ import annotations

import heapq
import os
from collections import deque
from collections.abc import Iterable, Mapping
from pathlib import Path
from types import MappingProxyType

from weft.exceptions import (
    FrontmatterParseError,
    GraphError,
    WorkflowParseError,
    WorkflowReadError,
)
from weft.graph.locator import WorkflowLocator
from weft.graph.models import WorkflowFile, WorkflowNode
from weft.imports import ImportEdge, is_workflow_spec_format, resolve_import_path
from weft.logging import get_logger

__all__ = ["DependencyGraph", "infer_repo_root"]

logger = get_logger(__name__)


def _canonical(path: str | os.PathLike[str]) -> str:
    return os.path.abspath(os.fspath(path))


def infer_repo_root(workflows_dir: str | os.PathLike[str]) -> str:
    """Guess the repository root that owns a workflows directory.

    ``<repo>/.github/workflows`` maps to ``<repo>``; any other directory is
    taken to be its own root.
    """
    workflows = Path(_canonical(workflows_dir))
    if workflows.name == "workflows" and workflows.parent.name == ".github":
        return str(workflows.parent.parent)
    return str(workflows)


class DependencyGraph:
    """Bidirectional import index over the workflow files under one root.

    Build once with ``build_graph()``, then keep it current with
    ``add_workflow``, ``update_workflow``, and ``remove_workflow`` as files
    change. Cycles are recorded like any other edges; declared dependencies
    that do not exist yet are recorded too.

    Attributes:
        workflows_dir: Canonical absolute path of the workflows root.
        repo_root: Directory that ``/``-prefixed imports are relative to.
        skipped: Files ``build_graph`` could not parse, mapped to the reason.
    """

    def __init__(
        self,
        workflows_dir: str | os.PathLike[str],
        repo_root: str | os.PathLike[str] | None = None,
        locator: WorkflowLocator | None = None,
    ) -> None:
        """Initialize an empty graph.

        Args:
            workflows_dir: The workflows root.
            repo_root: Root for ``/``-prefixed imports. Inferred from
                ``workflows_dir`` when None.
            locator: File discovery implementation (uses default if None).
        """
        self.workflows_dir = _canonical(workflows_dir)
        self.repo_root = (
            _canonical(repo_root) if repo_root is not None else infer_repo_root(workflows_dir)
        )
        self._locator = locator or WorkflowLocator()
        self._nodes: dict[str, WorkflowNode] = {}
        self._reverse_imports: dict[str, set[str]] = {}
        self.skipped: dict[str, str] = {}

    def __contains__(self, path: object) -> bool:
        if not isinstance(path, (str, os.PathLike)):
            return False
        return _canonical(path) in self._nodes

    def __len__(self) -> int:
        return len(self._nodes)

    @property
    def nodes(self) -> Mapping[str, WorkflowNode]:
        """Read-only view of the forward index."""
        return MappingProxyType(self._nodes)

    @property
    def reverse_imports(self) -> Mapping[str, frozenset[str]]:
        """Snapshot of the reverse index."""
        return {dep: frozenset(importers) for dep, importers in self._reverse_imports.items()}

    # =========================================================================
    # Construction and mutation
    # =========================================================================

    def build_graph(self) -> None:
        """Scan the workflows root and index every workflow file.

        Existing state is discarded. A file that fails to parse is logged,
        recorded in ``skipped``, and left out; the rest of the graph is built
        normally.
        """
        self._nodes.clear()
        self._reverse_imports.clear()
        self.skipped.clear()

        for path in self._locator.scan(Path(self.workflows_dir)):
            try:
                self.add_workflow(path)
            except GraphError as e:
                self.skipped[_canonical(path)] = e.message
                logger.warning("workflow_skipped", path=str(path), error=e.message)

        logger.info(
            "graph_built",
            workflows_dir=self.workflows_dir,
            nodes=len(self._nodes),
            skipped=len(self.skipped),
        )

    def add_workflow(self, path: str | os.PathLike[str]) -> WorkflowNode:
        """Parse a workflow file and insert it into the graph.

        Adding a path that is already present refreshes its edges exactly as
        ``update_workflow`` does.

        Args:
            path: The workflow file.

        Returns:
            The inserted node.

        Raises:
            WorkflowParseError: If the file's front matter is malformed. or
                the file is not valid UTF-8. The graph is left unchanged.
            WorkflowReadError: If the file cannot be read.
        """
        canonical = _canonical(path)
        imports, edges = self._compute_imports(canonical)
        node = self._set_imports(canonical, imports, edges)
        logger.debug("workflow_added", path=canonical, imports=len(imports))
        return node

    def update_workflow(self, path: str | os.PathLike[str]) -> WorkflowNode:
        """Re-parse a workflow file and replace its edges.

        Stale reverse entries are removed and new ones added; calling this
        repeatedly without a file change leaves the graph unchanged.

        Raises:
            WorkflowParseError: If the file's front matter is malformed. or
                the file is not valid UTF-8. The node keeps its previous edges.
            WorkflowReadError: If the file cannot be read.
        """
        canonical = _canonical(path)
        imports, edges = self._compute_imports(canonical)
        node = self._set_imports(canonical, imports, edges)
        logger.debug("workflow_updated", path=canonical, imports=len(imports))
        return node

    def remove_workflow(self, path: str | os.PathLike[str]) -> bool:
        """Delete a workflow's node and its reverse entries.

        Other nodes that still import ``path`` keep their forward edges; those
        are refreshed the next time each importer is updated.

        Returns:
            True if a node was removed, False if the path was unknown.
        """
        canonical = _canonical(path)
        node = self._nodes.pop(canonical, None)
        if node is None:
            return False

        for dep in node.imports:
            self._discard_reverse(dep, canonical)

        logger.debug("workflow_removed", path=canonical)
        return True

    def _compute_imports(self, path: str) -> tuple[list[str], tuple[ImportEdge, ...]]:
        workflow = WorkflowFile(path)
        try:
            edges = workflow.imports
        except FrontmatterParseError as e:
            raise WorkflowParseError(path, e.message) from e
        except UnicodeDecodeError as e:
            raise WorkflowParseError(path, f"not valid UTF-8: {e}") from e
        except OSError as e:
            raise WorkflowReadError(path, str(e)) from e

        imports: list[str] = []
        for edge in edges:
            resolved = self._resolve(edge)
            if resolved is not None and resolved not in imports:
                imports.append(resolved)
        return imports, tuple(edges)

    def _resolve(self, edge: ImportEdge) -> str | None:
        dependency = edge.dependency_path
        if is_workflow_spec_format(dependency):
            # Remote files never change underneath a local edit
            logger.debug("remote_import_ignored", path=edge.importer_path, spec=dependency)
            return None

        resolved = resolve_import_path(dependency, edge.importer_path)
        if not os.path.isabs(resolved):
            resolved = os.path.join(self.repo_root, resolved)
        return os.path.normpath(resolved)

    def _set_imports(
        self, path: str, imports: list[str], edges: tuple[ImportEdge, ...]
    ) -> WorkflowNode:
        previous = self._nodes.get(path)
        old = set(previous.imports) if previous is not None else set()
        new = set(imports)

        for dep in old - new:
            self._discard_reverse(dep, path)
        for dep in new - old:
            self._reverse_imports.setdefault(dep, set()).add(path)

        node = WorkflowNode(path=path, imports=list(imports), edges=edges)
        self._nodes[path] = node
        return node

    def _discard_reverse(self, dep: str, importer: str) -> None:
        importers = self._reverse_imports.get(dep)
        if importers is None:
            return
        importers.discard(importer)
        if not importers:
            del self._reverse_imports[dep]

    # =========================================================================
    # Queries
    # =========================================================================

    def is_top_level_workflow(self, path: str | os.PathLike[str]) -> bool:
        """Whether ``path`` sits directly inside the workflows root."""
        return os.path.dirname(_canonical(path)) == self.workflows_dir

    def top_level_workflows(self) -> list[str]:
        """All known top-level workflows, sorted."""
        return sorted(p for p in self._nodes if self.is_top_level_workflow(p))

    def get_dependencies(self, path: str | os.PathLike[str]) -> list[str]:
        """Direct dependencies of ``path`` (empty if unknown)."""
        node = self._nodes.get(_canonical(path))
        return list(node.imports) if node is not None else []

    def get_importers(self, path: str | os.PathLike[str]) -> set[str]:
        """Files that directly import ``path``."""
        return set(self._reverse_imports.get(_canonical(path), ()))

    def get_affected_workflows(self, path: str | os.PathLike[str]) -> list[str]:
        """Top-level workflows that must be recompiled after ``path`` changes.

        - A top-level workflow affects only itself.
        - A known fragment affects every top-level workflow that reaches it
          through the reverse index, each listed once even across diamonds
          and cycles.
        - A fragment the graph has never seen could be imported by anything,
          so every known top-level workflow is returned.

        Returns:
            Sorted canonical paths.
        """
        canonical = _canonical(path)
        if self.is_top_level_workflow(canonical):
            return [canonical]

        if canonical not in self._nodes:
            everything = self.top_level_workflows()
            logger.info("unknown_fragment_affects_all", path=canonical, count=len(everything))
            return everything

        affected: set[str] = set()
        visited = {canonical}
        queue = deque([canonical])
        while queue:
            current = queue.popleft()
            for importer in self._reverse_imports.get(current, ()):
                if importer in visited:
                    continue
                visited.add(importer)
                if self.is_top_level_workflow(importer):
                    affected.add(importer)
                queue.append(importer)

        logger.debug("affected_workflows", path=canonical, count=len(affected))
        return sorted(affected)

    def import_closure(self, path: str | os.PathLike[str]) -> list[str]:
        """Every file ``path`` depends on, directly or transitively.

        Returns:
            Dependencies in breadth-first discovery order, excluding ``path``.
        """
        start = _canonical(path)
        visited = {start}
        closure: list[str] = []
        queue = deque([start])
        while queue:
            current = queue.popleft()
            for dep in self.get_dependencies(current):
                if dep in visited:
                    continue
                visited.add(dep)
                closure.append(dep)
                queue.append(dep)
        return closure

    def topological_order(
        self, paths: Iterable[str | os.PathLike[str]] | None = None
    ) -> list[str]:
        """Order files so every dependency precedes its importers.

        Uses Kahn's algorithm over the subgraph induced by ``paths`` (all
        nodes by default). Among files that are ready at the same time the
        lexically smallest comes first, so the result is deterministic.
        Files on a cycle cannot be ordered; they are appended at the end in
        lexical order.

        Args:
            paths: Files to order. Defaults to every node.

        Returns:
            Canonical paths in dependency-first order.
        """
        selected = (
            set(self._nodes) if paths is None else {_canonical(p) for p in paths}
        )

        in_degree = dict.fromkeys(selected, 0)
        dependents: dict[str, list[str]] = {}
        for path in selected:
            for dep in self.get_dependencies(path):
                if dep in selected and dep != path:
                    in_degree[path] += 1
                    dependents.setdefault(dep, []).append(path)

        ready = [path for path, degree in in_degree.items() if degree == 0]
        heapq.heapify(ready)

        order: list[str] = []
        while ready:
            current = heapq.heappop(ready)
            order.append(current)
            for dependent in dependents.get(current, ()):
                in_degree[dependent] -= 1
                if in_degree[dependent] == 0:
                    heapq.heappush(ready, dependent)

        if len(order) < len(selected):
            cyclic = sorted(selected.difference(order))
            logger.info("cycle_members_appended", count=len(cyclic))
            order.extend(cyclic)
        return order
