"""Data models for the workflow dependency graph."""

from __future__ import annotations

from dataclasses import dataclass, field
from functools import cached_property
from pathlib import Path
from typing import Any

from weft.frontmatter import FrontmatterResult, extract_frontmatter
from weft.imports import ImportEdge, extract_imports_from_parts

__all__ = ["WorkflowFile", "WorkflowNode"]


class WorkflowFile:
    """A workflow definition on disk, read and parsed lazily.

    Nothing is read until ``content`` (or anything derived from it) is first
    accessed; the result is cached for the lifetime of the object.

    Attributes:
        path: Absolute path of the file.
    """

    def __init__(self, path: str | Path) -> None:
        self.path = str(path)

    def __repr__(self) -> str:
        return f"WorkflowFile({self.path!r})"

    @cached_property
    def content(self) -> str:
        return Path(self.path).read_text(encoding="utf-8")

    @cached_property
    def parsed(self) -> FrontmatterResult:
        return extract_frontmatter(self.content, path=self.path)

    @property
    def frontmatter(self) -> dict[str, Any]:
        return self.parsed.frontmatter

    @property
    def body(self) -> str:
        return self.parsed.markdown

    @cached_property
    def imports(self) -> list[ImportEdge]:
        """Declared import edges, unresolved."""
        return extract_imports_from_parts(self.frontmatter, self.body, self.path)


@dataclass(slots=True)
class WorkflowNode:
    """A file's entry in the dependency graph.

    Attributes:
        path: Canonical absolute path of the file.
        imports: Resolved dependency paths, in declaration order, unique.
        edges: The declared edges the imports were resolved from.
    """

    path: str
    imports: list[str] = field(default_factory=list)
    edges: tuple[ImportEdge, ...] = ()
