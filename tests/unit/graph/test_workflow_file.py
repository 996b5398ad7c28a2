"""Tests for WorkflowFile lazy parsing."""

from __future__ import annotations

from pathlib import Path

import pytest

from weft.graph import WorkflowFile


class TestWorkflowFile:
    """Tests for WorkflowFile."""

    def test_nothing_read_until_accessed(self, tmp_path: Path) -> None:
        workflow = WorkflowFile(tmp_path / "missing.md")

        assert workflow.path == str(tmp_path / "missing.md")
        with pytest.raises(FileNotFoundError):
            _ = workflow.content

    def test_parses_frontmatter_body_and_imports(self, tmp_path: Path) -> None:
        path = tmp_path / "main.md"
        path.write_text("---\non: push\nimports: [shared/a.md]\n---\n@include? b.md\n")

        workflow = WorkflowFile(path)

        assert workflow.frontmatter == {"on": "push", "imports": ["shared/a.md"]}
        assert workflow.body == "@include? b.md\n"
        assert [(e.dependency_path, e.optional) for e in workflow.imports] == [
            ("shared/a.md", False),
            ("b.md", True),
        ]

    def test_content_is_cached(self, tmp_path: Path) -> None:
        path = tmp_path / "main.md"
        path.write_text("first")
        workflow = WorkflowFile(path)
        assert workflow.content == "first"

        path.write_text("second")

        assert workflow.content == "first"
