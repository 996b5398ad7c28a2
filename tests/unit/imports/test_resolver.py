"""Tests for import path resolution."""

from __future__ import annotations

import pytest

from weft.imports import is_workflow_spec_format, resolve_import_path, to_posix


class TestIsWorkflowSpecFormat:
    """Tests for is_workflow_spec_format."""

    def test_at_sign_marks_workflowspec(self) -> None:
        assert is_workflow_spec_format("owner/repo/shared/a.md@v1.0.0") is True

    def test_slashes_alone_are_local(self) -> None:
        assert is_workflow_spec_format("shared/mcp/arxiv.md") is False


class TestResolveImportPath:
    """Tests for resolve_import_path."""

    def test_workflowspec_unchanged(self) -> None:
        spec = "owner/repo/shared/a.md@abc"
        assert resolve_import_path(spec, ".github/workflows/main.md") == spec

    def test_leading_slash_is_repo_root_relative(self) -> None:
        assert resolve_import_path("/shared/a.md", ".github/workflows/main.md") == "shared/a.md"

    @pytest.mark.parametrize(
        ("import_path", "importer", "expected"),
        [
            ("shared/a.md", ".github/workflows/main.md", ".github/workflows/shared/a.md"),
            ("./a.md", ".github/workflows/shared/b.md", ".github/workflows/shared/a.md"),
            ("../c.md", ".github/workflows/shared/b.md", ".github/workflows/c.md"),
            ("a/../b/./c.md", "main.md", "b/c.md"),
        ],
    )
    def test_relative_to_importer_directory(
        self, import_path: str, importer: str, expected: str
    ) -> None:
        assert resolve_import_path(import_path, importer) == expected

    def test_backslashes_normalized(self) -> None:
        result = resolve_import_path("shared\\a.md", ".github\\workflows\\main.md")

        assert result == ".github/workflows/shared/a.md"

    def test_absolute_importer(self) -> None:
        assert resolve_import_path("../x.md", "/repo/wf/sub/a.md") == "/repo/wf/x.md"

    def test_to_posix(self) -> None:
        assert to_posix("a\\b\\c.md") == "a/b/c.md"
