"""Tests for WorkflowLocator class."""

from __future__ import annotations

from pathlib import Path

from weft.graph import WorkflowLocator


class TestWorkflowLocator:
    """Tests for WorkflowLocator class."""

    def test_scan_empty_directory(self, tmp_path: Path) -> None:
        """Should return empty list when scanning empty directory."""
        assert WorkflowLocator().scan(tmp_path) == []

    def test_scan_nonexistent_directory(self, tmp_path: Path) -> None:
        assert WorkflowLocator().scan(tmp_path / "does_not_exist") == []

    def test_scan_file_instead_of_directory(self, tmp_path: Path) -> None:
        file_path = tmp_path / "not_a_directory.md"
        file_path.write_text("dummy content")

        assert WorkflowLocator().scan(file_path) == []

    def test_scan_finds_top_level_and_fragments(self, tmp_path: Path) -> None:
        """Should find markdown files recursively, sorted."""
        (tmp_path / "shared" / "mcp").mkdir(parents=True)
        (tmp_path / "b.md").write_text("b")
        (tmp_path / "a.md").write_text("a")
        (tmp_path / "shared" / "tools.md").write_text("t")
        (tmp_path / "shared" / "mcp" / "arxiv.md").write_text("x")
        (tmp_path / "notes.txt").write_text("ignored")
        (tmp_path / "compiled.lock.yml").write_text("ignored")

        result = WorkflowLocator().scan(tmp_path)

        assert result == sorted(
            [
                tmp_path / "a.md",
                tmp_path / "b.md",
                tmp_path / "shared" / "mcp" / "arxiv.md",
                tmp_path / "shared" / "tools.md",
            ]
        )
        assert all(path.is_absolute() for path in result)

    def test_scan_skips_directories_named_like_files(self, tmp_path: Path) -> None:
        (tmp_path / "weird.md").mkdir()
        (tmp_path / "real.md").write_text("r")

        assert WorkflowLocator().scan(tmp_path) == [tmp_path / "real.md"]
