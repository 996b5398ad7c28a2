"""Unit tests for atomic file write utilities."""

from __future__ import annotations

from pathlib import Path

import pytest

from weft.utils.atomic import atomic_write_bytes, atomic_write_text


class TestAtomicWriteBytes:
    """Tests for atomic_write_bytes function."""

    def test_write_bytes_creates_file(self, tmp_path: Path) -> None:
        file_path = tmp_path / "fragment.md"

        atomic_write_bytes(file_path, b"# Tools\r\n")

        assert file_path.read_bytes() == b"# Tools\r\n"

    def test_write_bytes_overwrites_existing(self, tmp_path: Path) -> None:
        file_path = tmp_path / "fragment.md"
        file_path.write_bytes(b"old")

        atomic_write_bytes(file_path, b"new")

        assert file_path.read_bytes() == b"new"

    def test_write_bytes_creates_parent_directories(self, tmp_path: Path) -> None:
        file_path = tmp_path / "shared" / "mcp" / "arxiv.md"

        atomic_write_bytes(file_path, b"x")

        assert file_path.read_bytes() == b"x"

    def test_write_bytes_fails_without_mkdir_if_parent_missing(self, tmp_path: Path) -> None:
        with pytest.raises(OSError):
            atomic_write_bytes(tmp_path / "missing" / "a.md", b"x", mkdir=False)

    def test_no_temp_file_remains_on_success(self, tmp_path: Path) -> None:
        atomic_write_bytes(tmp_path / "a.md", b"content")

        assert [p.name for p in tmp_path.iterdir()] == ["a.md"]


class TestAtomicWriteText:
    """Tests for atomic_write_text function."""

    def test_write_text_accepts_str_path(self, tmp_path: Path) -> None:
        file_path = str(tmp_path / "a.md")

        atomic_write_text(file_path, "string path content")

        assert Path(file_path).read_text() == "string path content"

    def test_write_text_preserves_content_integrity(self, tmp_path: Path) -> None:
        """Test that content is written exactly as provided."""
        file_path = tmp_path / "a.md"
        content = "---\non: push\n---\n\tIndented\n\u2603 Snowman"

        atomic_write_text(file_path, content)

        assert file_path.read_text(encoding="utf-8") == content
