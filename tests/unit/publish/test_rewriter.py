"""Tests for the workflowspec rewriter."""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path

from weft.frontmatter import extract_frontmatter
from weft.publish import (
    process_imports_with_workflow_spec,
    process_includes_in_content,
    process_includes_with_workflow_spec,
    rewrite_imports_for_publish,
    rewrite_tree_for_publish,
)
from weft.spec import WorkflowSpec

WriteFile = Callable[[Path, str], Path]

SHA = "0123456789abcdef0123456789abcdef01234567"
PREFIX = "acme/flows/.github/workflows"


def origin_spec(version: str = "v1") -> WorkflowSpec:
    return WorkflowSpec(
        repo_slug="acme/flows",
        workflow_path=".github/workflows/main.md",
        workflow_name="main",
        version=version,
    )


class TestProcessImports:
    """Tests for rewriting the front matter imports list."""

    def test_rewrites_string_and_object_entries(self) -> None:
        content = (
            "---\n"
            "on: push\n"
            "engine: copilot\n"
            "imports:\n"
            "  - shared/a.md\n"
            "  - path: shared/b.md\n"
            "    inputs:\n"
            "      count: 2\n"
            "  - other/repo/x.md@v9\n"
            "---\n"
            "# Body\n"
        )

        result = process_imports_with_workflow_spec(content, origin_spec(), SHA)

        parsed = extract_frontmatter(result)
        assert parsed.frontmatter["imports"] == [
            f"{PREFIX}/shared/a.md@{SHA}",
            {"path": f"{PREFIX}/shared/b.md@{SHA}", "inputs": {"count": 2}},
            "other/repo/x.md@v9",
        ]
        assert parsed.markdown == "# Body\n"

    def test_priority_field_order(self) -> None:
        content = "---\nengine: copilot\nimports: [a.md]\non: push\n---\n"

        result = process_imports_with_workflow_spec(content, origin_spec())

        lines = result.split("\n")
        assert lines[1] == "on: push"
        assert lines[2] == "imports:"
        assert result.index("engine:") > result.index("imports:")

    def test_version_used_without_sha(self) -> None:
        result = process_imports_with_workflow_spec(
            "---\nimports: [a.md]\n---\n", origin_spec("v2.0.0")
        )

        assert f"{PREFIX}/a.md@v2.0.0" in result

    def test_content_without_frontmatter_unchanged(self) -> None:
        content = "# No front matter\n@include a.md\n"

        assert process_imports_with_workflow_spec(content, origin_spec(), SHA) == content

    def test_content_without_imports_unchanged(self) -> None:
        content = "---\non:  push\n---\nbody"

        assert process_imports_with_workflow_spec(content, origin_spec(), SHA) == content

    def test_malformed_frontmatter_unchanged(self) -> None:
        content = "---\nimports: [a.md\n---\n"

        assert process_imports_with_workflow_spec(content, origin_spec(), SHA) == content


class TestProcessIncludesInContent:
    """Tests for rewriting body directives relative to the workflow."""

    def test_rewrites_each_spelling(self) -> None:
        content = (
            "# Title\n"
            "@include shared/a.md\n"
            "  @include? shared/tools.md#Setup\n"
            "@import ../common.md\n"
            "{{#import shared/c.md}}\n"
            "plain text\n"
        )

        result = process_includes_in_content(content, origin_spec(), SHA)

        assert result.split("\n") == [
            "# Title",
            f"{{{{#import {PREFIX}/shared/a.md@{SHA}}}}}",
            f"  {{{{#import? {PREFIX}/shared/tools.md@{SHA}#Setup}}}}",
            f"{{{{#import acme/flows/.github/common.md@{SHA}}}}}",
            f"{{{{#import {PREFIX}/shared/c.md@{SHA}}}}}",
            "plain text",
            "",
        ]

    def test_existing_workflowspec_and_section_only_kept(self) -> None:
        content = "@include other/repo/a.md@v3\n@include #Local\n"

        assert process_includes_in_content(content, origin_spec(), SHA) == content

    def test_root_relative_path(self) -> None:
        result = process_includes_in_content("@include /docs/a.md", origin_spec(), None)

        assert result == "{{#import acme/flows/docs/a.md@v1}}"

    def test_frontmatter_lines_are_not_rewritten(self) -> None:
        content = "---\non: push\nnotes: |\n  @include x.md\n---\n@include shared/a.md\n"

        result = process_includes_in_content(content, origin_spec(), SHA)

        assert result == (
            "---\non: push\nnotes: |\n  @include x.md\n---\n"
            f"{{{{#import {PREFIX}/shared/a.md@{SHA}}}}}\n"
        )


class TestProcessIncludesWithWorkflowSpec:
    """Tests for package-relative rewriting with nested discovery."""

    def test_drops_duplicates_and_discovers_nested(
        self, tmp_path: Path, write_file: WriteFile
    ) -> None:
        write_file(tmp_path / "shared" / "a.md", "---\ntitle: A\n---\n@include shared/b.md\n")
        write_file(tmp_path / "shared" / "b.md", "@include shared/a.md\n@include? shared/c.md\n")
        content = "@include shared/a.md\n@include shared/a.md#Again\ntext\n"

        result, discovered = process_includes_with_workflow_spec(
            content, origin_spec(), SHA, tmp_path
        )

        assert result == f"{{{{#import acme/flows/shared/a.md@{SHA}}}}}\ntext\n"
        assert discovered == ["shared/a.md", "shared/b.md", "shared/c.md"]

    def test_missing_package_files_are_not_followed(self, tmp_path: Path) -> None:
        result, discovered = process_includes_with_workflow_spec(
            "@include? gone.md#S\n", origin_spec(""), None, tmp_path
        )

        assert result == "{{#import? acme/flows/gone.md#S}}\n"
        assert discovered == ["gone.md"]

    def test_non_utf8_nested_file_is_not_followed(
        self, tmp_path: Path, write_file: WriteFile
    ) -> None:
        (tmp_path / "bin.md").write_bytes(b"\xff\xfe")
        write_file(tmp_path / "ok.md", "@include deep.md\n")

        _, discovered = process_includes_with_workflow_spec(
            "@include bin.md\n@include ok.md\n", origin_spec(), SHA, tmp_path
        )

        assert discovered == ["bin.md", "ok.md", "deep.md"]


class TestRewriteImportsForPublish:
    """Tests for the composed single-file rewrite."""

    def test_rewrites_frontmatter_then_body(self) -> None:
        content = "---\non: push\nimports:\n  - shared/a.md\n---\n@include shared/b.md\n"

        result = rewrite_imports_for_publish(
            content, "acme/flows", SHA, "v1", ".github/workflows/main.md"
        )

        parsed = extract_frontmatter(result)
        assert parsed.frontmatter["imports"] == [f"{PREFIX}/shared/a.md@{SHA}"]
        assert parsed.markdown == f"{{{{#import {PREFIX}/shared/b.md@{SHA}}}}}\n"

    def test_frontmatter_import_section_follows_version(self) -> None:
        content = "---\nimports:\n  - shared/a.md#Tools\n---\n@include shared/a.md#Tools\n"

        result = rewrite_imports_for_publish(
            content, "acme/flows", SHA, None, ".github/workflows/main.md"
        )

        parsed = extract_frontmatter(result)
        assert parsed.frontmatter["imports"] == [f"{PREFIX}/shared/a.md@{SHA}#Tools"]
        assert parsed.markdown == f"{{{{#import {PREFIX}/shared/a.md@{SHA}#Tools}}}}\n"

    def test_tag_when_sha_unknown(self) -> None:
        result = rewrite_imports_for_publish(
            "@include a.md", "acme/flows", None, "v1.2.0", "wf/main.md"
        )

        assert result == "{{#import acme/flows/wf/a.md@v1.2.0}}"


class TestRewriteTreeForPublish:
    """Tests for the transitive on-disk walk."""

    def test_walks_fragments_once_each(self, tmp_path: Path, write_file: WriteFile) -> None:
        wf = tmp_path / ".github" / "workflows"
        write_file(
            wf / "main.md",
            "---\non: push\nimports: [shared/a.md]\n---\n@include? shared/missing.md\n",
        )
        write_file(wf / "shared" / "a.md", "@include b.md\n")
        write_file(wf / "shared" / "b.md", "@include a.md\n@include ../main.md\n")

        tree = rewrite_tree_for_publish(
            ".github/workflows/main.md", tmp_path, "acme/flows", origin_version_tag="v1"
        )

        assert list(tree) == [
            ".github/workflows/main.md",
            ".github/workflows/shared/a.md",
            ".github/workflows/shared/b.md",
        ]
        assert tree[".github/workflows/shared/a.md"] == (
            f"{{{{#import {PREFIX}/shared/b.md@v1}}}}\n"
        )
        assert tree[".github/workflows/shared/b.md"] == (
            f"{{{{#import {PREFIX}/shared/a.md@v1}}}}\n{{{{#import {PREFIX}/main.md@v1}}}}\n"
        )
        assert f"{{{{#import? {PREFIX}/shared/missing.md@v1}}}}" in tree[".github/workflows/main.md"]

    def test_missing_entry_yields_empty_tree(self, tmp_path: Path) -> None:
        assert rewrite_tree_for_publish("nope.md", tmp_path, "acme/flows") == {}

    def test_non_utf8_fragment_is_left_out(self, tmp_path: Path, write_file: WriteFile) -> None:
        wf = tmp_path / ".github" / "workflows"
        write_file(wf / "main.md", "@include shared/bin.md\n@include shared/ok.md\n")
        write_file(wf / "shared" / "ok.md", "ok\n")
        (wf / "shared" / "bin.md").write_bytes(b"\xff\xfe")

        tree = rewrite_tree_for_publish(".github/workflows/main.md", tmp_path, "acme/flows")

        assert list(tree) == [".github/workflows/main.md", ".github/workflows/shared/ok.md"]
