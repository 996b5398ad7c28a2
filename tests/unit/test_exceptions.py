"""Tests for the weft exception hierarchy."""

from __future__ import annotations

import pytest

from weft.exceptions import (
    ConfigError,
    FrontmatterParseError,
    GraphError,
    MissingRequiredSourceError,
    UnsafeTargetPathError,
    VendorError,
    VendorIOError,
    WeftError,
    WorkflowParseError,
    WorkflowReadError,
    WorkflowSpecError,
)


class TestHierarchy:
    """Every weft error is catchable as WeftError."""

    @pytest.mark.parametrize(
        "error",
        [
            ConfigError("bad", field="verbosity", value="loud"),
            FrontmatterParseError("unclosed", path="a.md"),
            WorkflowParseError("/w/a.md", "unclosed"),
            WorkflowReadError("/w/a.md", "permission denied"),
            MissingRequiredSourceError("/pkg/a.md", "a.md"),
            VendorIOError("/t/a.md", "disk full"),
            UnsafeTargetPathError("../x.md"),
            WorkflowSpecError("bad spec", spec="x"),
        ],
    )
    def test_is_weft_error(self, error: WeftError) -> None:
        assert isinstance(error, WeftError)
        assert str(error) == error.message

    def test_graph_errors(self) -> None:
        error = WorkflowParseError("/w/a.md", "unclosed")

        assert isinstance(error, GraphError)
        assert error.path == "/w/a.md"
        assert error.reason == "unclosed"
        assert "/w/a.md" in error.message

    def test_vendor_errors(self) -> None:
        missing = MissingRequiredSourceError("/pkg/shared/a.md", "shared/a.md")

        assert isinstance(missing, VendorError)
        assert missing.source_path == "/pkg/shared/a.md"
        assert missing.target_path == "shared/a.md"
        assert isinstance(VendorIOError("/t", "x"), VendorError)
        unsafe = UnsafeTargetPathError("../x.md")
        assert isinstance(unsafe, VendorError)
        assert unsafe.target_path == "../x.md"

    def test_frontmatter_error_prefixes_path(self) -> None:
        error = FrontmatterParseError("unclosed", path="wf/a.md")

        assert error.message == "wf/a.md: unclosed"
        assert error.path == "wf/a.md"

    def test_config_error_fields(self) -> None:
        error = ConfigError("Invalid configuration", field="verbosity", value="loud")

        assert (error.field, error.value) == ("verbosity", "loud")
