"""weft exception hierarchy.

All exceptions can be imported from this package:
    from weft.exceptions import WeftError, WorkflowParseError, VendorError
"""

from __future__ import annotations

# Base exception
from weft.exceptions.base import WeftError

# Configuration exceptions
from weft.exceptions.config import ConfigError

# Dependency graph exceptions
from weft.exceptions.graph import GraphError, WorkflowParseError, WorkflowReadError

# Front matter exceptions
from weft.exceptions.parse import FrontmatterParseError

# Workflowspec exceptions
from weft.exceptions.spec import WorkflowSpecError

# Vendoring exceptions
from weft.exceptions.vendor import (
    MissingRequiredSourceError,
    UnsafeTargetPathError,
    VendorError,
    VendorIOError,
)

__all__ = [
    # Base
    "WeftError",
    # Config
    "ConfigError",
    # Graph
    "GraphError",
    "WorkflowParseError",
    "WorkflowReadError",
    # Parse
    "FrontmatterParseError",
    # Spec
    "WorkflowSpecError",
    # Vendor
    "MissingRequiredSourceError",
    "UnsafeTargetPathError",
    "VendorError",
    "VendorIOError",
]
