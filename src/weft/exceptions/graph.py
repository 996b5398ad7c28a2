from __future__ import annotations

from weft.exceptions.base import WeftError


class GraphError(WeftError):
    """Base exception for dependency graph operations.

    Attributes:
        message: Human-readable error message.
        path: Workflow file the failing operation targeted (if known).
    """

    def __init__(self, message: str, path: str | None = None) -> None:
        self.path = path
        super().__init__(message)


class WorkflowParseError(GraphError):
    """Raised when one workflow file cannot be parsed into graph edges.

    Only the insertion or update of that one file fails; the rest of the
    graph is left untouched.
    """

    def __init__(self, path: str, reason: str) -> None:
        """Initialize the WorkflowParseError.

        Args:
            path: Absolute path of the malformed workflow file.
            reason: Underlying parse failure.
        """
        self.reason = reason
        super().__init__(f"Failed to parse workflow {path}: {reason}", path=path)


class WorkflowReadError(GraphError):
    """Raised when a workflow file cannot be read from disk."""

    def __init__(self, path: str, reason: str) -> None:
        self.reason = reason
        super().__init__(f"Failed to read workflow {path}: {reason}", path=path)
