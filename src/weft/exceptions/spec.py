from __future__ import annotations

from weft.exceptions.base import WeftError


class WorkflowSpecError(WeftError):
    """Raised for malformed workflowspec, repo spec, or source spec strings.

    Attributes:
        message: Human-readable error message.
        spec: The string that failed to parse.
    """

    def __init__(self, message: str, spec: str | None = None) -> None:
        self.spec = spec
        super().__init__(message)
