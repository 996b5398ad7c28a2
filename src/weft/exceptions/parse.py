from __future__ import annotations

from weft.exceptions.base import WeftError


class FrontmatterParseError(WeftError):
    """Raised when a workflow file's front matter cannot be parsed.

    Covers an opening ``---`` without a closing delimiter, invalid YAML, and
    YAML that does not decode to a mapping.

    Attributes:
        message: Human-readable error message.
        path: File the content came from, when known.
    """

    def __init__(self, message: str, path: str | None = None) -> None:
        """Initialize the FrontmatterParseError.

        Args:
            message: Human-readable error message.
            path: Optional path of the offending file.
        """
        self.path = path
        if path:
            message = f"{path}: {message}"
        super().__init__(message)
