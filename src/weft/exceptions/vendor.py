from __future__ import annotations

from weft.exceptions.base import WeftError


class VendorError(WeftError):
    """Base exception for dependency vendoring failures."""


class MissingRequiredSourceError(VendorError):
    """Raised when a non-optional include is absent at copy time.

    A broken mandatory include leaves the destination workflow unusable, so
    the vendoring run stops at the first one.

    Attributes:
        message: Human-readable error message.
        source_path: Path the include was expected at.
        target_path: Relative destination the include would have been copied to.
    """

    def __init__(self, source_path: str, target_path: str) -> None:
        """Initialize the MissingRequiredSourceError.

        Args:
            source_path: Path the include was expected at.
            target_path: Relative destination of the include.
        """
        self.source_path = source_path
        self.target_path = target_path
        super().__init__(
            f"Required include '{target_path}' not found at {source_path}",
        )


class VendorIOError(VendorError):
    """Raised when reading a source or writing a destination fails.

    Attributes:
        message: Human-readable error message.
        path: The file the failing operation targeted.
    """

    def __init__(self, path: str, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"I/O error on {path}: {reason}")


class UnsafeTargetPathError(VendorError):
    """Raised when a dependency's target path would land outside the target root.

    Attributes:
        message: Human-readable error message.
        target_path: The offending relative target path.
    """

    def __init__(self, target_path: str) -> None:
        self.target_path = target_path
        super().__init__(f"Include target '{target_path}' escapes the target directory")
