from __future__ import annotations


class WeftError(Exception):
    """Base exception class for all weft-specific errors.

    This is the root of the weft exception hierarchy. Every error raised by
    the graph, rewriter, and vendoring layers inherits from it, so callers can
    catch all weft errors at a CLI boundary while letting system exceptions
    propagate naturally.

    Attributes:
        message: Human-readable error message describing what went wrong.

    Example:
        ```python
        try:
            graph.add_workflow(path)
        except WeftError as e:
            logger.error("add_failed", error=e.message)
        ```
    """

    def __init__(self, message: str) -> None:
        """Initialize the WeftError.

        Args:
            message: Human-readable error message.
        """
        self.message = message
        super().__init__(message)
