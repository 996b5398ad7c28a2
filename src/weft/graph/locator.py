"""Workflow file locator for discovering markdown workflow definitions.

This module scans a workflows root for ``*.md`` files, including the
shared fragments in its subdirectories. It performs no parsing, so the
dependency graph can handle per-file failures on its own.

Example:
    ```python
    from pathlib import Path
    from weft.graph.locator import WorkflowLocator

    locator = WorkflowLocator()
    for path in locator.scan(Path(".github/workflows")):
        print(f"Found: {path}")
    ```
"""

from __future__ import annotations

from pathlib import Path

from weft.constants import WORKFLOW_FILE_SUFFIX
from weft.logging import get_logger

__all__ = ["WorkflowLocator"]

logger = get_logger(__name__)


class WorkflowLocator:
    """Locator for finding workflow markdown files under a directory.

    The locator:
    - Scans recursively for ``*.md`` files (top-level workflows and fragments)
    - Returns only regular files, sorted, as absolute paths
    - Handles missing or inaccessible directories by returning nothing
    """

    def __init__(self, suffix: str = WORKFLOW_FILE_SUFFIX) -> None:
        self._pattern = f"*{suffix}"

    def scan(self, directory: Path) -> list[Path]:
        """Find all workflow files under the specified directory.

        Args:
            directory: Workflows root to scan.

        Returns:
            Sorted absolute paths of workflow files. Empty if the directory
            doesn't exist, isn't a directory, or isn't readable.
        """
        if not directory.exists():
            logger.warning("workflow_directory_missing", directory=str(directory))
            return []

        if not directory.is_dir():
            logger.warning("workflow_path_not_directory", directory=str(directory))
            return []

        try:
            candidates = list(directory.rglob(self._pattern))
        except PermissionError:
            logger.warning("workflow_directory_permission_denied", directory=str(directory))
            return []
        except OSError as e:
            logger.warning(
                "workflow_directory_unreadable", directory=str(directory), error=str(e)
            )
            return []

        workflow_files = sorted(path.absolute() for path in candidates if path.is_file())
        logger.debug(
            "workflow_files_found", directory=str(directory), count=len(workflow_files)
        )
        return workflow_files
