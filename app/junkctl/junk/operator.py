"""Junk deletion operator.

Deletes matched files and directories in place. Files are removed first,
one at a time and non-recursively; directories follow and are removed
with their whole remaining subtree. Children that cannot be removed are
skipped so the rest of the subtree still goes. A failure on one entry is
recorded and never stops the remaining deletions.
"""

import logging
import shutil
from collections.abc import Callable, Iterable
from pathlib import Path

from junkctl.junk.models import DeletionResult

logger = logging.getLogger(__name__)

# Called before each deletion attempt with (path, is_dir)
ProgressCallback = Callable[[str, bool], None]
# Called after each deletion attempt with its result
ResultCallback = Callable[[DeletionResult], None]


class JunkOperator:
    """Handles deletion of matched junk entries.

    Every entry handed to :meth:`delete` is attempted exactly once.

    Attributes:
        _on_delete: Optional callback invoked before each attempt.
        _on_result: Optional callback invoked with each result.
    """

    def __init__(
        self,
        on_delete: ProgressCallback | None = None,
        on_result: ResultCallback | None = None,
    ) -> None:
        """Initialize the JunkOperator.

        Args:
            on_delete: Optional callback invoked before each deletion attempt.
            on_result: Optional callback invoked after each deletion attempt.
        """
        self._on_delete = on_delete
        self._on_result = on_result

    def delete(
        self,
        files: Iterable[str],
        directories: Iterable[str],
    ) -> list[DeletionResult]:
        """Delete matched files, then matched directories.

        Args:
            files: File paths to unlink.
            directories: Directory paths to remove recursively.

        Returns:
            List of DeletionResult in attempt order, one per input path.
        """
        results: list[DeletionResult] = []

        for path in files:
            results.append(self._attempt(path, is_dir=False))

        for path in directories:
            results.append(self._attempt(path, is_dir=True))

        failed = sum(1 for r in results if r.failed)
        logger.info("Deleted %d of %d entries", len(results) - failed, len(results))
        return results

    def _attempt(self, path: str, *, is_dir: bool) -> DeletionResult:
        if self._on_delete is not None:
            self._on_delete(path, is_dir)
        result = self._delete_single(path, is_dir=is_dir)
        if self._on_result is not None:
            self._on_result(result)
        return result

    def _delete_single(self, path: str, *, is_dir: bool) -> DeletionResult:
        """Delete a single entry.

        Directories use _remove_tree; files and symlinks use Path.unlink.

        Args:
            path: Path to delete.
            is_dir: Whether the entry was matched as a directory.

        Returns:
            DeletionResult indicating success or failure.
        """
        try:
            if is_dir:
                _remove_tree(path)
            else:
                Path(path).unlink()
        except OSError as e:
            logger.warning("Failed to delete %s: %s", path, e)
            return DeletionResult(path=path, is_dir=is_dir, success=False, error=str(e))

        logger.debug("Deleted %s", path)
        return DeletionResult(path=path, is_dir=is_dir, success=True)


def _remove_tree(path: str) -> None:
    """Remove a directory tree, continuing past entries that cannot be removed.

    Args:
        path: Directory to remove.

    Raises:
        OSError: The first error met, once every other entry was attempted.
    """
    errors: list[OSError] = []

    def _record(func: Callable[..., object], failed_path: str, exc: BaseException) -> None:
        logger.debug("Cannot remove %s: %s", failed_path, exc)
        if isinstance(exc, OSError):
            errors.append(exc)
        else:
            raise exc

    shutil.rmtree(path, onexc=_record)
    if errors:
        raise errors[0]
