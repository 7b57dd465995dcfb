"""Junk domain models for classification and deletion.

This module defines the data structures passed between the scanner,
classifier, and operator: discovered entries, per-root match results,
root-level scan errors, and per-entry deletion results.
"""

from dataclasses import dataclass, field


@dataclass(frozen=True, slots=True)
class Entry:
    """A filesystem object discovered while walking a root.

    Attributes:
        path: Absolute forward-slash path. Directories end with ``/``.
        is_dir: Whether the entry is a directory.
    """

    path: str
    is_dir: bool

    def __post_init__(self) -> None:
        """Validate entry data after initialization."""
        if not self.path:
            msg = "Path cannot be empty"
            raise ValueError(msg)
        if self.is_dir and not self.path.endswith("/"):
            msg = f"Directory path must end with '/': {self.path}"
            raise ValueError(msg)

    @property
    def parent(self) -> str:
        """Parent directory of the entry, terminated with ``/``."""
        trimmed = self.path.rstrip("/")
        head, sep, _ = trimmed.rpartition("/")
        return head + sep if sep else ""


@dataclass(slots=True)
class MatchResult:
    """Junk entries matched under one root.

    Attributes:
        root: Root the matches were produced for ("" for merged results).
        matched_directories: Original-case directory paths, trailing ``/``.
        matched_files: Original-case file paths.
    """

    root: str
    matched_directories: list[str] = field(default_factory=list)
    matched_files: list[str] = field(default_factory=list)

    @property
    def total(self) -> int:
        """Total number of matched entries."""
        return len(self.matched_directories) + len(self.matched_files)

    @property
    def is_empty(self) -> bool:
        """Check if nothing was matched."""
        return self.total == 0

    def deduplicated(self) -> "MatchResult":
        """Return a copy without repeated paths, keeping first occurrences."""
        return MatchResult(
            root=self.root,
            matched_directories=list(dict.fromkeys(self.matched_directories)),
            matched_files=list(dict.fromkeys(self.matched_files)),
        )


def merge_results(results: list[MatchResult]) -> MatchResult:
    """Concatenate per-root results in the given order.

    Args:
        results: Per-root match results in discovery order.

    Returns:
        A single MatchResult holding every match.
    """
    merged = MatchResult(root="")
    for result in results:
        merged.matched_directories.extend(result.matched_directories)
        merged.matched_files.extend(result.matched_files)
    return merged


@dataclass(frozen=True, slots=True)
class RootScanError:
    """A root whose walk was aborted by an I/O error.

    Attributes:
        root: The root that could not be scanned.
        error: Human-readable error message.
    """

    root: str
    error: str


@dataclass(slots=True)
class ScanReport:
    """Aggregated outcome of scanning every root.

    Attributes:
        roots: Roots in discovery order.
        results: Per-root match results for roots that were scanned.
        errors: Roots that were aborted.
    """

    roots: list[str] = field(default_factory=list)
    results: list[MatchResult] = field(default_factory=list)
    errors: list[RootScanError] = field(default_factory=list)

    @property
    def merged(self) -> MatchResult:
        """All matches across roots in discovery order."""
        return merge_results(self.results)


@dataclass(frozen=True, slots=True)
class DeletionResult:
    """Outcome of deleting a single matched entry.

    Attributes:
        path: Path that was operated on.
        is_dir: Whether the entry was deleted as a directory.
        success: Whether the entry was removed.
        error: Error message if the deletion failed, None otherwise.
    """

    path: str
    is_dir: bool
    success: bool
    error: str | None = None

    @property
    def failed(self) -> bool:
        """Check if the deletion failed."""
        return not self.success
