"""Catalog of known junk artifacts.

This module defines the fixed, ordered set of glob patterns describing
files and directories that operating systems and applications leave
behind on storage volumes. Patterns are anchored at a scan root: a
pattern without a leading ``**/`` only matches at the top level of the
root (e.g. ``$RECYCLE.BIN/``), while ``**/`` patterns match at any depth.

A trailing ``/`` marks a directory rule; every other pattern is a file
rule. The marker is resolved once when the catalog is built.
"""

from collections.abc import Iterator
from dataclasses import dataclass
from enum import Enum


class PatternKind(str, Enum):
    """Kind of filesystem entry a pattern applies to.

    Attributes:
        DIRECTORY: Pattern matches directories only.
        FILE: Pattern matches files only.
    """

    DIRECTORY = "directory"
    FILE = "file"


class Platform(str, Enum):
    """Operating system family that produces an artifact."""

    WINDOWS = "windows"
    MACOS = "macos"
    LINUX = "linux"
    OTHER = "other"


@dataclass(frozen=True, slots=True)
class JunkPattern:
    """A single catalog rule.

    Attributes:
        raw: Pattern text exactly as it appears in the catalog.
        kind: Whether the rule matches directories or files.
        platform: Operating system family the artifact belongs to.
    """

    raw: str
    kind: PatternKind
    platform: Platform

    def __post_init__(self) -> None:
        """Validate pattern data after initialization."""
        if not self.raw or self.raw == "/":
            msg = "Pattern cannot be empty"
            raise ValueError(msg)

    @classmethod
    def parse(cls, raw: str, platform: Platform) -> "JunkPattern":
        """Build a pattern, deriving its kind from the trailing separator."""
        kind = PatternKind.DIRECTORY if raw.endswith("/") else PatternKind.FILE
        return cls(raw=raw, kind=kind, platform=platform)

    @property
    def is_directory(self) -> bool:
        """Check if this is a directory rule."""
        return self.kind == PatternKind.DIRECTORY

    @property
    def text(self) -> str:
        """Pattern text without the directory marker."""
        return self.raw.rstrip("/") if self.is_directory else self.raw


_CATALOG: tuple[tuple[Platform, tuple[str, ...]], ...] = (
    (
        Platform.WINDOWS,
        (
            "$RECYCLE.BIN/",
            "Config.Msi/",
            "FOUND.[0-9][0-9][0-9]/",
            "System Volume Information/",
            "DumpStack.log*",
            "**/*.ink",
            "**/*.stackdump",
            "**/Desktop.ini",
            "**/Thumbs.db",
            "**/Thumbs.db:encryptable",
            "**/ehthumbs.db",
            "**/ehthumbs_vista.db",
        ),
    ),
    (
        Platform.MACOS,
        (
            ".DocumentRevisions-V100/",
            ".Spotlight-V100/",
            ".TemporaryItems/",
            ".Trashes/",
            ".VolumeIcon.icns/",
            ".com.apple.timemachine.donotpresent/",
            ".fseventsd/",
            "**/.AppleDB/",
            "**/.AppleDesktop/",
            "**/.AppleDouble/",
            "**/.DS_Store/",
            "**/.LSOverride/",
            "**/.apdisk/",
            "**/__MACOSX/",
            "**/*.icloud",
            "**/._*",
        ),
    ),
    (
        Platform.LINUX,
        (
            "**/.Trash-*/",
            "**/*~",
            "**/.fuse_hidden*",
            "**/.nfs*",
        ),
    ),
    (
        Platform.OTHER,
        (
            "@Recently-Snapshot/",
            "@Recycle/",
            "**/*.tmp",
            "**/~$*",
        ),
    ),
)

JUNK_PATTERNS: tuple[JunkPattern, ...] = tuple(
    JunkPattern.parse(raw, platform) for platform, group in _CATALOG for raw in group
)

# Legitimate at the top level of a user folder, junk anywhere else
DESKTOP_METADATA_PATTERN: JunkPattern = next(p for p in JUNK_PATTERNS if p.raw == "**/Desktop.ini")


def iter_patterns(kind: PatternKind | None = None) -> Iterator[JunkPattern]:
    """Iterate over catalog patterns in catalog order.

    Args:
        kind: Restrict to one pattern kind. None yields every pattern.

    Yields:
        JunkPattern instances.
    """
    for pattern in JUNK_PATTERNS:
        if kind is None or pattern.kind == kind:
            yield pattern


def directory_patterns() -> tuple[JunkPattern, ...]:
    """Get all directory rules in catalog order."""
    return tuple(iter_patterns(PatternKind.DIRECTORY))


def file_patterns() -> tuple[JunkPattern, ...]:
    """Get all file rules in catalog order."""
    return tuple(iter_patterns(PatternKind.FILE))
