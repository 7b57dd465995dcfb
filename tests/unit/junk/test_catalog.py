"""Unit tests for the junk pattern catalog."""

import pytest
from junkctl.junk.catalog import (
    DESKTOP_METADATA_PATTERN,
    JUNK_PATTERNS,
    JunkPattern,
    PatternKind,
    Platform,
    directory_patterns,
    file_patterns,
    iter_patterns,
)


class TestJunkPattern:
    """Tests for JunkPattern parsing."""

    def test_trailing_slash_is_directory(self) -> None:
        """A trailing slash marks a directory rule."""
        pattern = JunkPattern.parse("$RECYCLE.BIN/", Platform.WINDOWS)

        assert pattern.kind == PatternKind.DIRECTORY
        assert pattern.is_directory is True
        assert pattern.text == "$RECYCLE.BIN"
        assert pattern.raw == "$RECYCLE.BIN/"

    def test_no_trailing_slash_is_file(self) -> None:
        """Patterns without a trailing slash are file rules."""
        pattern = JunkPattern.parse("**/Thumbs.db", Platform.WINDOWS)

        assert pattern.kind == PatternKind.FILE
        assert pattern.is_directory is False
        assert pattern.text == "**/Thumbs.db"

    def test_empty_pattern_rejected(self) -> None:
        """Empty patterns are rejected."""
        with pytest.raises(ValueError, match="cannot be empty"):
            JunkPattern.parse("", Platform.OTHER)

    def test_patterns_are_immutable(self) -> None:
        """Catalog patterns cannot be modified."""
        with pytest.raises(AttributeError):
            JUNK_PATTERNS[0].raw = "changed"  # type: ignore[misc]


class TestCatalog:
    """Tests for the catalog contents."""

    def test_catalog_size(self) -> None:
        """The catalog holds every known artifact exactly once."""
        raws = [p.raw for p in JUNK_PATTERNS]

        assert len(raws) == 36
        assert len(set(raws)) == len(raws)

    def test_catalog_order_is_stable(self) -> None:
        """Catalog order starts with Windows and ends with the Others group."""
        assert JUNK_PATTERNS[0].raw == "$RECYCLE.BIN/"
        assert JUNK_PATTERNS[-1].raw == "**/~$*"
        assert JUNK_PATTERNS[0].platform == Platform.WINDOWS
        assert JUNK_PATTERNS[-1].platform == Platform.OTHER

    def test_platform_groups(self) -> None:
        """Every platform group is represented."""
        platforms = {p.platform for p in JUNK_PATTERNS}

        assert platforms == set(Platform)

    def test_desktop_metadata_pattern(self) -> None:
        """The desktop metadata rule is the Desktop.ini file rule."""
        assert DESKTOP_METADATA_PATTERN.raw == "**/Desktop.ini"
        assert DESKTOP_METADATA_PATTERN.kind == PatternKind.FILE
        assert DESKTOP_METADATA_PATTERN in JUNK_PATTERNS

    def test_kind_partition(self) -> None:
        """Directory and file rules partition the catalog."""
        dirs = directory_patterns()
        files = file_patterns()

        assert len(dirs) + len(files) == len(JUNK_PATTERNS)
        assert all(p.is_directory for p in dirs)
        assert not any(p.is_directory for p in files)
        assert "**/.Trash-*/" in [p.raw for p in dirs]
        assert "**/*.tmp" in [p.raw for p in files]

    def test_iter_patterns_without_kind(self) -> None:
        """iter_patterns() yields the whole catalog in order."""
        assert tuple(iter_patterns()) == JUNK_PATTERNS
