"""Classify walked entries against root-scoped matchers.

Directory rules are tested against directories and file rules against
files. The desktop metadata rule (``Desktop.ini``) is suppressed for
files sitting directly inside a user folder, where Windows expects it.

Classification never touches the filesystem.
"""

import logging
from collections.abc import Collection, Mapping

from junkctl.junk.catalog import DESKTOP_METADATA_PATTERN, JunkPattern
from junkctl.junk.matcher import RootMatcher
from junkctl.junk.models import Entry, MatchResult
from junkctl.junk.walker import WalkResult

logger = logging.getLogger(__name__)


def normalize_user_dirs(user_dirs: Collection[str]) -> frozenset[str]:
    """Lower-case user folders and terminate them with a single slash."""
    return frozenset(d.replace("\\", "/").rstrip("/").lower() + "/" for d in user_dirs)


def is_excluded(path: str, pattern: JunkPattern, user_dirs: Collection[str]) -> bool:
    """Check if a file match is suppressed by the user folder rule.

    Only the desktop metadata pattern is subject to exclusion, and only
    when the file's parent is exactly a user folder. Files nested deeper
    below a user folder are still junk.

    Args:
        path: Matched file path.
        pattern: Pattern that matched the file.
        user_dirs: User folders (normalized or not).

    Returns:
        True if the match must be dropped.
    """
    if pattern != DESKTOP_METADATA_PATTERN:
        return False
    parent = Entry(path=path, is_dir=False).parent.lower()
    return parent in normalize_user_dirs(user_dirs)


def classify(
    root: str,
    matchers: Mapping[JunkPattern, RootMatcher],
    walk: WalkResult,
    user_dirs: Collection[str],
) -> MatchResult:
    """Partition walked entries of one root into junk matches.

    Args:
        root: Root the entries were walked from.
        matchers: Root-scoped matchers for every catalog pattern.
        walk: Directories and files found below the root.
        user_dirs: User folders for the desktop metadata exclusion.

    Returns:
        MatchResult with matched directories and files in arrival order.
        An entry matched by several patterns appears once per pattern.
    """
    result = MatchResult(root=root)
    normalized_user_dirs = normalize_user_dirs(user_dirs)
    lowered_dirs = [(d, d.lower()) for d in walk.directories]
    lowered_files = [(f, f.lower()) for f in walk.files]

    for pattern, matcher in matchers.items():
        if pattern.is_directory:
            for directory, lowered in lowered_dirs:
                if matcher.regex.fullmatch(lowered):
                    result.matched_directories.append(directory)
            continue

        for file, lowered in lowered_files:
            if not matcher.regex.fullmatch(lowered):
                continue
            if is_excluded(lowered, pattern, normalized_user_dirs):
                logger.debug("Keeping %s: desktop metadata in a user folder", file)
                continue
            result.matched_files.append(file)

    logger.debug(
        "Classified %s: %d directories, %d files",
        root,
        len(result.matched_directories),
        len(result.matched_files),
    )
    return result
