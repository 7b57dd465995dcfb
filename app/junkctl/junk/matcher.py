"""Root-scoped glob matchers for catalog patterns.

Each catalog pattern is bound to a scan root and compiled into a regular
expression that tests absolute, lower-cased, forward-slash paths. Glob
semantics use ``/`` as the segment separator:

- ``*`` matches any run of characters within one segment
- ``?`` matches a single character within one segment
- ``[...]`` and ``[!...]`` match one character from (or not from) a class
- ``**/`` as a whole segment matches zero or more leading segments
- ``\\`` escapes the next character

Everything else, including ``$``, ``@``, ``~`` and ``:``, is literal.
"""

import logging
import re
from collections.abc import Iterable
from dataclasses import dataclass

from junkctl.junk.catalog import JUNK_PATTERNS, JunkPattern

logger = logging.getLogger(__name__)


class PatternCompileError(Exception):
    """Raised when a glob pattern cannot be compiled.

    The catalog is fixed, so this always indicates a catalog defect.
    """


@dataclass(frozen=True, slots=True)
class RootMatcher:
    """A catalog pattern bound to one scan root.

    Attributes:
        root: Lower-cased root the pattern is anchored at.
        pattern: The catalog pattern.
        regex: Compiled expression for the root-anchored glob.
    """

    root: str
    pattern: JunkPattern
    regex: re.Pattern[str]

    def matches(self, path: str) -> bool:
        """Check if an absolute path satisfies the root-anchored glob.

        Args:
            path: Absolute forward-slash path. Directories carry a trailing slash.

        Returns:
            True if the lower-cased path matches.
        """
        return self.regex.fullmatch(path.lower()) is not None


def translate_glob(pattern: str) -> str:
    """Translate a glob pattern into a regular expression fragment.

    Args:
        pattern: Glob pattern using ``/`` as separator.

    Returns:
        Regular expression source (not anchored).

    Raises:
        PatternCompileError: If a character class is unterminated or the
            pattern ends with a dangling escape.
    """
    parts: list[str] = []
    i = 0
    n = len(pattern)

    while i < n:
        c = pattern[i]
        at_segment_start = i == 0 or pattern[i - 1] == "/"

        if c == "*":
            if pattern.startswith("**", i) and at_segment_start:
                if pattern.startswith("**/", i):
                    parts.append("(?:.*/)?")
                    i += 3
                    continue
                if i + 2 == n:
                    parts.append(".*")
                    i += 2
                    continue
            # Collapse runs of stars outside a whole segment
            while i < n and pattern[i] == "*":
                i += 1
            parts.append("[^/]*")
            continue

        if c == "?":
            parts.append("[^/]")
        elif c == "[":
            end, cls = _translate_class(pattern, i)
            parts.append(cls)
            i = end
            continue
        elif c == "\\":
            if i + 1 >= n:
                msg = f"Dangling escape at end of pattern: {pattern!r}"
                raise PatternCompileError(msg)
            parts.append(re.escape(pattern[i + 1]))
            i += 2
            continue
        else:
            parts.append(re.escape(c))
        i += 1

    return "".join(parts)


def _translate_class(pattern: str, start: int) -> tuple[int, str]:
    """Translate the character class opening at ``start``.

    Returns:
        Tuple of (index after the closing bracket, regex class source).
    """
    i = start + 1
    negate = i < len(pattern) and pattern[i] in "!^"
    if negate:
        i += 1
    body_start = i
    # A closing bracket right after the opening is a literal member
    if i < len(pattern) and pattern[i] == "]":
        i += 1
    while i < len(pattern) and pattern[i] != "]":
        i += 1
    if i >= len(pattern):
        msg = f"Unterminated character class in pattern: {pattern!r}"
        raise PatternCompileError(msg)

    body = "".join("-" if ch == "-" else re.escape(ch) for ch in pattern[body_start:i])
    if not body:
        msg = f"Empty character class in pattern: {pattern!r}"
        raise PatternCompileError(msg)
    return i + 1, f"[{'^' if negate else ''}{body}]"


def compile_glob(pattern: str, root: str = "") -> re.Pattern[str]:
    """Compile a glob pattern anchored at a literal root prefix.

    The root is matched literally, so glob metacharacters in a mount
    point or folder name never act as wildcards.

    Args:
        pattern: Glob pattern (already lower-cased by the caller).
        root: Literal prefix the pattern is anchored at.

    Returns:
        Compiled expression for use with ``fullmatch``.

    Raises:
        PatternCompileError: If the pattern is malformed.
    """
    source = re.escape(root) + translate_glob(pattern)
    try:
        return re.compile(source, re.DOTALL)
    except re.error as e:
        msg = f"Invalid glob pattern {pattern!r}: {e}"
        raise PatternCompileError(msg) from e


def compile_root_matchers(
    root: str,
    patterns: Iterable[JunkPattern] = JUNK_PATTERNS,
) -> dict[JunkPattern, RootMatcher]:
    """Bind every catalog pattern to a scan root.

    Args:
        root: Absolute, trailing-slash-terminated root path.
        patterns: Patterns to compile. Defaults to the full catalog.

    Returns:
        Mapping of pattern to its root-scoped matcher, in catalog order.

    Raises:
        PatternCompileError: If any pattern fails to compile.
    """
    root_lower = root.lower()
    matchers: dict[JunkPattern, RootMatcher] = {}

    for pattern in patterns:
        regex = compile_glob(pattern.raw.lower(), root_lower)
        matchers[pattern] = RootMatcher(root=root_lower, pattern=pattern, regex=regex)

    logger.debug("Compiled %d matchers for %s", len(matchers), root)
    return matchers
