"""Junk classification engine.

This module provides the junk pattern catalog, root-scoped matchers,
the tree walker, the classifier, the scanner that ties them together
per root, and the deletion operator.
"""

from junkctl.junk.catalog import (
    DESKTOP_METADATA_PATTERN,
    JUNK_PATTERNS,
    JunkPattern,
    PatternKind,
    Platform,
)
from junkctl.junk.classifier import classify, is_excluded
from junkctl.junk.matcher import PatternCompileError, RootMatcher, compile_root_matchers
from junkctl.junk.models import (
    DeletionResult,
    Entry,
    MatchResult,
    RootScanError,
    ScanReport,
    merge_results,
)
from junkctl.junk.operator import JunkOperator
from junkctl.junk.scanner import JunkScanner
from junkctl.junk.walker import ErrorKind, WalkError, WalkResult, classify_os_error, walk_tree

__all__ = [
    "DESKTOP_METADATA_PATTERN",
    "JUNK_PATTERNS",
    "DeletionResult",
    "Entry",
    "ErrorKind",
    "JunkOperator",
    "JunkPattern",
    "JunkScanner",
    "MatchResult",
    "PatternCompileError",
    "PatternKind",
    "Platform",
    "RootMatcher",
    "RootScanError",
    "ScanReport",
    "WalkError",
    "WalkResult",
    "classify",
    "classify_os_error",
    "compile_root_matchers",
    "is_excluded",
    "merge_results",
    "walk_tree",
]
