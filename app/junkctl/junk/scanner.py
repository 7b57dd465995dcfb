"""Junk scanner across storage roots.

Runs the compile, walk, and classify pipeline for every root and
aggregates the matches in root order. A root whose walk fails is
reported and skipped; the remaining roots are still scanned.
"""

import logging
from collections.abc import Collection, Iterable, Iterator
from concurrent.futures import ThreadPoolExecutor

from junkctl.junk.catalog import JUNK_PATTERNS, JunkPattern
from junkctl.junk.classifier import classify
from junkctl.junk.matcher import compile_root_matchers
from junkctl.junk.models import MatchResult, RootScanError, ScanReport
from junkctl.junk.walker import WalkError, walk_tree

logger = logging.getLogger(__name__)


class JunkScanner:
    """Scans roots for junk entries.

    Args:
        roots: Roots to scan, in discovery order.
        user_dirs: User folders for the desktop metadata exclusion.
        patterns: Catalog patterns to apply. Defaults to the full catalog.
        workers: Number of roots scanned concurrently. 1 scans sequentially.
    """

    def __init__(
        self,
        roots: Iterable[str],
        user_dirs: Collection[str] = (),
        *,
        patterns: tuple[JunkPattern, ...] = JUNK_PATTERNS,
        workers: int = 1,
    ) -> None:
        if workers < 1:
            msg = f"workers must be at least 1, got {workers}"
            raise ValueError(msg)
        self._roots = list(roots)
        self._user_dirs = frozenset(user_dirs)
        self._patterns = patterns
        self._workers = workers

    @property
    def roots(self) -> list[str]:
        """Roots this scanner covers."""
        return list(self._roots)

    def scan_root(self, root: str) -> MatchResult:
        """Compile matchers for a root, walk it, and classify its entries.

        Args:
            root: Absolute, trailing-slash-terminated root.

        Returns:
            MatchResult for the root.

        Raises:
            WalkError: If the walk hits an unrecoverable I/O error.
            PatternCompileError: If the catalog contains a malformed pattern.
        """
        matchers = compile_root_matchers(root, self._patterns)
        walk = walk_tree(root)
        return classify(root, matchers, walk, self._user_dirs)

    def scan(self) -> ScanReport:
        """Scan every root and collect results and root-level errors.

        Returns:
            ScanReport with per-root results in discovery order.
        """
        report = ScanReport(roots=list(self._roots))

        for root, outcome in self._iter_outcomes():
            if isinstance(outcome, WalkError):
                logger.warning("Skipping root %s: %s", root, outcome.cause)
                report.errors.append(RootScanError(root=root, error=str(outcome.cause)))
                continue
            report.results.append(outcome)

        return report

    def _iter_outcomes(self) -> Iterator[tuple[str, MatchResult | WalkError]]:
        """Yield (root, result or walk error) in root order."""
        if self._workers == 1 or len(self._roots) <= 1:
            for root in self._roots:
                yield root, self._scan_root_safe(root)
            return

        # Each worker owns its matchers and result; merging happens in root order
        with ThreadPoolExecutor(max_workers=self._workers) as executor:
            outcomes = list(executor.map(self._scan_root_safe, self._roots))
        yield from zip(self._roots, outcomes, strict=True)

    def _scan_root_safe(self, root: str) -> MatchResult | WalkError:
        try:
            return self.scan_root(root)
        except WalkError as e:
            return e
