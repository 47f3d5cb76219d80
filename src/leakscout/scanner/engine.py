"""Scan engine: walks a tree, applies the exclusion policy, runs the matcher."""

from __future__ import annotations

import logging
import os
import time
from collections.abc import Sequence
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path

from leakscout.scanner.exclusion import ExclusionPolicy
from leakscout.scanner.matcher import scan_file
from leakscout.scanner.models import Finding, ScanIssue, ScanResult
from leakscout.scanner.patterns import PATTERNS, Pattern

logger = logging.getLogger(__name__)


class ScanError(Exception):
    """The scan root is missing or unreadable; nothing was scanned."""


class ScanEngine:
    """Walks a directory depth-first and collects findings.

    With ``workers > 1`` admitted files are matched on a thread pool. The
    walk itself and every update to the result stay on the calling thread,
    and findings are merged back in discovery order.
    """

    def __init__(
        self,
        policy: ExclusionPolicy | None = None,
        patterns: Sequence[Pattern] = PATTERNS,
        workers: int = 1,
    ) -> None:
        if workers < 1:
            raise ValueError(f"workers must be at least 1, got {workers}")
        self.policy = policy or ExclusionPolicy()
        self._patterns = tuple(patterns)
        self._workers = workers

    def scan(self, root: str | Path) -> ScanResult:
        """Scan *root* and return aggregated results.

        Raises ScanError if *root* does not exist or cannot be read.
        """
        root_path = Path(root).absolute()
        _check_root(root_path)

        start = time.time()
        result = ScanResult(root=str(root_path))

        if root_path.is_file():
            candidates = self._admit_file(root_path, result)
        elif self.policy.should_skip_directory(root_path.name):
            logger.info("Root %s is an excluded directory, nothing to scan", root_path)
            candidates = []
        else:
            candidates = self._walk(root_path, result)

        for path, outcome in zip(candidates, self._match_all(candidates)):
            if isinstance(outcome, OSError):
                logger.debug("Skipping unreadable %s: %s", path, outcome)
                result.errors.append(ScanIssue(str(path), f"read failed: {outcome}"))
                result.files_skipped += 1
                continue
            result.files_scanned += 1
            result.findings.extend(outcome)

        result.duration = time.time() - start
        logger.info(
            "Scanned %d files (%d skipped) under %s: %d findings, %d errors",
            result.files_scanned,
            result.files_skipped,
            root_path,
            len(result.findings),
            len(result.errors),
        )
        return result

    def _walk(self, root: Path, result: ScanResult) -> list[Path]:
        """Walk *root* and return the files that pass every exclusion rule."""
        candidates: list[Path] = []

        def _on_error(err: OSError) -> None:
            result.errors.append(ScanIssue(err.filename or str(root), str(err)))

        for dirpath, dirs, files in os.walk(root, onerror=_on_error):
            # Symlinked directories are not followed; count them as skipped entries
            linked = [d for d in dirs if os.path.islink(os.path.join(dirpath, d))]
            if linked:
                result.files_skipped += len(linked)
            # Prune excluded directories in place, nothing beneath them is visited
            dirs[:] = sorted(
                d
                for d in dirs
                if d not in linked and not self.policy.should_skip_directory(d)
            )

            for name in sorted(files):
                candidates.extend(self._admit_file(Path(dirpath) / name, result))

        return candidates

    def _admit_file(self, path: Path, result: ScanResult) -> list[Path]:
        try:
            reason = self.policy.skip_reason(path, lambda: path.stat().st_size)
        except OSError as e:
            logger.debug("Cannot stat %s: %s", path, e)
            result.errors.append(ScanIssue(str(path), f"stat failed: {e}"))
            result.files_skipped += 1
            return []

        if reason is not None:
            logger.debug("Skipping %s (%s)", path, reason.value)
            result.files_skipped += 1
            return []
        return [path]

    def _match_all(self, paths: list[Path]) -> list[list[Finding] | OSError]:
        if self._workers == 1 or len(paths) < 2:
            return [self._match_one(p) for p in paths]
        with ThreadPoolExecutor(max_workers=self._workers) as pool:
            return list(pool.map(self._match_one, paths))

    def _match_one(self, path: Path) -> list[Finding] | OSError:
        try:
            return scan_file(path, self._patterns)
        except OSError as e:
            return e


def _check_root(root: Path) -> None:
    if not root.exists():
        raise ScanError(f"path does not exist: {root}")
    if not os.access(root, os.R_OK):
        raise ScanError(f"path is not readable: {root}")
