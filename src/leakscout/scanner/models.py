"""Scanner data models: severities, findings and scan results."""

from __future__ import annotations

import enum
import time
from collections import Counter
from dataclasses import dataclass, field, replace
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from leakscout.scanner.patterns import Pattern


class Severity(enum.Enum):
    """Finding severity level."""

    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


@dataclass(frozen=True)
class Finding:
    """A single line where a pattern matched."""

    file_path: str
    line_number: int
    match_text: str
    pattern: Pattern
    line_content: str

    @property
    def severity(self) -> Severity:
        return self.pattern.severity


@dataclass(frozen=True)
class ScanIssue:
    """A non-fatal problem met while walking the tree."""

    path: str
    message: str

    def __str__(self) -> str:
        return f"{self.path}: {self.message}"


@dataclass
class ScanResult:
    """Aggregate result of a scan."""

    root: str
    findings: list[Finding] = field(default_factory=list)
    files_scanned: int = 0
    files_skipped: int = 0
    errors: list[ScanIssue] = field(default_factory=list)
    duration: float = 0.0
    timestamp: float = field(default_factory=time.time)

    def filter_by_severity(self, severity: str) -> ScanResult:
        """Return a copy keeping only findings whose severity equals *severity*.

        An empty string means no filter. Matching is an exact comparison
        against the lower-case severity value.
        """
        if not severity:
            return replace(self, findings=list(self.findings))
        kept = [f for f in self.findings if f.severity.value == severity]
        return replace(self, findings=kept)

    def sorted_findings(self) -> list[Finding]:
        """Findings ordered by file path, then line number."""
        return sorted(self.findings, key=lambda f: (f.file_path, f.line_number))

    def count_by_severity(self) -> dict[Severity, int]:
        counter = Counter(f.severity for f in self.findings)
        return {sev: counter.get(sev, 0) for sev in Severity}
