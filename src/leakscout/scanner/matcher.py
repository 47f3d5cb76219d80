"""Line matcher: evaluates every catalog pattern against file content."""

from __future__ import annotations

import os
from collections.abc import Iterable, Iterator, Sequence

from leakscout.scanner.models import Finding
from leakscout.scanner.patterns import PATTERNS, Pattern


def split_lines(text: str) -> list[str]:
    """Split on ``\\n`` only; a final newline does not add an empty line."""
    if not text:
        return []
    lines = text.split("\n")
    if lines[-1] == "":
        lines.pop()
    return [_strip_cr(line) for line in lines]


def iter_file_lines(path: str | os.PathLike[str]) -> Iterator[str]:
    """Yield the lines of a text file without their terminators."""
    with open(path, encoding="utf-8", errors="replace", newline="\n") as fh:
        for line in fh:
            yield _strip_cr(line.rstrip("\n"))


def match_line(
    line: str,
    line_number: int,
    file_path: str,
    patterns: Sequence[Pattern] = PATTERNS,
) -> list[Finding]:
    """Return one finding per pattern that matches *line*."""
    if not line.strip():
        return []

    findings: list[Finding] = []
    for pattern in patterns:
        match = pattern.regex.search(line)
        if match is None:
            continue
        findings.append(
            Finding(
                file_path=file_path,
                line_number=line_number,
                match_text=match.group(0),
                pattern=pattern,
                line_content=line,
            )
        )
    return findings


def scan_lines(
    lines: Iterable[str],
    file_path: str,
    patterns: Sequence[Pattern] = PATTERNS,
) -> list[Finding]:
    findings: list[Finding] = []
    for line_number, line in enumerate(lines, start=1):
        findings.extend(match_line(line, line_number, file_path, patterns))
    return findings


def scan_file(
    path: str | os.PathLike[str],
    patterns: Sequence[Pattern] = PATTERNS,
) -> list[Finding]:
    """Scan one file. Raises ``OSError`` if it cannot be opened or read."""
    file_path = os.path.abspath(os.fspath(path))
    return scan_lines(iter_file_lines(file_path), file_path, patterns)


def _strip_cr(line: str) -> str:
    return line[:-1] if line.endswith("\r") else line
