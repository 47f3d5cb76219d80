"""Analysis orchestrator: sequential, order-preserving chunk dispatch."""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from pathlib import Path

from leakscout.analysis.chunker import DEFAULT_CHUNK_LINES, chunk_text
from leakscout.analysis.client import InferenceClient
from leakscout.analysis.errors import (
    ChunkAnalysisError,
    InferenceError,
    NothingToAnalyzeError,
)
from leakscout.analysis.models import AnalysisReport, AnalyzedFinding
from leakscout.analysis.prompts import (
    log_chunk_prompt,
    log_secrets_chunk_prompt,
    secrets_chunk_prompt,
    secrets_resume_prompt,
    single_secret_prompt,
)
from leakscout.scanner.models import Finding, Severity

logger = logging.getLogger(__name__)

ProgressCallback = Callable[[int, int], None]


class Analyzer:
    """Feeds text to the inference client one chunk at a time.

    The model server is assumed to serve a single request at a time, so at
    most one query is ever outstanding. Aggregate analyses are all or
    nothing: the first failing chunk aborts the run and no partial text is
    returned.
    """

    def __init__(
        self,
        client: InferenceClient,
        chunk_lines: int = DEFAULT_CHUNK_LINES,
        on_progress: ProgressCallback | None = None,
    ) -> None:
        self.client = client
        self._chunk_lines = DEFAULT_CHUNK_LINES
        self._on_progress = on_progress
        self.set_chunk_lines(chunk_lines)

    @property
    def chunk_lines(self) -> int:
        return self._chunk_lines

    def set_chunk_lines(self, lines: int) -> bool:
        """Set lines per chunk. Non-positive values keep the previous setting."""
        if lines < 1:
            logger.warning(
                "Ignoring invalid chunk size %d, keeping %d", lines, self._chunk_lines
            )
            return False
        self._chunk_lines = lines
        return True

    def analyze(
        self,
        text: str,
        max_lines: int | None = None,
        prompt_builder: Callable[[str], str] = log_chunk_prompt,
    ) -> str:
        """Analyze *text* chunk by chunk and join the summaries in order.

        A non-positive *max_lines* falls back to the configured chunk size.
        """
        if max_lines is None:
            max_lines = self._chunk_lines
        elif max_lines < 1:
            logger.warning(
                "Ignoring invalid chunk size %d, using %d", max_lines, self._chunk_lines
            )
            max_lines = self._chunk_lines
        chunks = chunk_text(text, max_lines)
        if not chunks:
            raise NothingToAnalyzeError("nothing to analyze: input is empty")

        total = len(chunks)
        parts: list[str] = []
        for chunk in chunks:
            if self._on_progress:
                self._on_progress(chunk.index, total)
            logger.info(
                "Analyzing chunk %d/%d (%d lines)", chunk.index, total, chunk.line_count
            )
            try:
                result = self.client.query(prompt_builder(chunk.text))
            except InferenceError as e:
                raise ChunkAnalysisError(chunk.index, total, e) from e
            parts.append(f"=== Chunk {chunk.index} Summary ===\n{result.findings}\n\n")

        return "".join(parts)

    def analyze_log_file(
        self,
        path: str | Path,
        scan_secrets: bool = False,
    ) -> AnalysisReport:
        """Summarize a whole log file. Raises OSError if it cannot be read."""
        text = Path(path).read_text(encoding="utf-8", errors="replace")
        builder = log_secrets_chunk_prompt if scan_secrets else log_chunk_prompt
        content = self.analyze(text, prompt_builder=builder)
        return AnalysisReport(
            title="Log Analysis Results",
            model=self.client.model,
            content=content,
            duration="see chunk summaries",
        )

    def summarize_findings(self, findings: Sequence[Finding]) -> AnalysisReport:
        """Analyze all findings, then condense the analysis into a resume.

        A failing chunk raises ChunkAnalysisError. The resume is a single
        query, so its failure surfaces as the InferenceError itself.
        """
        if not findings:
            raise NothingToAnalyzeError("nothing to analyze: no findings")

        context = format_findings_for_analysis(findings)
        analysis = self.analyze(context, prompt_builder=secrets_chunk_prompt)

        logger.info("Generating security resume")
        resume = self.client.query(secrets_resume_prompt(analysis))
        return AnalysisReport(
            title="AI-Powered Secrets Security Analysis Report",
            model=self.client.model,
            content=resume.findings,
            duration=f"resume: {resume.duration:.1f}s",
        )

    def analyze_each(
        self,
        findings: Sequence[Finding],
    ) -> tuple[list[AnalyzedFinding], list[ChunkAnalysisError]]:
        """Query the model once per finding.

        Unlike :meth:`analyze`, a failure only loses that finding's
        assessment; it is collected and the loop moves on.
        """
        analyzed: list[AnalyzedFinding] = []
        errors: list[ChunkAnalysisError] = []
        total = len(findings)
        for index, finding in enumerate(findings, start=1):
            if self._on_progress:
                self._on_progress(index, total)
            try:
                result = self.client.query(single_secret_prompt(finding.line_content))
            except InferenceError as e:
                logger.warning(
                    "Analysis of %s:%d failed: %s",
                    finding.file_path,
                    finding.line_number,
                    e,
                )
                errors.append(ChunkAnalysisError(index, total, e))
                continue
            analyzed.append(AnalyzedFinding(finding=finding, analysis=result))
        return analyzed, errors


def format_findings_for_analysis(findings: Sequence[Finding]) -> str:
    """Render findings as plain text grouped by severity, high first."""
    lines = [f"Total Secrets Found: {len(findings)}", ""]
    for severity in Severity:
        group = [f for f in findings if f.severity == severity]
        if not group:
            continue
        lines.append(f"=== {severity.value.upper()} SEVERITY ===")
        for i, f in enumerate(group, start=1):
            lines.append(f"{i}. {f.pattern.name}")
            lines.append(f"   File: {f.file_path}:{f.line_number}")
            lines.append(f"   Type: {f.pattern.description}")
            lines.append(f"   Context: {f.line_content.strip()}")
            lines.append("")
    return "\n".join(lines) + "\n"
