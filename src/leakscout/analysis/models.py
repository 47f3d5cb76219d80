"""Analysis data models: wire format, per-query results and reports."""

from __future__ import annotations

import time
from dataclasses import dataclass, field

from pydantic import BaseModel

from leakscout.scanner.models import Finding


class GenerateRequest(BaseModel):
    """Body of ``POST /api/generate``."""

    model: str
    prompt: str
    stream: bool = False


class GenerateResponse(BaseModel):
    """Non-streaming answer from ``/api/generate``."""

    model: str = ""
    response: str
    done: bool = True


@dataclass(frozen=True)
class AnalysisResult:
    """Outcome of one inference query."""

    findings: str
    model: str
    duration: float


@dataclass
class AnalysisReport:
    """A titled analysis ready to render."""

    title: str
    model: str
    content: str
    duration: str
    timestamp: float = field(default_factory=time.time)


@dataclass(frozen=True)
class AnalyzedFinding:
    """A finding with the model's individual assessment of it."""

    finding: Finding
    analysis: AnalysisResult
