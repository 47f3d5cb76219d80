"""Exception types for LLM analysis."""

from __future__ import annotations


class AnalysisError(Exception):
    """Base exception for analysis failures."""


class InferenceError(AnalysisError):
    """The inference service could not produce an answer."""


class InferenceUnavailableError(InferenceError):
    """The inference endpoint could not be reached."""


class InferenceTimeoutError(InferenceError):
    """A request exceeded the configured timeout."""


class InferenceStatusError(InferenceError):
    """The service answered with a non-success status code."""

    def __init__(self, status_code: int, body: str) -> None:
        super().__init__(f"inference service returned status {status_code}: {body}")
        self.status_code = status_code
        self.body = body


class InferenceResponseError(InferenceError):
    """The response body could not be parsed."""


class NothingToAnalyzeError(AnalysisError):
    """The input was empty; no request was made."""


class ChunkAnalysisError(AnalysisError):
    """Analysis of one chunk failed, aborting the whole run."""

    def __init__(self, index: int, total: int, cause: Exception) -> None:
        super().__init__(f"failed to analyze chunk {index}/{total}: {cause}")
        self.index = index
        self.total = total
        self.cause = cause
