"""Ollama inference client: health probe and single-prompt query."""

from __future__ import annotations

import logging
import time
from typing import Any

import httpx
from pydantic import ValidationError

from leakscout.analysis.errors import (
    InferenceResponseError,
    InferenceStatusError,
    InferenceTimeoutError,
    InferenceUnavailableError,
)
from leakscout.analysis.models import AnalysisResult, GenerateRequest, GenerateResponse

logger = logging.getLogger(__name__)

DEFAULT_OLLAMA_URL = "http://localhost:11434"
DEFAULT_MODEL = "qwen2.5:1.5b"
# Local inference on small hardware can take a long time per prompt
DEFAULT_TIMEOUT = 30 * 60.0


class InferenceClient:
    """Stateless request/response wrapper around an Ollama server.

    Each call opens its own ``httpx.Client``; nothing but the endpoint,
    model and timeout is kept between calls. No retries are attempted.
    """

    def __init__(
        self,
        base_url: str = DEFAULT_OLLAMA_URL,
        model: str = DEFAULT_MODEL,
        timeout: float = DEFAULT_TIMEOUT,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.model = model
        self.timeout = timeout
        self._transport = transport

    def set_model(self, model: str) -> None:
        self.model = model

    def set_base_url(self, url: str) -> None:
        self.base_url = url.rstrip("/")

    def health_check(self) -> None:
        """Raise an InferenceError unless ``/api/tags`` answers 200."""
        url = f"{self.base_url}/api/tags"
        try:
            status, content = self._exchange("GET", url)
        except httpx.TimeoutException as e:
            raise InferenceTimeoutError(
                f"ollama server at {self.base_url} did not answer within {self.timeout:g}s"
            ) from e
        except httpx.RequestError as e:
            raise InferenceUnavailableError(
                f"ollama server not responding at {self.base_url}: {e}"
            ) from e

        if status != httpx.codes.OK:
            raise InferenceStatusError(status, content.decode("utf-8", errors="replace"))
        logger.debug("Ollama reachable at %s", self.base_url)

    def query(self, prompt: str) -> AnalysisResult:
        """Send one prompt and return the complete answer."""
        body = GenerateRequest(model=self.model, prompt=prompt, stream=False)
        url = f"{self.base_url}/api/generate"

        start = time.monotonic()
        try:
            status, content = self._exchange("POST", url, json=body.model_dump())
        except httpx.TimeoutException as e:
            raise InferenceTimeoutError(
                f"query to {self.model} exceeded {self.timeout:g}s"
            ) from e
        except httpx.RequestError as e:
            raise InferenceUnavailableError(f"failed to query ollama: {e}") from e
        duration = time.monotonic() - start

        if status != httpx.codes.OK:
            raise InferenceStatusError(status, content.decode("utf-8", errors="replace"))

        try:
            parsed = GenerateResponse.model_validate_json(content)
        except ValidationError as e:
            raise InferenceResponseError(f"failed to parse response: {e}") from e

        logger.debug(
            "Model %s answered %d chars in %.1fs",
            self.model,
            len(parsed.response),
            duration,
        )
        return AnalysisResult(
            findings=parsed.response.strip(),
            model=self.model,
            duration=duration,
        )

    def _exchange(self, method: str, url: str, **kwargs: Any) -> tuple[int, bytes]:
        """Run one request under a single deadline counted from its start.

        The httpx timeout only bounds each phase separately; the body is
        streamed and the overall deadline checked after every piece.
        """
        deadline = time.monotonic() + self.timeout
        with self._client() as client:
            with client.stream(method, url, **kwargs) as resp:
                content = bytearray()
                self._check_deadline(deadline, url)
                for piece in resp.iter_bytes():
                    content.extend(piece)
                    self._check_deadline(deadline, url)
                return resp.status_code, bytes(content)

    def _check_deadline(self, deadline: float, url: str) -> None:
        if time.monotonic() > deadline:
            raise InferenceTimeoutError(f"request to {url} exceeded {self.timeout:g}s")

    def _client(self) -> httpx.Client:
        return httpx.Client(timeout=self.timeout, transport=self._transport)
