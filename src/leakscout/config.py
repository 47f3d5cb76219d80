"""Global configuration: defaults, optional YAML file, environment overrides."""

from __future__ import annotations

import logging
import os
from collections.abc import Mapping
from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Any

import yaml

from leakscout.analysis.chunker import DEFAULT_CHUNK_LINES
from leakscout.analysis.client import DEFAULT_MODEL, DEFAULT_OLLAMA_URL, DEFAULT_TIMEOUT
from leakscout.scanner.exclusion import DEFAULT_MAX_FILE_SIZE
from leakscout.utils import parse_size

logger = logging.getLogger(__name__)

CONFIG_FILENAME = ".leakscout.yaml"

SEVERITY_CHOICES = ("high", "medium", "low")

_ENV_PREFIX = "LEAKSCOUT_"


class ConfigError(ValueError):
    """A configuration file or environment value is invalid."""


@dataclass
class ScoutConfig:
    """Application-wide configuration."""

    max_file_size: int = DEFAULT_MAX_FILE_SIZE
    exclude_dirs: list[str] = field(default_factory=list)
    exclude_files: list[str] = field(default_factory=list)
    severity: str = ""
    chunk_lines: int = DEFAULT_CHUNK_LINES
    ollama_url: str = DEFAULT_OLLAMA_URL
    model: str = DEFAULT_MODEL
    request_timeout: float = DEFAULT_TIMEOUT
    workers: int = 1

    @classmethod
    def load(cls, path: str | Path | None = None) -> ScoutConfig:
        """Build config from defaults, a YAML file, then environment variables.

        Without an explicit *path*, ``.leakscout.yaml`` in the current
        directory is used when present.
        """
        config = cls()

        if path is None:
            candidate = Path.cwd() / CONFIG_FILENAME
            path = candidate if candidate.is_file() else None
        if path is not None:
            config.update(_read_yaml(Path(path)))

        config.update(_read_env(os.environ))
        config.validate()
        return config

    def update(self, values: dict[str, Any]) -> None:
        """Apply *values*, coercing each to the field's type."""
        known = {f.name for f in fields(self)}
        for key, raw in values.items():
            if key not in known:
                logger.warning("Ignoring unknown config key '%s'", key)
                continue
            setattr(self, key, _coerce(key, raw))

    def validate(self) -> None:
        if self.severity and self.severity not in SEVERITY_CHOICES:
            raise ConfigError(
                f"severity must be one of {', '.join(SEVERITY_CHOICES)}, got '{self.severity}'"
            )
        if self.max_file_size < 0:
            raise ConfigError(f"max_file_size must be non-negative, got {self.max_file_size}")
        if self.workers < 1:
            raise ConfigError(f"workers must be at least 1, got {self.workers}")
        if self.request_timeout <= 0:
            raise ConfigError(f"request_timeout must be positive, got {self.request_timeout}")


def _read_yaml(path: Path) -> dict[str, Any]:
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as e:
        raise ConfigError(f"cannot read config file {path}: {e}") from e
    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError as e:
        raise ConfigError(f"invalid YAML in {path}: {e}") from e
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigError("Config YAML must be a mapping")
    return data


def _read_env(environ: Mapping[str, str]) -> dict[str, Any]:
    mapping = {
        "OLLAMA_URL": "ollama_url",
        "MODEL": "model",
        "CHUNK_LINES": "chunk_lines",
        "MAX_FILE_SIZE": "max_file_size",
        "TIMEOUT": "request_timeout",
        "WORKERS": "workers",
    }
    values: dict[str, Any] = {}
    for suffix, key in mapping.items():
        raw = environ.get(_ENV_PREFIX + suffix)
        if raw:
            values[key] = raw
    return values


def _coerce(key: str, raw: Any) -> Any:
    try:
        if key == "max_file_size":
            return parse_size(raw)
        if key in ("chunk_lines", "workers"):
            return int(raw)
        if key == "request_timeout":
            return float(raw)
        if key in ("exclude_dirs", "exclude_files"):
            if isinstance(raw, str):
                return [part.strip() for part in raw.split(",") if part.strip()]
            return [str(item) for item in raw]
        return str(raw)
    except (TypeError, ValueError) as e:
        raise ConfigError(f"invalid value for {key}: {raw!r}") from e
