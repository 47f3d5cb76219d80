"""Helpers shared by the CLI commands."""

from __future__ import annotations

from typing import Any

import click
from rich.console import Console

from leakscout.analysis.client import InferenceClient
from leakscout.analysis.errors import InferenceError
from leakscout.analysis.orchestrator import Analyzer
from leakscout.config import ConfigError, ScoutConfig

# Progress and diagnostics; reports go to stdout
console = Console(stderr=True)


def apply_overrides(ctx: click.Context, **overrides: Any) -> ScoutConfig:
    """Layer command-line values that were actually given over the loaded config."""
    config: ScoutConfig = ctx.obj["config"]
    try:
        config.update({k: v for k, v in overrides.items() if v not in (None, ())})
        config.validate()
    except ConfigError as e:
        raise click.BadParameter(str(e)) from e
    return config


def connect_analyzer(config: ScoutConfig) -> Analyzer:
    """Build an analyzer and make sure the model server is up."""
    client = InferenceClient(
        base_url=config.ollama_url,
        model=config.model,
        timeout=config.request_timeout,
    )

    console.print("[dim]Checking Ollama connection...[/dim]")
    try:
        client.health_check()
    except InferenceError as e:
        raise click.ClickException(f"{e}\nMake sure Ollama is running: ollama serve") from e

    return Analyzer(
        client,
        chunk_lines=config.chunk_lines,
        on_progress=_print_progress,
    )


def _print_progress(index: int, total: int) -> None:
    console.print(f"  Processing {index}/{total}...")
