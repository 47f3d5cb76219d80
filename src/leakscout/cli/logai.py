"""CLI command: leakscout logai <file>, chunked log summary with a local LLM."""

from __future__ import annotations

import click
from rich.console import Console

from leakscout.analysis.errors import AnalysisError
from leakscout.cli.common import apply_overrides, connect_analyzer, console
from leakscout.report import render_analysis


@click.command()
@click.argument("logfile", type=click.Path(exists=True, dir_okay=False))
@click.option("--secrets", is_flag=True, help="Focus the summary on leaked secrets.")
@click.option("--model", default=None, help="Model used for analysis.")
@click.option("--chunk-lines", type=int, default=None, help="Lines per analysis chunk.")
@click.option("--ollama-url", default=None, help="Ollama server URL.")
@click.pass_context
def logai(
    ctx: click.Context,
    logfile: str,
    secrets: bool,
    model: str | None,
    chunk_lines: int | None,
    ollama_url: str | None,
) -> None:
    """Summarize a log file with a local LLM, chunk by chunk."""
    config = apply_overrides(
        ctx,
        model=model,
        chunk_lines=chunk_lines,
        ollama_url=ollama_url,
    )
    analyzer = connect_analyzer(config)

    console.print(
        f"[bold]leakscout[/bold] analyzing [cyan]{logfile}[/cyan] "
        f"with [cyan]{config.model}[/cyan], {analyzer.chunk_lines} lines per chunk"
    )
    try:
        report = analyzer.analyze_log_file(logfile, scan_secrets=secrets)
    except OSError as e:
        raise click.ClickException(f"failed to read log file: {e}") from e
    except AnalysisError as e:
        raise click.ClickException(str(e)) from e

    render_analysis(Console(), report)
    console.print("[green]Analysis complete[/green]")
