"""CLI command: leakscout scan <path>, hardcoded secret detection."""

from __future__ import annotations

import sys
from pathlib import Path

import click
from rich.console import Console

from leakscout.analysis.errors import AnalysisError
from leakscout.cli.common import apply_overrides, connect_analyzer, console
from leakscout.config import SEVERITY_CHOICES
from leakscout.report import (
    FORMATS,
    render_analysis,
    render_analyzed_findings,
    render_json,
    render_scan,
)
from leakscout.scanner.engine import ScanEngine, ScanError
from leakscout.scanner.exclusion import ExclusionPolicy
from leakscout.utils import format_size


@click.command()
@click.argument("path", type=click.Path(exists=True), default=".")
@click.option(
    "--format",
    "-f",
    "output_format",
    type=click.Choice(FORMATS),
    default="text",
    help="Output format.",
)
@click.option("--json", "json_output", is_flag=True, help="Shorthand for --format json.")
@click.option(
    "--output",
    "-o",
    type=click.Path(dir_okay=False),
    default=None,
    help="Also write the JSON report to this file.",
)
@click.option("--max-size", "-s", default=None, help="Max file size to scan, e.g. 10MB.")
@click.option("--exclude-dir", multiple=True, help="Additional directory name to skip.")
@click.option("--exclude-file", multiple=True, help="Additional file name to skip.")
@click.option(
    "--severity",
    "-S",
    type=click.Choice(SEVERITY_CHOICES),
    default=None,
    help="Only report findings of this severity.",
)
@click.option("--workers", type=int, default=None, help="Files matched in parallel.")
@click.option("--ai", is_flag=True, help="Summarize findings with the local LLM.")
@click.option("--ai-each", is_flag=True, help="Ask the LLM about each finding separately.")
@click.option("--model", default=None, help="Model used for analysis.")
@click.option("--chunk-lines", type=int, default=None, help="Lines per analysis chunk.")
@click.option("--ollama-url", default=None, help="Ollama server URL.")
@click.pass_context
def scan(
    ctx: click.Context,
    path: str,
    output_format: str,
    json_output: bool,
    output: str | None,
    max_size: str | None,
    exclude_dir: tuple[str, ...],
    exclude_file: tuple[str, ...],
    severity: str | None,
    workers: int | None,
    ai: bool,
    ai_each: bool,
    model: str | None,
    chunk_lines: int | None,
    ollama_url: str | None,
) -> None:
    """Scan a file or directory for hardcoded secrets."""
    config = apply_overrides(
        ctx,
        max_file_size=max_size,
        severity=severity,
        workers=workers,
        model=model,
        chunk_lines=chunk_lines,
        ollama_url=ollama_url,
    )
    fmt = "json" if json_output else output_format

    policy = ExclusionPolicy(
        exclude_dirs=[*config.exclude_dirs, *exclude_dir],
        exclude_files=[*config.exclude_files, *exclude_file],
        max_file_size=config.max_file_size,
    )

    analyzer = connect_analyzer(config) if (ai or ai_each) else None

    target = Path(path).resolve()
    console.print(
        f"[bold]leakscout[/bold] scanning [cyan]{target}[/cyan] "
        f"(max size {format_size(policy.max_file_size)})"
    )

    engine = ScanEngine(policy=policy, workers=config.workers)
    try:
        result = engine.scan(target)
    except ScanError as e:
        raise click.ClickException(f"scan failed: {e}") from e

    result = result.filter_by_severity(config.severity)

    if fmt == "json":
        click.echo(render_json(result))
    else:
        render_scan(Console(), result, fmt)

    if output:
        Path(output).write_text(render_json(result), encoding="utf-8")
        console.print(f"[green]Report written to {output}[/green]")

    if analyzer is not None and result.findings:
        # Keep stdout a single JSON document
        out = console if fmt == "json" else Console()
        try:
            if ai:
                console.print(f"Analyzing {len(result.findings)} finding(s) with {config.model}...")
                render_analysis(out, analyzer.summarize_findings(result.findings))
            if ai_each:
                analyzed, errors = analyzer.analyze_each(result.findings)
                render_analyzed_findings(out, analyzed)
                if errors:
                    console.print(f"[yellow]{len(errors)} finding(s) could not be analyzed[/yellow]")
        except AnalysisError as e:
            raise click.ClickException(f"analysis failed: {e}") from e

    if result.findings:
        sys.exit(1)
