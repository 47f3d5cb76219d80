"""Report rendering: text, table and JSON views of scan and analysis results."""

from __future__ import annotations

import json
from typing import Any

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from leakscout.analysis.models import AnalysisReport, AnalyzedFinding
from leakscout.scanner.models import ScanResult, Severity
from leakscout.scanner.patterns import Pattern
from leakscout.utils import shorten_path, truncate

FORMATS = ("text", "table", "json")

_SEVERITY_COLORS = {
    Severity.HIGH: "red",
    Severity.MEDIUM: "yellow",
    Severity.LOW: "green",
}


def build_json_report(result: ScanResult) -> dict[str, Any]:
    counts = result.count_by_severity()
    return {
        "summary": {
            "total_matches": len(result.findings),
            "high_severity": counts[Severity.HIGH],
            "medium_severity": counts[Severity.MEDIUM],
            "low_severity": counts[Severity.LOW],
        },
        "matches": [
            {
                "file_path": f.file_path,
                "line_number": f.line_number,
                "pattern_name": f.pattern.name,
                "severity": f.severity.value,
                "match": f.match_text,
                "line_content": f.line_content,
            }
            for f in result.sorted_findings()
        ],
        "stats": {
            "files_scanned": result.files_scanned,
            "files_skipped": result.files_skipped,
            "errors": [str(e) for e in result.errors],
            "duration": round(result.duration, 3),
        },
    }


def render_json(result: ScanResult) -> str:
    return json.dumps(build_json_report(result), indent=2)


def render_text(console: Console, result: ScanResult) -> None:
    if not result.findings:
        console.print("[green]No secrets found![/green]")
        _print_stats(console, result)
        return

    console.print("\n[bold red]Secrets found![/bold red]\n")
    for severity, count in result.count_by_severity().items():
        if count:
            color = _SEVERITY_COLORS[severity]
            console.print(f"[bold {color}]{severity.value.title()} severity: {count}[/bold {color}]")
    console.print()
    _print_stats(console, result)
    console.rule()

    current_file = ""
    for f in result.sorted_findings():
        if f.file_path != current_file:
            current_file = f.file_path
            console.print(f"\n[cyan]{escape(shorten_path(f.file_path, result.root))}[/cyan]")
        color = _SEVERITY_COLORS[f.severity]
        console.print(f"  Line {f.line_number}: [{color}]{f.pattern.name}[/{color}]")
        console.print(f"    Content: {truncate(f.line_content.strip(), 80)}", markup=False)
        console.print(f"    Match: {truncate(f.match_text, 60)}\n", markup=False)
    console.rule()


def render_table(console: Console, result: ScanResult) -> None:
    if not result.findings:
        console.print("[green]No secrets found![/green]")
        _print_stats(console, result)
        return

    table = Table(title="Findings", show_lines=False)
    table.add_column("Severity", style="bold", width=8)
    table.add_column("File", style="cyan")
    table.add_column("Line", justify="right")
    table.add_column("Pattern")
    table.add_column("Match", max_width=50)

    for f in result.sorted_findings():
        color = _SEVERITY_COLORS[f.severity]
        table.add_row(
            f"[{color}]{f.severity.value}[/{color}]",
            escape(shorten_path(f.file_path, result.root)),
            str(f.line_number),
            f.pattern.name,
            escape(truncate(f.match_text, 50)),
        )

    console.print(table)
    console.print(f"Total matches: {len(result.findings)}")
    _print_stats(console, result)


def render_scan(console: Console, result: ScanResult, fmt: str) -> None:
    """Render *result* as text or a table. JSON is written by the caller."""
    if fmt == "table":
        render_table(console, result)
    else:
        render_text(console, result)


def render_analysis(console: Console, report: AnalysisReport) -> None:
    console.rule(report.title)
    console.print(f"Model: [bold]{report.model}[/bold]")
    console.print(f"Duration: {report.duration}\n")
    console.print(report.content, markup=False)
    console.rule()


def render_analyzed_findings(console: Console, analyzed: list[AnalyzedFinding]) -> None:
    for item in analyzed:
        f = item.finding
        color = _SEVERITY_COLORS[f.severity]
        console.rule(f"[{color}]{f.pattern.name}[/{color}] {escape(f.file_path)}:{f.line_number}")
        console.print(item.analysis.findings, markup=False)
        console.print(f"[dim]{item.analysis.model}, {item.analysis.duration:.1f}s[/dim]\n")


def render_patterns(console: Console, patterns: list[Pattern]) -> None:
    table = Table(title="Secret Patterns")
    table.add_column("Severity", style="bold", width=8)
    table.add_column("Name", no_wrap=True)
    table.add_column("Description")
    for p in sorted(patterns, key=lambda p: list(Severity).index(p.severity)):
        color = _SEVERITY_COLORS[p.severity]
        table.add_row(f"[{color}]{p.severity.value}[/{color}]", p.name, p.description)
    console.print(table)


def _print_stats(console: Console, result: ScanResult) -> None:
    console.print(
        f"Files scanned: {result.files_scanned} "
        f"({result.files_skipped} skipped) in {result.duration:.2f}s"
    )
    if result.errors:
        console.print(f"[yellow]{len(result.errors)} problem(s) during the scan, see --verbose[/yellow]")
