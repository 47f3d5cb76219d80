"""CLI command: leakscout patterns, list the detection catalog."""

from __future__ import annotations

import click
from rich.console import Console

from leakscout.config import SEVERITY_CHOICES
from leakscout.report import render_patterns
from leakscout.scanner.patterns import get_patterns, get_patterns_by_severity


@click.command()
@click.option(
    "--severity",
    "-S",
    type=click.Choice(SEVERITY_CHOICES),
    default=None,
    help="Only list patterns of this severity.",
)
def patterns(severity: str | None) -> None:
    """List all secret patterns."""
    selected = get_patterns_by_severity(severity) if severity else list(get_patterns())
    render_patterns(Console(), selected)
