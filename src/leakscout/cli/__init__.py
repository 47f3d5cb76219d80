"""CLI entry point: Click group with global options."""

from __future__ import annotations

import logging

import click

from leakscout import __version__
from leakscout.config import ConfigError, ScoutConfig


@click.group()
@click.version_option(version=__version__, prog_name="leakscout")
@click.option(
    "--config",
    "-c",
    "config_path",
    type=click.Path(exists=True, dir_okay=False),
    help="Path to a YAML config file (default: ./.leakscout.yaml).",
)
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose output.")
@click.pass_context
def main(ctx: click.Context, config_path: str | None, verbose: bool) -> None:
    """leakscout: find hardcoded secrets and analyze logs with a local LLM."""
    level = logging.DEBUG if verbose else logging.WARNING
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S",
    )

    try:
        config = ScoutConfig.load(config_path)
    except ConfigError as e:
        raise click.ClickException(str(e)) from e

    ctx.ensure_object(dict)
    ctx.obj["config"] = config
    ctx.obj["verbose"] = verbose


def _register_commands() -> None:
    from leakscout.cli.logai import logai  # noqa: F811
    from leakscout.cli.patterns import patterns  # noqa: F811
    from leakscout.cli.scan import scan  # noqa: F811

    main.add_command(scan)
    main.add_command(logai)
    main.add_command(patterns)


_register_commands()
