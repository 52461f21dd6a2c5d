"""
CompatLib CLI Main Entry Point

Operator commands for inspecting exported diagnostics logs and the
configured overrides.
"""

import json
import re
import sys
from pathlib import Path
from typing import Callable, List, Optional

import click

from ..core.config import load_config
from ..extensions.diagnostics import DiagnosticsSink

NO_CONFLICTS_MESSAGE = "No compatibility conflicts recorded."
LEVELS = ("info", "warning", "error", "conflict")

# "YYYY-MM-DD HH:MM:SS [LEVEL]: message"
_ENTRY_PATTERN = re.compile(
    r"^\d{4}-\d{2}-\d{2} \d{2}:\d{2}:\d{2} \[(INFO|WARNING|ERROR|CONFLICT)\]: "
)


def show_log(sink: DiagnosticsSink, echo: Callable[[str], None] = click.echo) -> int:
    """
    Dump a live diagnostics sink to an interactive console.

    Args:
        sink: Sink to dump
        echo: Output function of the host console

    Returns:
        Number of entries written
    """
    messages = sink.messages()
    if not messages:
        echo(NO_CONFLICTS_MESSAGE)
        return 0

    for message in messages:
        echo(message)
    return len(messages)


def entry_level(message: str) -> Optional[str]:
    """Level of a rendered log entry, read from its header only"""
    match = _ENTRY_PATTERN.match(message)
    return match.group(1).lower() if match else None


def _read_export(path: Path) -> List[str]:
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as e:
        click.echo(f"✗ Could not read log export {path}: {e}", err=True)
        sys.exit(1)

    if not isinstance(data, list) or not all(isinstance(m, str) for m in data):
        click.echo(f"✗ {path} is not a CompatLib log export", err=True)
        sys.exit(1)

    return data


@click.group()
@click.version_option(version="0.1.0")
def cli():
    """
    CompatLib - cross-extension compatibility handlers.

    Command-line interface for inspecting compatibility diagnostics.
    """
    pass


@cli.group()
def log():
    """Diagnostics log commands."""
    pass


@log.command("show")
@click.argument("export_file", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option(
    "--level",
    "-l",
    type=click.Choice(LEVELS),
    default=None,
    help="Only show entries of this level",
)
def show_export(export_file: Path, level: Optional[str]):
    """
    Display entries of an exported diagnostics log.

    Example:
        compatlib log show compat-log.json -l conflict
    """
    messages = _read_export(export_file)

    if level:
        messages = [m for m in messages if entry_level(m) == level]

    if not messages:
        click.echo(NO_CONFLICTS_MESSAGE)
        return

    for message in messages:
        click.echo(message)


@log.command("stats")
@click.argument("export_file", type=click.Path(exists=True, dir_okay=False, path_type=Path))
def export_stats(export_file: Path):
    """
    Summarize an exported diagnostics log.

    Example:
        compatlib log stats compat-log.json
    """
    messages = _read_export(export_file)

    levels = [entry_level(m) for m in messages]

    click.echo(f"Entries: {len(messages)}")
    for level in LEVELS:
        click.echo(f"  {level.capitalize()}: {levels.count(level)}")


@cli.command("overrides")
@click.option(
    "--env-file",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Configuration file to read instead of the environment defaults",
)
def list_overrides(env_file: Optional[Path]):
    """
    List operator overrides from configuration.

    Example:
        compatlib overrides --env-file .env
    """
    config = load_config(env_file)

    if not config.overrides:
        click.echo("No overrides configured.")
        return

    click.echo(f"\nFound {len(config.overrides)} override(s):\n")
    for target_id, description in sorted(config.overrides.items()):
        click.echo(f"  • {target_id} -> {description}")


def main():
    cli()


if __name__ == "__main__":
    main()
