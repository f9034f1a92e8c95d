#!/usr/bin/env python3
"""
Quotes CLI

Main entrypoint for the quotes command-line tool.
"""

from typing import Optional

import typer
from rich.console import Console
from rich.table import Table

from quote_engine.logging_config import setup_logging
from cli.commands import check, log, quote, replay, zone

# Initialize Typer app
app = typer.Typer(
    name="quotes",
    help="Shipping rate quotes from an event-sourced rule set",
    add_completion=False,
)

# Console for rich output
console = Console()

# Add command groups
app.add_typer(log.app, name="log", help="Event log operations")

# Add standalone commands
app.command("quote")(quote.quote_command)
app.command("check")(check.check_command)
app.command("replay")(replay.replay_command)
app.command("zone")(zone.zone_command)


@app.callback()
def configure(
    log_level: Optional[str] = typer.Option(
        None, "--log-level", help="DEBUG, INFO, WARNING, ERROR (default: QUOTES_LOG_LEVEL or WARNING)"
    ),
    log_format: Optional[str] = typer.Option(
        None, "--log-format", help="json or text (default: QUOTES_LOG_FORMAT or text)"
    ),
):
    """Configure logging before any command runs."""
    setup_logging(level=log_level, fmt=log_format, default_level="WARNING")


@app.command()
def version():
    """Show version information."""
    from cli import __version__
    from quote_engine import __version__ as engine_version

    table = Table(show_header=False, box=None)
    table.add_row("[bold]Quotes CLI[/bold]", f"v{__version__}")
    table.add_row("Engine", f"v{engine_version}")

    console.print(table)


def main():
    """Main entrypoint."""
    app()


if __name__ == "__main__":
    main()
