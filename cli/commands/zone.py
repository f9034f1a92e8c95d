"""
Zone command: show how a postcode resolves
"""

import json
from typing import Optional

import typer

from quote_engine.core.errors import QuoteEngineError
from quote_engine.query import zone_for, zones_listing

from ._common import console, events_option, fail, replay_log, setting


def zone_command(
    postcode: str = typer.Argument(..., help="Postcode to look up"),
    events_path: Optional[str] = events_option(),
    json_output: bool = typer.Option(False, "--json", help="Output as JSON"),
):
    """
    Show the zone a postcode resolves to and every zone listing it.

    Exits 1 when the postcode belongs to no zone.
    """
    events_path = setting(events_path, "events_path")

    try:
        result = replay_log(events_path)
    except FileNotFoundError:
        fail("Log file not found:", json_output, path=events_path)
    except QuoteEngineError as ex:
        fail(str(ex), json_output)

    zone = zone_for(result.state, postcode)
    listed_by = zones_listing(result.state, postcode)

    if json_output:
        print(json.dumps({"postcode": postcode, "zone": zone, "listed_by": listed_by}, indent=2))
    elif zone is None:
        console.print(f"[yellow]{postcode} is not in any zone[/yellow]")
    else:
        console.print(f"{postcode} -> [cyan]{zone}[/cyan]")
        if len(listed_by) > 1:
            console.print(f"  [yellow]also listed by:[/yellow] {', '.join(n for n in listed_by if n != zone)}")

    if zone is None:
        raise typer.Exit(1)
