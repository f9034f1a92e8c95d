"""
Event log commands: tail
"""

import json
from typing import Optional

import typer
from rich.table import Table

from quote_engine.core.errors import QuoteEngineError
from quote_engine.core.events import RateDefined, ZoneDefined, encode_event
from quote_engine.log import FileEventStore

from ._common import console, events_option, fail, setting

app = typer.Typer()


def _describe(ev) -> str:
    if isinstance(ev, ZoneDefined):
        return f"{ev.name}: {len(set(ev.postcodes))} postcodes"
    if isinstance(ev, RateDefined):
        return f"{ev.id}: {ev.from_zone} -> {ev.to_zone} <= {ev.max_weight:g} costs {ev.cost:g}"
    return "(unknown event type)"


@app.command()
def tail(
    events_path: Optional[str] = events_option(),
    lines: Optional[int] = typer.Option(None, "--lines", "-n", help="Number of events to show"),
    json_output: bool = typer.Option(False, "--json", help="Output as JSON"),
):
    """
    Show the last events of the log.

    Examples:
        quotes log tail
        quotes log tail --lines 10
        quotes log tail --json
    """
    events_path = setting(events_path, "events_path")

    try:
        store = FileEventStore(events_path)
        total = len(store.read_raw())
        events = store.read(limit=lines)
    except FileNotFoundError:
        fail("Log file not found:", json_output, path=events_path)
    except QuoteEngineError as ex:
        fail(str(ex), json_output)

    first = total - len(events)

    if json_output:
        out = [dict(encode_event(ev), seq=first + i) for i, ev in enumerate(events)]
        print(json.dumps({"events": out, "count": len(out)}, indent=2))
        return

    if not events:
        console.print("[yellow]Event log is empty[/yellow]")
        return

    table = Table(title=f"Event Log: {events_path}")
    table.add_column("Seq", style="cyan")
    table.add_column("Type", style="green")
    table.add_column("Details", style="yellow")
    for i, ev in enumerate(events):
        table.add_row(str(first + i), ev.type, _describe(ev))

    console.print(table)
    console.print(f"\n[bold]Total events:[/bold] {total}")
