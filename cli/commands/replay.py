"""
Replay command: rebuild the rule set and summarise it
"""

import json
from typing import Optional

import typer
from rich.syntax import Syntax
from rich.table import Table

from quote_engine.core.canonical import compute_state_hash
from quote_engine.core.errors import QuoteEngineError
from quote_engine.query import shared_postcodes, state_summary

from ._common import console, events_option, fail, replay_log, setting


def replay_command(
    events_path: Optional[str] = events_option(),
    show_state: bool = typer.Option(False, "--show-state", "-s", help="Show final state"),
    json_output: bool = typer.Option(False, "--json", help="Output as JSON"),
):
    """
    Replay event log and summarise the reconstructed rule set.

    Examples:
        quotes replay
        quotes replay --show-state
        quotes replay --json
    """
    events_path = setting(events_path, "events_path")

    try:
        result = replay_log(events_path)
    except FileNotFoundError:
        fail("Log file not found:", json_output, path=events_path)
    except QuoteEngineError as ex:
        fail(str(ex), json_output)

    state = result.state
    state_hash = compute_state_hash(state)
    overlaps = shared_postcodes(state)

    if json_output:
        output = {
            "success": True,
            "events_applied": result.applied,
            "events_skipped": result.skipped,
            "event_counts": result.event_counts,
            "summary": state_summary(state),
            "shared_postcodes": overlaps,
            "state_hash": state_hash,
        }
        if show_state:
            output["state"] = state.to_dict()
        print(json.dumps(output, indent=2))
        return

    console.print(f"[green]✓ Replayed {result.applied} events[/green]")
    if result.skipped:
        console.print(f"  [yellow]Skipped {result.skipped} events with unknown type[/yellow]")
    console.print(f"  Zones: [cyan]{len(state.zones)}[/cyan]  Rates: [cyan]{len(state.rates)}[/cyan]")
    console.print(f"  State hash: [yellow]{state_hash}[/yellow]")

    table = Table(title="Event Counts")
    table.add_column("Event Type", style="green")
    table.add_column("Count", style="cyan", justify="right")
    for event_type in sorted(result.event_counts):
        table.add_row(event_type, str(result.event_counts[event_type]))
    console.print(table)

    if overlaps:
        console.print("\n[bold yellow]Postcodes listed by more than one zone:[/bold yellow]")
        for code, names in overlaps.items():
            console.print(f"  {code}: {', '.join(names)} -> {state.zone_of(code)}")

    if show_state:
        console.print("\n[bold]Final State:[/bold]")
        console.print(Syntax(json.dumps(state.to_dict(), indent=2), "json", theme="monokai"))
