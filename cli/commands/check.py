"""
Check command: compare resolved prices with an input/expected-output fixture
"""

import json
from typing import List, Optional

import typer
from rich.table import Table

from quote_engine.core.errors import QuoteEngineError
from quote_engine.core.quotes import PriceQuote
from quote_engine.log import decode_fixture, read_bytes
from quote_engine.resolver import resolve

from ._common import console, events_option, fail, replay_log, setting


def _fmt(quotes: List[PriceQuote]) -> str:
    if not quotes:
        return "[]"
    return ", ".join(f"{q.rate_id}={q.price:g}" for q in quotes)


def check_command(
    events_path: Optional[str] = events_option(),
    fixture_path: Optional[str] = typer.Option(
        None,
        "--fixture",
        "-f",
        help="Path to input/expected-output fixture (default: QUOTES_FIXTURE_PATH)",
    ),
    json_output: bool = typer.Option(False, "--json", help="Output as JSON"),
):
    """
    Resolve every fixture input and compare with its expected output.

    Exits 1 when any request resolves differently.
    """
    events_path = setting(events_path, "events_path")
    fixture_path = setting(fixture_path, "fixture_path")

    try:
        result = replay_log(events_path)
        pairs = decode_fixture(read_bytes(fixture_path))
    except FileNotFoundError as ex:
        fail("File not found:", json_output, path=ex.filename)
    except QuoteEngineError as ex:
        fail(str(ex), json_output)

    mismatches = []
    for index, (request, expected) in enumerate(pairs):
        actual = resolve(request, result.state)
        if actual != expected:
            mismatches.append((index, request, expected, actual))

    if json_output:
        out = {
            "checked": len(pairs),
            "mismatches": [
                {
                    "index": index,
                    "input": request.to_dict(),
                    "expected": [q.to_dict() for q in expected],
                    "actual": [q.to_dict() for q in actual],
                }
                for index, request, expected, actual in mismatches
            ],
        }
        print(json.dumps(out, indent=2))
    elif not mismatches:
        console.print(f"[green]✓ All {len(pairs)} fixture requests match[/green]")
    else:
        table = Table(title=f"Mismatches: {fixture_path}")
        table.add_column("#", style="cyan", justify="right")
        table.add_column("Request", style="yellow")
        table.add_column("Expected", style="green")
        table.add_column("Actual", style="red")
        for index, request, expected, actual in mismatches:
            table.add_row(
                str(index),
                f"{request.from_postcode} -> {request.to_postcode} @ {request.weight:g}",
                _fmt(expected),
                _fmt(actual),
            )
        console.print(table)
        console.print(f"\n[bold]{len(mismatches)} of {len(pairs)} requests differ[/bold]")

    if mismatches:
        raise typer.Exit(1)
