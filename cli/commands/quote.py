"""
Quote command: price a request batch against the replayed rule set
"""

from typing import Optional

import typer

from quote_engine.config import STDOUT
from quote_engine.core.errors import QuoteEngineError
from quote_engine.log import decode_requests, encode_results, read_bytes, write_bytes
from quote_engine.logging_config import get_logger
from quote_engine.resolver import resolve_batch

from ._common import console, events_option, fail, replay_log, setting


def quote_command(
    events_path: Optional[str] = events_option(),
    requests_path: Optional[str] = typer.Option(
        None,
        "--requests",
        "-r",
        help="Path to request batch, JSON array of From/To/Weight (default: QUOTES_REQUESTS_PATH)",
    ),
    output_path: Optional[str] = typer.Option(
        None,
        "--output",
        "-o",
        help="Where to write results, '-' for stdout (default: QUOTES_OUTPUT_PATH or -)",
    ),
    json_output: bool = typer.Option(False, "--json", help="Report errors as JSON"),
):
    """
    Price every request in a batch.

    Examples:
        quotes quote --events testdata/events.json --requests testdata/requests.json
        quotes quote -r requests.json -o results.json
    """
    events_path = setting(events_path, "events_path")
    requests_path = setting(requests_path, "requests_path")
    output_path = setting(output_path, "output_path")

    logger = get_logger(__name__, trace_id=events_path)
    try:
        result = replay_log(events_path)
        requests = decode_requests(read_bytes(requests_path))
    except FileNotFoundError as ex:
        fail("File not found:", json_output, path=ex.filename)
    except QuoteEngineError as ex:
        fail(str(ex), json_output)

    results = resolve_batch(requests, result.state)
    logger.info("Resolved %d requests", len(results))
    document = encode_results(results)

    if output_path == STDOUT:
        print(document.decode("utf-8"), end="")
        return

    try:
        write_bytes(output_path, document)
    except QuoteEngineError as ex:
        fail(str(ex), json_output, path=output_path)

    if not json_output:
        matched = sum(1 for r in results if r.output)
        console.print(
            f"[green]✓ Wrote {len(results)} results ({matched} priced) to[/green] {output_path}"
        )
