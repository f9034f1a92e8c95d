"""
Shared helpers for CLI commands.
"""

import json
from typing import NoReturn, Optional

import typer
from rich.console import Console

from quote_engine.config import load_settings
from quote_engine.log import FileEventStore
from quote_engine.logging_config import get_logger
from quote_engine.replay import ReplayResult, replay

console = Console()
err_console = Console(stderr=True)


def events_option() -> Optional[str]:
    return typer.Option(
        None,
        "--events",
        "-e",
        help="Path to event log, JSON array (default: QUOTES_EVENTS_PATH or testdata/events.json)",
    )


def setting(value: Optional[str], name: str) -> str:
    """CLI value when given, otherwise the QUOTES_* setting of the same name."""
    if value is not None:
        return value
    return getattr(load_settings(), name)


def replay_log(events_path: str) -> ReplayResult:
    """
    Read and replay an event log.

    Raises:
        FileNotFoundError, MalformedEventData, EventStoreError
    """
    logger = get_logger(__name__, trace_id=events_path)
    store = FileEventStore(events_path)
    events = store.read()
    logger.info("Events file read successfully")
    return replay(events)


def fail(message: str, json_output: bool, path: Optional[str] = None, code: int = 2) -> NoReturn:
    if json_output:
        out = {"error": message}
        if path is not None:
            out["path"] = path
        print(json.dumps(out))
    else:
        detail = f" {path}" if path is not None else ""
        err_console.print(f"[red]Error:[/red] {message}{detail}")
    raise typer.Exit(code)
