"""
Structured logging configuration for the quote engine.

Provides JSON-formatted or text logs with a trace_id field for correlating
the lines of one run.

Usage:
    from quote_engine.logging_config import setup_logging, get_logger

    setup_logging()
    logger = get_logger(__name__, trace_id="testdata/events.json")
    logger.info("Replaying event log")
"""

import logging
import sys
from typing import Optional

from pythonjsonlogger import jsonlogger

from .config import load_settings

LEVELS = {
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARNING": logging.WARNING,
    "ERROR": logging.ERROR,
    "CRITICAL": logging.CRITICAL,
}


class TraceIDFilter(logging.Filter):
    """
    Logging filter that adds trace_id to all log records.

    Ensures all logs have a trace_id field, even if not set via LoggerAdapter.
    """

    def filter(self, record: logging.LogRecord) -> bool:
        if not hasattr(record, "trace_id"):
            record.trace_id = "N/A"  # type: ignore
        return True


def setup_logging(
    level: Optional[str] = None,
    fmt: Optional[str] = None,
    stream=None,
    default_level: str = "INFO",
) -> None:
    """
    Configure root logger.

    Arguments override QUOTES_LOG_LEVEL / QUOTES_LOG_FORMAT; default_level
    applies when neither is set. Logs go to stderr so stdout stays free for
    results.
    """
    settings = load_settings()
    level_name = (level or settings.log_level or default_level).upper()
    log_format = (fmt or settings.log_format).lower()
    log_level = LEVELS.get(level_name, LEVELS.get(default_level.upper(), logging.INFO))

    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)

    # Remove existing handlers
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    handler = logging.StreamHandler(stream or sys.stderr)
    handler.setLevel(log_level)
    handler.addFilter(TraceIDFilter())

    if log_format == "json":
        formatter = jsonlogger.JsonFormatter(
            "%(asctime)s %(name)s %(levelname)s %(message)s %(trace_id)s",
            rename_fields={
                "asctime": "timestamp",
                "name": "logger",
                "levelname": "level",
            },
        )
    else:
        formatter = logging.Formatter(
            "%(asctime)s - %(name)s - %(levelname)s - %(message)s [trace_id=%(trace_id)s]",
            datefmt="%Y-%m-%d %H:%M:%S",
        )

    handler.setFormatter(formatter)
    root_logger.addHandler(handler)


def get_logger(name: str, trace_id: Optional[str] = None) -> logging.LoggerAdapter:
    """
    Get a logger with optional trace_id for correlation.

    Args:
        name: Logger name (typically __name__)
        trace_id: Trace ID for correlating logs (typically the event log path)
    """
    logger = logging.getLogger(name)
    return logging.LoggerAdapter(logger, {"trace_id": trace_id or "N/A"})
