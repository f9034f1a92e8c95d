"""
Exception types for the rate quote engine.
"""

from typing import Optional


class QuoteEngineError(Exception):
    """Base class for every error raised by the engine."""
    pass


class MalformedEventData(QuoteEngineError):
    """
    Raised when an event envelope or payload does not match its declared shape.

    Fatal to the whole build: no partial state is produced.
    """

    def __init__(self, message: str, index: Optional[int] = None, tag: Optional[str] = None) -> None:
        self.index = index
        self.tag = tag
        prefix = ""
        if index is not None:
            prefix = f"event #{index}"
            if tag:
                prefix += f" ({tag})"
            prefix += ": "
        super().__init__(prefix + message)


class UnknownEventType(QuoteEngineError):
    """
    Raised by the reducer when no handler is registered for an event tag.

    Replay treats this as a warning and skips the event.
    """

    def __init__(self, tag: str) -> None:
        self.tag = tag
        super().__init__(f"No handler for event type: {tag}")


class MalformedRequest(QuoteEngineError):
    """Raised when a request batch entry cannot be decoded."""
    pass


class EventStoreError(QuoteEngineError):
    """Raised when reading or writing a JSON document fails."""
    pass
