"""
EventStore abstract interface.

Defines contract for event log implementations.
"""

from abc import ABC, abstractmethod
from typing import List, Optional

from ..core.events import Event, decode_events, encode_event


class EventStore(ABC):
    """
    Abstract event log interface.

    All implementations must guarantee:
    - Append-only (no updates, no deletes)
    - Log order is preserved on read
    - read() decodes every event eagerly and fails on the first malformed one
    """

    @abstractmethod
    def append(self, event: Event) -> int:
        """
        Append event to log.

        Returns:
            Position of the event in the log (0-based)

        Raises:
            EventStoreError: If append fails
        """
        ...

    @abstractmethod
    def read_raw(self) -> List[object]:
        """Return the raw log envelopes in log order."""
        ...

    def read(self, limit: Optional[int] = None) -> List[Event]:
        """
        Read decoded events.

        Args:
            limit: Only return the last N events (None = all)

        Raises:
            MalformedEventData: If any event in the log is malformed
        """
        events = decode_events(self.read_raw())
        if limit is not None:
            return events[-limit:] if limit > 0 else []
        return events


class MemoryEventStore(EventStore):
    """In-memory event log."""

    def __init__(self, records: Optional[List[object]] = None) -> None:
        self._records: List[object] = list(records or [])

    def append(self, event: Event) -> int:
        self._records.append(encode_event(event))
        return len(self._records) - 1

    def read_raw(self) -> List[object]:
        return list(self._records)
