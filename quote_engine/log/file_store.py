"""
File-based event log stored as a single JSON array.

Format: [{"Event": "ZoneDefined", "Data": {...}}, ...]
"""

import os
from typing import List

from ..core.events import Event, encode_event
from .codec import decode_event_log, dumps_pretty
from .files import read_bytes, write_bytes
from .store import EventStore


class FileEventStore(EventStore):
    """
    Event log backed by one JSON document.

    Appends rewrite the whole document (read bytes, write bytes); the file is
    replaced atomically.
    """

    def __init__(self, path: str, create: bool = False) -> None:
        """
        Args:
            path: Path to the JSON event log
            create: Create an empty log if the file does not exist
        """
        self.path = path
        if create and not os.path.exists(path):
            write_bytes(path, dumps_pretty([]))

    def read_raw(self) -> List[object]:
        """
        Raises:
            FileNotFoundError: If the log does not exist
            EventStoreError: If the log is not a JSON array
        """
        return decode_event_log(read_bytes(self.path))

    def append(self, event: Event) -> int:
        records = self.read_raw() if os.path.exists(self.path) else []
        records.append(encode_event(event))
        write_bytes(self.path, dumps_pretty(records))
        return len(records) - 1
