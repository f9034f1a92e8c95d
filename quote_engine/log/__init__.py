"""
Event log storage and JSON document codecs.

This module provides:
- EventStore: Abstract interface for event logs
- FileEventStore: JSON array on disk
- MemoryEventStore: in-process list
- read_bytes / write_bytes: file collaborator
- codec helpers for event logs, request batches, results and fixtures
"""

from .store import EventStore, MemoryEventStore
from .file_store import FileEventStore
from .files import read_bytes, write_bytes
from .codec import (
    decode_event_log,
    decode_requests,
    encode_results,
    decode_fixture,
    dumps_pretty,
)

__all__ = [
    "EventStore",
    "MemoryEventStore",
    "FileEventStore",
    "read_bytes",
    "write_bytes",
    "decode_event_log",
    "decode_requests",
    "encode_results",
    "decode_fixture",
    "dumps_pretty",
]
