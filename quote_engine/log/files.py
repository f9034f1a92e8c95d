"""
Byte-level file access for event logs, request batches and results.
"""

import os

from ..core.errors import EventStoreError


def read_bytes(path: str) -> bytes:
    """
    Read a whole file.

    Raises:
        FileNotFoundError: If the path does not exist
        EventStoreError: On any other OS error
    """
    try:
        with open(path, "rb") as f:
            return f.read()
    except FileNotFoundError:
        raise
    except OSError as ex:
        raise EventStoreError(str(ex)) from ex


def write_bytes(path: str, data: bytes) -> None:
    """
    Write a whole file, creating parent directories.

    The file is written next to its destination and moved into place, so a
    reader never sees a half-written document.
    """
    tmp_path = f"{path}.tmp"
    try:
        os.makedirs(os.path.dirname(path) or ".", exist_ok=True)
        with open(tmp_path, "wb") as f:
            f.write(data)
            f.flush()
            os.fsync(f.fileno())
        os.replace(tmp_path, path)
    except OSError as ex:
        if os.path.exists(tmp_path):
            try:
                os.remove(tmp_path)
            except OSError:
                pass
        raise EventStoreError(str(ex)) from ex
