"""
Write/read cursor pair.

write_cursor is the next sequence index to assign on ingest; read_cursor is
the next index to hand to a poller. read_cursor never passes write_cursor.
"""

from __future__ import annotations

import threading
from typing import Optional, Tuple


class CursorPair:
    """Two monotonically increasing positions guarded by one short-held lock."""

    def __init__(self, start: int = 0) -> None:
        if start < 0:
            raise ValueError("cursor start must be >= 0")
        self._write = start
        self._read = start
        self._lock = threading.Lock()

    @property
    def write_cursor(self) -> int:
        with self._lock:
            return self._write

    @property
    def read_cursor(self) -> int:
        with self._lock:
            return self._read

    def snapshot(self) -> Tuple[int, int]:
        """Return (write_cursor, read_cursor) read together."""
        with self._lock:
            return self._write, self._read

    def next_write(self) -> int:
        """Claim the current write index and advance past it."""
        with self._lock:
            index = self._write
            self._write += 1
            return index

    def next_read(self, active: bool = True) -> Optional[int]:
        """
        Claim the next index to deliver, or None when the session is inactive
        or the reader has caught up with the writer.
        """
        with self._lock:
            if not active or self._read >= self._write:
                return None
            index = self._read
            self._read += 1
            return index

    def reset(self, to: int) -> None:
        if to < 0:
            raise ValueError("cursor position must be >= 0")
        with self._lock:
            self._write = to
            self._read = to
