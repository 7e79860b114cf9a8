"""
Session controller: a two-state machine (Idle <-> Recording).

Owns the session's start index, the accepted-sample counter and the ordering
state used by the ingest dedup policy. It is not thread-safe on its own;
SessionLog serializes every call.
"""

from __future__ import annotations

import enum
import logging
from typing import Optional

from .cursors import CursorPair
from .dto import SessionRange
from .errors import AlreadyRecording, NotRecording

logger = logging.getLogger(__name__)


class SessionStatus(str, enum.Enum):
    IDLE = "idle"
    RECORDING = "recording"


class SessionController:
    def __init__(self, cursors: CursorPair) -> None:
        self._cursors = cursors
        self.status = SessionStatus.IDLE
        self.start_index = cursors.write_cursor
        self.samples = 0
        self.last_accepted_timestamp: Optional[float] = None

    @property
    def active(self) -> bool:
        return self.status is SessionStatus.RECORDING

    # ---------------------------- Transitions -----------------------------

    def start(self) -> int:
        """
        Begin recording at the current write position.

        Returns:
            The session's start index.
        """
        if self.active:
            raise AlreadyRecording()

        self.start_index = self._cursors.write_cursor
        self._cursors.reset(self.start_index)
        self.last_accepted_timestamp = None
        self.samples = 0
        self.status = SessionStatus.RECORDING
        logger.info("Session started at index %d", self.start_index)
        return self.start_index

    def stop(self) -> SessionRange:
        """
        End recording and return the indices it covered. An empty range means
        no data was collected; that is not an error.
        """
        if not self.active:
            raise NotRecording()

        end_index = self._cursors.write_cursor
        self.status = SessionStatus.IDLE
        rng = SessionRange(self.start_index, end_index)
        logger.info("Session stopped: [%d, %d) (%d packets)", rng.start, rng.end, len(rng))
        return rng

    # ------------------------------- Gates --------------------------------

    def gate_ingest(self) -> bool:
        return self.active

    def gate_poll(self) -> bool:
        return self.active
