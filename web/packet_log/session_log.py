"""
SessionLog: the process-wide packet log shared by every request handler.

Composes the packet store, cursor pair, session controller and ingest
normalizer, and owns the locking discipline between them:

  _ingest_lock  serializes ingest end to end (gate, cap, dedup, persist,
                cursor advance). Held across local file writes only.
  _state_lock   short-held, no I/O. Guards the active flag and cursor
                movement seen by pollers.

start()/stop() take both locks (ingest first) so a transition is atomic to
ingest and poll alike. poll() only needs _state_lock and never waits for an
ingest in progress. Nothing here does network I/O.
"""

from __future__ import annotations

import logging
import threading
from typing import Dict, Optional

from .config import SessionLogConfig
from .cursors import CursorPair
from .dto import Acceptance, PolledPacket, SessionRange
from .errors import NotRecording
from .ingest.normalizer import IngestNormalizer
from .ports import PacketStorePort
from .session import SessionController
from .store.packet_store_fs import FilesystemPacketStore

logger = logging.getLogger(__name__)


class SessionLog:
    def __init__(
        self,
        cfg: SessionLogConfig | None = None,
        *,
        store: PacketStorePort | None = None,
    ) -> None:
        self.cfg = cfg or SessionLogConfig()
        self.store: PacketStorePort = store or FilesystemPacketStore.from_config(self.cfg)
        self.cursors = CursorPair()
        self.session = SessionController(self.cursors)
        self._normalizer = IngestNormalizer(store=self.store, cursors=self.cursors, cfg=self.cfg)

        self._ingest_lock = threading.Lock()
        self._state_lock = threading.Lock()

    # ---------------------------- Control plane ----------------------------

    def reset(self) -> None:
        """Clear persisted packets and rewind to index 0. Process start only."""
        with self._ingest_lock, self._state_lock:
            if self.session.active:
                raise RuntimeError("cannot reset the packet log while recording")
            self.store.reset()
            self.cursors.reset(0)
            self.session = SessionController(self.cursors)

    def start(self) -> int:
        """Open a session at the current write position; returns its start index."""
        with self._ingest_lock, self._state_lock:
            return self.session.start()

    def stop(self) -> SessionRange:
        """Close the session and return the indices it recorded."""
        with self._ingest_lock, self._state_lock:
            return self.session.stop()

    # ------------------------------ Data plane -----------------------------

    def ingest(self, raw: bytes) -> Acceptance:
        """
        Accept one packet for the recording session.

        Raises:
            NotRecording, BufferFull, InvalidEncoding, PacketStoreError
        """
        with self._ingest_lock:
            with self._state_lock:
                if not self.session.gate_ingest():
                    raise NotRecording()
            # start/stop need _ingest_lock, so the session cannot change here
            return self._normalizer.ingest(raw, self.session)

    def poll(self) -> Optional[PolledPacket]:
        """
        Deliver the next unread packet, or None when idle or caught up.

        Raises:
            PacketStoreError: the claimed packet could not be read back.
        """
        with self._state_lock:
            index = self.cursors.next_read(self.session.gate_poll())
            if index is None:
                return None
            full = self.session.samples >= self.cfg.max_samples

        # committed indices are immutable, read outside the lock
        packet = self.store.get(index)
        return PolledPacket(packet=packet, buffer_full=full)

    # ------------------------------ Telemetry ------------------------------

    def status(self) -> Dict[str, object]:
        """Thread-safe snapshot of session and cursor state."""
        with self._state_lock:
            write, read = self.cursors.snapshot()
            return {
                "state": self.session.status.value,
                "active": self.session.active,
                "start_index": self.session.start_index,
                "write_cursor": write,
                "read_cursor": read,
                "samples": self.session.samples,
                "max_samples": self.cfg.max_samples,
                "buffer_full": self.session.samples >= self.cfg.max_samples,
                "last_accepted_timestamp": self.session.last_accepted_timestamp,
            }
