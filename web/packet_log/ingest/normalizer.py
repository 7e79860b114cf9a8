"""
Ingest normalizer: turns one raw POST body into (at most) one stored packet.

Responsibilities:
- Capacity gate (max_samples accepted packets per session).
- UTF-8 validation.
- Header handling: every stored packet keeps its header line; the master
  record keeps only the first header it ever sees.
- Ordering/dedup: rows whose leading timestamp does not strictly exceed the
  last accepted timestamp are dropped. Devices retransmit samples across
  overlapping packets, so monotonicity is the filter.
- Persistence + cursor advance, rolled back as a unit on store failure.

Not thread-safe by itself: SessionLog holds its ingest lock around `ingest`.
"""

from __future__ import annotations

import logging
from typing import List, Optional

from ..config import SessionLogConfig
from ..cursors import CursorPair
from ..dto import Acceptance
from ..errors import BufferFull, PacketExists, PacketStoreError
from ..ports import PacketStorePort
from ..session import SessionController
from .decoding import decode_payload, parse_timestamp, split_rows

logger = logging.getLogger(__name__)


class IngestNormalizer:
    def __init__(
        self,
        *,
        store: PacketStorePort,
        cursors: CursorPair,
        cfg: SessionLogConfig,
    ) -> None:
        self._store = store
        self._cursors = cursors
        self._max_samples = cfg.max_samples

    def ingest(self, raw: bytes, session: SessionController) -> Acceptance:
        """
        Validate, filter, and persist one packet for the recording session.

        Raises:
            BufferFull: the session already holds max_samples packets.
            InvalidEncoding: the payload is not UTF-8.
            PacketStoreError: persistence failed; nothing was committed.
        """
        if session.samples >= self._max_samples:
            raise BufferFull(session.samples, self._max_samples)

        lines = split_rows(decode_payload(raw))
        if not lines:
            return Acceptance(index=None, accepted=0, dropped=0, buffer_full=False)

        header, data = lines[0], lines[1:]
        accepted, last_ts = self._filter_rows(data, session.last_accepted_timestamp)
        dropped = len(data) - len(accepted)

        if not accepted:
            logger.debug("Packet rejected: all %d rows at or before %s", dropped, last_ts)
            return Acceptance(index=None, accepted=0, dropped=dropped, buffer_full=False)

        rows = [header, *accepted]
        index = self._persist(rows)

        session.last_accepted_timestamp = last_ts
        session.samples += 1
        full = session.samples >= self._max_samples
        logger.debug(
            "Packet %d stored: %d rows accepted, %d dropped (samples=%d/%d)",
            index, len(accepted), dropped, session.samples, self._max_samples,
        )
        if full:
            logger.warning("Session reached sample cap (%d)", self._max_samples)
        return Acceptance(index=index, accepted=len(accepted), dropped=dropped, buffer_full=full)

    # --------------------------- Private helpers ---------------------------

    @staticmethod
    def _filter_rows(rows: List[str], last_ts: Optional[float]) -> tuple[List[str], Optional[float]]:
        """Apply the ordering policy; returns (kept rows, new last timestamp)."""
        kept: List[str] = []
        for row in rows:
            ts = parse_timestamp(row)
            if ts is None:
                kept.append(row)
                continue
            if last_ts is not None and ts <= last_ts:
                continue
            kept.append(row)
            last_ts = ts
        return kept, last_ts

    def _persist(self, rows: List[str]) -> int:
        # ingest is serialized, so the current write position is ours to use
        index = self._cursors.write_cursor
        drop_header = self._store.master_has_header()

        try:
            self._store.put(index, rows)
        except PacketExists:
            # indices at the write cursor are unclaimed; a file there is left
            # over from a rollback whose discard failed
            logger.warning("Replacing orphaned packet file at index %d", index)
            self._store.discard(index)
            self._store.put(index, rows)

        try:
            self._store.append_master(rows, drop_header=drop_header)
        except PacketStoreError:
            try:
                self._store.discard(index)
            except PacketStoreError:
                logger.exception("Rollback could not discard packet %d", index)
            raise

        claimed = self._cursors.next_write()
        if claimed != index:
            raise RuntimeError(f"Write cursor moved during ingest: claimed {claimed}, wrote {index}")
        return index
