"""
Session assembly: rebuild one CSV document from a closed session's packets.

Best-effort by design of the forwarding step: a packet that cannot be read is
skipped and reported in `missing`, never fatal. The first packet found keeps
its header; every later packet loses its first line, so the output carries
exactly one header no matter how the master record was built.
"""

from __future__ import annotations

import logging
from typing import List

from ..dto import AssembledSession, SessionRange
from ..errors import PacketStoreError
from ..ports import PacketStorePort

logger = logging.getLogger(__name__)


def assemble(store: PacketStorePort, rng: SessionRange) -> AssembledSession:
    """Concatenate packets [rng.start, rng.end) in index order."""
    chunks: List[str] = []
    missing: List[int] = []
    found = 0

    for index in rng:
        try:
            packet = store.get(index)
        except PacketStoreError as e:
            logger.warning("Skipping packet %d during assembly: %s", index, e)
            missing.append(index)
            continue

        rows = packet.rows if found == 0 else packet.data_rows()
        found += 1
        chunks.extend(f"{row}\n" for row in rows)

    return AssembledSession(
        range=rng,
        text="".join(chunks),
        packets=found,
        missing=tuple(missing),
    )
