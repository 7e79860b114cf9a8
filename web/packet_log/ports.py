"""
Hexagonal interfaces (Ports) for the session packet log.

These define the boundary between the log's domain logic and storage
adapters. Keep them small and implementation-agnostic so they're easy to
fake in tests.
"""

from __future__ import annotations

from typing import Protocol, Sequence

from .dto import Packet


class PacketStorePort(Protocol):
    """
    Append-only, index-addressed storage of packet rows plus one master record.
    Implementations raise PacketStoreError (or PacketNotFound) on failure.
    """

    def put(self, index: int, rows: Sequence[str]) -> None:
        """
        Persist rows under `index`. MUST NOT overwrite an existing index.
        """
        ...

    def get(self, index: int) -> Packet:
        """Return a previously stored packet or raise PacketNotFound."""
        ...

    def discard(self, index: int) -> None:
        """Remove a packet whose ingest failed before it was committed."""
        ...

    def append_master(self, rows: Sequence[str], drop_header: bool) -> None:
        """
        Append rows to the master record, skipping rows[0] when drop_header.
        Every append leaves the record terminated by a newline.
        """
        ...

    def master_has_header(self) -> bool:
        """True once the master record holds its header line."""
        ...

    def reset(self) -> None:
        """Clear all packets and the master record (process start only)."""
        ...
