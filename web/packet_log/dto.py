"""
Data Transfer Objects (DTOs) used across the session packet log.

These are intentionally small, immutable, and independent of any I/O or
web-framework libraries.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator, Optional, Tuple


# === Stored packet ===
@dataclass(frozen=True)
class Packet:
    """One accepted ingest call, as persisted by the packet store."""
    sequence_index: int
    rows: Tuple[str, ...]     # raw text lines, no terminators
    has_header: bool          # rows[0] is the column header

    def text(self) -> str:
        """Reconstructed CSV text, one terminator per row."""
        return "".join(f"{row}\n" for row in self.rows)

    def data_rows(self) -> Tuple[str, ...]:
        return self.rows[1:] if self.has_header else self.rows


# === Session boundaries ===
@dataclass(frozen=True)
class SessionRange:
    """Half-open range [start, end) of sequence indices recorded by a session."""
    start: int
    end: int

    def __post_init__(self) -> None:
        if self.start < 0 or self.end < self.start:
            raise ValueError(f"invalid session range [{self.start}, {self.end})")

    def __len__(self) -> int:
        return self.end - self.start

    def __iter__(self) -> Iterator[int]:
        return iter(range(self.start, self.end))

    @property
    def is_empty(self) -> bool:
        return self.start == self.end

    def to_dict(self) -> dict:
        return {"start_index": self.start, "end_index": self.end, "packets": len(self)}


# === Ingest outcome ===
@dataclass(frozen=True)
class Acceptance:
    index: Optional[int]      # None when every data row was dropped
    accepted: int             # data rows kept
    dropped: int              # data rows rejected by the ordering policy
    buffer_full: bool         # session reached max_samples with this packet

    def to_dict(self) -> dict:
        return {
            "index": self.index,
            "accepted": self.accepted,
            "dropped": self.dropped,
            "buffer_full": self.buffer_full,
        }


# === Poll outcome ===
@dataclass(frozen=True)
class PolledPacket:
    packet: Packet
    buffer_full: bool

    @property
    def index(self) -> int:
        return self.packet.sequence_index

    @property
    def text(self) -> str:
        return self.packet.text()


# === Aggregation outcome ===
@dataclass(frozen=True)
class AssembledSession:
    range: SessionRange
    text: str                 # header once, newline-terminated (or "")
    packets: int              # packets found and concatenated
    missing: Tuple[int, ...]  # indices skipped because they could not be read

    @property
    def is_empty(self) -> bool:
        return not self.text
