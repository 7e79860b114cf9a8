"""
packet_log: Session packet log for streamed sensor CSV batches.

Public API (stable):
- SessionLogConfig         (configuration)
- SessionLog               (facade: ingest / poll / start / stop)
- FilesystemPacketStore    (filesystem-backed packet store)
- PacketStorePort          (storage adapter interface)
- CursorPair, SessionController, IngestNormalizer
- assemble                 (session reconstruction for forwarding)
- DTOs: Packet, SessionRange, Acceptance, PolledPacket, AssembledSession
- Errors: PacketLogError and subclasses

The package has no web-framework dependencies so the Flask layer (and tests)
can wire it without depending on internals.
"""

from __future__ import annotations

# Configuration
from .config import SessionLogConfig

# Ports
from .ports import PacketStorePort

# Adapters
from .store.packet_store_fs import FilesystemPacketStore

# Components
from .cursors import CursorPair
from .session import SessionController, SessionStatus
from .ingest.normalizer import IngestNormalizer
from .aggregate.assembler import assemble
from .session_log import SessionLog

# DTOs
from .dto import (
    Acceptance,
    AssembledSession,
    Packet,
    PolledPacket,
    SessionRange,
)

# Errors
from .errors import (
    AlreadyRecording,
    BufferFull,
    InvalidEncoding,
    NotRecording,
    PacketLogError,
    PacketExists,
    PacketNotFound,
    PacketStoreError,
    SessionStateError,
)

__all__ = [
    "SessionLogConfig",
    "PacketStorePort",
    "FilesystemPacketStore",
    "CursorPair",
    "SessionController",
    "SessionStatus",
    "IngestNormalizer",
    "assemble",
    "SessionLog",
    "Acceptance",
    "AssembledSession",
    "Packet",
    "PolledPacket",
    "SessionRange",
    "AlreadyRecording",
    "BufferFull",
    "InvalidEncoding",
    "NotRecording",
    "PacketLogError",
    "PacketExists",
    "PacketNotFound",
    "PacketStoreError",
    "SessionStateError",
]
