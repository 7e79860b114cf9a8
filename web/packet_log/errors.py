"""
Error taxonomy for the session packet log.

Every error here is recoverable at the request boundary: callers translate
them into a response and the process keeps running.
"""

from __future__ import annotations


class PacketLogError(Exception):
    """Base class for all packet log errors."""


class InvalidEncoding(PacketLogError):
    """Payload is not decodable as UTF-8 text. No state was mutated."""


class BufferFull(PacketLogError):
    """
    The session reached its sample cap.

    A capacity signal, not a failure: the packet was not stored and the
    caller should back off rather than retry immediately.
    """

    def __init__(self, samples: int, max_samples: int) -> None:
        super().__init__(f"Sample buffer full ({samples}/{max_samples})")
        self.samples = samples
        self.max_samples = max_samples


class SessionStateError(PacketLogError):
    """Operation incompatible with the current session state."""


class AlreadyRecording(SessionStateError):
    def __init__(self) -> None:
        super().__init__("A session is already recording")


class NotRecording(SessionStateError):
    def __init__(self) -> None:
        super().__init__("No session is recording")


class PacketStoreError(PacketLogError):
    """Local persistence failure (disk full, permissions, ...)."""


class PacketNotFound(PacketStoreError):
    def __init__(self, index: int) -> None:
        super().__init__(f"Packet {index} not found")
        self.index = index


class PacketExists(PacketStoreError):
    """A file already occupies the index being written."""

    def __init__(self, index: int) -> None:
        super().__init__(f"Packet {index} already stored")
        self.index = index
