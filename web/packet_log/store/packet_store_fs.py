"""
Filesystem-backed PacketStore adapter.

Layout under the configured data directory:
  <data_dir>/packets/<index:08d>.csv   one file per accepted packet
  <data_dir>/master.csv                concatenation of every accepted packet

Packet files always start with the packet's header line, so each one is a
self-describing CSV document. Files are created with exclusive mode: a
sequence index is written exactly once and never rewritten in place.
"""

from __future__ import annotations

import logging
import os
import shutil
from pathlib import Path
from typing import Sequence

from ..config import SessionLogConfig
from ..dto import Packet
from ..errors import PacketExists, PacketNotFound, PacketStoreError
from ..ports import PacketStorePort

logger = logging.getLogger(__name__)

PACKET_SUFFIX = ".csv"


class FilesystemPacketStore(PacketStorePort):
    """
    Store packets as individual CSV files plus one append-only master file.

    Parameters
    ----------
    packet_dir : str | os.PathLike
        Directory holding one file per sequence index.
    master_path : str | os.PathLike
        Path of the concatenated master record.
    """

    def __init__(self, packet_dir: str | os.PathLike, master_path: str | os.PathLike) -> None:
        self.packet_dir = Path(packet_dir)
        self.master_path = Path(master_path)

    @classmethod
    def from_config(cls, cfg: SessionLogConfig) -> "FilesystemPacketStore":
        return cls(cfg.packet_dir, cfg.master_path)

    # --- packets ---

    def path_for(self, index: int) -> Path:
        return self.packet_dir / f"{index:08d}{PACKET_SUFFIX}"

    def put(self, index: int, rows: Sequence[str]) -> None:
        path = self.path_for(index)
        try:
            self.packet_dir.mkdir(parents=True, exist_ok=True)
            with path.open("x", encoding="utf-8", newline="") as f:
                f.write(_join_rows(rows))
        except FileExistsError as e:
            raise PacketExists(index) from e
        except OSError as e:
            raise PacketStoreError(f"Failed to write packet {index}: {e}") from e

    def get(self, index: int) -> Packet:
        path = self.path_for(index)
        try:
            text = path.read_text(encoding="utf-8")
        except FileNotFoundError as e:
            raise PacketNotFound(index) from e
        except (OSError, UnicodeDecodeError) as e:
            raise PacketStoreError(f"Failed to read packet {index}: {e}") from e

        rows = tuple(text.splitlines())
        return Packet(sequence_index=index, rows=rows, has_header=bool(rows))

    def discard(self, index: int) -> None:
        try:
            self.path_for(index).unlink()
        except FileNotFoundError:
            pass
        except OSError as e:
            raise PacketStoreError(f"Failed to discard packet {index}: {e}") from e

    # --- master record ---

    def append_master(self, rows: Sequence[str], drop_header: bool) -> None:
        body = rows[1:] if drop_header else rows
        if not body:
            return
        size = None
        try:
            self.master_path.parent.mkdir(parents=True, exist_ok=True)
            size = self._master_size()
            with self.master_path.open("a", encoding="utf-8", newline="") as f:
                f.write(_join_rows(body))
        except OSError as e:
            if size is not None:
                self._truncate_master(size)
            raise PacketStoreError(f"Failed to append master record: {e}") from e

    def master_has_header(self) -> bool:
        try:
            return self.master_path.stat().st_size > 0
        except FileNotFoundError:
            return False
        except OSError as e:
            raise PacketStoreError(f"Failed to inspect master record: {e}") from e

    def _master_size(self) -> int:
        try:
            return self.master_path.stat().st_size
        except FileNotFoundError:
            return 0

    def _truncate_master(self, size: int) -> None:
        # drop whatever a failed append left behind
        try:
            os.truncate(self.master_path, size)
        except OSError:
            logger.exception("Could not truncate master record back to %d bytes", size)

    def read_master(self) -> str:
        try:
            return self.master_path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return ""
        except OSError as e:
            raise PacketStoreError(f"Failed to read master record: {e}") from e

    # --- lifecycle ---

    def reset(self) -> None:
        try:
            if self.packet_dir.exists():
                shutil.rmtree(self.packet_dir)
            self.packet_dir.mkdir(parents=True, exist_ok=True)
            if self.master_path.exists():
                self.master_path.unlink()
        except OSError as e:
            raise PacketStoreError(f"Failed to reset packet store: {e}") from e
        logger.info("Packet store reset: %s", self.packet_dir)


# === Helpers ===


def _join_rows(rows: Sequence[str]) -> str:
    # one terminator per row, so concatenated appends never merge two rows
    return "".join(f"{row}\n" for row in rows)
