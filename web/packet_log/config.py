"""
Configuration schema for the session packet log.

Keep this lean: only the knobs the log itself needs. Web-facing settings
(upload limits, logging, inference endpoint) live with the Flask app.
"""

from __future__ import annotations

from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field


class SessionLogConfig(BaseModel):
    """
    Centralized, validated configuration for one SessionLog instance.
    """

    model_config = ConfigDict(frozen=True)  # safe to share across threads

    # === Storage ===
    data_dir: Path = Field(
        default=Path("data"),
        description="Root directory holding packet files and the master record.",
    )
    packet_dir_name: str = Field(
        default="packets",
        min_length=1,
        description="Subdirectory (under data_dir) with one file per sequence index.",
    )
    master_file_name: str = Field(
        default="master.csv",
        min_length=1,
        description="File name (under data_dir) of the concatenated master record.",
    )

    # === Capacity ===
    max_samples: int = Field(
        default=1000,
        ge=1,
        description="Accepted packets per session before ingest answers BufferFull.",
    )

    @property
    def packet_dir(self) -> Path:
        return Path(self.data_dir) / self.packet_dir_name

    @property
    def master_path(self) -> Path:
        return Path(self.data_dir) / self.master_file_name
