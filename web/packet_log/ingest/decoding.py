"""
Payload decoding helpers.

Side-effect-free: turn raw request bytes into rows and pull the leading
timestamp out of a data row. The normalizer decides what to do with them.
"""

from __future__ import annotations

import math
from typing import List, Optional

from ..errors import InvalidEncoding

_BOM = "\ufeff"


def decode_payload(raw: bytes) -> str:
    """Decode as UTF-8, dropping a leading byte-order mark."""
    try:
        text = raw.decode("utf-8")
    except UnicodeDecodeError as e:
        raise InvalidEncoding("CSV must be valid UTF-8") from e
    return text[1:] if text.startswith(_BOM) else text


def split_rows(text: str) -> List[str]:
    """Split into lines (any terminator), ignoring blank ones."""
    return [line for line in text.splitlines() if line.strip()]


def parse_timestamp(row: str) -> Optional[float]:
    """
    Return the first comma-delimited field as a float, or None when it is
    missing, non-numeric (digit-grouping underscores included), or not finite.
    """
    field = row.split(",", 1)[0].strip()
    if not field or "_" in field:
        return None
    try:
        value = float(field)
    except ValueError:
        return None
    if not math.isfinite(value):
        return None
    return value
