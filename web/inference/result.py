"""
Inference results as a tagged variant.

The collaborator answers with JSON or with plain text; both are successes.
StructuredResult carries the parsed value, RawResult the text as received.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Literal, Union


@dataclass(frozen=True)
class StructuredResult:
    value: Any
    kind: Literal["structured"] = "structured"

    def to_dict(self) -> Dict[str, Any]:
        return {"kind": self.kind, "value": self.value}


@dataclass(frozen=True)
class RawResult:
    text: str
    kind: Literal["raw"] = "raw"

    def to_dict(self) -> Dict[str, Any]:
        return {"kind": self.kind, "text": self.text}


InferenceResult = Union[StructuredResult, RawResult]
