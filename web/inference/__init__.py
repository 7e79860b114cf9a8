"""
inference: client side of the downstream inference collaborator.
"""

from __future__ import annotations

from .clients.http_client import InferenceClient
from .errors import ForwardError
from .result import InferenceResult, RawResult, StructuredResult
from .settings import InferenceSettings, load_settings

__all__ = [
    "InferenceClient",
    "ForwardError",
    "InferenceResult",
    "RawResult",
    "StructuredResult",
    "InferenceSettings",
    "load_settings",
]
