"""
Settings for the inference collaborator.

Loaded from an optional YAML file, then overlaid with explicit overrides
(the Flask config, which reads the environment). Empty overrides are ignored
so an unset environment variable never clobbers the file.

Example config.yaml:

    inference:
      url: http://127.0.0.1:8000/predict
      field: data
      encoding: json
      timeout: 30
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Dict, Literal, Mapping, Optional

import yaml
from pydantic import BaseModel, ConfigDict, Field


class InferenceSettings(BaseModel):
    model_config = ConfigDict(frozen=True)

    url: str = Field(
        default="http://127.0.0.1:8000/predict",
        min_length=1,
        description="Endpoint receiving the assembled session.",
    )
    field: str = Field(
        default="data",
        min_length=1,
        description="Name of the single field carrying the CSV text.",
    )
    encoding: Literal["json", "form"] = Field(
        default="json",
        description="Send the field as a JSON object or as form data.",
    )
    timeout: float = Field(
        default=30.0,
        gt=0,
        description="Seconds before the call is abandoned as a transport failure.",
    )


def load_config(path: str | Path) -> Dict[str, Any]:
    """Read a YAML mapping; a missing file yields an empty mapping."""
    p = Path(path)
    if not p.exists():
        return {}
    with p.open("r", encoding="utf-8") as f:
        data = yaml.safe_load(f) or {}
    if not isinstance(data, dict):
        raise ValueError(f"Config error: {p} must contain a mapping.")
    return data


def load_settings(
    path: Optional[str | Path] = None,
    overrides: Optional[Mapping[str, Any]] = None,
) -> InferenceSettings:
    raw: Dict[str, Any] = {}
    if path:
        section = load_config(path).get("inference", {})
        if not isinstance(section, dict):
            raise ValueError("Config error: `inference` must be a mapping.")
        raw.update(section)

    for key, value in (overrides or {}).items():
        if value not in (None, ""):
            raw[key] = value

    return InferenceSettings(**raw)
