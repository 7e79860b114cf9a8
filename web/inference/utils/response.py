import json
import re
from typing import Any

from ..result import InferenceResult, RawResult, StructuredResult

# remove non-printable control chars except \t \n \r
_CONTROL_CHARS_RE = re.compile(r'[\x00-\x08\x0B\x0C\x0E-\x1F]')
_FENCED_JSON_RE = re.compile(r"```json\s*(.*?)\s*```", flags=re.DOTALL | re.IGNORECASE)

NO_JSON = object()


def _try_json(s: str) -> Any:
    try:
        return json.loads(s)
    except (json.JSONDecodeError, TypeError):
        return NO_JSON


def extract_json(text: str) -> Any:
    """
    Return the JSON value carried by `text`, or NO_JSON if there is none.
    Order of attempts:
      1) whole text
      2) fenced ```json ... ``` block (some model servers wrap their output)
    """
    if not isinstance(text, str) or not text.strip():
        return NO_JSON

    s = _CONTROL_CHARS_RE.sub("", text).strip()
    obj = _try_json(s)
    if obj is not NO_JSON:
        return obj

    m = _FENCED_JSON_RE.search(s)
    if m:
        return _try_json(m.group(1))
    return NO_JSON


def to_result(text: str) -> InferenceResult:
    """Map a successful response body to Structured, falling back to Raw."""
    value = extract_json(text)
    if value is NO_JSON:
        return RawResult(text=text)
    return StructuredResult(value=value)
