# clients/http_client.py
import logging
from typing import Optional

import requests

from ..errors import ForwardError
from ..result import InferenceResult
from ..settings import InferenceSettings
from ..utils.response import to_result

logger = logging.getLogger(__name__)


class InferenceClient:
    """
    Single-call HTTP client for the inference collaborator.

    The assembled CSV goes out under one named field; the answer comes back
    as JSON (StructuredResult) or plain text (RawResult). Anything else is a
    ForwardError. No retries: a failed session is reported, not replayed.
    """

    def __init__(
        self,
        settings: Optional[InferenceSettings] = None,
        session: Optional[requests.Session] = None,
    ):
        self.settings = settings or InferenceSettings()
        self.http = session or requests.Session()

    def submit(self, text: str) -> InferenceResult:
        s = self.settings
        payload = {s.field: text}
        kwargs = {"json": payload} if s.encoding == "json" else {"data": payload}

        logger.info("Forwarding %d bytes to %s", len(text), s.url)
        try:
            resp = self.http.post(s.url, timeout=s.timeout, **kwargs)
        except requests.Timeout as e:
            raise ForwardError(f"Inference request timed out after {s.timeout}s") from e
        except requests.RequestException as e:
            raise ForwardError(f"Inference request failed: {e}") from e

        if not 200 <= resp.status_code < 300:
            body = (resp.text or "").strip()
            description = body[:500] or resp.reason or "Inference service error"
            raise ForwardError(description, status=resp.status_code)

        return to_result(resp.text)

    def close(self) -> None:
        self.http.close()
