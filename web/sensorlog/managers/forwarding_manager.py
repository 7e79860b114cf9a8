"""
Forwarding manager.

Runs the end-of-session step: assemble the closed session's packets into one
CSV document, hand it to the inference collaborator, and map the answer.
The work runs on a small worker pool and is handed an already-captured
SessionRange, so it never holds the session log's locks; a new session may
start while the previous one is still being forwarded.

Each forwarding outcome is persisted to disk as a timestamped JSON file under
`log_dir/inference/`, and the latest one is exposed via `snapshot()`.
"""

from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor, TimeoutError as FutureTimeout
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from typing import Dict, Optional
import json
import logging
import threading
import time

from inference import ForwardError, InferenceClient, InferenceResult
from packet_log import SessionRange, assemble
from packet_log.ports import PacketStorePort

# Extra seconds granted on top of the HTTP timeout before the caller gives up.
_WAIT_GRACE_SECONDS = 5.0


@dataclass
class ForwardingManager:
    """
    Attributes:
        logger: App logger.
        log_dir: Root log directory; results land in `log_dir/inference/`.
        store: Packet store the session was recorded into.
        client: Inference client (anything with `submit(text)` and `settings.timeout`).
        max_workers: Size of the forwarding pool.

    State (protected by _lock):
        last_run_at: UNIX timestamp of the last finished run.
        last_range: SessionRange of the last run.
        last_result: Latest mapped result (dict form), or None.
        last_error: Last error message (if any).
        last_results_path: Path to the most recent persisted JSON.
    """
    logger: logging.Logger
    log_dir: Path
    store: PacketStorePort
    client: InferenceClient
    max_workers: int = 2

    _lock: threading.Lock = field(default_factory=threading.Lock, init=False, repr=False)
    _pool: Optional[ThreadPoolExecutor] = field(default=None, init=False, repr=False)

    last_run_at: Optional[float] = None
    last_range: Optional[SessionRange] = None
    last_result: Optional[Dict[str, object]] = None
    last_error: Optional[str] = None
    last_results_path: Optional[Path] = None

    def __post_init__(self) -> None:
        self._pool = ThreadPoolExecutor(
            max_workers=max(1, int(self.max_workers)),
            thread_name_prefix="forward",
        )

    # --------------------------- Private helpers ---------------------------

    def _run(self, rng: SessionRange) -> Optional[InferenceResult]:
        """Worker body: assemble then submit. Returns None if nothing to send."""
        assembled = assemble(self.store, rng)
        if assembled.missing:
            self.logger.warning(
                "Session [%d, %d): %d packet(s) missing, assembled %d",
                rng.start, rng.end, len(assembled.missing), assembled.packets,
            )
        if assembled.is_empty:
            return None
        return self.client.submit(assembled.text)

    def _persist(self, rng: SessionRange, outcome: Dict[str, object]) -> Path:
        """
        Persist a forwarding outcome to `log_dir/inference/forward_YYYYmmdd_HHMMSS_<start>.json`.
        """
        out_dir = self.log_dir / "inference"
        out_dir.mkdir(parents=True, exist_ok=True)

        ts = datetime.now().strftime("%Y%m%d_%H%M%S")
        out_path = out_dir / f"forward_{ts}_{rng.start:08d}.json"

        enriched = {
            "ran_at": datetime.now().isoformat(timespec="seconds"),
            "session": rng.to_dict(),
            **outcome,
        }
        with out_path.open("w", encoding="utf-8") as f:
            json.dump(enriched, f, indent=2, default=str)
        return out_path

    def _record(self, rng: SessionRange, result: Optional[Dict[str, object]], error: Optional[str]) -> None:
        try:
            saved = self._persist(rng, {"result": result, "error": error})
        except OSError:
            self.logger.exception("Failed to persist forwarding outcome")
            saved = None

        with self._lock:
            self.last_run_at = time.time()
            self.last_range = rng
            self.last_result = result
            self.last_error = error
            if saved is not None:
                self.last_results_path = saved

    # ---------------------------- Public methods ---------------------------

    def finalize(self, rng: SessionRange) -> Optional[InferenceResult]:
        """
        Assemble and forward a closed session, blocking the caller (not the
        session log) until the collaborator answers.

        Returns:
            The mapped result, or None when the session collected no data
            (no forwarding call is made in that case).

        Raises:
            ForwardError: bad status, transport failure, or timeout.
        """
        if rng.is_empty:
            self.logger.info("Session [%d, %d) is empty; nothing to forward", rng.start, rng.end)
            return None

        future = self._pool.submit(self._run, rng)
        wait_for = float(self.client.settings.timeout) + _WAIT_GRACE_SECONDS
        try:
            result = future.result(timeout=wait_for)
        except FutureTimeout as e:
            err = ForwardError(f"Inference did not finish within {wait_for:.0f}s")
            self._record(rng, None, str(err))
            raise err from e
        except ForwardError as e:
            self.logger.error("Forwarding session [%d, %d) failed: %s", rng.start, rng.end, e)
            self._record(rng, None, str(e))
            raise

        if result is None:
            self.logger.info("Session [%d, %d) had no readable packets", rng.start, rng.end)
            self._record(rng, None, None)
            return None

        self.logger.info("Session [%d, %d) forwarded: %s result", rng.start, rng.end, result.kind)
        self._record(rng, result.to_dict(), None)
        return result

    def snapshot(self) -> Dict[str, object]:
        """Return a thread-safe snapshot of the latest forwarding state for the API."""
        with self._lock:
            return {
                "last_run_at": self.last_run_at,
                "session": self.last_range.to_dict() if self.last_range else None,
                "error": self.last_error,
                "result": self.last_result,
                "results_file": self.last_results_path.name if self.last_results_path else None,
            }

    def shutdown(self, wait: bool = False) -> None:
        if self._pool is not None:
            self._pool.shutdown(wait=wait)
