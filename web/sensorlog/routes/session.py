"""
Session control routes: begin/end a recording window and inspect state.
"""

from __future__ import annotations

from flask import Blueprint, current_app, jsonify

from inference import ForwardError
from packet_log import AlreadyRecording, NotRecording, SessionLog
from sensorlog.managers.forwarding_manager import ForwardingManager
from sensorlog.utils import utcnow_iso

bp = Blueprint("session", __name__, url_prefix="/session")


@bp.route("/start", methods=["POST"])
def start_session():
    """Begin recording at the current write position."""
    log: SessionLog = current_app.extensions["session_log"]
    try:
        start_index = log.start()
    except AlreadyRecording as e:
        return jsonify({"success": False, "error": str(e)}), 409

    current_app.logger.info("Start session at index %d", start_index)
    return jsonify({"success": True, "start_index": start_index, "started_at": utcnow_iso()})


@bp.route("/stop", methods=["POST"])
def stop_session():
    """
    Stop recording, assemble the session and forward it for inference.

    The session is closed before forwarding starts; a forwarding failure
    does not reopen it.
    """
    log: SessionLog = current_app.extensions["session_log"]
    fwd: ForwardingManager = current_app.extensions["forward_mgr"]

    try:
        rng = log.stop()
    except NotRecording as e:
        return jsonify({"success": False, "error": str(e)}), 409

    body = {"success": True, "session": rng.to_dict(), "stopped_at": utcnow_iso()}
    if rng.is_empty:
        return jsonify({**body, "result": None, "message": "No data collected"})

    try:
        result = fwd.finalize(rng)
    except ForwardError as e:
        current_app.logger.error("Inference forwarding failed: %s", e)
        return jsonify({
            "success": False,
            "session": rng.to_dict(),
            "error": f"Inference error: {e}",
            "status": e.status,
        }), 500

    if result is None:
        return jsonify({**body, "result": None, "message": "No data collected"})
    return jsonify({**body, "result": result.to_dict()})


@bp.route("/status", methods=["GET"])
def session_status():
    """Return session/cursor state plus the latest forwarding outcome."""
    log: SessionLog = current_app.extensions["session_log"]
    fwd: ForwardingManager = current_app.extensions["forward_mgr"]
    return jsonify({
        "timestamp": utcnow_iso(),
        "session": log.status(),
        "forwarding": fwd.snapshot(),
    })
