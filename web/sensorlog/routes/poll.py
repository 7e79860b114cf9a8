"""
Poll routes: the viewer reads packets back in order while capture is live.
"""

from __future__ import annotations

from flask import Blueprint, Response, current_app, jsonify, send_file

from packet_log import PacketStoreError, SessionLog

bp = Blueprint("poll", __name__, url_prefix="/data")

CSV_MIMETYPE = "text/csv; charset=utf-8"


@bp.route("", methods=["GET"])
def poll_packet():
    """
    Return the next unread packet as CSV, or 204 when the session is not
    recording or the viewer has caught up with the device.

    Headers:
      X-Sequence-Index  index of the delivered packet
      X-Buffer-Full     "true" once the session reached its sample cap
    """
    log: SessionLog = current_app.extensions["session_log"]
    try:
        polled = log.poll()
    except PacketStoreError as e:
        current_app.logger.exception("Failed to read packet for poll")
        return jsonify({"success": False, "error": str(e)}), 500

    if polled is None:
        return Response(status=204)

    resp = Response(polled.text, status=200, mimetype=CSV_MIMETYPE)
    resp.headers["X-Sequence-Index"] = str(polled.index)
    resp.headers["X-Buffer-Full"] = "true" if polled.buffer_full else "false"
    return resp


@bp.route("/master", methods=["GET"])
def download_master():
    """Serve the master record (every accepted row, header once)."""
    log: SessionLog = current_app.extensions["session_log"]
    master = log.cfg.master_path.resolve()
    if not master.exists():
        return jsonify({"success": False, "error": "No data recorded"}), 404

    return send_file(
        str(master),
        mimetype=CSV_MIMETYPE,
        as_attachment=True,
        download_name=master.name,
        max_age=0,
    )
