"""
Ingest route: the sensor device POSTs one CSV packet per request.
"""

from __future__ import annotations

from flask import Blueprint, current_app, jsonify, request

from packet_log import (
    BufferFull,
    InvalidEncoding,
    NotRecording,
    PacketStoreError,
    SessionLog,
)

bp = Blueprint("ingest", __name__, url_prefix="/data")


@bp.route("", methods=["POST"])
def ingest_packet():
    """
    Append one packet to the recording session.

    Body: raw CSV bytes, first line = header, first field of each row = timestamp.

    Responses:
      200  accepted (possibly with zero rows kept after dedup)
      400  body is not UTF-8
      409  no session is recording
      429  sample cap reached; back off (Retry-After)
      500  local persistence failure
    """
    log: SessionLog = current_app.extensions["session_log"]
    raw = request.get_data(cache=False)

    try:
        acc = log.ingest(raw)
    except InvalidEncoding as e:
        current_app.logger.warning("Rejected packet: %s", e)
        return jsonify({"success": False, "error": str(e)}), 400
    except NotRecording as e:
        return jsonify({"success": False, "error": str(e)}), 409
    except BufferFull as e:
        resp = jsonify({"success": False, "error": str(e), "buffer_full": True})
        resp.headers["Retry-After"] = str(current_app.config["RETRY_AFTER_SECONDS"])
        return resp, 429
    except PacketStoreError as e:
        current_app.logger.exception("Failed to store packet")
        return jsonify({"success": False, "error": f"Failed to write data: {e}"}), 500

    return jsonify({"success": True, **acc.to_dict()})
