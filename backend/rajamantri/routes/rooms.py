from __future__ import annotations

from flask import Blueprint, current_app, jsonify

bp = Blueprint("rooms", __name__)


@bp.get("/rooms/<code>")
def get_room(code: str):
    state = current_app.extensions["rajamantri"].room_state(code)
    if state is None:
        return jsonify({"error": "room_not_found"}), 404
    return jsonify(state)
