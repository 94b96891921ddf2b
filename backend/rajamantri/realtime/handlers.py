from __future__ import annotations

import logging
from typing import Any

from flask import request
from flask_socketio import SocketIO

from .. import events
from .coordinator import SessionCoordinator


logger = logging.getLogger(__name__)


def _field(data: Any, key: str) -> str:
    """Read ``key`` from an object payload; a bare string payload is the value itself."""
    if isinstance(data, str):
        return data.strip()
    if isinstance(data, dict):
        value = data.get(key, "")
        return str(value if value is not None else "").strip()
    return ""


def register_socketio_handlers(socketio: SocketIO, coordinator: SessionCoordinator) -> None:
    @socketio.on("connect")
    def on_connect(auth=None):
        logger.debug("Connected: %s", request.sid)

    @socketio.on(events.CREATE_ROOM)
    def create_room(data):
        coordinator.create_room(request.sid, _field(data, "name"))

    @socketio.on(events.JOIN_ROOM)
    def join_room(data):
        payload = data if isinstance(data, dict) else {}
        coordinator.join_room(request.sid, _field(payload, "name"), _field(payload, "roomCode"))

    @socketio.on(events.LEAVE_ROOM)
    def leave_room(data):
        coordinator.leave_room(request.sid, _field(data, "roomCode"))

    @socketio.on(events.START_GAME)
    def start_game(data):
        coordinator.start_game(request.sid, _field(data, "roomCode"))

    @socketio.on(events.MANTRI_GUESS)
    def mantri_guess(data):
        payload = data if isinstance(data, dict) else {}
        coordinator.mantri_guess(request.sid, _field(payload, "roomCode"), _field(payload, "targetId"))

    @socketio.on(events.NEXT_ROUND)
    def next_round(data):
        coordinator.next_round(request.sid, _field(data, "roomCode"))

    @socketio.on(events.CHAT_MESSAGE)
    def chat_message(data):
        payload = data if isinstance(data, dict) else {}
        coordinator.chat_message(
            request.sid,
            _field(payload, "roomCode"),
            _field(payload, "name"),
            str(payload.get("message") or ""),
        )

    @socketio.on("disconnect")
    def on_disconnect(reason=None):
        logger.debug("Disconnected: %s", request.sid)
        coordinator.disconnect(request.sid)
