from __future__ import annotations

from typing import Any, Protocol

from flask_socketio import SocketIO


class Channels(Protocol):
    """Addressing primitives the game core sends through.

    A group is keyed by room code; a connection id addresses one client.
    """

    def join_group(self, connection_id: str, code: str) -> None: ...

    def leave_group(self, connection_id: str, code: str) -> None: ...

    def send_to_group(self, code: str, event: str, payload: Any) -> None: ...

    def send_to(self, connection_id: str, event: str, payload: Any) -> None: ...


class SocketIOChannels:
    """Channels backed by Flask-SocketIO rooms.

    Every Socket.IO client is automatically in a room named after its sid,
    so unicast is an emit ``to`` the sid.
    """

    def __init__(self, socketio: SocketIO, namespace: str = "/"):
        self.socketio = socketio
        self.namespace = namespace

    def join_group(self, connection_id: str, code: str) -> None:
        self.socketio.server.enter_room(connection_id, code, namespace=self.namespace)

    def leave_group(self, connection_id: str, code: str) -> None:
        self.socketio.server.leave_room(connection_id, code, namespace=self.namespace)

    def send_to_group(self, code: str, event: str, payload: Any) -> None:
        self.socketio.emit(event, payload, to=code, namespace=self.namespace)

    def send_to(self, connection_id: str, event: str, payload: Any) -> None:
        self.socketio.emit(event, payload, to=connection_id, namespace=self.namespace)
