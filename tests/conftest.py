from __future__ import annotations

import random
from typing import Any

import pytest

from rajamantri.game.engine import RoundEngine
from rajamantri.game.models import Role
from rajamantri.game.registry import RoomRegistry
from rajamantri.game.roles import RoleAssigner
from rajamantri.realtime.coordinator import SessionCoordinator
from rajamantri.server import create_app


class RecordingChannels:
    """In-memory Channels that records every delivery."""

    def __init__(self):
        self.groups: dict[str, set[str]] = {}
        self.sent: list[tuple[str, str, Any]] = []  # (connection id, event, payload)

    def join_group(self, connection_id: str, code: str) -> None:
        self.groups.setdefault(code, set()).add(connection_id)

    def leave_group(self, connection_id: str, code: str) -> None:
        self.groups.get(code, set()).discard(connection_id)

    def send_to_group(self, code: str, event: str, payload: Any) -> None:
        for cid in sorted(self.groups.get(code, set())):
            self.sent.append((cid, event, payload))

    def send_to(self, connection_id: str, event: str, payload: Any) -> None:
        self.sent.append((connection_id, event, payload))

    def received(self, connection_id: str, event: str | None = None) -> list[Any]:
        return [p for cid, ev, p in self.sent if cid == connection_id and (event is None or ev == event)]

    def last(self, connection_id: str, event: str) -> Any:
        got = self.received(connection_id, event)
        assert got, f"{connection_id} never received {event}"
        return got[-1]

    def clear(self) -> None:
        self.sent.clear()


@pytest.fixture
def channels():
    return RecordingChannels()


@pytest.fixture
def coordinator(channels):
    rng = random.Random(1234)
    return SessionCoordinator(
        channels,
        registry=RoomRegistry(rng=rng),
        engine=RoundEngine(channels, RoleAssigner(rng)),
    )


@pytest.fixture
def full_room(coordinator, channels):
    """A lobby with host p1 and guests p2..p4 seated in that order."""
    room = coordinator.create_room("p1", "host")
    for i, name in enumerate(["ana", "bob", "cy"], start=2):
        coordinator.join_room(f"p{i}", name, room.code)
    channels.clear()
    return room


def seat_with(room, role: Role) -> str:
    return next(pid for pid, r in room.roles.items() if r == role)


@pytest.fixture
def app_and_socketio():
    app, socketio = create_app({"SOCKETIO_ASYNC_MODE": "threading", "TESTING": True})
    return app, socketio
