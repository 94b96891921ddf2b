from __future__ import annotations

import logging
from functools import wraps
from threading import RLock

from .. import events
from ..game.chat import ChatLog
from ..game.engine import RoundEngine
from ..game.errors import (
    AlreadyInRoom,
    GameError,
    NameRequired,
    NotHost,
    NotInRoom,
    RoomAlreadyStarted,
    RoomCodeRequired,
    RoomFull,
    RoomNotFound,
)
from ..game.models import ROOM_CAPACITY, Player, Room, RoomState
from ..game.registry import RoomRegistry, normalize_code
from .channels import Channels


logger = logging.getLogger(__name__)


def clean_name(name: str | None, max_length: int) -> str:
    n = "".join(ch for ch in (name or "") if ord(ch) >= 32).strip()
    return n[:max_length].strip()


def _action(fn):
    """Run one inbound action start to finish under the coordinator lock.

    Rejections are reported to the sender only and never escape.
    """

    @wraps(fn)
    def wrapper(self: SessionCoordinator, connection_id: str, *args, **kwargs):
        with self._lock:
            try:
                return fn(self, connection_id, *args, **kwargs)
            except GameError as exc:
                logger.warning("%s rejected for %s: %s", fn.__name__, connection_id, exc.message)
                self.channels.send_to(connection_id, events.ROOM_ERROR, {"message": exc.message})
                return None

    return wrapper


class SessionCoordinator:
    def __init__(
        self,
        channels: Channels,
        registry: RoomRegistry | None = None,
        engine: RoundEngine | None = None,
        chat_log: ChatLog | None = None,
        name_max_length: int = 20,
    ):
        self._lock = RLock()
        self.channels = channels
        self.registry = registry or RoomRegistry()
        self.engine = engine or RoundEngine(channels)
        self.chat_log = chat_log or ChatLog(name_max_length=name_max_length)
        self.name_max_length = name_max_length

    # ---- broadcasts ----

    def _broadcast_players(self, room: Room) -> None:
        self.channels.send_to_group(
            room.code,
            events.PLAYER_LIST,
            {"players": room.players_public(), "hostId": room.host_id},
        )
        self.channels.send_to_group(
            room.code,
            events.WAITING_STATUS,
            {"count": len(room.players), "capacity": ROOM_CAPACITY},
        )

    def _send_history(self, room: Room, connection_id: str) -> None:
        self.channels.send_to(
            connection_id,
            events.CHAT_HISTORY,
            {"messages": [m.to_public() for m in self.chat_log.history(room)]},
        )
        self.channels.send_to(
            connection_id,
            events.ROUND_HISTORY,
            {"summaries": [s.to_public() for s in room.round_history]},
        )

    # ---- actions ----

    @_action
    def create_room(self, connection_id: str, name: str | None) -> Room:
        name = clean_name(name, self.name_max_length)
        if not name:
            raise NameRequired()

        room = self.registry.create(connection_id, name)
        self.channels.join_group(connection_id, room.code)
        self.channels.send_to(connection_id, events.ROOM_JOINED, {"roomCode": room.code, "host": True})
        self._broadcast_players(room)
        return room

    @_action
    def join_room(self, connection_id: str, name: str | None, code: str | None) -> Room:
        name = clean_name(name, self.name_max_length)
        code = normalize_code(code)
        if not name:
            raise NameRequired()
        if not code:
            raise RoomCodeRequired()

        room = self.registry.get(code)
        if room is None:
            raise RoomNotFound()
        if room.has_player(connection_id):
            raise AlreadyInRoom()
        if room.state != RoomState.LOBBY:
            raise RoomAlreadyStarted()
        if room.is_full:
            raise RoomFull()

        room.players.append(Player(id=connection_id, name=name))
        self.channels.join_group(connection_id, room.code)
        logger.info("%s joined room %s (%d/%d)", connection_id, room.code, len(room.players), ROOM_CAPACITY)

        self.channels.send_to(connection_id, events.ROOM_JOINED, {"roomCode": room.code, "host": False})
        self._send_history(room, connection_id)
        self._broadcast_players(room)
        return room

    @_action
    def start_game(self, connection_id: str, code: str | None) -> None:
        room = self.registry.get(code)
        if room is None:
            return
        if connection_id != room.host_id:
            raise NotHost()
        self.engine.start_round(room)

    @_action
    def mantri_guess(self, connection_id: str, code: str | None, target_id: str | None) -> None:
        room = self.registry.get(code)
        if room is None or room.state != RoomState.PLAYING:
            return
        self.engine.resolve_guess(room, connection_id, str(target_id or ""))

    @_action
    def next_round(self, connection_id: str, code: str | None) -> None:
        room = self.registry.get(code)
        if room is None or room.state != RoomState.RESULTS:
            return
        if not room.has_player(connection_id):
            raise NotInRoom()
        self.engine.next_round(room)

    @_action
    def chat_message(self, connection_id: str, code: str | None, name: str | None, message: str | None) -> None:
        # Lines are signed with the sender's seated name; the name in the payload is ignored.
        room = self.registry.get(code)
        if room is None:
            return
        player = room.get_player(connection_id)
        if player is None:
            raise NotInRoom()

        msg = self.chat_log.append(room, connection_id, player.name, message or "")
        if msg is None:
            return
        self.channels.send_to_group(room.code, events.CHAT_MESSAGE, {"message": msg.to_public()})

    @_action
    def leave_room(self, connection_id: str, code: str | None) -> None:
        room = self.registry.get(code)
        if room is None or not room.has_player(connection_id):
            return
        self.channels.leave_group(connection_id, room.code)
        self._remove_player(room, connection_id)

    @_action
    def disconnect(self, connection_id: str) -> None:
        for room in self.registry.rooms_for(connection_id):
            self._remove_player(room, connection_id)

    def _remove_player(self, room: Room, connection_id: str) -> None:
        room.players = [p for p in room.players if p.id != connection_id]
        logger.info("%s left room %s (%d left)", connection_id, room.code, len(room.players))

        if room.host_id == connection_id and room.players:
            room.host_id = room.players[0].id
            logger.info("Room %s host promoted to %s", room.code, room.host_id)

        # Whatever was in progress is abandoned.
        self.engine.reset_to_lobby(room)

        if not room.players:
            self.registry.remove_if_empty(room.code)
            return

        self._broadcast_players(room)

    def room_state(self, code: str | None) -> dict | None:
        with self._lock:
            room = self.registry.get(code)
            if room is None:
                return None
            return room.public_state()

    def room_count(self) -> int:
        with self._lock:
            return len(self.registry)
