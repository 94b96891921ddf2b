from __future__ import annotations

import time
from dataclasses import dataclass, field
from enum import Enum


ROOM_CAPACITY = 4
ROUND_HISTORY_LIMIT = 20
CHAT_HISTORY_LIMIT = 50


def now_ms() -> int:
    return int(time.time() * 1000)


class Role(str, Enum):
    RAJA = "RAJA"
    MANTRI = "MANTRI"
    CHOR = "CHOR"
    SIPAHI = "SIPAHI"


class RoomState(str, Enum):
    LOBBY = "lobby"
    PLAYING = "playing"
    RESULTS = "results"


@dataclass
class Player:
    id: str
    name: str
    score: int = 0

    def to_public(self) -> dict:
        return {"id": self.id, "name": self.name, "score": self.score}


@dataclass
class ChatMessage:
    sender_id: str
    name: str
    message: str
    timestamp: int = field(default_factory=now_ms)

    def to_public(self) -> dict:
        return {
            "senderId": self.sender_id,
            "name": self.name,
            "message": self.message,
            "timestamp": self.timestamp,
        }


@dataclass
class RoundSummary:
    round: int
    # (name, delta) in seat order; names are snapshots, not live references.
    deltas: list[tuple[str, int]] = field(default_factory=list)

    def to_public(self) -> dict:
        return {
            "round": self.round,
            "deltas": [{"name": name, "delta": delta} for name, delta in self.deltas],
        }


@dataclass
class Room:
    code: str
    host_id: str
    state: RoomState = RoomState.LOBBY
    round: int = 0
    players: list[Player] = field(default_factory=list)
    roles: dict[str, Role] = field(default_factory=dict)
    round_history: list[RoundSummary] = field(default_factory=list)
    chat: list[ChatMessage] = field(default_factory=list)
    created_at_ms: int = field(default_factory=now_ms)

    @property
    def is_full(self) -> bool:
        return len(self.players) >= ROOM_CAPACITY

    def get_player(self, player_id: str) -> Player | None:
        for p in self.players:
            if p.id == player_id:
                return p
        return None

    def has_player(self, player_id: str) -> bool:
        return self.get_player(player_id) is not None

    def player_with_role(self, role: Role) -> Player | None:
        for p in self.players:
            if self.roles.get(p.id) == role:
                return p
        return None

    def players_public(self) -> list[dict]:
        return [p.to_public() for p in self.players]

    def public_state(self) -> dict:
        payload = {
            "code": self.code,
            "hostId": self.host_id,
            "state": self.state.value,
            "round": self.round,
            "players": self.players_public(),
            "capacity": ROOM_CAPACITY,
            "roundHistory": [s.to_public() for s in self.round_history],
        }

        # Roles stay hidden while a round is being played.
        if self.state == RoomState.RESULTS:
            payload["roles"] = {pid: role.value for pid, role in self.roles.items()}

        return payload
