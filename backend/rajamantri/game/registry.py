from __future__ import annotations

import logging
import random
import string

from .models import Player, Room


logger = logging.getLogger(__name__)

ROOM_CODE_ALPHABET = string.ascii_uppercase + string.digits


def normalize_code(code: str | None) -> str:
    return (code or "").strip().upper()


def generate_room_code(length: int = 5, rng: random.Random | None = None) -> str:
    r = rng or random
    return "".join(r.choice(ROOM_CODE_ALPHABET) for _ in range(length))


class RoomRegistry:
    """Owns every live room, keyed by room code.

    Not locked: callers serialize access (the session coordinator holds its
    lock for the whole of each action).
    """

    def __init__(self, code_length: int = 5, rng: random.Random | None = None):
        self._rooms: dict[str, Room] = {}
        self._code_length = code_length
        self._rng = rng or random.Random()

    def __len__(self) -> int:
        return len(self._rooms)

    def __contains__(self, code: str) -> bool:
        return normalize_code(code) in self._rooms

    def _new_code(self) -> str:
        code = generate_room_code(self._code_length, self._rng)
        while code in self._rooms:
            logger.warning("Room code collision on %s, regenerating", code)
            code = generate_room_code(self._code_length, self._rng)
        return code

    def create(self, host_id: str, host_name: str) -> Room:
        code = self._new_code()
        room = Room(code=code, host_id=host_id)
        room.players.append(Player(id=host_id, name=host_name))
        self._rooms[code] = room

        logger.info("Created room %s for host %s", code, host_id)
        return room

    def get(self, code: str | None) -> Room | None:
        return self._rooms.get(normalize_code(code))

    def delete(self, code: str) -> bool:
        code = normalize_code(code)
        if code in self._rooms:
            del self._rooms[code]
            logger.info("Deleted room %s", code)
            return True
        return False

    def remove_if_empty(self, code: str) -> bool:
        room = self._rooms.get(normalize_code(code))
        if room is None or room.players:
            return False
        return self.delete(code)

    def list_rooms(self) -> list[Room]:
        return list(self._rooms.values())

    def rooms_for(self, player_id: str) -> list[Room]:
        return [r for r in self._rooms.values() if r.has_player(player_id)]
