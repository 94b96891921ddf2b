from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from .. import events
from .errors import InvalidState, InvalidTarget, NotEnoughPlayers, NotMantri
from .models import ROOM_CAPACITY, ROUND_HISTORY_LIMIT, Role, Room, RoomState, RoundSummary
from .roles import RoleAssigner

if TYPE_CHECKING:
    from ..realtime.channels import Channels


logger = logging.getLogger(__name__)

RAJA_POINTS = 1000
SIPAHI_POINTS = 250
GUESS_POINTS = 500


def score_round(roles: dict[str, Role], mantri_correct: bool) -> dict[str, int]:
    """Per-player delta for one round. Prior scores play no part."""
    deltas: dict[str, int] = {}
    for player_id, role in roles.items():
        if role == Role.RAJA:
            deltas[player_id] = RAJA_POINTS
        elif role == Role.SIPAHI:
            deltas[player_id] = SIPAHI_POINTS
        elif role == Role.MANTRI:
            deltas[player_id] = GUESS_POINTS if mantri_correct else 0
        elif role == Role.CHOR:
            deltas[player_id] = 0 if mantri_correct else GUESS_POINTS
        else:  # pragma: no cover
            raise ValueError(f"unknown role {role!r}")
    return deltas


class RoundEngine:
    """Moves a room through lobby -> playing -> results -> playing ..."""

    def __init__(self, channels: Channels, assigner: RoleAssigner | None = None):
        self.channels = channels
        self.assigner = assigner or RoleAssigner()

    def start_round(self, room: Room) -> None:
        if room.state == RoomState.PLAYING:
            raise InvalidState("A round is already in progress.")
        elif room.state not in (RoomState.LOBBY, RoomState.RESULTS):  # pragma: no cover
            raise InvalidState()

        if len(room.players) != ROOM_CAPACITY:
            raise NotEnoughPlayers()

        roles = self.assigner.assign(room.players)

        room.round += 1
        room.roles = roles
        room.state = RoomState.PLAYING

        # Each player learns only their own role.
        for p in room.players:
            self.channels.send_to(p.id, events.YOUR_ROLE, {"role": roles[p.id].value})

        raja = room.player_with_role(Role.RAJA)
        mantri = room.player_with_role(Role.MANTRI)
        self.channels.send_to_group(
            room.code,
            events.PUBLIC_REVEAL,
            {
                "round": room.round,
                "raja": raja.name,
                "rajaId": raja.id,
                "mantri": mantri.name,
                "mantriId": mantri.id,
            },
        )
        logger.info("Room %s started round %d", room.code, room.round)

    def next_round(self, room: Room) -> bool:
        if room.state != RoomState.RESULTS:
            return False
        self.start_round(room)
        return True

    def resolve_guess(self, room: Room, guesser_id: str, target_id: str) -> RoundSummary | None:
        """Score the Mantri's guess. Returns None when no round is waiting for one."""
        if room.state != RoomState.PLAYING:
            return None

        if room.roles.get(guesser_id) != Role.MANTRI:
            raise NotMantri()
        if target_id == guesser_id or not room.has_player(target_id):
            raise InvalidTarget()

        chor = room.player_with_role(Role.CHOR)
        mantri_correct = target_id == chor.id
        deltas = score_round(room.roles, mantri_correct)

        for p in room.players:
            p.score += deltas[p.id]

        summary = RoundSummary(round=room.round, deltas=[(p.name, deltas[p.id]) for p in room.players])
        room.round_history.append(summary)
        if len(room.round_history) > ROUND_HISTORY_LIMIT:
            room.round_history = room.round_history[-ROUND_HISTORY_LIMIT:]

        room.state = RoomState.RESULTS

        self.channels.send_to_group(
            room.code,
            events.ROUND_RESULT,
            {
                "round": room.round,
                "roles": {pid: role.value for pid, role in room.roles.items()},
                "players": room.players_public(),
                "roundScores": [
                    {"id": p.id, "name": p.name, "delta": deltas[p.id]} for p in room.players
                ],
                "roundHistory": [s.to_public() for s in room.round_history],
                "chorId": chor.id,
                "targetId": target_id,
                "mantriCorrect": mantri_correct,
            },
        )
        logger.info(
            "Room %s resolved round %d (mantri %s)",
            room.code,
            room.round,
            "correct" if mantri_correct else "wrong",
        )
        return summary

    def reset_to_lobby(self, room: Room) -> None:
        if room.state == RoomState.PLAYING:
            logger.info("Room %s back to lobby, round %d abandoned", room.code, room.round)
        room.state = RoomState.LOBBY
        room.roles = {}
