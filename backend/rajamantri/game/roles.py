from __future__ import annotations

import random
from typing import Sequence

from .models import ROOM_CAPACITY, Player, Role


ROLE_POOL: tuple[Role, ...] = (Role.RAJA, Role.MANTRI, Role.CHOR, Role.SIPAHI)


class RoleAssigner:
    """Deals the four roles over the four seats, fresh every round."""

    def __init__(self, rng: random.Random | None = None):
        self._rng = rng or random.Random()

    def assign(self, players: Sequence[Player]) -> dict[str, Role]:
        if len(players) != ROOM_CAPACITY:
            raise ValueError(f"exactly {ROOM_CAPACITY} players are needed, got {len(players)}")

        pool = list(ROLE_POOL)
        # random.shuffle is Fisher-Yates: every permutation is equally likely.
        self._rng.shuffle(pool)
        return {p.id: role for p, role in zip(players, pool)}
