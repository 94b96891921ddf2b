from __future__ import annotations

import random
import re

from rajamantri.game.models import Player, RoomState
from rajamantri.game.registry import RoomRegistry, generate_room_code, normalize_code


def test_create_seats_host_in_lobby():
    registry = RoomRegistry()
    room = registry.create("sid-1", "host")

    assert re.fullmatch(r"[A-Z0-9]{5}", room.code)
    assert room.host_id == "sid-1"
    assert room.state == RoomState.LOBBY
    assert room.round == 0
    assert [p.id for p in room.players] == ["sid-1"]
    assert registry.get(room.code) is room


def test_code_length_is_configurable():
    room = RoomRegistry(code_length=8).create("a", "x")
    assert len(room.code) == 8


def test_lookup_normalizes_code():
    registry = RoomRegistry()
    room = registry.create("a", "x")
    assert registry.get(f"  {room.code.lower()} ") is room
    assert room.code.lower() in registry
    assert normalize_code(None) == ""


def test_unknown_code_is_not_found():
    assert RoomRegistry().get("NOPE1") is None
    assert RoomRegistry().get(None) is None


def test_collision_regenerates():
    first = generate_room_code(5, random.Random(7))
    registry = RoomRegistry(rng=random.Random(7))
    registry._rooms[first] = object()

    room = registry.create("a", "x")
    assert room.code != first
    assert len(registry) == 2


def test_remove_if_empty_only_deletes_empty_rooms():
    registry = RoomRegistry()
    room = registry.create("a", "x")

    assert registry.remove_if_empty(room.code) is False
    assert registry.get(room.code) is room

    room.players.clear()
    assert registry.remove_if_empty(room.code) is True
    assert registry.get(room.code) is None
    assert registry.remove_if_empty(room.code) is False


def test_rooms_for_player():
    registry = RoomRegistry()
    r1 = registry.create("a", "x")
    r2 = registry.create("b", "y")
    r2.players.append(Player(id="a", name="x"))

    assert {r.code for r in registry.rooms_for("a")} == {r1.code, r2.code}
    assert registry.rooms_for("zzz") == []
    assert len(registry.list_rooms()) == 2
