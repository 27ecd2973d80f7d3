import itertools
import re

import pytest

from models import RoomStatus, Symbol
from core.room_registry import RoomRegistry
from core.exceptions import RoomCodeUnavailable


def test_create_room(registry):
    room = registry.create("a", "Alice")

    assert re.fullmatch(r"[A-Z0-9]{6}", room.code)
    assert registry.get(room.code) is room
    assert room.code in registry
    assert len(registry) == 1
    assert [(p.connection_id, p.name, p.symbol) for p in room.players] == [("a", "Alice", Symbol.X)]
    assert room.status == RoomStatus.WAITING
    assert not room.game_active
    assert room.board == [""] * 9
    assert room.current_player == Symbol.X
    assert room.winner is None


def test_create_binds_connection(registry):
    room = registry.create("a", "Alice")

    assert registry.codes_for("a") == [room.code]
    assert registry.current_room_code("a") == room.code


def test_code_collision_regenerates():
    codes = iter(["AAAAAA", "AAAAAA", "BBBBBB"])
    registry = RoomRegistry(code_factory=lambda length: next(codes))

    first = registry.create("a", "Alice")
    second = registry.create("b", "Bob")

    assert first.code == "AAAAAA"
    assert second.code == "BBBBBB"
    assert registry.get("AAAAAA") is first


def test_code_exhaustion_raises():
    registry = RoomRegistry(max_code_attempts=3, code_factory=lambda length: "AAAAAA")
    registry.create("a", "Alice")

    with pytest.raises(RoomCodeUnavailable):
        registry.create("b", "Bob")

    assert len(registry) == 1
    assert registry.codes_for("b") == []


def test_remove_clears_index_and_lock(registry):
    room = registry.create("a", "Alice")
    registry.bind("b", room.code)
    registry.locks.lock_for(room.code)

    assert registry.remove(room.code) is room
    assert registry.get(room.code) is None
    assert registry.codes_for("a") == []
    assert registry.codes_for("b") == []
    assert len(registry.locks) == 0


def test_remove_missing_room(registry):
    assert registry.remove("ZZZZZZ") is None


def test_current_room_is_first_live_room():
    counter = itertools.count()
    registry = RoomRegistry(code_factory=lambda length: f"ROOM{next(counter):02d}")
    first = registry.create("a", "Alice")
    second = registry.create("a", "Alice")

    assert registry.codes_for("a") == [first.code, second.code]
    assert registry.current_room_code("a") == first.code

    registry.remove(first.code)
    assert registry.current_room_code("a") == second.code


def test_bind_is_idempotent(registry):
    registry.bind("a", "AAAAAA")
    registry.bind("a", "AAAAAA")

    assert registry.codes_for("a") == ["AAAAAA"]

    registry.unbind("a", "AAAAAA")
    assert registry.codes_for("a") == []


def test_rooms_lists_live_rooms(registry):
    first = registry.create("a", "Alice")
    second = registry.create("b", "Bob")

    assert {room.code for room in registry.rooms()} == {first.code, second.code}
