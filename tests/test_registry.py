import pytest

from impostor.engine.room import Room
from impostor.errors import RoomNotFound
from impostor.registry import RoomRegistry


def test_add_and_get():
    registry = RoomRegistry()
    room = registry.add(Room.create(["Ana"]))

    assert registry.get(room.id) is room
    assert room.id in registry
    assert len(registry) == 1


def test_get_unknown_room():
    with pytest.raises(RoomNotFound):
        RoomRegistry().get("nope")


def test_purge_idle_rooms():
    registry = RoomRegistry()
    stale = registry.add(Room.create(["Ana"]))
    fresh = registry.add(Room.create(["Bruno"]))
    stale.last_active = 100.0
    fresh.last_active = 1000.0

    evicted = registry.purge_idle(300, now=1100.0)

    assert evicted == [stale.id]
    assert stale.id not in registry
    assert fresh.id in registry


def test_purge_disabled():
    registry = RoomRegistry()
    room = registry.add(Room.create(["Ana"]))
    room.last_active = 0.0
    assert registry.purge_idle(None, now=1e9) == []
    assert len(registry) == 1

