"""In-memory store of rooms."""

import logging
import time
from typing import Optional

from .engine.room import Room
from .errors import RoomNotFound

logger = logging.getLogger(__name__)


class RoomRegistry:
    """Owns the mapping from room id to room.

    Pure storage: no game rules live here. Rooms are evicted only by
    `purge_idle`.
    """

    def __init__(self):
        self._rooms: dict[str, Room] = {}

    def __contains__(self, room_id: str) -> bool:
        return room_id in self._rooms

    def __len__(self) -> int:
        return len(self._rooms)

    def add(self, room: Room) -> Room:
        self._rooms[room.id] = room
        return room

    def get(self, room_id: str) -> Room:
        """Look up a room.

        Raises:
            RoomNotFound: If no room has this id.
        """
        room = self._rooms.get(room_id)
        if room is None:
            raise RoomNotFound("Room not found")
        return room

    def purge_idle(self, max_idle: Optional[float], now: Optional[float] = None) -> list[str]:
        """Evict rooms with no activity for more than `max_idle` seconds.

        Args:
            max_idle: Idle limit in seconds; None disables eviction.
            now: Monotonic clock reading, the current one by default.

        Returns:
            Ids of the evicted rooms.
        """
        if not max_idle:
            return []
        now = time.monotonic() if now is None else now
        stale = [
            room_id for room_id, room in self._rooms.items()
            if now - room.last_active > max_idle
        ]
        for room_id in stale:
            del self._rooms[room_id]
            logger.info("Evicted idle room %s", room_id)
        return stale
