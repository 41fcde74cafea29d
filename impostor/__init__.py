"""Impostor - a social deduction party game coordinator."""

from .config import Settings, load_settings
from .engine import Action, GamePhase, Role, Room, SecretTarget
from .errors import GameError
from .registry import RoomRegistry
from .service import GameService

__all__ = [
    "Settings",
    "load_settings",
    "Action",
    "GamePhase",
    "Role",
    "Room",
    "SecretTarget",
    "GameError",
    "RoomRegistry",
    "GameService",
]
