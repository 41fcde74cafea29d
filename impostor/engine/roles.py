"""Role definitions and per-round role assignment."""

import random
from enum import Enum
from typing import TYPE_CHECKING, Optional, Sequence

from pydantic import BaseModel

from ..errors import MalformedInput

if TYPE_CHECKING:
    from .room import Room


class Role(str, Enum):
    """A role in the impostor game."""
    IMPOSTOR = "impostor"
    CREW = "crew"


class SecretTarget(BaseModel):
    """The shared secret every crew member knows for a round."""
    name: str
    club: str = ""
    image: Optional[str] = None

    def public_view(self) -> dict:
        """Display fields safe to show to the player holding the secret."""
        return {"name": self.name, "club": self.club}


# Used when the configuration file defines no catalog
DEFAULT_CATALOG = [
    SecretTarget(name="Lionel Messi", club="Inter Miami"),
    SecretTarget(name="Cristiano Ronaldo", club="Al Nassr"),
    SecretTarget(name="Kylian Mbappe", club="Real Madrid"),
    SecretTarget(name="Erling Haaland", club="Manchester City"),
    SecretTarget(name="Luka Modric", club="AC Milan"),
    SecretTarget(name="Mohamed Salah", club="Liverpool"),
    SecretTarget(name="Kevin De Bruyne", club="Napoli"),
    SecretTarget(name="Robert Lewandowski", club="Barcelona"),
    SecretTarget(name="Vinicius Junior", club="Real Madrid"),
    SecretTarget(name="Lamine Yamal", club="Barcelona"),
    SecretTarget(name="Harry Kane", club="Bayern Munich"),
    SecretTarget(name="Jude Bellingham", club="Real Madrid"),
]


def assign_roles_for_round(
    room: "Room",
    catalog: Sequence[SecretTarget],
    rng: Optional[random.Random] = None,
) -> None:
    """Pick the round's secret and impostor and hand out roles.

    One alive player becomes the impostor and gets no secret; every other
    alive player becomes crew and shares the same secret. Eliminated players
    are cleared and cannot be picked.

    Args:
        room: Room to assign roles in.
        catalog: Secret targets to draw from.
        rng: Random source, the module-level one by default.
    """
    rng = rng or random
    if not catalog:
        raise MalformedInput("The secret catalog is empty")

    alive = [p for p in room.players if p.alive]
    if not alive:
        raise MalformedInput("No alive players to assign roles to")

    secret = rng.choice(list(catalog))
    impostor = rng.choice(alive)
    room.secret_target = secret

    for player in room.players:
        if not player.alive:
            player.role = None
            player.assigned_secret = None
        elif player is impostor:
            player.role = Role.IMPOSTOR
            player.assigned_secret = None
        else:
            player.role = Role.CREW
            player.assigned_secret = secret
