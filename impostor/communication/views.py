"""What each viewer is allowed to see of a room.

Every snapshot that leaves the engine is built here, so hidden
information (who holds the secret, and therefore who does not) is
filtered in exactly one place.
"""

from typing import TYPE_CHECKING, Optional

from ..engine.phases import Action
from ..engine.quorum import required_confirmations

if TYPE_CHECKING:
    from ..engine.room import Player, Room


def public_player(player: "Player") -> dict:
    """Roster entry visible to everyone."""
    return {"id": player.id, "name": player.name, "alive": player.alive}


def own_player(player: "Player") -> dict:
    """A player's view of themself, including their projected secret."""
    view = public_player(player)
    view["role"] = player.role.value if player.role else None
    view["assigned_secret"] = (
        player.assigned_secret.public_view() if player.assigned_secret else None
    )
    return view


def roster(room: "Room") -> list[dict]:
    return [public_player(p) for p in room.players]


def room_snapshot(room: "Room", viewer_id: Optional[str] = None) -> dict:
    """Build the polled state of a room for one viewer.

    Args:
        room: The room to project.
        viewer_id: Player asking; their own secret is included under "you".

    Returns:
        A JSON-ready dict with no trace of the impostor's identity.
    """
    viewer = room.find_player(viewer_id) if viewer_id else None
    return {
        "room_id": room.id,
        "phase": room.phase.value,
        "round_number": room.round_number,
        "players": roster(room),
        "you": own_player(viewer) if viewer else None,
        "clues": [clue.model_dump() for clue in room.clues],
        "votes": [vote.model_dump() for vote in room.votes],
        "host_id": room.host_id,
        "awaiting": room.awaiting.value if room.awaiting else None,
        "confirmations": {
            action.value: len(room.confirmations[action]) for action in Action
        },
        "required": {
            action.value: required_confirmations(room, action) for action in Action
        },
        "game_over": room.game_over,
        "impostor_won": room.impostor_won,
        "results": room.last_result.model_dump(mode="json") if room.last_result else None,
    }
