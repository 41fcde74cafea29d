"""Vote tallying and round outcome evaluation."""

from collections import Counter
from typing import TYPE_CHECKING, Optional

from pydantic import BaseModel

from .phases import Action
from .room import Vote

if TYPE_CHECKING:
    from .room import Room


# The impostor wins once this few players (or fewer) remain alive
IMPOSTOR_WIN_ALIVE_COUNT = 2

MESSAGE_IMPOSTOR_FOUND = "The impostor was discovered"
MESSAGE_IMPOSTOR_WINS = "The impostor wins: too few players remain"
MESSAGE_NEXT_CLUE = "The impostor was not discovered, next clue round"


class ResultSnapshot(BaseModel):
    """Outcome of a voting phase, safe to show to every player.

    The impostor's identity is never part of it.
    """
    message: str
    success: bool
    game_over: bool
    impostor_won: bool
    accused_id: Optional[str] = None
    votes: list[Vote]
    remaining_players: list[dict]
    awaiting: Action


def tally_votes(room: "Room") -> Counter:
    """Count votes per target id."""
    return Counter(vote.target_id for vote in room.votes)


def find_accused(room: "Room") -> Optional[str]:
    """Return the most-voted target id, or None when nobody voted.

    Ties go to the tied player who joined the room first.
    """
    counts = tally_votes(room)
    if not counts:
        return None
    top = max(counts.values())
    tied = [target for target, count in counts.items() if count == top]
    return min(tied, key=room.roster_position)


def evaluate_results(room: "Room") -> ResultSnapshot:
    """Decide the round outcome and apply any elimination.

    Catching the impostor ends the game for the crew. A wrong accusation
    eliminates the accused; if that leaves two or fewer players alive the
    impostor wins, otherwise another clue round follows.

    Args:
        room: Room whose votes are being counted.

    Returns:
        The result snapshot, also stored on the room.
    """
    votes = list(room.votes)
    accused_id = find_accused(room)
    impostor = room.impostor
    success = accused_id is not None and impostor is not None and accused_id == impostor.id

    if success:
        game_over, impostor_won = True, False
        awaiting = Action.NEXT_ROUND
        message = MESSAGE_IMPOSTOR_FOUND
    else:
        if accused_id is not None:
            accused = room.find_player(accused_id)
            if accused:
                accused.alive = False

        if len(room.alive_players) <= IMPOSTOR_WIN_ALIVE_COUNT:
            game_over, impostor_won = True, True
            awaiting = Action.NEXT_ROUND
            message = MESSAGE_IMPOSTOR_WINS
        else:
            game_over, impostor_won = False, False
            awaiting = Action.NEXT_CLUE
            message = MESSAGE_NEXT_CLUE

    room.game_over = game_over
    room.impostor_won = impostor_won
    room.awaiting = awaiting

    result = ResultSnapshot(
        message=message,
        success=success,
        game_over=game_over,
        impostor_won=impostor_won,
        accused_id=accused_id,
        votes=votes,
        remaining_players=[
            {"id": p.id, "name": p.name, "alive": p.alive} for p in room.players
        ],
        awaiting=awaiting,
    )
    room.last_result = result
    return result
