"""Game phase definitions and transition guards."""

from enum import Enum
from typing import TYPE_CHECKING, Optional

from ..errors import PhaseViolation

if TYPE_CHECKING:
    from .room import Room


class GamePhase(str, Enum):
    """Phases of an impostor room."""
    LOBBY = "lobby"      # Waiting for players, nothing assigned
    CLUES = "clues"      # Players write one-word clues about the secret
    VOTING = "voting"    # Players vote for who they think is the impostor
    RESULTS = "results"  # Outcome shown, waiting for the next communal action


class Action(str, Enum):
    """Communal actions that move a room between phases."""
    START = "start"
    VOTE_PHASE = "votePhase"
    NEXT_CLUE = "nextClue"
    NEXT_ROUND = "nextRound"
    SHOW_RESULTS = "showResults"

    @classmethod
    def parse(cls, value: "Action | str") -> "Action":
        """Coerce a wire name into an Action.

        Raises:
            ValueError: If the value names no action.
        """
        if isinstance(value, cls):
            return value
        return cls(value)


# Actions only valid while the results phase is waiting for them
AWAITABLE_ACTIONS = (Action.NEXT_CLUE, Action.NEXT_ROUND)

# action -> (legal source phase, target phase)
TRANSITIONS: dict[Action, tuple[GamePhase, GamePhase]] = {
    Action.START: (GamePhase.LOBBY, GamePhase.CLUES),
    Action.VOTE_PHASE: (GamePhase.CLUES, GamePhase.VOTING),
    Action.SHOW_RESULTS: (GamePhase.VOTING, GamePhase.RESULTS),
    Action.NEXT_CLUE: (GamePhase.RESULTS, GamePhase.CLUES),
    Action.NEXT_ROUND: (GamePhase.RESULTS, GamePhase.CLUES),
}

# Actions eliminated players may not confirm
ACTIVE_PLAY_ACTIONS = frozenset({Action.VOTE_PHASE, Action.NEXT_CLUE, Action.SHOW_RESULTS})

# Actions whose quorum counts every player, alive or not
ALL_PLAYER_ACTIONS = frozenset({Action.START, Action.NEXT_ROUND})


class PhaseStateMachine:
    """Guards for the room phase graph.

    The machine holds no state of its own; the phase lives on the room.
    """

    @staticmethod
    def source_phase(action: Action) -> GamePhase:
        """Phase the action must be taken from."""
        return TRANSITIONS[action][0]

    @staticmethod
    def target_phase(action: Action) -> GamePhase:
        """Phase the action lands in."""
        return TRANSITIONS[action][1]

    @classmethod
    def check(cls, room: "Room", action: Action) -> None:
        """Validate the action against the room's phase.

        Raises:
            PhaseViolation: If the action is not legal right now.
        """
        reason = cls.violation(room, action)
        if reason is not None:
            raise PhaseViolation(reason)

    @classmethod
    def violation(cls, room: "Room", action: Action) -> Optional[str]:
        """Explain why the action is illegal, or None when it is legal."""
        source = cls.source_phase(action)
        if room.phase != source:
            return f"Cannot {action.value} from the {room.phase.value} phase"
        if action in AWAITABLE_ACTIONS and room.awaiting != action:
            return f"Cannot {action.value} at this time"
        return None
