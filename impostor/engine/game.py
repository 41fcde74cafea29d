"""Phase transitions for an impostor room.

Every path that changes a room's phase (a completed quorum, a host force,
or a legacy direct call) goes through `apply_action`.
"""

import random
from typing import TYPE_CHECKING, Optional, Sequence

from ..errors import MalformedInput
from .phases import Action, GamePhase, PhaseStateMachine
from .roles import SecretTarget, assign_roles_for_round
from .tally import ResultSnapshot, evaluate_results

if TYPE_CHECKING:
    from .room import Room


def start_game(
    room: "Room",
    catalog: Sequence[SecretTarget],
    rng: Optional[random.Random] = None,
) -> None:
    """Leave the lobby: assign the first round's roles."""
    assign_roles_for_round(room, catalog, rng)
    room.awaiting = None
    room.round_number = 1


def start_next_clue_round(room: "Room") -> None:
    """Retry the clue round after a wrong accusation.

    Keeps the same impostor and secret target.
    """
    room.clues.clear()
    room.votes.clear()
    room.awaiting = None
    room.round_number += 1
    room.phase = GamePhase.CLUES


def start_new_game(
    room: "Room",
    catalog: Sequence[SecretTarget],
    rng: Optional[random.Random] = None,
) -> None:
    """Revive everyone and deal a fresh round."""
    for player in room.players:
        player.alive = True
        player.clear_round()
    room.clues.clear()
    room.votes.clear()
    room.game_over = False
    room.impostor_won = False
    room.awaiting = None
    room.last_result = None
    assign_roles_for_round(room, catalog, rng)
    room.round_number = 1
    room.phase = GamePhase.CLUES


def apply_action(
    room: "Room",
    action: Action,
    catalog: Sequence[SecretTarget],
    rng: Optional[random.Random] = None,
) -> Optional[ResultSnapshot]:
    """Validate and perform a phase transition.

    Clears every confirmation set so a stale confirmation from an earlier
    phase can never fire in a later one.

    Args:
        room: Room to transition.
        action: The communal action being executed.
        catalog: Secret targets for actions that deal roles.
        rng: Random source for role assignment.

    Returns:
        The result snapshot for showResults, otherwise None.

    Raises:
        PhaseViolation: If the action is not legal in the current phase.
        MalformedInput: If roles must be dealt from an empty catalog.
    """
    PhaseStateMachine.check(room, action)
    if action in (Action.START, Action.NEXT_ROUND) and not catalog:
        raise MalformedInput("The secret catalog is empty")

    result = None
    if action == Action.START:
        start_game(room, catalog, rng)
    elif action == Action.SHOW_RESULTS:
        result = evaluate_results(room)
    elif action == Action.NEXT_CLUE:
        start_next_clue_round(room)
    elif action == Action.NEXT_ROUND:
        start_new_game(room, catalog, rng)

    room.phase = PhaseStateMachine.target_phase(action)
    room.clear_confirmations()
    return result
