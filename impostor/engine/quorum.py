"""Confirmation quorum for communal actions.

Players opt in to a pending action; once enough of them have confirmed,
the transition runs. The host can skip the wait with a force.
"""

import random
from typing import TYPE_CHECKING, Optional, Sequence

from pydantic import BaseModel

from ..errors import EliminatedPlayerViolation, MalformedInput, PlayerNotFound, Unauthorized
from .game import apply_action
from .phases import ACTIVE_PLAY_ACTIONS, ALL_PLAYER_ACTIONS, Action, PhaseStateMachine
from .roles import SecretTarget
from .tally import ResultSnapshot

if TYPE_CHECKING:
    from .room import Player, Room


class QuorumOutcome(BaseModel):
    """What a confirm or force did."""
    action: Action
    current: int
    required: int
    executed: bool
    already_confirmed: bool = False
    forced: bool = False
    results: Optional[ResultSnapshot] = None

    @property
    def message(self) -> str:
        if self.forced:
            return "Action forced"
        if self.executed:
            return "Action executed"
        if self.already_confirmed:
            return "Already confirmed"
        return "Confirmation recorded"


def required_confirmations(room: "Room", action: Action) -> int:
    """Number of confirmations that triggers the action.

    Starting a game or a new round needs everyone, eliminated or not;
    in-round actions need only the players still alive.
    """
    if action in ALL_PLAYER_ACTIONS:
        return len(room.players)
    return len(room.alive_players)


class ConfirmationQuorum:
    """Collects confirmations and fires transitions when a quorum is met."""

    def __init__(
        self,
        catalog: Sequence[SecretTarget],
        rng: Optional[random.Random] = None,
    ):
        """Initialize the quorum.

        Args:
            catalog: Secret targets handed to role assignment.
            rng: Optional random source for role assignment.
        """
        if not catalog:
            raise MalformedInput("The secret catalog is empty")
        self.catalog = catalog
        self.rng = rng

    def _validate(self, room: "Room", player_id: str, action: Action) -> "Player":
        PhaseStateMachine.check(room, action)
        player = room.find_player(player_id)
        if player is None:
            raise PlayerNotFound("Player not found")
        if action in ACTIVE_PLAY_ACTIONS and not player.alive:
            raise EliminatedPlayerViolation("Eliminated players cannot perform this action")
        return player

    def confirm(self, room: "Room", player_id: str, action: Action) -> QuorumOutcome:
        """Record a player's confirmation and run the action on quorum.

        Confirming twice is not an error; the second call just reports the
        current count.

        Raises:
            PhaseViolation: If the action is not legal in the current phase.
            PlayerNotFound: If the player is not in the room.
            EliminatedPlayerViolation: If an eliminated player confirms an
                in-round action.
        """
        self._validate(room, player_id, action)
        confirmed = room.confirmations[action]
        required = required_confirmations(room, action)

        if player_id in confirmed:
            return QuorumOutcome(
                action=action,
                current=len(confirmed),
                required=required,
                executed=False,
                already_confirmed=True,
            )

        confirmed.add(player_id)
        current = len(confirmed)
        if current < required:
            return QuorumOutcome(action=action, current=current, required=required, executed=False)

        room.clear_confirmations()
        results = apply_action(room, action, self.catalog, self.rng)
        return QuorumOutcome(
            action=action,
            current=current,
            required=required,
            executed=True,
            results=results,
        )

    def force(self, room: "Room", player_id: str, action: Action) -> QuorumOutcome:
        """Run the action immediately on the host's say-so.

        Raises:
            Unauthorized: If the player is not the room's host.
        """
        self._validate(room, player_id, action)
        if player_id != room.host_id:
            raise Unauthorized("Only the host can force actions")

        current = len(room.confirmations[action])
        required = required_confirmations(room, action)
        room.confirmations[action].clear()
        results = apply_action(room, action, self.catalog, self.rng)
        return QuorumOutcome(
            action=action,
            current=current,
            required=required,
            executed=True,
            forced=True,
            results=results,
        )
