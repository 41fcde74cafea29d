"""Game engine - rules enforcement, phases, and role definitions."""

from .roles import Role, SecretTarget, DEFAULT_CATALOG, assign_roles_for_round
from .phases import Action, GamePhase, PhaseStateMachine
from .room import Clue, Player, Room, Vote
from .tally import ResultSnapshot, evaluate_results, find_accused, tally_votes
from .game import apply_action, start_new_game, start_next_clue_round
from .quorum import ConfirmationQuorum, QuorumOutcome, required_confirmations

__all__ = [
    "Role",
    "SecretTarget",
    "DEFAULT_CATALOG",
    "assign_roles_for_round",
    "Action",
    "GamePhase",
    "PhaseStateMachine",
    "Clue",
    "Player",
    "Room",
    "Vote",
    "ResultSnapshot",
    "evaluate_results",
    "find_accused",
    "tally_votes",
    "apply_action",
    "start_new_game",
    "start_next_clue_round",
    "ConfirmationQuorum",
    "QuorumOutcome",
    "required_confirmations",
]
