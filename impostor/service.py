"""Game service: the operations a transport layer exposes to players.

Every mutating operation takes the room's lock for its whole
guard-check-then-mutate sequence, so concurrent requests against the same
room never interleave. Reads do not lock.
"""

import logging
import random
from typing import Optional

from .communication.markdown_logger import MarkdownLogger
from .communication.views import own_player, roster, room_snapshot
from .config import Settings
from .engine.game import apply_action
from .engine.phases import Action, GamePhase
from .engine.quorum import ConfirmationQuorum, QuorumOutcome
from .engine.room import Clue, Player, Room, Vote, new_id
from .engine.tally import ResultSnapshot
from .errors import (
    CapacityExceeded,
    DuplicateVote,
    EliminatedPlayerViolation,
    MalformedInput,
    PhaseViolation,
    PlayerNotFound,
)
from .registry import RoomRegistry

logger = logging.getLogger(__name__)


def _clean_name(name) -> str:
    if not isinstance(name, str) or not name.strip():
        raise MalformedInput("Player names must be non-empty strings")
    return name.strip()


def _parse_action(action) -> Action:
    try:
        return Action.parse(action)
    except ValueError:
        raise MalformedInput(f"Unsupported action: {action!r}") from None


class GameService:
    """Runs impostor rooms held in a shared in-memory registry."""

    def __init__(
        self,
        settings: Optional[Settings] = None,
        registry: Optional[RoomRegistry] = None,
        journal: Optional[MarkdownLogger] = None,
        rng: Optional[random.Random] = None,
    ):
        """Initialize the service.

        Args:
            settings: Service settings; defaults when omitted.
            registry: Room store, a fresh one by default.
            journal: Optional markdown journal. Built from
                settings.journal_dir when not given.
            rng: Random source for role assignment.
        """
        self.settings = settings or Settings()
        self.registry = registry or RoomRegistry()
        if journal is None and self.settings.journal_dir:
            journal = MarkdownLogger(base_dir=self.settings.journal_dir)
        self.journal = journal
        self.rng = rng
        self.quorum = ConfirmationQuorum(self.settings.catalog, rng)

    # --- Rooms and players ---

    async def create(self, names: list[str]) -> dict:
        """Create a room with one player per name; the first name hosts.

        Raises:
            MalformedInput: For an empty list, a blank name or two names
                that differ only by case.
        """
        if not isinstance(names, (list, tuple)) or not names:
            raise MalformedInput("At least one player name is required")
        cleaned = [_clean_name(name) for name in names]
        if len({name.casefold() for name in cleaned}) != len(cleaned):
            raise MalformedInput("Player names must be unique")

        self.registry.purge_idle(self.settings.room_idle_timeout)

        room = self.registry.add(Room.create(cleaned))
        logger.info("Created room %s for %d players", room.id, room.expected_player_count)
        self._journal("start_room", room)

        return {
            "room_id": room.id,
            "players": roster(room),
            "phase": room.phase.value,
            "host_id": room.host_id,
        }

    async def join(self, room_id: str, name: str) -> dict:
        """Claim an existing name or add a new player to the lobby.

        Raises:
            PhaseViolation: If a new name joins after the lobby.
            CapacityExceeded: If the room is already full.
        """
        room = self.registry.get(room_id)
        async with room.mutex:
            name = _clean_name(name)
            player = room.find_by_name(name)
            if player is None:
                if room.phase != GamePhase.LOBBY:
                    raise PhaseViolation("Cannot join after the game has started")
                if room.is_full:
                    raise CapacityExceeded("This room cannot take more players")
                player = Player(id=new_id(), name=name)
                room.players.append(player)
                logger.info("%s joined room %s", name, room.id)
                self._journal("log_join", room, name)
            room.touch()

            return {
                "player": own_player(player),
                "players": roster(room),
                "phase": room.phase.value,
                "host_id": room.host_id,
            }

    async def get_state(self, room_id: str, viewer_id: Optional[str] = None) -> dict:
        """Snapshot of the room as one viewer may see it.

        Polling counts as activity, so a watched room is never evicted.
        """
        room = self.registry.get(room_id)
        room.touch()
        return room_snapshot(room, viewer_id)

    # --- Clues and votes ---

    async def submit_clue(self, room_id: str, player_id: str, text: str) -> dict:
        """Record an alive player's clue.

        Raises:
            PhaseViolation: Outside the clues phase.
            MalformedInput: If the clue is blank.
            PlayerNotFound: If the player is not in the room.
            EliminatedPlayerViolation: If the player was eliminated.
        """
        room = self.registry.get(room_id)
        async with room.mutex:
            if room.phase != GamePhase.CLUES:
                raise PhaseViolation("Not in the clues phase")
            if not player_id or not isinstance(text, str) or not text.strip():
                raise MalformedInput("A player id and a non-empty clue are required")
            player = room.find_player(player_id)
            if player is None:
                raise PlayerNotFound("Player not found")
            if not player.alive:
                raise EliminatedPlayerViolation("Eliminated players cannot send clues")

            clue = Clue(player_id=player_id, text=text.strip())
            room.clues.append(clue)
            room.touch()
            return {"message": "Clue recorded", "clue": clue.model_dump()}

    async def submit_vote(self, room_id: str, voter_id: str, target_id: str) -> dict:
        """Record one vote per alive voter for an alive target.

        Raises:
            PhaseViolation: Outside the voting phase.
            PlayerNotFound: If either player is not in the room.
            EliminatedPlayerViolation: If the voter or the target is out.
            DuplicateVote: If the voter already voted.
        """
        room = self.registry.get(room_id)
        async with room.mutex:
            if room.phase != GamePhase.VOTING:
                raise PhaseViolation("Not in the voting phase")
            if not voter_id or not target_id:
                raise MalformedInput("A voter id and a target id are required")
            voter = room.find_player(voter_id)
            target = room.find_player(target_id)
            if voter is None or target is None:
                raise PlayerNotFound("Player not found")
            if not voter.alive:
                raise EliminatedPlayerViolation("Eliminated players cannot vote")
            if not target.alive:
                raise EliminatedPlayerViolation("Cannot vote for an eliminated player")
            if room.has_voted(voter_id):
                raise DuplicateVote("Voter has already voted")

            vote = Vote(voter_id=voter_id, target_id=target_id)
            room.votes.append(vote)
            room.touch()
            return {"message": "Vote recorded", "vote": vote.model_dump()}

    # --- Communal actions ---

    async def confirm(self, room_id: str, player_id: str, action) -> dict:
        """Opt a player in to a communal action; runs it on quorum."""
        room = self.registry.get(room_id)
        action = _parse_action(action)
        async with room.mutex:
            outcome = self.quorum.confirm(room, player_id, action)
            room.touch()
            if outcome.executed:
                self._after_transition(room, action, outcome.results)
            else:
                logger.debug(
                    "Room %s: %s confirmations %d/%d",
                    room.id, action.value, outcome.current, outcome.required,
                )
            return _outcome_view(outcome)

    async def force(self, room_id: str, player_id: str, action) -> dict:
        """Let the host run a communal action without waiting for quorum."""
        room = self.registry.get(room_id)
        action = _parse_action(action)
        async with room.mutex:
            outcome = self.quorum.force(room, player_id, action)
            room.touch()
            self._after_transition(room, action, outcome.results)
            return _outcome_view(outcome)

    # --- Direct transitions kept for older clients ---

    async def start_game(self, room_id: str) -> dict:
        """Start the game immediately, skipping the start quorum."""
        await self._direct(room_id, Action.START)
        room = self.registry.get(room_id)
        return {
            "message": "Game started",
            "players": roster(room),
            "phase": room.phase.value,
        }

    async def request_vote_phase(self, room_id: str) -> dict:
        """Move to voting immediately, skipping the votePhase quorum."""
        await self._direct(room_id, Action.VOTE_PHASE)
        return {"message": "Now in voting phase"}

    async def compute_and_reveal_results(self, room_id: str) -> dict:
        """Count votes immediately, skipping the showResults quorum."""
        result = await self._direct(room_id, Action.SHOW_RESULTS)
        return result.model_dump(mode="json")

    async def _direct(self, room_id: str, action: Action) -> Optional[ResultSnapshot]:
        room = self.registry.get(room_id)
        async with room.mutex:
            result = apply_action(room, action, self.settings.catalog, self.rng)
            room.touch()
            self._after_transition(room, action, result)
            return result

    def _after_transition(
        self,
        room: Room,
        action: Action,
        result: Optional[ResultSnapshot],
    ) -> None:
        logger.info("Room %s: %s -> %s", room.id, action.value, room.phase.value)
        if result is not None:
            logger.info("Room %s: %s", room.id, result.message)

        if action in (Action.START, Action.NEXT_ROUND):
            self._journal("log_setup", room)
        elif action == Action.VOTE_PHASE:
            self._journal("log_clues", room)
        elif action == Action.SHOW_RESULTS and result is not None:
            self._journal("log_vote", room, result)
        self._journal("log_phase_start", room)
        if room.game_over and action == Action.SHOW_RESULTS:
            self._journal("log_game_end", room)

    def _journal(self, method: str, room: Room, *args) -> None:
        """Write to the journal without letting a disk error undo a committed change."""
        if not self.journal:
            return
        try:
            getattr(self.journal, method)(room, *args)
        except OSError:
            logger.exception("Room %s: journal %s failed", room.id, method)


def _outcome_view(outcome: QuorumOutcome) -> dict:
    return {
        "message": outcome.message,
        "action": outcome.action.value,
        "current": outcome.current,
        "required": outcome.required,
        "executed": outcome.executed,
        "results": outcome.results.model_dump(mode="json") if outcome.results else None,
    }
