"""Room and player entities."""

import asyncio
import time
import uuid
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Optional

from pydantic import BaseModel

from .phases import Action, GamePhase
from .roles import Role, SecretTarget

if TYPE_CHECKING:
    from .tally import ResultSnapshot


def new_id() -> str:
    """Generate a room or player identifier."""
    return uuid.uuid4().hex


class Clue(BaseModel):
    """A clue written during the clues phase."""
    player_id: str
    text: str


class Vote(BaseModel):
    """One voter's accusation."""
    voter_id: str
    target_id: str


@dataclass
class Player:
    """A participant in a room."""

    id: str
    name: str
    role: Optional[Role] = None
    assigned_secret: Optional[SecretTarget] = None
    alive: bool = True

    def matches_name(self, name: str) -> bool:
        """Names are unique per room, compared case-insensitively."""
        return self.name.casefold() == name.strip().casefold()

    def clear_round(self) -> None:
        """Forget this round's role and secret."""
        self.role = None
        self.assigned_secret = None


def _empty_confirmations() -> dict[Action, set[str]]:
    return {action: set() for action in Action}


@dataclass
class Room:
    """One independent game instance."""

    id: str
    expected_player_count: int
    players: list[Player] = field(default_factory=list)
    phase: GamePhase = GamePhase.LOBBY
    host_id: Optional[str] = None
    secret_target: Optional[SecretTarget] = None
    clues: list[Clue] = field(default_factory=list)
    votes: list[Vote] = field(default_factory=list)
    confirmations: dict[Action, set[str]] = field(default_factory=_empty_confirmations)
    awaiting: Optional[Action] = None
    game_over: bool = False
    impostor_won: bool = False
    last_result: Optional["ResultSnapshot"] = None
    round_number: int = 0
    last_active: float = field(default_factory=time.monotonic)
    # serializes guard-check-then-mutate sequences on this room
    mutex: asyncio.Lock = field(default_factory=asyncio.Lock, repr=False, compare=False)

    @classmethod
    def create(cls, names: list[str]) -> "Room":
        """Build a lobby room with one player per name; the first is host."""
        room = cls(id=new_id(), expected_player_count=len(names))
        for name in names:
            room.players.append(Player(id=new_id(), name=name))
        room.host_id = room.players[0].id
        return room

    @property
    def alive_players(self) -> list[Player]:
        """Get all alive players."""
        return [p for p in self.players if p.alive]

    @property
    def impostor(self) -> Optional[Player]:
        """The current round's impostor, if roles are assigned."""
        return next((p for p in self.players if p.role == Role.IMPOSTOR), None)

    @property
    def is_full(self) -> bool:
        return len(self.players) >= self.expected_player_count

    def find_player(self, player_id: str) -> Optional[Player]:
        return next((p for p in self.players if p.id == player_id), None)

    def find_by_name(self, name: str) -> Optional[Player]:
        return next((p for p in self.players if p.matches_name(name)), None)

    def roster_position(self, player_id: str) -> int:
        """Join order of a player; unknown ids sort last."""
        for index, player in enumerate(self.players):
            if player.id == player_id:
                return index
        return len(self.players)

    def has_voted(self, voter_id: str) -> bool:
        return any(v.voter_id == voter_id for v in self.votes)

    def clear_confirmations(self) -> None:
        """Empty the confirmation set of every communal action."""
        for confirmed in self.confirmations.values():
            confirmed.clear()

    def touch(self) -> None:
        """Record activity for idle expiry."""
        self.last_active = time.monotonic()
