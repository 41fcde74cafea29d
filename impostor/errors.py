"""Errors raised by the game engine and service."""


class GameError(Exception):
    """Base class for every error the game reports to its caller.

    Attributes:
        code: Stable machine-readable error name.
        status: Suggested HTTP-style status for a transport layer.
    """

    code = "game_error"
    status = 400

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class RoomNotFound(GameError):
    """Raised when a room id is unknown."""
    code = "room_not_found"
    status = 404


class PlayerNotFound(GameError):
    """Raised when a player id is not part of the room."""
    code = "player_not_found"
    status = 404


class PhaseViolation(GameError):
    """Raised when an operation is not legal in the room's current phase."""
    code = "phase_violation"


class EliminatedPlayerViolation(GameError):
    """Raised when an eliminated player attempts an active-play action."""
    code = "eliminated_player"


class CapacityExceeded(GameError):
    """Raised when a room already holds its expected number of players."""
    code = "capacity_exceeded"


class DuplicateVote(GameError):
    """Raised when a voter votes twice in the same voting phase."""
    code = "duplicate_vote"


class Unauthorized(GameError):
    """Raised when a non-host player tries to force an action."""
    code = "unauthorized"
    status = 403


class MalformedInput(GameError):
    """Raised for missing, blank or unknown input values."""
    code = "malformed_input"
