"""Markdown journal of each room's game, for review after play."""

from datetime import datetime
from pathlib import Path
from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:
    from ..engine.room import Room
    from ..engine.tally import ResultSnapshot


class MarkdownLogger:
    """Writes room events to markdown files, one directory per room.

    This is the review record of a game: unlike the snapshots served to
    players, it names the impostor and the secret.
    """

    def __init__(self, base_dir: str = "games"):
        """Initialize the logger.

        Args:
            base_dir: Base directory for room journals.
        """
        self.base_dir = Path(base_dir)

    def room_dir(self, room_id: str) -> Path:
        return self.base_dir / f"room_{room_id}"

    def _game_file(self, room_id: str) -> Path:
        return self.room_dir(room_id) / "game_state.md"

    def start_room(self, room: "Room") -> Path:
        """Start logging a new room.

        Args:
            room: The freshly created room.

        Returns:
            Path to the room directory.
        """
        room_dir = self.room_dir(room.id)
        room_dir.mkdir(parents=True, exist_ok=True)

        with open(self._game_file(room.id), "w") as f:
            f.write(f"# Impostor Room - {room.id}\n\n")
            f.write(f"Created: {datetime.now().strftime('%Y-%m-%d %H:%M:%S')}\n\n")
            f.write(f"Expected players: {room.expected_player_count}\n\n")
            f.write("---\n\n")

        return room_dir

    def log_join(self, room: "Room", player_name: str) -> None:
        with open(self._game_file(room.id), "a") as f:
            f.write(f"*{player_name} joined the lobby.*\n\n")

    def log_setup(self, room: "Room") -> None:
        """Log the roles dealt for a new game.

        Args:
            room: Room whose roles were just assigned.
        """
        secret = room.secret_target
        with open(self._game_file(room.id), "a") as f:
            f.write("## Players\n\n")
            if secret:
                f.write(f"Secret: **{secret.name}** ({secret.club})\n\n")
            f.write("| Player | Role (Hidden) | Alive |\n")
            f.write("|--------|---------------|-------|\n")
            for p in room.players:
                role = p.role.value if p.role else "-"
                alive = "Yes" if p.alive else "No"
                f.write(f"| {p.name} | {role} | {alive} |\n")
            f.write("\n---\n\n")

    def log_phase_start(self, room: "Room") -> None:
        """Log the phase the room just entered."""
        with open(self._game_file(room.id), "a") as f:
            f.write(f"## Round {room.round_number} - {room.phase.value.title()}\n\n")

    def log_clues(self, room: "Room") -> None:
        """Write the round's clues to their own file."""
        clues_dir = self.room_dir(room.id) / "clues"
        clues_dir.mkdir(parents=True, exist_ok=True)
        filename = f"round_{room.round_number}.md"

        names = {p.id: p.name for p in room.players}
        with open(clues_dir / filename, "w") as f:
            f.write(f"# Clues - Round {room.round_number}\n\n")
            for clue in room.clues:
                f.write(f"**{names.get(clue.player_id, clue.player_id)}**:\n")
                f.write(f"> {clue.text}\n\n")

        with open(self._game_file(room.id), "a") as f:
            f.write(f"*See [clues/{filename}](./clues/{filename}) for the clues*\n\n")

    def log_vote(self, room: "Room", result: "ResultSnapshot") -> None:
        """Log voting results.

        Args:
            room: Room that just counted its votes.
            result: The evaluated outcome.
        """
        votes_dir = self.room_dir(room.id) / "votes"
        votes_dir.mkdir(parents=True, exist_ok=True)
        filename = f"round_{room.round_number}.md"

        names = {p.id: p.name for p in room.players}
        vote_counts: dict[str, list[str]] = {}
        for vote in result.votes:
            vote_counts.setdefault(vote.target_id, []).append(names.get(vote.voter_id, vote.voter_id))

        accused: Optional[str] = names.get(result.accused_id) if result.accused_id else None

        with open(votes_dir / filename, "w") as f:
            f.write(f"# Voting - Round {room.round_number}\n\n")

            f.write("## Individual Votes\n\n")
            f.write("| Voter | Voted For |\n")
            f.write("|-------|----------|\n")
            for vote in result.votes:
                f.write(f"| {names.get(vote.voter_id)} | {names.get(vote.target_id)} |\n")

            f.write("\n## Vote Totals\n\n")
            for target, voters in sorted(vote_counts.items(), key=lambda x: -len(x[1])):
                f.write(f"- **{names.get(target, target)}**: {len(voters)} votes ({', '.join(voters)})\n")

            f.write("\n## Result\n\n")
            f.write(f"{result.message}.\n")

        with open(self._game_file(room.id), "a") as f:
            f.write("### Vote Result\n\n")
            if accused is None:
                f.write("*Nobody voted - no elimination*\n\n")
            elif result.success:
                f.write(f"**{accused}** was the impostor.\n\n")
            else:
                f.write(f"**{accused}** was eliminated.\n\n")

    def log_game_end(self, room: "Room") -> None:
        """Log the end of a game, revealing the impostor."""
        impostor = room.impostor
        winner = "impostor" if room.impostor_won else "crew"
        with open(self._game_file(room.id), "a") as f:
            f.write("---\n\n")
            f.write("# GAME OVER\n\n")
            f.write(f"## Winner: {winner.upper()}\n\n")
            if impostor:
                f.write(f"The impostor was **{impostor.name}**.\n\n")

            f.write("| Player | Survived |\n")
            f.write("|--------|----------|\n")
            for p in room.players:
                survived = "Yes" if p.alive else "No"
                f.write(f"| {p.name} | {survived} |\n")

            f.write(f"\n\nEnded: {datetime.now().strftime('%Y-%m-%d %H:%M:%S')}\n\n")
