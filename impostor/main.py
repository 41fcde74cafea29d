"""Pass-and-play terminal front end for Impostor."""

import asyncio
import logging
import sys

from rich.console import Console
from rich.logging import RichHandler
from rich.panel import Panel
from rich.prompt import Confirm, Prompt
from rich.table import Table

from .config import load_settings
from .engine.phases import Action
from .errors import GameError
from .service import GameService


console = Console()


def setup_logging(level: int = logging.WARNING) -> None:
    """Route log records through rich."""
    logging.basicConfig(
        level=level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=console, rich_tracebacks=True)],
    )


def display_welcome():
    """Display welcome message."""
    console.print(Panel.fit(
        "[bold red]IMPOSTOR[/bold red]\n"
        "[dim]Everyone knows the secret player. Except one of you.[/dim]",
        border_style="red",
    ))
    console.print()


def parse_names(raw: str) -> list[str]:
    """Split a comma separated list of names, dropping blanks."""
    return [name.strip() for name in raw.split(",") if name.strip()]


def display_players(state: dict):
    """Display the roster."""
    table = Table(title="Players", show_header=True, header_style="bold magenta")
    table.add_column("Name", style="cyan")
    table.add_column("Status", style="green")

    for player in state["players"]:
        status = "[green]In play[/green]" if player["alive"] else "[red]Eliminated[/red]"
        host = " [dim](host)[/dim]" if player["id"] == state["host_id"] else ""
        table.add_row(player["name"] + host, status)

    console.print(table)
    console.print()


async def reveal_secrets(service: GameService, room_id: str, players: list[dict]):
    """Show each alive player their secret, one at a time."""
    for player in players:
        if not player["alive"]:
            continue
        Prompt.ask(f"[yellow]Pass the device to {player['name']} and press Enter[/yellow]", default="")
        state = await service.get_state(room_id, viewer_id=player["id"])
        secret = state["you"]["assigned_secret"]
        if secret:
            body = f"The secret player is [bold green]{secret['name']}[/bold green] ({secret['club']})"
        else:
            body = "[bold red]You are the impostor.[/bold red] Blend in!"
        console.print(Panel(body, title=player["name"], border_style="blue"))
        Prompt.ask("[dim]Memorize it, then press Enter to hide[/dim]", default="")
        console.clear()


async def confirm_all(service: GameService, room_id: str, players: list[dict], action: Action) -> dict:
    """Have every listed player confirm the action; returns the last outcome."""
    outcome = {}
    for player in players:
        outcome = await service.confirm(room_id, player["id"], action)
        if outcome["executed"]:
            break
    return outcome


async def play_clue_round(service: GameService, room_id: str) -> dict:
    """Collect clues, then votes, then reveal the outcome."""
    state = await service.get_state(room_id)
    alive = [p for p in state["players"] if p["alive"]]

    console.rule(f"[yellow]Round {state['round_number']} - Clues[/yellow]")
    for player in alive:
        while True:
            text = Prompt.ask(f"[cyan]{player['name']}[/cyan], your clue")
            try:
                await service.submit_clue(room_id, player["id"], text)
                break
            except GameError as e:
                console.print(f"[red]{e.message}[/red]")

    await confirm_all(service, room_id, alive, Action.VOTE_PHASE)

    console.rule("[blue]Voting[/blue]")
    by_name = {p["name"]: p["id"] for p in alive}
    for player in alive:
        target = Prompt.ask(
            f"[cyan]{player['name']}[/cyan], who is the impostor?",
            choices=list(by_name),
        )
        await service.submit_vote(room_id, player["id"], by_name[target])

    outcome = await confirm_all(service, room_id, alive, Action.SHOW_RESULTS)
    return outcome["results"]


def display_results(result: dict, names: dict[str, str]):
    """Display the outcome of a vote."""
    console.print()
    if result["success"]:
        style = "green"
    elif result["game_over"]:
        style = "red"
    else:
        style = "yellow"
    console.print(Panel(f"[bold {style}]{result['message']}[/bold {style}]", border_style=style))

    table = Table(title="Votes", show_header=True, header_style="bold")
    table.add_column("Voter", style="cyan")
    table.add_column("Voted For", style="magenta")
    for vote in result["votes"]:
        table.add_row(names[vote["voter_id"]], names[vote["target_id"]])
    console.print(table)
    console.print()


async def main():
    """Main entry point."""
    setup_logging()
    display_welcome()

    config_path = sys.argv[1] if len(sys.argv) > 1 else None
    settings = load_settings(config_path)
    service = GameService(settings)

    while True:
        names = parse_names(Prompt.ask("Player names, comma separated (the first one hosts)"))
        try:
            created = await service.create(names)
            break
        except GameError as e:
            console.print(f"[red]{e.message}[/red]")

    room_id = created["room_id"]
    host_id = created["host_id"]
    await confirm_all(service, room_id, created["players"], Action.START)

    while True:
        state = await service.get_state(room_id)
        names_by_id = {p["id"]: p["name"] for p in state["players"]}
        display_players(state)
        if state["round_number"] == 1:
            await reveal_secrets(service, room_id, state["players"])

        result = await play_clue_round(service, room_id)
        display_results(result, names_by_id)

        if result["awaiting"] == Action.NEXT_CLUE.value:
            state = await service.get_state(room_id)
            alive = [p for p in state["players"] if p["alive"]]
            await confirm_all(service, room_id, alive, Action.NEXT_CLUE)
            continue

        if not Confirm.ask("Play another game?"):
            break
        await service.force(room_id, host_id, Action.NEXT_ROUND)

    if settings.journal_dir:
        console.print(f"[dim]Game journal saved under: {settings.journal_dir}[/dim]")


def run():
    """Entry point for the CLI."""
    try:
        asyncio.run(main())
    except KeyboardInterrupt:
        console.print("\n[yellow]Game interrupted by user.[/yellow]")
        sys.exit(0)


if __name__ == "__main__":
    run()
