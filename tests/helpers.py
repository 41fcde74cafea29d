"""Shared steps for driving a room through the service."""

from impostor.engine.phases import Action
from impostor.service import GameService


async def start_room(service: GameService, names: list[str]) -> tuple[str, list[dict]]:
    """Create a room and start it through the start quorum."""
    created = await service.create(names)
    room_id = created["room_id"]
    for player in created["players"]:
        await service.confirm(room_id, player["id"], Action.START)
    return room_id, created["players"]


async def confirm_alive(service: GameService, room_id: str, action: Action) -> dict:
    """Every alive player confirms; returns the final outcome."""
    state = await service.get_state(room_id)
    outcome = {}
    for player in state["players"]:
        if player["alive"]:
            outcome = await service.confirm(room_id, player["id"], action)
    return outcome
