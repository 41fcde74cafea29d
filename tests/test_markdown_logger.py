import shutil

from impostor.communication.markdown_logger import MarkdownLogger
from impostor.config import Settings
from impostor.engine.phases import Action, GamePhase
from impostor.service import GameService


async def test_journal_records_a_full_game(tmp_path, catalog, rng):
    settings = Settings(room_idle_timeout=None, journal_dir=str(tmp_path), catalog=catalog)
    service = GameService(settings, rng=rng)
    assert isinstance(service.journal, MarkdownLogger)

    created = await service.create(["Ana", "Bruno", "Carla"])
    room_id, host = created["room_id"], created["host_id"]
    room = service.registry.get(room_id)

    await service.force(room_id, host, Action.START)
    for player in room.players:
        await service.submit_clue(room_id, player.id, f"hint-{player.name}")
    await service.force(room_id, host, Action.VOTE_PHASE)
    for player in room.players:
        await service.submit_vote(room_id, player.id, room.impostor.id)
    await service.force(room_id, host, Action.SHOW_RESULTS)

    room_dir = service.journal.room_dir(room_id)
    game_state = (room_dir / "game_state.md").read_text()
    assert "# Impostor Room" in game_state
    assert "## Players" in game_state
    assert "# GAME OVER" in game_state
    assert f"The impostor was **{room.impostor.name}**" in game_state
    assert "Winner: CREW" in game_state

    clues = (room_dir / "clues" / "round_1.md").read_text()
    assert "hint-Ana" in clues

    votes = (room_dir / "votes" / "round_1.md").read_text()
    assert "3 votes" in votes


async def test_no_journal_by_default(service):
    assert service.journal is None


async def test_unusable_journal_dir_does_not_block_create(tmp_path, catalog, rng, caplog):
    blocker = tmp_path / "not_a_dir"
    blocker.write_text("occupied")
    settings = Settings(room_idle_timeout=None, journal_dir=str(blocker), catalog=catalog)
    service = GameService(settings, rng=rng)

    created = await service.create(["Ana", "Bruno", "Carla"])

    assert created["room_id"] in service.registry
    assert len(service.registry) == 1
    assert "journal start_room failed" in caplog.text


async def test_lost_room_journal_does_not_block_transitions(tmp_path, catalog, rng):
    settings = Settings(room_idle_timeout=None, journal_dir=str(tmp_path), catalog=catalog)
    service = GameService(settings, rng=rng)
    created = await service.create(["Ana", "Bruno", "Carla"])
    room_id = created["room_id"]
    shutil.rmtree(service.journal.room_dir(room_id))

    outcome = await service.force(room_id, created["host_id"], Action.START)

    assert outcome["executed"]
    assert service.registry.get(room_id).phase == GamePhase.CLUES
