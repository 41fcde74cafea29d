import pytest

from impostor.engine.game import apply_action, start_new_game, start_next_clue_round
from impostor.engine.phases import Action, GamePhase
from impostor.engine.roles import Role
from impostor.engine.room import Clue, Vote
from impostor.errors import MalformedInput, PhaseViolation


def test_start_deals_roles_and_opens_clues(room, catalog, rng):
    room.confirmations[Action.START].add(room.players[0].id)
    result = apply_action(room, Action.START, catalog, rng)

    assert result is None
    assert room.phase == GamePhase.CLUES
    assert room.round_number == 1
    assert sum(p.role == Role.IMPOSTOR for p in room.players) == 1
    assert all(not confirmed for confirmed in room.confirmations.values())


def test_illegal_action_leaves_room_untouched(room, catalog, rng):
    with pytest.raises(PhaseViolation):
        apply_action(room, Action.SHOW_RESULTS, catalog, rng)
    assert room.phase == GamePhase.LOBBY
    assert room.last_result is None


def test_start_with_empty_catalog_fails_before_mutating(room, rng):
    with pytest.raises(MalformedInput):
        apply_action(room, Action.START, [], rng)
    assert room.phase == GamePhase.LOBBY


def test_show_results_moves_to_results(room, catalog, rng):
    apply_action(room, Action.START, catalog, rng)
    apply_action(room, Action.VOTE_PHASE, catalog, rng)
    result = apply_action(room, Action.SHOW_RESULTS, catalog, rng)

    assert room.phase == GamePhase.RESULTS
    assert result is room.last_result


def test_next_clue_round_keeps_impostor_and_secret(room, catalog, rng):
    apply_action(room, Action.START, catalog, rng)
    impostor, secret = room.impostor, room.secret_target
    room.clues.append(Clue(player_id=impostor.id, text="goal"))
    room.votes.append(Vote(voter_id=impostor.id, target_id=room.players[0].id))

    start_next_clue_round(room)

    assert room.impostor is impostor
    assert room.secret_target is secret
    assert room.clues == [] and room.votes == []
    assert room.round_number == 2
    assert room.phase == GamePhase.CLUES


def test_new_game_revives_everyone(room, catalog, rng):
    apply_action(room, Action.START, catalog, rng)
    room.players[1].alive = False
    room.game_over = True
    room.impostor_won = True

    start_new_game(room, catalog, rng)

    assert all(p.alive for p in room.players)
    assert sum(p.role == Role.IMPOSTOR for p in room.players) == 1
    assert not room.game_over and not room.impostor_won
    assert room.awaiting is None
    assert room.phase == GamePhase.CLUES
