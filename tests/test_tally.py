from impostor.engine.phases import Action
from impostor.engine.roles import Role
from impostor.engine.room import Room, Vote
from impostor.engine.tally import evaluate_results, find_accused, tally_votes


def make_room(names, impostor_index=0):
    room = Room.create(names)
    for index, player in enumerate(room.players):
        player.role = Role.IMPOSTOR if index == impostor_index else Role.CREW
    return room


def vote(room, voter, target):
    room.votes.append(Vote(voter_id=room.players[voter].id, target_id=room.players[target].id))


def test_no_votes_means_no_accused(room):
    assert find_accused(room) is None
    assert not tally_votes(room)


def test_strict_majority_is_accused():
    room = make_room(["Ana", "Bruno", "Carla", "Dario"])
    vote(room, 0, 2)
    vote(room, 1, 2)
    vote(room, 2, 1)
    assert find_accused(room) == room.players[2].id
    assert tally_votes(room)[room.players[2].id] == 2


def test_tie_goes_to_earliest_joined():
    room = make_room(["Ana", "Bruno", "Carla", "Dario"])
    vote(room, 0, 3)
    vote(room, 3, 1)
    assert find_accused(room) == room.players[1].id


def test_catching_the_impostor_ends_the_game():
    room = make_room(["Ana", "Bruno", "Carla"], impostor_index=2)
    for voter in range(3):
        vote(room, voter, 2)

    result = evaluate_results(room)

    assert result.success
    assert result.game_over
    assert not result.impostor_won
    assert result.awaiting == Action.NEXT_ROUND
    assert all(p.alive for p in room.players)
    assert room.last_result is result


def test_wrong_accusation_with_two_left_lets_impostor_win():
    room = make_room(["Ana", "Bruno", "Carla"], impostor_index=0)
    vote(room, 0, 1)
    vote(room, 2, 1)
    vote(room, 1, 2)

    result = evaluate_results(room)

    assert not result.success
    assert room.players[1].alive is False
    assert result.game_over and result.impostor_won
    assert room.awaiting == Action.NEXT_ROUND


def test_wrong_accusation_with_enough_left_continues():
    room = make_room(["Ana", "Bruno", "Carla", "Dario", "Eva"], impostor_index=4)
    vote(room, 0, 1)
    vote(room, 2, 1)

    result = evaluate_results(room)

    assert not result.game_over
    assert result.awaiting == Action.NEXT_CLUE
    assert len(room.alive_players) == 4


def test_no_votes_eliminates_nobody():
    room = make_room(["Ana", "Bruno", "Carla", "Dario"])
    result = evaluate_results(room)
    assert result.accused_id is None
    assert not result.success
    assert all(p.alive for p in room.players)
    assert result.awaiting == Action.NEXT_CLUE


def test_snapshot_never_names_the_impostor():
    room = make_room(["Ana", "Bruno", "Carla", "Dario"], impostor_index=3)
    vote(room, 0, 1)
    result = evaluate_results(room)
    dumped = result.model_dump(mode="json")
    assert "role" not in str(dumped)
    assert set(dumped["remaining_players"][0]) == {"id", "name", "alive"}
