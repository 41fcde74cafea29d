from impostor.communication.views import room_snapshot
from impostor.engine.phases import Action
from impostor.engine.quorum import ConfirmationQuorum


def test_lobby_snapshot(room):
    state = room_snapshot(room)

    assert state["phase"] == "lobby"
    assert state["you"] is None
    assert state["host_id"] == room.players[0].id
    assert state["confirmations"] == {action.value: 0 for action in Action}
    assert state["required"]["start"] == 3
    assert state["results"] is None


def test_only_the_viewer_sees_their_secret(room, catalog, rng):
    ConfirmationQuorum(catalog, rng).force(room, room.host_id, Action.START)
    crew = next(p for p in room.players if p.role.value == "crew")
    impostor = room.impostor

    crew_view = room_snapshot(room, crew.id)
    assert crew_view["you"]["assigned_secret"] == room.secret_target.public_view()
    assert crew_view["you"]["role"] == "crew"

    impostor_view = room_snapshot(room, impostor.id)
    assert impostor_view["you"]["assigned_secret"] is None

    for state in (crew_view, impostor_view, room_snapshot(room)):
        for entry in state["players"]:
            assert set(entry) == {"id", "name", "alive"}
        assert "secret_target" not in state


def test_unknown_viewer_gets_public_view(room):
    assert room_snapshot(room, "stranger")["you"] is None


def test_results_are_serialized(room, catalog, rng):
    quorum = ConfirmationQuorum(catalog, rng)
    quorum.force(room, room.host_id, Action.START)
    quorum.force(room, room.host_id, Action.VOTE_PHASE)
    quorum.force(room, room.host_id, Action.SHOW_RESULTS)

    state = room_snapshot(room)
    assert state["phase"] == "results"
    assert state["awaiting"] == "nextClue"
    assert state["results"]["awaiting"] == "nextClue"
