import pytest

from pinochle.cards import deserialize_card
from pinochle.encode import deserialize_action
from pinochle.errors import NotTheCurrentPlayer
from pinochle.game import Game
from pinochle.round import Bid
from pinochle.service import GameService


def drive_to_play(service):
    for seat in range(4):
        service.act(seat, {"type": "bid", "amount": 0})
    service.act(0, {"type": "declare_suit", "suit": "hearts"})
    service.act(2, {"type": "pass", "indices": [0, 1, 2, 3]})
    service.act(0, {"type": "pass", "indices": [0, 1, 2, 3]})
    for seat in range(4):
        service.act(seat, {"type": "show_points", "indices": []})


def test_view_hides_legal_moves_outside_own_turn():
    service = GameService(Game(seed=4))
    view = service.get_view(1)
    assert view.legal_indices == []
    assert len(view.hand) == 12
    assert len(view.hand_labels) == 12
    assert " of " in view.hand_labels[0]

    drive_to_play(service)
    leader = service.get_view(0)
    assert leader.info.phase["name"] == "play"
    assert leader.legal_indices == list(range(12))
    assert service.get_view(1).legal_indices == []


def test_hand_is_serialized_per_seat():
    game = Game(seed=4)
    service = GameService(game)
    cards = [deserialize_card(payload) for payload in service.hand(3)]
    assert cards == game.player_hand(3)


def test_round_result_reports_team_scores():
    service = GameService(Game(seed=6))
    drive_to_play(service)
    result = None
    while result is None or result.round_scores is None:
        view = service.get_view(int(service.game.round.current_player))
        result = service.act(int(view.perspective), {"type": "play", "index": view.legal_indices[0]})
    assert result.set_back is False
    assert result.round_scores == service.info().scores


def test_history_round_trips_through_the_dict_format():
    service = GameService(Game(seed=1))
    service.act(0, {"type": "bid", "amount": 120})
    service.act(1, {"type": "bid", "amount": 0})
    history = service.history()
    assert history == [
        {"seat": 0, "action": {"type": "bid", "amount": 120}},
        {"seat": 1, "action": {"type": "bid", "amount": 0}},
    ]
    assert [deserialize_action(entry["action"]) for entry in history] == [Bid(120), Bid(0)]


def test_bad_payloads_and_seats_are_rejected():
    service = GameService(Game(seed=1))
    with pytest.raises(ValueError):
        service.act(0, {"type": "fold"})
    with pytest.raises(ValueError):
        service.act(0, {"type": "bid"})
    with pytest.raises(ValueError):
        service.act(0, {"type": "pass", "indices": 3})
    with pytest.raises(ValueError):
        service.act(0, {"type": "declare_suit", "suit": "stars"})
    with pytest.raises(ValueError):
        service.act(7, {"type": "bid", "amount": 0})
    with pytest.raises(NotTheCurrentPlayer):
        service.act(2, {"type": "bid", "amount": 0})
    assert service.history() == []
