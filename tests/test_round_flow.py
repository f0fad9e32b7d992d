import copy
from collections import Counter

import pytest

from pinochle.cards import Suit, parse_cards, points_of
from pinochle.deck import build_deck, deal_four, deck_counts
from pinochle.encode import serialize_phase
from pinochle.errors import (
    ActionRejected,
    CardIsNotLegalToPlay,
    IncorrectAction,
    NotTheCurrentPlayer,
    PassingWrongNumberOfCards,
    PlayingNonExtantCard,
)
from pinochle.mechanics import first_legal
from pinochle.round import (
    Bid,
    BiddingPhase,
    DeclareSuit,
    DeclaringTrumpPhase,
    Pass,
    PassingBackPhase,
    PassingToPartnerPhase,
    Play,
    RevealingPhase,
    RoundState,
    ShowPoints,
    winning_bid,
)
from pinochle.scoring import ScoringError, score_round
from pinochle.seats import Seat
from pinochle.state import TrickPhase


def sorted_round():
    """North holds every spade, east clubs, south diamonds, west hearts."""
    return RoundState(hands=deal_four(deck=build_deck()), first_bidder=Seat.NORTH)


def snapshot(round_state):
    return (
        copy.deepcopy(round_state.hands),
        round_state.current_player,
        serialize_phase(round_state.phase),
    )


def assert_cards_conserved(round_state):
    assert Counter(round_state.cards_in_play()) == deck_counts()


def assert_rejected(round_state, seat, action, error):
    before = snapshot(round_state)
    with pytest.raises(error):
        round_state.act(seat, action)
    assert snapshot(round_state) == before


def test_sorted_deal_gives_each_seat_one_suit():
    round_state = sorted_round()
    assert [{card.suit for card in hand} for hand in round_state.hands] == [
        {Suit.SPADES},
        {Suit.CLUBS},
        {Suit.DIAMONDS},
        {Suit.HEARTS},
    ]


def test_earliest_bid_wins_a_tie():
    assert winning_bid(Seat.NORTH, [250, 300, 300, 0]) == (Seat.EAST, 300)
    assert winning_bid(Seat.WEST, [0, 0, 0, 0]) == (Seat.WEST, 0)
    assert winning_bid(Seat.SOUTH, [10, 20, 30, 40]) == (Seat.EAST, 40)


def test_full_sequence_of_phases():
    round_state = sorted_round()
    assert isinstance(round_state.phase, BiddingPhase)

    for seat, amount in zip(Seat, (250, 300, 300, 0)):
        assert round_state.current_player == seat
        round_state.act(seat, Bid(amount))
        assert_cards_conserved(round_state)
    assert isinstance(round_state.phase, DeclaringTrumpPhase)
    assert round_state.current_player == Seat.EAST
    assert round_state.phase.highest_bid == 300

    round_state.act(Seat.EAST, DeclareSuit(Suit.CLUBS))
    assert isinstance(round_state.phase, PassingToPartnerPhase)
    assert round_state.current_player == Seat.WEST
    assert round_state.trump() is Suit.CLUBS

    round_state.act(Seat.WEST, Pass((0, 1, 2, 3)))
    assert isinstance(round_state.phase, PassingBackPhase)
    assert round_state.current_player == Seat.EAST
    assert len(round_state.hands[Seat.EAST]) == 16
    assert round_state.hands[Seat.EAST][-4:] == parse_cards("9H 9H JH JH")
    assert_cards_conserved(round_state)

    round_state.act(Seat.EAST, Pass((0, 1, 2, 3)))
    assert isinstance(round_state.phase, RevealingPhase)
    assert round_state.current_player == Seat.EAST
    assert [len(hand) for hand in round_state.hands] == [12, 12, 12, 12]
    assert round_state.hands[Seat.WEST][-4:] == parse_cards("9C 9C JC JC")
    assert_cards_conserved(round_state)

    # King and queen of trump; a repeated index is shown once.
    round_state.act(Seat.EAST, ShowPoints((2, 0, 0)))
    assert round_state.phase.extra_points == [0, 40]
    assert round_state.current_player == Seat.SOUTH
    round_state.act(Seat.SOUTH, ShowPoints(()))
    round_state.act(Seat.WEST, ShowPoints((8,)))
    round_state.act(Seat.NORTH, ShowPoints((0, 1)))

    phase = round_state.phase
    assert isinstance(phase, TrickPhase)
    assert phase.extra_points == [0, 50]
    assert phase.trick.leader == Seat.EAST
    assert round_state.current_player == Seat.EAST
    assert set(round_state.reveals) == set(Seat)
    assert round_state.reveals[Seat.EAST] == parse_cards("QC KC")
    assert round_state.opening is not None
    assert_cards_conserved(round_state)


def test_out_of_turn_and_wrong_phase_are_rejected_without_change():
    round_state = sorted_round()
    assert_rejected(round_state, Seat.SOUTH, Bid(100), NotTheCurrentPlayer)
    assert_rejected(round_state, Seat.NORTH, Play(0), IncorrectAction)
    assert_rejected(round_state, Seat.NORTH, DeclareSuit(Suit.HEARTS), IncorrectAction)
    assert_rejected(round_state, Seat.NORTH, Bid("300"), IncorrectAction)
    assert_rejected(round_state, Seat.NORTH, Bid(True), IncorrectAction)

    for seat in Seat:
        round_state.act(seat, Bid(0))
    assert round_state.current_player == Seat.NORTH
    assert_rejected(round_state, Seat.NORTH, DeclareSuit("spades"), IncorrectAction)
    assert_rejected(round_state, Seat.NORTH, Bid(10), IncorrectAction)


def test_pass_must_name_the_right_cards():
    round_state = sorted_round()
    for seat in Seat:
        round_state.act(seat, Bid(0))
    round_state.act(Seat.NORTH, DeclareSuit(Suit.SPADES))
    assert round_state.current_player == Seat.SOUTH

    assert_rejected(round_state, Seat.NORTH, Pass((0, 1, 2, 3)), NotTheCurrentPlayer)
    assert_rejected(round_state, Seat.SOUTH, Pass((0, 1, 2)), PassingWrongNumberOfCards)
    assert_rejected(round_state, Seat.SOUTH, Pass((0, 1, 2, 3, 4)), PassingWrongNumberOfCards)
    assert_rejected(round_state, Seat.SOUTH, Pass((0, 0, 1, 2)), PassingWrongNumberOfCards)
    assert_rejected(round_state, Seat.SOUTH, Pass((0, 1, 2, 12)), PlayingNonExtantCard)
    assert_rejected(round_state, Seat.SOUTH, Pass((-1, 1, 2, 3)), PlayingNonExtantCard)
    assert_rejected(round_state, Seat.SOUTH, ShowPoints(()), IncorrectAction)


def test_reveal_index_out_of_range_is_rejected():
    round_state = sorted_round()
    for seat in Seat:
        round_state.act(seat, Bid(0))
    round_state.act(Seat.NORTH, DeclareSuit(Suit.SPADES))
    round_state.act(Seat.SOUTH, Pass((0, 1, 2, 3)))
    round_state.act(Seat.NORTH, Pass((0, 1, 2, 3)))
    assert_rejected(round_state, Seat.NORTH, ShowPoints((0, 12)), PlayingNonExtantCard)


def play_to_tricks(round_state, amount):
    """North wins the bid with ``amount``, spades are trump and nothing is shown."""
    round_state.act(Seat.NORTH, Bid(amount))
    for seat in (Seat.EAST, Seat.SOUTH, Seat.WEST):
        round_state.act(seat, Bid(0))
    round_state.act(Seat.NORTH, DeclareSuit(Suit.SPADES))
    round_state.act(Seat.SOUTH, Pass((0, 1, 2, 3)))
    round_state.act(Seat.NORTH, Pass((0, 1, 2, 3)))
    for seat in (Seat.NORTH, Seat.EAST, Seat.SOUTH, Seat.WEST):
        round_state.act(seat, ShowPoints(()))


def test_illegal_card_is_rejected_and_trick_resolves():
    round_state = sorted_round()
    play_to_tricks(round_state, 250)
    assert round_state.hands[Seat.NORTH] == parse_cards("QS QS KS KS TS TS AS AS 9D 9D JD JD")
    assert round_state.hands[Seat.SOUTH] == parse_cards("QD QD KD KD TD TD AD AD 9S 9S JS JS")

    assert_rejected(round_state, Seat.NORTH, Play(12), PlayingNonExtantCard)
    round_state.act(Seat.NORTH, Play(0))
    round_state.act(Seat.EAST, Play(0))
    # South still holds low spades and must follow with one.
    assert_rejected(round_state, Seat.SOUTH, Play(0), CardIsNotLegalToPlay)
    round_state.act(Seat.SOUTH, Play(8))
    round_state.act(Seat.WEST, Play(0))
    assert_cards_conserved(round_state)

    phase = round_state.phase
    assert phase.last_trick_winner == Seat.NORTH
    assert round_state.current_player == Seat.NORTH
    assert phase.trick.is_empty()
    assert points_of(phase.piles[0]) == 5
    assert [str(card) for _, card in round_state.play_log] == ["QS", "9C", "9S", "9H"]


def test_set_back_round_end_to_end():
    round_state = sorted_round()
    play_to_tricks(round_state, 1000)

    result = None
    while result is None:
        seat = round_state.current_player
        phase = round_state.phase
        index = first_legal(round_state.hands[seat], phase.trick.cards, phase.trump)
        assert index >= 0
        result = round_state.act(seat, Play(index))
        assert_cards_conserved(round_state)

    phase = round_state.phase
    assert round_state.is_finished()
    assert all(not hand for hand in round_state.hands)
    assert points_of(phase.piles[0]) + points_of(phase.piles[1]) == 240
    bonus = 10 if phase.last_trick_winner.team == 1 else 0
    assert result.set_back
    assert result.bidding_team == 0
    assert result.team_scores[0] == -1000
    assert result.team_scores[1] == points_of(phase.piles[1]) + bonus
    assert result.raw_totals[0] + result.raw_totals[1] == 250

    with pytest.raises(IncorrectAction):
        round_state.act(round_state.current_player, Play(0))


def test_bid_reached_keeps_raw_total():
    round_state = sorted_round()
    play_to_tricks(round_state, 0)
    result = None
    while result is None:
        seat = round_state.current_player
        phase = round_state.phase
        result = round_state.act(seat, Play(first_legal(round_state.hands[seat], phase.trick.cards, phase.trump)))
    assert not result.set_back
    assert result.team_scores == result.raw_totals


def test_rejections_share_a_base_class():
    round_state = sorted_round()
    with pytest.raises(ActionRejected):
        round_state.act(Seat.WEST, Bid(0))


def test_round_requires_four_hands():
    with pytest.raises(ValueError):
        RoundState(hands=[[], [], []], first_bidder=Seat.NORTH)


def play_out(round_state):
    result = None
    while result is None:
        seat = round_state.current_player
        phase = round_state.phase
        result = round_state.act(seat, Play(first_legal(round_state.hands[seat], phase.trick.cards, phase.trump)))
        assert_cards_conserved(round_state)
    return result


def test_defending_meld_counts_toward_the_round_score():
    hands = deal_four(deck=build_deck())
    # Swap a jack of spades for a jack of diamonds so north holds a pinochle.
    hands[Seat.NORTH][2], hands[Seat.SOUTH][2] = hands[Seat.SOUTH][2], hands[Seat.NORTH][2]
    round_state = RoundState(hands=hands, first_bidder=Seat.NORTH)
    for seat, amount in zip(Seat, (0, 1000, 0, 0)):
        round_state.act(seat, Bid(amount))
    round_state.act(Seat.EAST, DeclareSuit(Suit.CLUBS))
    round_state.act(Seat.WEST, Pass((0, 1, 2, 3)))
    round_state.act(Seat.EAST, Pass((0, 1, 2, 3)))
    for seat in (Seat.EAST, Seat.SOUTH, Seat.WEST):
        round_state.act(seat, ShowPoints(()))
    assert [str(card) for card in round_state.hands[Seat.NORTH][2:5:2]] == ["JD", "QS"]
    round_state.act(Seat.NORTH, ShowPoints((2, 4)))
    assert round_state.phase.extra_points == [40, 0]

    result = play_out(round_state)
    phase = round_state.phase
    bonus = 10 if phase.last_trick_winner.team == 0 else 0
    assert result.set_back
    assert result.team_scores[1] == -1000
    assert result.team_scores[0] == points_of(phase.piles[0]) + bonus + 40


def test_meld_lets_the_bidder_make_the_bid():
    round_state = sorted_round()
    round_state.act(Seat.NORTH, Bid(1000))
    for seat in (Seat.EAST, Seat.SOUTH, Seat.WEST):
        round_state.act(seat, Bid(0))
    round_state.act(Seat.NORTH, DeclareSuit(Suit.SPADES))
    round_state.act(Seat.SOUTH, Pass((0, 1, 2, 3)))
    # North sends the diamonds back and keeps every spade.
    round_state.act(Seat.NORTH, Pass((12, 13, 14, 15)))
    round_state.act(Seat.NORTH, ShowPoints(tuple(range(12))))
    assert round_state.phase.extra_points == [1440, 0]
    for seat in (Seat.EAST, Seat.SOUTH, Seat.WEST):
        round_state.act(seat, ShowPoints(()))

    result = play_out(round_state)
    phase = round_state.phase
    bonus = 10 if phase.last_trick_winner.team == 0 else 0
    captured = points_of(phase.piles[0]) + bonus
    assert captured < 1000
    assert not result.set_back
    assert result.team_scores[0] == result.raw_totals[0] == captured + 1440


def test_score_round_adds_meld_and_sets_back_the_bidder():
    result = score_round(
        piles=[parse_cards("AS TS"), parse_cards("KH")],
        last_trick_team=1,
        extra_points=[0, 40],
        bidding_team=0,
        highest_bid=50,
    )
    assert result.raw_totals == (20, 55)
    assert result.team_scores == (-50, 55)
    assert result.set_back

    made = score_round(
        piles=[parse_cards("AS TS"), parse_cards("KH")],
        last_trick_team=1,
        extra_points=[40, 0],
        bidding_team=0,
        highest_bid=50,
    )
    assert made.team_scores == (60, 15)
    assert not made.set_back


def test_score_round_rejects_bad_teams():
    with pytest.raises(ScoringError):
        score_round(piles=[[], []], last_trick_team=2, extra_points=[0, 0], bidding_team=0, highest_bid=0)
    with pytest.raises(ScoringError):
        score_round(piles=[[]], last_trick_team=0, extra_points=[0, 0], bidding_team=0, highest_bid=0)
