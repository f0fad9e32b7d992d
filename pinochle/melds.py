"""Meld bonus evaluation for revealed cards."""

from __future__ import annotations

from collections import Counter
from typing import Iterable, Sequence, Tuple

from .cards import Card, Rank, Suit
from .rules_schema import DEFAULT_RULES, MeldSchedule

PINOCHLE: Tuple[Card, ...] = (Card(Rank.QUEEN, Suit.SPADES), Card(Rank.JACK, Suit.DIAMONDS))
RUN_RANKS: Tuple[Rank, ...] = (Rank.JACK, Rank.QUEEN, Rank.KING, Rank.TEN, Rank.ACE)


def _copies(counts: Counter, pattern: Sequence[Card]) -> int:
    """How many complete copies of ``pattern`` are present, capped at two."""
    return min(min(counts[card] for card in pattern), 2)


def _pay(copies: int, pair: Tuple[int, int]) -> int:
    if copies >= 2:
        return pair[1]
    if copies == 1:
        return pair[0]
    return 0


def run_cards(trump: Suit) -> Tuple[Card, ...]:
    return tuple(Card(rank, trump) for rank in RUN_RANKS)


def bonus_points(cards: Iterable[Card], trump: Suit, schedule: MeldSchedule = DEFAULT_RULES.melds) -> int:
    """Return the meld bonus of a revealed set of cards under ``trump``.

    Each pattern pays once when every card of it is present and its doubled
    value when two copies of every card are present. A trump run and its
    marriage do not stack: the king and queen used by a run are not counted
    again as a marriage, so a run pays 110 rather than 150.
    """
    counts = Counter(cards)
    total = _pay(_copies(counts, PINOCHLE), schedule.pinochle)

    runs = _copies(counts, run_cards(trump))
    total += _pay(runs, schedule.trump_run)

    for rank_name, points in schedule.rounds.items():
        rank = Rank[rank_name.upper()]
        pattern = [Card(rank, suit) for suit in Suit]
        total += _pay(_copies(counts, pattern), (points, points * schedule.round_multiplier))

    for suit in Suit:
        king, queen = Card(Rank.KING, suit), Card(Rank.QUEEN, suit)
        consumed = runs if suit is trump else 0
        marriages = min(counts[king] - consumed, counts[queen] - consumed, 2)
        total += _pay(marriages, schedule.marriage)
        if suit is trump:
            total += _pay(marriages, schedule.trump_marriage)

    total += _pay(_copies(counts, [Card(Rank.NINE, trump)]), schedule.trump_nine)
    return total


def minimal_reveal(hand: Sequence[Card], trump: Suit, schedule: MeldSchedule = DEFAULT_RULES.melds) -> list[int]:
    """Indices of a subset of ``hand`` that still earns the whole hand's bonus.

    Cards are dropped one at a time whenever dropping them keeps the bonus.
    """
    target = bonus_points(hand, trump, schedule)
    kept = list(range(len(hand)))
    for index in range(len(hand)):
        trial = [i for i in kept if i != index]
        if bonus_points([hand[i] for i in trial], trump, schedule) == target:
            kept = trial
    return kept
