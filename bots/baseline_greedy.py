"""Baseline greedy bot."""

from __future__ import annotations

from typing import List, Sequence

from pinochle.cards import CARD_POINTS, Card, Suit, card_strength, points_of
from pinochle.melds import bonus_points, minimal_reveal
from pinochle.round import PassingToPartnerPhase, RoundState
from pinochle.seats import Seat

from .base import BotStrategy

BID_STEP = 10


def _best_trump(cards: Sequence[Card]) -> Suit:
    """Suit that maximises meld, then length, then strength."""

    def key(suit: Suit):
        in_suit = [card for card in cards if card.suit is suit]
        return (bonus_points(cards, suit), len(in_suit), sum(card_strength(card) for card in in_suit))

    return max(Suit, key=key)


def estimate_bid(cards: Sequence[Card]) -> int:
    """Rough bid: best meld plus half the counters held, rounded down to ten."""
    trump = _best_trump(cards)
    estimate = bonus_points(cards, trump) + points_of(cards) // 2
    return estimate - estimate % BID_STEP


class GreedyBot(BotStrategy):
    name = "Greedy"

    def offer_bid(self, round_state: RoundState, seat: Seat) -> int:
        return estimate_bid(round_state.hands[seat])

    def choose_trump(self, round_state: RoundState, seat: Seat) -> Suit:
        return _best_trump(round_state.hands[seat])

    def choose_pass(self, round_state: RoundState, seat: Seat) -> Sequence[int]:
        phase = round_state.phase
        hand = round_state.hands[seat]
        trump = round_state.trump()
        count = round_state.rules.pass_size
        if isinstance(phase, PassingToPartnerPhase):
            # Feed the bid winner trump and aces.
            ranked = sorted(
                range(len(hand)),
                key=lambda i: (hand[i].suit is trump, card_strength(hand[i])),
                reverse=True,
            )
            return ranked[:count]
        keep = set(minimal_reveal(hand, trump))
        ranked = sorted(
            range(len(hand)),
            key=lambda i: (i in keep, hand[i].suit is trump, CARD_POINTS[hand[i].rank], card_strength(hand[i])),
        )
        return ranked[:count]

    def choose_reveal(self, round_state: RoundState, seat: Seat) -> List[int]:
        trump = round_state.trump()
        return minimal_reveal(round_state.hands[seat], trump)
