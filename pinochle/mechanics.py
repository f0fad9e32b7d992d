"""Legal move generation for pinochle."""

from __future__ import annotations

from typing import Iterable, List, Sequence

from .cards import Card, Suit, highest_of_suit, rank_exceeds
from .trick import Trick


def _can_beat(hand: Iterable[Card], best: Card) -> bool:
    return any(card.suit is best.suit and rank_exceeds(card.rank, best.rank) for card in hand)


def is_legal_play(trick_cards: Sequence[Card], hand: Sequence[Card], candidate: Card, trump: Suit) -> bool:
    """Return True if ``candidate`` may be played from ``hand`` onto the trick.

    Players must follow the lead suit, otherwise trump, and in either case must
    beat the best card of that suit already in the trick when they are able to.
    """
    if not trick_cards:
        return True

    lead = trick_cards[0].suit
    if candidate.suit is not lead:
        if any(card.suit is lead for card in hand):
            return False
        if candidate.suit is not trump and any(card.suit is trump for card in hand):
            return False

    if candidate.suit is lead:
        best = highest_of_suit(trick_cards, lead)
        assert best is not None
        return rank_exceeds(candidate.rank, best.rank) or not _can_beat(hand, best)

    if candidate.suit is trump:
        best_trump = highest_of_suit(trick_cards, trump)
        if best_trump is not None and not rank_exceeds(candidate.rank, best_trump.rank):
            return not _can_beat(hand, best_trump)

    return True


def legal_moves(hand: Sequence[Card], trick: Trick, trump: Suit) -> List[Card]:
    """Return the legal cards of ``hand`` in hand order."""
    return [card for card in hand if is_legal_play(trick.cards, hand, card, trump)]


def legal_indices(hand: Sequence[Card], trick: Trick, trump: Suit) -> List[int]:
    return [index for index, card in enumerate(hand) if is_legal_play(trick.cards, hand, card, trump)]


def first_legal(hand: Sequence[Card], trick_cards: Sequence[Card], trump: Suit) -> int:
    """Index of the first legal card in hand order, or -1 if none is legal."""
    for index, card in enumerate(hand):
        if is_legal_play(trick_cards, hand, card, trump):
            return index
    return -1
