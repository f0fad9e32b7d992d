"""Deck creation utilities for pinochle."""

from __future__ import annotations

from collections import Counter
from random import Random
from typing import Iterable, List, Optional, Sequence

from .cards import Card, RANK_ORDER, Suit

COPIES_PER_CARD = 2
DECK_SIZE = len(Suit) * len(RANK_ORDER) * COPIES_PER_CARD
HAND_SIZE = DECK_SIZE // 4


def build_deck() -> List[Card]:
    """Return the ordered 48-card double deck."""
    return [Card(rank, suit) for suit in Suit for rank in RANK_ORDER for _ in range(COPIES_PER_CARD)]


def deck_counts() -> Counter:
    return Counter(build_deck())


def deal_four(
    *,
    rng: Optional[Random] = None,
    deck: Optional[Sequence[Card]] = None,
) -> List[List[Card]]:
    """Deal four 12-card hands, in seat order."""
    if deck is not None:
        cards = list(deck)
    else:
        cards = build_deck()
        if rng is None:
            rng = Random()
        rng.shuffle(cards)
    if Counter(cards) != deck_counts():
        raise ValueError("Deck must contain exactly two copies of each of the 24 cards.")

    return [cards[index * HAND_SIZE : (index + 1) * HAND_SIZE] for index in range(4)]


def remove_cards(pool: Iterable[Card], taken: Iterable[Card]) -> List[Card]:
    """Multiset difference keeping the order of ``pool``."""
    remaining = Counter(taken)
    result: List[Card] = []
    for card in pool:
        if remaining[card] > 0:
            remaining[card] -= 1
        else:
            result.append(card)
    return result
