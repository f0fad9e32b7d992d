"""Card-related data structures and helpers for pinochle."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto
from typing import Iterable, List, Mapping, Optional


class Suit(Enum):
    SPADES = auto()
    CLUBS = auto()
    DIAMONDS = auto()
    HEARTS = auto()

    def __str__(self) -> str:
        return self.name.lower()


class Rank(Enum):
    NINE = auto()
    JACK = auto()
    QUEEN = auto()
    KING = auto()
    TEN = auto()
    ACE = auto()

    def __str__(self) -> str:
        return self.name.lower()


# Counting values; the deck totals 240.
CARD_POINTS: dict[Rank, int] = {
    Rank.NINE: 0,
    Rank.JACK: 0,
    Rank.QUEEN: 5,
    Rank.KING: 5,
    Rank.TEN: 10,
    Rank.ACE: 10,
}

# Rank order from lowest to highest for trick resolution.
RANK_ORDER: list[Rank] = [
    Rank.NINE,
    Rank.JACK,
    Rank.QUEEN,
    Rank.KING,
    Rank.TEN,
    Rank.ACE,
]

RANK_STRENGTH: dict[Rank, int] = {rank: index for index, rank in enumerate(RANK_ORDER)}

RANK_CODES: dict[Rank, str] = {
    Rank.NINE: "9",
    Rank.JACK: "J",
    Rank.QUEEN: "Q",
    Rank.KING: "K",
    Rank.TEN: "T",
    Rank.ACE: "A",
}

SUIT_CODES: dict[Suit, str] = {
    Suit.SPADES: "S",
    Suit.CLUBS: "C",
    Suit.DIAMONDS: "D",
    Suit.HEARTS: "H",
}


@dataclass(frozen=True)
class Card:
    """Immutable representation of a playing card.

    The deck holds two copies of every card; copies compare equal.
    """

    rank: Rank
    suit: Suit

    def point_value(self) -> int:
        return CARD_POINTS[self.rank]

    @property
    def code(self) -> str:
        return RANK_CODES[self.rank] + SUIT_CODES[self.suit]

    def __str__(self) -> str:
        return self.code


def card_strength(card: Card) -> int:
    """Return an integer strength used for ordering cards within a suit."""
    return RANK_STRENGTH[card.rank]


def rank_exceeds(rank: Rank, bound: Rank) -> bool:
    return RANK_STRENGTH[rank] > RANK_STRENGTH[bound]


def compare(a: Card, b: Card, trump: Suit, lead: Suit) -> int:
    """Three-way comparison of two cards within a trick.

    Returns a positive number if ``a`` wins, negative if ``b`` wins and zero
    for identical cards or two cards of unrelated off suits.
    """
    if a.suit is b.suit:
        return card_strength(a) - card_strength(b)
    if a.suit is trump:
        return 1
    if b.suit is trump:
        return -1
    if a.suit is lead:
        return 1
    if b.suit is lead:
        return -1
    return 0


def parse_card(code: str) -> Card:
    """Build a card from its two-character code, e.g. ``"QS"`` or ``"9D"``."""
    if len(code) != 2:
        raise ValueError(f"Card code must have two characters: {code!r}")
    rank_code, suit_code = code[0].upper(), code[1].upper()
    ranks = {value: rank for rank, value in RANK_CODES.items()}
    suits = {value: suit for suit, value in SUIT_CODES.items()}
    if rank_code not in ranks or suit_code not in suits:
        raise ValueError(f"Unknown card code: {code!r}")
    return Card(ranks[rank_code], suits[suit_code])


def parse_cards(codes: str) -> List[Card]:
    return [parse_card(code) for code in codes.split()]


def points_of(cards: Iterable[Card]) -> int:
    return sum(card.point_value() for card in cards)


def highest_of_suit(cards: Iterable[Card], suit: Suit) -> Optional[Card]:
    best: Optional[Card] = None
    for card in cards:
        if card.suit is suit and (best is None or card_strength(card) > card_strength(best)):
            best = card
    return best


def serialize_card(card: Card) -> dict[str, str]:
    return {"rank": card.rank.name.lower(), "suit": card.suit.name.lower()}


def deserialize_card(payload: Mapping[str, str]) -> Card:
    try:
        rank_name = payload["rank"].upper()
        suit_name = payload["suit"].upper()
        return Card(Rank[rank_name], Suit[suit_name])
    except (KeyError, AttributeError) as exc:
        raise ValueError(f"Malformed card payload: {payload!r}") from exc


def parse_suit(name: str) -> Suit:
    try:
        return Suit[name.upper()]
    except (KeyError, AttributeError) as exc:
        raise ValueError(f"Unknown suit: {name!r}") from exc


def card_label(card: Card) -> str:
    return f"{card.rank.name.title()} of {card.suit.name.title()}"
