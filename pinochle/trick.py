"""Trick representation and resolution."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional, Tuple

from .cards import Card, Suit, compare
from .seats import SEAT_COUNT, Seat, seats_from


class TrickError(RuntimeError):
    """Raised when trick play breaks ordering constraints."""


@dataclass
class Trick:
    leader: Seat
    cards: List[Card] = field(default_factory=list)

    def is_empty(self) -> bool:
        return not self.cards

    def is_full(self) -> bool:
        return len(self.cards) == SEAT_COUNT

    def add(self, card: Card) -> None:
        if self.is_full():
            raise TrickError("Trick already complete.")
        self.cards.append(card)

    def led_suit(self) -> Optional[Suit]:
        return self.cards[0].suit if self.cards else None

    def next_seat(self) -> Seat:
        """Seat expected to play the next card."""
        return Seat((self.leader + len(self.cards)) % SEAT_COUNT)

    def plays(self) -> List[Tuple[Seat, Card]]:
        return list(zip(seats_from(self.leader), self.cards))

    def winning_play(self, trump: Suit) -> Tuple[Seat, Card]:
        """Seat and card currently winning; the earlier of two identical cards wins."""
        if not self.cards:
            raise TrickError("Cannot determine winner on empty trick.")
        led = self.cards[0].suit
        plays = self.plays()
        winning_seat, winning_card = plays[0]
        for seat, card in plays[1:]:
            if compare(card, winning_card, trump, led) > 0:
                winning_seat, winning_card = seat, card
        return winning_seat, winning_card

    def copy(self) -> "Trick":
        return Trick(leader=self.leader, cards=list(self.cards))
