"""Belief tracking about hidden hands.

Every play is public. From the follow-suit, trump and must-beat rules we can
prove that a seat is void in a suit, or that it holds nothing above a given
rank in it. Those bounds only ever tighten during a round, and together with
the cards we know (our own hand, revealed melds) they describe which unseen
cards each seat could still hold.
"""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Optional, Sequence

from pinochle.cards import Card, Rank, Suit, highest_of_suit, rank_exceeds
from pinochle.deck import HAND_SIZE, build_deck, remove_cards
from pinochle.seats import SEAT_COUNT, Seat


@dataclass
class SeatBelief:
    """What is provable about one seat's hand."""

    known_cards: List[Card] = field(default_factory=list)
    highest_possible: Dict[Suit, Optional[Rank]] = field(
        default_factory=lambda: {suit: Rank.ACE for suit in Suit}
    )

    def could_hold(self, card: Card) -> bool:
        bound = self.highest_possible[card.suit]
        return bound is not None and not rank_exceeds(card.rank, bound)

    def is_void(self, suit: Suit) -> bool:
        return self.highest_possible[suit] is None

    def tighten(self, suit: Suit, rank: Optional[Rank]) -> None:
        """Lower the bound for ``suit`` to ``rank``; never loosens it."""
        current = self.highest_possible[suit]
        if current is None:
            return
        if rank is None or rank_exceeds(current, rank):
            self.highest_possible[suit] = rank

    def forget(self, card: Card) -> None:
        if card in self.known_cards:
            self.known_cards.remove(card)


@dataclass
class BeliefState:
    hand_sizes: List[int] = field(default_factory=lambda: [HAND_SIZE] * SEAT_COUNT)
    seats: List[SeatBelief] = field(default_factory=lambda: [SeatBelief() for _ in range(SEAT_COUNT)])
    seen_cards: List[Card] = field(default_factory=list)

    def seat(self, seat: Seat) -> SeatBelief:
        return self.seats[seat]

    def reveal(self, seat: Seat, cards: Iterable[Card]) -> None:
        """Record cards known to be in ``seat``'s hand."""
        known = self.seats[seat].known_cards
        missing = Counter(cards) - Counter(known)
        known.extend(missing.elements())

    def mark_seen(self, cards: Iterable[Card]) -> None:
        """Record cards already out of every hand (piles, open trick)."""
        self.seen_cards.extend(cards)

    def update(self, seat: Seat, played: Card, trump: Suit, trick_before: Sequence[Card]) -> None:
        """Account for ``seat`` playing ``played`` onto ``trick_before``."""
        belief = self.seats[seat]
        self.seen_cards.append(played)
        self.hand_sizes[seat] -= 1
        belief.forget(played)

        if not trick_before:
            return

        lead = trick_before[0].suit
        if played.suit is not lead:
            belief.tighten(lead, None)
            if played.suit is not trump:
                belief.tighten(trump, None)
            else:
                best_trump = highest_of_suit(trick_before, trump)
                if best_trump is not None and not rank_exceeds(played.rank, best_trump.rank):
                    belief.tighten(trump, best_trump.rank)
        else:
            best_lead = highest_of_suit(trick_before, lead)
            assert best_lead is not None
            if not rank_exceeds(played.rank, best_lead.rank):
                belief.tighten(lead, best_lead.rank)

    def unseen_cards(self) -> List[Card]:
        """Deck minus cards seen played minus cards known to be in some hand."""
        known = [card for belief in self.seats for card in belief.known_cards]
        return remove_cards(build_deck(), self.seen_cards + known)

    def capacities(self) -> List[int]:
        """Unknown cards still to be placed in each hand."""
        return [self.hand_sizes[seat] - len(self.seats[seat].known_cards) for seat in range(SEAT_COUNT)]

    def candidacy(self, card: Card) -> int:
        """Bitmask of seats that could hold ``card``."""
        mask = 0
        for seat, belief in enumerate(self.seats):
            if belief.could_hold(card):
                mask |= 1 << seat
        return mask
