"""Trick-taking phase of a pinochle round."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional, Sequence, Tuple

from .cards import Card, Suit
from .errors import CardIsNotLegalToPlay
from .mechanics import is_legal_play
from .scoring import RoundScore, score_round
from .seats import Seat
from .trick import Trick, TrickError


@dataclass
class TrickPhase:
    """Public state of the play phase: trump, contract, piles and the open trick."""

    trump: Suit
    bid_winner: Seat
    highest_bid: int
    extra_points: List[int] = field(default_factory=lambda: [0, 0])
    piles: List[List[Card]] = field(default_factory=lambda: [[], []])
    last_trick_winner: Optional[Seat] = None
    last_trick_bonus: int = 10
    trick: Trick = field(init=False)

    def __post_init__(self) -> None:
        self.trick = Trick(leader=self.bid_winner)

    def copy(self) -> "TrickPhase":
        clone = TrickPhase(
            trump=self.trump,
            bid_winner=self.bid_winner,
            highest_bid=self.highest_bid,
            extra_points=list(self.extra_points),
            piles=[list(pile) for pile in self.piles],
            last_trick_winner=self.last_trick_winner,
            last_trick_bonus=self.last_trick_bonus,
        )
        clone.trick = self.trick.copy()
        return clone

    def play(self, seat: Seat, hand: Sequence[Card], card: Card) -> Tuple[Seat, Optional[RoundScore]]:
        """Play ``card`` from ``hand`` (which still holds it).

        Returns the next seat to act and, when this card finished the last
        trick, the round score.
        """
        if not is_legal_play(self.trick.cards, hand, card, self.trump):
            raise CardIsNotLegalToPlay(f"{card} cannot be played on {[str(c) for c in self.trick.cards]}.")

        winner = self.record(seat, card)
        if winner is None:
            return seat.next(), None
        if len(hand) == 1:
            return winner, self.final_score()
        return winner, None

    def record(self, seat: Seat, card: Card) -> Optional[Seat]:
        """Add a card without legality checks; return the winner if the trick closed."""
        if seat != self.trick.next_seat():
            raise TrickError(f"Expected {self.trick.next_seat()} to play, not {seat}.")
        self.trick.add(card)
        if not self.trick.is_full():
            return None
        winner, _ = self.trick.winning_play(self.trump)
        self.piles[winner.team].extend(self.trick.cards)
        self.trick = Trick(leader=winner)
        self.last_trick_winner = winner
        return winner

    def final_score(self) -> RoundScore:
        assert self.last_trick_winner is not None
        return score_round(
            piles=self.piles,
            last_trick_team=self.last_trick_winner.team,
            extra_points=self.extra_points,
            bidding_team=self.bid_winner.team,
            highest_bid=self.highest_bid,
            last_trick_bonus=self.last_trick_bonus,
        )
