"""Round state machine: bidding, trump, passing, melds and trick play."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from random import Random
from typing import Dict, List, Optional, Sequence, Tuple, Union

from .cards import Card, Suit
from .deck import deal_four
from .errors import (
    IncorrectAction,
    NotTheCurrentPlayer,
    PassingWrongNumberOfCards,
    PlayingNonExtantCard,
)
from .melds import bonus_points
from .rules_schema import DEFAULT_RULES, RuleSet
from .scoring import RoundScore
from .seats import SEAT_COUNT, Seat
from .state import TrickPhase

logger = logging.getLogger(__name__)


# Actions -----------------------------------------------------------------


@dataclass(frozen=True)
class Bid:
    amount: int


@dataclass(frozen=True)
class DeclareSuit:
    suit: Suit


@dataclass(frozen=True)
class Pass:
    indices: Tuple[int, ...]


@dataclass(frozen=True)
class ShowPoints:
    indices: Tuple[int, ...]


@dataclass(frozen=True)
class Play:
    index: int


Action = Union[Bid, DeclareSuit, Pass, ShowPoints, Play]


# Phases ------------------------------------------------------------------


@dataclass
class BiddingPhase:
    first_bidder: Seat
    bids: List[int] = field(default_factory=list)


@dataclass
class DeclaringTrumpPhase:
    bid_winner: Seat
    highest_bid: int


@dataclass
class PassingToPartnerPhase:
    bid_winner: Seat
    highest_bid: int
    trump: Suit


@dataclass
class PassingBackPhase:
    bid_winner: Seat
    highest_bid: int
    trump: Suit


@dataclass
class RevealingPhase:
    bid_winner: Seat
    highest_bid: int
    trump: Suit
    extra_points: List[int] = field(default_factory=lambda: [0, 0])
    reveals: Dict[Seat, List[Card]] = field(default_factory=dict)


Phase = Union[
    BiddingPhase,
    DeclaringTrumpPhase,
    PassingToPartnerPhase,
    PassingBackPhase,
    RevealingPhase,
    TrickPhase,
]


def winning_bid(first_bidder: Seat, bids: Sequence[int]) -> Tuple[Seat, int]:
    """Highest bid and its seat; the earliest bid wins a tie."""
    best_index = 0
    for index, amount in enumerate(bids):
        if amount > bids[best_index]:
            best_index = index
    return Seat((first_bidder + best_index) % SEAT_COUNT), bids[best_index]


def _check_indices(hand: Sequence[Card], indices: Sequence[int]) -> None:
    for index in indices:
        if isinstance(index, bool) or not isinstance(index, int) or not 0 <= index < len(hand):
            raise PlayingNonExtantCard(f"Hand of {len(hand)} cards has no index {index!r}.")


@dataclass
class RoundState:
    """One deal of pinochle, driven only by validated actions."""

    hands: List[List[Card]]
    first_bidder: Seat
    rules: RuleSet = field(default_factory=lambda: DEFAULT_RULES)
    current_player: Seat = field(init=False)
    phase: Phase = field(init=False)
    reveals: Dict[Seat, List[Card]] = field(init=False, default_factory=dict)
    opening: Optional[Tuple[TrickPhase, List[List[Card]]]] = field(init=False, default=None)
    play_log: List[Tuple[Seat, Card]] = field(init=False, default_factory=list)
    result: Optional[RoundScore] = field(init=False, default=None)

    def __post_init__(self) -> None:
        if len(self.hands) != SEAT_COUNT:
            raise ValueError("RoundState requires exactly four hands.")
        self.hands = [list(hand) for hand in self.hands]
        self.current_player = self.first_bidder
        self.phase = BiddingPhase(first_bidder=self.first_bidder)

    @classmethod
    def start(
        cls,
        first_bidder: Seat,
        *,
        rng: Optional[Random] = None,
        deck: Optional[Sequence[Card]] = None,
        rules: Optional[RuleSet] = None,
    ) -> "RoundState":
        hands = deal_four(rng=rng, deck=deck)
        return cls(hands=hands, first_bidder=first_bidder, rules=rules or DEFAULT_RULES)

    def is_finished(self) -> bool:
        return self.result is not None

    def act(self, seat: Seat, action: Action) -> Optional[RoundScore]:
        """Apply ``action`` for ``seat``; nothing changes if it is rejected."""
        if self.result is not None:
            raise IncorrectAction("The round is already finished.")
        if seat != self.current_player:
            raise NotTheCurrentPlayer(f"It is {self.current_player}'s turn, not {seat}'s.")

        phase = self.phase
        if isinstance(phase, BiddingPhase) and isinstance(action, Bid):
            self._bid(phase, action)
        elif isinstance(phase, DeclaringTrumpPhase) and isinstance(action, DeclareSuit):
            self._declare(phase, action)
        elif isinstance(phase, PassingToPartnerPhase) and isinstance(action, Pass):
            self._pass_cards(action)
            self.current_player = phase.bid_winner
            self.phase = PassingBackPhase(phase.bid_winner, phase.highest_bid, phase.trump)
        elif isinstance(phase, PassingBackPhase) and isinstance(action, Pass):
            self._pass_cards(action)
            self.current_player = phase.bid_winner
            self.phase = RevealingPhase(phase.bid_winner, phase.highest_bid, phase.trump)
        elif isinstance(phase, RevealingPhase) and isinstance(action, ShowPoints):
            self._show_points(phase, action)
        elif isinstance(phase, TrickPhase) and isinstance(action, Play):
            return self._play(phase, action)
        else:
            raise IncorrectAction(f"{type(action).__name__} is not accepted during {type(phase).__name__}.")

        logger.debug("%s acted with %s; now %s to act in %s", seat, action, self.current_player, type(self.phase).__name__)
        return None

    # Phase transitions ---------------------------------------------------

    def _bid(self, phase: BiddingPhase, action: Bid) -> None:
        if isinstance(action.amount, bool) or not isinstance(action.amount, int):
            raise IncorrectAction(f"Bid amount must be an integer, got {action.amount!r}.")
        phase.bids.append(action.amount)
        self.current_player = self.current_player.next()
        if len(phase.bids) == SEAT_COUNT:
            winner, amount = winning_bid(phase.first_bidder, phase.bids)
            self.current_player = winner
            self.phase = DeclaringTrumpPhase(bid_winner=winner, highest_bid=amount)
            logger.debug("Bidding won by %s with %d", winner, amount)

    def _declare(self, phase: DeclaringTrumpPhase, action: DeclareSuit) -> None:
        if not isinstance(action.suit, Suit):
            raise IncorrectAction(f"Trump must be a Suit, got {action.suit!r}.")
        self.current_player = phase.bid_winner.partner()
        self.phase = PassingToPartnerPhase(phase.bid_winner, phase.highest_bid, action.suit)

    def _pass_cards(self, action: Pass) -> None:
        hand = self.hands[self.current_player]
        indices = list(action.indices)
        if len(set(indices)) != len(indices) or len(indices) != self.rules.pass_size:
            raise PassingWrongNumberOfCards(
                f"A pass needs exactly {self.rules.pass_size} distinct cards, got {indices}."
            )
        _check_indices(hand, indices)
        taken = [hand[index] for index in sorted(indices)]
        for index in sorted(indices, reverse=True):
            del hand[index]
        self.hands[self.current_player.partner()].extend(taken)

    def _show_points(self, phase: RevealingPhase, action: ShowPoints) -> None:
        hand = self.hands[self.current_player]
        indices = list(action.indices)
        _check_indices(hand, indices)
        shown = [hand[index] for index in sorted(set(indices))]
        points = bonus_points(shown, phase.trump, self.rules.melds)
        phase.extra_points[self.current_player.team] += points
        phase.reveals[self.current_player] = shown
        logger.debug("%s revealed %s for %d points", self.current_player, [str(c) for c in shown], points)

        self.current_player = self.current_player.next()
        if len(phase.reveals) == SEAT_COUNT:
            self._start_play(phase)

    def _start_play(self, phase: RevealingPhase) -> None:
        trick_phase = TrickPhase(
            trump=phase.trump,
            bid_winner=phase.bid_winner,
            highest_bid=phase.highest_bid,
            extra_points=list(phase.extra_points),
            last_trick_bonus=self.rules.last_trick_bonus,
        )
        self.current_player = phase.bid_winner
        self.phase = trick_phase
        self.reveals = {seat: list(cards) for seat, cards in phase.reveals.items()}
        self.opening = (trick_phase.copy(), [list(hand) for hand in self.hands])

    def _play(self, phase: TrickPhase, action: Play) -> Optional[RoundScore]:
        seat = self.current_player
        hand = self.hands[seat]
        _check_indices(hand, [action.index])
        card = hand[action.index]

        next_player, score = phase.play(seat, hand, card)
        del hand[action.index]
        self.play_log.append((seat, card))
        self.current_player = next_player

        if score is not None:
            self.result = score
            logger.info(
                "Round finished: scores %s (raw %s), set back: %s",
                score.team_scores,
                score.raw_totals,
                score.set_back,
            )
        return score

    # Views ---------------------------------------------------------------

    def trump(self) -> Optional[Suit]:
        return getattr(self.phase, "trump", None)

    def cards_in_play(self) -> List[Card]:
        """Every card in hands, piles and the open trick."""
        cards = [card for hand in self.hands for card in hand]
        if isinstance(self.phase, TrickPhase):
            cards.extend(card for pile in self.phase.piles for card in pile)
            cards.extend(self.phase.trick.cards)
        return cards
