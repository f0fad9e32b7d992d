"""Monte-Carlo move selection for the trick-taking phase.

Each trial solves one deal consistent with what has been observed, then plays
the rest of the round out with every seat (the planner's own included)
playing the first legal card of its shuffled hand. Trials are grouped by the
planner's first card and the card with the best mean result is chosen.
"""

from __future__ import annotations

import logging
import math
from collections import defaultdict
from random import Random
from statistics import fmean
from typing import Dict, Iterable, List, Optional, Sequence, Tuple

from pydantic import BaseModel, ConfigDict, Field

from pinochle.cards import Card
from pinochle.mechanics import first_legal
from pinochle.seats import Seat
from pinochle.state import TrickPhase

from .belief import BeliefState
from .solver import sample_deal

logger = logging.getLogger(__name__)

DEFAULT_TRIALS = 30_000


class PlannerConfig(BaseModel):
    model_config = ConfigDict(frozen=True)

    trials: int = Field(DEFAULT_TRIALS, ge=1, description="Sampled deals per decision.")
    seed: Optional[int] = Field(None, description="Seed for reproducible sampling.")


def finite_mean(scores: Sequence[int]) -> float:
    """Mean of trial scores; refuses empty or non-finite results."""
    if not scores:
        raise ValueError("Cannot average an empty score list.")
    value = fmean(scores)
    if not math.isfinite(value):
        raise ValueError(f"Non-finite mean score: {value!r}")
    return value


class Planner:
    """Plays cards for one seat without looking at the other hands."""

    def __init__(
        self,
        seat: Seat,
        hand: Sequence[Card],
        phase: TrickPhase,
        *,
        config: Optional[PlannerConfig] = None,
        hand_sizes: Optional[Sequence[int]] = None,
    ) -> None:
        self.seat = seat
        self.hand = list(hand)
        self.phase = phase.copy()
        self.config = config or PlannerConfig()
        self.rng = Random(self.config.seed)
        self.belief = BeliefState()
        if hand_sizes is not None:
            self.belief.hand_sizes = list(hand_sizes)
        self.belief.mark_seen(card for pile in phase.piles for card in pile)
        self.belief.mark_seen(phase.trick.cards)
        self.belief.reveal(seat, self.hand)

    def reveal(self, seat: Seat, cards: Iterable[Card]) -> None:
        """Seed cards known to be in another seat's hand, e.g. revealed melds."""
        self.belief.reveal(seat, cards)

    def observe(self, seat: Seat, card: Card) -> None:
        """Feed one play of the trick phase; every play must be observed in order."""
        trick_before = list(self.phase.trick.cards)
        self.belief.update(seat, card, self.phase.trump, trick_before)
        self.phase.record(seat, card)
        if seat == self.seat:
            self.hand.remove(card)

    def run_trial(self, rng: Random) -> Optional[Tuple[Card, int]]:
        """Play one sampled deal to the end; None if some hand gets stuck."""
        hands = sample_deal(self.belief, rng)
        for hand in hands:
            rng.shuffle(hand)

        phase = self.phase.copy()
        current = self.seat
        first_card: Optional[Card] = None
        while True:
            hand = hands[current]
            index = first_legal(hand, phase.trick.cards, phase.trump)
            if index < 0:
                logger.debug("Discarding trial: %s has no legal card in %s", current, [str(c) for c in hand])
                return None
            card = hand[index]
            next_seat, score = phase.play(current, hand, card)
            del hand[index]
            if first_card is None:
                first_card = card
            if score is not None:
                own = self.seat.team
                net = score.team_scores[own] - score.team_scores[1 - own]
                return first_card, net
            current = next_seat

    def evaluate(self, trials: Optional[int] = None) -> Dict[Card, float]:
        """Mean net score of each first card over the sampled deals."""
        if self.phase.trick.next_seat() != self.seat:
            raise RuntimeError(f"It is not {self.seat}'s turn to play.")
        count = trials if trials is not None else self.config.trials
        results: Dict[Card, List[int]] = defaultdict(list)
        discarded = 0
        for _ in range(count):
            outcome = self.run_trial(self.rng)
            if outcome is None:
                discarded += 1
                continue
            card, net = outcome
            results[card].append(net)
        if discarded:
            logger.info("%d of %d trials discarded for %s", discarded, count, self.seat)
        return {card: finite_mean(scores) for card, scores in results.items()}

    def recommend(self, trials: Optional[int] = None) -> Card:
        """Card with the highest mean outcome."""
        means = self.evaluate(trials)
        if not means:
            raise RuntimeError("No trial produced a playable first card.")
        best = max(means, key=lambda card: means[card])
        logger.info("%s picks %s (mean %.1f over %d candidates)", self.seat, best, means[best], len(means))
        return best

    def recommend_index(self, hand: Sequence[Card], trials: Optional[int] = None) -> int:
        """Index of the recommended card in ``hand``."""
        return list(hand).index(self.recommend(trials))
