"""Random baseline bot."""

from __future__ import annotations

import random
from typing import Optional, Sequence

from pinochle.cards import Suit
from pinochle.mechanics import legal_indices
from pinochle.round import RoundState
from pinochle.seats import Seat
from pinochle.state import TrickPhase

from .base import BotStrategy

BID_CHOICES = list(range(0, 310, 10))


class RandomBot(BotStrategy):
    name = "Random"

    def __init__(self, seed: Optional[int] = None) -> None:
        self._rng = random.Random(seed)

    def offer_bid(self, round_state: RoundState, seat: Seat) -> int:
        return self._rng.choice(BID_CHOICES)

    def choose_trump(self, round_state: RoundState, seat: Seat) -> Suit:
        return self._rng.choice(list(Suit))

    def choose_pass(self, round_state: RoundState, seat: Seat) -> Sequence[int]:
        return self._rng.sample(range(len(round_state.hands[seat])), round_state.rules.pass_size)

    def choose_reveal(self, round_state: RoundState, seat: Seat) -> Sequence[int]:
        size = len(round_state.hands[seat])
        return self._rng.sample(range(size), self._rng.randint(0, size))

    def play_card(self, round_state: RoundState, seat: Seat) -> int:
        phase = round_state.phase
        assert isinstance(phase, TrickPhase)
        legal = legal_indices(round_state.hands[seat], phase.trick, phase.trump)
        if not legal:
            raise RuntimeError("No legal plays available for bot.")
        return self._rng.choice(legal)
