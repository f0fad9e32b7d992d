"""Bot that plays tricks with the Monte-Carlo planner."""

from __future__ import annotations

from typing import Optional

from pinochle.round import RoundState
from pinochle.seats import Seat

from .baseline_greedy import GreedyBot
from .planner import Planner, PlannerConfig


def planner_for_round(round_state: RoundState, seat: Seat, config: Optional[PlannerConfig] = None) -> Planner:
    """Planner for ``seat`` that has seen the round's reveals but no plays yet."""
    if round_state.opening is None:
        raise RuntimeError("The round has not reached the trick phase.")
    opening_phase, opening_hands = round_state.opening
    planner = Planner(seat, opening_hands[seat], opening_phase, config=config)
    for other, cards in round_state.reveals.items():
        if other != seat:
            planner.reveal(other, cards)
    return planner


class PlannerBot(GreedyBot):
    """Greedy outside the trick phase, Monte-Carlo planner inside it."""

    name = "Planner"

    def __init__(self, config: Optional[PlannerConfig] = None) -> None:
        self.config = config or PlannerConfig()
        self._round: Optional[RoundState] = None
        self._planner: Optional[Planner] = None
        self._observed = 0

    def play_card(self, round_state: RoundState, seat: Seat) -> int:
        if self._round is not round_state or self._planner is None or self._planner.seat != seat:
            self._round = round_state
            self._planner = planner_for_round(round_state, seat, self.config)
            self._observed = 0
        for played_by, card in round_state.play_log[self._observed :]:
            self._planner.observe(played_by, card)
        self._observed = len(round_state.play_log)
        return self._planner.recommend_index(round_state.hands[seat])
