"""High-level game orchestration across rounds."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from random import Random
from typing import Dict, Iterable, List, Optional, Tuple

from .cards import Card, serialize_card
from .encode import serialize_phase
from .round import Action, RoundState
from .rules_schema import DEFAULT_RULES, RuleSet
from .scoring import RoundScore
from .seats import Seat

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class GameInfo:
    """Public projection of a game; never contains hand contents."""

    first_bidder: Seat
    current_player: Seat
    phase: dict
    scores: Tuple[int, int]
    reveals: Dict[int, List[dict]]


@dataclass
class Game:
    """Track team scores across rounds; the first bidder rotates every round."""

    seed: Optional[int] = None
    rules: RuleSet = field(default_factory=lambda: DEFAULT_RULES)
    first_bidder: Seat = Seat.NORTH
    scores: List[int] = field(default_factory=lambda: [0, 0])
    rng: Random = field(init=False)
    round: RoundState = field(init=False)
    round_history: List[RoundScore] = field(default_factory=list)
    actions: List[Tuple[Seat, Action]] = field(default_factory=list)

    def __post_init__(self) -> None:
        self.rng = Random(self.seed)
        self.round = RoundState.start(self.first_bidder, rng=self.rng, rules=self.rules)

    @classmethod
    def replay(cls, seed: int, actions: Iterable[Tuple[Seat, Action]], rules: Optional[RuleSet] = None) -> "Game":
        """Rebuild a game from its seed and accepted action history."""
        game = cls(seed=seed, rules=rules or DEFAULT_RULES)
        for seat, action in actions:
            game.act(seat, action)
        return game

    def act(self, seat: Seat, action: Action) -> Optional[RoundScore]:
        result = self.round.act(seat, action)
        self.actions.append((seat, action))
        if result is not None:
            self.scores[0] += result.team_scores[0]
            self.scores[1] += result.team_scores[1]
            self.round_history.append(result)
            self.first_bidder = self.first_bidder.next()
            self.round = RoundState.start(self.first_bidder, rng=self.rng, rules=self.rules)
            logger.info("Game scores now %s; %s bids first", self.scores, self.first_bidder)
        return result

    def player_hand(self, seat: Seat) -> List[Card]:
        return list(self.round.hands[seat])

    def info(self) -> GameInfo:
        return GameInfo(
            first_bidder=self.first_bidder,
            current_player=self.round.current_player,
            phase=serialize_phase(self.round.phase),
            scores=(self.scores[0], self.scores[1]),
            reveals={
                int(seat): [serialize_card(card) for card in cards] for seat, cards in self.round.reveals.items()
            },
        )
