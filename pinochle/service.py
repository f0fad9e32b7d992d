"""Convenience service layer for external collaborators and bots."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Mapping, Optional

from .cards import Card, card_label, serialize_card
from .encode import deserialize_action, serialize_action
from .game import Game, GameInfo
from .mechanics import legal_indices
from .seats import Seat
from .state import TrickPhase


@dataclass
class ActionResult:
    round_scores: Optional[tuple[int, int]]
    set_back: bool


@dataclass
class GameView:
    info: GameInfo
    perspective: Seat
    hand: list[dict]
    hand_labels: list[str]
    legal_indices: list[int]


class GameService:
    """Facade around Game for collaborators that speak dicts."""

    def __init__(self, game: Optional[Game] = None) -> None:
        self.game = game or Game()

    # Actions -----------------------------------------------------------

    def act(self, seat: int, payload: Mapping) -> ActionResult:
        action = deserialize_action(payload)
        result = self.game.act(Seat.from_index(seat), action)
        if result is None:
            return ActionResult(round_scores=None, set_back=False)
        return ActionResult(round_scores=result.team_scores, set_back=result.set_back)

    def history(self) -> list[dict]:
        return [{"seat": int(seat), "action": serialize_action(action)} for seat, action in self.game.actions]

    # Views -------------------------------------------------------------

    def info(self) -> GameInfo:
        return self.game.info()

    def hand(self, seat: int) -> list[dict]:
        return [serialize_card(card) for card in self.game.player_hand(Seat.from_index(seat))]

    def get_view(self, perspective: int) -> GameView:
        seat = Seat.from_index(perspective)
        cards = self.game.player_hand(seat)
        return GameView(
            info=self.game.info(),
            perspective=seat,
            hand=[serialize_card(card) for card in cards],
            hand_labels=[card_label(card) for card in cards],
            legal_indices=self._legal_indices(seat, cards),
        )

    # Helpers -----------------------------------------------------------

    def _legal_indices(self, seat: Seat, cards: list[Card]) -> list[int]:
        round_state = self.game.round
        if round_state.current_player != seat or not isinstance(round_state.phase, TrickPhase):
            return []
        phase = round_state.phase
        return legal_indices(cards, phase.trick, phase.trump)
