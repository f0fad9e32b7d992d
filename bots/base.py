"""Common bot strategy interfaces."""

from __future__ import annotations

from typing import Sequence

from pinochle.cards import Suit
from pinochle.mechanics import legal_indices
from pinochle.round import RoundState
from pinochle.seats import Seat
from pinochle.state import TrickPhase


class BotStrategy:
    """Base class for bot policies; every hook returns a plain value."""

    name: str = "BaseBot"

    def on_round_start(self, round_state: RoundState, seat: Seat) -> None:
        """Optional hook invoked at the start of each round."""
        return None

    def offer_bid(self, round_state: RoundState, seat: Seat) -> int:
        """Return the bid amount."""
        return 0

    def choose_trump(self, round_state: RoundState, seat: Seat) -> Suit:
        """Return the trump suit; only asked of the bid winner."""
        return round_state.hands[seat][0].suit

    def choose_pass(self, round_state: RoundState, seat: Seat) -> Sequence[int]:
        """Return the hand indices to pass to the partner."""
        return list(range(round_state.rules.pass_size))

    def choose_reveal(self, round_state: RoundState, seat: Seat) -> Sequence[int]:
        """Return the hand indices to show as meld."""
        return list(range(len(round_state.hands[seat])))

    def play_card(self, round_state: RoundState, seat: Seat) -> int:
        """Return the hand index of the card to play."""
        phase = round_state.phase
        assert isinstance(phase, TrickPhase)
        legal = legal_indices(round_state.hands[seat], phase.trick, phase.trump)
        if not legal:
            raise RuntimeError("No legal plays available for bot.")
        return legal[0]
