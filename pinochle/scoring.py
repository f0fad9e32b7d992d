"""Round scoring helpers for pinochle."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence, Tuple

from .cards import Card, points_of


class ScoringError(ValueError):
    """Raised when scoring inputs are inconsistent."""


@dataclass(frozen=True)
class RoundScore:
    team_scores: Tuple[int, int]
    raw_totals: Tuple[int, int]
    bidding_team: int
    set_back: bool


def team_total(pile: Sequence[Card], took_last_trick: bool, extra_points: int, last_trick_bonus: int) -> int:
    return points_of(pile) + (last_trick_bonus if took_last_trick else 0) + extra_points


def score_round(
    *,
    piles: Sequence[Sequence[Card]],
    last_trick_team: int,
    extra_points: Sequence[int],
    bidding_team: int,
    highest_bid: int,
    last_trick_bonus: int = 10,
) -> RoundScore:
    """Score a finished round.

    The bidding team keeps its total only if it reaches the bid; otherwise it
    is set back by the amount of the bid. The other team always keeps its total.
    """
    if len(piles) != 2 or len(extra_points) != 2:
        raise ScoringError("Exactly two teams are supported.")
    if last_trick_team not in (0, 1) or bidding_team not in (0, 1):
        raise ScoringError("Team index must be 0 or 1.")

    raw = tuple(
        team_total(piles[team], last_trick_team == team, extra_points[team], last_trick_bonus)
        for team in (0, 1)
    )
    set_back = raw[bidding_team] < highest_bid
    scores = list(raw)
    if set_back:
        scores[bidding_team] = -highest_bid

    return RoundScore(
        team_scores=(scores[0], scores[1]),
        raw_totals=(raw[0], raw[1]),
        bidding_team=bidding_team,
        set_back=set_back,
    )
