"""Simple bot arena for pinochle."""

from __future__ import annotations

import argparse
import logging
from typing import Callable, Dict, Iterable, Optional, Sequence

from pinochle.game import Game
from pinochle.round import (
    Action,
    Bid,
    BiddingPhase,
    DeclareSuit,
    DeclaringTrumpPhase,
    Pass,
    PassingBackPhase,
    PassingToPartnerPhase,
    Play,
    RevealingPhase,
    RoundState,
    ShowPoints,
)
from pinochle.scoring import RoundScore
from pinochle.seats import SEAT_COUNT, Seat

from .base import BotStrategy
from .baseline_greedy import GreedyBot
from .planner import PlannerConfig
from .planner_bot import PlannerBot
from .random_bot import RandomBot

logger = logging.getLogger(__name__)

BOT_REGISTRY: Dict[str, Callable[[argparse.Namespace], BotStrategy]] = {
    "greedy": lambda args: GreedyBot(),
    "random": lambda args: RandomBot(seed=args.seed),
    "planner": lambda args: PlannerBot(PlannerConfig(trials=args.trials, seed=args.seed)),
}


def choose_action(bot: BotStrategy, round_state: RoundState, seat: Seat) -> Action:
    phase = round_state.phase
    if isinstance(phase, BiddingPhase):
        return Bid(bot.offer_bid(round_state, seat))
    if isinstance(phase, DeclaringTrumpPhase):
        return DeclareSuit(bot.choose_trump(round_state, seat))
    if isinstance(phase, (PassingToPartnerPhase, PassingBackPhase)):
        return Pass(tuple(bot.choose_pass(round_state, seat)))
    if isinstance(phase, RevealingPhase):
        return ShowPoints(tuple(bot.choose_reveal(round_state, seat)))
    return Play(bot.play_card(round_state, seat))


def play_round(game: Game, bots: Sequence[BotStrategy]) -> RoundScore:
    """Drive the current round to completion and return its score."""
    if len(bots) != SEAT_COUNT:
        raise ValueError("A round needs exactly four bots.")
    round_state = game.round
    for seat in Seat:
        bots[seat].on_round_start(round_state, seat)
    while True:
        seat = round_state.current_player
        result = game.act(seat, choose_action(bots[seat], round_state, seat))
        if result is not None:
            return result


def run_match(bots: Sequence[BotStrategy], *, n_rounds: int = 4, seed: Optional[int] = None) -> dict:
    game = Game(seed=seed)
    history = []
    for _ in range(n_rounds):
        result = play_round(game, bots)
        history.append(
            {
                "team_scores": result.team_scores,
                "raw_totals": result.raw_totals,
                "bidding_team": result.bidding_team,
                "set_back": result.set_back,
            }
        )
    return {"scores": list(game.scores), "history": history}


def main(argv: Iterable[str] | None = None) -> None:
    parser = argparse.ArgumentParser(description="Run a pinochle bot match.")
    parser.add_argument("--team-a", default="planner", choices=BOT_REGISTRY.keys(), help="Bot for north and south.")
    parser.add_argument("--team-b", default="greedy", choices=BOT_REGISTRY.keys(), help="Bot for east and west.")
    parser.add_argument("--n", type=int, default=4, help="Number of rounds to play.")
    parser.add_argument("--trials", type=int, default=500, help="Planner trials per card.")
    parser.add_argument("--seed", type=int, default=42)
    parser.add_argument("--verbose", action="store_true")
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    bots = [BOT_REGISTRY[args.team_a if seat.team == 0 else args.team_b](args) for seat in Seat]
    results = run_match(bots, n_rounds=args.n, seed=args.seed)

    print(f"Scores after {args.n} rounds: {results['scores']}")
    set_backs = sum(1 for entry in results["history"] if entry["set_back"])
    print(f"Bidders set back: {set_backs}/{len(results['history'])}")


if __name__ == "__main__":
    main()
