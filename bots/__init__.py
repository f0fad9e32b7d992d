"""Bot strategies and the hidden-information planner for pinochle."""

from .baseline_greedy import GreedyBot
from .planner import Planner, PlannerConfig
from .planner_bot import PlannerBot
from .random_bot import RandomBot

__all__ = ["GreedyBot", "Planner", "PlannerConfig", "PlannerBot", "RandomBot"]
