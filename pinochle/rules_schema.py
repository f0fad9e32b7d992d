"""Validation schema for pinochle rules configuration."""

from __future__ import annotations

from typing import Dict, Tuple

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from .deck import HAND_SIZE

RANK_NAMES = ("nine", "jack", "queen", "king", "ten", "ace")

# (single, doubled) bonus for a pattern.
BonusPair = Tuple[int, int]


def _validate_rank(value: str) -> str:
    normalized = value.lower()
    if normalized not in RANK_NAMES:
        raise ValueError(f"Unknown rank: {value!r}")
    return normalized


class MeldSchedule(BaseModel):
    model_config = ConfigDict(frozen=True)

    pinochle: BonusPair = Field((40, 300), description="Queen of spades with jack of diamonds.")
    trump_run: BonusPair = Field((110, 1420), description="Jack, queen, king, ten and ace of trump.")
    rounds: Dict[str, int] = Field(
        default_factory=lambda: {"ace": 100, "king": 80, "queen": 60, "jack": 40},
        description="One card of the rank in every suit.",
    )
    round_multiplier: int = Field(10, ge=1, description="Factor applied to a doubled round.")
    marriage: BonusPair = Field((20, 40), description="King and queen of any suit.")
    trump_marriage: BonusPair = Field((20, 40), description="Extra for the king and queen of trump.")
    trump_nine: BonusPair = Field((10, 20), description="Nine of trump.")

    @field_validator("pinochle", "trump_run", "marriage", "trump_marriage", "trump_nine")
    @classmethod
    def validate_pair(cls, value: BonusPair) -> BonusPair:
        single, doubled = value
        if single <= 0 or doubled <= 0:
            raise ValueError("Meld bonuses must be positive.")
        return value

    @field_validator("rounds")
    @classmethod
    def validate_rounds(cls, value: Dict[str, int]) -> Dict[str, int]:
        normalized = {}
        for rank, points in value.items():
            if points <= 0:
                raise ValueError(f"Round of {rank} must be worth positive points.")
            normalized[_validate_rank(rank)] = points
        return normalized


class RuleSet(BaseModel):
    model_config = ConfigDict(frozen=True)

    pass_size: int = Field(4, ge=1, description="Cards exchanged between partners in each direction.")
    last_trick_bonus: int = Field(10, ge=0, description="Bonus points for the team taking the last trick.")
    melds: MeldSchedule = Field(default_factory=MeldSchedule)

    @model_validator(mode="after")
    def ensure_pass_fits(self) -> "RuleSet":
        if self.pass_size > HAND_SIZE:
            raise ValueError("Cannot pass more cards than a hand holds.")
        return self


DEFAULT_RULES = RuleSet()
