"""Core engine package for double-deck pinochle."""

__all__ = [
    "seats",
    "cards",
    "deck",
    "trick",
    "mechanics",
    "melds",
    "scoring",
    "state",
    "round",
    "errors",
    "game",
    "encode",
    "rules_schema",
    "service",
]
