"""Dict encoding of actions and public phase data."""

from __future__ import annotations

from typing import Any, Mapping

from .cards import parse_suit, serialize_card
from .round import (
    Action,
    Bid,
    BiddingPhase,
    DeclareSuit,
    DeclaringTrumpPhase,
    Pass,
    PassingBackPhase,
    PassingToPartnerPhase,
    Phase,
    Play,
    RevealingPhase,
    ShowPoints,
)
from .state import TrickPhase

PHASE_NAMES = {
    BiddingPhase: "bidding",
    DeclaringTrumpPhase: "declare_trump",
    PassingToPartnerPhase: "passing_to",
    PassingBackPhase: "passing_back",
    RevealingPhase: "revealing",
    TrickPhase: "play",
}


def _index_list(payload: Mapping[str, Any]) -> tuple:
    indices = payload.get("indices")
    if not isinstance(indices, (list, tuple)):
        raise ValueError("Action needs a list of 'indices'.")
    return tuple(indices)


def serialize_action(action: Action) -> dict:
    if isinstance(action, Bid):
        return {"type": "bid", "amount": action.amount}
    if isinstance(action, DeclareSuit):
        return {"type": "declare_suit", "suit": str(action.suit)}
    if isinstance(action, Pass):
        return {"type": "pass", "indices": list(action.indices)}
    if isinstance(action, ShowPoints):
        return {"type": "show_points", "indices": list(action.indices)}
    if isinstance(action, Play):
        return {"type": "play", "index": action.index}
    raise ValueError(f"Unknown action: {action!r}")


def deserialize_action(payload: Mapping[str, Any]) -> Action:
    kind = payload.get("type")
    try:
        if kind == "bid":
            return Bid(int(payload["amount"]))
        if kind == "declare_suit":
            return DeclareSuit(parse_suit(payload["suit"]))
        if kind == "pass":
            return Pass(_index_list(payload))
        if kind == "show_points":
            return ShowPoints(_index_list(payload))
        if kind == "play":
            return Play(int(payload["index"]))
    except (KeyError, TypeError) as exc:
        raise ValueError(f"Malformed {kind} action: {payload!r}") from exc
    raise ValueError(f"Unknown action type: {kind!r}")


def serialize_phase(phase: Phase) -> dict:
    """Public fields of the active phase."""
    payload: dict = {"name": PHASE_NAMES[type(phase)]}
    if isinstance(phase, BiddingPhase):
        payload.update(first_bidder=int(phase.first_bidder), bids=list(phase.bids))
        return payload

    payload.update(bid_winner=int(phase.bid_winner), highest_bid=phase.highest_bid)
    if isinstance(phase, DeclaringTrumpPhase):
        return payload

    payload["trump"] = str(phase.trump)
    if isinstance(phase, RevealingPhase):
        payload["extra_points"] = list(phase.extra_points)
        payload["reveals"] = {
            int(seat): [serialize_card(card) for card in cards] for seat, cards in phase.reveals.items()
        }
    elif isinstance(phase, TrickPhase):
        payload["extra_points"] = list(phase.extra_points)
        payload["piles"] = [[serialize_card(card) for card in pile] for pile in phase.piles]
        payload["trick"] = {
            "leader": int(phase.trick.leader),
            "cards": [serialize_card(card) for card in phase.trick.cards],
        }
    return payload
