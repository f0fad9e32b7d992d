"""Errors raised when an action is rejected.

A rejected action never changes the state of the round or game.
"""

from __future__ import annotations


class ActionRejected(RuntimeError):
    """Base class for actions refused by the round state machine."""


class PlayingNonExtantCard(ActionRejected):
    """Raised when a hand index is outside the acting hand."""


class PassingWrongNumberOfCards(ActionRejected):
    """Raised when a pass does not name the required number of distinct cards."""


class NotTheCurrentPlayer(ActionRejected):
    """Raised when a seat acts out of turn."""


class CardIsNotLegalToPlay(ActionRejected):
    """Raised when a card breaks the follow, trump or must-beat rules."""


class IncorrectAction(ActionRejected):
    """Raised when the action does not belong to the active phase."""
