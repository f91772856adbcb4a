"""
Errors raised when a caller breaks the engine's contract.

Domain outcomes (Dedans, Capot, "no combination", a redeal) are never errors:
they come back as ordinary return values.
"""
from __future__ import annotations


class RuleViolation(Exception):
    """Base class: the caller asked for something the rules cannot produce."""


class EmptyTrickError(RuleViolation):
    """Raised when resolving a trick that holds no plays."""


class CardNotInHandError(RuleViolation):
    """Raised when a card is checked or played from a hand that lacks it."""


class IllegalPlayError(RuleViolation):
    """Raised when a card in hand is played although the rules forbid it."""


class NotYourTurnError(RuleViolation):
    """Raised when a player acts out of turn."""


class IllegalBidError(RuleViolation):
    """Raised when a bid (or pass) is not allowed at this point of the bidding."""


class IllegalDeclarationError(RuleViolation):
    """Raised when announcing combinations the hand does not hold, or too late."""


class InconsistentRoundError(RuleViolation):
    """Raised when captured piles cannot come from a finished round."""


class NoLegalPlayError(RuleViolation):
    """Raised when a non-empty hand has no legal play (a legality engine bug)."""


__all__ = [
    "RuleViolation",
    "EmptyTrickError",
    "CardNotInHandError",
    "IllegalPlayError",
    "NotYourTurnError",
    "IllegalBidError",
    "IllegalDeclarationError",
    "InconsistentRoundError",
    "NoLegalPlayError",
]
