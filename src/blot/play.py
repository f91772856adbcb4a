"""
Trick-taking: legal moves and trick winner.
Follow suit; when trumps are led you must overtrump if you can; void in the
led suit you must cut with a trump; otherwise discard anything.
"""
from __future__ import annotations

from enum import IntEnum
from typing import NamedTuple, Optional, Sequence

from .deck import Card, ContractType, Suit, effective_trump, power
from .errors import CardNotInHandError, EmptyTrickError


class Player(IntEnum):
    """The two seats at the table."""
    HERO = 0
    OPPONENT = 1

    @property
    def other(self) -> "Player":
        return Player(1 - self)


class Play(NamedTuple):
    """One card played into a trick."""
    player: Player
    card: Card


CARDS_PER_TRICK = 2


def lead_suit(trick: Sequence[Play]) -> Suit | None:
    """Suit of the first card played, or None for an empty trick."""
    if not trick:
        return None
    return trick[0].card.suit


def trick_winner(
    trick: Sequence[Play],
    trump_suit: Optional[Suit],
    contract_type: ContractType,
) -> Play:
    """
    Winning play of a (possibly partial) trick.
    The lead suit is fixed by the first play; ties keep the earlier play.
    """
    if not trick:
        raise EmptyTrickError("Cannot resolve an empty trick")
    led = trick[0].card.suit
    best = trick[0]
    best_power = power(best.card, trump_suit, led, contract_type)
    for play in trick[1:]:
        p = power(play.card, trump_suit, led, contract_type)
        if p > best_power:
            best, best_power = play, p
    return best


def legal_plays(
    hand: Sequence[Card],
    trick: Sequence[Play],
    trump_suit: Optional[Suit],
    contract_type: ContractType,
) -> list[Card]:
    """
    Cards of ``hand`` that may legally be played into ``trick``, in hand order.
    Never empty for a non-empty hand.
    """
    if not trick:
        return list(hand)

    led = trick[0].card.suit
    following = [c for c in hand if c.suit == led]
    trump = effective_trump(trump_suit, contract_type)

    if trump is None:
        # No trump: follow suit if possible, otherwise anything
        return following if following else list(hand)

    if following:
        if led != trump:
            return following
        # Trumps led: must overtrump the current winner if possible
        best = trick_winner(trick, trump_suit, contract_type)
        to_beat = power(best.card, trump_suit, led, contract_type)
        over = [c for c in following if power(c, trump_suit, led, contract_type) > to_beat]
        return over if over else following

    trumps = [c for c in hand if c.suit == trump]
    if trumps:
        return trumps  # must cut
    return list(hand)


def is_legal_play(
    hand: Sequence[Card],
    card: Card,
    trick: Sequence[Play],
    trump_suit: Optional[Suit],
    contract_type: ContractType,
) -> bool:
    """True if ``card`` (which must be in ``hand``) may be played now."""
    if card not in hand:
        raise CardNotInHandError(f"Card {card} not in hand")
    return card in legal_plays(hand, trick, trump_suit, contract_type)
