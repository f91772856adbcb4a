"""
Blot 24 deck: 24 cards (4 suits × 6 ranks, 9 to Ace).
Card values for counting and card strength inside a trick.
"""
from __future__ import annotations

import random
from dataclasses import dataclass
from enum import Enum, IntEnum
from typing import Iterable, Optional


class Suit(IntEnum):
    """Pique, Carreau, Trèfle, Cœur. Order used for display and tie-breaks."""
    SPADES = 0
    DIAMONDS = 1
    CLUBS = 2
    HEARTS = 3

    @property
    def symbol(self) -> str:
        return "♠♦♣♥"[self]


class Rank(IntEnum):
    """Ranks in combination order (9 lowest, Ace highest); value = sequence index."""
    NINE = 0
    TEN = 1
    JACK = 2
    QUEEN = 3
    KING = 4
    ACE = 5

    @property
    def label(self) -> str:
        return ("9", "10", "J", "Q", "K", "A")[self]


class ContractType(Enum):
    """TRUMP carries a trump suit; NO_TRUMP has none."""
    TRUMP = "TRUMP"
    NO_TRUMP = "NO_TRUMP"


@dataclass(frozen=True)
class Card:
    """A single card. Identity is the (suit, rank) pair: exactly 24 exist."""

    suit: Suit
    rank: Rank

    def __str__(self) -> str:
        return f"{self.rank.label}{self.suit.symbol}"

    def __repr__(self) -> str:
        return str(self)


DECK_SIZE = 24
CARD_POINTS_TOTAL = 152

# Point tables (Rank -> points). Each table sums to 152 over the whole deck.
TRUMP_POINTS = {
    Rank.NINE: 14,
    Rank.TEN: 10,
    Rank.JACK: 20,
    Rank.QUEEN: 3,
    Rank.KING: 4,
    Rank.ACE: 11,
}
NON_TRUMP_POINTS = {
    Rank.NINE: 0,
    Rank.TEN: 10,
    Rank.JACK: 2,
    Rank.QUEEN: 3,
    Rank.KING: 4,
    Rank.ACE: 11,
}
NO_TRUMP_POINTS = {
    Rank.NINE: 0,
    Rank.TEN: 10,
    Rank.JACK: 2,
    Rank.QUEEN: 3,
    Rank.KING: 4,
    Rank.ACE: 19,
}

# Trick strength, weakest first. The trump 9 and Jack rank above the Ace.
ORDER_TRUMP = (Rank.QUEEN, Rank.KING, Rank.TEN, Rank.ACE, Rank.NINE, Rank.JACK)
ORDER_PLAIN = (Rank.NINE, Rank.JACK, Rank.QUEEN, Rank.KING, Rank.TEN, Rank.ACE)

POWER_TRUMP = 200
POWER_LEAD = 100


def make_card(suit: Suit, rank: Rank) -> Card:
    return Card(suit=suit, rank=rank)


def make_deck_24() -> list[Card]:
    """Build a fresh, ordered 24-card deck (suit by suit, 9 to Ace)."""
    return [make_card(s, r) for s in Suit for r in Rank]


def shuffle_deck(deck: Iterable[Card], rng: random.Random | None = None) -> list[Card]:
    """Return a shuffled copy of ``deck``. Pass a seeded ``rng`` for reproducible deals."""
    if rng is None:
        rng = random.Random()
    shuffled = list(deck)
    rng.shuffle(shuffled)
    return shuffled


def effective_trump(trump_suit: Optional[Suit], contract_type: ContractType) -> Optional[Suit]:
    """The trump suit that actually applies: None under NO_TRUMP."""
    if contract_type is ContractType.NO_TRUMP:
        return None
    return trump_suit


def point_value(card: Card, trump_suit: Optional[Suit], contract_type: ContractType) -> int:
    """Counting value of a card for the given contract."""
    if contract_type is ContractType.NO_TRUMP:
        return NO_TRUMP_POINTS[card.rank]
    if card.suit == trump_suit:
        return TRUMP_POINTS[card.rank]
    return NON_TRUMP_POINTS[card.rank]


def cards_point_total(
    cards: Iterable[Card],
    trump_suit: Optional[Suit],
    contract_type: ContractType,
) -> int:
    """Total points in a set of cards (152 for the whole deck)."""
    return sum(point_value(c, trump_suit, contract_type) for c in cards)


def power(
    card: Card,
    trump_suit: Optional[Suit],
    lead_suit: Optional[Suit],
    contract_type: ContractType,
) -> int:
    """
    Strength of a card inside one trick; only meaningful for comparisons.
    Trumps > lead suit > anything else (which can never win).
    """
    trump = effective_trump(trump_suit, contract_type)
    if trump is not None and card.suit == trump:
        return POWER_TRUMP + ORDER_TRUMP.index(card.rank)
    if card.suit == lead_suit:
        return POWER_LEAD + ORDER_PLAIN.index(card.rank)
    return ORDER_PLAIN.index(card.rank)


def sort_for_display(
    hand: Iterable[Card],
    trump_suit: Optional[Suit] = None,
    contract_type: ContractType = ContractType.TRUMP,
) -> list[Card]:
    """Trumps first (TRUMP contract only), then suit order, then 9 to Ace."""
    trump = effective_trump(trump_suit, contract_type)

    def key(c: Card) -> tuple[int, int, int]:
        return (0 if c.suit == trump else 1, int(c.suit), int(c.rank))

    return sorted(hand, key=key)
