"""
Distribution (deal) for two players.
6 cards each, the 13th card is turned face up as the candidate trump, the other
11 form the stock. Once someone takes, both hands are completed to 9 cards.
"""
from __future__ import annotations

import random
from typing import NamedTuple

from .deck import Card, make_deck_24, shuffle_deck
from .play import Player

FIRST_DEAL_SIZE = 6
HAND_SIZE = 9
CANDIDATE_INDEX = 2 * FIRST_DEAL_SIZE


class Deal(NamedTuple):
    """Result of the first distribution. Hands are indexed by Player."""
    hands: tuple[list[Card], list[Card]]
    candidate: Card
    stock: list[Card]
    dealer: Player


class Distribution(NamedTuple):
    """Hands completed after the bidding."""
    hands: tuple[list[Card], list[Card]]
    stock: list[Card]   # never played this round
    burned: list[Card]  # the candidate, when the taker refused it


def first_to_bid(dealer: Player) -> Player:
    """The player who is not dealing speaks first."""
    return dealer.other


def first_to_play(dealer: Player) -> Player:
    """The player who is not dealing leads the first trick."""
    return dealer.other


def next_dealer(dealer: Player) -> Player:
    """Dealer alternates every deal (including redeals)."""
    return dealer.other


def deal(
    dealer: Player = Player.OPPONENT,
    deck: list[Card] | None = None,
    rng: random.Random | None = None,
) -> Deal:
    """
    Shuffle and deal. The non-dealer gets the first 6 cards, the dealer the
    next 6; card 13 is the candidate.
    """
    if deck is None:
        deck = make_deck_24()
    deck = shuffle_deck(deck, rng)

    hands: list[list[Card]] = [[], []]
    hands[dealer.other] = deck[:FIRST_DEAL_SIZE]
    hands[dealer] = deck[FIRST_DEAL_SIZE:CANDIDATE_INDEX]
    return Deal(
        hands=(hands[0], hands[1]),
        candidate=deck[CANDIDATE_INDEX],
        stock=deck[CANDIDATE_INDEX + 1 :],
        dealer=dealer,
    )


def distribute(d: Deal, taker: Player, keep_candidate: bool) -> Distribution:
    """
    Complete both hands to 9 cards.
    Kept candidate: taker gets candidate + 2 stock cards, the other player the next 3.
    Refused candidate: it is burned; taker gets 3 stock cards, the other player the next 3.
    """
    stock = list(d.stock)
    if keep_candidate:
        extra_taker = [d.candidate] + stock[:2]
        extra_other = stock[2:5]
        rest = stock[5:]
        burned: list[Card] = []
    else:
        extra_taker = stock[:3]
        extra_other = stock[3:6]
        rest = stock[6:]
        burned = [d.candidate]

    hands: list[list[Card]] = [list(d.hands[0]), list(d.hands[1])]
    hands[taker].extend(extra_taker)
    hands[taker.other].extend(extra_other)
    return Distribution(hands=(hands[0], hands[1]), stock=rest, burned=burned)
