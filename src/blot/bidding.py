"""
Bidding (two rounds).
Round 1: non-dealer then dealer may take the candidate's suit as trump (the
candidate is kept). The dealer may not pass a Jack candidate.
Round 2: each may name another suit or No Trump (the candidate is burned).
If everyone passes twice the cards are redealt.
"""
from __future__ import annotations

import logging
from typing import Callable, NamedTuple, Optional

from .deck import Card, ContractType, Rank, Suit
from .deal import first_to_bid
from .errors import IllegalBidError
from .play import Player

logger = logging.getLogger(__name__)


class Bid(NamedTuple):
    """A take: contract type and (for TRUMP) the trump suit."""
    contract_type: ContractType
    trump_suit: Optional[Suit]


class BiddingResult(NamedTuple):
    """Result of the bidding phase."""
    taker: Player
    contract_type: ContractType
    trump_suit: Optional[Suit]
    keep_candidate: bool
    bids: list[tuple[Player, int, Bid | None]]  # (player, bid round, bid or None for pass)


# get_bid(player, bid_round, candidate, history) -> Bid or None (pass)
BidCallback = Callable[[Player, int, Card, list], Optional[Bid]]


def must_take(player: Player, dealer: Player, bid_round: int, candidate: Card) -> bool:
    """Dealer facing a Jack candidate in round 1 cannot pass."""
    return bid_round == 1 and player == dealer and candidate.rank == Rank.JACK


def check_bid(
    bid: Bid | None,
    player: Player,
    dealer: Player,
    bid_round: int,
    candidate: Card,
) -> None:
    """Raise IllegalBidError if ``bid`` is not allowed."""
    if bid is None:
        if must_take(player, dealer, bid_round, candidate):
            raise IllegalBidError("Dealer must take a Jack candidate in round 1")
        return
    if bid.contract_type is ContractType.TRUMP and bid.trump_suit is None:
        raise IllegalBidError("A trump bid needs a trump suit")
    if bid.contract_type is ContractType.NO_TRUMP and bid.trump_suit is not None:
        raise IllegalBidError("A No Trump bid cannot name a suit")
    if bid_round == 1:
        if bid != Bid(ContractType.TRUMP, candidate.suit):
            raise IllegalBidError("Round 1 only allows taking the candidate's suit")
    elif bid.trump_suit == candidate.suit:
        raise IllegalBidError("Round 2 cannot name the refused candidate's suit")


def run_bidding(
    dealer: Player,
    candidate: Card,
    get_bid: BidCallback,
) -> BiddingResult | None:
    """
    Run both bidding rounds. get_bid(player, bid_round, candidate, history)
    returns a Bid or None (pass). Returns None if everyone passed twice.
    """
    first = first_to_bid(dealer)
    history: list[tuple[Player, int, Bid | None]] = []

    for bid_round in (1, 2):
        for player in (first, dealer):
            bid = get_bid(player, bid_round, candidate, list(history))
            check_bid(bid, player, dealer, bid_round, candidate)
            history.append((player, bid_round, bid))
            logger.debug("Round %d: %s %s", bid_round, player.name, bid or "passes")
            if bid is not None:
                return BiddingResult(
                    taker=player,
                    contract_type=bid.contract_type,
                    trump_suit=bid.trump_suit,
                    keep_candidate=bid_round == 1,
                    bids=history,
                )

    logger.debug("Everyone passed; redeal")
    return None
