"""
Greedy baseline agent.

Every decision is a pure function of the visible state, called synchronously
by the orchestrator when it is the bot's turn:

- ``choose_play``: strongest legal card
- ``choose_bid``: hand-strength thresholds per difficulty
- ``choose_declarations``: best non-overlapping combinations
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Optional, Sequence

from .bidding import Bid
from .combinations import Combination, detect_combinations, resolve_conflicts
from .deal import Deal
from .deck import Card, ContractType, Rank, Suit, point_value, power
from .errors import NoLegalPlayError
from .play import Play, Player, lead_suit, legal_plays

if TYPE_CHECKING:
    from .game import RoundState


class Difficulty(Enum):
    BEGINNER = "beginner"
    INTERMEDIATE = "intermediate"
    EXPERT = "expert"


# (trump threshold, no-trump threshold)
BID_THRESHOLDS = {
    Difficulty.BEGINNER: (55, 60),
    Difficulty.INTERMEDIATE: (65, 70),
    Difficulty.EXPERT: (75, 80),
}


def choose_play(
    hand: Sequence[Card],
    trick: Sequence[Play],
    trump_suit: Optional[Suit],
    contract_type: ContractType,
) -> Card:
    """Play the strongest legal card (ties keep hand order)."""
    legal = legal_plays(hand, trick, trump_suit, contract_type)
    if not legal:
        raise NoLegalPlayError(f"No legal play in non-empty hand {list(hand)}")
    led = lead_suit(trick)
    return max(legal, key=lambda c: power(c, trump_suit, led, contract_type))


def analyze_hand_strength(
    hand: Sequence[Card],
    trump_suit: Optional[Suit],
    contract_type: ContractType,
) -> int:
    """
    Rough bidding value of a hand.
    About 40-50 is weak but playable, 50-70 a solid bid, 70+ very strong.
    """
    strength = 0
    no_trump = contract_type is ContractType.NO_TRUMP

    combos = resolve_conflicts(detect_combinations(hand, trump_suit, contract_type))
    strength += sum(c.score for c in combos)

    trumps = [] if no_trump else [c for c in hand if c.suit == trump_suit]
    side = list(hand) if no_trump else [c for c in hand if c.suit != trump_suit]
    suit_counts = {s: sum(1 for c in hand if c.suit == s) for s in Suit}

    if not no_trump and trump_suit is not None:
        ranks = {c.rank for c in trumps}
        if Rank.JACK in ranks:
            strength += 25
        if Rank.NINE in ranks:
            strength += 15
        if Rank.ACE in ranks:
            strength += 8

        if len(trumps) >= 3:
            strength += 10
        if len(trumps) >= 4:
            strength += 20
        if len(trumps) >= 5:
            strength += 30

        strength += sum(point_value(c, trump_suit, ContractType.TRUMP) for c in trumps)

        # Voids and singletons let trumps cut early
        if trumps:
            for s in Suit:
                if s == trump_suit:
                    continue
                if suit_counts[s] == 0:
                    strength += 15
                elif suit_counts[s] == 1:
                    strength += 5
    else:
        strength += sum(point_value(c, None, ContractType.NO_TRUMP) for c in hand)
        strength += 15 * sum(1 for c in hand if c.rank == Rank.ACE)
        strength += 10 * sum(1 for n in suit_counts.values() if n >= 4)

    for c in side:
        if c.rank == Rank.ACE:
            strength += 12
        elif c.rank == Rank.TEN:
            guarded = any(o.suit == c.suit and o.rank in (Rank.ACE, Rank.KING) for o in side)
            strength += 8 if guarded else 2

    return strength


def choose_bid(
    hand: Sequence[Card],
    candidate: Card,
    bid_round: int,
    is_dealer: bool,
    difficulty: Difficulty = Difficulty.INTERMEDIATE,
) -> Bid | None:
    """Take or pass (None). A dealer never passes in round 2."""
    trump_threshold, no_trump_threshold = BID_THRESHOLDS[difficulty]

    if bid_round == 1:
        take = Bid(ContractType.TRUMP, candidate.suit)
        if is_dealer and candidate.rank == Rank.JACK:
            return take
        score = analyze_hand_strength(list(hand) + [candidate], candidate.suit, ContractType.TRUMP)
        has_jack = candidate.rank == Rank.JACK or any(
            c.suit == candidate.suit and c.rank == Rank.JACK for c in hand
        )
        threshold = trump_threshold - 10 if has_jack else trump_threshold
        return take if score >= threshold else None

    options: list[tuple[int, Bid]] = [
        (analyze_hand_strength(hand, s, ContractType.TRUMP), Bid(ContractType.TRUMP, s))
        for s in Suit
        if s != candidate.suit
    ]
    nt_score = analyze_hand_strength(hand, None, ContractType.NO_TRUMP)

    best: tuple[int, Bid] | None = None
    for score, bid in options:
        if score >= trump_threshold - 5 and (best is None or score > best[0]):
            best = (score, bid)
    if nt_score >= no_trump_threshold and (best is None or nt_score > best[0]):
        best = (nt_score, Bid(ContractType.NO_TRUMP, None))
    if best is not None:
        return best[1]

    if is_dealer:
        forced = max(options, key=lambda o: o[0])
        if nt_score > forced[0]:
            return Bid(ContractType.NO_TRUMP, None)
        return forced[1]
    return None


def choose_declarations(
    hand: Sequence[Card],
    trump_suit: Optional[Suit],
    contract_type: ContractType,
) -> list[Combination]:
    """Announce everything worth announcing."""
    return resolve_conflicts(detect_combinations(hand, trump_suit, contract_type))


@dataclass
class GreedyAgent:
    """
    Baseline bot bundling the greedy decisions for one seat.

    Usage:
        bot = GreedyAgent(Player.OPPONENT, Difficulty.EXPERT)
        card = bot.play(state)
    """

    player: Player
    difficulty: Difficulty = Difficulty.INTERMEDIATE

    def bid(self, d: Deal, bid_round: int) -> Bid | None:
        """Bid on the first six cards of deal ``d``."""
        return choose_bid(
            d.hands[self.player], d.candidate, bid_round, self.player == d.dealer, self.difficulty
        )

    def play(self, state: RoundState) -> Card:
        """Pick a card for the current trick of ``state``."""
        return choose_play(
            state.hands[self.player],
            state.trick,
            state.trump_suit,
            state.contract_type,
        )
