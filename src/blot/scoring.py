"""
Round settlement: card points, last-trick bonus (dix de der), declarations,
contract check (Dedans), Capot, and conversion to table points.
152 card points + 10 for the last trick = 162 per round.
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Iterable, Optional, Sequence

from .combinations import Combination, belote_points
from .deck import Card, ContractType, Suit, cards_point_total, effective_trump
from .errors import InconsistentRoundError
from .play import CARDS_PER_TRICK, Player

TRICKS_PER_ROUND = 9
LAST_TRICK_BONUS = 10
ROUND_POINTS_TOTAL = 162
CAPOT_POINTS = 212
CAPOT_TABLE_POINTS = 21


class RoundStatus(Enum):
    NORMAL = "NORMAL"
    DEDANS = "DEDANS"  # taker failed the contract
    CAPOT = "CAPOT"    # one side took every trick


@dataclass(frozen=True)
class ScoreBreakdown:
    """Per-player round detail. ``raw_final_points`` is what the table points come from."""

    raw_card_points: int
    raw_decl_points: int
    last_trick_bonus: int
    belote_bonus: int
    raw_final_points: int
    table_points: int
    captured_cards_count: int
    declared: tuple[Combination, ...] = ()


@dataclass(frozen=True)
class RoundScore:
    """Result of a settled round. ``breakdowns`` is indexed by Player."""

    breakdowns: tuple[ScoreBreakdown, ScoreBreakdown]
    status: RoundStatus
    winner: Player
    bid_taker: Player
    contract_type: ContractType
    trump_suit: Optional[Suit]

    @property
    def hero(self) -> ScoreBreakdown:
        return self.breakdowns[Player.HERO]

    @property
    def opponent(self) -> ScoreBreakdown:
        return self.breakdowns[Player.OPPONENT]

    def table_points(self) -> tuple[int, int]:
        return (self.hero.table_points, self.opponent.table_points)


def table_points(raw: int) -> int:
    """Convert raw round points to table points (rounded to the nearest ten, 5 down)."""
    if raw == CAPOT_POINTS:
        return CAPOT_TABLE_POINTS
    if raw == 0:
        return 0
    return (raw + 4) // 10


def _check_piles(captured: Sequence[Sequence[Card]], last_trick_winner: Player) -> None:
    if len(captured) != 2:
        raise InconsistentRoundError(f"Expected 2 captured piles, got {len(captured)}")
    for player in Player:
        if len(captured[player]) % CARDS_PER_TRICK:
            raise InconsistentRoundError(
                f"Pile of {player.name} holds {len(captured[player])} cards (not whole tricks)"
            )
    total = sum(len(pile) for pile in captured)
    if total != TRICKS_PER_ROUND * CARDS_PER_TRICK:
        raise InconsistentRoundError(
            f"Captured piles hold {total} cards, expected {TRICKS_PER_ROUND * CARDS_PER_TRICK}"
        )
    if not captured[last_trick_winner]:
        raise InconsistentRoundError(
            f"{last_trick_winner.name} won the last trick but captured nothing"
        )


def settle_round(
    captured: Sequence[Sequence[Card]],
    declarations: Sequence[Iterable[Combination]],
    bid_taker: Player,
    trump_suit: Optional[Suit],
    contract_type: ContractType,
    last_trick_winner: Player,
) -> RoundScore:
    """
    Settle a finished round.

    ``captured`` and ``declarations`` are indexed by Player; declarations are
    the combinations that count for each side (after comparison).
    """
    _check_piles(captured, last_trick_winner)
    decls = [tuple(declarations[p]) for p in Player]

    card_points = [cards_point_total(captured[p], trump_suit, contract_type) for p in Player]
    last_bonus = [LAST_TRICK_BONUS if p == last_trick_winner else 0 for p in Player]
    decl_points = [sum(c.score for c in decls[p]) for p in Player]
    belote = [belote_points(decls[p]) for p in Player]
    tricks = [len(captured[p]) // CARDS_PER_TRICK for p in Player]

    final = [0, 0]
    sweeper = next((p for p in Player if tricks[p] == TRICKS_PER_ROUND), None)
    if sweeper is not None:
        status = RoundStatus.CAPOT
        winner = sweeper
        final[sweeper] = CAPOT_POINTS + decl_points[sweeper]
        final[sweeper.other] = belote[sweeper.other]
    else:
        raw = [card_points[p] + last_bonus[p] + decl_points[p] for p in Player]
        taker, defender = bid_taker, bid_taker.other
        if raw[taker] > raw[defender]:
            status = RoundStatus.NORMAL
            winner = taker
            final = raw
        else:
            # Dedans: the taker's melds (except Belote) go to the defender
            status = RoundStatus.DEDANS
            winner = defender
            final[taker] = belote[taker]
            final[defender] = (
                ROUND_POINTS_TOTAL + (decl_points[taker] - belote[taker]) + decl_points[defender]
            )

    breakdowns = tuple(
        ScoreBreakdown(
            raw_card_points=card_points[p],
            raw_decl_points=decl_points[p],
            last_trick_bonus=last_bonus[p],
            belote_bonus=belote[p],
            raw_final_points=final[p],
            table_points=table_points(final[p]),
            captured_cards_count=len(captured[p]),
            declared=decls[p],
        )
        for p in Player
    )
    return RoundScore(
        breakdowns=(breakdowns[0], breakdowns[1]),
        status=status,
        winner=winner,
        bid_taker=bid_taker,
        contract_type=contract_type,
        trump_suit=effective_trump(trump_suit, contract_type),
    )
