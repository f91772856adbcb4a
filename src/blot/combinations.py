"""
Combinations (annonces): sequences, carrés and Belote.

Detection reports every candidate (possibly overlapping); ``resolve_conflicts``
keeps the best disjoint subset; ``compare_declarations`` decides whose melds
count between the two players.
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum
from typing import Iterable, NamedTuple, Optional, Sequence

from .deck import Card, ContractType, Rank, Suit, effective_trump
from .play import Player


class ComboKind(IntEnum):
    """Combination types; the value is the type priority (Belote is outside the ranking)."""
    BELOTE = 0
    TIERCE = 1   # 3-card sequence
    FIFTY = 2    # 4-card sequence
    HUNDRED = 3  # 5-card sequence
    CARRE = 4    # four of a kind


SEQUENCE_KINDS = {3: ComboKind.TIERCE, 4: ComboKind.FIFTY, 5: ComboKind.HUNDRED}
SEQUENCE_SCORES = {ComboKind.TIERCE: 20, ComboKind.FIFTY: 50, ComboKind.HUNDRED: 100}
BELOTE_SCORE = 20

CARRE_SCORES_TRUMP = {Rank.JACK: 200, Rank.NINE: 140, Rank.ACE: 110}
CARRE_SCORES_NO_TRUMP = {Rank.ACE: 190, Rank.NINE: 0}
CARRE_SCORE_OTHER = 100
CARRE_SCAN_ORDER = (Rank.JACK, Rank.NINE, Rank.ACE, Rank.TEN, Rank.KING, Rank.QUEEN)


@dataclass(frozen=True)
class Combination:
    """
    A detected meld.

    - ``height``: combination-order index of the top card (0 for 9 .. 5 for Ace)
    - ``rank``: the defining rank (top of a sequence, the rank of a carré)
    - ``suit``: suit of a sequence or Belote; None for a carré
    """

    kind: ComboKind
    cards: tuple[Card, ...]
    score: int
    height: int
    rank: Rank
    is_trump: bool = False
    suit: Optional[Suit] = None

    @property
    def is_belote(self) -> bool:
        return self.kind == ComboKind.BELOTE

    def __str__(self) -> str:
        cards = " ".join(str(c) for c in self.cards)
        return f"{self.kind.name}({cards})={self.score}"


def carre_score(rank: Rank, contract_type: ContractType) -> int:
    """Points of a carré; 0 means the carré does not count at all."""
    if contract_type is ContractType.TRUMP:
        return CARRE_SCORES_TRUMP.get(rank, CARRE_SCORE_OTHER)
    return CARRE_SCORES_NO_TRUMP.get(rank, CARRE_SCORE_OTHER)


def _find_sequences(cards: Sequence[Card], length: int) -> list[list[Card]]:
    """All windows of ``length`` consecutive ranks; ``cards`` sorted high to low."""
    found: list[list[Card]] = []
    for i in range(len(cards) - length + 1):
        window = list(cards[i : i + length])
        if all(window[j - 1].rank - window[j].rank == 1 for j in range(1, length)):
            found.append(window)
    return found


def detect_combinations(
    hand: Iterable[Card],
    trump_suit: Optional[Suit],
    contract_type: ContractType,
) -> list[Combination]:
    """All combinations held in ``hand`` (unresolved: they may overlap)."""
    hand = list(hand)
    trump = effective_trump(trump_suit, contract_type)
    combos: list[Combination] = []

    # Carrés
    for rank in CARRE_SCAN_ORDER:
        same = sorted((c for c in hand if c.rank == rank), key=lambda c: c.suit)
        if len(same) != 4:
            continue
        score = carre_score(rank, contract_type)
        if score > 0:
            combos.append(
                Combination(ComboKind.CARRE, tuple(same), score, height=int(rank), rank=rank)
            )

    # Sequences, longest first; cards used by a longer run are not reused
    for suit in Suit:
        suit_cards = sorted((c for c in hand if c.suit == suit), key=lambda c: c.rank, reverse=True)
        if len(suit_cards) < 3:
            continue
        used: set[Card] = set()
        for length in (5, 4, 3):
            for seq in _find_sequences(suit_cards, length):
                if any(c in used for c in seq):
                    continue
                kind = SEQUENCE_KINDS[length]
                top = seq[0].rank
                combos.append(
                    Combination(
                        kind,
                        tuple(seq),
                        SEQUENCE_SCORES[kind],
                        height=int(top),
                        rank=top,
                        is_trump=suit == trump,
                        suit=suit,
                    )
                )
                used.update(seq)

    # Belote: King + Queen of trump
    if trump is not None:
        king = next((c for c in hand if c.suit == trump and c.rank == Rank.KING), None)
        queen = next((c for c in hand if c.suit == trump and c.rank == Rank.QUEEN), None)
        if king is not None and queen is not None:
            combos.append(
                Combination(
                    ComboKind.BELOTE,
                    (king, queen),
                    BELOTE_SCORE,
                    height=0,
                    rank=Rank.KING,
                    is_trump=True,
                    suit=trump,
                )
            )

    return combos


def _conflict_order(c: Combination) -> tuple[int, int, int, int, int]:
    suit_key = len(Suit) if c.suit is None else int(c.suit)
    return (-c.score, -int(c.kind), -c.height, suit_key, -int(c.rank))


def resolve_conflicts(combinations: Iterable[Combination]) -> list[Combination]:
    """
    Best set of non-overlapping combinations.
    Belote is always kept and may share its cards with anything else.
    """
    combinations = list(combinations)
    selected = [c for c in combinations if c.is_belote]
    others = sorted((c for c in combinations if not c.is_belote), key=_conflict_order)

    used: set[Card] = set()
    for combo in others:
        if any(card in used for card in combo.cards):
            continue
        selected.append(combo)
        used.update(combo.cards)
    return selected


def belote_points(combinations: Iterable[Combination]) -> int:
    return sum(c.score for c in combinations if c.is_belote)


def main_combinations(combinations: Iterable[Combination]) -> list[Combination]:
    """Everything but Belote."""
    return [c for c in combinations if not c.is_belote]


def _strength(c: Combination) -> tuple[int, int, int, int]:
    return (int(c.kind), c.score, c.height, int(c.is_trump))


def best_combination(combinations: Iterable[Combination]) -> Combination | None:
    """Strongest main combination by type priority, score, height, then trump over plain."""
    mains = main_combinations(combinations)
    if not mains:
        return None
    return max(mains, key=_strength)


class DeclarationOutcome(NamedTuple):
    """Who wins the declarations and what each side banks from them."""
    winner: Player | None
    hero_points: int
    opponent_points: int

    def points(self, player: Player) -> int:
        return self.hero_points if player == Player.HERO else self.opponent_points


def compare_declarations(
    hero: Iterable[Combination],
    opponent: Iterable[Combination],
    first_leader: Player,
) -> DeclarationOutcome:
    """
    Decide whose main combinations count.

    Best combinations are compared by type priority, score, height, then a
    trump combination beats a plain one, and a full tie goes to the player who
    led the first trick. Each side always keeps its own Belote.
    """
    h_valid = resolve_conflicts(hero)
    o_valid = resolve_conflicts(opponent)
    h_belote = belote_points(h_valid)
    o_belote = belote_points(o_valid)

    h_best = best_combination(h_valid)
    o_best = best_combination(o_valid)

    if h_best is None and o_best is None:
        return DeclarationOutcome(None, h_belote, o_belote)

    if o_best is None:
        winner = Player.HERO
    elif h_best is None:
        winner = Player.OPPONENT
    else:
        h_key = _strength(h_best)
        o_key = _strength(o_best)
        if h_key > o_key:
            winner = Player.HERO
        elif o_key > h_key:
            winner = Player.OPPONENT
        else:
            winner = first_leader

    h_main = sum(c.score for c in main_combinations(h_valid))
    o_main = sum(c.score for c in main_combinations(o_valid))
    return DeclarationOutcome(
        winner,
        h_belote + (h_main if winner == Player.HERO else 0),
        o_belote + (o_main if winner == Player.OPPONENT else 0),
    )


def counted_combinations(
    resolved: Iterable[Combination],
    player: Player,
    outcome: DeclarationOutcome,
) -> list[Combination]:
    """The combinations of ``player`` that score after the comparison."""
    resolved = list(resolved)
    if outcome.winner == player:
        return resolved
    return [c for c in resolved if c.is_belote]
