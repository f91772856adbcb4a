"""Blot 24 game engine (two players, 24 cards)."""

__version__ = "0.1.0"

from .deck import (
    Card,
    ContractType,
    Rank,
    Suit,
    make_deck_24,
    point_value,
    power,
    shuffle_deck,
    sort_for_display,
)
from .play import Play, Player, is_legal_play, legal_plays, trick_winner
from .combinations import (
    ComboKind,
    Combination,
    DeclarationOutcome,
    compare_declarations,
    detect_combinations,
    resolve_conflicts,
)
from .scoring import RoundScore, RoundStatus, ScoreBreakdown, settle_round, table_points
from .deal import deal, distribute
from .bidding import Bid, BiddingResult, run_bidding
from .config import MatchConfig
from .game import (
    RoundState,
    declare,
    finish_round,
    play_card,
    play_one_round,
    run_match,
    run_round,
    show,
    start_round,
)
