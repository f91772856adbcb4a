"""
Single round and match orchestration: deal → bid → distribute → declare →
play 9 tricks (showing the announced melds before the second one) → score.

Round state is an immutable snapshot; every transition (``declare``,
``show``, ``play_card``) returns a new ``RoundState`` and never touches the old one.
"""
from __future__ import annotations

import logging
import random
from dataclasses import dataclass, replace
from typing import Callable, Optional, Sequence

from .agents import GreedyAgent, choose_declarations
from .bidding import Bid, BiddingResult, run_bidding
from .combinations import (
    Combination,
    DeclarationOutcome,
    compare_declarations,
    counted_combinations,
    detect_combinations,
    main_combinations,
    resolve_conflicts,
)
from .config import MatchConfig
from .deal import Deal, deal, distribute, first_to_play, next_dealer
from .deck import Card, ContractType, Suit
from .errors import (
    CardNotInHandError,
    IllegalDeclarationError,
    IllegalPlayError,
    InconsistentRoundError,
    NotYourTurnError,
)
from .play import CARDS_PER_TRICK, Play, Player, legal_plays, trick_winner
from .scoring import TRICKS_PER_ROUND, RoundScore, settle_round

logger = logging.getLogger(__name__)


def _with(pair: tuple, player: Player, value) -> tuple:
    """Copy of a per-player pair with ``player``'s entry replaced."""
    items = list(pair)
    items[player] = value
    return tuple(items)


@dataclass(frozen=True)
class RoundState:
    """Snapshot of one round in the trick-taking phase. Per-player fields are indexed by Player."""

    dealer: Player
    taker: Player
    contract_type: ContractType
    trump_suit: Optional[Suit]
    hands: tuple[tuple[Card, ...], tuple[Card, ...]]
    stock: tuple[Card, ...]
    burned: tuple[Card, ...]
    leader: Player
    first_leader: Player
    # Everything each hand held at round start, unresolved
    combinations: tuple[tuple[Combination, ...], tuple[Combination, ...]]
    # Announced and resolved; Belote is counted without announcing
    declared: tuple[tuple[Combination, ...], tuple[Combination, ...]]
    trick: tuple[Play, ...] = ()
    captured: tuple[tuple[Card, ...], tuple[Card, ...]] = ((), ())
    trick_count: int = 0
    last_trick: tuple[Play, ...] = ()
    last_trick_winner: Optional[Player] = None
    declaration_outcome: Optional[DeclarationOutcome] = None
    # Announced melds must be shown before the player's second-trick card
    shown: tuple[bool, bool] = (False, False)

    def current_player(self) -> Player:
        return Player((self.leader + len(self.trick)) % 2)

    def legal_cards(self, player: Player) -> list[Card]:
        return legal_plays(self.hands[player], self.trick, self.trump_suit, self.contract_type)

    def has_played_in_trick(self, player: Player) -> bool:
        return any(p.player == player for p in self.trick)

    @property
    def is_finished(self) -> bool:
        return self.trick_count == TRICKS_PER_ROUND


def all_cards(state: RoundState) -> list[Card]:
    """Every card of the round wherever it sits (24 distinct cards at all times)."""
    cards = list(state.stock) + list(state.burned)
    for p in Player:
        cards.extend(state.hands[p])
        cards.extend(state.captured[p])
    cards.extend(play.card for play in state.trick)
    return cards


def start_round(d: Deal, bidding: BiddingResult) -> RoundState:
    """Complete the hands and detect each player's combinations."""
    dist = distribute(d, bidding.taker, bidding.keep_candidate)
    hands = tuple(tuple(h) for h in dist.hands)
    combos = tuple(
        tuple(detect_combinations(h, bidding.trump_suit, bidding.contract_type)) for h in hands
    )
    belote = tuple(tuple(c for c in combos[p] if c.is_belote) for p in Player)
    leader = first_to_play(d.dealer)
    return RoundState(
        dealer=d.dealer,
        taker=bidding.taker,
        contract_type=bidding.contract_type,
        trump_suit=bidding.trump_suit,
        hands=hands,
        stock=tuple(dist.stock),
        burned=tuple(dist.burned),
        leader=leader,
        first_leader=leader,
        combinations=combos,
        declared=belote,
    )


def declare(state: RoundState, player: Player, combos: Sequence[Combination]) -> RoundState:
    """
    Announce combinations during the first trick, before ``player`` plays.
    The announced set is resolved; a held Belote is always kept.
    """
    if state.trick_count > 0:
        raise IllegalDeclarationError("Combinations must be announced during the first trick")
    if state.has_played_in_trick(player):
        raise IllegalDeclarationError(f"{player.name} has already played; announcing is closed")
    held = state.combinations[player]
    hand = state.hands[player]
    for combo in combos:
        if combo not in held or any(card not in hand for card in combo.cards):
            raise IllegalDeclarationError(f"{player.name} does not hold {combo}")
    chosen = list(combos) + [c for c in held if c.is_belote and c not in combos]
    return replace(state, declared=_with(state.declared, player, tuple(resolve_conflicts(chosen))))


def show(state: RoundState, player: Player) -> RoundState:
    """
    Show the announced combinations. Allowed until ``player`` plays into the
    second trick; unshown main combinations are voided at that play.
    """
    if state.trick_count > 1 or (state.trick_count == 1 and state.has_played_in_trick(player)):
        raise IllegalDeclarationError("Combinations must be shown before the second-trick card")
    return replace(state, shown=_with(state.shown, player, True))


def _void_unshown(state: RoundState, player: Player) -> RoundState:
    """Drop everything but Belote from ``player``'s declarations if they were not shown."""
    if state.trick_count != 1 or state.shown[player]:
        return state
    if not main_combinations(state.declared[player]):
        return state
    logger.info("%s did not show its combinations; they are voided", player.name)
    declared = _with(
        state.declared, player, tuple(c for c in state.declared[player] if c.is_belote)
    )
    outcome = compare_declarations(
        declared[Player.HERO], declared[Player.OPPONENT], state.first_leader
    )
    return replace(state, declared=declared, declaration_outcome=outcome)


def play_card(state: RoundState, player: Player, card: Card) -> RoundState:
    """Play ``card`` for ``player`` and resolve the trick once both have played."""
    if state.is_finished:
        raise IllegalPlayError("The round is over")
    if player != state.current_player():
        raise NotYourTurnError(f"It is {state.current_player().name}'s turn, not {player.name}'s")
    hand = state.hands[player]
    if card not in hand:
        raise CardNotInHandError(f"Card {card} not in hand")
    if card not in state.legal_cards(player):
        raise IllegalPlayError(f"{card} is not a legal play for {player.name}")

    state = _void_unshown(state, player)
    hands = _with(state.hands, player, tuple(c for c in hand if c != card))
    trick = state.trick + (Play(player, card),)
    if len(trick) < CARDS_PER_TRICK:
        return replace(state, hands=hands, trick=trick)

    winner = trick_winner(trick, state.trump_suit, state.contract_type).player
    captured = _with(
        state.captured, winner, state.captured[winner] + tuple(p.card for p in trick)
    )
    trick_count = state.trick_count + 1
    logger.debug(
        "Trick %d: %s won %s", trick_count, winner.name, " ".join(str(p.card) for p in trick)
    )

    outcome = state.declaration_outcome
    if trick_count == 1:
        outcome = compare_declarations(
            state.declared[Player.HERO], state.declared[Player.OPPONENT], state.first_leader
        )
        logger.debug("Declarations: %s", outcome)

    return replace(
        state,
        hands=hands,
        trick=(),
        captured=captured,
        trick_count=trick_count,
        leader=winner,
        last_trick=trick,
        last_trick_winner=winner,
        declaration_outcome=outcome,
    )


def finish_round(state: RoundState) -> RoundScore:
    """Settle a round once all 9 tricks are played."""
    if not state.is_finished or state.last_trick_winner is None:
        raise InconsistentRoundError(f"Round not finished ({state.trick_count} tricks played)")
    outcome = state.declaration_outcome
    if outcome is None:
        raise InconsistentRoundError("Declarations were never compared")
    counted = [counted_combinations(state.declared[p], p, outcome) for p in Player]
    return settle_round(
        state.captured,
        counted,
        state.taker,
        state.trump_suit,
        state.contract_type,
        state.last_trick_winner,
    )


# get_bid(deal, player, bid_round, history) -> Bid or None
GetBid = Callable[[Deal, Player, int, list], Optional[Bid]]
GetPlay = Callable[[RoundState, Player], Card]
GetDeclarations = Callable[[RoundState, Player], Sequence[Combination]]
# get_show(state, player) -> True to show the announced melds
GetShow = Callable[[RoundState, Player], bool]


def _default_declarations(state: RoundState, player: Player) -> list[Combination]:
    return choose_declarations(state.hands[player], state.trump_suit, state.contract_type)


def _always_show(state: RoundState, player: Player) -> bool:
    return True


def run_round(
    d: Deal,
    bidding: BiddingResult,
    get_play: GetPlay,
    get_declarations: GetDeclarations | None = None,
    get_show: GetShow | None = None,
) -> RoundScore:
    """
    Play one round after deal and bidding are done.
    get_declarations(state, player) -> combinations to announce; defaults to
    announcing every non-overlapping combination held.
    get_show(state, player) is asked once, before the player's second-trick
    card; declining voids the announced melds except Belote. Defaults to showing.
    """
    if get_declarations is None:
        get_declarations = _default_declarations
    if get_show is None:
        get_show = _always_show
    state = start_round(d, bidding)
    for player in (state.first_leader, state.first_leader.other):
        state = declare(state, player, get_declarations(state, player))

    while not state.is_finished:
        player = state.current_player()
        if state.trick_count == 1 and not state.shown[player] and get_show(state, player):
            state = show(state, player)
        state = play_card(state, player, get_play(state, player))

    result = finish_round(state)
    logger.info(
        "Round settled: %s, taker %s, table points %d-%d",
        result.status.value,
        result.bid_taker.name,
        result.hero.table_points,
        result.opponent.table_points,
    )
    return result


def play_one_round(
    get_bid: GetBid,
    get_play: GetPlay,
    dealer: Player = Player.OPPONENT,
    rng: random.Random | None = None,
    get_declarations: GetDeclarations | None = None,
) -> tuple[RoundScore | None, Deal, BiddingResult | None]:
    """Deal, bid, and play one round. Score is None when everyone passed (redeal)."""
    d = deal(dealer=dealer, rng=rng)

    def bid_callback(player: Player, bid_round: int, candidate: Card, history: list) -> Bid | None:
        return get_bid(d, player, bid_round, history)

    bidding = run_bidding(dealer, d.candidate, bid_callback)
    if bidding is None:
        return None, d, None
    return run_round(d, bidding, get_play, get_declarations), d, bidding


def greedy_callbacks(config: MatchConfig) -> tuple[GetBid, GetPlay]:
    """Bid and play callbacks driving both seats with the greedy baseline."""
    agents = tuple(GreedyAgent(p, config.difficulties[p]) for p in Player)

    def get_bid(d: Deal, player: Player, bid_round: int, history: list) -> Bid | None:
        return agents[player].bid(d, bid_round)

    def get_play(state: RoundState, player: Player) -> Card:
        return agents[player].play(state)

    return get_bid, get_play


def match_over(totals: Sequence[int], target_score: int) -> bool:
    """Someone reached the target and the scores are not tied."""
    return max(totals) >= target_score and totals[0] != totals[1]


def run_match(
    config: MatchConfig | None = None,
    get_bid: GetBid | None = None,
    get_play: GetPlay | None = None,
    rng: random.Random | None = None,
    get_declarations: GetDeclarations | None = None,
) -> tuple[list[int], list[RoundScore]]:
    """
    Play rounds until a player reaches the target score; the dealer alternates
    every deal (redeals included). Missing callbacks default to the greedy bot.
    Returns (table-point totals indexed by Player, per-round results).
    """
    if config is None:
        config = MatchConfig()
    if rng is None:
        rng = random.Random()
    default_bid, default_play = greedy_callbacks(config)
    get_bid = get_bid or default_bid
    get_play = get_play or default_play

    totals = [0, 0]
    per_round: list[RoundScore] = []
    dealer = config.first_dealer
    for _ in range(config.max_rounds):
        result, _, _ = play_one_round(get_bid, get_play, dealer, rng, get_declarations)
        dealer = next_dealer(dealer)
        if result is None:
            continue
        per_round.append(result)
        for p in Player:
            totals[p] += result.breakdowns[p].table_points
        if match_over(totals, config.target_score):
            logger.info("Match over after %d rounds: %d-%d", len(per_round), totals[0], totals[1])
            break
    else:
        logger.warning("Match stopped after %d deals without a winner", config.max_rounds)
    return totals, per_round


def match_winner(totals: Sequence[int], target_score: int) -> Player | None:
    if not match_over(totals, target_score):
        return None
    return Player.HERO if totals[Player.HERO] > totals[Player.OPPONENT] else Player.OPPONENT
