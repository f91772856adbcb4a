"""Tests for round settlement and table points."""
import pytest

from blot.combinations import detect_combinations, resolve_conflicts
from blot.deck import Card, ContractType, Rank, Suit, cards_point_total
from blot.errors import InconsistentRoundError
from blot.play import Player
from blot.scoring import RoundStatus, settle_round, table_points

TRUMP = ContractType.TRUMP
H, D, C, S = Suit.HEARTS, Suit.DIAMONDS, Suit.CLUBS, Suit.SPADES
HERO, OPP = Player.HERO, Player.OPPONENT


def suit_cards(suit: Suit) -> list[Card]:
    return [Card(suit, r) for r in Rank]


def tierce_and_belote() -> list:
    """K-Q-J of trump (hearts): a trump tierce plus Belote, 40 points."""
    cards = [Card(H, Rank.KING), Card(H, Rank.QUEEN), Card(H, Rank.JACK)]
    return resolve_conflicts(detect_combinations(cards, H, TRUMP))


def test_table_points_rounding():
    assert table_points(0) == 0
    assert table_points(81) == 8
    assert table_points(85) == 8
    assert table_points(86) == 9
    assert table_points(120) == 12
    assert table_points(126) == 13
    assert table_points(162) == 16
    assert table_points(212) == 21


def test_normal_round():
    # Hearts are trump: hearts 62 + spades 30 for the taker, diamonds 30 for the defender
    hero = suit_cards(H) + suit_cards(S)
    opponent = suit_cards(D)
    result = settle_round((hero, opponent), ([], []), HERO, H, TRUMP, last_trick_winner=HERO)

    assert result.status == RoundStatus.NORMAL
    assert result.winner == HERO
    assert result.hero.raw_card_points == 92
    assert result.hero.last_trick_bonus == 10
    assert result.hero.raw_final_points == 102
    assert result.hero.table_points == 10
    assert result.opponent.raw_final_points == 30
    assert result.opponent.table_points == 3
    assert result.hero.captured_cards_count == 12


def test_normal_round_totals_are_card_points_plus_last_trick():
    hero = suit_cards(H) + suit_cards(S)
    opponent = suit_cards(D)
    result = settle_round((hero, opponent), ([], []), HERO, H, TRUMP, last_trick_winner=OPP)
    captured_points = cards_point_total(hero + opponent, H, TRUMP)
    assert result.status == RoundStatus.NORMAL
    assert result.hero.raw_final_points + result.opponent.raw_final_points == captured_points + 10


def test_declarations_add_to_raw_total():
    hero = suit_cards(H) + suit_cards(S)
    opponent = suit_cards(D)
    result = settle_round(
        (hero, opponent), (tierce_and_belote(), []), HERO, H, TRUMP, last_trick_winner=HERO
    )
    assert result.hero.raw_decl_points == 40
    assert result.hero.belote_bonus == 20
    assert result.hero.raw_final_points == 142


def test_dedans_transfers_taker_melds():
    # Taker (hero) has diamonds 30 + tierce/Belote 40 = 70 against 92 + 10
    hero = suit_cards(D)
    opponent = suit_cards(H) + suit_cards(S)
    result = settle_round(
        (hero, opponent), (tierce_and_belote(), []), HERO, H, TRUMP, last_trick_winner=OPP
    )
    assert result.status == RoundStatus.DEDANS
    assert result.winner == OPP
    assert result.hero.raw_final_points == 20
    assert result.hero.table_points == 2
    assert result.opponent.raw_final_points == 162 + 20
    assert result.opponent.table_points == 18


def test_dedans_defender_keeps_own_declarations():
    opponent_decl = resolve_conflicts(
        detect_combinations([Card(C, Rank.ACE), Card(C, Rank.KING), Card(C, Rank.QUEEN)], H, TRUMP)
    )
    hero = suit_cards(D)
    opponent = suit_cards(H) + suit_cards(S)
    result = settle_round((hero, opponent), ([], opponent_decl), HERO, H, TRUMP, last_trick_winner=OPP)
    assert result.status == RoundStatus.DEDANS
    assert result.hero.raw_final_points == 0
    assert result.opponent.raw_final_points == 162 + 20


def test_tie_is_dedans():
    def cards(*specs):
        return [Card(s, r) for s, r in specs]

    # Taker: 42 card points + 10 last trick = 52
    hero = cards(
        (S, Rank.ACE), (S, Rank.TEN), (D, Rank.ACE), (D, Rank.TEN), (S, Rank.NINE), (D, Rank.NINE)
    )
    # Defender: 52 card points
    opponent = cards(
        (C, Rank.ACE), (C, Rank.TEN),
        (S, Rank.KING), (D, Rank.KING), (C, Rank.KING),
        (S, Rank.QUEEN), (D, Rank.QUEEN), (C, Rank.QUEEN),
        (S, Rank.JACK), (D, Rank.JACK), (C, Rank.JACK),
        (H, Rank.KING),
    )
    assert cards_point_total(opponent, H, TRUMP) == 52
    result = settle_round((hero, opponent), ([], []), HERO, H, TRUMP, last_trick_winner=HERO)
    assert result.status == RoundStatus.DEDANS
    assert result.hero.raw_final_points == 0
    assert result.opponent.raw_final_points == 162


def test_opponent_as_taker():
    hero = suit_cards(D)
    opponent = suit_cards(H) + suit_cards(S)
    result = settle_round((hero, opponent), ([], []), OPP, H, TRUMP, last_trick_winner=OPP)
    assert result.status == RoundStatus.NORMAL
    assert result.winner == OPP
    assert result.bid_taker == OPP
    assert result.opponent.raw_final_points == 102


def test_capot():
    aces = [Card(C, Rank.ACE)] * 18
    result = settle_round((aces, []), ([], []), HERO, H, TRUMP, last_trick_winner=HERO)
    assert result.status == RoundStatus.CAPOT
    assert result.winner == HERO
    assert result.hero.raw_final_points == 212
    assert result.hero.table_points == 21
    assert result.opponent.raw_final_points == 0
    assert result.opponent.table_points == 0


def test_capot_declarations():
    swept = suit_cards(H) + suit_cards(S) + suit_cards(D)
    result = settle_round(
        ([], swept), (tierce_and_belote(), tierce_and_belote()), HERO, H, TRUMP, last_trick_winner=OPP
    )
    # Opponent (defender) swept every trick: 212 + its 40 declaration points
    assert result.status == RoundStatus.CAPOT
    assert result.winner == OPP
    assert result.opponent.raw_final_points == 252
    assert result.opponent.table_points == 25
    # Hero keeps only Belote
    assert result.hero.raw_final_points == 20


def test_no_trump_contract_is_recorded():
    hero = suit_cards(H) + suit_cards(S)
    opponent = suit_cards(D)
    result = settle_round((hero, opponent), ([], []), HERO, H, ContractType.NO_TRUMP, HERO)
    assert result.trump_suit is None
    assert result.contract_type is ContractType.NO_TRUMP
    assert result.hero.raw_card_points == 76


def test_odd_pile_is_rejected():
    hero = suit_cards(H) + suit_cards(S)[:5]
    opponent = suit_cards(D) + [Card(C, Rank.ACE)]
    with pytest.raises(InconsistentRoundError):
        settle_round((hero, opponent), ([], []), HERO, H, TRUMP, last_trick_winner=HERO)


def test_missing_tricks_are_rejected():
    hero = suit_cards(H)
    opponent = suit_cards(D)
    with pytest.raises(InconsistentRoundError):
        settle_round((hero, opponent), ([], []), HERO, H, TRUMP, last_trick_winner=HERO)


def test_last_trick_winner_must_have_captured():
    aces = [Card(C, Rank.ACE)] * 18
    with pytest.raises(InconsistentRoundError):
        settle_round((aces, []), ([], []), HERO, H, TRUMP, last_trick_winner=OPP)
