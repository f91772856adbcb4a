"""Tests for combination detection, conflict resolution and declaration comparison."""
from blot.combinations import (
    ComboKind,
    best_combination,
    carre_score,
    compare_declarations,
    counted_combinations,
    detect_combinations,
    resolve_conflicts,
)
from blot.deck import Card, ContractType, Rank, Suit
from blot.play import Player

TRUMP = ContractType.TRUMP
NO_TRUMP = ContractType.NO_TRUMP
H, D, C, S = Suit.HEARTS, Suit.DIAMONDS, Suit.CLUBS, Suit.SPADES
RANKS = {"9": Rank.NINE, "10": Rank.TEN, "J": Rank.JACK, "Q": Rank.QUEEN, "K": Rank.KING, "A": Rank.ACE}


def hand(*labels: str) -> list[Card]:
    """hand("AC", "10H") -> [A♣, 10♥]"""
    suits = {"H": H, "D": D, "C": C, "S": S}
    return [Card(suits[label[-1]], RANKS[label[:-1]]) for label in labels]


def resolved(cards, trump=H, contract=TRUMP):
    return resolve_conflicts(detect_combinations(cards, trump, contract))


def kinds(combos):
    return [c.kind for c in combos]


def test_tierce():
    combos = detect_combinations(hand("AC", "KC", "QC", "9D"), H, TRUMP)
    assert kinds(combos) == [ComboKind.TIERCE]
    tierce = combos[0]
    assert tierce.score == 20
    assert tierce.rank == Rank.ACE
    assert tierce.height == 5
    assert tierce.suit == C
    assert not tierce.is_trump


def test_four_card_sequence_is_not_also_a_tierce():
    combos = detect_combinations(hand("AC", "KC", "QC", "JC"), H, TRUMP)
    assert kinds(combos) == [ComboKind.FIFTY]
    assert combos[0].score == 50
    assert combos[0].cards == tuple(hand("AC", "KC", "QC", "JC"))


def test_six_card_run_reports_one_hundred():
    combos = detect_combinations(hand("AC", "KC", "QC", "JC", "10C", "9C"), H, TRUMP)
    assert kinds(combos) == [ComboKind.HUNDRED]
    assert combos[0].score == 100
    assert combos[0].rank == Rank.ACE
    assert len(combos[0].cards) == 5


def test_trump_sequence_flag_only_under_trump():
    assert detect_combinations(hand("AH", "KH", "QH"), H, TRUMP)[0].is_trump
    combos = detect_combinations(hand("AH", "KH", "QH"), H, NO_TRUMP)
    assert kinds(combos) == [ComboKind.TIERCE]
    assert not combos[0].is_trump


def test_carre_scores():
    assert carre_score(Rank.JACK, TRUMP) == 200
    assert carre_score(Rank.NINE, TRUMP) == 140
    assert carre_score(Rank.ACE, TRUMP) == 110
    assert carre_score(Rank.KING, TRUMP) == 100
    assert carre_score(Rank.ACE, NO_TRUMP) == 190
    assert carre_score(Rank.JACK, NO_TRUMP) == 100


def test_carre_of_jacks():
    combos = detect_combinations(hand("JS", "JD", "JC", "JH"), H, TRUMP)
    assert kinds(combos) == [ComboKind.CARRE]
    assert combos[0].score == 200
    assert combos[0].suit is None
    assert not combos[0].is_trump


def test_carre_of_nines_not_reported_in_no_trump():
    nines = hand("9S", "9D", "9C", "9H")
    assert detect_combinations(nines, None, NO_TRUMP) == []
    assert detect_combinations(nines, H, TRUMP)[0].score == 140


def test_belote():
    combos = detect_combinations(hand("KH", "QH", "9S"), H, TRUMP)
    assert kinds(combos) == [ComboKind.BELOTE]
    assert combos[0].score == 20
    assert set(combos[0].cards) == set(hand("KH", "QH"))


def test_no_belote_without_trump_contract_or_pair():
    assert detect_combinations(hand("KH", "QH"), H, NO_TRUMP) == []
    assert detect_combinations(hand("KH", "QS"), H, TRUMP) == []
    assert detect_combinations(hand("KS", "QS"), H, TRUMP) == []


def test_belote_may_overlap_a_sequence():
    combos = resolved(hand("KH", "QH", "JH"))
    assert sorted(kinds(combos)) == [ComboKind.BELOTE, ComboKind.TIERCE]


def test_carre_beats_overlapping_tierce():
    cards = hand("JS", "JD", "JC", "JH", "10S", "9S")
    detected = detect_combinations(cards, H, TRUMP)
    assert sorted(kinds(detected)) == [ComboKind.TIERCE, ComboKind.CARRE]
    combos = resolve_conflicts(detected)
    assert kinds(combos) == [ComboKind.CARRE]
    assert combos[0].score == 200


def test_equal_score_conflict_goes_to_type_priority():
    cards = hand("AH", "KH", "QH", "JH", "10H", "KS", "KD", "KC")
    combos = resolved(cards)
    assert kinds(combos) == [ComboKind.BELOTE, ComboKind.CARRE]
    assert combos[1].rank == Rank.KING


def test_disjoint_combinations_are_all_kept_in_a_fixed_order():
    cards = hand("AH", "KH", "QH", "AS", "KS", "QS")
    combos = resolved(cards, trump=D)
    assert [c.suit for c in combos] == [S, H]
    # Input order does not matter
    assert resolved(list(reversed(cards)), trump=D) == combos


def test_resolving_twice_changes_nothing():
    cards = hand("JS", "JD", "JC", "JH", "10S", "9S", "KH", "QH")
    once = resolved(cards)
    assert resolve_conflicts(once) == once


def test_no_main_combinations_means_no_winner():
    belote = resolved(hand("KH", "QH"))
    outcome = compare_declarations(belote, [], Player.HERO)
    assert outcome.winner is None
    assert outcome.hero_points == 20
    assert outcome.opponent_points == 0


def test_single_declarer_wins():
    outcome = compare_declarations([], resolved(hand("AC", "KC", "QC")), Player.HERO)
    assert outcome.winner == Player.OPPONENT
    assert outcome.opponent_points == 20


def test_type_priority_beats_height():
    hero = resolved(hand("AC", "KC", "QC"))
    opponent = resolved(hand("KS", "QS", "JS", "10S"))
    outcome = compare_declarations(hero, opponent, Player.HERO)
    assert outcome.winner == Player.OPPONENT
    assert outcome.hero_points == 0
    assert outcome.opponent_points == 50


def test_height_decides_equal_types():
    hero = resolved(hand("AC", "KC", "QC"))
    opponent = resolved(hand("KS", "QS", "JS"))
    assert compare_declarations(hero, opponent, Player.OPPONENT).winner == Player.HERO


def test_trump_combination_wins_a_tie():
    hero = resolved(hand("AC", "KC", "QC"))
    opponent = resolved(hand("AH", "KH", "QH"))
    outcome = compare_declarations(hero, opponent, Player.HERO)
    assert outcome.winner == Player.OPPONENT
    # Opponent also holds Belote (K+Q of hearts): tierce 20 + Belote 20
    assert outcome.opponent_points == 40


def test_first_leader_wins_a_full_tie():
    hero = resolved(hand("AC", "KC", "QC"))
    opponent = resolved(hand("AS", "KS", "QS"))
    assert compare_declarations(hero, opponent, Player.OPPONENT).winner == Player.OPPONENT
    assert compare_declarations(hero, opponent, Player.HERO).winner == Player.HERO


def test_best_combination_prefers_trump_among_equals():
    combos = resolved(hand("AC", "KC", "QC", "AH", "KH", "QH"))
    best = best_combination(combos)
    assert best.suit == H
    assert best.is_trump


def test_trump_tierce_beats_plain_tierce_of_the_first_leader():
    hero = resolved(hand("AC", "KC", "QC", "AH", "KH", "QH"))
    opponent = resolved(hand("AS", "KS", "QS"))
    outcome = compare_declarations(hero, opponent, Player.OPPONENT)
    assert outcome.winner == Player.HERO
    # Two tierces and Belote
    assert outcome.hero_points == 60
    assert outcome.opponent_points == 0


def test_loser_keeps_belote_only():
    hero = resolved(hand("KH", "QH", "JH"))
    opponent = resolved(hand("AS", "KS", "QS", "JS"))
    outcome = compare_declarations(hero, opponent, Player.HERO)
    assert outcome.winner == Player.OPPONENT
    assert outcome.hero_points == 20
    assert outcome.opponent_points == 50
    assert kinds(counted_combinations(hero, Player.HERO, outcome)) == [ComboKind.BELOTE]
    assert kinds(counted_combinations(opponent, Player.OPPONENT, outcome)) == [ComboKind.FIFTY]


def test_winner_scores_all_main_combinations():
    hero = resolved(hand("AS", "KS", "QS", "JS", "AC", "KC", "QC"))
    opponent = resolved(hand("AD", "KD", "QD"))
    outcome = compare_declarations(hero, opponent, Player.OPPONENT)
    assert outcome.winner == Player.HERO
    assert outcome.hero_points == 70
    assert outcome.points(Player.OPPONENT) == 0
