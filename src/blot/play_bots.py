"""
Tiny CLI to run greedy bot-vs-bot matches.

Usage (from project root, after installing in editable mode):
    python -m blot.play_bots --target 101 --seed 7
"""
from __future__ import annotations

import argparse
import logging
import random

from .agents import Difficulty
from .config import TARGET_SCORES, MatchConfig
from .game import match_winner, run_match
from .play import Player
from .scoring import RoundScore


def _contract_label(result: RoundScore) -> str:
    if result.trump_suit is None:
        return "NT"
    return result.trump_suit.symbol


def run_bot_match(target: int, seed: int, difficulties: tuple[str, str]) -> list[int]:
    config = MatchConfig(
        target_score=target,
        difficulties=(Difficulty(difficulties[0]), Difficulty(difficulties[1])),
    )
    totals, rounds = run_match(config, rng=random.Random(seed))

    for i, result in enumerate(rounds, start=1):
        print(
            f"[round {i}] taker={result.bid_taker.name} contract={_contract_label(result)} "
            f"status={result.status.value} "
            f"raw={result.hero.raw_final_points}-{result.opponent.raw_final_points} "
            f"table={result.hero.table_points}-{result.opponent.table_points}"
        )
    winner = match_winner(totals, target)
    print(
        f"target={target}, rounds={len(rounds)}, totals={totals[Player.HERO]}-{totals[Player.OPPONENT]}, "
        f"winner={winner.name if winner is not None else 'none'}"
    )
    return totals


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(description="Run a greedy bot-vs-bot Blot match.")
    parser.add_argument(
        "--target",
        type=int,
        choices=TARGET_SCORES,
        default=101,
        help="Table points needed to win the match.",
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=42,
        help="Random seed for reproducibility.",
    )
    parser.add_argument(
        "--difficulty",
        nargs=2,
        choices=[d.value for d in Difficulty],
        default=["intermediate", "intermediate"],
        metavar=("HERO", "OPPONENT"),
        help="Bidding difficulty of each seat.",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Log every bid and trick.",
    )
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )
    run_bot_match(args.target, args.seed, (args.difficulty[0], args.difficulty[1]))


if __name__ == "__main__":
    main()
