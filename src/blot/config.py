"""Match configuration."""
from __future__ import annotations

from dataclasses import dataclass

from .agents import Difficulty
from .play import Player

TARGET_SCORES = (51, 101, 201, 501)


@dataclass
class MatchConfig:
    """Configuration for one match between two seats."""

    target_score: int = 501
    # Difficulty of the greedy bot on each seat (indexed by Player)
    difficulties: tuple[Difficulty, Difficulty] = (Difficulty.INTERMEDIATE, Difficulty.INTERMEDIATE)
    first_dealer: Player = Player.OPPONENT
    # Safety net against endless redeals / drawn matches
    max_rounds: int = 1000

    def __post_init__(self) -> None:
        if self.target_score not in TARGET_SCORES:
            raise ValueError(
                f"Unsupported target_score {self.target_score}; expected one of {TARGET_SCORES}."
            )
        if self.max_rounds < 1:
            raise ValueError(f"max_rounds must be positive, got {self.max_rounds}")
        self.difficulties = (Difficulty(self.difficulties[0]), Difficulty(self.difficulties[1]))
        self.first_dealer = Player(self.first_dealer)
