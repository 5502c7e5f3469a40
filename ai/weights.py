"""
Difficulty tiers and their evaluation weights.
"""

from enum import Enum
from dataclasses import dataclass
from typing import Union


class Difficulty(Enum):
    """AI difficulty levels."""
    EASY = 1      # Rule-based with random moves
    MEDIUM = 2    # Coin flip between rules and sampled search
    HARD = 3      # Full alpha-beta search
    EXTREME = 4   # Priority rules + deep search

    @classmethod
    def from_name(cls, name: Union[str, int, "Difficulty"]) -> "Difficulty":
        """
        Look up a difficulty by name or tier number.
        Unknown values fall back to HARD.
        """
        if isinstance(name, Difficulty):
            return name
        text = str(name).strip()
        if text.isdigit():
            for level in cls:
                if level.value == int(text):
                    return level
        else:
            try:
                return cls[text.upper()]
            except KeyError:
                pass
        print(f"Unknown difficulty {name!r}, using HARD")
        return cls.HARD


@dataclass(frozen=True)
class BotWeights:
    """Evaluation weights for one tier."""
    near_win_bonus: int                       # Two in a row with the third empty
    block_bonus: int                          # Opponent has two in a row
    potential_bonus: int                      # One in a row with two empty
    center_bonus: int
    corner_bonus: int
    penalty_opponent_free_board: int          # Sending to a decided board
    penalty_send_opponent_winning_board: int  # Sending to a board the opponent can win
    board_control_bonus: int = 0              # Extreme only: center/corner sub-board
    board_synergy_bonus: int = 0              # Extreme only: per meta-line already started


# Score for an edge cell (same for every tier)
EDGE_BONUS = 1

WEIGHTS = {
    Difficulty.EASY: BotWeights(
        near_win_bonus=10,
        block_bonus=8,
        potential_bonus=1,
        center_bonus=4,
        corner_bonus=2,
        penalty_opponent_free_board=-1,
        penalty_send_opponent_winning_board=-5,
    ),
    Difficulty.MEDIUM: BotWeights(
        near_win_bonus=10,
        block_bonus=9,
        potential_bonus=2,
        center_bonus=5,
        corner_bonus=3,
        penalty_opponent_free_board=-2,
        penalty_send_opponent_winning_board=-8,
    ),
    Difficulty.HARD: BotWeights(
        near_win_bonus=10,
        block_bonus=8,
        potential_bonus=1,
        center_bonus=5,
        corner_bonus=3,
        penalty_opponent_free_board=-2,
        penalty_send_opponent_winning_board=-10,
    ),
    Difficulty.EXTREME: BotWeights(
        near_win_bonus=15,
        block_bonus=12,
        potential_bonus=3,
        center_bonus=6,
        corner_bonus=4,
        penalty_opponent_free_board=-3,
        penalty_send_opponent_winning_board=-15,
        board_control_bonus=8,
        board_synergy_bonus=5,
    ),
}
