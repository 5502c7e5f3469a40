"""
Static evaluation for Ultimate TicTacToe bots.

All functions read an explicit Position (or a single 3x3 grid) and never
touch the live game. Scores are from the point of view of `player`.
"""

from dataclasses import dataclass
from typing import Optional, Sequence, Tuple

from logic.game_state import Player, Position
from logic.win_checker import (
    WINNING_LINES, LINES_THROUGH, CENTER, CORNERS, count_line, has_threat, line_kind
)
from .config import AIConfig
from .weights import Difficulty, WEIGHTS, EDGE_BONUS

WIN = "win"
BLOCK = "block"

# Center and corner sub-boards of the meta-board
STRATEGIC_BOARDS = (CENTER,) + CORNERS


@dataclass(frozen=True)
class WinBlock:
    """A cell that completes or blocks a line."""
    cell_index: int
    kind: str                       # WIN or BLOCK
    line: Tuple[int, int, int]

    @property
    def pattern(self) -> str:
        return line_kind(self.line)


def positional_score(cell_index: int, difficulty: Difficulty) -> int:
    """Center > corners > edges."""
    assert 0 <= cell_index < 9
    weights = WEIGHTS[difficulty]
    if cell_index == CENTER:
        return weights.center_bonus
    if cell_index in CORNERS:
        return weights.corner_bonus
    return EDGE_BONUS


def evaluate_win_block(cells: Sequence[Optional[Player]], player: Player) -> Optional[WinBlock]:
    """
    Find a cell that wins the grid for player, else one that blocks the opponent.

    Lines are scanned in fixed order and the first match is returned.
    """
    for kind, who in ((WIN, player), (BLOCK, player.opposite())):
        for line in WINNING_LINES:
            mine, empty = count_line(cells, line, who)
            if mine == 2 and empty == 1:
                cell = next(i for i in line if cells[i] is None)
                return WinBlock(cell_index=cell, kind=kind, line=line)
    return None


def evaluate_position(
    position: Position,
    board_index: int,
    cell_index: int,
    player: Player,
    difficulty: Difficulty
) -> float:
    """
    Score player's move at (board_index, cell_index).

    Args:
        position: Boards with the move already placed.
        board_index: Sub-board the move was made in.
        cell_index: Cell played; also the board the opponent is sent to.
        player: Who made the move.
        difficulty: Tier whose weights are used.

    Returns:
        Heuristic score, higher is better for player.
    """
    assert 0 <= board_index < 9 and 0 <= cell_index < 9
    weights = WEIGHTS[difficulty]
    opponent = player.opposite()
    board = position.cells[board_index]
    score = 0

    # Line potential on the board just played
    for line in WINNING_LINES:
        mine, empty = count_line(board, line, player)
        theirs = 3 - mine - empty
        if mine == 2 and empty == 1:
            score += weights.near_win_bonus
        if mine == 1 and empty == 2:
            score += weights.potential_bonus
        if theirs == 2 and empty == 1:
            score -= weights.block_bonus

    score += positional_score(cell_index, difficulty)

    # Where the opponent goes next
    if position.is_decided(cell_index):
        score += weights.penalty_opponent_free_board
    elif has_threat(position.cells[cell_index], opponent):
        score += weights.penalty_send_opponent_winning_board

    if difficulty == Difficulty.EXTREME:
        if board_index in STRATEGIC_BOARDS:
            score += weights.board_control_bonus

        started_lines = sum(
            1 for line in LINES_THROUGH[board_index]
            if any(position.winners[i] == player for i in line)
        )
        score += weights.board_synergy_bonus * started_lines

    return score


# ==================== EXTREME TIER HELPERS ====================

def board_quality(
    position: Position,
    board_index: int,
    player: Player,
    config: Optional[AIConfig] = None
) -> int:
    """
    How good it is for player to send the opponent to board_index.
    Positive means the destination is bad for the opponent.
    """
    config = config or AIConfig()
    if position.is_decided(board_index):
        return config.QUALITY_DECIDED

    cells = position.cells[board_index]
    empty = sum(1 for cell in cells if cell is None)
    if empty <= 1:
        return config.QUALITY_ONE_EMPTY
    if empty <= 2:
        return config.QUALITY_TWO_EMPTY

    if has_threat(cells, player):
        return config.QUALITY_OWN_THREAT
    if has_threat(cells, player.opposite()):
        return config.QUALITY_OPPONENT_THREAT
    return 0


def sends_to_bad_board(position: Position, cell_index: int, player: Player) -> bool:
    """True if the destination is nearly full or player already threatens a line there."""
    if position.is_decided(cell_index):
        return False
    cells = position.cells[cell_index]
    if sum(1 for cell in cells if cell is None) <= 2:
        return True
    return has_threat(cells, player)


def meta_win_setup(position: Position, cell_index: int, player: Player) -> bool:
    """
    True if a meta-line through cell_index has exactly one board won by
    player and none by the opponent.
    """
    opponent = player.opposite()
    for line in LINES_THROUGH[cell_index]:
        owners = [position.winners[i] for i in line]
        if owners.count(player) == 1 and opponent not in owners:
            return True
    return False


def strategic_board_bonus(board_index: int, config: Optional[AIConfig] = None) -> int:
    config = config or AIConfig()
    if board_index == CENTER:
        return config.STRATEGIC_BOARD_BONUS["center"]
    if board_index in CORNERS:
        return config.STRATEGIC_BOARD_BONUS["corner"]
    return config.STRATEGIC_BOARD_BONUS["edge"]


def strategic_cell_bonus(
    position: Position,
    cell_index: int,
    player: Player,
    config: Optional[AIConfig] = None
) -> int:
    """Bonus for a cell whose meta-board square sits on a promising or dangerous line."""
    config = config or AIConfig()
    opponent = player.opposite()

    for line in LINES_THROUGH[cell_index]:
        owners = [position.winners[i] for i in line]
        if owners.count(player) == 1 and opponent not in owners:
            return config.STRATEGIC_CELL_SETUP
        if owners.count(player) == 2:
            return config.STRATEGIC_CELL_TWO_OWNED

    for line in LINES_THROUGH[cell_index]:
        if [position.winners[i] for i in line].count(opponent) == 2:
            return config.STRATEGIC_CELL_BLOCK
    return 0
