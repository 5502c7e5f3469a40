"""
Minimax search with alpha-beta pruning for Ultimate TicTacToe.

Every node works on its own Position, so nothing the search does can leak
into the live game. A sub-board win ends a line of play:
    mover is the bot      -> +(WIN_SCORE + remaining depth)
    mover is the opponent -> -(WIN_SCORE + remaining depth)
A filled sub-board with no winner scores 0.
"""

import math
import time
from dataclasses import dataclass
from typing import Any, Callable, List, Optional, Tuple

import numpy as np

from logic.errors import SearchTimeoutExceeded
from logic.game_state import Player, Position, order_cells
from logic.win_checker import CENTER, CORNERS
from .config import AIConfig
from .evaluation import evaluate_position, board_quality
from .weights import Difficulty

# Extra score (and a label for it) added to a root candidate
BonusFn = Callable[[int, int], Tuple[float, Any]]


@dataclass
class SearchResult:
    """Best root move found by a search."""
    board_index: Optional[int] = None
    cell_index: Optional[int] = None
    score: float = -math.inf
    tag: Any = None
    timed_out: bool = False
    nodes_evaluated: int = 0

    @property
    def found(self) -> bool:
        return self.board_index is not None


class SearchEngine:
    """
    Depth-limited alpha-beta search from one bot's point of view.

    Options:
        sample_moves: only look at a few boards/cells below the root
        complexity_cap: clamp depth when a node has many candidate boards
        time_budget: seconds per search() call (None = unbounded)
    """

    def __init__(
        self,
        player: Player,
        difficulty: Difficulty,
        config: Optional[AIConfig] = None,
        rng: Optional[np.random.Generator] = None,
        sample_moves: bool = False,
        complexity_cap: bool = False,
        time_budget: Optional[float] = None
    ):
        self.player = player
        self.difficulty = difficulty
        self.config = config or AIConfig()
        self.rng = rng if rng is not None else np.random.default_rng()
        self.sample_moves = sample_moves
        self.complexity_cap = complexity_cap
        self.time_budget = time_budget

        self.nodes_evaluated = 0
        self._deadline: Optional[float] = None

    def search(
        self,
        position: Position,
        boards: List[int],
        depth: int,
        bonus: Optional[BonusFn] = None
    ) -> SearchResult:
        """
        Score every empty cell of the given boards and keep the best.

        Cells are tried center, corners, edges. If the time budget runs out
        the best move so far is returned with timed_out set.
        """
        self.nodes_evaluated = 0
        self._deadline = None
        if self.time_budget is not None:
            self._deadline = time.monotonic() + self.time_budget

        result = SearchResult()
        first_candidate = None

        for board_index in boards:
            if not position.is_playable(board_index):
                continue
            for cell_index in order_cells(position.empty_cells(board_index)):
                if first_candidate is None:
                    first_candidate = (board_index, cell_index)
                try:
                    self._check_clock()
                    score = self.score_move(position, board_index, cell_index, depth)
                except SearchTimeoutExceeded:
                    result.timed_out = True
                    break

                tag = None
                if bonus is not None:
                    extra, tag = bonus(board_index, cell_index)
                    score += extra

                if score > result.score:
                    result.board_index = board_index
                    result.cell_index = cell_index
                    result.score = score
                    result.tag = tag
            if result.timed_out:
                break

        # Ran out of time before finishing a single candidate
        if not result.found and result.timed_out and first_candidate is not None:
            board_index, cell_index = first_candidate
            after = position.with_move(board_index, cell_index, self.player)
            result.board_index = board_index
            result.cell_index = cell_index
            result.score = evaluate_position(after, board_index, cell_index, self.player, self.difficulty)
            if bonus is not None:
                extra, result.tag = bonus(board_index, cell_index)
                result.score += extra

        result.nodes_evaluated = self.nodes_evaluated
        if result.timed_out and self.config.DEBUG_MODE:
            print(f"[SEARCH] Time limit reached after {self.nodes_evaluated} positions. Using current best move.")
        return result

    def score_move(self, position: Position, board_index: int, cell_index: int, depth: int) -> float:
        """Minimax value of the bot playing (board_index, cell_index)."""
        return self._minimax(
            position, board_index, cell_index, self.player,
            depth, -math.inf, math.inf, False
        )

    def _check_clock(self):
        if self._deadline is not None and time.monotonic() > self._deadline:
            raise SearchTimeoutExceeded(f"search exceeded {self.time_budget}s")

    def _minimax(
        self,
        position: Position,
        board_index: int,
        cell_index: int,
        mover: Player,
        depth: int,
        alpha: float,
        beta: float,
        maximizing: bool
    ) -> float:
        """
        Minimax with alpha-beta pruning.

        Args:
            position: Boards before the move.
            board_index, cell_index: The move being scored.
            mover: Who makes the move.
            depth: Remaining depth.
            alpha, beta: Pruning window.
            maximizing: True if the replies are the bot's.

        Returns:
            Score from the bot's point of view.
        """
        self.nodes_evaluated += 1
        self._check_clock()

        after = position.with_move(board_index, cell_index, mover)

        if after.winners[board_index] == mover:
            magnitude = self.config.WIN_SCORE + depth
            return magnitude if mover == self.player else -magnitude
        if after.drawn[board_index]:
            return 0

        if depth <= 0:
            return self._leaf(after, board_index, cell_index, mover)

        boards = after.candidate_boards(cell_index)
        if not boards:
            return self._leaf(after, board_index, cell_index, mover)

        if self.sample_moves and len(boards) > 1:
            boards = self._sample_boards(boards)

        next_depth = depth
        if (self.complexity_cap
                and len(boards) > self.config.COMPLEXITY_BRANCH_LIMIT
                and depth > self.config.COMPLEXITY_DEPTH_LIMIT):
            next_depth = self.config.COMPLEXITY_DEPTH_LIMIT

        next_player = mover.opposite()
        best = -math.inf if maximizing else math.inf

        for next_board in boards:
            cells = order_cells(after.empty_cells(next_board))
            if self.sample_moves:
                cells = self._sample_cells(cells)

            for next_cell in cells:
                score = self._minimax(
                    after, next_board, next_cell, next_player,
                    next_depth - 1, alpha, beta, not maximizing
                )
                if maximizing:
                    best = max(best, score)
                    alpha = max(alpha, score)
                else:
                    best = min(best, score)
                    beta = min(beta, score)

                if beta <= alpha:
                    break  # Prune
            if beta <= alpha:
                break

        return best

    def _leaf(self, position: Position, board_index: int, cell_index: int, mover: Player) -> float:
        score = evaluate_position(position, board_index, cell_index, mover, self.difficulty)
        if mover != self.player:
            return -score
        if self.difficulty == Difficulty.EXTREME:
            score += board_quality(position, cell_index, self.player, self.config) * \
                self.config.BOARD_QUALITY_LEAF_FACTOR
        return score

    # ==================== SAMPLING ====================

    def _sample_boards(self, boards: List[int]) -> List[int]:
        size = min(self.config.SAMPLE_BOARD_LIMIT, len(boards))
        picked = self.rng.choice(len(boards), size=size, replace=False)
        return [boards[int(i)] for i in picked]

    def _sample_cells(self, cells: List[int]) -> List[int]:
        """Center, one random corner, then random cells up to the cap."""
        limit = self.config.SAMPLE_CELL_LIMIT
        if len(cells) <= limit:
            return cells

        chosen = []
        if CENTER in cells:
            chosen.append(CENTER)
        corners = [c for c in cells if c in CORNERS]
        if corners:
            chosen.append(corners[int(self.rng.integers(len(corners)))])

        remaining = [c for c in cells if c not in chosen]
        while len(chosen) < limit and remaining:
            chosen.append(remaining.pop(int(self.rng.integers(len(remaining)))))
        return chosen
