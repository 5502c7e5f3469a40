"""
Bot strategies for Ultimate TicTacToe, one per difficulty.

Every strategy answers the same question through select_move(): given the
state and the boards the bot may play in, which (board, cell) to take.
Strategies keep no game state between calls.
"""

from typing import List, Optional, Tuple, Type

import numpy as np

from logic.errors import NoLegalMoveError
from logic.game_state import GameState, Move, Player, Position, order_cells
from logic.win_checker import CENTER, CORNERS, EDGES, has_line
from .config import AIConfig
from .decision_log import ActionKind, DecisionLogEntry, DecisionSink
from .evaluation import (
    WIN, BLOCK, WinBlock,
    evaluate_win_block, evaluate_position, positional_score,
    board_quality, sends_to_bad_board, meta_win_setup,
    strategic_board_bonus, strategic_cell_bonus,
)
from .search import SearchEngine
from .weights import Difficulty

Choice = Tuple[int, int]


class Strategy:
    """
    Base class for the bots.

    Subclasses implement _choose(); select_move() wraps it with the
    empty-input check and builds the Move record.
    """

    difficulty: Difficulty = Difficulty.HARD
    name = "BOT"

    def __init__(
        self,
        config: Optional[AIConfig] = None,
        rng: Optional[np.random.Generator] = None,
        decision_sink: Optional[DecisionSink] = None
    ):
        self.config = config or AIConfig()
        self.rng = rng if rng is not None else np.random.default_rng()
        self.decision_sink = decision_sink
        self.nodes_evaluated = 0

    def select_move(self, state: GameState, valid_boards: List[int]) -> Move:
        """
        Pick a move for the current player.

        Raises:
            NoLegalMoveError: if valid_boards is empty.
        """
        if not valid_boards:
            raise NoLegalMoveError(f"{self.name} was asked to move with no valid boards")

        self.nodes_evaluated = 0
        player = state.current_player
        board_index, cell_index = self._choose(state, list(valid_boards), player)
        return self._make_move(state, board_index, cell_index, player)

    def _choose(self, state: GameState, valid_boards: List[int], player: Player) -> Choice:
        raise NotImplementedError

    def _make_move(self, state: GameState, board_index: int, cell_index: int, player: Player) -> Move:
        after = state.snapshot().with_move(board_index, cell_index, player)
        game_over = has_line(after.winners, player) or not after.playable_boards()
        return Move(
            board_index=board_index,
            cell_index=cell_index,
            player=player,
            next_target=None if game_over else after.next_target(cell_index),
            move_number=len(state.moves) + 1
        )

    def _log(self, message: str):
        if self.config.DEBUG_MODE:
            print(f"[{self.name}] {message}")


def find_priority_move(
    position: Position,
    valid_boards: List[int],
    player: Player,
    kind: str
) -> Optional[Tuple[int, WinBlock]]:
    """First board (in the given order) with a win, or a block, for player."""
    for board_index in valid_boards:
        if not position.is_playable(board_index):
            continue
        found = evaluate_win_block(position.cells[board_index], player)
        if found is not None and found.kind == kind:
            return board_index, found
    return None


class RuleBasedStrategy(Strategy):
    """
    Tier 1: simple rules with some chaos.

    1. Sometimes just play a positional random move
    2. Win a board if possible
    3. Block the opponent
    4. Best positional cell with a little noise
    """

    difficulty = Difficulty.EASY
    name = "EASY"

    def _choose(self, state: GameState, valid_boards: List[int], player: Player) -> Choice:
        if self.rng.random() < self.config.RANDOM_MOVE_CHANCE:
            return self.random_move(state, valid_boards)

        position = state.snapshot()
        for kind in (WIN, BLOCK):
            found = find_priority_move(position, valid_boards, player, kind)
            if found is not None:
                board_index, win_block = found
                self._log(f"{kind.capitalize()} on board {board_index}, cell {win_block.cell_index}")
                return board_index, win_block.cell_index

        return self.positional_move(state, valid_boards)

    def random_move(self, state: GameState, valid_boards: List[int]) -> Choice:
        """Random board; center if free, else a random corner, else a random edge."""
        boards = [b for b in valid_boards if state.get_empty_cells(b)]
        if not boards:
            raise NoLegalMoveError("No empty cells on any valid board")
        board_index = boards[int(self.rng.integers(len(boards)))]
        empty = state.get_empty_cells(board_index)

        if CENTER in empty:
            cell_index = CENTER
        else:
            corners = [c for c in CORNERS if c in empty]
            edges = [c for c in EDGES if c in empty]
            options = corners or edges
            cell_index = options[int(self.rng.integers(len(options)))]

        self._log(f"Making random move on board {board_index}, cell {cell_index}")
        return board_index, cell_index

    def positional_move(self, state: GameState, valid_boards: List[int]) -> Choice:
        best_score = -np.inf
        best: Optional[Choice] = None
        jitter = self.config.POSITIONAL_JITTER

        for board_index in valid_boards:
            for cell_index in state.get_empty_cells(board_index):
                score = positional_score(cell_index, Difficulty.EASY)
                score += self.rng.uniform(-jitter, jitter)
                if score > best_score:
                    best_score = score
                    best = (board_index, cell_index)

        if best is None:
            return self.random_move(state, valid_boards)

        self._log(f"Making positional move on board {best[0]}, cell {best[1]}")
        return best


class HybridStrategy(Strategy):
    """
    Tier 2: coin flip between the Tier 1 rules and a shallow sampled search.
    """

    difficulty = Difficulty.MEDIUM
    name = "MEDIUM"

    def __init__(self, config=None, rng=None, decision_sink=None):
        super().__init__(config, rng, decision_sink)
        self.rules = RuleBasedStrategy(self.config, self.rng)

    def _choose(self, state: GameState, valid_boards: List[int], player: Player) -> Choice:
        if self.rng.random() < self.config.RULE_BASED_CHANCE:
            self._log("Following standard protocols.")
            return self.rules._choose(state, valid_boards, player)

        self._log("Analyzing tactical options...")
        engine = SearchEngine(
            player, self.difficulty, self.config, self.rng,
            sample_moves=True
        )
        result = engine.search(state.snapshot(), valid_boards, self.config.HYBRID_DEPTH)
        self.nodes_evaluated = result.nodes_evaluated

        if not result.found:
            self._log("Switching to contingency plan.")
            return self.rules._choose(state, valid_boards, player)

        self._log(f"Choosing board {result.board_index}, cell {result.cell_index} with score {result.score}")
        return result.board_index, result.cell_index


class DeepSearchStrategy(Strategy):
    """
    Tier 3: full alpha-beta search, deeper when only one board is open.
    """

    difficulty = Difficulty.HARD
    name = "HARD"

    def __init__(self, config=None, rng=None, decision_sink=None):
        super().__init__(config, rng, decision_sink)
        self.rules = RuleBasedStrategy(self.config, self.rng)

    def _choose(self, state: GameState, valid_boards: List[int], player: Player) -> Choice:
        if len(valid_boards) == 1:
            depth = self.config.DEEP_DEPTH_SINGLE_BOARD
        else:
            depth = self.config.DEEP_DEPTH_MULTI_BOARD

        engine = SearchEngine(
            player, self.difficulty, self.config, self.rng,
            time_budget=self.config.DEEP_TIME_BUDGET
        )
        result = engine.search(state.snapshot(), valid_boards, depth)
        self.nodes_evaluated = result.nodes_evaluated

        if not result.found:
            self._log("Resorting to basic protocols.")
            return self.rules._choose(state, valid_boards, player)

        self._log(f"Choosing board {result.board_index}, cell {result.cell_index} with score {result.score}")
        return result.board_index, result.cell_index


class ExtremeStrategy(Strategy):
    """
    Tier 4: priority rules, then strategy-aware scoring.

    1. Win any board immediately
    2. Block any immediate opponent win
    3. Many open boards: one-ply strategic scan
    4. Few open boards: deep search with strategic bonuses on top
    Every decision is sent to the decision sink.
    """

    difficulty = Difficulty.EXTREME
    name = "EXTREME"

    def __init__(self, config=None, rng=None, decision_sink=None):
        super().__init__(config, rng, decision_sink)
        self.fallback = DeepSearchStrategy(self.config, self.rng)

    def _choose(self, state: GameState, valid_boards: List[int], player: Player) -> Choice:
        position = state.snapshot()
        move_number = len(state.moves) + 1

        for kind, action, log_score in (
            (WIN, ActionKind.WIN, self.config.WIN_LOG_SCORE),
            (BLOCK, ActionKind.BLOCK, self.config.BLOCK_LOG_SCORE),
        ):
            found = find_priority_move(position, valid_boards, player, kind)
            if found is None:
                continue
            board_index, win_block = found
            if kind == WIN:
                reason = f"Winning move completing {win_block.pattern} pattern on board {board_index}"
            else:
                reason = f"Blocking opponent's {win_block.pattern} pattern on board {board_index}"
            self._log(f"{kind.capitalize()} opportunity detected on board {board_index}, cell {win_block.cell_index}")
            self._record(move_number, action, board_index, win_block.cell_index, reason, log_score)
            return board_index, win_block.cell_index

        if len(valid_boards) > self.config.STRATEGIC_SCAN_BOARD_LIMIT:
            self._log("Multiple board options detected. Using optimized analysis.")
            choice = self._strategic_scan(position, valid_boards, player, move_number)
        else:
            choice = self._deep_search(position, valid_boards, player, move_number)

        if choice is not None:
            return choice

        self._log("Complex position detected. Switching to alternate algorithm.")
        board_index, cell_index = self.fallback._choose(state, valid_boards, player)
        self.nodes_evaluated = self.fallback.nodes_evaluated
        self._record(
            move_number, ActionKind.FALLBACK, board_index, cell_index,
            "No optimal move found, using fallback strategy", 0.0
        )
        return board_index, cell_index

    def _strategic_scan(
        self,
        position: Position,
        valid_boards: List[int],
        player: Player,
        move_number: int
    ) -> Optional[Choice]:
        """Score each move on heuristics alone (no search)."""
        config = self.config
        best_score = -np.inf
        best: Optional[Choice] = None
        best_action = ActionKind.HEURISTIC
        best_reason = ""

        for board_index in valid_boards:
            if not position.is_playable(board_index):
                continue
            for cell_index in order_cells(position.empty_cells(board_index)):
                after = position.with_move(board_index, cell_index, player)
                score = evaluate_position(after, board_index, cell_index, player, self.difficulty)

                quality = board_quality(after, cell_index, player, config)
                score += quality

                setup = meta_win_setup(after, cell_index, player)
                if setup:
                    score += config.META_SETUP_BONUS

                board_bonus = strategic_board_bonus(board_index, config)
                cell_bonus = strategic_cell_bonus(after, cell_index, player, config)
                score += board_bonus + cell_bonus

                if score <= best_score:
                    continue
                best_score = score
                best = (board_index, cell_index)

                if setup:
                    best_action = ActionKind.META_WIN_SETUP
                    best_reason = "Setting up meta-board win pattern"
                elif quality > 0:
                    best_action = ActionKind.FORCE_BAD_BOARD
                    if quality >= config.QUALITY_ONE_EMPTY:
                        best_reason = f"Forcing opponent to nearly full board {cell_index}"
                    elif quality >= config.QUALITY_TWO_EMPTY:
                        best_reason = f"Forcing opponent to board {cell_index} where we have a winning threat"
                    else:
                        best_reason = f"Forcing opponent to disadvantageous board {cell_index}"
                else:
                    best_action = ActionKind.HEURISTIC
                    if cell_bonus > 0:
                        best_reason = "Strategic move targeting meta-board pattern"
                    elif board_bonus >= config.STRATEGIC_BOARD_BONUS["center"]:
                        best_reason = "Taking control of the center board"
                    elif board_bonus >= config.STRATEGIC_BOARD_BONUS["corner"]:
                        best_reason = "Taking control of a corner board"
                    else:
                        best_reason = "Optimal move based on heuristic evaluation"

        if best is None:
            return None

        self._log(f"Strategic move: board {best[0]}, cell {best[1]} with score {best_score}")
        self._record(
            move_number, best_action, best[0], best[1], best_reason,
            self._normalize(best_score, config.SCAN_SCORE_SCALE)
        )
        return best

    def _deep_search(
        self,
        position: Position,
        valid_boards: List[int],
        player: Player,
        move_number: int
    ) -> Optional[Choice]:
        """Time-boxed deep search with strategic bonuses added at the root."""
        config = self.config

        def bonus(board_index: int, cell_index: int):
            after = position.with_move(board_index, cell_index, player)
            bad_board = sends_to_bad_board(after, cell_index, player)
            setup = meta_win_setup(after, cell_index, player)
            extra = 0
            if bad_board:
                extra += config.BAD_BOARD_BONUS
            if setup:
                extra += config.META_SETUP_BONUS

            if setup:
                return extra, (ActionKind.META_WIN_SETUP, "Setting up meta-board win pattern")
            if bad_board:
                return extra, (ActionKind.FORCE_BAD_BOARD, f"Forcing opponent to disadvantageous board {cell_index}")
            return extra, (ActionKind.HEURISTIC, "Optimal move based on heuristic evaluation")

        self._log("Analyzing game state with deep search...")
        engine = SearchEngine(
            player, self.difficulty, config, self.rng,
            complexity_cap=True,
            time_budget=config.EXTREME_TIME_BUDGET
        )
        result = engine.search(position, valid_boards, config.EXTREME_DEPTH, bonus)
        self.nodes_evaluated = result.nodes_evaluated

        if not result.found:
            return None

        action, reason = result.tag
        self._log(f"Choosing board {result.board_index}, cell {result.cell_index} with score {result.score}")
        self._record(
            move_number, action, result.board_index, result.cell_index, reason,
            self._normalize(result.score, config.SEARCH_SCORE_SCALE)
        )
        return result.board_index, result.cell_index

    def _normalize(self, score: float, scale: float) -> float:
        """Map a raw score onto the 0-10 log scale."""
        value = min(self.config.MAX_LOG_SCORE, max(0.0, score / scale * 10))
        return round(float(value), 1)

    def _record(
        self,
        move_number: int,
        action: ActionKind,
        board_index: Optional[int],
        cell_index: Optional[int],
        reason: str,
        score: float
    ):
        if self.decision_sink is None:
            return
        self.decision_sink(DecisionLogEntry(
            move_number=move_number,
            action=action,
            board=board_index,
            cell=cell_index,
            reason=reason,
            score=score
        ))


STRATEGIES: dict = {
    Difficulty.EASY: RuleBasedStrategy,
    Difficulty.MEDIUM: HybridStrategy,
    Difficulty.HARD: DeepSearchStrategy,
    Difficulty.EXTREME: ExtremeStrategy,
}


def make_strategy(
    difficulty: Difficulty,
    config: Optional[AIConfig] = None,
    rng: Optional[np.random.Generator] = None,
    decision_sink: Optional[DecisionSink] = None
) -> Strategy:
    """Build the strategy for a difficulty."""
    strategy_class: Type[Strategy] = STRATEGIES[Difficulty.from_name(difficulty)]
    return strategy_class(config, rng, decision_sink)


def select_move(
    state: GameState,
    difficulty: Difficulty,
    valid_boards: List[int],
    config: Optional[AIConfig] = None,
    rng: Optional[np.random.Generator] = None,
    decision_sink: Optional[DecisionSink] = None
) -> Move:
    """One-shot move selection for a difficulty."""
    return make_strategy(difficulty, config, rng, decision_sink).select_move(state, valid_boards)
