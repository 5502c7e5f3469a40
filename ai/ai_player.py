"""
AI player for Ultimate TicTacToe.
Picks moves with the strategy for its difficulty and plays them.
"""

from enum import Enum
from typing import Optional

import numpy as np

from logic.errors import NoLegalMoveError
from logic.game_state import GameState, Move, MoveResult, Player
from logic.move_validator import MoveValidator
from .config import AIConfig
from .decision_log import DecisionSink
from .strategies import make_strategy
from .weights import Difficulty


class TurnPhase(Enum):
    """Where the bot is in its turn."""
    IDLE = "idle"
    EVALUATING = "evaluating"
    COMMITTED = "committed"


class AIPlayer:
    """
    A bot that plays Ultimate TicTacToe at a fixed difficulty.

    The bot only ever reads the game state while it thinks; the move is
    applied once, in take_turn().
    """

    def __init__(
        self,
        player: Player = Player.O,
        difficulty: Difficulty = Difficulty.HARD,
        seed: Optional[int] = None,
        decision_sink: Optional[DecisionSink] = None,
        config: Optional[AIConfig] = None
    ):
        """
        Initialize the AI player.

        Args:
            player: Which player the AI controls (default: O)
            difficulty: Difficulty tier (or its name)
            seed: Seed for the bot's random choices (None = unseeded)
            decision_sink: Receives decision log entries (extreme only)
            config: AI settings
        """
        self.player = player
        self.difficulty = Difficulty.from_name(difficulty)
        self.config = config or AIConfig()
        self.rng = np.random.default_rng(seed)
        self.validator = MoveValidator()
        self.strategy = make_strategy(self.difficulty, self.config, self.rng, decision_sink)

        self.phase = TurnPhase.IDLE

        # Keep track of how many positions the last search looked at (for debugging)
        self.nodes_evaluated = 0

    def get_best_move(self, game_state: GameState) -> Optional[Move]:
        """
        Get the best move for the current position.

        Args:
            game_state: Current game state (not modified).

        Returns:
            The chosen Move, or None if it is not the bot's turn or the game is over.

        Raises:
            NoLegalMoveError: if the game is running but no board can be played.
        """
        self.nodes_evaluated = 0

        # Check if it's our turn
        if game_state.is_game_over:
            return None
        if game_state.current_player != self.player:
            print(f"Warning: It's not {self.player.value}'s turn!")
            return None

        valid_boards = self.validator.get_valid_targets(game_state)

        try:
            move = self.strategy.select_move(game_state, valid_boards)
        except NoLegalMoveError as e:
            print(f"AI {self.player.value} cannot move: {e}")
            raise

        self.nodes_evaluated = self.strategy.nodes_evaluated
        if self.config.DEBUG_MODE:
            print(f"AI ({self.difficulty.name}) evaluated {self.nodes_evaluated} positions. "
                  f"Move: board {move.board_index}, cell {move.cell_index}")
        return move

    def take_turn(self, game_state: GameState) -> Optional[MoveResult]:
        """
        Choose a move and apply it to the game.

        Returns:
            The MoveResult, or None if it was not the bot's turn.
        """
        self.phase = TurnPhase.EVALUATING
        try:
            move = self.get_best_move(game_state)
        except NoLegalMoveError:
            self.phase = TurnPhase.IDLE
            raise

        if move is None:
            self.phase = TurnPhase.IDLE
            return None

        self.phase = TurnPhase.COMMITTED
        result = game_state.apply_move(move.board_index, move.cell_index, self.player)
        self.phase = TurnPhase.IDLE
        return result

    def get_move_suggestion(self, game_state: GameState) -> str:
        """
        Get a human-readable move suggestion.

        Args:
            game_state: Current game state.

        Returns:
            A string describing the suggested move.
        """
        move = self.get_best_move(game_state)

        if move is None:
            return "No moves available!"

        target = "a free move" if move.next_target is None else f"board {move.next_target}"
        return f"Place {move.player.value} on board {move.board_index}, cell {move.cell_index} (sends opponent to {target})"


# Quick test
if __name__ == "__main__":
    print("Testing AIPlayer...")

    # X threatens the top row of board 4, then sends O there; O must block at cell 2
    game = GameState()
    for board, cell in [(4, 0), (0, 4), (4, 1), (1, 3), (3, 4)]:
        game.apply_move(board, cell)

    game.print_board()
    print("\nAI is O. X is about to win board 4 with cell 2!")

    ai = AIPlayer(Player.O, Difficulty.EXTREME, seed=1)
    move = ai.get_best_move(game)
    print(f"AI's move: {move}")

    assert move.board_index == 4 and move.cell_index == 2, f"Expected (4, 2), got {move}"
    print("✓ AI correctly blocks the win!")

    print("\nAIPlayer test done!")
