"""
Move validator for Ultimate TicTacToe.
Validates that moves follow the rules and resolves which boards may be played.
"""

from typing import Optional, Tuple, List
from dataclasses import dataclass
from .game_state import GameState, Player


@dataclass
class ValidationResult:
    """Result of move validation."""
    is_valid: bool
    error_message: Optional[str] = None


class MoveValidator:
    """
    Validates Ultimate TicTacToe moves.

    Rules:
    1. Game must not be over
    2. It must be the player's turn
    3. The board must be the active target (or any board on a free move)
    4. The board must not be won, drawn or full
    5. Can only place on empty cells
    """

    def get_valid_targets(self, game_state: GameState) -> List[int]:
        """
        Get the boards the current player may play in.

        A target that has been decided or filled falls back to a free move
        here as well as when it was assigned.

        Args:
            game_state: Current game state.

        Returns:
            Sorted list of board indices. Empty only when the game is over.
        """
        if game_state.is_game_over:
            return []

        target = game_state.active_target
        if target is not None and game_state.is_playable(target):
            return [target]

        targets = game_state.playable_boards()
        if not targets:
            print("ERROR: No playable boards but the game is not over!")
        return targets

    def validate_move(
        self,
        game_state: GameState,
        board_index: int,
        cell_index: int,
        player: Optional[Player] = None
    ) -> ValidationResult:
        """
        Validate a move.

        Args:
            game_state: Current game state.
            board_index: Sub-board to place in (0-8).
            cell_index: Cell inside the sub-board (0-8).
            player: Who is moving. Defaults to the current player.

        Returns:
            ValidationResult with is_valid and error_message.
        """
        # Check if game is over
        if game_state.is_game_over:
            return ValidationResult(
                is_valid=False,
                error_message="Game is already over!"
            )

        # Check if board/cell are in valid range
        if not (0 <= board_index <= 8 and 0 <= cell_index <= 8):
            return ValidationResult(
                is_valid=False,
                error_message=f"Invalid position ({board_index}, {cell_index}). Must be 0-8."
            )

        # Check whose turn it is
        if player is not None and player != game_state.current_player:
            return ValidationResult(
                is_valid=False,
                error_message=f"It's not {player.value}'s turn!"
            )

        board = game_state.boards[board_index]

        # Check if the board is still open
        if board.is_decided:
            return ValidationResult(
                is_valid=False,
                error_message=f"Board {board_index} is already {board.outcome.value}"
            )

        # Check the active target
        targets = self.get_valid_targets(game_state)
        if board_index not in targets:
            return ValidationResult(
                is_valid=False,
                error_message=f"Must play on board {game_state.active_target}, not {board_index}"
            )

        # Check if cell is empty
        if board.cells[cell_index] is not None:
            return ValidationResult(
                is_valid=False,
                error_message=f"Cell {cell_index} on board {board_index} is already occupied by {board.cells[cell_index].value}"
            )

        # All checks passed!
        return ValidationResult(is_valid=True)

    def get_valid_moves(self, game_state: GameState) -> List[Tuple[int, int]]:
        """
        Get all valid moves for the current player.

        Args:
            game_state: Current game state.

        Returns:
            List of (board, cell) valid move positions.
        """
        valid_moves = []

        for board_index in self.get_valid_targets(game_state):
            for cell_index in game_state.get_empty_cells(board_index):
                valid_moves.append((board_index, cell_index))

        return valid_moves


# Quick test
if __name__ == "__main__":
    print("Testing MoveValidator...")

    game = GameState()
    validator = MoveValidator()

    # Test valid move
    result = validator.validate_move(game, 4, 4)
    print(f"Move (4,4): valid={result.is_valid}, error={result.error_message}")

    # Make the move
    game.apply_move(4, 4)

    # Test invalid move (wrong board)
    result = validator.validate_move(game, 0, 0)
    print(f"Move (0,0): valid={result.is_valid}, error={result.error_message}")

    # Test out of range
    result = validator.validate_move(game, 9, 5)
    print(f"Move (9,5): valid={result.is_valid}, error={result.error_message}")

    # Get valid targets
    print(f"Valid targets: {validator.get_valid_targets(game)}")

    print("\nMoveValidator test done!")
