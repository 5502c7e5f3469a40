"""
In-memory game session for Ultimate TicTacToe.

This is the surface the UI/audio layers talk to: apply a move, ask which
boards are playable, check for a win or draw, and subscribe to board/game
events. Scores live only as long as the session does.
"""

from typing import Callable, Dict, List, Optional

from .game_state import GameState, MoveResult, Player
from .move_validator import MoveValidator
from .win_checker import has_line

# Event names
BOARD_WON = "board_won"
BOARD_DRAWN = "board_drawn"
GAME_WON = "game_won"
GAME_DRAWN = "game_drawn"

EVENTS = (BOARD_WON, BOARD_DRAWN, GAME_WON, GAME_DRAWN)


class GameSession:
    """
    One sitting of games between two players.

    Event callbacks receive the MoveResult that caused them.
    """

    def __init__(self):
        self.state = GameState()
        self.validator = MoveValidator()

        # Score across games
        self.score: Dict[str, int] = {"X": 0, "O": 0, "draw": 0}
        # wins, losses, draws per player
        self.records: Dict[Player, List[int]] = {
            Player.X: [0, 0, 0],
            Player.O: [0, 0, 0],
        }
        self.games_played = 0

        self._listeners: Dict[str, List[Callable[[MoveResult], None]]] = {
            event: [] for event in EVENTS
        }

    def on(self, event: str, callback: Callable[[MoveResult], None]):
        """Register a callback for one of EVENTS."""
        if event not in self._listeners:
            raise ValueError(f"Unknown event {event!r}. Expected one of {EVENTS}")
        self._listeners[event].append(callback)

    def _emit(self, event: str, result: MoveResult):
        for callback in self._listeners[event]:
            callback(result)

    def apply_move(self, board_index: int, cell_index: int) -> MoveResult:
        """
        Play a move for the current player.

        Raises:
            IllegalMoveError: if the move is not allowed (state unchanged).
        """
        result = self.state.apply_move(board_index, cell_index)

        if result.board_won:
            self._emit(BOARD_WON, result)
        elif result.board_drawn:
            self._emit(BOARD_DRAWN, result)

        if result.game_won:
            self._record_result(result.move.player)
            self._emit(GAME_WON, result)
        elif result.game_drawn:
            self._record_result(None)
            self._emit(GAME_DRAWN, result)

        return result

    def play_ai_turn(self, ai_player) -> MoveResult:
        """Let a bot pick a move and play it through the session."""
        move = ai_player.get_best_move(self.state)
        if move is None:
            raise ValueError(f"{ai_player.player.value} could not move now")
        return self.apply_move(move.board_index, move.cell_index)

    def get_valid_targets(self) -> List[int]:
        return self.validator.get_valid_targets(self.state)

    def check_game_win(self, player: Player) -> bool:
        """True if the player holds a full line of sub-boards."""
        return has_line(self.state.meta_grid(), player)

    def check_draw(self) -> bool:
        """True if every sub-board is decided and nobody has a meta-line."""
        if any(self.check_game_win(p) for p in Player):
            return False
        return all(board.is_decided for board in self.state.boards)

    def _record_result(self, winner: Optional[Player]):
        self.games_played += 1
        if winner is None:
            self.score["draw"] += 1
            for record in self.records.values():
                record[2] += 1
            return
        self.score[winner.value] += 1
        self.records[winner][0] += 1
        self.records[winner.opposite()][1] += 1

    def reset(self):
        """Start a new game. Scores are kept."""
        self.state = GameState()
