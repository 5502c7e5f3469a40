"""
Game state management for Ultimate TicTacToe.
Tracks the nine sub-boards, the meta-board, current player and active target.
"""

from enum import Enum
from typing import Optional, List, Tuple, Dict, Any, Iterable
from dataclasses import dataclass, field

from .errors import IllegalMoveError
from .win_checker import WinChecker, has_line, is_full, winning_line, CENTER, CORNERS, EDGES


class Player(Enum):
    """The two players in the game."""
    X = "X"
    O = "O"

    def opposite(self) -> "Player":
        """Get the opposite player."""
        return Player.O if self == Player.X else Player.X


# Cell ordering used everywhere moves are tried in turn: center, corners, edges
CELL_ORDER = (CENTER,) + CORNERS + EDGES


def order_cells(cells: Iterable[int]) -> List[int]:
    """Sort cell indices center first, then corners, then edges."""
    cells = set(cells)
    return [c for c in CELL_ORDER if c in cells]


class Outcome(Enum):
    """Outcome of a sub-board."""
    IN_PROGRESS = "in_progress"
    WON = "won"
    DRAWN = "drawn"


@dataclass
class SubBoard:
    """
    One of the nine inner 3x3 grids.

    Cells are row-major (0-8); None means empty.
    """
    cells: List[Optional[Player]] = field(default_factory=lambda: [None] * 9)
    winner: Optional[Player] = None
    is_draw: bool = False
    win_line: Optional[List[int]] = None

    @property
    def outcome(self) -> Outcome:
        if self.winner is not None:
            return Outcome.WON
        if self.is_draw:
            return Outcome.DRAWN
        return Outcome.IN_PROGRESS

    @property
    def is_decided(self) -> bool:
        return self.outcome != Outcome.IN_PROGRESS

    @property
    def is_full(self) -> bool:
        return is_full(self.cells)

    def empty_cells(self) -> List[int]:
        return [i for i, cell in enumerate(self.cells) if cell is None]

    def copy(self) -> "SubBoard":
        return SubBoard(
            cells=list(self.cells),
            winner=self.winner,
            is_draw=self.is_draw,
            win_line=list(self.win_line) if self.win_line else None,
        )


@dataclass(frozen=True)
class Move:
    """
    A move in the game.
    """
    board_index: int                # Sub-board played in (0-8)
    cell_index: int                 # Cell inside the sub-board (0-8)
    player: Player                  # Who made the move
    next_target: Optional[int]      # Board the opponent is sent to (None = free move)
    move_number: int = 0            # 1-based position in the game


@dataclass
class MoveResult:
    """What happened when a move was applied."""
    move: Move
    board_won: bool = False
    board_drawn: bool = False
    game_won: bool = False
    game_drawn: bool = False

    @property
    def next_target(self) -> Optional[int]:
        return self.move.next_target


@dataclass(frozen=True)
class Position:
    """
    Immutable copy of the boards used for hypothetical play.

    with_move() returns a new Position, so a search can never write
    into the live game.
    """
    cells: Tuple[Tuple[Optional[Player], ...], ...]
    winners: Tuple[Optional[Player], ...]
    drawn: Tuple[bool, ...]

    def is_decided(self, board_index: int) -> bool:
        return self.winners[board_index] is not None or self.drawn[board_index]

    def is_playable(self, board_index: int) -> bool:
        """Not decided and still has an empty cell."""
        return not self.is_decided(board_index) and not is_full(self.cells[board_index])

    def empty_cells(self, board_index: int) -> List[int]:
        return [i for i, cell in enumerate(self.cells[board_index]) if cell is None]

    def playable_boards(self) -> List[int]:
        return [i for i in range(9) if self.is_playable(i)]

    def next_target(self, cell_index: int) -> Optional[int]:
        """Board the opponent is sent to after playing cell_index (None = free move)."""
        return cell_index if self.is_playable(cell_index) else None

    def candidate_boards(self, cell_index: int) -> List[int]:
        """Boards the opponent may play in after a move into cell_index."""
        target = self.next_target(cell_index)
        if target is None:
            return self.playable_boards()
        return [target]

    def with_move(self, board_index: int, cell_index: int, player: Player) -> "Position":
        assert 0 <= board_index < 9 and 0 <= cell_index < 9
        assert self.cells[board_index][cell_index] is None

        board = list(self.cells[board_index])
        board[cell_index] = player
        cells = list(self.cells)
        cells[board_index] = tuple(board)

        winners = self.winners
        drawn = self.drawn
        if not self.is_decided(board_index):
            if has_line(board, player):
                winners = winners[:board_index] + (player,) + winners[board_index + 1:]
            elif is_full(board):
                drawn = drawn[:board_index] + (True,) + drawn[board_index + 1:]

        return Position(cells=tuple(cells), winners=winners, drawn=drawn)


@dataclass
class GameState:
    """
    The complete state of an Ultimate TicTacToe game.

    Tracks:
    - The 9 sub-boards (and through them the meta-board)
    - Current player
    - Active target board (None means a free move)
    - Move history
    - Game status (ongoing, won, draw)
    """

    boards: List[SubBoard] = field(
        default_factory=lambda: [SubBoard() for _ in range(9)]
    )

    # Current player's turn
    current_player: Player = Player.X

    # Board the current player must play in, None for a free move
    active_target: Optional[int] = None

    # Move history
    moves: List[Move] = field(default_factory=list)

    # Game result
    winner: Optional[Player] = None
    is_draw: bool = False
    is_game_over: bool = False
    win_line: Optional[List[int]] = None

    def meta_grid(self) -> List[Optional[Player]]:
        """Sub-board winners as marks on the outer 3x3 grid."""
        return [board.winner for board in self.boards]

    def is_playable(self, board_index: int) -> bool:
        board = self.boards[board_index]
        return not board.is_decided and not board.is_full

    def playable_boards(self) -> List[int]:
        return [i for i in range(9) if self.is_playable(i)]

    def get_empty_cells(self, board_index: int) -> List[int]:
        return self.boards[board_index].empty_cells()

    def snapshot(self) -> Position:
        """Immutable copy of the boards for search."""
        return Position(
            cells=tuple(tuple(board.cells) for board in self.boards),
            winners=tuple(board.winner for board in self.boards),
            drawn=tuple(board.is_draw for board in self.boards),
        )

    def apply_move(
        self,
        board_index: int,
        cell_index: int,
        player: Optional[Player] = None
    ) -> MoveResult:
        """
        Make a move in the given sub-board and cell.

        Args:
            board_index: Sub-board index (0-8).
            cell_index: Cell index inside the sub-board (0-8).
            player: Who is moving. Defaults to the current player.

        Returns:
            MoveResult describing board/game outcomes and the next target.

        Raises:
            IllegalMoveError: if the move breaks a rule. The state is unchanged.
        """
        from .move_validator import MoveValidator

        if player is None:
            player = self.current_player

        result = MoveValidator().validate_move(self, board_index, cell_index, player)
        if not result.is_valid:
            raise IllegalMoveError(result.error_message)

        checker = WinChecker()
        board = self.boards[board_index]
        board.cells[cell_index] = player

        board_won = False
        board_drawn = False
        if checker.check_winner(board.cells, [player]) is not None:
            board.winner = player
            board.win_line = checker.get_winning_line(board.cells, [player])
            board_won = True
        elif board.is_full:
            board.is_draw = True
            board_drawn = True

        game_won = False
        game_drawn = False
        meta = self.meta_grid()
        if board_won and has_line(meta, player):
            self.winner = player
            self.win_line = list(winning_line(meta, player))
            self.is_game_over = True
            game_won = True
        elif all(b.is_decided for b in self.boards):
            self.is_draw = True
            self.is_game_over = True
            game_drawn = True

        if self.is_game_over:
            next_target = None
        else:
            next_target = cell_index if self.is_playable(cell_index) else None

        move = Move(
            board_index=board_index,
            cell_index=cell_index,
            player=player,
            next_target=next_target,
            move_number=len(self.moves) + 1
        )
        self.moves.append(move)
        self.active_target = next_target

        if not self.is_game_over:
            self.current_player = player.opposite()

        return MoveResult(
            move=move,
            board_won=board_won,
            board_drawn=board_drawn,
            game_won=game_won,
            game_drawn=game_drawn
        )

    def copy(self) -> "GameState":
        """Create a deep copy of the game state."""
        return GameState(
            boards=[board.copy() for board in self.boards],
            current_player=self.current_player,
            active_target=self.active_target,
            moves=list(self.moves),
            winner=self.winner,
            is_draw=self.is_draw,
            is_game_over=self.is_game_over,
            win_line=list(self.win_line) if self.win_line else None
        )

    # ==================== SERIALIZATION ====================

    def to_dict(self) -> Dict[str, Any]:
        """Plain-data form of the state (for logging)."""
        return {
            "boards": [
                [cell.value if cell else "" for cell in board.cells]
                for board in self.boards
            ],
            "winners": [
                board.winner.value if board.winner else ("D" if board.is_draw else "")
                for board in self.boards
            ],
            "current_player": self.current_player.value,
            "active_target": self.active_target,
            "moves": [
                {
                    "board": m.board_index,
                    "cell": m.cell_index,
                    "player": m.player.value,
                    "next_target": m.next_target,
                    "move_number": m.move_number,
                }
                for m in self.moves
            ],
            "winner": self.winner.value if self.winner else None,
            "is_draw": self.is_draw,
            "is_game_over": self.is_game_over,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "GameState":
        """Rebuild a state from to_dict() output."""
        checker = WinChecker()
        boards = []
        for cells, outcome in zip(data["boards"], data["winners"]):
            board = SubBoard(cells=[Player(c) if c else None for c in cells])
            if outcome == "D":
                board.is_draw = True
            elif outcome:
                board.winner = Player(outcome)
                board.win_line = checker.get_winning_line(board.cells, [board.winner])
            boards.append(board)

        state = cls(
            boards=boards,
            current_player=Player(data["current_player"]),
            active_target=data["active_target"],
            moves=[
                Move(
                    board_index=m["board"],
                    cell_index=m["cell"],
                    player=Player(m["player"]),
                    next_target=m["next_target"],
                    move_number=m["move_number"]
                )
                for m in data["moves"]
            ],
            winner=Player(data["winner"]) if data["winner"] else None,
            is_draw=data["is_draw"],
            is_game_over=data["is_game_over"]
        )
        if state.winner is not None:
            line = winning_line(state.meta_grid(), state.winner)
            state.win_line = list(line) if line else None
        return state

    @classmethod
    def replay(cls, moves: Iterable[Move]) -> "GameState":
        """Play a move list from an empty game."""
        state = cls()
        for move in moves:
            state.apply_move(move.board_index, move.cell_index, move.player)
        return state

    # ==================== DISPLAY ====================

    def print_board(self):
        """Print the board to console."""
        def mark(board: SubBoard, cell: int) -> str:
            value = board.cells[cell]
            return value.value if value else "."

        print()
        print("      0       1       2")
        for meta_row in range(3):
            print("  +-------+-------+-------+")
            for cell_row in range(3):
                parts = []
                for meta_col in range(3):
                    board = self.boards[meta_row * 3 + meta_col]
                    cells = [mark(board, cell_row * 3 + c) for c in range(3)]
                    parts.append(" ".join(cells))
                label = str(meta_row) if cell_row == 1 else " "
                print(f"{label} | " + " | ".join(parts) + " |")
        print("  +-------+-------+-------+")

        outcomes = []
        for i, board in enumerate(self.boards):
            if board.winner:
                outcomes.append(f"{i}:{board.winner.value}")
            elif board.is_draw:
                outcomes.append(f"{i}:=")
        if outcomes:
            print("Decided boards: " + ", ".join(outcomes))

        # Print game info
        if self.is_game_over:
            if self.winner:
                print(f"\n{self.winner.value} WINS!")
            else:
                print("\nIt's a DRAW!")
        else:
            target = "any" if self.active_target is None else str(self.active_target)
            print(f"\nCurrent turn: {self.current_player.value}  (board: {target})")


# Quick test
if __name__ == "__main__":
    print("Testing GameState...")

    game = GameState()

    # X takes the top row of board 4 while O wanders
    moves = [(4, 0), (0, 4), (4, 1), (1, 4), (4, 2), (2, 4)]

    for board, cell in moves:
        print(f"\n{game.current_player.value} moves to board {board}, cell {cell}")
        result = game.apply_move(board, cell)
        if result.board_won:
            print(f"Board {board} won by {result.move.player.value}")
    game.print_board()

    print("\nGame state test done!")
