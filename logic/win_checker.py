"""
Win checker for Ultimate TicTacToe.
Detects three-in-a-row and full grids on any 3x3 grid.

The same 8 lines are used for the sub-boards (cells) and for the
meta-board (sub-board winners).
"""

from typing import Optional, List, Tuple, Sequence


# All possible winning lines as cell indices (row-major 0-8)
WINNING_LINES: Tuple[Tuple[int, int, int], ...] = (
    # Rows
    (0, 1, 2),
    (3, 4, 5),
    (6, 7, 8),
    # Columns
    (0, 3, 6),
    (1, 4, 7),
    (2, 5, 8),
    # Diagonals
    (0, 4, 8),
    (2, 4, 6),
)

CENTER = 4
CORNERS = (0, 2, 6, 8)
EDGES = (1, 3, 5, 7)

# Lines passing through each index
LINES_THROUGH = tuple(
    tuple(line for line in WINNING_LINES if index in line)
    for index in range(9)
)


def line_kind(line: Sequence[int]) -> str:
    """Name the direction of a line: horizontal, vertical or diagonal."""
    index = WINNING_LINES.index(tuple(line))
    if index < 3:
        return "horizontal"
    if index < 6:
        return "vertical"
    return "diagonal"


def has_line(grid: Sequence, player) -> bool:
    """True if every cell of some line holds the player's mark."""
    return any(
        grid[a] == player and grid[b] == player and grid[c] == player
        for a, b, c in WINNING_LINES
    )


def winning_line(grid: Sequence, player) -> Optional[Tuple[int, int, int]]:
    """The first completed line for the player, or None."""
    for line in WINNING_LINES:
        if all(grid[i] == player for i in line):
            return line
    return None


def is_full(grid: Sequence) -> bool:
    """True if no cell is empty."""
    return all(cell is not None for cell in grid)


def count_line(grid: Sequence, line: Sequence[int], player) -> Tuple[int, int]:
    """
    Count a line's contents.

    Returns:
        (cells held by player, empty cells)
    """
    mine = 0
    empty = 0
    for i in line:
        if grid[i] is None:
            empty += 1
        elif grid[i] == player:
            mine += 1
    return mine, empty


def has_threat(grid: Sequence, player) -> bool:
    """True if the player holds 2 of some line and the third is empty."""
    for line in WINNING_LINES:
        mine, empty = count_line(grid, line, player)
        if mine == 2 and empty == 1:
            return True
    return False


class WinChecker:
    """
    Checks for win conditions on the sub-boards and the meta-board.

    Win condition: 3 marks of the same player in a row
    (horizontally, vertically, or diagonally)
    """

    WINNING_LINES = WINNING_LINES

    def check_winner(self, grid: Sequence, players: Sequence) -> Optional[object]:
        """
        Check if there's a winner on a grid.

        Args:
            grid: 9 marks (None means empty).
            players: The players to check, in order.

        Returns:
            The winning player, or None if no winner yet.
        """
        for player in players:
            if has_line(grid, player):
                return player
        return None

    def check_draw(self, grid: Sequence, players: Sequence) -> bool:
        """A grid is drawn when it is full and nobody has a line."""
        return is_full(grid) and self.check_winner(grid, players) is None

    def get_winning_line(self, grid: Sequence, players: Sequence) -> Optional[List[int]]:
        """
        Get the winning line if there is one.

        Returns:
            The winning line as a list of indices, or None.
        """
        for player in players:
            line = winning_line(grid, player)
            if line is not None:
                return list(line)
        return None
