"""
Tests for line detection on 3x3 grids.
"""

from logic.game_state import Player
from logic.win_checker import (
    WinChecker, WINNING_LINES, LINES_THROUGH,
    has_line, winning_line, is_full, count_line, has_threat, line_kind,
)

X, O = Player.X, Player.O


def grid(text):
    """'XX.O.....' -> list of marks."""
    return [None if c == "." else Player(c) for c in text]


def test_every_line_is_a_win():
    for line in WINNING_LINES:
        cells = [None] * 9
        for i in line:
            cells[i] = X
        assert has_line(cells, X)
        assert not has_line(cells, O)
        assert winning_line(cells, X) == line


def test_no_line_on_mixed_grid():
    cells = grid("XOXXOOOXX")
    assert not has_line(cells, X)
    assert not has_line(cells, O)
    assert is_full(cells)
    assert WinChecker().check_draw(cells, [X, O])


def test_line_kinds():
    assert line_kind((0, 1, 2)) == "horizontal"
    assert line_kind((6, 7, 8)) == "horizontal"
    assert line_kind((1, 4, 7)) == "vertical"
    assert line_kind((0, 4, 8)) == "diagonal"
    assert line_kind((2, 4, 6)) == "diagonal"


def test_lines_through_each_index():
    assert len(LINES_THROUGH[4]) == 4
    for corner in (0, 2, 6, 8):
        assert len(LINES_THROUGH[corner]) == 3
    for edge in (1, 3, 5, 7):
        assert len(LINES_THROUGH[edge]) == 2


def test_count_line_and_threat():
    cells = grid("XX.O.....")
    assert count_line(cells, (0, 1, 2), X) == (2, 1)
    assert count_line(cells, (3, 4, 5), X) == (0, 2)
    assert has_threat(cells, X)
    assert not has_threat(cells, O)

    # Two in a row with the third taken is not a threat
    assert not has_threat(grid("XXO......"), X)


def test_win_checker_reports_line():
    checker = WinChecker()
    cells = grid("O..O..O..")
    assert checker.check_winner(cells, [X, O]) == O
    assert checker.get_winning_line(cells, [X, O]) == [0, 3, 6]
    assert not checker.check_draw(cells, [X, O])


if __name__ == "__main__":
    for name, func in list(globals().items()):
        if name.startswith("test_") and callable(func):
            func()
            print(f"✓ {name}")
    print("\nWin checker tests done!")
