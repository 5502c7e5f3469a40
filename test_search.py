"""
Tests for the alpha-beta search engine.
"""

import numpy as np
import pytest

from logic.game_state import Player, Position
from ai.config import AIConfig
from ai.search import SearchEngine
from ai.weights import Difficulty

X, O = Player.X, Player.O
EMPTY = "........."


class QuietConfig(AIConfig):
    DEBUG_MODE = False


def marks(text):
    return tuple(None if c == "." else Player(c) for c in text)


def make_position(boards=None, winners=None):
    boards = boards or {}
    winners = winners or {}
    return Position(
        cells=tuple(marks(boards.get(i, EMPTY)) for i in range(9)),
        winners=tuple(winners.get(i) for i in range(9)),
        drawn=(False,) * 9,
    )


def engine(player=X, difficulty=Difficulty.HARD, **kwargs):
    return SearchEngine(player, difficulty, QuietConfig(), np.random.default_rng(0), **kwargs)


@pytest.mark.parametrize("depth", [1, 2])
def test_last_empty_cell_win_beats_everything(depth):
    """Board 4 has one empty cell and it completes X's top row."""
    position = make_position({4: "XX.OOXXOO"})
    search = engine()

    result = search.search(position, [4, 0], depth)

    assert (result.board_index, result.cell_index) == (4, 2)
    winning = search.score_move(position, 4, 2, depth)
    assert result.score == winning
    for cell in range(9):
        assert winning > search.score_move(position, 0, cell, depth)


def test_win_score_prefers_more_remaining_depth():
    position = make_position({4: "XX......."})
    search = engine()
    assert search.score_move(position, 4, 2, 3) == QuietConfig.WIN_SCORE + 3
    assert search.score_move(position, 4, 2, 1) == QuietConfig.WIN_SCORE + 1


def test_sending_opponent_to_their_win_is_negative():
    """X plays cell 1 of board 0 and O finishes its row on board 1."""
    position = make_position({1: "OO......."})
    search = engine()

    score = search.score_move(position, 0, 1, 2)
    assert score <= -QuietConfig.WIN_SCORE

    result = search.search(position, [0], 2)
    assert result.cell_index != 1


def test_search_leaves_position_alone():
    position = make_position({4: "X...O...."})
    search = engine()
    search.search(position, [4], 2)
    assert position == make_position({4: "X...O...."})
    assert search.nodes_evaluated > 0


def test_skips_closed_boards():
    position = make_position({0: "XXX......"}, winners={0: X})
    result = engine().search(position, [0, 5], 1)
    assert result.board_index == 5


def test_expired_budget_falls_back_to_first_candidate():
    position = make_position()
    search = engine(time_budget=-1.0)

    result = search.search(position, [4, 0], 3)

    assert result.timed_out
    assert result.found
    # Center of the first board is tried first
    assert (result.board_index, result.cell_index) == (4, 4)


def test_sampled_cells_keep_center():
    search = engine(difficulty=Difficulty.MEDIUM, sample_moves=True)
    for _ in range(20):
        cells = search._sample_cells([4, 0, 2, 6, 8, 1, 3, 5, 7])
        assert len(cells) == QuietConfig.SAMPLE_CELL_LIMIT
        assert len(set(cells)) == len(cells)
        assert cells[0] == 4
        assert cells[1] in (0, 2, 6, 8)


def test_sampled_boards_are_distinct():
    search = engine(difficulty=Difficulty.MEDIUM, sample_moves=True)
    for _ in range(20):
        boards = search._sample_boards([0, 1, 2, 3, 5, 6])
        assert len(boards) == QuietConfig.SAMPLE_BOARD_LIMIT
        assert len(set(boards)) == len(boards)


def record_depths(search, monkeypatch):
    """Collect the remaining depth of every _minimax call."""
    depths = []
    inner = search._minimax

    def wrapped(position, board_index, cell_index, mover, depth, *args):
        depths.append(depth)
        return inner(position, board_index, cell_index, mover, depth, *args)

    monkeypatch.setattr(search, "_minimax", wrapped)
    return depths


# Cell 0 of board 4 sends O to board 0, which is already won: free move over 8 boards
FREE_MOVE_POSITION = make_position({0: "XXX......"}, winners={0: X})


def test_complexity_cap_clamps_wide_nodes(monkeypatch):
    capped = engine(difficulty=Difficulty.EXTREME, complexity_cap=True)
    full = engine(difficulty=Difficulty.EXTREME)
    capped_depths = record_depths(capped, monkeypatch)
    full_depths = record_depths(full, monkeypatch)

    capped.score_move(FREE_MOVE_POSITION, 4, 0, 4)
    full.score_move(FREE_MOVE_POSITION, 4, 0, 4)

    # Depth 4 with 8 boards to choose from drops straight to 2 below
    assert 3 not in capped_depths
    assert 2 in capped_depths
    assert 3 in full_depths


def test_complexity_cap_leaves_shallow_nodes_alone(monkeypatch):
    capped = engine(difficulty=Difficulty.EXTREME, complexity_cap=True)
    full = engine(difficulty=Difficulty.EXTREME)
    capped_depths = record_depths(capped, monkeypatch)
    full_depths = record_depths(full, monkeypatch)

    capped.score_move(FREE_MOVE_POSITION, 4, 0, 3)
    full.score_move(FREE_MOVE_POSITION, 4, 0, 3)

    assert capped_depths == full_depths
    assert 2 in capped_depths


if __name__ == "__main__":
    for name, func in list(globals().items()):
        if name.startswith("test_") and callable(func):
            if name == "test_last_empty_cell_win_beats_everything":
                func(2)
            elif name.startswith("test_complexity_cap"):
                func(pytest.MonkeyPatch())
            else:
                func()
            print(f"✓ {name}")
    print("\nSearch tests done!")
