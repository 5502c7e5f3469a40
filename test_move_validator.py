"""
Tests for legal-move resolution.
"""

from logic.game_state import GameState, Player
from logic.move_validator import MoveValidator

X, O = Player.X, Player.O


def set_board(state, index, text, winner=None, draw=False):
    board = state.boards[index]
    board.cells = [None if c == "." else Player(c) for c in text]
    board.winner = winner
    board.is_draw = draw


def test_free_move_at_start():
    state = GameState()
    validator = MoveValidator()
    assert validator.get_valid_targets(state) == list(range(9))
    assert len(validator.get_valid_moves(state)) == 81


def test_target_is_only_choice():
    state = GameState()
    state.apply_move(4, 4)
    validator = MoveValidator()

    assert validator.get_valid_targets(state) == [4]
    assert len(validator.get_valid_moves(state)) == 8


def test_targets_are_idempotent():
    state = GameState()
    state.apply_move(2, 6)
    validator = MoveValidator()
    before = state.to_dict()

    first = validator.get_valid_targets(state)
    second = validator.get_valid_targets(state)

    assert first == second == [6]
    assert state.to_dict() == before


def test_decided_target_falls_back_to_open_boards():
    state = GameState()
    set_board(state, 0, "XXX......", winner=X)
    set_board(state, 5, "XOXXOOOXX", draw=True)
    # Stale target pointing at a closed board
    state.active_target = 0

    targets = MoveValidator().get_valid_targets(state)
    assert targets == [1, 2, 3, 4, 6, 7, 8]


def test_no_targets_when_game_over():
    state = GameState()
    state.is_game_over = True
    assert MoveValidator().get_valid_targets(state) == []


def test_validate_move_reasons():
    state = GameState()
    state.apply_move(4, 4)
    validator = MoveValidator()

    assert validator.validate_move(state, 4, 0).is_valid

    wrong_board = validator.validate_move(state, 0, 0)
    assert not wrong_board.is_valid
    assert "board 4" in wrong_board.error_message

    occupied = validator.validate_move(state, 4, 4)
    assert not occupied.is_valid
    assert "occupied" in occupied.error_message

    wrong_turn = validator.validate_move(state, 4, 0, X)
    assert not wrong_turn.is_valid
    assert "turn" in wrong_turn.error_message

    out_of_range = validator.validate_move(state, 4, 9)
    assert not out_of_range.is_valid


def test_validate_decided_board():
    state = GameState()
    set_board(state, 3, "OOO......", winner=O)
    result = MoveValidator().validate_move(state, 3, 5)
    assert not result.is_valid
    assert "won" in result.error_message


if __name__ == "__main__":
    for name, func in list(globals().items()):
        if name.startswith("test_") and callable(func):
            func()
            print(f"✓ {name}")
    print("\nMove validator tests done!")
