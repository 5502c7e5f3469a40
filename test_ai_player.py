"""
Tests for the AI player turn taker.
"""

import pytest

from logic.errors import NoLegalMoveError
from logic.game_state import GameState, Player
from ai.ai_player import AIPlayer, TurnPhase
from ai.config import AIConfig
from ai.decision_log import DecisionLog
from ai.weights import Difficulty

X, O = Player.X, Player.O


class QuietConfig(AIConfig):
    DEBUG_MODE = False
    DEEP_TIME_BUDGET = 1.0
    EXTREME_TIME_BUDGET = 0.5


def test_not_my_turn_returns_none(capsys):
    ai = AIPlayer(O, Difficulty.EASY, seed=1, config=QuietConfig())
    assert ai.get_best_move(GameState()) is None
    assert "not O's turn" in capsys.readouterr().out


def test_game_over_returns_none():
    state = GameState()
    state.is_game_over = True
    ai = AIPlayer(X, Difficulty.HARD, config=QuietConfig())
    assert ai.get_best_move(state) is None
    assert ai.take_turn(state) is None
    assert ai.phase == TurnPhase.IDLE


def test_take_turn_applies_one_move():
    state = GameState()
    ai = AIPlayer(X, Difficulty.HARD, seed=1, config=QuietConfig())

    result = ai.take_turn(state)

    assert len(state.moves) == 1
    assert state.moves[0] == result.move
    assert state.current_player == O
    assert ai.phase == TurnPhase.IDLE
    assert ai.nodes_evaluated > 0


def test_same_seed_same_game():
    def play(seed):
        state = GameState()
        bots = {
            X: AIPlayer(X, Difficulty.MEDIUM, seed=seed, config=QuietConfig()),
            O: AIPlayer(O, Difficulty.EASY, seed=seed + 1, config=QuietConfig()),
        }
        while not state.is_game_over:
            bots[state.current_player].take_turn(state)
        return [(m.board_index, m.cell_index) for m in state.moves]

    assert play(5) == play(5)


def test_no_playable_board_is_reraised(capsys):
    state = GameState()
    for board in state.boards:
        board.is_draw = True
    ai = AIPlayer(X, Difficulty.EASY, config=QuietConfig())

    with pytest.raises(NoLegalMoveError):
        ai.take_turn(state)
    assert ai.phase == TurnPhase.IDLE
    assert "cannot move" in capsys.readouterr().out


def test_extreme_writes_to_sink():
    log = DecisionLog()
    state = GameState()
    ai = AIPlayer(X, "extreme", seed=1, decision_sink=log, config=QuietConfig())

    ai.take_turn(state)

    assert ai.difficulty == Difficulty.EXTREME
    assert len(log) == 1
    assert log.entries[0].move_number == 1


def test_blocks_after_being_sent_to_threat():
    """X sets up the top row of board 4, then sends O there."""
    state = GameState()
    for board, cell in [(4, 0), (0, 4), (4, 1), (1, 3), (3, 4)]:
        state.apply_move(board, cell)
    assert state.current_player == O
    assert state.active_target == 4

    ai = AIPlayer(O, Difficulty.EXTREME, seed=1, config=QuietConfig())
    result = ai.take_turn(state)

    assert (result.move.board_index, result.move.cell_index) == (4, 2)


def test_move_suggestion_text():
    ai = AIPlayer(X, Difficulty.EXTREME, config=QuietConfig())
    text = ai.get_move_suggestion(GameState())
    assert text.startswith("Place X on board 4, cell 4")


def test_difficulty_lookup():
    assert Difficulty.from_name("Easy") == Difficulty.EASY
    assert Difficulty.from_name("2") == Difficulty.MEDIUM
    assert Difficulty.from_name(4) == Difficulty.EXTREME
    assert Difficulty.from_name("impossible") == Difficulty.HARD


if __name__ == "__main__":
    for name, func in list(globals().items()):
        if name.startswith("test_") and callable(func) and name not in (
            "test_not_my_turn_returns_none", "test_no_playable_board_is_reraised"
        ):
            func()
            print(f"✓ {name}")
    print("\nAI player tests done!")
