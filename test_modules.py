"""
Smoke test script for the Ultimate TicTacToe modules.
Run this to verify all components work before playing.
"""

import sys


def quiet_config():
    """AI settings with small budgets and no diagnostics for quick checks."""
    from ai.config import AIConfig
    config = AIConfig()
    config.DEBUG_MODE = False
    config.DEEP_TIME_BUDGET = 1.0
    config.EXTREME_TIME_BUDGET = 0.5
    return config


def test_ai_config():
    """Test AI configuration."""
    print("\n=== Testing AI Config ===")
    from ai.config import AIConfig
    config = AIConfig()
    print(f"  Extreme depth: {config.EXTREME_DEPTH}")
    print(f"  Extreme time budget: {config.EXTREME_TIME_BUDGET}s")
    print(f"  Strategic scan above: {config.STRATEGIC_SCAN_BOARD_LIMIT} boards")
    assert config.EXTREME_DEPTH == 6
    print("  ✓ AI config OK")


def test_game_logic():
    """Test game logic components."""
    print("\n=== Testing Game Logic ===")
    from logic.game_state import GameState, Player
    from logic.move_validator import MoveValidator
    from logic.win_checker import WinChecker

    # Test game state
    game = GameState()
    print(f"  Initial player: {game.current_player.value}")
    assert game.current_player == Player.X

    # Test apply move
    result = game.apply_move(4, 0)
    print(f"  Made move on board 4, cell 0 -> next target {result.next_target}")
    assert result.next_target == 0

    # Test validator
    validator = MoveValidator()
    check = validator.validate_move(game, 4, 1)
    print(f"  Validate board 4, cell 1: valid={check.is_valid} ({check.error_message})")
    assert not check.is_valid
    print(f"  Valid targets: {validator.get_valid_targets(game)}")

    # Test win checker
    checker = WinChecker()
    winner = checker.check_winner(game.boards[4].cells, [Player.X, Player.O])
    print(f"  Winner check on board 4: {winner}")
    assert winner is None

    print("  ✓ Game logic OK")


def test_ai_players():
    """Let every tier make one move."""
    print("\n=== Testing AI Players ===")
    from logic.game_state import GameState, Player
    from ai.ai_player import AIPlayer
    from ai.weights import Difficulty

    config = quiet_config()
    for difficulty in Difficulty:
        game = GameState()
        ai = AIPlayer(Player.X, difficulty, seed=7, config=config)
        result = ai.take_turn(game)
        move = result.move
        print(f"  {difficulty.name}: board {move.board_index}, cell {move.cell_index} "
              f"({ai.nodes_evaluated} positions)")
        assert len(game.moves) == 1

    print("  ✓ AI players OK")


def test_session():
    """Play a bot game through the session."""
    print("\n=== Testing Game Session ===")
    from logic.game_state import Player
    from logic.session import GameSession
    from ai.ai_player import AIPlayer
    from ai.weights import Difficulty

    config = quiet_config()
    session = GameSession()
    bots = {
        Player.X: AIPlayer(Player.X, Difficulty.EASY, seed=1, config=config),
        Player.O: AIPlayer(Player.O, Difficulty.EASY, seed=2, config=config),
    }
    while not session.state.is_game_over:
        session.play_ai_turn(bots[session.state.current_player])

    print(f"  Moves played: {len(session.state.moves)}")
    print(f"  Score: {session.score}")
    assert session.games_played == 1
    print("  ✓ Game session OK")


def run_all_tests():
    """Run all tests."""
    print("=" * 60)
    print("   Ultimate TicTacToe - Module Tests")
    print("=" * 60)

    checks = {
        "AI Config": test_ai_config,
        "Game Logic": test_game_logic,
        "AI Players": test_ai_players,
        "Game Session": test_session,
    }

    results = {}
    for name, check in checks.items():
        try:
            check()
            results[name] = True
        except Exception as e:
            print(f"  ✗ {name} FAILED: {e}")
            import traceback
            traceback.print_exc()
            results[name] = False

    print("\n" + "=" * 60)
    print("   Test Results")
    print("=" * 60)

    all_passed = True
    for name, passed in results.items():
        status = "✓ PASS" if passed else "✗ FAIL"
        print(f"  {name}: {status}")
        if not passed:
            all_passed = False

    print("=" * 60)

    if all_passed:
        print("\n🎉 All tests passed! Ready to play Ultimate TicTacToe.\n")
        return 0
    else:
        print("\n⚠ Some tests failed. Check the errors above.\n")
        return 1


if __name__ == "__main__":
    sys.exit(run_all_tests())
