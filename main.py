"""
Console driver for Ultimate TicTacToe.

This script ties together:
- Logic (game state, move validation, session and score)
- AI (bot tiers)

Run this script to play Ultimate TicTacToe against a bot, or to watch two
bots play each other.
"""

from typing import Optional

from logic.errors import IllegalMoveError
from logic.game_state import Player
from logic.session import GameSession, BOARD_WON, BOARD_DRAWN
from ai.ai_player import AIPlayer
from ai.config import AIConfig
from ai.decision_log import DecisionLog
from ai.weights import Difficulty


class ConsoleGame:
    """
    Turn driver for the console.

    Game flow:
    1. Print the board and the boards that may be played
    2. Human types "board cell" (or a bot picks a move)
    3. Move is applied through the session
    4. Repeat until someone wins or it's a draw
    """

    def __init__(
        self,
        players: dict,
        config: Optional[AIConfig] = None
    ):
        """
        Args:
            players: Player -> AIPlayer, or None for a human.
            config: AI settings (shared by the bots).
        """
        self.players = players
        self.config = config or AIConfig()
        self.session = GameSession()
        self.is_running = False

        self.session.on(BOARD_WON, self._on_board_won)
        self.session.on(BOARD_DRAWN, self._on_board_drawn)

        print("\n" + "=" * 60)
        print("   Ultimate TicTacToe - Ready!")
        for player in Player:
            bot = players.get(player)
            who = f"Bot ({bot.difficulty.name})" if bot else "Human"
            print(f"   {player.value} plays: {who}")
        print("=" * 60 + "\n")

    def _on_board_won(self, result):
        print(f">>> {result.move.player.value} wins board {result.move.board_index}!")

    def _on_board_drawn(self, result):
        print(f">>> Board {result.move.board_index} is a draw.")

    def play(self) -> Optional[Player]:
        """Play one game. Returns the winner (None for a draw or quit)."""
        self.session.reset()
        self.is_running = True
        state = self.session.state

        while self.is_running and not state.is_game_over:
            state.print_board()
            bot = self.players.get(state.current_player)

            if bot is not None:
                print(f"\n>>> {state.current_player.value} is thinking...")
                result = self.session.play_ai_turn(bot)
                move = result.move
                print(f">>> {move.player.value} plays board {move.board_index}, cell {move.cell_index}")
            else:
                self._human_turn()

        if self.is_running:
            self._show_game_result()
        return state.winner

    def _human_turn(self):
        """Ask for "board cell" until a legal move is given."""
        state = self.session.state
        targets = self.session.get_valid_targets()

        while True:
            print(f"Valid boards: {targets}")
            try:
                text = input(f"{state.current_player.value} move (board cell, q to quit): ").strip()
            except EOFError:
                text = "q"

            if text.lower() in ("q", "quit"):
                print("\nGame quit by user.")
                self.is_running = False
                return

            parts = text.replace(",", " ").split()
            if len(parts) != 2 or not all(p.isdigit() for p in parts):
                print("Please type two numbers 0-8, e.g. '4 0'")
                continue

            board_index, cell_index = int(parts[0]), int(parts[1])
            try:
                self.session.apply_move(board_index, cell_index)
                return
            except IllegalMoveError as e:
                print(f"Illegal move: {e}")

    def _show_game_result(self):
        """Show the final game result and the session score."""
        state = self.session.state
        print("\n" + "=" * 60)
        print("   GAME OVER!")
        print("=" * 60)

        state.print_board()

        if state.winner:
            print(f"\n{state.winner.value} wins on the meta-board line {state.win_line}!")
        else:
            print("\nIt's a draw! Good game!")

        score = self.session.score
        print(f"\nScore  X: {score['X']}  O: {score['O']}  Draws: {score['draw']}")
        print("=" * 60)


def main():
    """Main entry point."""
    import argparse

    parser = argparse.ArgumentParser(description="Ultimate TicTacToe")
    parser.add_argument(
        "--difficulty",
        default="hard",
        help="Bot difficulty: easy, medium, hard, extreme (or 1-4)"
    )
    parser.add_argument(
        "--bot-first",
        action="store_true",
        help="Let the bot play first (as X)"
    )
    parser.add_argument(
        "--self-play",
        nargs=2,
        metavar=("DIFF_X", "DIFF_O"),
        help="Watch two bots play each other"
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=None,
        help="Seed for the bots' random choices"
    )
    parser.add_argument(
        "--quiet",
        action="store_true",
        help="Hide AI diagnostics"
    )

    args = parser.parse_args()

    config = AIConfig()
    if args.quiet:
        config.DEBUG_MODE = False
    decision_log = DecisionLog()

    def make_bot(player: Player, difficulty: str, seed: Optional[int]) -> AIPlayer:
        return AIPlayer(
            player,
            Difficulty.from_name(difficulty),
            seed=seed,
            decision_sink=decision_log,
            config=config
        )

    # Determine players
    if args.self_play:
        diff_x, diff_o = args.self_play
        o_seed = None if args.seed is None else args.seed + 1
        players = {
            Player.X: make_bot(Player.X, diff_x, args.seed),
            Player.O: make_bot(Player.O, diff_o, o_seed),
        }
    elif args.bot_first:
        players = {Player.X: make_bot(Player.X, args.difficulty, args.seed), Player.O: None}
    else:
        players = {Player.X: None, Player.O: make_bot(Player.O, args.difficulty, args.seed)}

    game = ConsoleGame(players, config)

    try:
        game.play()
    except KeyboardInterrupt:
        print("\n\nGame interrupted by user.")
    finally:
        if len(decision_log) and not args.quiet:
            print(f"\nExtreme bot decisions: {len(decision_log)}")
            for entry in decision_log.entries:
                print(f"  #{entry.move_number} {entry.action.value}: {entry.reason} (score {entry.score})")
        print("Goodbye!")


if __name__ == "__main__":
    main()
