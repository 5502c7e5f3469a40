"""
Ultimate TicTacToe
==================
Rules engine and bots for Ultimate TicTacToe: nine 3x3 boards arranged in
a 3x3 meta-board. The cell you play decides which board your opponent
must play next. Win three boards in a row to win the game.

Bots come in four tiers: Easy -> Medium -> Hard -> Extreme
"""

__version__ = "1.0.0"
