"""
Errors raised by the game logic and the AI.
"""


class GameError(Exception):
    """Base class for all game errors."""


class IllegalMoveError(GameError):
    """
    A placement broke a board, target or turn rule.

    The game state is left exactly as it was before the attempt.
    """


class NoLegalMoveError(GameError):
    """
    A bot was asked to move with no valid boards.

    The driver should have noticed the game was already over.
    """


class SearchTimeoutExceeded(GameError):
    """The search ran past its wall-clock budget."""
