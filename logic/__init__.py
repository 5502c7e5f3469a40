"""
Logic module for Ultimate TicTacToe.
Handles board state, rules, win detection and the game session.
"""

from .errors import GameError, IllegalMoveError, NoLegalMoveError
from .game_state import GameState, Player, Move, MoveResult, Position, SubBoard, Outcome
from .move_validator import MoveValidator, ValidationResult
from .win_checker import WinChecker
from .session import GameSession
