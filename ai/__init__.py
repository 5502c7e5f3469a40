"""
AI module for Ultimate TicTacToe.
Four bot tiers, their evaluation, search and decision log.
"""

from .config import AIConfig
from .weights import Difficulty, BotWeights, WEIGHTS
from .decision_log import ActionKind, DecisionLog, DecisionLogEntry
from .search import SearchEngine, SearchResult
from .strategies import (
    Strategy, RuleBasedStrategy, HybridStrategy, DeepSearchStrategy, ExtremeStrategy,
    make_strategy, select_move,
)
from .ai_player import AIPlayer, TurnPhase
