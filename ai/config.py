"""
AI configuration for Ultimate TicTacToe.
All the settings for the bots, the search and the strategic bonuses.
"""


class AIConfig:
    """
    Configuration class for AI settings.
    Subclass and override values to tune a bot.
    """

    # ==================== TIER 1 (EASY) ====================
    # Chance of a purely positional random move
    RANDOM_MOVE_CHANCE = 0.2
    # Jitter added to positional scores (uniform in [-JITTER, JITTER])
    POSITIONAL_JITTER = 1.0

    # ==================== TIER 2 (MEDIUM) ====================
    # Chance of using the rule-based logic instead of search
    RULE_BASED_CHANCE = 0.5
    HYBRID_DEPTH = 2
    # Sampling caps while searching
    SAMPLE_BOARD_LIMIT = 2
    SAMPLE_CELL_LIMIT = 3

    # ==================== TIER 3 (HARD) ====================
    DEEP_DEPTH_SINGLE_BOARD = 4
    DEEP_DEPTH_MULTI_BOARD = 3
    # Safety budget in seconds (None = unbounded)
    DEEP_TIME_BUDGET = 5.0

    # ==================== TIER 4 (EXTREME) ====================
    EXTREME_DEPTH = 6
    EXTREME_TIME_BUDGET = 2.5
    # More valid boards than this -> strategic scan instead of search
    STRATEGIC_SCAN_BOARD_LIMIT = 3
    # Complexity cap: clamp depth when branching is wide
    COMPLEXITY_BRANCH_LIMIT = 2
    COMPLEXITY_DEPTH_LIMIT = 3

    # Strategic bonuses
    BAD_BOARD_BONUS = 20
    META_SETUP_BONUS = 25
    BOARD_QUALITY_LEAF_FACTOR = 0.5

    # Board quality of the destination board (from the bot's side)
    QUALITY_DECIDED = -30
    QUALITY_ONE_EMPTY = 15
    QUALITY_TWO_EMPTY = 10
    QUALITY_OWN_THREAT = 20
    QUALITY_OPPONENT_THREAT = -20

    # Meta-board position bonuses
    STRATEGIC_BOARD_BONUS = {"center": 8, "corner": 5, "edge": 2}
    STRATEGIC_CELL_SETUP = 12
    STRATEGIC_CELL_TWO_OWNED = 25
    STRATEGIC_CELL_BLOCK = 22

    # Decision log scores (0-10 scale)
    WIN_LOG_SCORE = 10.0
    BLOCK_LOG_SCORE = 9.8
    MAX_LOG_SCORE = 9.5
    SEARCH_SCORE_SCALE = 150
    SCAN_SCORE_SCALE = 100

    # ==================== SEARCH ====================
    # Terminal score base: a sub-board win scores WIN_SCORE + remaining depth
    WIN_SCORE = 100

    # ==================== DEBUG SETTINGS ====================
    DEBUG_MODE = True
