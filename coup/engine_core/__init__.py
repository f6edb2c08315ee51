"""
Engine Core - Deterministic Coup rule engine.

The engine is a pure function library that:
1. Builds and deals the deck
2. Validates declared actions
3. Opens response windows for challenges and blocks
4. Applies action effects once a window closes
5. Detects the end of the match
"""

from .state import (
    GameState,
    GameSettings,
    GameStatus,
    Expansions,
    Player,
    PlayerSeat,
    Card,
    CharacterType,
    Allegiance,
    AwaitingChallenge,
    AwaitingBlock,
    AwaitingExchangeSelection,
    ActionLog,
    ActionOutcome,
    ChallengeOutcome,
)
from .action import ActionType, Command, CommandType, CommandPayload, ActionResult
from .catalog import ACTION_RULES, ActionRule
from .errors import (
    GameError,
    ValidationError,
    NotFoundError,
    InconsistentStateError,
    InvalidSelection,
    InvariantViolation,
)
from .validator import ValidationResult, can_perform_action
from .game_over import GameOverResult, is_game_over
from .action_generator import available_actions, legal_commands
from .engine import GameEngine

__all__ = [
    "GameState",
    "GameSettings",
    "GameStatus",
    "Expansions",
    "Player",
    "PlayerSeat",
    "Card",
    "CharacterType",
    "Allegiance",
    "AwaitingChallenge",
    "AwaitingBlock",
    "AwaitingExchangeSelection",
    "ActionLog",
    "ActionOutcome",
    "ChallengeOutcome",
    "ActionType",
    "Command",
    "CommandType",
    "CommandPayload",
    "ActionResult",
    "ACTION_RULES",
    "ActionRule",
    "GameError",
    "ValidationError",
    "NotFoundError",
    "InconsistentStateError",
    "InvalidSelection",
    "InvariantViolation",
    "ValidationResult",
    "can_perform_action",
    "GameOverResult",
    "is_game_over",
    "available_actions",
    "legal_commands",
    "GameEngine",
]
