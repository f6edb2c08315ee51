"""
Engine Errors - Typed failures raised by the rule engine.

Every expected domain failure is one of these. The input state is
never touched when they are raised (states are immutable), so the
caller can re-prompt the player with the same snapshot.
"""

from __future__ import annotations


class GameError(Exception):
    """Base class for all rule-engine errors."""

    error_code = "GAME_ERROR"

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class ValidationError(GameError):
    """Illegal action, cost, target or timing."""

    error_code = "VALIDATION_ERROR"


class NotFoundError(GameError):
    """Unknown player id."""

    error_code = "NOT_FOUND"


class InconsistentStateError(GameError):
    """Request does not match the pending interaction."""

    error_code = "INCONSISTENT_STATE"


class InvalidSelection(InconsistentStateError):
    """Exchange selection has the wrong size or unknown cards."""

    error_code = "INVALID_SELECTION"


class InvariantViolation(GameError):
    """
    A state the rules should make unreachable.

    Raised after logging; callers must treat it as fatal for the match.
    """

    error_code = "INVARIANT_VIOLATION"
