"""
Action Validator - Legality checks before an action is attempted.

Two layers:
1. can_perform_action(): the player-level rules (cost, mandatory coup,
   targeting), independent of turn order
2. validate_turn(): timing rules on top (match running, no open
   window, player's turn, action enabled in this ruleset)

Neither mutates anything; they return ValidationResult.
"""

from __future__ import annotations
from dataclasses import dataclass

from ..config import MANDATORY_COUP_THRESHOLD
from .action import ActionType
from .catalog import is_enabled, rule_for
from .state import GameState, GameStatus, Player


@dataclass(frozen=True)
class ValidationResult:
    """Outcome of a legality check, with a human-readable reason."""
    allowed: bool
    reason: str | None = None

    @classmethod
    def ok(cls) -> ValidationResult:
        return cls(allowed=True)

    @classmethod
    def reject(cls, reason: str) -> ValidationResult:
        return cls(allowed=False, reason=reason)


def can_perform_action(
    player: Player,
    action: ActionType,
    target: Player | None = None,
) -> ValidationResult:
    """Check whether a player may take an action against an optional target."""
    rule = rule_for(action)

    if player.coins < rule.cost:
        return ValidationResult.reject(
            f"Not enough coins. Needed: {rule.cost}, Have: {player.coins}"
        )

    if player.coins >= MANDATORY_COUP_THRESHOLD and action is not ActionType.COUP:
        return ValidationResult.reject("With 10 or more coins, you must perform a coup")

    if rule.needs_target and target is None:
        return ValidationResult.reject("This action requires a target")

    if target is not None and target.eliminated:
        return ValidationResult.reject("Cannot target an eliminated player")

    if (
        target is not None
        and target.player_id == player.player_id
        and action is not ActionType.EXCHANGE
    ):
        return ValidationResult.reject("Cannot target yourself with this action")

    return ValidationResult.ok()


def validate_turn(
    state: GameState,
    player_id: str,
    action: ActionType,
    target_id: str | None = None,
) -> ValidationResult:
    """
    Full legality check for declaring an action in a state.

    Raises NotFoundError for unknown player or target ids.
    """
    player = state.require_player(player_id)
    target = state.require_player(target_id) if target_id is not None else None

    if state.status is GameStatus.COMPLETED:
        return ValidationResult.reject("Game is over - no actions allowed")
    if state.status is not GameStatus.IN_PROGRESS:
        return ValidationResult.reject("Game has not started")

    if state.pending is not None:
        return ValidationResult.reject("Another action is still being resolved")

    if player.eliminated:
        return ValidationResult.reject("Eliminated players cannot act")

    if state.current_player.player_id != player_id:
        return ValidationResult.reject(f"Not {player_id}'s turn")

    if not is_enabled(action, state.settings):
        return ValidationResult.reject(
            f"{action.value} is not available with the current expansions"
        )

    return can_perform_action(player, action, target)
