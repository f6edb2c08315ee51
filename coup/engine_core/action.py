"""
Action System - Action kinds, player commands, and results.

Two layers:
1. ActionType - the closed set of turn actions a player can declare
2. Command - any player input the engine accepts (declare, challenge,
   block, pass on a window, finish an exchange), used by dispatch()

All state changes flow through the GameEngine.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class ActionType(Enum):
    """Turn actions, base game and expansions."""
    INCOME = "income"
    FOREIGN_AID = "foreign_aid"
    COUP = "coup"
    TAX = "tax"  # Duke
    ASSASSINATE = "assassinate"  # Assassin
    STEAL = "steal"  # Captain
    EXCHANGE = "exchange"  # Ambassador

    # Expansion actions
    QUESTION = "question"  # Inquisitor
    INTERROGATE = "interrogate"  # Inquisitor
    CONVERT = "convert"  # Reformation

    def __str__(self) -> str:
        return self.value


class CommandType(Enum):
    """Player inputs accepted by GameEngine.dispatch()."""
    DECLARE = "declare"
    CHALLENGE = "challenge"
    BLOCK = "block"
    RESOLVE_BLOCK = "resolve_block"
    RESOLVE_ACTION = "resolve_action"
    COMPLETE_EXCHANGE = "complete_exchange"


@dataclass(frozen=True)
class CommandPayload:
    """
    Parameters for a command.

    Different command types read different fields; the engine
    validates them when the command is dispatched.
    """
    player_id: str
    action: ActionType | None = None
    target_player_id: str | None = None

    # Challenge: whose claim is being doubted
    accused_player_id: str | None = None

    # Block: which character the blocker claims
    claimed_card: Any | None = None  # CharacterType

    # Exchange: characters kept, in hand-slot order
    selected_cards: tuple[Any, ...] = ()


@dataclass(frozen=True)
class Command:
    """A complete player input to be applied to a game state."""
    command_type: CommandType
    payload: CommandPayload

    @classmethod
    def declare(
        cls, player_id: str, action: ActionType, target_id: str | None = None
    ) -> Command:
        """Factory for declaring a turn action."""
        return cls(
            command_type=CommandType.DECLARE,
            payload=CommandPayload(
                player_id=player_id, action=action, target_player_id=target_id
            ),
        )

    @classmethod
    def challenge(
        cls, challenger_id: str, accused_id: str, action: ActionType
    ) -> Command:
        """Factory for challenging an action or block claim."""
        return cls(
            command_type=CommandType.CHALLENGE,
            payload=CommandPayload(
                player_id=challenger_id,
                action=action,
                accused_player_id=accused_id,
            ),
        )

    @classmethod
    def block(cls, blocker_id: str, action: ActionType, claimed_card: Any) -> Command:
        """Factory for a counter-claim."""
        return cls(
            command_type=CommandType.BLOCK,
            payload=CommandPayload(
                player_id=blocker_id, action=action, claimed_card=claimed_card
            ),
        )

    @classmethod
    def resolve_block(cls, blocker_id: str, action: ActionType) -> Command:
        """Factory for closing an unchallenged block window."""
        return cls(
            command_type=CommandType.RESOLVE_BLOCK,
            payload=CommandPayload(player_id=blocker_id, action=action),
        )

    @classmethod
    def resolve_action(cls, actor_id: str, action: ActionType) -> Command:
        """Factory for closing an unanswered action window."""
        return cls(
            command_type=CommandType.RESOLVE_ACTION,
            payload=CommandPayload(player_id=actor_id, action=action),
        )

    @classmethod
    def complete_exchange(cls, player_id: str, selected: list[Any]) -> Command:
        """Factory for finishing an exchange."""
        return cls(
            command_type=CommandType.COMPLETE_EXCHANGE,
            payload=CommandPayload(player_id=player_id, selected_cards=tuple(selected)),
        )


@dataclass
class ActionResult:
    """
    Result of dispatching a command.

    Contains:
    - Whether the command succeeded
    - New state (if succeeded)
    - Error message and code (if failed)
    """
    success: bool
    new_state: Any | None = None  # GameState
    error: str | None = None
    error_code: str | None = None

    # Human-readable summary of what changed
    state_changes: list[str] = field(default_factory=list)

    @classmethod
    def failure(cls, error: str, error_code: str | None = None) -> ActionResult:
        """Create a failure result."""
        return cls(success=False, error=error, error_code=error_code)

    @classmethod
    def success_with_state(
        cls,
        state: Any,
        changes: list[str] | None = None,
    ) -> ActionResult:
        """Create a success result with new state."""
        return cls(
            success=True,
            new_state=state,
            state_changes=changes or [],
        )
