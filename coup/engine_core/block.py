"""
Block Resolver - Counter-claims that suspend an action.

A block turns the open action window into an AwaitingBlock window.
The block can be challenged (see ChallengeResolver); if nobody does,
the caller closes it with resolve_unchallenged_block() and the
original action never takes effect.
"""

from __future__ import annotations
import logging
from dataclasses import dataclass

from .action import ActionType
from .catalog import blocking_cards
from .errors import InconsistentStateError, ValidationError
from .reducer import ActionResolver
from .state import (
    ActionOutcome,
    AwaitingBlock,
    AwaitingChallenge,
    CharacterType,
    GameState,
    GameStatus,
)

logger = logging.getLogger(__name__)


@dataclass
class BlockResolver:
    actions: ActionResolver

    def counter_block(
        self,
        state: GameState,
        blocker_id: str,
        action: ActionType,
        claimed_card: CharacterType,
    ) -> GameState:
        """Open a block on the pending action, claiming a character."""
        blocker = state.require_player(blocker_id)

        if state.status is not GameStatus.IN_PROGRESS:
            raise ValidationError("Game is not in progress")
        if blocker.eliminated:
            raise ValidationError("Eliminated players cannot block")

        pending = state.pending
        if not isinstance(pending, AwaitingChallenge) or pending.action is not action:
            raise ValidationError(f"No pending {action.value} to block")
        if not pending.blockable:
            raise ValidationError(f"{action.value} cannot be blocked")
        if blocker_id == pending.actor_id:
            raise ValidationError("Cannot block your own action")
        if pending.target_id is not None and blocker_id != pending.target_id:
            raise ValidationError(f"Only the target can block {action.value}")

        allowed = blocking_cards(action, state.settings)
        if claimed_card not in allowed:
            raise ValidationError(
                f"{claimed_card.value} cannot block {action.value}"
            )

        logger.debug("%s blocks %s claiming %s", blocker_id, action.value, claimed_card.value)
        log = state.last_action.updated(
            result=ActionOutcome.BLOCKED,
            blocker_id=blocker_id,
            blocking_card=claimed_card,
        )
        return state._copy_with(
            pending=AwaitingBlock(
                blocker_id=blocker_id,
                claimed_card=claimed_card,
                action=action,
                actor_id=pending.actor_id,
                target_id=pending.target_id,
            ),
            last_action=log,
        )

    def resolve_unchallenged_block(
        self,
        state: GameState,
        blocker_id: str,
        action: ActionType,
    ) -> GameState:
        """Finalize a block nobody challenged; the action is cancelled."""
        if state.status is not GameStatus.IN_PROGRESS:
            raise ValidationError("Game is not in progress")

        pending = state.pending
        if not (
            isinstance(pending, AwaitingBlock)
            and pending.blocker_id == blocker_id
            and pending.action is action
        ):
            raise InconsistentStateError(
                f"No pending block by {blocker_id} on {action.value}"
            )

        log = state.last_action.updated(
            result=ActionOutcome.BLOCKED,
            final_result=ActionOutcome.BLOCKED,
        )
        return self.actions.finish_turn(state, log)
