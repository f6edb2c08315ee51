"""
Action Resolver - Applies turn actions to game state.

The resolver is the single place where action effects happen.

Design principles:
- Pure function of (state, inputs, rng) -> new state
- Validates before applying, raises typed errors
- Actions that can be challenged or blocked are only declared here;
  their effects wait until the response window closes
- Turn advancement and game-over checks run after every completed action
"""

from __future__ import annotations
import logging
import random
from dataclasses import dataclass, field, replace

from ..config import EXCHANGE_DRAW_COUNT, STEAL_AMOUNT
from .action import ActionType
from .catalog import blocking_cards, claimed_characters, rule_for
from .deck import draw
from .errors import InconsistentStateError, InvariantViolation, ValidationError
from .game_over import conclude_if_over
from .state import (
    ActionLog,
    ActionOutcome,
    AwaitingChallenge,
    AwaitingExchangeSelection,
    GameState,
    GameStatus,
)
from .validator import validate_turn

logger = logging.getLogger(__name__)

# Coins taken from the bank by income-like actions
INCOME_GAIN = {
    ActionType.INCOME: 1,
    ActionType.FOREIGN_AID: 2,
    ActionType.TAX: 3,
}


@dataclass
class ActionResolver:
    """
    Applies declared actions and their effects.

    Holds the random source shared with the challenge and exchange
    resolvers; draws come off an already shuffled deck.
    """
    rng: random.Random = field(default_factory=random.Random)

    def apply_action(
        self,
        state: GameState,
        actor_id: str,
        action: ActionType,
        target_id: str | None = None,
    ) -> GameState:
        """
        Declare an action for the current player.

        Income, Coup and Convert resolve immediately. Anything that can
        be challenged or blocked opens an AwaitingChallenge window.
        """
        verdict = validate_turn(state, actor_id, action, target_id)
        if not verdict.allowed:
            raise ValidationError(verdict.reason or "Action not allowed")

        rule = rule_for(action)
        if not rule.needs_target:
            target_id = None

        actor = state.require_player(actor_id)
        state = state.with_player(actor.with_coins(-rule.cost))
        log = ActionLog(action=action, actor_id=actor_id, target_id=target_id)

        challengeable = bool(claimed_characters(action, state.settings))
        blockable = bool(blocking_cards(action, state.settings))
        if challengeable or blockable:
            logger.debug("%s declared %s (target=%s)", actor_id, action.value, target_id)
            return state._copy_with(
                pending=AwaitingChallenge(
                    actor_id=actor_id,
                    action=action,
                    target_id=target_id,
                    challengeable=challengeable,
                    blockable=blockable,
                    paid=rule.cost,
                ),
                last_action=log,
            )

        return self.resolve_effects(state, log)

    def resolve_unchallenged_action(
        self,
        state: GameState,
        actor_id: str,
        action: ActionType,
    ) -> GameState:
        """Close an action window nobody answered and apply the action."""
        if state.status is not GameStatus.IN_PROGRESS:
            raise ValidationError("Game is not in progress")
        pending = state.pending
        if not (
            isinstance(pending, AwaitingChallenge)
            and pending.actor_id == actor_id
            and pending.action is action
        ):
            raise InconsistentStateError(
                f"No pending {action.value} by {actor_id} to resolve"
            )
        if state.last_action is None:
            raise InconsistentStateError("Pending action has no log entry")
        return self.resolve_effects(state._copy_with(pending=None), state.last_action)

    def resolve_effects(self, state: GameState, log: ActionLog) -> GameState:
        """
        Apply an action's effects and end the turn.

        Exchange stops halfway: it opens a selection and the turn ends
        when the exchange is completed.
        """
        action = log.action
        actor = state.require_player(log.actor_id)
        target = state.get_player(log.target_id) if log.target_id else None

        if log.result is ActionOutcome.PENDING:
            log = log.updated(result=ActionOutcome.SUCCESS)

        if action in INCOME_GAIN:
            gain = INCOME_GAIN[action]
            state = state.with_player(actor.with_coins(gain))
            if state.treasury is not None:
                state = state._copy_with(treasury=max(0, state.treasury - gain))

        elif action is ActionType.STEAL and target is not None:
            amount = min(STEAL_AMOUNT, target.coins)
            state = state.with_player(target.with_coins(-amount))
            state = state.with_player(state.require_player(actor.player_id).with_coins(amount))

        elif action in (ActionType.ASSASSINATE, ActionType.COUP) and target is not None:
            state = state.with_player(target.lose_influence())

        elif action is ActionType.CONVERT and target is not None:
            if actor.allegiance is not None:
                state = state.with_player(replace(target, allegiance=actor.allegiance))

        elif action is ActionType.EXCHANGE:
            return self.open_exchange(state, log)

        # Question and Interrogate carry no coin or card effect

        return self.finish_turn(state, log.updated(final_result=ActionOutcome.SUCCESS))

    def open_exchange(self, state: GameState, log: ActionLog) -> GameState:
        """Draw cards and wait for the actor to pick what to keep."""
        actor = state.require_player(log.actor_id)
        drawn, remaining = draw(state.deck, min(EXCHANGE_DRAW_COUNT, len(state.deck)))
        candidates = drawn + tuple(actor.unrevealed)
        logger.debug("%s exchanging among %d candidates", actor.player_id, len(candidates))
        return state._copy_with(
            deck=remaining,
            pending=AwaitingExchangeSelection(
                player_id=actor.player_id,
                candidates=candidates,
                drawn=drawn,
            ),
            last_action=log,
        )

    def finish_turn(self, state: GameState, log: ActionLog) -> GameState:
        """Record the outcome, check for a winner, and pass the turn."""
        state = state._copy_with(last_action=log, pending=None)
        state = conclude_if_over(state)
        if state.status is GameStatus.COMPLETED:
            logger.info("Game over: winner %s", state.winner_id)
            return state
        return advance_turn(state)


def advance_turn(state: GameState) -> GameState:
    """Move to the next non-eliminated player, cyclically."""
    count = state.num_players
    index = state.current_player_index
    for _ in range(count):
        index = (index + 1) % count
        if not state.players[index].eliminated:
            return state._copy_with(
                current_player_index=index,
                turn_number=state.turn_number + 1,
            )
    logger.error("No eligible next player after index %d", state.current_player_index)
    raise InvariantViolation("No eligible next player")
