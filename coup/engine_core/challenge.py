"""
Challenge Resolver - Settles a bluff accusation.

A challenge targets whichever claim is open:
- an action claim (AwaitingChallenge): the accused is the actor
- a block claim (AwaitingBlock): the accused is the blocker, and the
  claim is the blocking card

If the accused really holds the character, the challenger loses an
influence and the accused swaps the shown card for a fresh one.
Otherwise the accused loses an influence and the claim collapses.
"""

from __future__ import annotations
import logging
from dataclasses import dataclass, replace
from typing import Iterable

from .action import ActionType
from .catalog import claimed_characters
from .deck import draw, return_and_reshuffle
from .errors import InconsistentStateError, ValidationError
from .game_over import conclude_if_over
from .reducer import ActionResolver
from .state import (
    ActionOutcome,
    AwaitingBlock,
    AwaitingChallenge,
    AwaitingExchangeSelection,
    CharacterType,
    ChallengeOutcome,
    GameState,
    GameStatus,
)

logger = logging.getLogger(__name__)


@dataclass
class ChallengeResolver:
    actions: ActionResolver

    def challenge(
        self,
        state: GameState,
        challenger_id: str,
        accused_id: str,
        action: ActionType,
    ) -> GameState:
        """Resolve a challenge against the open claim."""
        challenger = state.require_player(challenger_id)
        state.require_player(accused_id)

        if state.status is not GameStatus.IN_PROGRESS:
            raise ValidationError("Game is not in progress")
        if challenger.eliminated:
            raise ValidationError("Eliminated players cannot challenge")
        if challenger_id == accused_id:
            raise ValidationError("Cannot challenge your own claim")

        pending = state.pending
        if pending is None:
            raise ValidationError("There is no claim to challenge")
        if state.last_action is None:
            raise InconsistentStateError("Open claim has no log entry")

        if isinstance(pending, AwaitingChallenge):
            if pending.actor_id != accused_id or pending.action is not action:
                raise ValidationError(f"{accused_id} has no open {action.value} claim")
            if not pending.challengeable:
                raise ValidationError(f"{action.value} cannot be challenged now")
            return self._challenge_action(state, pending, challenger_id)

        if isinstance(pending, AwaitingBlock):
            if pending.blocker_id != accused_id or pending.action is not action:
                raise ValidationError(f"{accused_id} has no open block on {action.value}")
            return self._challenge_block(state, pending, challenger_id)

        if isinstance(pending, AwaitingExchangeSelection):
            raise ValidationError("Exchange already resolved; nothing to challenge")

        raise InconsistentStateError(f"Unknown pending interaction: {pending!r}")

    def _challenge_action(
        self, state: GameState, pending: AwaitingChallenge, challenger_id: str
    ) -> GameState:
        claims = claimed_characters(pending.action, state.settings)
        state, held = self._settle(state, challenger_id, pending.actor_id, claims)
        log = state.last_action.updated(
            result=ActionOutcome.CHALLENGED,
            challenger_id=challenger_id,
        )

        if held:
            log = log.updated(challenge_result=ChallengeOutcome.FAILED)
            state = conclude_if_over(state._copy_with(last_action=log))
            if state.status is GameStatus.COMPLETED:
                return state
            if pending.blockable and self._block_possible(state, pending):
                # The claim stands but the block window is still open
                return state._copy_with(pending=replace(pending, challengeable=False))
            return self.actions.resolve_effects(state._copy_with(pending=None), log)

        actor = state.require_player(pending.actor_id)
        if pending.paid:
            state = state.with_player(actor.with_coins(pending.paid))
        log = log.updated(
            challenge_result=ChallengeOutcome.SUCCEEDED,
            final_result=ActionOutcome.FAILED,
        )
        return self.actions.finish_turn(state, log)

    def _challenge_block(
        self, state: GameState, pending: AwaitingBlock, challenger_id: str
    ) -> GameState:
        state, held = self._settle(
            state, challenger_id, pending.blocker_id, (pending.claimed_card,)
        )
        log = state.last_action.updated(challenger_id=challenger_id)

        if held:
            log = log.updated(
                challenge_result=ChallengeOutcome.FAILED,
                final_result=ActionOutcome.BLOCKED,
            )
            return self.actions.finish_turn(state, log)

        # Block was a bluff: the original action goes through
        log = log.updated(
            result=ActionOutcome.CHALLENGED,
            challenge_result=ChallengeOutcome.SUCCEEDED,
        )
        state = conclude_if_over(state._copy_with(pending=None, last_action=log))
        if state.status is GameStatus.COMPLETED:
            return state
        return self.actions.resolve_effects(state, log)

    def _settle(
        self,
        state: GameState,
        challenger_id: str,
        accused_id: str,
        claims: Iterable[CharacterType],
    ) -> tuple[GameState, bool]:
        """
        Reveal the loser's card and swap the proven card if any.

        Returns (new state, whether the accused held the claim).
        """
        accused = state.require_player(accused_id)
        slot = accused.find_unrevealed(claims)

        if slot is None:
            logger.debug("Challenge by %s succeeded against %s", challenger_id, accused_id)
            return state.with_player(accused.lose_influence()), False

        logger.debug("Challenge by %s failed against %s", challenger_id, accused_id)
        state = state.with_player(state.require_player(challenger_id).lose_influence())

        shown = accused.hand[slot].character
        deck = return_and_reshuffle(state.deck, (shown,), self.actions.rng)
        (replacement,), deck = draw(deck, 1)
        accused = state.require_player(accused_id).with_card(slot, replacement)
        return state.with_player(accused)._copy_with(deck=deck), True

    @staticmethod
    def _block_possible(state: GameState, pending: AwaitingChallenge) -> bool:
        if pending.target_id is not None:
            target = state.get_player(pending.target_id)
            return target is not None and not target.eliminated
        return any(
            p.player_id != pending.actor_id for p in state.active_players
        )
