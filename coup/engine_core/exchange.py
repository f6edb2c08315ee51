"""
Exchange Resolver - Completes the Ambassador/Inquisitor card swap.
"""

from __future__ import annotations
import logging
from collections import Counter
from dataclasses import dataclass, replace
from typing import Sequence

from .deck import return_and_reshuffle
from .errors import InconsistentStateError, InvalidSelection, ValidationError
from .reducer import ActionResolver
from .state import (
    ActionOutcome,
    AwaitingExchangeSelection,
    CharacterType,
    GameState,
    GameStatus,
)

logger = logging.getLogger(__name__)


@dataclass
class ExchangeResolver:
    actions: ActionResolver

    def complete_exchange(
        self,
        state: GameState,
        player_id: str,
        selected: Sequence[CharacterType],
    ) -> GameState:
        """
        Keep the selected characters and return the rest to the deck.

        Selected characters fill the player's unrevealed slots in order.
        """
        player = state.require_player(player_id)
        if state.status is not GameStatus.IN_PROGRESS:
            raise ValidationError("Game is not in progress")

        pending = state.pending
        if not isinstance(pending, AwaitingExchangeSelection) or pending.player_id != player_id:
            raise InconsistentStateError(f"No exchange pending for {player_id}")

        selected = tuple(selected)
        if len(selected) != player.influence:
            raise InvalidSelection(
                f"Must keep exactly {player.influence} card(s), got {len(selected)}"
            )

        leftover = Counter(pending.candidates)
        leftover.subtract(Counter(selected))
        if any(count < 0 for count in leftover.values()):
            raise InvalidSelection("Selected cards were not offered in the exchange")

        kept = iter(selected)
        new_hand = tuple(
            card if card.revealed else replace(card, character=next(kept))
            for card in player.hand
        )
        returned = list(leftover.elements())
        deck = return_and_reshuffle(state.deck, returned, self.actions.rng)
        logger.debug("%s kept %d card(s), returned %d", player_id, len(selected), len(returned))

        state = state.with_player(replace(player, hand=new_hand))._copy_with(
            deck=deck, pending=None
        )
        log = state.last_action.updated(final_result=ActionOutcome.SUCCESS)
        return self.actions.finish_turn(state, log)
