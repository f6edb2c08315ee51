"""
Tests for blocks and unchallenged block resolution.
"""

import pytest

from ..engine_core.action import ActionType
from ..engine_core.errors import InconsistentStateError, ValidationError
from ..engine_core.state import ActionOutcome, AwaitingBlock
from .conftest import A, AM, C, CO, D, I, build_state


class TestCounterBlock:
    """Opening a block window."""

    def test_anyone_may_block_foreign_aid(self, engine, table_state):
        state = engine.apply_action(table_state, "alice", ActionType.FOREIGN_AID)
        state = engine.counter_block(state, "carol", ActionType.FOREIGN_AID, D)

        assert state.pending == AwaitingBlock(
            blocker_id="carol",
            claimed_card=D,
            action=ActionType.FOREIGN_AID,
            actor_id="alice",
        )
        assert state.last_action.result is ActionOutcome.BLOCKED
        assert state.last_action.blocker_id == "carol"
        assert state.last_action.blocking_card is D

    def test_card_name_accepted_as_string(self, engine, duel_state):
        state = engine.apply_action(duel_state, "alice", ActionType.FOREIGN_AID)
        state = engine.counter_block(state, "bob", ActionType.FOREIGN_AID, "duke")
        assert state.pending.claimed_card is D

    def test_unknown_card_name(self, engine, duel_state):
        state = engine.apply_action(duel_state, "alice", ActionType.FOREIGN_AID)
        with pytest.raises(ValidationError, match="Unknown character"):
            engine.counter_block(state, "bob", ActionType.FOREIGN_AID, "jester")

    def test_only_target_blocks_steal(self, engine, table_state):
        state = engine.apply_action(table_state, "alice", ActionType.STEAL, "bob")
        with pytest.raises(ValidationError, match="Only the target"):
            engine.counter_block(state, "carol", ActionType.STEAL, AM)

    def test_wrong_blocking_card(self, engine, duel_state):
        state = engine.apply_action(duel_state, "alice", ActionType.STEAL, "bob")
        with pytest.raises(ValidationError):
            engine.counter_block(state, "bob", ActionType.STEAL, CO)

    def test_inquisitor_blocks_steal_in_expansion(self, engine, inquisitor_settings):
        state = build_state(
            {"alice": (D, A), "bob": (C, I)},
            settings=inquisitor_settings,
        )
        state = engine.apply_action(state, "alice", ActionType.STEAL, "bob")
        state = engine.counter_block(state, "bob", ActionType.STEAL, I)
        assert state.pending.claimed_card is I

    def test_inquisitor_cannot_block_in_base_game(self, engine, duel_state):
        state = engine.apply_action(duel_state, "alice", ActionType.STEAL, "bob")
        with pytest.raises(ValidationError):
            engine.counter_block(state, "bob", ActionType.STEAL, I)

    def test_cannot_block_own_action(self, engine, duel_state):
        state = engine.apply_action(duel_state, "alice", ActionType.FOREIGN_AID)
        with pytest.raises(ValidationError):
            engine.counter_block(state, "alice", ActionType.FOREIGN_AID, D)

    def test_tax_is_not_blockable(self, engine, duel_state):
        state = engine.apply_action(duel_state, "alice", ActionType.TAX)
        with pytest.raises(ValidationError):
            engine.counter_block(state, "bob", ActionType.TAX, D)

    def test_nothing_to_block(self, engine, duel_state):
        with pytest.raises(ValidationError):
            engine.counter_block(duel_state, "bob", ActionType.FOREIGN_AID, D)


class TestResolveUnchallengedBlock:
    """Closing a block nobody challenged."""

    def test_foreign_aid_cancelled(self, engine, table_state):
        state = engine.apply_action(table_state, "alice", ActionType.FOREIGN_AID)
        state = engine.counter_block(state, "carol", ActionType.FOREIGN_AID, D)
        state = engine.resolve_unchallenged_block(state, "carol", ActionType.FOREIGN_AID)

        assert state.get_player("alice").coins == 2
        assert state.treasury == 50
        assert state.pending is None
        assert state.last_action.final_result is ActionOutcome.BLOCKED
        assert state.current_player.player_id == "bob"

    def test_blocked_assassination_keeps_cost(self, engine):
        state = build_state({"alice": (D, A), "bob": (C, CO)}, coins={"alice": 3})
        state = engine.apply_action(state, "alice", ActionType.ASSASSINATE, "bob")
        state = engine.counter_block(state, "bob", ActionType.ASSASSINATE, CO)
        state = engine.resolve_unchallenged_block(state, "bob", ActionType.ASSASSINATE)

        assert state.get_player("alice").coins == 0
        assert state.get_player("bob").influence == 2

    def test_bluffed_block_stands_if_unchallenged(self, engine, duel_state):
        """Bob holds no Duke, but nobody called it."""
        state = engine.apply_action(duel_state, "alice", ActionType.FOREIGN_AID)
        state = engine.counter_block(state, "bob", ActionType.FOREIGN_AID, D)
        state = engine.resolve_unchallenged_block(state, "bob", ActionType.FOREIGN_AID)

        assert state.get_player("alice").coins == 2
        assert state.get_player("bob").influence == 2

    def test_wrong_blocker(self, engine, table_state):
        state = engine.apply_action(table_state, "alice", ActionType.FOREIGN_AID)
        state = engine.counter_block(state, "carol", ActionType.FOREIGN_AID, D)
        with pytest.raises(InconsistentStateError):
            engine.resolve_unchallenged_block(state, "bob", ActionType.FOREIGN_AID)

    def test_no_block_open(self, engine, duel_state):
        state = engine.apply_action(duel_state, "alice", ActionType.FOREIGN_AID)
        with pytest.raises(InconsistentStateError):
            engine.resolve_unchallenged_block(state, "bob", ActionType.FOREIGN_AID)
