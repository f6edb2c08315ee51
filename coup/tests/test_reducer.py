"""
Tests for action declaration and effects.
"""

import random
from dataclasses import replace

import pytest

from ..engine_core.action import ActionType
from ..engine_core.errors import InconsistentStateError, InvariantViolation, ValidationError
from ..engine_core.reducer import ActionResolver, advance_turn
from ..engine_core.state import (
    ActionOutcome,
    Allegiance,
    AwaitingChallenge,
    AwaitingExchangeSelection,
    GameStatus,
)
from .conftest import A, AM, C, CO, D, build_state


@pytest.fixture
def resolver():
    return ActionResolver(rng=random.Random(5))


class TestImmediateActions:
    """Actions nobody can answer."""

    def test_income(self, resolver, duel_state):
        state = resolver.apply_action(duel_state, "alice", ActionType.INCOME)

        assert state.get_player("alice").coins == 3
        assert state.treasury == 49
        assert state.current_player.player_id == "bob"
        assert state.turn_number == 1
        assert state.pending is None
        assert state.last_action.final_result is ActionOutcome.SUCCESS

    def test_input_state_not_modified(self, resolver, duel_state):
        resolver.apply_action(duel_state, "alice", ActionType.INCOME)

        assert duel_state.get_player("alice").coins == 2
        assert duel_state.current_player_index == 0
        assert duel_state.last_action is None

    def test_untargeted_action_drops_target(self, resolver, duel_state):
        state = resolver.apply_action(duel_state, "alice", ActionType.INCOME, "bob")
        assert state.last_action.target_id is None

    def test_coup_ends_duel(self, resolver):
        state = build_state(
            {"alice": (D, A), "bob": (C, CO)},
            coins={"alice": 7},
            revealed={"bob": (0,)},
        )

        state = resolver.apply_action(state, "alice", ActionType.COUP, "bob")

        bob = state.get_player("bob")
        assert bob.eliminated
        assert all(card.revealed for card in bob.hand)
        assert len(bob.hand) == 2
        assert state.get_player("alice").coins == 0
        assert state.status is GameStatus.COMPLETED
        assert state.winner_id == "alice"

    def test_coup_reveals_first_unrevealed(self, resolver):
        state = build_state({"alice": (D, A), "bob": (C, CO)}, coins={"alice": 8})

        state = resolver.apply_action(state, "alice", ActionType.COUP, "bob")

        bob = state.get_player("bob")
        assert bob.hand[0].revealed
        assert not bob.hand[1].revealed
        assert state.status is GameStatus.IN_PROGRESS
        assert state.get_player("alice").coins == 1

    def test_turn_skips_eliminated_players(self, resolver):
        state = build_state(
            {"alice": (D, A), "bob": (C, CO), "carol": (AM, D)},
            revealed={"bob": (0, 1)},
        )

        state = resolver.apply_action(state, "alice", ActionType.INCOME)

        assert state.current_player.player_id == "carol"

    def test_convert_switches_target_team(self, resolver, reformation_settings):
        state = build_state(
            {"alice": (D, A), "bob": (C, CO), "carol": (AM, D)},
            allegiances={
                "alice": Allegiance.LOYALIST,
                "bob": Allegiance.REFORMIST,
                "carol": Allegiance.REFORMIST,
            },
            settings=reformation_settings,
        )

        state = resolver.apply_action(state, "alice", ActionType.CONVERT, "carol")

        assert state.get_player("carol").allegiance is Allegiance.LOYALIST
        assert state.get_player("alice").coins == 1
        assert state.status is GameStatus.IN_PROGRESS

    def test_rejected_action_raises(self, resolver, duel_state):
        with pytest.raises(ValidationError, match="Not enough coins"):
            resolver.apply_action(duel_state, "alice", ActionType.ASSASSINATE, "bob")


class TestDeclaredActions:
    """Actions that open a response window."""

    def test_tax_waits_for_window(self, resolver, duel_state):
        state = resolver.apply_action(duel_state, "alice", ActionType.TAX)

        assert state.pending == AwaitingChallenge(
            actor_id="alice",
            action=ActionType.TAX,
            challengeable=True,
            blockable=False,
        )
        assert state.get_player("alice").coins == 2
        assert state.current_player.player_id == "alice"

    def test_tax_resolves_when_unanswered(self, resolver, duel_state):
        state = resolver.apply_action(duel_state, "alice", ActionType.TAX)
        state = resolver.resolve_unchallenged_action(state, "alice", ActionType.TAX)

        assert state.get_player("alice").coins == 5
        assert state.treasury == 47
        assert state.pending is None
        assert state.current_player.player_id == "bob"

    def test_foreign_aid_is_blockable_not_challengeable(self, resolver, duel_state):
        state = resolver.apply_action(duel_state, "alice", ActionType.FOREIGN_AID)

        assert not state.pending.challengeable
        assert state.pending.blockable

        state = resolver.resolve_unchallenged_action(state, "alice", ActionType.FOREIGN_AID)
        assert state.get_player("alice").coins == 4

    def test_assassinate_pays_up_front(self, resolver):
        state = build_state({"alice": (D, A), "bob": (C, CO)}, coins={"alice": 3})

        state = resolver.apply_action(state, "alice", ActionType.ASSASSINATE, "bob")

        assert state.get_player("alice").coins == 0
        assert state.pending.paid == 3
        assert state.pending.target_id == "bob"
        assert state.get_player("bob").influence == 2

        state = resolver.resolve_unchallenged_action(state, "alice", ActionType.ASSASSINATE)
        assert state.get_player("bob").influence == 1

    def test_steal_takes_at_most_two(self, resolver):
        state = build_state(
            {"alice": (D, A), "bob": (C, CO)},
            coins={"bob": 1},
        )

        state = resolver.apply_action(state, "alice", ActionType.STEAL, "bob")
        state = resolver.resolve_unchallenged_action(state, "alice", ActionType.STEAL)

        assert state.get_player("alice").coins == 3
        assert state.get_player("bob").coins == 0

    def test_treasury_floors_at_zero(self, resolver, duel_state):
        state = replace(duel_state, treasury=1)
        state = resolver.apply_action(state, "alice", ActionType.TAX)
        state = resolver.resolve_unchallenged_action(state, "alice", ActionType.TAX)

        assert state.treasury == 0
        assert state.get_player("alice").coins == 5

    def test_exchange_opens_selection(self, resolver, duel_state):
        state = resolver.apply_action(duel_state, "alice", ActionType.EXCHANGE)
        state = resolver.resolve_unchallenged_action(state, "alice", ActionType.EXCHANGE)

        pending = state.pending
        assert isinstance(pending, AwaitingExchangeSelection)
        assert pending.player_id == "alice"
        assert len(pending.drawn) == 2
        assert pending.candidates[2:] == (D, A)
        assert len(state.deck) == len(duel_state.deck) - 2
        assert state.card_count == 15
        assert state.current_player.player_id == "alice"

    def test_resolve_without_window(self, resolver, duel_state):
        with pytest.raises(InconsistentStateError):
            resolver.resolve_unchallenged_action(duel_state, "alice", ActionType.TAX)

    def test_resolve_wrong_action(self, resolver, duel_state):
        state = resolver.apply_action(duel_state, "alice", ActionType.TAX)
        with pytest.raises(InconsistentStateError):
            resolver.resolve_unchallenged_action(state, "alice", ActionType.STEAL)


class TestAdvanceTurn:
    """Tests for turn passing."""

    def test_wraps_around(self, duel_state):
        state = advance_turn(replace(duel_state, current_player_index=1))
        assert state.current_player_index == 0

    def test_no_eligible_player(self):
        state = build_state(
            {"alice": (D, A), "bob": (C, CO)},
            revealed={"alice": (0, 1), "bob": (0, 1)},
        )
        with pytest.raises(InvariantViolation):
            advance_turn(state)
