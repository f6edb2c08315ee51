"""
Tests for boundary models and the engine service.
"""

import pydantic
import pytest

from ..api.schemas import (
    CommandRequest,
    CreateGameRequest,
    ErrorCode,
    ErrorResponse,
    GameSettingsModel,
    GameStateView,
    PendingKind,
)
from ..api.service import EngineService
from ..engine_core.action import ActionType, CommandType
from ..engine_core.errors import InvalidSelection
from ..engine_core.state import GameStatus
from .conftest import A, C, CO, D, build_state


def create_request(**kwargs):
    players = [
        {"player_id": "alice", "display_name": "Alice"},
        {"player_id": "bob", "display_name": "Bob"},
    ]
    return CreateGameRequest(players=players, **kwargs)


class TestRequestModels:
    """Input validation at the boundary."""

    def test_defaults(self):
        settings = GameSettingsModel().to_settings()
        assert settings.starting_coins == 2
        assert settings.max_players == 6
        assert not settings.expansions.inquisitor

    def test_rejects_negative_coins(self):
        with pytest.raises(pydantic.ValidationError):
            GameSettingsModel(starting_coins=-1)

    def test_rejects_large_table(self):
        with pytest.raises(pydantic.ValidationError):
            GameSettingsModel(max_players=9)

    def test_needs_two_players(self):
        with pytest.raises(pydantic.ValidationError):
            CreateGameRequest(players=[{"player_id": "alice", "display_name": "Alice"}])

    def test_empty_player_id(self):
        with pytest.raises(pydantic.ValidationError):
            CreateGameRequest(players=[
                {"player_id": "", "display_name": "Alice"},
                {"player_id": "bob", "display_name": "Bob"},
            ])

    def test_command_from_json_values(self):
        request = CommandRequest(
            command_type="block",
            player_id="bob",
            action="foreign_aid",
            claimed_card="duke",
        )
        command = request.to_command()

        assert command.command_type is CommandType.BLOCK
        assert command.payload.action is ActionType.FOREIGN_AID
        assert command.payload.claimed_card.value == "duke"

    def test_unknown_action_rejected(self):
        with pytest.raises(pydantic.ValidationError):
            CommandRequest(command_type="declare", player_id="alice", action="embezzle")


class TestStateView:
    """Per-player redaction."""

    def test_own_cards_visible(self, duel_state):
        view = GameStateView.from_state(duel_state, perspective="alice")
        alice, bob = view.players

        assert [c.character.value for c in alice.cards] == ["duke", "assassin"]
        assert all(c.character is None for c in bob.cards)
        assert alice.is_current_turn
        assert ActionType.TAX in view.available_actions

    def test_spectator_sees_no_hidden_cards(self, duel_state):
        view = GameStateView.from_state(duel_state)
        assert all(c.character is None for p in view.players for c in p.cards)
        assert view.available_actions == []

    def test_revealed_cards_visible_to_all(self):
        state = build_state({"alice": (D, A), "bob": (C, CO)}, revealed={"bob": (1,)})
        view = GameStateView.from_state(state, perspective="alice")
        bob = view.players[1]

        assert bob.cards[0].character is None
        assert bob.cards[1].character.value == "contessa"
        assert bob.influence == 1

    def test_exchange_candidates_only_for_exchanger(self, engine, duel_state):
        state = engine.apply_action(duel_state, "alice", ActionType.EXCHANGE)
        state = engine.resolve_unchallenged_action(state, "alice", ActionType.EXCHANGE)

        mine = GameStateView.from_state(state, perspective="alice")
        theirs = GameStateView.from_state(state, perspective="bob")

        assert mine.pending.kind is PendingKind.AWAITING_EXCHANGE_SELECTION
        assert len(mine.pending.candidates) == 4
        assert theirs.pending.candidates is None

    def test_view_serializes(self, engine, duel_state):
        state = engine.apply_action(duel_state, "alice", ActionType.TAX)
        data = GameStateView.from_state(state, perspective="bob").model_dump(mode="json")

        assert data["pending"]["kind"] == "awaiting_challenge"
        assert data["pending"]["challengeable"] is True
        assert data["last_action"]["result"] == "pending"
        assert data["status"] == "in_progress"


class TestErrorResponse:
    """Error mapping."""

    def test_from_error(self):
        response = ErrorResponse.from_error(InvalidSelection("wrong cards"))
        assert response.error_code is ErrorCode.INVALID_SELECTION
        assert response.error == "wrong cards"

    def test_unknown_code(self):
        response = ErrorResponse.from_code("boom", "SOMETHING_ELSE")
        assert response.error_code is ErrorCode.INTERNAL_ERROR


class TestEngineService:
    """The service relays commands and formats views."""

    def test_create_seeded_game(self):
        first = EngineService().create_game(create_request(random_seed=7))
        second = EngineService().create_game(create_request(random_seed=7))

        assert first == second
        assert first.status is GameStatus.IN_PROGRESS

    def test_submit_success(self):
        service = EngineService()
        state = service.create_game(create_request(random_seed=1))

        new_state, response = service.submit(
            state,
            CommandRequest(command_type="declare", player_id="alice", action="income"),
            perspective="alice",
        )

        assert response.success
        assert response.changes == ["alice declared income"]
        assert new_state.get_player("alice").coins == 3
        assert response.state.players[0].coins == 3

    def test_submit_failure_keeps_state(self):
        service = EngineService()
        state = service.create_game(create_request(random_seed=1))

        new_state, response = service.submit(
            state,
            CommandRequest(command_type="declare", player_id="bob", action="income"),
            perspective="bob",
        )

        assert new_state is state
        assert not response.success
        assert response.error.error_code is ErrorCode.VALIDATION_ERROR
        assert response.error.error == "Not bob's turn"
