"""
Engine Service - Translation layer between boundary payloads and the engine.

The service:
1. Validates lobby payloads into engine types
2. Relays player commands to the engine
3. Formats per-player views for broadcast

Storing snapshots, serializing writers per match and pushing views to
clients stay with the caller. This layer is framework-agnostic.
"""

from __future__ import annotations
import logging
import random
from dataclasses import dataclass, field

from ..engine_core.engine import GameEngine
from ..engine_core.errors import GameError
from ..engine_core.state import GameState
from .schemas import (
    CommandRequest,
    CommandResponse,
    CreateGameRequest,
    ErrorResponse,
    GameStateView,
)

logger = logging.getLogger(__name__)


@dataclass
class EngineService:
    """
    Boundary service for one engine instance.

    Usage:
        service = EngineService()
        state = service.create_game(CreateGameRequest(players=[...]))
        state, response = service.submit(state, CommandRequest(...), perspective="p1")
    """
    engine: GameEngine = field(default_factory=GameEngine)

    def create_game(self, request: CreateGameRequest) -> GameState:
        """Start a match; a seed in the request reseeds the engine."""
        if request.random_seed is not None:
            self.engine = GameEngine(rng=random.Random(request.random_seed))
        seats = [seat.to_seat() for seat in request.players]
        return self.engine.initialize(seats, request.settings.to_settings())

    def view(self, state: GameState, perspective: str | None = None) -> GameStateView:
        return GameStateView.from_state(state, perspective)

    def submit(
        self,
        state: GameState,
        request: CommandRequest,
        perspective: str | None = None,
    ) -> tuple[GameState, CommandResponse]:
        """
        Apply a command.

        Returns the new state (or the unchanged one on failure) and the
        response for the requesting player.
        """
        result = self.engine.dispatch(state, request.to_command())
        if not result.success:
            logger.info("Rejected %s from %s: %s", request.command_type.value, request.player_id, result.error)
            return state, CommandResponse(
                success=False,
                state=self.view(state, perspective),
                error=ErrorResponse.from_code(result.error or "", result.error_code),
            )

        return result.new_state, CommandResponse(
            success=True,
            state=self.view(result.new_state, perspective),
            changes=result.state_changes,
        )

    def error_response(self, error: GameError) -> ErrorResponse:
        return ErrorResponse.from_error(error)
