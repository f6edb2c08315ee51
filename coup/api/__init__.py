"""
API Module - Boundary models and service for the orchestrator.

The orchestrator (lobby, persistence, broadcast):
1. Creates a match from lobby settings
2. Relays player commands
3. Broadcasts per-player views
"""

from .schemas import (
    # Requests
    CreateGameRequest,
    CommandRequest,
    GameSettingsModel,
    ExpansionsModel,
    PlayerSeatModel,
    # Responses
    CommandResponse,
    ErrorResponse,
    # Views
    GameStateView,
    PlayerView,
    CardView,
    PendingView,
    ActionLogView,
    # Enums
    ErrorCode,
    PendingKind,
)
from .service import EngineService

__all__ = [
    # Requests
    "CreateGameRequest",
    "CommandRequest",
    "GameSettingsModel",
    "ExpansionsModel",
    "PlayerSeatModel",
    # Responses
    "CommandResponse",
    "ErrorResponse",
    # Views
    "GameStateView",
    "PlayerView",
    "CardView",
    "PendingView",
    "ActionLogView",
    # Enums
    "ErrorCode",
    "PendingKind",
    # Service
    "EngineService",
]
