"""
Pydantic Schemas for the engine boundary.

These models define the contract between the lobby/broadcast layer and
the engine: validated inputs that convert into engine types, and
per-player views of a GameState that hide other players' influence.

Error Codes:
- VALIDATION_ERROR: Illegal action, cost, target or timing
- NOT_FOUND: Unknown player id
- INCONSISTENT_STATE: Command does not match the open window
- INVALID_SELECTION: Exchange selection has the wrong cards
- INVARIANT_VIOLATION: Broken match, must be abandoned
"""

from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field

from ..config import ABSOLUTE_MAX_PLAYERS, COUP_MAX_PLAYERS, COUP_STARTING_COINS, MIN_PLAYERS
from ..engine_core.action import ActionType, Command, CommandPayload, CommandType
from ..engine_core.action_generator import available_actions
from ..engine_core.errors import GameError
from ..engine_core.state import (
    ActionLog,
    AwaitingBlock,
    AwaitingChallenge,
    AwaitingExchangeSelection,
    CharacterType,
    Expansions,
    GameSettings,
    GameState,
    Player,
    PlayerSeat,
)


# =============================================================================
# Enums
# =============================================================================

class ErrorCode(str, Enum):
    """Structured error codes, one per engine error class."""
    VALIDATION_ERROR = "VALIDATION_ERROR"
    NOT_FOUND = "NOT_FOUND"
    INCONSISTENT_STATE = "INCONSISTENT_STATE"
    INVALID_SELECTION = "INVALID_SELECTION"
    INVARIANT_VIOLATION = "INVARIANT_VIOLATION"
    INTERNAL_ERROR = "INTERNAL_ERROR"


class PendingKind(str, Enum):
    """Which response window is open."""
    AWAITING_CHALLENGE = "awaiting_challenge"
    AWAITING_BLOCK = "awaiting_block"
    AWAITING_EXCHANGE_SELECTION = "awaiting_exchange_selection"


# =============================================================================
# Request Models
# =============================================================================

class ExpansionsModel(BaseModel):
    """Optional rule variants chosen in the lobby."""
    reformation: bool = False
    inquisitor: bool = False
    anarchy: bool = False


class GameSettingsModel(BaseModel):
    """Lobby settings."""
    expansions: ExpansionsModel = Field(default_factory=ExpansionsModel)
    starting_coins: int = Field(COUP_STARTING_COINS, ge=0)
    max_players: int = Field(COUP_MAX_PLAYERS, ge=MIN_PLAYERS, le=ABSOLUTE_MAX_PLAYERS)

    def to_settings(self) -> GameSettings:
        return GameSettings(
            expansions=Expansions(**self.expansions.model_dump()),
            starting_coins=self.starting_coins,
            max_players=self.max_players,
        )


class PlayerSeatModel(BaseModel):
    """A lobby member joining the match."""
    player_id: str = Field(..., min_length=1)
    display_name: str = Field(..., min_length=1)

    def to_seat(self) -> PlayerSeat:
        return PlayerSeat(player_id=self.player_id, display_name=self.display_name)


class CreateGameRequest(BaseModel):
    """Request to start a match from a lobby."""
    players: list[PlayerSeatModel] = Field(..., min_length=MIN_PLAYERS)
    settings: GameSettingsModel = Field(default_factory=GameSettingsModel)
    random_seed: Optional[int] = Field(None, description="Seed for reproducible games")


class CommandRequest(BaseModel):
    """A player input relayed by the orchestrator."""
    command_type: CommandType
    player_id: str
    action: Optional[ActionType] = None
    target_player_id: Optional[str] = None
    accused_player_id: Optional[str] = None
    claimed_card: Optional[CharacterType] = None
    selected_cards: list[CharacterType] = Field(default_factory=list)

    def to_command(self) -> Command:
        return Command(
            command_type=self.command_type,
            payload=CommandPayload(
                player_id=self.player_id,
                action=self.action,
                target_player_id=self.target_player_id,
                accused_player_id=self.accused_player_id,
                claimed_card=self.claimed_card,
                selected_cards=tuple(self.selected_cards),
            ),
        )


# =============================================================================
# View Models
# =============================================================================

class CardView(BaseModel):
    """A card as one player sees it; hidden cards have no character."""
    character: Optional[CharacterType] = None
    revealed: bool = False


class PlayerView(BaseModel):
    """Player information for display."""
    player_id: str
    display_name: str
    coins: int
    cards: list[CardView]
    influence: int
    eliminated: bool
    allegiance: Optional[str] = None
    is_current_turn: bool = False

    @classmethod
    def from_player(cls, player: Player, *, visible: bool, is_current_turn: bool) -> "PlayerView":
        cards = [
            CardView(
                character=card.character if (visible or card.revealed) else None,
                revealed=card.revealed,
            )
            for card in player.hand
        ]
        return cls(
            player_id=player.player_id,
            display_name=player.display_name,
            coins=player.coins,
            cards=cards,
            influence=player.influence,
            eliminated=player.eliminated,
            allegiance=player.allegiance.value if player.allegiance else None,
            is_current_turn=is_current_turn,
        )


class PendingView(BaseModel):
    """The open response window, if any."""
    kind: PendingKind
    player_id: str = Field(..., description="Actor, blocker, or exchanging player")
    action: Optional[ActionType] = None
    target_player_id: Optional[str] = None
    claimed_card: Optional[CharacterType] = None
    challengeable: bool = False
    blockable: bool = False
    candidates: Optional[list[CharacterType]] = Field(
        None, description="Exchange choices, only shown to the exchanging player"
    )


class ActionLogView(BaseModel):
    """The most recent action and how it was answered."""
    action: ActionType
    actor_id: str
    target_id: Optional[str] = None
    result: str
    challenge_result: Optional[str] = None
    challenger_id: Optional[str] = None
    blocker_id: Optional[str] = None
    blocking_card: Optional[CharacterType] = None
    final_result: Optional[str] = None

    @classmethod
    def from_log(cls, log: ActionLog) -> "ActionLogView":
        return cls(
            action=log.action,
            actor_id=log.actor_id,
            target_id=log.target_id,
            result=log.result.value,
            challenge_result=log.challenge_result.value if log.challenge_result else None,
            challenger_id=log.challenger_id,
            blocker_id=log.blocker_id,
            blocking_card=log.blocking_card,
            final_result=log.final_result.value if log.final_result else None,
        )


class GameStateView(BaseModel):
    """
    Game state for broadcast.

    With a perspective, that player's own cards and exchange choices are
    visible; everyone else's unrevealed cards are hidden. Without one
    (spectators), every unrevealed card is hidden.
    """
    status: str
    turn_number: int
    current_player_id: Optional[str] = None
    deck_size: int
    treasury: Optional[int] = None
    players: list[PlayerView] = Field(default_factory=list)
    pending: Optional[PendingView] = None
    last_action: Optional[ActionLogView] = None
    winner_id: Optional[str] = None
    winning_team: list[str] = Field(default_factory=list)
    available_actions: list[ActionType] = Field(default_factory=list)
    api_version: str = "v1"

    @classmethod
    def from_state(cls, state: GameState, perspective: Optional[str] = None) -> "GameStateView":
        current_id = state.current_player.player_id if state.players else None
        players = [
            PlayerView.from_player(
                p,
                visible=p.player_id == perspective,
                is_current_turn=p.player_id == current_id,
            )
            for p in state.players
        ]
        actions = []
        if perspective is not None and state.get_player(perspective) is not None:
            actions = available_actions(state, perspective)

        return cls(
            status=state.status.value,
            turn_number=state.turn_number,
            current_player_id=current_id,
            deck_size=len(state.deck),
            treasury=state.treasury,
            players=players,
            pending=_pending_view(state, perspective),
            last_action=ActionLogView.from_log(state.last_action) if state.last_action else None,
            winner_id=state.winner_id,
            winning_team=list(state.winning_team),
            available_actions=actions,
        )


def _pending_view(state: GameState, perspective: Optional[str]) -> Optional[PendingView]:
    pending = state.pending
    if isinstance(pending, AwaitingChallenge):
        return PendingView(
            kind=PendingKind.AWAITING_CHALLENGE,
            player_id=pending.actor_id,
            action=pending.action,
            target_player_id=pending.target_id,
            challengeable=pending.challengeable,
            blockable=pending.blockable,
        )
    if isinstance(pending, AwaitingBlock):
        return PendingView(
            kind=PendingKind.AWAITING_BLOCK,
            player_id=pending.blocker_id,
            action=pending.action,
            target_player_id=pending.target_id,
            claimed_card=pending.claimed_card,
            challengeable=pending.challengeable,
            blockable=pending.blockable,
        )
    if isinstance(pending, AwaitingExchangeSelection):
        mine = pending.player_id == perspective
        return PendingView(
            kind=PendingKind.AWAITING_EXCHANGE_SELECTION,
            player_id=pending.player_id,
            candidates=list(pending.candidates) if mine else None,
        )
    return None


# =============================================================================
# Response Models
# =============================================================================

class ErrorResponse(BaseModel):
    """Standard error response."""
    error: str = Field(..., description="Human-readable error message")
    error_code: ErrorCode = Field(..., description="Machine-readable error code")
    api_version: str = Field("v1", description="API version")

    @classmethod
    def from_error(cls, error: GameError) -> "ErrorResponse":
        return cls.from_code(error.message, error.error_code)

    @classmethod
    def from_code(cls, message: str, code: Optional[str]) -> "ErrorResponse":
        known = {c.value for c in ErrorCode}
        error_code = ErrorCode(code) if code in known else ErrorCode.INTERNAL_ERROR
        return cls(error=message, error_code=error_code)


class CommandResponse(BaseModel):
    """Result of a relayed command."""
    success: bool
    state: Optional[GameStateView] = None
    changes: list[str] = Field(default_factory=list)
    error: Optional[ErrorResponse] = None
    api_version: str = "v1"
