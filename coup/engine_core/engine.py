"""
Game Engine - Facade over the rule resolvers.

This is the boundary the orchestrator calls. Every mutating method
takes a GameState snapshot and returns a new one, or raises a typed
GameError. dispatch() wraps the same operations in an ActionResult
for callers that prefer errors as values.
"""

from __future__ import annotations
import logging
import random
from dataclasses import dataclass, field
from typing import Sequence

from ..config import COUP_TREASURY_COINS, HAND_SIZE, MIN_PLAYERS
from .action import ActionResult, ActionType, Command, CommandType
from .action_generator import available_actions
from .block import BlockResolver
from .challenge import ChallengeResolver
from .deck import create_deck, draw
from .errors import GameError, InvariantViolation, ValidationError
from .exchange import ExchangeResolver
from .game_over import GameOverResult, is_game_over
from .reducer import ActionResolver
from .state import (
    Allegiance,
    Card,
    CharacterType,
    GameSettings,
    GameState,
    GameStatus,
    Player,
    PlayerSeat,
)
from .validator import ValidationResult, validate_turn

logger = logging.getLogger(__name__)


@dataclass
class GameEngine:
    """
    Coup rule engine.

    Usage:
        engine = GameEngine(rng=random.Random(7))
        state = engine.initialize(seats, GameSettings())
        state = engine.apply_action(state, "p1", ActionType.TAX)
        state = engine.resolve_unchallenged_action(state, "p1", ActionType.TAX)

    All randomness (shuffles, team assignment) comes from rng.
    """
    rng: random.Random = field(default_factory=random.Random)

    def __post_init__(self):
        self.actions = ActionResolver(rng=self.rng)
        self.challenges = ChallengeResolver(actions=self.actions)
        self.blocks = BlockResolver(actions=self.actions)
        self.exchanges = ExchangeResolver(actions=self.actions)

    @classmethod
    def seeded(cls, seed: int | None) -> GameEngine:
        return cls(rng=random.Random(seed))

    # Setup -------------------------------------------------------------

    def initialize(
        self,
        players: Sequence[PlayerSeat],
        settings: GameSettings | None = None,
    ) -> GameState:
        """Shuffle the deck, deal two cards each, and start the match."""
        settings = settings or GameSettings()

        if not MIN_PLAYERS <= len(players) <= settings.max_players:
            raise ValidationError(
                f"Need between {MIN_PLAYERS} and {settings.max_players} players, "
                f"got {len(players)}"
            )
        ids = [seat.player_id for seat in players]
        if len(set(ids)) != len(ids):
            raise ValidationError("Player ids must be unique")

        deck = create_deck(settings, self.rng)
        allegiances = self._assign_allegiances(len(players), settings)

        dealt = []
        for seat, allegiance in zip(players, allegiances):
            cards, deck = draw(deck, HAND_SIZE)
            dealt.append(Player(
                player_id=seat.player_id,
                display_name=seat.display_name,
                coins=settings.starting_coins,
                hand=tuple(Card(character) for character in cards),
                allegiance=allegiance,
            ))

        logger.info("Starting match with %d players", len(dealt))
        return GameState(
            players=tuple(dealt),
            deck=deck,
            settings=settings,
            status=GameStatus.IN_PROGRESS,
            treasury=COUP_TREASURY_COINS,
        )

    def _assign_allegiances(
        self, count: int, settings: GameSettings
    ) -> list[Allegiance | None]:
        """Alternate teams around the table from a random first seat."""
        if not settings.expansions.reformation:
            return [None] * count
        sides = [Allegiance.LOYALIST, Allegiance.REFORMIST]
        first = self.rng.randrange(2)
        return [sides[(first + seat) % 2] for seat in range(count)]

    # Queries -----------------------------------------------------------

    def list_available_actions(self, state: GameState, player_id: str) -> list[ActionType]:
        return available_actions(state, player_id)

    def validate_action(
        self,
        state: GameState,
        player_id: str,
        action: ActionType,
        target_id: str | None = None,
    ) -> ValidationResult:
        return validate_turn(state, player_id, action, target_id)

    def is_game_over(self, state: GameState) -> GameOverResult:
        return is_game_over(state)

    # Operations --------------------------------------------------------

    def apply_action(
        self,
        state: GameState,
        player_id: str,
        action: ActionType,
        target_id: str | None = None,
    ) -> GameState:
        return self.actions.apply_action(state, player_id, action, target_id)

    def challenge(
        self,
        state: GameState,
        challenger_id: str,
        action_player_id: str,
        action: ActionType,
    ) -> GameState:
        return self.challenges.challenge(state, challenger_id, action_player_id, action)

    def counter_block(
        self,
        state: GameState,
        blocker_id: str,
        action: ActionType,
        claimed_card: CharacterType | str,
    ) -> GameState:
        return self.blocks.counter_block(
            state, blocker_id, action, _as_character(claimed_card)
        )

    def resolve_unchallenged_block(
        self, state: GameState, blocker_id: str, action: ActionType
    ) -> GameState:
        return self.blocks.resolve_unchallenged_block(state, blocker_id, action)

    def resolve_unchallenged_action(
        self, state: GameState, actor_id: str, action: ActionType
    ) -> GameState:
        return self.actions.resolve_unchallenged_action(state, actor_id, action)

    def complete_exchange(
        self,
        state: GameState,
        player_id: str,
        selected: Sequence[CharacterType | str],
    ) -> GameState:
        return self.exchanges.complete_exchange(
            state, player_id, [_as_character(c) for c in selected]
        )

    # Dispatch ----------------------------------------------------------

    def dispatch(self, state: GameState, command: Command) -> ActionResult:
        """
        Apply a command, returning an ActionResult instead of raising.

        InvariantViolation is not converted: it signals a broken match.
        """
        handler = self._get_handler(command.command_type)
        try:
            new_state = handler(state, command)
        except InvariantViolation:
            raise
        except GameError as e:
            return ActionResult.failure(e.message, error_code=e.error_code)
        return ActionResult.success_with_state(new_state, changes=[_describe(command)])

    def _get_handler(self, command_type: CommandType):
        handlers = {
            CommandType.DECLARE: self._handle_declare,
            CommandType.CHALLENGE: self._handle_challenge,
            CommandType.BLOCK: self._handle_block,
            CommandType.RESOLVE_BLOCK: self._handle_resolve_block,
            CommandType.RESOLVE_ACTION: self._handle_resolve_action,
            CommandType.COMPLETE_EXCHANGE: self._handle_complete_exchange,
        }
        return handlers[command_type]

    def _handle_declare(self, state: GameState, command: Command) -> GameState:
        p = command.payload
        return self.apply_action(state, p.player_id, _require_action(command), p.target_player_id)

    def _handle_challenge(self, state: GameState, command: Command) -> GameState:
        p = command.payload
        if p.accused_player_id is None:
            raise ValidationError("Challenge needs an accused player")
        return self.challenge(state, p.player_id, p.accused_player_id, _require_action(command))

    def _handle_block(self, state: GameState, command: Command) -> GameState:
        p = command.payload
        if p.claimed_card is None:
            raise ValidationError("Block needs a claimed card")
        return self.counter_block(state, p.player_id, _require_action(command), p.claimed_card)

    def _handle_resolve_block(self, state: GameState, command: Command) -> GameState:
        return self.resolve_unchallenged_block(
            state, command.payload.player_id, _require_action(command)
        )

    def _handle_resolve_action(self, state: GameState, command: Command) -> GameState:
        return self.resolve_unchallenged_action(
            state, command.payload.player_id, _require_action(command)
        )

    def _handle_complete_exchange(self, state: GameState, command: Command) -> GameState:
        p = command.payload
        return self.complete_exchange(state, p.player_id, list(p.selected_cards))


def _require_action(command: Command) -> ActionType:
    if command.payload.action is None:
        raise ValidationError(f"{command.command_type.value} needs an action")
    return command.payload.action


def _as_character(value: CharacterType | str) -> CharacterType:
    if isinstance(value, CharacterType):
        return value
    try:
        return CharacterType(value)
    except ValueError:
        raise ValidationError(f"Unknown character: {value}") from None


def _describe(command: Command) -> str:
    p = command.payload
    action = p.action.value if p.action else ""
    if command.command_type is CommandType.DECLARE:
        target = f" on {p.target_player_id}" if p.target_player_id else ""
        return f"{p.player_id} declared {action}{target}"
    if command.command_type is CommandType.CHALLENGE:
        return f"{p.player_id} challenged {p.accused_player_id} ({action})"
    if command.command_type is CommandType.BLOCK:
        return f"{p.player_id} blocked {action} claiming {_as_character(p.claimed_card).value}"
    if command.command_type is CommandType.COMPLETE_EXCHANGE:
        return f"{p.player_id} completed an exchange"
    return f"{p.player_id} let {action} stand"
