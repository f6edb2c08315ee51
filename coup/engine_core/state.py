"""
Game State - Immutable snapshot of a Coup match.

Design principles:
- Immutable: frozen dataclasses and tuples, every change returns a new state
- Old and new snapshots never share mutable substructure
- Pending interactions are a tagged union, one class per window kind
"""

from __future__ import annotations
from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Iterable, Union

from ..config import (
    COUP_MAX_PLAYERS,
    COUP_STARTING_COINS,
    ABSOLUTE_MAX_PLAYERS,
    MIN_PLAYERS,
)
from .action import ActionType
from .errors import NotFoundError, ValidationError


class GameStatus(Enum):
    """High-level match status."""
    WAITING = "waiting"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"


class CharacterType(Enum):
    """Character cards."""
    DUKE = "duke"
    ASSASSIN = "assassin"
    CAPTAIN = "captain"
    AMBASSADOR = "ambassador"
    CONTESSA = "contessa"
    INQUISITOR = "inquisitor"

    def __str__(self) -> str:
        return self.value


class Allegiance(Enum):
    """Reformation teams."""
    LOYALIST = "loyalist"
    REFORMIST = "reformist"


@dataclass(frozen=True)
class Card:
    """One influence card. Revealed cards stay in the hand."""
    character: CharacterType
    revealed: bool = False

    def reveal(self) -> Card:
        return replace(self, revealed=True)


@dataclass(frozen=True)
class Player:
    """
    State for a single player.

    The hand always holds exactly two cards for the whole match.
    """
    player_id: str
    display_name: str
    coins: int = 0
    hand: tuple[Card, ...] = ()
    eliminated: bool = False
    allegiance: Allegiance | None = None

    @property
    def influence(self) -> int:
        """Number of unrevealed cards."""
        return sum(1 for card in self.hand if not card.revealed)

    @property
    def unrevealed(self) -> list[CharacterType]:
        """Characters of unrevealed cards, in slot order."""
        return [card.character for card in self.hand if not card.revealed]

    @property
    def revealed_count(self) -> int:
        return sum(1 for card in self.hand if card.revealed)

    def find_unrevealed(self, characters: Iterable[CharacterType]) -> int | None:
        """Slot index of the first unrevealed card matching any character."""
        wanted = set(characters)
        for index, card in enumerate(self.hand):
            if not card.revealed and card.character in wanted:
                return index
        return None

    def lose_influence(self) -> Player:
        """
        Return new player with the first unrevealed card revealed.

        Marks the player eliminated once both cards are face up.
        A player with nothing left to reveal is returned unchanged.
        """
        for index, card in enumerate(self.hand):
            if not card.revealed:
                new_hand = self.hand[:index] + (card.reveal(),) + self.hand[index + 1:]
                eliminated = self.eliminated or all(c.revealed for c in new_hand)
                return replace(self, hand=new_hand, eliminated=eliminated)
        return self

    def with_card(self, index: int, character: CharacterType) -> Player:
        """Return new player with the character in one slot replaced."""
        new_hand = list(self.hand)
        new_hand[index] = replace(new_hand[index], character=character)
        return replace(self, hand=tuple(new_hand))

    def with_coins(self, delta: int) -> Player:
        """Return new player with coins adjusted, never below zero."""
        return replace(self, coins=max(0, self.coins + delta))


@dataclass(frozen=True)
class Expansions:
    """Optional rule variants."""
    reformation: bool = False
    inquisitor: bool = False
    anarchy: bool = False


@dataclass(frozen=True)
class GameSettings:
    """Lobby settings fixed for the whole match."""
    expansions: Expansions = field(default_factory=Expansions)
    starting_coins: int = COUP_STARTING_COINS
    max_players: int = COUP_MAX_PLAYERS

    def __post_init__(self):
        if self.starting_coins < 0:
            raise ValidationError("starting_coins must be >= 0")
        if not MIN_PLAYERS <= self.max_players <= ABSOLUTE_MAX_PLAYERS:
            raise ValidationError(
                f"max_players must be between {MIN_PLAYERS} and {ABSOLUTE_MAX_PLAYERS}"
            )


@dataclass(frozen=True)
class PlayerSeat:
    """A lobby member joining a match."""
    player_id: str
    display_name: str


# =============================================================================
# Pending interactions
# =============================================================================

@dataclass(frozen=True)
class AwaitingChallenge:
    """
    A declared action waiting for responses.

    Other players may challenge the claim (if challengeable) or block
    (if blockable). Effects apply only once the window closes.
    """
    actor_id: str
    action: ActionType
    target_id: str | None = None
    challengeable: bool = True
    blockable: bool = False
    paid: int = 0  # Cost already taken from the actor


@dataclass(frozen=True)
class AwaitingBlock:
    """A counter-claim suspending an action, open to challenge."""
    blocker_id: str
    claimed_card: CharacterType
    action: ActionType
    actor_id: str
    target_id: str | None = None
    challengeable: bool = True
    blockable: bool = False


@dataclass(frozen=True)
class AwaitingExchangeSelection:
    """The actor must choose which characters to keep."""
    player_id: str
    candidates: tuple[CharacterType, ...]
    drawn: tuple[CharacterType, ...]


PendingInteraction = Union[AwaitingChallenge, AwaitingBlock, AwaitingExchangeSelection]


# =============================================================================
# Action log
# =============================================================================

class ActionOutcome(Enum):
    PENDING = "pending"
    SUCCESS = "success"
    FAILED = "failed"
    CHALLENGED = "challenged"
    BLOCKED = "blocked"


class ChallengeOutcome(Enum):
    FAILED = "failed"  # Claim was true
    SUCCEEDED = "succeeded"  # Claim was a bluff


@dataclass(frozen=True)
class ActionLog:
    """Record of the most recent action and how it was answered."""
    action: ActionType
    actor_id: str
    target_id: str | None = None
    result: ActionOutcome = ActionOutcome.PENDING
    challenge_result: ChallengeOutcome | None = None
    challenger_id: str | None = None
    blocker_id: str | None = None
    blocking_card: CharacterType | None = None
    final_result: ActionOutcome | None = None

    def updated(self, **kwargs) -> ActionLog:
        return replace(self, **kwargs)


@dataclass(frozen=True)
class GameState:
    """
    Complete match state at a point in time.

    This is the canonical snapshot the orchestrator stores and
    passes back into every engine operation.
    """
    players: tuple[Player, ...]
    deck: tuple[CharacterType, ...]
    settings: GameSettings = field(default_factory=GameSettings)

    status: GameStatus = GameStatus.WAITING
    current_player_index: int = 0
    turn_number: int = 0

    pending: PendingInteraction | None = None
    last_action: ActionLog | None = None

    winner_id: str | None = None
    winning_team: tuple[str, ...] = ()
    treasury: int | None = None

    @property
    def current_player(self) -> Player:
        """Get the player whose turn it is."""
        return self.players[self.current_player_index]

    @property
    def active_players(self) -> list[Player]:
        """Players still holding influence."""
        return [p for p in self.players if not p.eliminated]

    @property
    def num_players(self) -> int:
        return len(self.players)

    @property
    def card_count(self) -> int:
        """Cards in the deck, in hands, and drawn into a pending exchange."""
        in_hands = sum(len(p.hand) for p in self.players)
        held = len(self.pending.drawn) if isinstance(self.pending, AwaitingExchangeSelection) else 0
        return len(self.deck) + in_hands + held

    def get_player(self, player_id: str) -> Player | None:
        """Get player by ID."""
        for p in self.players:
            if p.player_id == player_id:
                return p
        return None

    def require_player(self, player_id: str) -> Player:
        """Get player by ID or raise NotFoundError."""
        player = self.get_player(player_id)
        if player is None:
            raise NotFoundError(f"Player {player_id} not found")
        return player

    def index_of(self, player_id: str) -> int:
        for index, p in enumerate(self.players):
            if p.player_id == player_id:
                return index
        raise NotFoundError(f"Player {player_id} not found")

    def with_player(self, player: Player) -> GameState:
        """Return new state with updated player."""
        new_players = tuple(
            player if p.player_id == player.player_id else p
            for p in self.players
        )
        return self._copy_with(players=new_players)

    def _copy_with(self, **kwargs) -> GameState:
        """Create a copy with some fields replaced."""
        return replace(self, **kwargs)
