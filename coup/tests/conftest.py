"""
Pytest fixtures for Coup engine tests.
"""

import random
from collections import Counter

import pytest

from ..engine_core.deck import BASE_CHARACTERS, exchange_character
from ..engine_core.engine import GameEngine
from ..engine_core.state import (
    Allegiance,
    Card,
    CharacterType,
    Expansions,
    GameSettings,
    GameState,
    GameStatus,
    Player,
    PlayerSeat,
)

D = CharacterType.DUKE
A = CharacterType.ASSASSIN
C = CharacterType.CAPTAIN
AM = CharacterType.AMBASSADOR
CO = CharacterType.CONTESSA
I = CharacterType.INQUISITOR


def build_state(
    hands: dict[str, tuple[CharacterType, CharacterType]],
    *,
    coins: dict[str, int] | None = None,
    revealed: dict[str, tuple[int, ...]] | None = None,
    allegiances: dict[str, Allegiance] | None = None,
    settings: GameSettings | None = None,
    current: int = 0,
) -> GameState:
    """
    Build an in-progress state with known hands.

    The deck holds exactly the cards not dealt, so card totals match
    the ruleset.
    """
    settings = settings or GameSettings()
    coins = coins or {}
    revealed = revealed or {}
    allegiances = allegiances or {}

    pool = Counter({c: 3 for c in BASE_CHARACTERS + (exchange_character(settings),)})
    players = []
    for player_id, characters in hands.items():
        pool.subtract(characters)
        face_up = revealed.get(player_id, ())
        hand = tuple(Card(c, revealed=i in face_up) for i, c in enumerate(characters))
        players.append(Player(
            player_id=player_id,
            display_name=player_id.title(),
            coins=coins.get(player_id, 2),
            hand=hand,
            eliminated=all(card.revealed for card in hand),
            allegiance=allegiances.get(player_id),
        ))
    assert all(count >= 0 for count in pool.values()), "hands use more cards than the deck has"

    deck = tuple(sorted(pool.elements(), key=lambda c: c.value))
    return GameState(
        players=tuple(players),
        deck=deck,
        settings=settings,
        status=GameStatus.IN_PROGRESS,
        current_player_index=current,
        treasury=50,
    )


@pytest.fixture
def engine() -> GameEngine:
    """Engine with a fixed seed."""
    return GameEngine(rng=random.Random(1234))


@pytest.fixture
def seats() -> list[PlayerSeat]:
    return [
        PlayerSeat("alice", "Alice"),
        PlayerSeat("bob", "Bob"),
        PlayerSeat("carol", "Carol"),
    ]


@pytest.fixture
def started_state(engine: GameEngine, seats) -> GameState:
    """Freshly dealt three-player match."""
    return engine.initialize(seats, GameSettings())


@pytest.fixture
def duel_state() -> GameState:
    """Two players with known hands; Alice to act."""
    return build_state({
        "alice": (D, A),
        "bob": (C, CO),
    })


@pytest.fixture
def table_state() -> GameState:
    """Three players with known hands; Alice to act."""
    return build_state({
        "alice": (D, A),
        "bob": (C, CO),
        "carol": (AM, D),
    })


@pytest.fixture
def inquisitor_settings() -> GameSettings:
    return GameSettings(expansions=Expansions(inquisitor=True))


@pytest.fixture
def reformation_settings() -> GameSettings:
    return GameSettings(expansions=Expansions(reformation=True))
