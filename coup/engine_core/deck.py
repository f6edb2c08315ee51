"""
Deck Manager - Builds, draws from, and replenishes the court deck.

The draw end is the tail of the tuple. Returned cards always trigger
a reshuffle of the whole pile so that no player can track where a
returned card went.
"""

from __future__ import annotations
import logging
import random
from typing import Iterable

from ..config import COPIES_PER_CHARACTER
from .errors import InvariantViolation
from .state import CharacterType, GameSettings

logger = logging.getLogger(__name__)

BASE_CHARACTERS = (
    CharacterType.DUKE,
    CharacterType.ASSASSIN,
    CharacterType.CAPTAIN,
    CharacterType.CONTESSA,
)


def exchange_character(settings: GameSettings) -> CharacterType:
    """The fifth character: Inquisitor replaces Ambassador when enabled."""
    if settings.expansions.inquisitor:
        return CharacterType.INQUISITOR
    return CharacterType.AMBASSADOR


def deck_size(settings: GameSettings) -> int:
    """Fixed number of cards in play for a ruleset."""
    return COPIES_PER_CHARACTER * (len(BASE_CHARACTERS) + 1)


def shuffled(cards: Iterable[CharacterType], rng: random.Random) -> tuple[CharacterType, ...]:
    """Return a uniformly shuffled copy (Fisher-Yates via Random.shuffle)."""
    pile = list(cards)
    rng.shuffle(pile)
    return tuple(pile)


def create_deck(settings: GameSettings, rng: random.Random) -> tuple[CharacterType, ...]:
    """Build and shuffle the deck for the active ruleset."""
    characters = BASE_CHARACTERS + (exchange_character(settings),)
    cards = [c for c in characters for _ in range(COPIES_PER_CHARACTER)]
    return shuffled(cards, rng)


def draw(
    deck: tuple[CharacterType, ...], n: int
) -> tuple[tuple[CharacterType, ...], tuple[CharacterType, ...]]:
    """
    Remove n cards from the draw end.

    Returns (drawn, remaining). The drawn cards are in draw order.
    """
    if n < 0 or n > len(deck):
        logger.error("Cannot draw %d cards from a deck of %d", n, len(deck))
        raise InvariantViolation(f"Cannot draw {n} cards from a deck of {len(deck)}")
    if n == 0:
        return (), deck
    remaining = deck[:-n]
    drawn = tuple(reversed(deck[-n:]))
    return drawn, remaining


def return_and_reshuffle(
    deck: tuple[CharacterType, ...],
    cards: Iterable[CharacterType],
    rng: random.Random,
) -> tuple[CharacterType, ...]:
    """Append returned cards and reshuffle the entire pile."""
    return shuffled(deck + tuple(cards), rng)
