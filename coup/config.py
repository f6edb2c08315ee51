"""
Configuration - Environment-driven defaults.

Only defaults live here; every value can still be passed explicitly
through GameSettings or the CLI.
"""

import logging
import os

# Environment configuration
COUP_LOG_LEVEL = os.getenv("COUP_LOG_LEVEL", "WARNING")
COUP_STARTING_COINS = int(os.getenv("COUP_STARTING_COINS", "2"))
COUP_MAX_PLAYERS = int(os.getenv("COUP_MAX_PLAYERS", "6"))
COUP_TREASURY_COINS = int(os.getenv("COUP_TREASURY_COINS", "50"))

# Rule constants
MIN_PLAYERS = 2
HAND_SIZE = 2
COPIES_PER_CHARACTER = 3
MANDATORY_COUP_THRESHOLD = 10
EXCHANGE_DRAW_COUNT = 2
STEAL_AMOUNT = 2

# Two cards per seat must be dealt and an exchange must still be able to draw
ABSOLUTE_MAX_PLAYERS = 6


def configure_logging(level: str | None = None) -> None:
    """Configure root logging for command-line use."""
    logging.basicConfig(
        level=(level or COUP_LOG_LEVEL).upper(),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
