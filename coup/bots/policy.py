"""
Bot Policy - Interface for bot decision-making.

A BotPolicy takes a game state and the commands its player may submit
and returns a decision. Policies answer windows (challenge, block,
let it stand) the same way they pick turn actions.
"""

from __future__ import annotations
import random
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

from ..engine_core.action import CommandType
from ..engine_core.catalog import claimed_characters

if TYPE_CHECKING:
    from ..engine_core.state import GameState
    from ..engine_core.action import Command


@dataclass
class BotDecision:
    """
    A decision made by a bot.

    Contains:
    - The command to submit
    - Explanation (for logs/debugging)
    - Confidence in the decision
    """
    command: Command
    explanation: str = ""
    confidence: float = 1.0

    # Evaluation details (for debugging)
    evaluated_commands: int = 0
    evaluation_details: dict[str, Any] = field(default_factory=dict)


class BotPolicy(ABC):
    """
    Abstract base class for bot policies.

    Implementations range from random play to claim-aware heuristics.
    """

    @abstractmethod
    def select_command(
        self,
        state: GameState,
        legal_commands: list[Command],
    ) -> BotDecision:
        """
        Select a command from the legal commands.

        Args:
            state: Current game state
            legal_commands: Commands this bot's player may submit

        Returns:
            BotDecision with the selected command
        """
        pass

    def get_name(self) -> str:
        """Get the bot's name/identifier."""
        return self.__class__.__name__


class RandomPolicy(BotPolicy):
    """
    Random policy - selects commands uniformly at random.

    Used for:
    - Testing (explores bluffs, challenges and blocks alike)
    - Baseline comparison
    """

    def __init__(self, seed: int | None = None):
        self.rng = random.Random(seed)

    def select_command(
        self,
        state: GameState,
        legal_commands: list[Command],
    ) -> BotDecision:
        if not legal_commands:
            raise ValueError("No legal commands available")

        command = self.rng.choice(legal_commands)
        return BotDecision(
            command=command,
            explanation="Selected randomly",
            confidence=1.0 / len(legal_commands),
            evaluated_commands=len(legal_commands),
        )


class HonestPolicy(BotPolicy):
    """
    Honest policy - never bluffs and never challenges.

    Declares only actions backed by a card in hand, blocks only with a
    held character, and lets every other window close.
    """

    def __init__(self, seed: int | None = None):
        self.rng = random.Random(seed)

    def select_command(
        self,
        state: GameState,
        legal_commands: list[Command],
    ) -> BotDecision:
        if not legal_commands:
            raise ValueError("No legal commands available")

        honest = []
        for command in legal_commands:
            payload = command.payload
            player = state.require_player(payload.player_id)
            if command.command_type is CommandType.CHALLENGE:
                continue
            if command.command_type is CommandType.BLOCK:
                if payload.claimed_card not in player.unrevealed:
                    continue
            if command.command_type is CommandType.DECLARE:
                claims = claimed_characters(payload.action, state.settings)
                if claims and player.find_unrevealed(claims) is None:
                    continue
            honest.append(command)

        pool = honest or legal_commands
        return BotDecision(
            command=self.rng.choice(pool),
            explanation="Selected among honest commands",
            evaluated_commands=len(legal_commands),
        )


class FirstLegalPolicy(BotPolicy):
    """
    First-legal policy - always selects the first legal command.

    Used for deterministic testing.
    """

    def select_command(
        self,
        state: GameState,
        legal_commands: list[Command],
    ) -> BotDecision:
        if not legal_commands:
            raise ValueError("No legal commands available")

        return BotDecision(
            command=legal_commands[0],
            explanation="Selected first legal command",
            evaluated_commands=1,
        )
