"""
Self-Play - Runs bot-vs-bot matches through the engine.

Each step gathers every legal command, picks which player speaks
(the turn player, or one of the players with an answer to an open
window) and lets that player's policy choose.
"""

from __future__ import annotations
import logging
import random
from dataclasses import dataclass, field
from typing import Mapping

from ..engine_core.action import Command
from ..engine_core.action_generator import legal_commands
from ..engine_core.engine import GameEngine
from ..engine_core.state import GameState, GameStatus
from .policy import BotPolicy

logger = logging.getLogger(__name__)

DEFAULT_MAX_STEPS = 2000


class MatchStalled(RuntimeError):
    """Raised when a match does not finish within the step limit."""


@dataclass
class MatchRecord:
    """Outcome of one self-play match."""
    final_state: GameState
    steps: int
    history: list[Command] = field(default_factory=list)
    states: list[GameState] = field(default_factory=list)

    @property
    def winner_id(self) -> str | None:
        return self.final_state.winner_id


def play_match(
    engine: GameEngine,
    state: GameState,
    policies: Mapping[str, BotPolicy],
    *,
    rng: random.Random | None = None,
    max_steps: int = DEFAULT_MAX_STEPS,
    keep_states: bool = False,
) -> MatchRecord:
    """Play until the match completes, returning the record."""
    rng = rng or random.Random()
    history: list[Command] = []
    states: list[GameState] = [state] if keep_states else []

    for step in range(max_steps):
        if state.status is GameStatus.COMPLETED:
            return MatchRecord(final_state=state, steps=step, history=history, states=states)

        commands = legal_commands(state)
        if not commands:
            raise MatchStalled(f"No legal commands at step {step}")

        by_player: dict[str, list[Command]] = {}
        for command in commands:
            by_player.setdefault(command.payload.player_id, []).append(command)

        speaker = rng.choice(sorted(by_player))
        decision = policies[speaker].select_command(state, by_player[speaker])

        result = engine.dispatch(state, decision.command)
        if not result.success:
            raise MatchStalled(f"Bot chose an illegal command: {result.error}")

        logger.debug("step %d: %s", step, "; ".join(result.state_changes))
        history.append(decision.command)
        state = result.new_state
        if keep_states:
            states.append(state)

    if state.status is GameStatus.COMPLETED:
        return MatchRecord(final_state=state, steps=max_steps, history=history, states=states)
    raise MatchStalled(f"Match did not finish within {max_steps} steps")
