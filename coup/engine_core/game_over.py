"""
Game Over Evaluator - Terminal-state detection.

A match ends when one player keeps influence, or (Reformation) when
every remaining player belongs to the same team.
"""

from __future__ import annotations
from dataclasses import dataclass

from .state import GameState, GameStatus


@dataclass(frozen=True)
class GameOverResult:
    over: bool
    winner_id: str | None = None
    winning_team: tuple[str, ...] = ()


def is_game_over(state: GameState) -> GameOverResult:
    """Evaluate whether the match has concluded."""
    active = state.active_players

    if len(active) == 1:
        return GameOverResult(
            over=True,
            winner_id=active[0].player_id,
            winning_team=(active[0].player_id,),
        )

    if len(active) > 1:
        allegiance = active[0].allegiance
        if allegiance is not None and all(p.allegiance is allegiance for p in active):
            # Team victory; the first seat stands in for the side
            return GameOverResult(
                over=True,
                winner_id=active[0].player_id,
                winning_team=tuple(p.player_id for p in active),
            )

    return GameOverResult(over=False)


def conclude_if_over(state: GameState) -> GameState:
    """Return state marked completed if the match has a winner."""
    result = is_game_over(state)
    if not result.over:
        return state
    return state._copy_with(
        status=GameStatus.COMPLETED,
        pending=None,
        winner_id=result.winner_id,
        winning_team=result.winning_team,
    )
