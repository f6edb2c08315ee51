"""
Action Generator - Enumerates what players can do in a state.

Used by:
1. The UI to show the turn player's available actions
2. Bots to enumerate every legal command, windows included

Available actions include bluffs: any action the player can afford is
listed whether or not they hold the claimed character.
"""

from __future__ import annotations
from itertools import combinations

from .action import ActionType, Command
from .catalog import blocking_cards, is_enabled, rule_for
from .state import (
    AwaitingBlock,
    AwaitingChallenge,
    AwaitingExchangeSelection,
    GameState,
    GameStatus,
    Player,
)
from .validator import can_perform_action


def available_actions(state: GameState, player_id: str) -> list[ActionType]:
    """
    Actions the player may declare right now.

    Empty when it is not their turn, a window is open, or the game is over.
    """
    player = state.require_player(player_id)
    if (
        state.status is not GameStatus.IN_PROGRESS
        or state.pending is not None
        or player.eliminated
        or state.current_player.player_id != player_id
    ):
        return []

    actions = []
    for action in ActionType:
        if not is_enabled(action, state.settings):
            continue
        if rule_for(action).needs_target:
            if _legal_targets(state, player, action):
                actions.append(action)
        elif can_perform_action(player, action).allowed:
            actions.append(action)
    return actions


def _legal_targets(state: GameState, player: Player, action: ActionType) -> list[Player]:
    return [
        target for target in state.players
        if can_perform_action(player, action, target).allowed
    ]


def legal_commands(state: GameState) -> list[Command]:
    """Every command any player could legally submit in this state."""
    if state.status is not GameStatus.IN_PROGRESS:
        return []

    pending = state.pending
    if pending is None:
        return _declare_commands(state)
    if isinstance(pending, AwaitingChallenge):
        return _action_window_commands(state, pending)
    if isinstance(pending, AwaitingBlock):
        return _block_window_commands(state, pending)
    if isinstance(pending, AwaitingExchangeSelection):
        return _exchange_commands(state, pending)
    return []


def _declare_commands(state: GameState) -> list[Command]:
    player = state.current_player
    commands = []
    for action in available_actions(state, player.player_id):
        if rule_for(action).needs_target:
            for target in _legal_targets(state, player, action):
                commands.append(Command.declare(player.player_id, action, target.player_id))
        else:
            commands.append(Command.declare(player.player_id, action))
    return commands


def _action_window_commands(state: GameState, pending: AwaitingChallenge) -> list[Command]:
    commands = [Command.resolve_action(pending.actor_id, pending.action)]
    others = [p for p in state.active_players if p.player_id != pending.actor_id]

    if pending.challengeable:
        for p in others:
            commands.append(Command.challenge(p.player_id, pending.actor_id, pending.action))

    if pending.blockable:
        blockers = [
            p for p in others
            if pending.target_id is None or p.player_id == pending.target_id
        ]
        for p in blockers:
            for card in blocking_cards(pending.action, state.settings):
                commands.append(Command.block(p.player_id, pending.action, card))
    return commands


def _block_window_commands(state: GameState, pending: AwaitingBlock) -> list[Command]:
    commands = [Command.resolve_block(pending.blocker_id, pending.action)]
    for p in state.active_players:
        if p.player_id != pending.blocker_id:
            commands.append(Command.challenge(p.player_id, pending.blocker_id, pending.action))
    return commands


def _exchange_commands(state: GameState, pending: AwaitingExchangeSelection) -> list[Command]:
    player = state.require_player(pending.player_id)
    seen = set()
    commands = []
    for picked in combinations(pending.candidates, player.influence):
        key = tuple(sorted(c.value for c in picked))
        if key in seen:
            continue
        seen.add(key)
        commands.append(Command.complete_exchange(player.player_id, list(picked)))
    return commands
