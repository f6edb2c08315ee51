"""
Action Catalog - Static rule table, one row per action.

Built once at import time and exposed read-only. Rows that depend on
the ruleset (Inquisitor replacing Ambassador) are resolved through the
helper functions, never by mutating the table.
"""

from __future__ import annotations
from dataclasses import dataclass
from types import MappingProxyType
from typing import Mapping

from .action import ActionType
from .state import CharacterType, GameSettings


@dataclass(frozen=True)
class ActionRule:
    """Rule row for one action."""
    action: ActionType
    cost: int = 0
    needs_target: bool = False
    blocked_by: tuple[CharacterType, ...] = ()
    claims: tuple[CharacterType, ...] = ()
    reformation_only: bool = False
    inquisitor_only: bool = False

    @property
    def challengeable(self) -> bool:
        return bool(self.claims)

    @property
    def blockable(self) -> bool:
        return bool(self.blocked_by)


_RULES = (
    ActionRule(ActionType.INCOME),
    ActionRule(ActionType.FOREIGN_AID, blocked_by=(CharacterType.DUKE,)),
    ActionRule(ActionType.TAX, claims=(CharacterType.DUKE,)),
    ActionRule(
        ActionType.STEAL,
        needs_target=True,
        blocked_by=(CharacterType.AMBASSADOR, CharacterType.CAPTAIN),
        claims=(CharacterType.CAPTAIN,),
    ),
    ActionRule(
        ActionType.ASSASSINATE,
        cost=3,
        needs_target=True,
        blocked_by=(CharacterType.CONTESSA,),
        claims=(CharacterType.ASSASSIN,),
    ),
    ActionRule(ActionType.EXCHANGE, claims=(CharacterType.AMBASSADOR,)),
    ActionRule(
        ActionType.QUESTION,
        needs_target=True,
        claims=(CharacterType.INQUISITOR,),
        inquisitor_only=True,
    ),
    ActionRule(
        ActionType.INTERROGATE,
        needs_target=True,
        claims=(CharacterType.INQUISITOR,),
        inquisitor_only=True,
    ),
    ActionRule(ActionType.CONVERT, cost=1, needs_target=True, reformation_only=True),
    ActionRule(ActionType.COUP, cost=7, needs_target=True),
)

ACTION_RULES: Mapping[ActionType, ActionRule] = MappingProxyType(
    {rule.action: rule for rule in _RULES}
)

assert set(ACTION_RULES) == set(ActionType), "every action needs a rule row"


def rule_for(action: ActionType) -> ActionRule:
    return ACTION_RULES[action]


def action_cost(action: ActionType) -> int:
    return ACTION_RULES[action].cost


def is_enabled(action: ActionType, settings: GameSettings) -> bool:
    """Whether the action exists in this ruleset."""
    rule = ACTION_RULES[action]
    if rule.reformation_only and not settings.expansions.reformation:
        return False
    if rule.inquisitor_only and not settings.expansions.inquisitor:
        return False
    return True


def blocking_cards(action: ActionType, settings: GameSettings) -> tuple[CharacterType, ...]:
    """Characters that may block the action under this ruleset."""
    cards = ACTION_RULES[action].blocked_by
    if action is ActionType.STEAL and settings.expansions.inquisitor:
        cards = cards + (CharacterType.INQUISITOR,)
    return cards


def claimed_characters(action: ActionType, settings: GameSettings) -> tuple[CharacterType, ...]:
    """Characters a player asserts by declaring the action."""
    claims = ACTION_RULES[action].claims
    if action is ActionType.EXCHANGE and settings.expansions.inquisitor:
        # No Ambassadors are dealt in the Inquisitor deck
        return (CharacterType.INQUISITOR,)
    return claims
