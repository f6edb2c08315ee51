"""
Bots module - Self-play opponents.

Provides:
- BotPolicy: Interface for bot decision-making
- RandomPolicy, HonestPolicy, FirstLegalPolicy: Baseline policies
- play_match: Bot-vs-bot match runner
"""

from .policy import BotPolicy, BotDecision, RandomPolicy, HonestPolicy, FirstLegalPolicy
from .self_play import MatchRecord, MatchStalled, play_match

__all__ = [
    "BotPolicy",
    "BotDecision",
    "RandomPolicy",
    "HonestPolicy",
    "FirstLegalPolicy",
    "MatchRecord",
    "MatchStalled",
    "play_match",
]
