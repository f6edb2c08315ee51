"""
Coup - Rule engine for the bluffing card game.

A deterministic, immutable-state engine for Coup and its expansions.
The engine provides:
- Deck building and dealing
- Action legality checks
- Challenge, block and exchange resolution
- Win detection, including Reformation team victories
- Bot policies for self-play
"""

__version__ = "0.1.0"
