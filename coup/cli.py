"""
Coup CLI - Command-line interface for the engine.

Usage:
    coup rules                     Print the action table
    coup simulate [--games N]      Run seeded bot-vs-bot matches
"""

import argparse
import random
import sys
from collections import Counter


def main(argv=None):
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        description="Coup - Rule engine for the bluffing card game",
        prog="coup",
    )
    parser.add_argument("--log-level", default=None, help="Logging level (default from COUP_LOG_LEVEL)")
    subparsers = parser.add_subparsers(dest="command", help="Commands")

    # Rules command
    rules_parser = subparsers.add_parser("rules", help="Print the action table")
    rules_parser.add_argument("--inquisitor", action="store_true", help="Use the Inquisitor deck")

    # Simulate command
    sim_parser = subparsers.add_parser("simulate", help="Run bot-vs-bot matches")
    sim_parser.add_argument("--games", type=int, default=10, help="Number of matches")
    sim_parser.add_argument("--players", type=int, default=4, help="Players per match")
    sim_parser.add_argument("--seed", type=int, default=None, help="Seed for reproducible runs")
    sim_parser.add_argument(
        "--policy", choices=["random", "honest", "first"], default="random",
        help="Policy used by every seat",
    )
    sim_parser.add_argument("--inquisitor", action="store_true", help="Use the Inquisitor deck")
    sim_parser.add_argument("--reformation", action="store_true", help="Enable team play")

    args = parser.parse_args(argv)

    from .config import configure_logging
    configure_logging(args.log_level)

    if args.command == "rules":
        cmd_rules(args)
    elif args.command == "simulate":
        cmd_simulate(args)
    else:
        parser.print_help()
        sys.exit(1)


def cmd_rules(args):
    """Print the action table for a ruleset."""
    from .engine_core.catalog import ACTION_RULES, blocking_cards, claimed_characters, is_enabled
    from .engine_core.state import Expansions, GameSettings

    settings = GameSettings(expansions=Expansions(inquisitor=args.inquisitor, reformation=True))
    print(f"{'Action':<12} {'Cost':>4}  {'Target':<6}  {'Blocked by':<32} Claims")
    for action, rule in ACTION_RULES.items():
        if not is_enabled(action, settings):
            continue
        blockers = ", ".join(c.value for c in blocking_cards(action, settings)) or "-"
        claims = ", ".join(c.value for c in claimed_characters(action, settings)) or "-"
        target = "yes" if rule.needs_target else "no"
        print(f"{action.value:<12} {rule.cost:>4}  {target:<6}  {blockers:<32} {claims}")


def cmd_simulate(args):
    """Run matches between bots and print a summary."""
    from .bots import FirstLegalPolicy, HonestPolicy, MatchStalled, RandomPolicy, play_match
    from .engine_core import GameEngine, GameError, GameSettings, PlayerSeat
    from .engine_core.state import Expansions

    policy_types = {
        "random": RandomPolicy,
        "honest": HonestPolicy,
        "first": FirstLegalPolicy,
    }

    try:
        settings = GameSettings(
            expansions=Expansions(inquisitor=args.inquisitor, reformation=args.reformation),
        )
    except GameError as e:
        print(f"Error: {e.message}")
        sys.exit(1)

    master = random.Random(args.seed)
    wins: Counter = Counter()
    total_steps = 0

    for game in range(args.games):
        seed = master.randrange(2**32)
        engine = GameEngine(rng=random.Random(seed))
        seats = [PlayerSeat(f"p{i + 1}", f"Bot {i + 1}") for i in range(args.players)]
        try:
            state = engine.initialize(seats, settings)
        except GameError as e:
            print(f"Error: {e.message}")
            sys.exit(1)

        policies = {}
        for i, seat in enumerate(seats):
            policy_cls = policy_types[args.policy]
            policies[seat.player_id] = policy_cls() if policy_cls is FirstLegalPolicy else policy_cls(seed + i)

        try:
            record = play_match(engine, state, policies, rng=random.Random(seed))
        except MatchStalled as e:
            print(f"Game {game + 1}: stalled ({e})")
            continue

        final = record.final_state
        team = f" (team: {', '.join(final.winning_team)})" if len(final.winning_team) > 1 else ""
        print(f"Game {game + 1}: winner {final.winner_id}{team} after {record.steps} steps")
        wins[final.winner_id] += 1
        total_steps += record.steps

    print("\nWins:")
    for player_id, count in sorted(wins.items()):
        print(f"  {player_id}: {count}")
    if args.games:
        print(f"Average steps: {total_steps / args.games:.1f}")


if __name__ == "__main__":
    main()
