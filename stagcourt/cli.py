"""
Stagcourt CLI - Command-line interface for the engine.

Usage:
    stagcourt simulate [--players N] [--seed S] [--games G]    Play bot games
    stagcourt show-config [--config FILE]                      Print the effective config
"""

import argparse
import sys

import yaml

from .config import load_config
from .logger import setup_logging


def main(argv=None):
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        description="Stagcourt - Rules engine for a trick-drafting card game",
        prog="stagcourt",
    )
    parser.add_argument("--config", "-c", help="Path to YAML config file")
    subparsers = parser.add_subparsers(dest="command", help="Commands")

    # Simulate command
    simulate_parser = subparsers.add_parser("simulate", help="Play bot-vs-bot games")
    simulate_parser.add_argument("--players", type=int, default=3, help="Number of seats")
    simulate_parser.add_argument("--seed", type=int, help="Seed of the first game")
    simulate_parser.add_argument("--games", type=int, default=1, help="Number of games")
    simulate_parser.add_argument(
        "--policy", choices=["random", "first"], default="random", help="Policy for every seat"
    )
    simulate_parser.add_argument("--max-steps", type=int, default=5000, help="Action cap per game")
    simulate_parser.add_argument("--show-log", action="store_true", help="Print each game's log")

    # Show config command
    subparsers.add_parser("show-config", help="Print the effective configuration")

    args = parser.parse_args(argv)

    if args.command == "simulate":
        cmd_simulate(args)
    elif args.command == "show-config":
        cmd_show_config(args)
    else:
        parser.print_help()
        sys.exit(1)


def cmd_simulate(args):
    """Play bot games and print a summary of each."""
    from collections import Counter

    from .bots import POLICIES, RandomPolicy, SimulationError, simulate_game

    config = load_config(args.config)
    setup_logging(config.logging)

    reasons = Counter()
    for i in range(args.games):
        seed = args.seed + i if args.seed is not None else None
        policy = RandomPolicy(seed) if args.policy == "random" else POLICIES[args.policy]()
        try:
            result = simulate_game(
                num_players=args.players,
                seed=seed,
                policy=policy,
                max_steps=args.max_steps,
                rules=config.rules,
            )
        except (SimulationError, ValueError) as e:
            print(f"Error: game {i + 1} (seed={seed}): {e}")
            sys.exit(1)

        reasons[result.win_reason or "unfinished"] += 1
        print(
            f"Game {i + 1} (seed={seed}): winner={result.winner} "
            f"reason={result.win_reason} turns={result.turns} steps={result.steps}"
        )
        if args.show_log:
            for entry in result.final_state.log:
                print(f"  {entry.message}")

    if args.games > 1:
        print("\nOutcomes:")
        for reason, count in reasons.most_common():
            print(f"  {reason}: {count}")


def cmd_show_config(args):
    """Print the effective configuration as YAML."""
    config = load_config(args.config)
    print(yaml.safe_dump(config.model_dump(), sort_keys=False), end="")


if __name__ == "__main__":
    main()
