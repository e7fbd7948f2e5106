#!/usr/bin/env python3
"""
Command line runner for matches, tournaments and evolutionary runs
"""

import argparse
import sys
from typing import List, Optional

from .config import load_config
from .errors import IPDSimulationError
from .evolution import EvolutionarySimulation
from .registry import DEFAULT_REGISTRY
from .tournament import Tournament, play_match
from .utils import format_history, make_rng, setup_logging


def run_match_command(args, rng) -> int:
    strategy_a = DEFAULT_REGISTRY.create_strategy(args.strategy_a, rng=rng)
    strategy_b = DEFAULT_REGISTRY.create_strategy(args.strategy_b, rng=rng)
    result = play_match(strategy_a, strategy_b, args.rounds)

    print(f"{result.strategy_a} vs {result.strategy_b}")
    if args.show_rounds:
        print(format_history(result.strategy_a_moves, result.strategy_b_moves))
    print(f"Final score: {result.score_a} - {result.score_b}")
    return 0


def run_tournament_command(args, rng) -> int:
    strategies = DEFAULT_REGISTRY.create_all(rng=rng)
    tournament = Tournament(strategies, rounds_per_match=args.rounds, verbose=args.verbose)
    result = tournament.run_tournament()

    print("\nTOURNAMENT LEADERBOARD")
    print(result.get_summary_stats().to_string(index=False))
    return 0


def run_evolve_command(args, rng) -> int:
    simulation = EvolutionarySimulation(
        count_per_strategy=args.population,
        rounds_per_match=args.rounds,
        elimination_rate=args.elimination_rate,
        rng=rng,
        verbose=args.verbose,
    )
    for snapshot in simulation.run_generations(args.generations):
        leader = max(snapshot.populations, key=snapshot.populations.get)
        print(f"Generation {snapshot.generation}: leader {leader} ({snapshot.populations[leader]} agents)")

    print("\nPOPULATION HISTORY")
    print(simulation.population_history_frame().to_string())
    return 0


def build_parser(config) -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Iterated Prisoner's Dilemma simulator")
    parser.add_argument("--seed", type=int, default=config.seed,
                        help="Seed for the random strategies (default: IPD_SEED or unseeded)")
    parser.add_argument("--log-level", type=str, default=config.log_level,
                        help="Logging level (default: IPD_LOG_LEVEL or INFO)")
    parser.add_argument("--verbose", "-v", action="store_true",
                        help="Show progress bars")
    subparsers = parser.add_subparsers(dest="command", required=True)

    match_parser = subparsers.add_parser("match", help="Play a single match")
    match_parser.add_argument("strategy_a", choices=DEFAULT_REGISTRY.list_strategy_names())
    match_parser.add_argument("strategy_b", choices=DEFAULT_REGISTRY.list_strategy_names())
    match_parser.add_argument("--rounds", type=int, default=config.rounds_per_match,
                              help=f"Rounds to play (default: {config.rounds_per_match})")
    match_parser.add_argument("--show-rounds", action="store_true",
                              help="Print every round")
    match_parser.set_defaults(handler=run_match_command)

    tournament_parser = subparsers.add_parser("tournament", help="Round-robin over every strategy")
    tournament_parser.add_argument("--rounds", type=int, default=config.rounds_per_match,
                                   help=f"Rounds per match (default: {config.rounds_per_match})")
    tournament_parser.set_defaults(handler=run_tournament_command)

    evolve_parser = subparsers.add_parser("evolve", help="Run the evolutionary simulation")
    evolve_parser.add_argument("--generations", type=int, default=10,
                               help="Generations to advance (default: 10)")
    evolve_parser.add_argument("--population", type=int, default=config.population_per_strategy,
                               help=f"Initial agents per strategy (default: {config.population_per_strategy})")
    evolve_parser.add_argument("--rounds", type=int, default=config.generation_rounds,
                               help=f"Rounds per match (default: {config.generation_rounds})")
    evolve_parser.add_argument("--elimination-rate", type=float, default=config.elimination_rate,
                               help=f"Fraction replaced per generation (default: {config.elimination_rate})")
    evolve_parser.set_defaults(handler=run_evolve_command)

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    try:
        config = load_config()
        args = build_parser(config).parse_args(argv)
        setup_logging(args.log_level)
        return args.handler(args, make_rng(args.seed))
    except (IPDSimulationError, ValueError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 2


if __name__ == "__main__":
    sys.exit(main())
