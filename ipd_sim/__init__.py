"""
IPD Sim: Iterated Prisoner's Dilemma matches, round-robin tournaments
and evolutionary population dynamics
"""

from .strategies import (
    Move, Strategy, DetectiveMode, detective_decision,
    AlwaysCooperate, AlwaysDefect, Random, TitForTat,
    Friedman, Joss, TitForTwoTats, Detective,
    ALL_STRATEGIES
)

from .payoff import PAYOFF_MATRIX, VALID_ROUND_TOTALS, get_payoff
from .registry import StrategyRegistry, DEFAULT_REGISTRY, list_strategy_names, create_strategy
from .tournament import (
    RoundRecord, MatchResult, TournamentEntry, TournamentResult,
    Tournament, play_match, run_tournament
)
from .evolution import Agent, GenerationSnapshot, EvolutionarySimulation, elimination_count
from .errors import IPDSimulationError, UnknownStrategyError, InvalidParameterError
from .config import SimulationConfig, load_config
from .utils import format_history, make_rng, setup_logging

__version__ = "1.0.0"
__all__ = [
    # Strategies
    "Move", "Strategy", "DetectiveMode", "detective_decision",
    "AlwaysCooperate", "AlwaysDefect", "Random", "TitForTat",
    "Friedman", "Joss", "TitForTwoTats", "Detective", "ALL_STRATEGIES",

    # Payoffs and registry
    "PAYOFF_MATRIX", "VALID_ROUND_TOTALS", "get_payoff",
    "StrategyRegistry", "DEFAULT_REGISTRY", "list_strategy_names", "create_strategy",

    # Matches and tournaments
    "RoundRecord", "MatchResult", "TournamentEntry", "TournamentResult",
    "Tournament", "play_match", "run_tournament",

    # Evolution
    "Agent", "GenerationSnapshot", "EvolutionarySimulation", "elimination_count",

    # Errors, config and utils
    "IPDSimulationError", "UnknownStrategyError", "InvalidParameterError",
    "SimulationConfig", "load_config",
    "format_history", "make_rng", "setup_logging"
]
