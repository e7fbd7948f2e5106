"""
Simulation settings, read from the environment (and an optional .env file)
"""

import logging
import os
from dataclasses import dataclass
from typing import Optional

from dotenv import load_dotenv

from .errors import InvalidParameterError

logger = logging.getLogger(__name__)

DEFAULT_ROUNDS_PER_MATCH = 200
DEFAULT_GENERATION_ROUNDS = 200
DEFAULT_POPULATION_PER_STRATEGY = 25
DEFAULT_ELIMINATION_RATE = 0.05


@dataclass
class SimulationConfig:
    rounds_per_match: int = DEFAULT_ROUNDS_PER_MATCH
    generation_rounds: int = DEFAULT_GENERATION_ROUNDS
    population_per_strategy: int = DEFAULT_POPULATION_PER_STRATEGY
    elimination_rate: float = DEFAULT_ELIMINATION_RATE
    seed: Optional[int] = None
    log_level: str = "INFO"


def _read(name: str, cast, default):
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return cast(raw.strip())
    except ValueError:
        raise InvalidParameterError(f"{name} has an invalid value: {raw!r}") from None


def load_config(env_file: Optional[str] = None) -> SimulationConfig:
    """Build a SimulationConfig from IPD_* environment variables

    Values already present in the environment win over the .env file.
    """
    if load_dotenv(env_file):
        logger.debug("Environment variables loaded from %s", env_file or ".env")

    return SimulationConfig(
        rounds_per_match=_read("IPD_ROUNDS_PER_MATCH", int, DEFAULT_ROUNDS_PER_MATCH),
        generation_rounds=_read("IPD_GENERATION_ROUNDS", int, DEFAULT_GENERATION_ROUNDS),
        population_per_strategy=_read("IPD_POPULATION_PER_STRATEGY", int, DEFAULT_POPULATION_PER_STRATEGY),
        elimination_rate=_read("IPD_ELIMINATION_RATE", float, DEFAULT_ELIMINATION_RATE),
        seed=_read("IPD_SEED", int, None),
        log_level=_read("IPD_LOG_LEVEL", str, "INFO").upper(),
    )
