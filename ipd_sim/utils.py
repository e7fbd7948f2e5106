"""
Small helpers shared by the engine and the command line runner
"""

import logging
from typing import Optional, Sequence

import numpy as np


def make_rng(seed: Optional[int] = None) -> np.random.Generator:
    """Seeded random source for the stochastic strategies"""
    return np.random.default_rng(seed)


def format_history(own_history: Sequence, opponent_history: Sequence) -> str:
    """Format match history as one line per round"""
    if not own_history:
        return "No previous rounds."
    lines = []
    for i, (own, opp) in enumerate(zip(own_history, opponent_history), 1):
        lines.append(f"Round {i}: You={own}, Opponent={opp}")
    return "\n".join(lines)


def setup_logging(level: str = "INFO"):
    """Configure console logging for the runner"""
    numeric_level = getattr(logging, str(level).upper(), None)
    if not isinstance(numeric_level, int):
        raise ValueError(f"Invalid log level: {level}")
    logging.basicConfig(
        level=numeric_level,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        handlers=[logging.StreamHandler()],
    )
