"""
Evolutionary IPD simulation
Each generation plays a full round-robin between agents, then the weakest
agents are replaced by clones of the strongest (truncation selection).
"""

import logging
import math
from dataclasses import dataclass, replace
from types import MappingProxyType
from typing import Dict, List, Mapping, Optional, Tuple

import numpy as np
import pandas as pd
from tqdm import tqdm

from .config import DEFAULT_ELIMINATION_RATE, DEFAULT_GENERATION_ROUNDS, DEFAULT_POPULATION_PER_STRATEGY
from .errors import InvalidParameterError, require_int
from .registry import DEFAULT_REGISTRY, StrategyRegistry
from .tournament import play_match
from .utils import make_rng

logger = logging.getLogger(__name__)


@dataclass
class Agent:
    """Population member tagged with a strategy name; only score changes"""
    id: int
    strategy_name: str
    score: int = 0


@dataclass(frozen=True)
class GenerationSnapshot:
    generation: int
    populations: Mapping[str, int]
    agents: Tuple[Agent, ...]

    @property
    def population_size(self) -> int:
        return len(self.agents)


def elimination_count(population_size: int, rate: float = DEFAULT_ELIMINATION_RATE) -> int:
    """Number of agents replaced per generation; never below one"""
    return max(1, math.floor(population_size * rate))


class EvolutionarySimulation:
    """Population of strategy-tagged agents evolving by truncation selection

    Generation 0 is the initial population. Each ``run_generation`` call
    evaluates the current population and produces the next one; the caller
    decides when to stop.
    """

    def __init__(self, count_per_strategy: int = DEFAULT_POPULATION_PER_STRATEGY,
                 registry: StrategyRegistry = DEFAULT_REGISTRY,
                 rounds_per_match: int = DEFAULT_GENERATION_ROUNDS,
                 elimination_rate: float = DEFAULT_ELIMINATION_RATE,
                 rng=None, seed: Optional[int] = None, verbose: bool = False):
        if not 0 < elimination_rate < 1:
            raise InvalidParameterError(f"elimination_rate must be in (0, 1), got {elimination_rate}")
        self.registry = registry
        self.rounds_per_match = require_int(rounds_per_match, "rounds_per_match", 0)
        self.elimination_rate = elimination_rate
        self.rng = rng if rng is not None else make_rng(seed)
        self.verbose = verbose

        self._agents: List[Agent] = []
        self._generation = 0
        self._next_id = 0
        self._history: List[GenerationSnapshot] = []

        self.initialize(count_per_strategy)

    def initialize(self, count_per_strategy: int):
        """Start over with ``count_per_strategy`` agents of every strategy"""
        count_per_strategy = require_int(count_per_strategy, "count_per_strategy", 1)

        self._agents = []
        self._generation = 0
        self._next_id = 0
        self._history = []

        for name in self.registry.list_strategy_names():
            for _ in range(count_per_strategy):
                self._agents.append(self._new_agent(name))

        logger.info("Initialized population of %d agents (%d per strategy)",
                    len(self._agents), count_per_strategy)
        self._record_generation()

    def reset(self, count_per_strategy: int = DEFAULT_POPULATION_PER_STRATEGY):
        self.initialize(count_per_strategy)

    def _new_agent(self, strategy_name: str) -> Agent:
        agent = Agent(id=self._next_id, strategy_name=strategy_name)
        self._next_id += 1
        return agent

    def _record_generation(self) -> GenerationSnapshot:
        snapshot = GenerationSnapshot(
            generation=self._generation,
            populations=MappingProxyType(self.population_counts()),
            agents=tuple(replace(agent) for agent in self._agents),
        )
        self._history.append(snapshot)
        return snapshot

    def _evaluate(self):
        """Round-robin over ordered pairs of distinct agents"""
        for agent in self._agents:
            agent.score = 0

        n = len(self._agents)
        pbar = tqdm(total=n * (n - 1), desc=f"Generation {self._generation + 1}",
                    disable=not self.verbose)

        for i, agent_a in enumerate(self._agents):
            for j, agent_b in enumerate(self._agents):
                if i == j:
                    continue
                strategy_a = self.registry.create_strategy(agent_a.strategy_name, rng=self.rng)
                strategy_b = self.registry.create_strategy(agent_b.strategy_name, rng=self.rng)

                result = play_match(strategy_a, strategy_b, self.rounds_per_match)

                agent_a.score += result.score_a
                agent_b.score += result.score_b
                pbar.update(1)

        pbar.close()

    def run_generation(self) -> GenerationSnapshot:
        """Evaluate the current population, then select and reproduce"""
        self._evaluate()

        # Stable: equal scores keep their relative order
        ranked = sorted(self._agents, key=lambda agent: agent.score, reverse=True)

        cull = elimination_count(len(ranked), self.elimination_rate)
        survivors = ranked[:-cull] if cull < len(ranked) else []
        parents = survivors[:cull]
        offspring = [self._new_agent(parent.strategy_name) for parent in parents]

        if len(parents) < cull:
            logger.warning("Only %d survivors to replace %d eliminated agents; population shrinks to %d",
                           len(survivors), cull, len(survivors) + len(offspring))

        eliminated = ranked[len(survivors):]
        logger.debug("Eliminated %s, cloned %s",
                     [a.strategy_name for a in eliminated], [a.strategy_name for a in parents])

        self._agents = survivors + offspring
        self._generation += 1
        snapshot = self._record_generation()

        if ranked:
            logger.info("Generation %d: best %s (%d), worst %s (%d)", self._generation,
                        ranked[0].strategy_name, ranked[0].score,
                        ranked[-1].strategy_name, ranked[-1].score)
        return snapshot

    def run_generations(self, count: int) -> List[GenerationSnapshot]:
        """Advance ``count`` generations in one call"""
        count = require_int(count, "count", 1)
        return [self.run_generation() for _ in range(count)]

    def current_generation(self) -> int:
        return self._generation

    def population_counts(self) -> Dict[str, int]:
        """Agents per strategy, every registered strategy listed"""
        counts = {name: 0 for name in self.registry.list_strategy_names()}
        for agent in self._agents:
            counts[agent.strategy_name] += 1
        return counts

    def history(self) -> List[GenerationSnapshot]:
        return list(self._history)

    def agents(self) -> List[Agent]:
        return [replace(agent) for agent in self._agents]

    def population_history_frame(self) -> pd.DataFrame:
        """One row per generation, one column per strategy"""
        frame = pd.DataFrame(
            [dict(snapshot.populations) for snapshot in self._history],
            index=pd.Index([snapshot.generation for snapshot in self._history], name='generation'),
            columns=self.registry.list_strategy_names(),
        )
        return frame.fillna(0).astype(np.int64)
