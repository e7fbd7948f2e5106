"""
Match and tournament engine for IPD simulations
Handles match execution and leaderboard aggregation
"""

import logging
from collections import defaultdict
from dataclasses import dataclass, field
from typing import Dict, List, Sequence, Tuple

import pandas as pd
from tqdm import tqdm

from .config import DEFAULT_ROUNDS_PER_MATCH
from .errors import require_int
from .payoff import get_payoff
from .strategies import Move, Strategy

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RoundRecord:
    """One round of a match (round_number is 1-based)"""
    round_number: int
    move_a: Move
    move_b: Move
    score_a: int
    score_b: int


@dataclass(frozen=True)
class MatchResult:
    """Result of a single match between two strategies"""
    strategy_a: str
    strategy_b: str
    score_a: int
    score_b: int
    rounds: Tuple[RoundRecord, ...] = ()

    @property
    def rounds_played(self) -> int:
        return len(self.rounds)

    @property
    def strategy_a_moves(self) -> List[Move]:
        return [r.move_a for r in self.rounds]

    @property
    def strategy_b_moves(self) -> List[Move]:
        return [r.move_b for r in self.rounds]

    def cooperation_rate(self, side: str = "a") -> float:
        """Share of rounds in which the given seat ("a" or "b") cooperated"""
        if side not in ("a", "b"):
            raise ValueError(f"side must be 'a' or 'b', got {side!r}")
        moves = self.strategy_a_moves if side == "a" else self.strategy_b_moves
        if not moves:
            return 0.0
        return moves.count(Move.COOPERATE) / len(moves)

    def to_dict(self) -> Dict:
        return {
            'strategy_a': self.strategy_a,
            'strategy_b': self.strategy_b,
            'moves': [(r.move_a.value, r.move_b.value) for r in self.rounds],
            'scores': (self.score_a, self.score_b),
            'rounds': self.rounds_played,
        }


def play_match(strategy_a: Strategy, strategy_b: Strategy,
               rounds: int = DEFAULT_ROUNDS_PER_MATCH) -> MatchResult:
    """Play ``rounds`` rounds between two strategies

    Both strategies are reset first. Each side only ever sees tuple snapshots
    of the move sequences, never the other strategy object.
    """
    rounds = require_int(rounds, "rounds", 0)

    if strategy_b is strategy_a:
        # Self-play: the second seat gets its own phase state
        strategy_b = strategy_a.clone()

    strategy_a.reset()
    strategy_b.reset()

    moves_a: List[Move] = []
    moves_b: List[Move] = []
    records: List[RoundRecord] = []
    score_a = 0
    score_b = 0

    for round_number in range(1, rounds + 1):
        # One read-only snapshot per side, shared by both seats
        seen_a = tuple(moves_a)
        seen_b = tuple(moves_b)
        move_a = Move(strategy_a.make_move(seen_a, seen_b))
        move_b = Move(strategy_b.make_move(seen_b, seen_a))

        moves_a.append(move_a)
        moves_b.append(move_b)

        payoff_a, payoff_b = get_payoff(move_a, move_b)
        score_a += payoff_a
        score_b += payoff_b

        records.append(RoundRecord(round_number, move_a, move_b, payoff_a, payoff_b))

    logger.debug("%s vs %s: %d-%d over %d rounds",
                 strategy_a.name, strategy_b.name, score_a, score_b, rounds)

    return MatchResult(
        strategy_a=strategy_a.name,
        strategy_b=strategy_b.name,
        score_a=score_a,
        score_b=score_b,
        rounds=tuple(records),
    )


@dataclass(frozen=True)
class TournamentEntry:
    """Leaderboard line for one strategy name"""
    name: str
    total_score: int
    avg_score: float
    matches: int


@dataclass
class TournamentResult:
    """Complete tournament results"""
    entries: List[TournamentEntry]
    match_results: List[MatchResult] = field(default_factory=list)
    rounds_per_match: int = DEFAULT_ROUNDS_PER_MATCH

    def get_summary_stats(self) -> pd.DataFrame:
        """Get summary statistics for all strategies, in leaderboard order"""
        moves = defaultdict(list)
        for match in self.match_results:
            moves[match.strategy_a].extend(match.strategy_a_moves)
            moves[match.strategy_b].extend(match.strategy_b_moves)

        stats = []
        for rank, entry in enumerate(self.entries, 1):
            played = moves[entry.name]
            stats.append({
                'rank': rank,
                'strategy': entry.name,
                'total_score': entry.total_score,
                'avg_score_per_match': entry.avg_score,
                'avg_score_per_move': entry.total_score / len(played) if played else 0.0,
                'matches_played': entry.matches,
                'total_moves': len(played),
                'cooperation_rate': played.count(Move.COOPERATE) / len(played) if played else 0.0,
            })
        columns = ['rank', 'strategy', 'total_score', 'avg_score_per_match', 'avg_score_per_move',
                   'matches_played', 'total_moves', 'cooperation_rate']
        return pd.DataFrame(stats, columns=columns)


class Tournament:
    """All-pairs tournament over a strategy roster, self-play included"""

    def __init__(self, strategies: Sequence[Strategy], rounds_per_match: int = DEFAULT_ROUNDS_PER_MATCH,
                 verbose: bool = False):
        self.strategies = list(strategies)
        self.rounds_per_match = require_int(rounds_per_match, "rounds_per_match", 1)
        self.verbose = verbose

    def run_match(self, strategy_a: Strategy, strategy_b: Strategy) -> MatchResult:
        """Run a single match between two strategies"""
        return play_match(strategy_a, strategy_b, self.rounds_per_match)

    def run_tournament(self) -> TournamentResult:
        """Run every ordered pairing (i, j), including i == j"""
        totals: Dict[str, int] = {}
        matches: Dict[str, int] = {}
        for strategy in self.strategies:
            totals.setdefault(strategy.name, 0)
            matches.setdefault(strategy.name, 0)

        match_results = []
        total_matches = len(self.strategies) ** 2
        pbar = tqdm(total=total_matches, desc="Running matches", disable=not self.verbose)

        for strategy_a in self.strategies:
            for strategy_b in self.strategies:
                result = self.run_match(strategy_a, strategy_b)
                match_results.append(result)

                totals[result.strategy_a] += result.score_a
                matches[result.strategy_a] += 1
                totals[result.strategy_b] += result.score_b
                matches[result.strategy_b] += 1

                pbar.update(1)

        pbar.close()

        entries = [
            TournamentEntry(name=name, total_score=total, avg_score=total / matches[name], matches=matches[name])
            for name, total in totals.items()
        ]
        # Stable sort: ties keep roster order
        entries.sort(key=lambda e: e.total_score, reverse=True)

        if entries:
            logger.info("Tournament of %d matches finished, leader: %s (%d)",
                        total_matches, entries[0].name, entries[0].total_score)

        return TournamentResult(entries=entries, match_results=match_results,
                                rounds_per_match=self.rounds_per_match)


def run_tournament(strategies: Sequence[Strategy],
                   rounds_per_match: int = DEFAULT_ROUNDS_PER_MATCH) -> List[TournamentEntry]:
    """Ranked leaderboard for a round-robin over ``strategies``"""
    return Tournament(strategies, rounds_per_match).run_tournament().entries
