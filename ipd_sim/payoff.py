"""
Payoff table for the Prisoner's Dilemma
"""

from typing import Dict, Tuple

from .strategies import Move

# Constants for payoffs (standard Prisoner's Dilemma values)
PAYOFF_BOTH_COOPERATE = 3
PAYOFF_BOTH_DEFECT = 1
PAYOFF_DEFECTOR = 5
PAYOFF_COOPERATOR = 0

PAYOFF_MATRIX: Dict[Tuple[Move, Move], Tuple[int, int]] = {
    (Move.COOPERATE, Move.COOPERATE): (PAYOFF_BOTH_COOPERATE, PAYOFF_BOTH_COOPERATE),
    (Move.COOPERATE, Move.DEFECT): (PAYOFF_COOPERATOR, PAYOFF_DEFECTOR),
    (Move.DEFECT, Move.COOPERATE): (PAYOFF_DEFECTOR, PAYOFF_COOPERATOR),
    (Move.DEFECT, Move.DEFECT): (PAYOFF_BOTH_DEFECT, PAYOFF_BOTH_DEFECT),
}

# Every round hands out one of these combined totals
VALID_ROUND_TOTALS = frozenset(a + b for a, b in PAYOFF_MATRIX.values())


def get_payoff(move_a: Move, move_b: Move) -> Tuple[int, int]:
    """Return the (actor, opponent) scores for a pair of simultaneous moves"""
    return PAYOFF_MATRIX[(Move(move_a), Move(move_b))]
