"""
Strategy implementations for the Iterated Prisoner's Dilemma
Every strategy decides only from the two move histories it is shown
"""

from abc import ABC, abstractmethod
from enum import Enum
from typing import Sequence, Tuple

import numpy as np


class Move(str, Enum):
    """A single-round choice"""
    COOPERATE = 'C'
    DEFECT = 'D'

    def __str__(self) -> str:
        return self.value


C = Move.COOPERATE
D = Move.DEFECT


class Strategy(ABC):
    """Base class for all IPD strategies

    ``rng`` is the entropy source for stochastic strategies. Anything with a
    ``random()`` method returning a float in [0, 1) will do, which lets tests
    swap in a scripted source.
    """

    name = "Strategy"

    def __init__(self, rng=None):
        self.rng = rng if rng is not None else np.random.default_rng()

    @abstractmethod
    def make_move(self, own_history: Sequence[Move], opponent_history: Sequence[Move]) -> Move:
        """Return Move.COOPERATE or Move.DEFECT"""
        pass

    def reset(self):
        """Reset strategy state for new match"""
        pass

    def clone(self) -> "Strategy":
        """Fresh instance of the same strategy sharing this random source"""
        return self.__class__(rng=self.rng)

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}()"


class AlwaysCooperate(Strategy):
    """Always cooperates"""
    name = "Always Cooperate"

    def make_move(self, own_history, opponent_history):
        return C


class AlwaysDefect(Strategy):
    """Always defects"""
    name = "Always Defect"

    def make_move(self, own_history, opponent_history):
        return D


class Random(Strategy):
    """Randomly cooperates or defects"""
    name = "Random"
    p_cooperate = 0.5

    def make_move(self, own_history, opponent_history):
        return C if self.rng.random() < self.p_cooperate else D


def tit_for_tat_move(opponent_history: Sequence[Move]) -> Move:
    """Cooperate first, then copy the opponent's last move"""
    if not opponent_history:
        return C
    return Move(opponent_history[-1])


class TitForTat(Strategy):
    """Cooperates first, then copies opponent's last move"""
    name = "Tit For Tat"

    def make_move(self, own_history, opponent_history):
        return tit_for_tat_move(opponent_history)


class Friedman(Strategy):
    """Cooperates until opponent defects, then always defects"""
    name = "Friedman (Grudger)"

    def make_move(self, own_history, opponent_history):
        # The grudge is fully recoverable from the opponent's history
        return D if D in opponent_history else C


class Joss(Strategy):
    """Tit-for-Tat that sneaks in a defection 10% of the time"""
    name = "Joss (Sneaky Tit For Tat)"
    sneak_prob = 0.1

    def make_move(self, own_history, opponent_history):
        base_move = tit_for_tat_move(opponent_history)
        if self.rng.random() < self.sneak_prob:
            return D
        return base_move


class TitForTwoTats(Strategy):
    """Only retaliates after two consecutive defections"""
    name = "Tit For Two Tats"

    def make_move(self, own_history, opponent_history):
        if len(opponent_history) < 2:
            return C
        if opponent_history[-1] == D and opponent_history[-2] == D:
            return D
        return C


class DetectiveMode(Enum):
    PROBING = "probing"
    TIT_FOR_TAT = "tit_for_tat"
    ALWAYS_DEFECT = "always_defect"


DETECTIVE_OPENING = (C, D, C, C)


def detective_decision(own_history: Sequence[Move], opponent_history: Sequence[Move],
                       mode: DetectiveMode) -> Tuple[Move, DetectiveMode]:
    """Pure Detective transition: returns the move and the (possibly new) mode.

    Rounds 1-4 play the fixed opening. On the first round after it, the mode
    is chosen once: Tit-for-Tat if the opponent defected during the opening,
    otherwise Always Defect.
    """
    round_index = len(own_history)
    if round_index < len(DETECTIVE_OPENING):
        return DETECTIVE_OPENING[round_index], mode

    if mode is DetectiveMode.PROBING:
        opening_replies = opponent_history[:len(DETECTIVE_OPENING)]
        if D in opening_replies:
            mode = DetectiveMode.TIT_FOR_TAT
        else:
            mode = DetectiveMode.ALWAYS_DEFECT

    if mode is DetectiveMode.ALWAYS_DEFECT:
        return D, mode
    return tit_for_tat_move(opponent_history), mode


class Detective(Strategy):
    """Probes with C-D-C-C, then exploits pushovers or plays Tit-for-Tat"""
    name = "Detective"

    def __init__(self, rng=None):
        super().__init__(rng)
        self.mode = DetectiveMode.PROBING

    def make_move(self, own_history, opponent_history):
        move, self.mode = detective_decision(own_history, opponent_history, self.mode)
        return move

    def reset(self):
        super().reset()
        self.mode = DetectiveMode.PROBING


ALL_STRATEGIES = (
    AlwaysCooperate,
    AlwaysDefect,
    Random,
    TitForTat,
    Friedman,
    Joss,
    TitForTwoTats,
    Detective,
)
