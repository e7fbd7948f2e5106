"""
Exception types raised by the simulation engine
"""

import numbers
from typing import Iterable


class IPDSimulationError(Exception):
    """Base class for all simulation errors"""


class UnknownStrategyError(IPDSimulationError, ValueError):
    """Raised when a strategy name is not present in the registry"""

    def __init__(self, name: str, known: Iterable[str] = ()):
        self.name = name
        self.known = list(known)
        message = f"Unknown strategy: {name!r}"
        if self.known:
            message += f" (available: {', '.join(self.known)})"
        super().__init__(message)


class InvalidParameterError(IPDSimulationError, ValueError):
    """Raised when a simulation parameter is out of range"""


def require_int(value, name: str, minimum: int) -> int:
    """Validate that ``value`` is an integer no smaller than ``minimum``"""
    # bool is an int subclass but never a meaningful count
    if isinstance(value, bool) or not isinstance(value, numbers.Integral):
        raise InvalidParameterError(f"{name} must be an integer, got {value!r}")
    value = int(value)
    if value < minimum:
        raise InvalidParameterError(f"{name} must be >= {minimum}, got {value}")
    return value
