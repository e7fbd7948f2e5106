"""
Registry of the strategies available to matches, tournaments and evolution
"""

from typing import Dict, Iterable, Iterator, List, Type

from .errors import UnknownStrategyError
from .strategies import ALL_STRATEGIES, Strategy


class StrategyRegistry:
    """Fixed, order-preserving table mapping strategy names to their classes"""

    def __init__(self, strategy_classes: Iterable[Type[Strategy]] = ALL_STRATEGIES):
        self._classes: Dict[str, Type[Strategy]] = {}
        for strategy_class in strategy_classes:
            if strategy_class.name in self._classes:
                raise ValueError(f"Duplicate strategy name: {strategy_class.name}")
            self._classes[strategy_class.name] = strategy_class

    def list_strategy_names(self) -> List[str]:
        return list(self._classes)

    def get_class(self, name: str) -> Type[Strategy]:
        try:
            return self._classes[name]
        except KeyError:
            raise UnknownStrategyError(name, self._classes) from None

    def create_strategy(self, name: str, rng=None) -> Strategy:
        """Create a fresh strategy instance by its exact name"""
        return self.get_class(name)(rng=rng)

    def create_all(self, rng=None) -> List[Strategy]:
        """One instance of every registered strategy, in registry order"""
        return [strategy_class(rng=rng) for strategy_class in self._classes.values()]

    def __contains__(self, name) -> bool:
        return name in self._classes

    def __iter__(self) -> Iterator[str]:
        return iter(self._classes)

    def __len__(self) -> int:
        return len(self._classes)


DEFAULT_REGISTRY = StrategyRegistry()


def list_strategy_names() -> List[str]:
    return DEFAULT_REGISTRY.list_strategy_names()


def create_strategy(name: str, rng=None) -> Strategy:
    return DEFAULT_REGISTRY.create_strategy(name, rng=rng)
