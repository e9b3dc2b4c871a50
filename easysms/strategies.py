"""Gateway ordering strategies.

A strategy decides the order in which candidate gateways are attempted.
Every strategy returns a new list holding a permutation of its input and
never mutates the sequence it was given.
"""

import random
from abc import ABC, abstractmethod
from typing import Dict, List, Optional, Sequence, Type


class Strategy(ABC):
    """Abstract base class for gateway ordering strategies."""

    @abstractmethod
    def apply(self, gateways: Sequence[str]) -> List[str]:
        """Return the gateway names in the order they should be attempted.

        Args:
            gateways: Candidate gateway names.

        Returns:
            New list, a permutation of ``gateways``.
        """
        pass


class OrderStrategy(Strategy):
    """Attempt gateways in the order they were given."""

    def apply(self, gateways: Sequence[str]) -> List[str]:
        return list(gateways)


class RandomStrategy(Strategy):
    """Attempt gateways in a uniformly random order, reshuffled on every call.

    Args:
        rng: Optional random source. Pass a seeded ``random.Random`` for
            reproducible orders in tests; defaults to the module level source.
    """

    def __init__(self, rng: Optional[random.Random] = None):
        self._rng = rng or random

    def apply(self, gateways: Sequence[str]) -> List[str]:
        result = list(gateways)
        # Fisher-Yates
        for i in range(len(result) - 1, 0, -1):
            j = self._rng.randint(0, i)
            result[i], result[j] = result[j], result[i]
        return result


STRATEGIES: Dict[str, Type[Strategy]] = {
    "order": OrderStrategy,
    "random": RandomStrategy,
}


def get_strategy(name: str) -> Strategy:
    """Build the strategy configured under ``name``.

    Raises:
        ValueError: If no strategy is known under that name.
    """
    try:
        strategy_class = STRATEGIES[name.lower()]
    except KeyError:
        raise ValueError(
            f"Unknown strategy '{name}', expected one of: {sorted(STRATEGIES)}"
        ) from None
    return strategy_class()
