"""Injectable random source used by the generators and simulators"""

import random
from typing import Optional, Protocol, Sequence, TypeVar

T = TypeVar("T")


class RandomSource(Protocol):
    """Anything that can produce uniform floats in [0, 1)"""

    def next_float(self) -> float: ...


class PythonRandomSource:
    """
    RandomSource backed by the stdlib Mersenne Twister.

    Without a seed the generator is initialised from OS entropy; with a seed
    the stream is reproducible, which is what tests rely on.
    """

    def __init__(self, seed: Optional[int] = None):
        self.seed = seed
        self._random = random.Random(seed)

    def next_float(self) -> float:
        return self._random.random()


def uniform(rng: RandomSource, low: float, high: float) -> float:
    """Uniform draw in [low, high)"""
    return low + rng.next_float() * (high - low)


def pick(rng: RandomSource, options: Sequence[T]) -> T:
    """Uniform choice from a non-empty sequence"""
    index = min(int(rng.next_float() * len(options)), len(options) - 1)
    return options[index]


def chance(rng: RandomSource, probability: float) -> bool:
    """Single Bernoulli trial"""
    return rng.next_float() < probability
