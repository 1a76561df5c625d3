"""
Injectable random source shared by the shoe and the genetic engine.

Every stochastic call in the project goes through a Randomizer instance
passed in by the caller. Production code seeds one NumpyRandomizer at the
start of a session; tests substitute a scripted subclass.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

import numpy as np


class Randomizer(ABC):

    @abstractmethod
    def event_did_happen(self, probability: float) -> bool:
        """Return True with the given probability."""

    @abstractmethod
    def pick_one(self, options: bytes) -> int:
        """Return one symbol (a byte value) drawn uniformly from options."""

    @abstractmethod
    def number_between(self, low: int, high: int) -> int:
        """Return an integer drawn uniformly from [low, high], both inclusive."""


class NumpyRandomizer(Randomizer):
    """Randomizer backed by a numpy Generator.

    Args:
        seed: Seed for numpy.random.default_rng. None for a non-deterministic run.

    Examples:
        >>> a, b = NumpyRandomizer(7), NumpyRandomizer(7)
        >>> a.number_between(1, 10) == b.number_between(1, 10)
        True
    """

    def __init__(self, seed: int | None = None) -> None:
        self.seed = seed
        self._rng = np.random.default_rng(seed)

    def event_did_happen(self, probability: float) -> bool:
        return bool(self._rng.random() < probability)

    def pick_one(self, options: bytes) -> int:
        if not options:
            raise ValueError("Cannot pick from an empty alphabet.")
        return options[int(self._rng.integers(len(options)))]

    def number_between(self, low: int, high: int) -> int:
        if high < low:
            raise ValueError(f"Empty range: [{low}, {high}]")
        return int(self._rng.integers(low, high, endpoint=True))
