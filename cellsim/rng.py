# cellsim/rng.py
import numpy as np


class RandomSource:
    """
    The single source of randomness for a simulation run.

    Wraps a seedable numpy Generator and is passed explicitly to every
    operation that draws random numbers, so a run is reproducible from its seed.
    """

    def __init__(self, seed=None):
        self.seed = seed
        self._generator = np.random.default_rng(seed)

    def next_uniform(self, low, high, size=None):
        """Uniform float(s) in [low, high)."""
        return self._generator.uniform(low, high, size)

    def next_random(self, size=None):
        """Uniform float(s) in [0, 1)."""
        return self._generator.random(size)

    def next_int(self, low, high):
        """Uniform integer in [low, high)."""
        return int(self._generator.integers(low, high))

    def chance(self, probability):
        return self._generator.random() < probability
