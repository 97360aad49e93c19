"""
Jitter Sources
Injectable randomness for the simulated tree ensembles
"""

import threading
from typing import Optional, Tuple, Union

import numpy as np

Shape = Union[int, Tuple[int, ...], None]

class RandomJitter:
    """
    Seedable uniform jitter. Each thread gets its own numpy Generator spawned
    from a single SeedSequence, so concurrent callers never share generator state.
    """

    def __init__(self, seed: Optional[int] = None):
        self.seed = seed
        self._seed_sequence = np.random.SeedSequence(seed)
        self._spawn_lock = threading.Lock()
        self._local = threading.local()

    def _generator(self) -> np.random.Generator:
        rng = getattr(self._local, "rng", None)
        if rng is None:
            with self._spawn_lock:
                child = self._seed_sequence.spawn(1)[0]
            rng = np.random.default_rng(child)
            self._local.rng = rng
        return rng

    def uniform(self, low: float, high: float, size: Shape = None):
        return self._generator().uniform(low, high, size)

class NoJitter:
    """Deterministic source returning the centre of every range, i.e. a factor of 1.0 for 1±spread."""

    def uniform(self, low: float, high: float, size: Shape = None):
        centre = (low + high) / 2.0
        if size is None:
            return centre
        return np.full(size, centre, dtype=np.float64)
