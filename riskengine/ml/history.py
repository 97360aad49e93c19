"""
Bounded Score History
Fixed-capacity ring buffer shared by concurrent scorers
"""

import threading
import numpy as np

DEFAULT_CAPACITY = 1000

class RingBuffer:
    """Thread-safe evict-oldest buffer of floats backed by a preallocated numpy arena."""

    def __init__(self, capacity: int = DEFAULT_CAPACITY):
        if capacity <= 0:
            raise ValueError("capacity must be positive")
        self.capacity = capacity
        self._values = np.zeros(capacity, dtype=np.float64)
        self._head = 0
        self._size = 0
        self._lock = threading.Lock()

    def append(self, value: float):
        with self._lock:
            self._values[self._head] = value
            self._head = (self._head + 1) % self.capacity
            if self._size < self.capacity:
                self._size += 1

    def snapshot(self) -> np.ndarray:
        """Copy of the stored values, oldest first."""
        with self._lock:
            if self._size < self.capacity:
                return self._values[:self._size].copy()
            return np.concatenate((self._values[self._head:], self._values[:self._head]))

    def mean(self) -> float:
        values = self.snapshot()
        if values.size == 0:
            return 0.0
        return float(values.mean())

    def variance(self) -> float:
        values = self.snapshot()
        if values.size == 0:
            return 0.0
        return float(values.var())

    def clear(self):
        with self._lock:
            self._head = 0
            self._size = 0

    def __len__(self) -> int:
        with self._lock:
            return self._size
