"""
Phase duration sources.

Actors draw their thinking and eating times from a ``DurationSource``. The
default is a seeded generator so that a run configuration always produces the
same duration sequence per actor.
"""
import random
from typing import Iterable, List, Protocol


# Upper bound of a sampled phase duration (seconds)
DEFAULT_MAX_DURATION = 1.0

# Bounded-wait timeout: one millisecond longer than the longest phase
DEFAULT_TIMEOUT = DEFAULT_MAX_DURATION + 0.001


class DurationSource(Protocol):
    def next_duration(self) -> float:
        ...


class SeededDurations:
    """Uniform durations in [0, max_duration) from ``random.Random(seed)``."""

    def __init__(self, seed: int, max_duration: float = DEFAULT_MAX_DURATION):
        if max_duration <= 0:
            raise ValueError("max_duration must be positive")
        self.seed = seed
        self.max_duration = max_duration
        self._rng = random.Random(seed)

    def next_duration(self) -> float:
        return self._rng.random() * self.max_duration

    def __repr__(self):
        return f"SeededDurations(seed={self.seed}, max={self.max_duration})"


class SequenceDurations:
    """Cycles through a fixed list of durations."""

    def __init__(self, values: Iterable[float]):
        self.values: List[float] = list(values)
        if not self.values:
            raise ValueError("at least one duration is required")
        if any(v < 0 for v in self.values):
            raise ValueError("durations must be non-negative")
        self._index = 0

    def next_duration(self) -> float:
        value = self.values[self._index % len(self.values)]
        self._index += 1
        return value
