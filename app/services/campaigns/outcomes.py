"""
Delivery outcome sources.

Delivery is simulated: each recipient succeeds with a fixed probability.
The dispatcher receives the source at construction time, so production
uses a uniform random generator and tests inject a scripted sequence.
"""
import random
import threading
from typing import Iterable, Optional, Protocol, runtime_checkable


@runtime_checkable
class OutcomeSource(Protocol):
    """Anything able to decide one delivery outcome."""

    def next_outcome(self, probability: float) -> bool:
        """
        Draw one outcome.

        Args:
            probability: Chance of success, between 0 and 1

        Returns:
            True for a successful delivery
        """
        ...


class RandomOutcomeSource:
    """Uniform random outcomes. Thread-safe; seed it for reproducible runs."""

    def __init__(self, seed: Optional[int] = None):
        self._random = random.Random(seed)
        self._lock = threading.Lock()

    def next_outcome(self, probability: float) -> bool:
        with self._lock:
            return self._random.random() < probability


class ScriptedOutcomeSource:
    """
    Replays a fixed sequence of outcomes, ignoring the probability.

    Raises RuntimeError once the script is exhausted.
    """

    def __init__(self, outcomes: Iterable[bool]):
        self._outcomes = iter(outcomes)
        self.drawn = 0

    def next_outcome(self, probability: float) -> bool:
        try:
            outcome = next(self._outcomes)
        except StopIteration:
            raise RuntimeError(f"Scripted outcomes exhausted after {self.drawn} draws")
        self.drawn += 1
        return bool(outcome)
