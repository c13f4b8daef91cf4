from __future__ import annotations
from collections import deque

import numpy as np
import pytest


class ScriptedSource:
    """
    Stand-in for `numpy.random.Generator` with a fixed script.

    - `uniform` pops the next queued vector (initial positions/velocities)
      and ignores the requested bounds.
    - `random` always returns `coefficient` for every component.
    """

    def __init__(self, uniform_draws, coefficient: float = 0.5) -> None:
        self._uniform = deque(np.asarray(d, dtype=float) for d in uniform_draws)
        self.coefficient = float(coefficient)
        self.random_calls = 0

    def uniform(self, low, high):
        return self._uniform.popleft().copy()

    def random(self, size):
        self.random_calls += 1
        return np.full(size, self.coefficient)


@pytest.fixture
def scripted_source():
    return ScriptedSource
