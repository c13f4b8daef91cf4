from __future__ import annotations
import math
import threading
from typing import Optional, Protocol

import numpy as np


class UniformSource(Protocol):
    """The two `numpy.random.Generator` draws Box-Muller needs."""

    def random(self) -> float: ...

    def uniform(self, low: float, high: float) -> float: ...


class NoiseSource:
    """
    Standard-normal sampler using the Box-Muller transform.

    One transform yields two independent N(0, 1) values:

        r = sqrt(-2 ln u),   u ~ U(0, 1],   v ~ U[0, 2*pi)
        first  = r * cos(v)
        second = r * sin(v)

    `next()` returns `first` and keeps `second` in `spare`; the following call
    hands out the spare and clears it, so a fresh (u, v) pair is drawn only on
    every other call.

    - `rng` may be an int seed, None, or any object with `random()` and
      `uniform(low, high)` such as a `numpy.random.Generator`.
    - Access is serialized with a lock: several objectives may share one
      source without splitting a (first, second) pair between threads.
    """

    def __init__(self, rng: UniformSource | int | None = None) -> None:
        self._rng = rng if rng is not None and not isinstance(rng, (int, np.integer)) else np.random.default_rng(rng)
        self.spare: Optional[float] = None
        self._lock = threading.Lock()

    def _draw_u(self) -> float:
        # Generator.random() lives on [0, 1); zero is resampled so log(u) stays finite.
        u = float(self._rng.random())
        while u == 0.0:
            u = float(self._rng.random())
        return u

    def next(self) -> float:
        """Return one standard-normal sample."""
        with self._lock:
            if self.spare is not None:
                value, self.spare = self.spare, None
                return value

            u = self._draw_u()
            v = float(self._rng.uniform(0.0, 2.0 * math.pi))
            r = math.sqrt(-2.0 * math.log(u))
            self.spare = r * math.sin(v)
            return r * math.cos(v)

    def __call__(self) -> float:
        return self.next()

    def sample(self, n: int) -> np.ndarray:
        """Draw `n` consecutive samples (same sequence as calling `next()` n times)."""
        if not isinstance(n, int) or n < 0:
            raise ValueError(f"`n` must be a non-negative integer; got {n!r}")
        return np.array([self.next() for _ in range(n)], dtype=np.float64)


_shared_source: Optional[NoiseSource] = None
_shared_lock = threading.Lock()


def shared_noise_source() -> NoiseSource:
    """Process-wide NoiseSource, created on first use."""
    global _shared_source
    with _shared_lock:
        if _shared_source is None:
            _shared_source = NoiseSource()
        return _shared_source


def gaussian_random() -> float:
    """Draw from the process-wide source."""
    return shared_noise_source().next()


__all__ = ["NoiseSource", "UniformSource", "shared_noise_source", "gaussian_random"]
