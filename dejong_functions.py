from __future__ import annotations
import math
from typing import Optional

import numpy as np

from gaussian_noise import NoiseSource, shared_noise_source
from objective_functions import ObjectiveFunction, Point, as_point
from pso_errors import InvalidArgumentError


class F1(ObjectiveFunction):
    """De Jong F1, sphere: x0^2 + x1^2."""

    X_BOUNDS = (-5.12, 5.12)
    Z_BOUNDS = (-5.12, 5.12)
    OPTIMUM = (0.0, 0.0)

    def evaluate(self, point: Point) -> float:
        x = as_point(point)
        return float(np.dot(x, x))


class F2(ObjectiveFunction):
    """De Jong F2, Rosenbrock's saddle: 100 (x0^2 - x1)^2 + (1 - x0)^2."""

    X_BOUNDS = (-2.048, 2.048)
    Z_BOUNDS = (-2.048, 2.048)
    OPTIMUM = (1.0, 1.0)

    def evaluate(self, point: Point) -> float:
        x0, x1 = as_point(point)
        a = x0 * x0 - x1
        b = 1.0 - x0
        return float(100.0 * a * a + b * b)


class F3(ObjectiveFunction):
    """De Jong F3, step function: floor(x0) + floor(x1)."""

    X_BOUNDS = (-5.12, 5.12)
    Z_BOUNDS = (-5.12, 5.12)
    OPTIMUM = (-5.12, -5.12)

    def evaluate(self, point: Point) -> float:
        x0, x1 = as_point(point)
        return float(math.floor(x0) + math.floor(x1))


class F4(ObjectiveFunction):
    """
    De Jong F4, quartic with Gaussian noise: x0^4 + 2 x1^4 + N(0, 1) / 15.

    The noise comes from `noise` (the process-wide source when omitted);
    `display_value` returns the noise-free quartic.
    """

    X_BOUNDS = (-1.28, 1.28)
    Z_BOUNDS = (-1.28, 1.28)
    OPTIMUM = (0.0, 0.0)
    NOISE_SCALE = 1.0 / 15.0

    def __init__(self, noise: Optional[NoiseSource] = None) -> None:
        self.noise = noise if noise is not None else shared_noise_source()

    def display_value(self, point: Point) -> float:
        x0, x1 = as_point(point)
        return float(x0 ** 4 + 2.0 * x1 ** 4)

    def evaluate(self, point: Point) -> float:
        return self.display_value(point) + self.noise.next() * self.NOISE_SCALE


class F5(ObjectiveFunction):
    """De Jong F5, Shekel's foxholes: 25 wells on a 5x5 lattice with spacing 16."""

    X_BOUNDS = (-65.536, 65.536)
    Z_BOUNDS = (-65.536, 65.536)
    OPTIMUM = (-32.0, -32.0)

    _LATTICE = np.array([-32.0, -16.0, 0.0, 16.0, 32.0])
    A0 = np.tile(_LATTICE, 5)
    A1 = np.repeat(_LATTICE, 5)

    def evaluate(self, point: Point) -> float:
        x0, x1 = as_point(point)
        j = np.arange(1, 26, dtype=np.float64)
        inv = 0.002 + np.sum(1.0 / (j + (x0 - self.A0) ** 6 + (x1 - self.A1) ** 6))
        return float(1.0 / inv)


class F6(ObjectiveFunction):
    """Rastrigin: 20 + sum(x_i^2 - 10 cos(2 pi x_i))."""

    X_BOUNDS = (-5.12, 5.12)
    Z_BOUNDS = (-5.12, 5.12)
    OPTIMUM = (0.0, 0.0)

    def evaluate(self, point: Point) -> float:
        x = as_point(point)
        return float(20.0 + np.sum(x * x - 10.0 * np.cos(2.0 * np.pi * x)))


class F7(ObjectiveFunction):
    """
    Shifted Griewank-style surface:

        0.00025 (x0'^2 + x1'^2) - cos(x0') cos(x1' / sqrt(2)) + 1,   x' = x - 100

    The tabulated optimum is the best point of this shifted surface inside
    the [-10, 10] box.
    """

    X_BOUNDS = (-10.0, 10.0)
    Z_BOUNDS = (-10.0, 10.0)
    OPTIMUM = (8.939, 6.793)
    SHIFT = 100.0

    def evaluate(self, point: Point) -> float:
        x0, x1 = as_point(point) - self.SHIFT
        product = math.cos(x0) * math.cos(x1 / math.sqrt(2.0))
        return float(0.00025 * (x0 * x0 + x1 * x1) - product + 1.0)


class CustomFunction(ObjectiveFunction):
    """User slot: a sphere on [-5.12, 5.12]^2 with no declared optimum."""

    X_BOUNDS = (-5.12, 5.12)
    Z_BOUNDS = (-5.12, 5.12)

    def evaluate(self, point: Point) -> float:
        x = as_point(point)
        return float(np.dot(x, x))


BENCHMARKS: dict[str, type[ObjectiveFunction]] = {
    "f1": F1,
    "f2": F2,
    "f3": F3,
    "f4": F4,
    "f5": F5,
    "f6": F6,
    "f7": F7,
    "custom": CustomFunction,
}


def get_benchmark(name: str) -> ObjectiveFunction:
    """Instantiate a benchmark by (case-insensitive) registry name."""
    try:
        cls = BENCHMARKS[name.lower()]
    except (KeyError, AttributeError):
        raise InvalidArgumentError(
            f"Unknown benchmark {name!r}; expected one of {sorted(BENCHMARKS)}"
        ) from None
    return cls()


__all__ = ["F1", "F2", "F3", "F4", "F5", "F6", "F7", "CustomFunction", "BENCHMARKS", "get_benchmark"]
