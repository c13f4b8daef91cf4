from __future__ import annotations
from abc import ABC, abstractmethod
from typing import Callable, NamedTuple, Optional, Union

import numpy as np
from numpy.typing import NDArray

from pso_errors import InvalidArgumentError, NotSupportedError

FloatArray = NDArray[np.floating]
Point = Union[FloatArray, tuple[float, float]]


class SearchDomain(NamedTuple):
    """Closed interval `[min, max]` for one axis of the search space."""

    min: float
    max: float

    @property
    def span(self) -> float:
        return self.max - self.min

    def clamp(self, value: float) -> float:
        return min(max(value, self.min), self.max)


def _normalise_domain(bounds: SearchDomain | tuple[float, float], axis: str) -> SearchDomain:
    """
    Validate one axis of the box and return it as a float `SearchDomain`.

    - Accepts any `(min, max)` pair.
    - Requires `min <= max`; a degenerate axis (min == max) is allowed and
      pins every particle to that coordinate.
    """
    try:
        lo, hi = (float(b) for b in bounds)
    except (TypeError, ValueError):
        raise InvalidArgumentError(f"{axis}-axis bounds must be a (min, max) pair; got {bounds!r}") from None
    if not (np.isfinite(lo) and np.isfinite(hi)):
        raise InvalidArgumentError(f"{axis}-axis bounds must be finite; got ({lo}, {hi})")
    if lo > hi:
        raise InvalidArgumentError(f"{axis}-axis bounds are inverted: min={lo} > max={hi}")
    return SearchDomain(lo, hi)


def as_point(point: Point) -> FloatArray:
    """Coerce a 2D point to a float64 array of shape (2,)."""
    arr = np.asarray(point, dtype=np.float64)
    if arr.shape != (2,):
        raise InvalidArgumentError(f"point must have shape (2,); got {arr.shape}")
    return arr


class ObjectiveFunction(ABC):
    """
    Scalar function y = f(x0, x1) over a closed rectangular domain.

    Subclasses declare the domain through `X_BOUNDS` / `Z_BOUNDS` (or override
    `domain_bounds`) and implement `evaluate`. The second input axis is called
    "z" because the display layer lays the surface out on the x/z plane with
    the value on y.

    - `evaluate` may be stochastic (noise-injecting variants).
    - `display_value` is what a plot should show; noisy variants return the
      noise-free value here.
    - `optimum_location` / `optimum_value` are optional and raise
      `NotSupportedError` unless the subclass sets `OPTIMUM`.
    """

    X_BOUNDS: tuple[float, float] = (-5.12, 5.12)
    Z_BOUNDS: tuple[float, float] = (-5.12, 5.12)
    OPTIMUM: Optional[tuple[float, float]] = None

    def domain_bounds(self) -> tuple[SearchDomain, SearchDomain]:
        return _normalise_domain(self.X_BOUNDS, "x"), _normalise_domain(self.Z_BOUNDS, "z")

    @property
    def domain_min(self) -> FloatArray:
        x, z = self.domain_bounds()
        return np.array([x.min, z.min], dtype=np.float64)

    @property
    def domain_max(self) -> FloatArray:
        x, z = self.domain_bounds()
        return np.array([x.max, z.max], dtype=np.float64)

    @abstractmethod
    def evaluate(self, point: Point) -> float:
        """Return f(point). Callers clamp the point to the domain if they need to."""

    def display_value(self, point: Point) -> float:
        return self.evaluate(point)

    def optimum_location(self) -> FloatArray:
        if self.OPTIMUM is None:
            raise NotSupportedError(f"{type(self).__name__} does not define a known optimum")
        return np.array(self.OPTIMUM, dtype=np.float64)

    def optimum_value(self) -> float:
        return self.display_value(self.optimum_location())

    def __call__(self, point: Point) -> float:
        return self.evaluate(point)

    def __repr__(self) -> str:
        x, z = self.domain_bounds()
        return f"<{type(self).__name__} x=[{x.min}, {x.max}] z=[{z.min}, {z.max}]>"


class CallableObjective(ObjectiveFunction):
    """Adapter turning a plain `f(point) -> float` into an `ObjectiveFunction`."""

    def __init__(
        self,
        func: Callable[[FloatArray], float],
        x_bounds: tuple[float, float],
        z_bounds: tuple[float, float] | None = None,
        optimum: tuple[float, float] | None = None,
    ) -> None:
        if not callable(func):
            raise InvalidArgumentError(f"`func` must be callable; got {func!r}")
        self._func = func
        self._x = _normalise_domain(x_bounds, "x")
        self._z = _normalise_domain(x_bounds if z_bounds is None else z_bounds, "z")
        self.OPTIMUM = None if optimum is None else tuple(as_point(optimum))

    def domain_bounds(self) -> tuple[SearchDomain, SearchDomain]:
        return self._x, self._z

    def evaluate(self, point: Point) -> float:
        return float(self._func(as_point(point)))


def display_grid(function: ObjectiveFunction, resolution: int = 50) -> tuple[FloatArray, FloatArray, FloatArray]:
    """
    Sample `function.display_value` on a regular mesh covering its domain.

    Returns `(X, Z, Y)` arrays of shape (resolution, resolution), ready for
    `contourf` / `plot_surface`. Only `display_value` is called, so a noisy
    objective produces a clean surface.
    """
    if not isinstance(resolution, int) or resolution < 2:
        raise InvalidArgumentError(f"`resolution` must be an integer >= 2; got {resolution!r}")
    x_dom, z_dom = function.domain_bounds()
    xs = np.linspace(x_dom.min, x_dom.max, resolution)
    zs = np.linspace(z_dom.min, z_dom.max, resolution)
    X, Z = np.meshgrid(xs, zs)
    Y = np.array(
        [function.display_value((x, z)) for x, z in zip(X.ravel(), Z.ravel())],
        dtype=np.float64,
    ).reshape(X.shape)
    return X, Z, Y


__all__ = [
    "FloatArray",
    "Point",
    "SearchDomain",
    "ObjectiveFunction",
    "CallableObjective",
    "as_point",
    "display_grid",
]
