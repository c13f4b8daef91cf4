from __future__ import annotations
import logging
import operator
from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Callable, Optional

import numpy as np
from numpy.typing import NDArray

from objective_functions import FloatArray, ObjectiveFunction
from pso_errors import InvalidArgumentError, IterationLimitExceeded
from pso_particle import CoefficientSource, Particle

Comparator = Callable[[float, float], bool]


class OptimizationType(str, Enum):
    MINIMIZE = "minimize"
    MAXIMIZE = "maximize"

    @classmethod
    def resolve(cls, value: "OptimizationType | str") -> "OptimizationType":
        """Accept an enum member or its (case-insensitive) name/value."""
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            key = value.strip().lower()
            for member in cls:
                if key in (member.value, member.name.lower()):
                    return member
        raise InvalidArgumentError(
            f"Unknown optimization type {value!r}; expected 'minimize' or 'maximize'"
        )


# Strictly-better test and the global-best sentinel for each direction.
_DIRECTIONS: dict[OptimizationType, tuple[Comparator, float]] = {
    OptimizationType.MINIMIZE: (operator.lt, np.inf),
    OptimizationType.MAXIMIZE: (operator.gt, -np.inf),
}


@dataclass(frozen=True)
class Parameters:
    """
    Hyperparameters of one optimization run.

    `v_max <= 0` means "derive from the objective": the optimizer replaces it
    with the span of the x axis of the domain. `inertia_weight` is the
    starting weight; the optimizer keeps the decayed value on itself.
    """

    optimization: OptimizationType = OptimizationType.MINIMIZE
    constriction_factor: float = 1.0
    inertia_weight: float = 0.9
    decay_inertia_weight: bool = True
    target_inertia_weight: float = 0.4
    c_personal: float = 2.0
    c_global: float = 2.0
    v_max: float = -1.0
    max_iterations: int = 500

    def __post_init__(self) -> None:
        object.__setattr__(self, "optimization", OptimizationType.resolve(self.optimization))
        if isinstance(self.max_iterations, bool) or not isinstance(self.max_iterations, (int, np.integer)):
            raise InvalidArgumentError(f"`max_iterations` must be an integer; got {self.max_iterations!r}")
        if self.max_iterations < 1:
            raise InvalidArgumentError(f"`max_iterations` must be >= 1; got {self.max_iterations}")

    def with_default_v_max(self, function: ObjectiveFunction) -> "Parameters":
        """Return a copy whose unset `v_max` is the width of the domain's x axis."""
        if self.v_max > 0:
            return self
        x_dom, _ = function.domain_bounds()
        return replace(self, v_max=float(x_dom.span))


@dataclass
class Swarm:
    """Ordered particles plus the swarm-wide best record."""

    particles: list[Particle] = field(default_factory=list)
    iteration: int = 0
    global_best_value: float = np.inf
    global_best_position: Optional[FloatArray] = None

    def __len__(self) -> int:
        return len(self.particles)

    def copy(self) -> "Swarm":
        """Deep copy: particles and the global-best position are independent."""
        return Swarm(
            particles=[p.copy() for p in self.particles],
            iteration=self.iteration,
            global_best_value=self.global_best_value,
            global_best_position=None if self.global_best_position is None else self.global_best_position.copy(),
        )


class ParticleSwarmOptimizer:
    """
    Particle Swarm Optimization of a 2D objective (minimization or maximization).

    Update order
    - Particles are updated one after another in swarm order. When a particle
      improves the global best, every particle after it in the same pass is
      already pulled toward the new position. This ordering is part of the
      algorithm: a snapshot-per-pass variant converges along a different
      trajectory.

    Inertia schedule
    - With decay enabled, after step t (t < max_iterations) the weight moves
      linearly toward the target, w <- w - (w - w_target) / (max_iterations - t),
      reaching exactly `target_inertia_weight` at the final step.

    Termination
    - `is_exhausted` turns True once `max_iterations` steps have run.
      Advancing past that point raises `IterationLimitExceeded`.
    """

    def __init__(
        self,
        function: ObjectiveFunction,
        population: int = 50,
        parameters: Parameters | None = None,
        *,
        rng: CoefficientSource | int | None = None,
        verbose: bool = True,
    ) -> None:

        # The objective must speak the ObjectiveFunction contract.
        if function is None:
            raise InvalidArgumentError("`function` is required")
        if not (hasattr(function, "evaluate") and hasattr(function, "domain_bounds")):
            raise InvalidArgumentError(
                f"`function` must implement evaluate() and domain_bounds(); got {function!r} "
                "(wrap plain callables in CallableObjective)"
            )
        if isinstance(population, bool) or not isinstance(population, (int, np.integer)) or population < 1:
            raise InvalidArgumentError(f"`population` must be a positive integer; got {population!r}")

        self.function = function
        self.parameters = (parameters or Parameters()).with_default_v_max(function)
        if not self.parameters.v_max > 0:
            raise InvalidArgumentError(
                f"`v_max` resolved to {self.parameters.v_max}; it must be positive "
                "(set it explicitly for a domain with zero x-axis width)"
            )

        self._rng = rng if rng is not None and not isinstance(rng, (int, np.integer)) else np.random.default_rng(rng)
        self._is_better, worst = _DIRECTIONS[self.parameters.optimization]
        self._inertia = float(self.parameters.inertia_weight)

        x_dom, z_dom = function.domain_bounds()
        self._lower = np.array([x_dom.min, z_dom.min], dtype=np.float64)
        self._upper = np.array([x_dom.max, z_dom.max], dtype=np.float64)

        # Lightweight convergence history for diagnostics / plots.
        self._history_best: list[float] = []
        self._history_mean: list[float] = []
        self._history_std: list[float] = []

        # Logging (INFO prints iteration summary if verbose=True).
        self._log = logging.getLogger(f"{__name__}.PSO")
        self._log.propagate = True
        self._log.setLevel(logging.INFO if verbose else logging.WARNING)

        self._swarm = Swarm(global_best_value=worst)
        self._initialize(int(population))
        self._log.debug(
            "PSO ready | %s | pop=%d | %s",
            type(function).__name__, len(self._swarm), self.parameters,
        )

    def _initialize(self, population: int) -> None:
        """Sample, evaluate and rank every particle once."""
        swarm = self._swarm
        for _ in range(population):
            p = Particle.generate(
                lower=self._lower, upper=self._upper,
                v_max=self.parameters.v_max,
                evaluate=self._evaluate, rng=self._rng,
            )
            if self._is_better(p.best_value, swarm.global_best_value):
                swarm.global_best_value = p.best_value
                swarm.global_best_position = p.best_position.copy()
            swarm.particles.append(p)

        # Only reachable when no evaluation beat the sentinel (all inf/nan).
        if swarm.global_best_position is None:
            swarm.global_best_position = swarm.particles[0].best_position.copy()

        self._record_stats()

    def _evaluate(self, position: FloatArray) -> float:
        return float(self.function.evaluate(position.copy()))

    def _record_stats(self) -> None:
        """Append scalar summary statistics for the current state."""
        values = self.values
        self._history_best.append(float(self._swarm.global_best_value))
        self._history_mean.append(float(np.mean(values)))
        self._history_std.append(float(np.std(values)))

    @property
    def is_exhausted(self) -> bool:
        return self._swarm.iteration >= self.parameters.max_iterations

    def advance(self) -> int:
        """
        Run one PSO step over the whole swarm and return the new iteration count.

        Raises IterationLimitExceeded when `max_iterations` steps already ran;
        check `is_exhausted` first to stop cleanly.
        """
        swarm = self._swarm
        params = self.parameters
        if self.is_exhausted:
            raise IterationLimitExceeded(
                f"max_iterations ({params.max_iterations}) reached; create a new optimizer to run again"
            )

        swarm.iteration += 1

        for p in swarm.particles:
            p.update_velocity(
                swarm.global_best_position,
                constriction=params.constriction_factor,
                inertia=self._inertia,
                c_personal=params.c_personal,
                c_global=params.c_global,
                rng=self._rng,
            )
            p.clip_velocity(params.v_max)
            p.move(self._lower, self._upper)

            # Global best is only challenged by a new personal best.
            if p.observe(self._evaluate(p.position), self._is_better):
                if self._is_better(p.best_value, swarm.global_best_value):
                    swarm.global_best_value = p.best_value
                    swarm.global_best_position = p.best_position.copy()

        if params.decay_inertia_weight and swarm.iteration != params.max_iterations:
            remaining = params.max_iterations - swarm.iteration
            self._inertia -= (self._inertia - params.target_inertia_weight) / remaining

        self._record_stats()
        self._log.info(
            "Iter %3d/%d | Best: %.6e | Mean: %.6e",
            swarm.iteration, params.max_iterations, swarm.global_best_value, self._history_mean[-1],
        )
        return swarm.iteration

    def run(self, n_iters: int | None = None) -> FloatArray:
        """
        Advance until exhausted (or for `n_iters` more steps, whichever comes
        first) and return the global-best position.
        """
        if n_iters is not None and (
            isinstance(n_iters, bool) or not isinstance(n_iters, (int, np.integer)) or n_iters < 0
        ):
            raise InvalidArgumentError(f"`n_iters` must be a non-negative integer; got {n_iters!r}")

        steps = self.parameters.max_iterations - self._swarm.iteration
        if n_iters is not None:
            steps = min(steps, int(n_iters))
        for _ in range(steps):
            self.advance()
        return self.global_best_position

    # Read-only views for display layers. All arrays are copies.

    @property
    def swarm(self) -> Swarm:
        """Snapshot of the swarm state; only `advance()` changes the live one."""
        return self._swarm.copy()

    @property
    def particles(self) -> list[Particle]:
        return [p.copy() for p in self._swarm.particles]

    @property
    def population(self) -> int:
        return len(self._swarm)

    @property
    def iteration(self) -> int:
        return self._swarm.iteration

    @property
    def inertia_weight(self) -> float:
        return self._inertia

    @property
    def positions(self) -> NDArray[np.floating]:
        """(population, 2) array of current particle positions."""
        return np.stack([p.position for p in self._swarm.particles])

    @property
    def values(self) -> NDArray[np.floating]:
        return np.array([p.value for p in self._swarm.particles], dtype=float)

    @property
    def global_best_value(self) -> float:
        return float(self._swarm.global_best_value)

    @property
    def global_best_position(self) -> FloatArray:
        return self._swarm.global_best_position.copy()

    @property
    def history_best(self) -> NDArray[np.floating]:
        """Global best after construction and after every step."""
        return np.array(self._history_best, dtype=float)

    @property
    def history_mean(self) -> NDArray[np.floating]:
        """Mean current value after construction and after every step."""
        return np.array(self._history_mean, dtype=float)

    @property
    def history_std(self) -> NDArray[np.floating]:
        """Standard deviation of current values after construction and after every step."""
        return np.array(self._history_std, dtype=float)


__all__ = ["ParticleSwarmOptimizer", "Parameters", "OptimizationType", "Swarm", "Particle"]
