from __future__ import annotations
from typing import Callable, Protocol

import numpy as np
from numpy.typing import NDArray

from objective_functions import FloatArray

DIM: int = 2


class CoefficientSource(Protocol):
    """
    The slice of `numpy.random.Generator` the swarm draws from.

    `uniform` samples initial positions/velocities, `random` the per-dimension
    U(0, 1) weights of the velocity update. Tests pass scripted sources.
    """

    def random(self, size: int) -> NDArray[np.floating]: ...

    def uniform(self, low: FloatArray, high: FloatArray) -> NDArray[np.floating]: ...


class Particle:
    """
    One candidate solution of the swarm.

    - `position` always lies inside the domain box the particle was moved in.
    - `velocity` components are bounded by the `v_max` passed to `clip_velocity`.
    - `best_value` / `best_position` hold the best evaluation this particle has
      ever seen; they only change on a strict improvement.
    """

    def __init__(
        self,
        position: FloatArray,
        velocity: FloatArray,
        value: float,
    ) -> None:
        pos_arr = np.array(position, dtype=np.float64, copy=True)
        if pos_arr.shape != (DIM,):
            raise ValueError(f"position must have shape ({DIM},); got {pos_arr.shape}")
        vel_arr = np.array(velocity, dtype=np.float64, copy=True)
        if vel_arr.shape != (DIM,):
            raise ValueError(f"velocity must have shape ({DIM},); got {vel_arr.shape}")

        self.position = pos_arr
        self.velocity = vel_arr
        self.value = float(value)

        # Personal best starts at the first evaluation.
        self.best_value = self.value
        self.best_position = self.position.copy()

    @classmethod
    def generate(
        cls,
        *,
        lower: FloatArray,
        upper: FloatArray,
        v_max: float,
        evaluate: Callable[[FloatArray], float],
        rng: CoefficientSource,
    ) -> "Particle":
        """
        Factory for a freshly initialized particle.

        - Position uniform in the box, one draw per axis.
        - Velocity uniform in [-v_max, +v_max] per axis.
        - Evaluated once; the personal best is that first evaluation.
        """
        position = np.asarray(rng.uniform(lower, upper), dtype=np.float64)
        vmax_vec = np.full(DIM, float(v_max))
        velocity = np.asarray(rng.uniform(-vmax_vec, vmax_vec), dtype=np.float64)
        return cls(position, velocity, evaluate(position))

    def update_velocity(
        self,
        global_pos: FloatArray,
        *,
        constriction: float,
        inertia: float,
        c_personal: float,
        c_global: float,
        rng: CoefficientSource,
    ) -> None:
        """
        Constricted PSO velocity update:

            v <- K * (w * v + c1 * r_p * (pbest - x) + c2 * r_g * (gbest - x))

        where r_p, r_g are i.i.d. U(0, 1) per component, drawn in that order.
        """
        r_personal = np.asarray(rng.random(DIM), dtype=np.float64)
        r_global = np.asarray(rng.random(DIM), dtype=np.float64)

        cog = c_personal * r_personal * (self.best_position - self.position)  # cognitive pull
        soc = c_global * r_global * (global_pos - self.position)  # social pull

        self.velocity = constriction * (inertia * self.velocity + cog + soc)

    def clip_velocity(self, v_max: float) -> None:
        """Cap each velocity component to [-v_max, +v_max]."""
        np.clip(self.velocity, -v_max, v_max, out=self.velocity)

    def move(self, lower: FloatArray, upper: FloatArray) -> None:
        """
        Apply x <- x + v and clamp each coordinate into [lower, upper].

        Clamping leaves the velocity untouched; a particle pinned to a wall
        keeps pushing against it until the pulls turn it around.
        """
        new_pos = self.position + self.velocity
        np.clip(new_pos, lower, upper, out=new_pos)
        self.position = new_pos

    def observe(self, value: float, is_better: Callable[[float, float], bool]) -> bool:
        """
        Record the value at the current position.

        Returns True when `value` strictly improves the personal best (per
        `is_better`), in which case the personal best is moved here.
        """
        self.value = float(value)
        if is_better(self.value, self.best_value):
            self.best_value = self.value
            self.best_position = self.position.copy()
            return True
        return False

    def copy(self) -> "Particle":
        """Independent copy of the full particle state."""
        clone = Particle(self.position, self.velocity, self.value)
        clone.best_value = self.best_value
        clone.best_position = self.best_position.copy()
        return clone

    def __repr__(self) -> str:
        pos = np.array2string(self.position, precision=6, separator=", ", suppress_small=True)
        return f"<Particle pos={pos} value={self.value:.6g} best={self.best_value:.6g}>"


__all__ = ["Particle", "CoefficientSource", "DIM"]
