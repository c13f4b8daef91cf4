from __future__ import annotations

import argparse
import logging
import numpy as np
import matplotlib.pyplot as plt

from dejong_functions import BENCHMARKS, get_benchmark
from objective_functions import display_grid
from pso_errors import NotSupportedError
from swarm_optimizer import ParticleSwarmOptimizer, Parameters

logging.basicConfig(level=logging.INFO)   # Enable concise per-iteration logs.


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Run PSO on a De Jong benchmark and plot the result.")
    parser.add_argument("benchmark", nargs="?", default="f1", choices=sorted(BENCHMARKS))
    parser.add_argument("--population", type=int, default=50)
    parser.add_argument("--iterations", type=int, default=500)
    parser.add_argument("--maximize", action="store_true")
    parser.add_argument("--seed", type=int, default=42)
    parser.add_argument("--no-plot", action="store_true", help="skip the matplotlib figures")
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> None:
    args = parse_args(argv)
    function = get_benchmark(args.benchmark)

    pso = ParticleSwarmOptimizer(
        function,
        population=args.population,
        parameters=Parameters(
            optimization="maximize" if args.maximize else "minimize",
            max_iterations=args.iterations,
        ),
        rng=np.random.default_rng(args.seed),   # Make the demo reproducible.
        verbose=True,
    )

    # Drive the optimizer the way a frame loop would: one step per tick.
    while not pso.is_exhausted:
        pso.advance()

    print("Best position:", pso.global_best_position)
    print("Best value:", pso.global_best_value)
    try:
        print("Known optimum:", function.optimum_location(), "value", function.optimum_value())
    except NotSupportedError:
        print("Known optimum: not defined for", type(function).__name__)

    if args.no_plot:
        return

    its = np.arange(len(pso.history_best))
    fig, (ax_conv, ax_surf) = plt.subplots(1, 2, figsize=(12, 5))

    # Convergence diagnostics (log scale only makes sense for positive curves).
    best = pso.history_best
    mean = pso.history_mean
    ax_conv.plot(its, best, label="Global best")
    ax_conv.plot(its, mean, label="Mean value")
    ax_conv.fill_between(its, mean - pso.history_std, mean + pso.history_std, alpha=0.3, label="±1 σ")
    if np.all(best > 0) and np.all(mean - pso.history_std > 0):
        ax_conv.set_yscale("log")
    ax_conv.set_xlabel("Iteration")
    ax_conv.set_ylabel("Objective")
    ax_conv.legend()
    ax_conv.grid(True, ls="--", alpha=0.5)

    # Noise-free surface with the final swarm on top.
    X, Z, Y = display_grid(function, resolution=120)
    cs = ax_surf.contourf(X, Z, Y, levels=40, cmap="viridis")
    fig.colorbar(cs, ax=ax_surf)
    pos = pso.positions
    ax_surf.scatter(pos[:, 0], pos[:, 1], s=12, c="white", edgecolors="k", label="Particles")
    gbest = pso.global_best_position
    ax_surf.scatter([gbest[0]], [gbest[1]], marker="*", s=150, c="red", label="Global best")
    ax_surf.set_xlabel("x0")
    ax_surf.set_ylabel("x1")
    ax_surf.legend(loc="upper right")

    plt.tight_layout()
    plt.show()


if __name__ == "__main__":
    main()
