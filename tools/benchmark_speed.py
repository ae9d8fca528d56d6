"""
Performance Benchmark
=====================

Measures engine tick, frame composition and environment step throughput.
A 30 fps terminal session needs well under 33 ms per tick plus render.

Usage:
    python -m tools.benchmark_speed [--steps S] [--quick]
"""

from __future__ import annotations

import argparse
import sys
import time
import numpy as np

from termrunner.runner_core.config_loader import load_config
from termrunner.runner_core.game import CoreGame
from termrunner.runner_core.env_gym import RunnerEnv


def _timing(mode: str, num_steps: int, elapsed: float) -> dict:
    return {
        "mode": mode,
        "num_steps": num_steps,
        "elapsed_seconds": elapsed,
        "steps_per_second": num_steps / elapsed,
        "ms_per_step": (elapsed * 1000) / num_steps
    }


def benchmark_core_game(
    num_steps: int = 1000,
    seed: int = 42,
    render: bool = False
) -> dict:
    """
    Benchmark raw CoreGame ticks without Gym overhead.

    Args:
        num_steps: Number of ticks.
        seed: Random seed for jump decisions.
        render: Also compose a frame after every tick.

    Returns:
        Dict with timing results.
    """
    config = load_config()
    game = CoreGame(config=config)
    rng = np.random.default_rng(seed)
    dt = config.env.dt
    spawn_every = max(1, int(round(config.timing.spawn_interval / dt)))

    start = time.perf_counter()

    for i in range(num_steps):
        if i % spawn_every == 0:
            game.spawn_enemy()
        if rng.random() < 0.1:
            game.request_jump()
        result = game.step(dt)
        if render:
            game.render()
        if result.terminated:
            game.reset()

    elapsed = time.perf_counter() - start
    return _timing("core_game+render" if render else "core_game", num_steps, elapsed)


def benchmark_single_env(
    num_steps: int = 1000,
    seed: int = 42
) -> dict:
    """
    Benchmark single environment performance.

    Args:
        num_steps: Number of steps to run.
        seed: Random seed.

    Returns:
        Dict with timing results.
    """
    env = RunnerEnv()
    rng = np.random.default_rng(seed)

    env.reset(seed=seed)
    start = time.perf_counter()

    for _ in range(num_steps):
        action = int(rng.random() < 0.1)
        _, _, terminated, truncated, _ = env.step(action)
        if terminated or truncated:
            env.reset()

    elapsed = time.perf_counter() - start
    env.close()
    return _timing("env", num_steps, elapsed)


def run_all_benchmarks(steps: int = 500) -> list:
    """Run all benchmarks and print a summary table."""
    results = [
        benchmark_core_game(num_steps=steps),
        benchmark_core_game(num_steps=steps, render=True),
        benchmark_single_env(num_steps=steps),
    ]

    print("=" * 60)
    print("RUNNER ENGINE PERFORMANCE BENCHMARK")
    print("=" * 60)
    print()
    print(f"{'Mode':<20} {'Steps/s':>12} {'ms/step':>10}")
    print("-" * 44)

    for r in results:
        print(f"{r['mode']:<20} {r['steps_per_second']:>12.1f} {r['ms_per_step']:>10.3f}")

    return results


def main():
    parser = argparse.ArgumentParser(description="Benchmark runner engine performance")
    parser.add_argument("--steps", type=int, default=500, help="Steps per benchmark")
    parser.add_argument("--quick", action="store_true", help="Quick benchmark (fewer steps)")

    args = parser.parse_args()

    steps = 100 if args.quick else args.steps
    run_all_benchmarks(steps=steps)

    return 0


if __name__ == "__main__":
    sys.exit(main())
