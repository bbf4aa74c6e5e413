"""
Sanity-check / validation script.

Runs a seeded batch of Classic trials and prints the empirical win rate next
to the exact finite-n probability and the asymptotic 1/e. Also plays every
strategy on its smallest valid candidate count. Nothing is written to disk.
"""

from __future__ import annotations

import math

import numpy as np

from . import config
from .experiments import aggregate_results, run_trials
from .model import (
    CLASSIC,
    STRATEGIES,
    classic_win_probability,
    play,
    threshold_index,
)


def _pct(x: float) -> str:
    return f"{100.0 * x:.2f}%"


def main() -> None:
    n = config.VALIDATION_CANDIDATES
    trials = config.VALIDATION_TRIALS
    seed = config.VALIDATION_SEED

    # ---- Classic win rate vs theory
    rng = np.random.default_rng(seed)
    results = run_trials(CLASSIC, trials, n, rng=rng, progress=False)
    summary = aggregate_results(results)

    asymptotic = 1.0 / math.e
    exact = classic_win_probability(n)
    print("[VALIDATION] classic rule (seeded)")
    print(f"n={n}, trials={trials}, seed={seed}, magic_number={threshold_index(CLASSIC, n)}")
    print(f"empirical win rate: {_pct(summary.win_percentage)}")
    print(f"exact win probability: {_pct(exact)}")
    print(f"asymptotic 1/e: {_pct(asymptotic)}")
    print(f"average rank: {summary.average_rank}")
    print("")

    gap = abs(summary.win_percentage - asymptotic)
    assert gap <= config.VALIDATION_TOLERANCE, (
        f"empirical win rate {summary.win_percentage:.4f} is {gap:.4f} away from 1/e"
    )

    # ---- Smallest valid candidate counts
    print("[VALIDATION] boundary sequences")
    for key, strategy in STRATEGIES.items():
        for order in ([1, 2], [2, 1]):
            outcome = play(strategy, order)
            print(
                f"{key}: candidates={order} -> selected={outcome.selected_rank} "
                f"win={outcome.is_win}"
            )
    print("")

    print("[VALIDATION COMPLETE] Stopping rules consistent with theory.")


if __name__ == "__main__":
    main()
