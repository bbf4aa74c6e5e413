from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Iterable, Optional, Sequence

import numpy as np
import pandas as pd
from tqdm import tqdm

from . import config
from .io_utils import emit_report
from .model import (
    Strategy,
    TrialResult,
    below_floor_win_probability,
    lookup_strategy,
    select_below_floor,
    simulate,
    threshold_index,
)


@dataclass(frozen=True)
class BatchSummary:
    """Reduced statistics for one (strategy, trial count, candidate count) batch."""

    trial_count: int
    wins: int
    win_percentage: float  # in [0, 1], 4 decimal places
    average_rank: int


def _round_half_up(numerator: int, denominator: int) -> int:
    # Nearest integer to numerator / denominator for non-negative ints; exact, halves go up.
    return (2 * numerator + denominator) // (2 * denominator)


def run_trials(
    strategy: Strategy,
    trial_count: int,
    candidate_count: int,
    *,
    rng: np.random.Generator,
    progress: bool = True,
) -> list[TrialResult]:
    """
    Run `trial_count` independent trials of `strategy`.

    Every trial draws its own arrival order from `rng`; nothing else is shared.
    The candidate count is validated before the first trial so that an invalid
    configuration fails without burning entropy.
    """
    if trial_count < 1:
        raise ValueError("trial_count must be positive")
    threshold_index(strategy, candidate_count)

    results: list[TrialResult] = []
    for _ in tqdm(
        range(trial_count),
        desc=f"{strategy.key} n={candidate_count}",
        leave=False,
        disable=not progress,
    ):
        results.append(simulate(strategy, candidate_count, rng=rng))
    return results


def results_frame(results: Iterable) -> pd.DataFrame:
    """Trial results as a DataFrame with `selected_rank` and `is_win` columns.

    Accepts TrialResult objects or plain (rank, is_win) pairs.
    """
    rows = [
        (r.selected_rank, r.is_win) if isinstance(r, TrialResult) else tuple(r)
        for r in results
    ]
    return pd.DataFrame(
        {
            "selected_rank": np.array([row[0] for row in rows], dtype=np.int64),
            "is_win": np.array([bool(row[1]) for row in rows], dtype=bool),
        }
    )


def aggregate_results(results: Iterable) -> BatchSummary:
    """
    Win percentage and average rank of a batch.

    Both figures are rounded half-up with integer arithmetic, so boundary
    fractions such as 0.00005 or x.5 round the same way on every platform.
    """
    df = results_frame(results)
    if df.empty:
        raise ValueError("no trial results to aggregate")

    trial_count = int(len(df))
    wins = int(df["is_win"].sum())
    rank_total = int(df["selected_rank"].sum())

    scale = 10 ** config.WIN_PERCENTAGE_PLACES
    return BatchSummary(
        trial_count=trial_count,
        wins=wins,
        win_percentage=_round_half_up(wins * scale, trial_count) / scale,
        average_rank=_round_half_up(rank_total, trial_count),
    )


def format_report(strategy: Strategy, candidate_count: int, summary: BatchSummary) -> str:
    # 2 places on the percent keeps 0.372 -> "37.2" instead of float noise.
    percent = round(summary.win_percentage * 100, 2)
    return "\n".join(
        [
            "=" * config.RULE_WIDTH,
            f"{strategy.describe(candidate_count)}, {summary.trial_count} times",
            f"won {percent}% of the time",
            f"average rank was {summary.average_rank}",
        ]
    )


def run_batch(
    strategy: Strategy,
    *,
    trial_count: int,
    candidate_count: int,
    rng: np.random.Generator,
    logger_info: Callable[[str], None],
    progress: bool = True,
) -> tuple[BatchSummary, str]:
    """Run one configuration and return its summary together with the rendered report."""
    m = threshold_index(strategy, candidate_count)
    logger_info(
        f"START {strategy.key}: trials={trial_count} n={candidate_count} magic_number={m}"
    )

    results = run_trials(strategy, trial_count, candidate_count, rng=rng, progress=progress)
    summary = aggregate_results(results)

    msg = (
        f"END {strategy.key}: n={candidate_count} wins={summary.wins}/{summary.trial_count} "
        f"win_percentage={summary.win_percentage:.4f} average_rank={summary.average_rank}"
    )
    if strategy.select is select_below_floor and m >= 1:
        msg += f" exact_win_probability={below_floor_win_probability(candidate_count, m):.4f}"
    logger_info(msg)

    return summary, format_report(strategy, candidate_count, summary)


def run_all(
    *,
    strategy_keys: Sequence[str],
    trial_count: int,
    candidate_counts: Sequence[int],
    rng: np.random.Generator,
    logger_info: Callable[[str], None],
    emit: Optional[Callable[[str], None]] = None,
    progress: bool = True,
) -> list[BatchSummary]:
    """Every strategy against every candidate count, in order, emitting one report per batch."""
    emit = emit_report if emit is None else emit
    summaries: list[BatchSummary] = []
    for key in strategy_keys:
        strategy = lookup_strategy(key)
        for candidate_count in candidate_counts:
            summary, report = run_batch(
                strategy,
                trial_count=trial_count,
                candidate_count=candidate_count,
                rng=rng,
                logger_info=logger_info,
                progress=progress,
            )
            emit(report)
            summaries.append(summary)
    return summaries
