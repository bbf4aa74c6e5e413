from __future__ import annotations

import argparse
from typing import Optional, Sequence

import numpy as np

from . import config
from .experiments import run_all
from .io_utils import get_logger


def parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    p = argparse.ArgumentParser(description="Simulate secretary-problem stopping rules.")
    p.add_argument(
        "--mode",
        choices=["full", "quick"],
        default="full",
        help="full: TRIAL_COUNT over CANDIDATE_COUNTS; quick: smaller dev run",
    )
    p.add_argument(
        "--only",
        choices=config.STRATEGY_ORDER + ["all"],
        default="all",
        help="Run only one strategy (or 'all' for the default nine batches).",
    )
    return p.parse_args(argv)


def main(argv: Optional[Sequence[str]] = None) -> None:
    args = parse_args(argv)
    mode = args.mode
    only = args.only

    logger = get_logger(mode=mode)

    if mode == "quick":
        trial_count = config.TRIAL_COUNT_QUICK
        candidate_counts = config.CANDIDATE_COUNTS_QUICK
    else:
        trial_count = config.TRIAL_COUNT
        candidate_counts = config.CANDIDATE_COUNTS

    strategy_keys = config.STRATEGY_ORDER if only == "all" else [only]

    logger.info(
        f"RUN START mode={mode} trials={trial_count} candidate_counts={candidate_counts}"
    )
    if only != "all":
        logger.info(f"RUN CONFIG only={only}")

    # Fresh OS entropy on every run.
    rng = np.random.default_rng()

    run_all(
        strategy_keys=strategy_keys,
        trial_count=trial_count,
        candidate_counts=candidate_counts,
        rng=rng,
        logger_info=logger.info,
    )

    logger.info("RUN END")


if __name__ == "__main__":
    main()
