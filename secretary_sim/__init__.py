"""
Secretary Problem — Stopping-Rule Simulator

This package estimates, by repeated randomized trials, how often several
optimal-stopping rules pick their target candidate and the average rank of
the candidate they end up with.
"""

from .config import (  # noqa: F401
    CANDIDATE_COUNTS,
    CANDIDATE_COUNTS_QUICK,
    STRATEGY_ORDER,
    TRIAL_COUNT,
    TRIAL_COUNT_QUICK,
    VALIDATION_SEED,
    VALIDATION_TOLERANCE,
)
