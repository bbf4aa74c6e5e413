"""
Configuration for the secretary-problem stopping-rule experiments.

Only numpy/pandas/tqdm are assumed available in the environment.
"""

# Trials per (strategy, candidate count) batch
TRIAL_COUNT = 500
CANDIDATE_COUNTS = [
    100,
    1_000,
    1_000_000,
]

# Quick mode (dev / smoke test)
TRIAL_COUNT_QUICK = 50
CANDIDATE_COUNTS_QUICK = [100, 1_000]

# Report order; keys match model.STRATEGIES
STRATEGY_ORDER = ["classic", "expected_value", "second_best"]

# Report rendering
RULE_WIDTH = 80
WIN_PERCENTAGE_PLACES = 4

# Validation run (validate_model only; the driver never seeds)
VALIDATION_SEED = 123
VALIDATION_TRIALS = 2_000
VALIDATION_CANDIDATES = 100
VALIDATION_TOLERANCE = 0.03
