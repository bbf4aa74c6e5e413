from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Callable, Optional

import numpy as np


class InvalidInput(ValueError):
    """Candidate count too small for a strategy's threshold computation."""


class UnimplementedStrategy(NotImplementedError):
    """A strategy record was built without a magic number or selection rule."""


@dataclass(frozen=True)
class TrialResult:
    """Outcome of a single trial: the rank that was picked and whether it counts as a win."""

    selected_rank: int
    is_win: bool


def generate_candidates(n: int, rng: np.random.Generator) -> np.ndarray:
    """
    Uniformly random arrival order of the ranks 1..n (rank 1 = best).

    Position in the returned array is arrival order; value is the true rank.
    """
    if n < 1:
        raise InvalidInput(f"candidate count must be >= 1 (got {n})")
    return rng.permutation(n).astype(np.int64, copy=False) + 1


# ---- Magic numbers (observation phase length)


def classic_magic_number(n: int) -> int:
    return math.ceil(n / math.e)


def expected_value_magic_number(n: int) -> int:
    # ceil(sqrt(n)) without float error on perfect squares
    root = math.isqrt(n)
    return root if root * root == n else root + 1


def second_best_magic_number(n: int) -> int:
    return n // 2


# ---- Selection rules


def select_below_floor(candidates: np.ndarray, magic_number: int) -> int:
    """
    Reject the first `magic_number` candidates, then take the first one that
    beats the best of them. Falls back to the last candidate.
    """
    if magic_number < 1:
        raise InvalidInput("observation phase is empty; there is no floor to beat")
    floor = candidates[:magic_number].min()
    hits = np.flatnonzero(candidates[magic_number:] < floor)
    if hits.size == 0:
        return int(candidates[-1])
    return int(candidates[magic_number + hits[0]])


def select_second_best(candidates: np.ndarray, magic_number: int) -> int:
    """
    Two-threshold rule aiming for the second-best candidate.

    The observation phase yields `floor` (best rank seen) and `subfloor`
    (second best). During the decision phase the running pair is updated as
    candidates arrive:
    - floor < rank < subfloor: stop and take it (a new second best);
    - rank is the last candidate of the sequence: forced stop;
    - rank < floor: the old floor becomes the subfloor, rank becomes the floor;
    - otherwise: keep scanning.

    A one-element observation phase has no second best; the subfloor is then
    n + 1, worse than every rank, so the first candidate behind the floor is
    accepted.
    """
    n = int(candidates.size)
    if magic_number < 1:
        raise InvalidInput("observation phase is empty; there is no floor to track")
    prefix = candidates[:magic_number]
    floor = int(prefix.min())
    remainder = prefix[prefix != floor]
    subfloor = int(remainder.min()) if remainder.size else n + 1

    decision = candidates[magic_number:]
    # Ranks at or above the starting subfloor never stop the scan or move the pair.
    for offset in np.flatnonzero(decision < subfloor):
        rank = int(decision[offset])
        if floor < rank < subfloor:
            return rank
        if rank < floor:
            floor, subfloor = rank, floor
    # Ranks are distinct, so reaching the end means stopping on the last candidate.
    return int(candidates[-1])


def _unimplemented_magic_number(n: int) -> int:
    raise UnimplementedStrategy("strategy does not define a magic number")


def _unimplemented_select(candidates: np.ndarray, magic_number: int) -> int:
    raise UnimplementedStrategy("strategy does not define a selection rule")


@dataclass(frozen=True)
class Strategy:
    """
    One stopping rule: how long to observe, how to pick, and what counts as a win.

    `label` is formatted with the candidate count (`{n}`) for reports.
    """

    key: str
    label: str
    target_rank: int = 1
    min_candidates: int = 1
    magic_number: Callable[[int], int] = _unimplemented_magic_number
    select: Callable[[np.ndarray, int], int] = _unimplemented_select

    def describe(self, candidate_count: int) -> str:
        return self.label.format(n=candidate_count)


CLASSIC = Strategy(
    key="classic",
    label="searching for best out of {n} candidates",
    target_rank=1,
    min_candidates=1,
    magic_number=classic_magic_number,
    select=select_below_floor,
)
EXPECTED_VALUE = Strategy(
    key="expected_value",
    label="when trying to get the best expected value of {n} candidates",
    target_rank=1,
    min_candidates=1,
    magic_number=expected_value_magic_number,
    select=select_below_floor,
)
SECOND_BEST = Strategy(
    key="second_best",
    label="when trying to get the second best of {n} candidates",
    target_rank=2,
    min_candidates=2,
    magic_number=second_best_magic_number,
    select=select_second_best,
)

STRATEGIES: dict[str, Strategy] = {s.key: s for s in (CLASSIC, EXPECTED_VALUE, SECOND_BEST)}


def lookup_strategy(key: str) -> Strategy:
    try:
        return STRATEGIES[key]
    except KeyError:
        raise ValueError(f"unknown strategy '{key}' (expected one of {sorted(STRATEGIES)})") from None


def threshold_index(strategy: Strategy, n: int) -> int:
    """Magic number for `n` candidates, validated against 0 <= m <= n."""
    if n < strategy.min_candidates:
        raise InvalidInput(
            f"{strategy.key} needs at least {strategy.min_candidates} candidates (got {n})"
        )
    m = int(strategy.magic_number(n))
    if not (0 <= m <= n):
        raise InvalidInput(f"{strategy.key}: magic number {m} outside [0, {n}]")
    return m


def play(strategy: Strategy, candidates) -> TrialResult:
    """Apply `strategy` to a given arrival order (deterministic; used by tests and simulate)."""
    seq = np.asarray(candidates, dtype=np.int64)
    m = threshold_index(strategy, int(seq.size))
    selected = int(strategy.select(seq, m))
    return TrialResult(selected_rank=selected, is_win=selected == strategy.target_rank)


def simulate(strategy: Strategy, n: int, *, rng: np.random.Generator) -> TrialResult:
    """Run one trial of `strategy` over a fresh random arrival order of `n` candidates."""
    return play(strategy, generate_candidates(n, rng))


def below_floor_win_probability(n: int, magic_number: Optional[int] = None) -> float:
    """
    Exact probability that the below-floor rule picks rank 1.

    With m candidates observed: P = m/n * sum_{j=m}^{n-1} 1/j.
    When m == n every candidate is observed and the fallback (last candidate)
    is the best with probability 1/n. Defaults to the classic magic number.
    """
    if n < 1:
        raise InvalidInput(f"candidate count must be >= 1 (got {n})")
    m = classic_magic_number(n) if magic_number is None else int(magic_number)
    if not (1 <= m <= n):
        raise InvalidInput(f"magic number {m} outside [1, {n}]")
    if m == n:
        return 1.0 / n
    harmonic_tail = float(np.sum(1.0 / np.arange(m, n, dtype=np.float64)))
    return m / n * harmonic_tail


def classic_win_probability(n: int) -> float:
    return below_floor_win_probability(n, classic_magic_number(n))
