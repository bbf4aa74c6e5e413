"""Tests for trial batches, aggregation and report rendering."""

import math

import numpy as np
import pytest

from secretary_sim.experiments import (
    BatchSummary,
    aggregate_results,
    format_report,
    results_frame,
    run_all,
    run_batch,
    run_trials,
)
from secretary_sim.model import CLASSIC, EXPECTED_VALUE, SECOND_BEST, InvalidInput, TrialResult


class TestRunTrials:
    """Tests for the trial runner."""

    def test_length_and_types(self, rng):
        results = run_trials(EXPECTED_VALUE, 25, 50, rng=rng, progress=False)
        assert len(results) == 25
        assert all(isinstance(r, TrialResult) for r in results)
        assert all(1 <= r.selected_rank <= 50 for r in results)

    def test_rejects_zero_trials(self, rng):
        with pytest.raises(ValueError):
            run_trials(CLASSIC, 0, 10, rng=rng, progress=False)

    def test_invalid_candidate_count_fails_fast(self, rng):
        with pytest.raises(InvalidInput):
            run_trials(SECOND_BEST, 10, 1, rng=rng, progress=False)

    def test_reproducible_with_seed(self):
        a = run_trials(SECOND_BEST, 20, 100, rng=np.random.default_rng(3), progress=False)
        b = run_trials(SECOND_BEST, 20, 100, rng=np.random.default_rng(3), progress=False)
        assert a == b

    def test_classic_win_rate(self, rng):
        """Empirical Classic win rate at n=100 within 0.03 of 1/e."""
        summary = aggregate_results(run_trials(CLASSIC, 2000, 100, rng=rng, progress=False))
        assert abs(summary.win_percentage - 1 / math.e) <= 0.03


class TestAggregation:
    """Tests for the report aggregator."""

    def test_pairs(self):
        summary = aggregate_results([(1, True), (2, False), (3, False), (1, True)])
        assert summary == BatchSummary(trial_count=4, wins=2, win_percentage=0.5, average_rank=2)

    def test_trial_results(self):
        results = [TrialResult(1, True), TrialResult(4, False)]
        summary = aggregate_results(results)
        assert summary.win_percentage == 0.5
        # 2.5 rounds half-up
        assert summary.average_rank == 3

    def test_four_decimal_places(self):
        results = [(1, True)] + [(2, False)] * 2
        assert aggregate_results(results).win_percentage == 0.3333

    def test_half_ten_thousandth_rounds_up(self):
        results = [(1, True)] + [(5, False)] * 19_999
        assert aggregate_results(results).win_percentage == 0.0001

    def test_empty(self):
        with pytest.raises(ValueError):
            aggregate_results([])

    def test_frame_columns(self):
        df = results_frame([TrialResult(3, False), (1, True)])
        assert list(df.columns) == ["selected_rank", "is_win"]
        assert df["selected_rank"].tolist() == [3, 1]
        assert df["is_win"].tolist() == [False, True]


class TestFormatReport:
    """Tests for report text."""

    def test_classic_block(self):
        summary = BatchSummary(trial_count=500, wins=186, win_percentage=0.372, average_rank=11)
        assert format_report(CLASSIC, 100, summary) == "\n".join(
            [
                "=" * 80,
                "searching for best out of 100 candidates, 500 times",
                "won 37.2% of the time",
                "average rank was 11",
            ]
        )

    def test_descriptions(self):
        summary = BatchSummary(trial_count=500, wins=0, win_percentage=0.0, average_rank=3)
        ev = format_report(EXPECTED_VALUE, 1000, summary).splitlines()
        sb = format_report(SECOND_BEST, 1000, summary).splitlines()
        assert ev[1] == "when trying to get the best expected value of 1000 candidates, 500 times"
        assert sb[1] == "when trying to get the second best of 1000 candidates, 500 times"
        assert ev[2] == "won 0.0% of the time"


class TestBatches:
    """Tests for running whole configurations."""

    def test_run_batch_logs(self, rng):
        messages = []
        summary, report = run_batch(
            CLASSIC,
            trial_count=10,
            candidate_count=20,
            rng=rng,
            logger_info=messages.append,
            progress=False,
        )
        assert summary.trial_count == 10
        assert report.startswith("=" * 80)
        assert messages[0].startswith("START classic")
        assert "exact_win_probability" in messages[-1]

    def test_run_all_order(self, rng):
        emitted = []
        summaries = run_all(
            strategy_keys=["classic", "expected_value", "second_best"],
            trial_count=5,
            candidate_counts=[10, 20, 30],
            rng=rng,
            logger_info=lambda msg: None,
            emit=emitted.append,
            progress=False,
        )
        assert len(summaries) == 9
        headers = [block.splitlines()[1] for block in emitted]
        assert headers[0] == "searching for best out of 10 candidates, 5 times"
        assert headers[2] == "searching for best out of 30 candidates, 5 times"
        assert headers[3].startswith("when trying to get the best expected value of 10")
        assert headers[8] == "when trying to get the second best of 30 candidates, 5 times"
