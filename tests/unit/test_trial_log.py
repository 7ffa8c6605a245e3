"""Unit tests for the trial log."""

import math

import numpy as np
import pytest

from medrops.exceptions import ValidationError


class TestTrialLog:
    """Test TrialLog append-only history."""

    def test_initially_empty(self, trial_log):
        assert len(trial_log) == 0
        assert trial_log.entries == []
        assert trial_log.best() is None
        assert trial_log.rewards().shape == (0,)

    def test_insertion_order(self, trial_log):
        for i in range(5):
            trial_log.append(np.full(3, float(i)), reward=10.0 - i)

        assert len(trial_log) == 5
        assert [e.reward for e in trial_log] == [10.0, 9.0, 8.0, 7.0, 6.0]
        np.testing.assert_array_equal(trial_log[2].parameters, [2.0, 2.0, 2.0])

    def test_duplicates_kept(self, trial_log):
        trial_log.append([1.0, 2.0], 3.0)
        trial_log.append([1.0, 2.0], 3.0)
        assert len(trial_log) == 2

    def test_parameters_copied_and_frozen(self, trial_log):
        params = np.array([1.0, 2.0])
        entry = trial_log.append(params, 1.0)
        params[0] = 42.0
        assert entry.parameters[0] == 1.0
        with pytest.raises(ValueError):
            entry.parameters[0] = 0.0

    def test_best(self, trial_log):
        trial_log.append([0.0], 1.0)
        trial_log.append([1.0], 5.0)
        trial_log.append([2.0], 5.0)
        trial_log.append([3.0], 2.0)
        best = trial_log.best()
        assert best.reward == 5.0
        np.testing.assert_array_equal(best.parameters, [1.0])

    def test_entries_snapshot(self, trial_log):
        trial_log.append([0.0], 1.0)
        snapshot = trial_log.entries
        trial_log.append([1.0], 2.0)
        assert len(snapshot) == 1
        assert len(trial_log) == 2

    def test_non_finite_reward_rejected(self, trial_log):
        with pytest.raises(ValidationError):
            trial_log.append([0.0], math.inf)
        assert len(trial_log) == 0

    def test_to_dict(self, trial_log):
        entry = trial_log.append(np.array([0.5, 1.5]), 2.0)
        assert entry.to_dict() == {"parameters": [0.5, 1.5], "reward": 2.0}
