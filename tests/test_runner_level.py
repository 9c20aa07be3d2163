"""Tests for runner level classification and peak targets."""

import pytest
from volume_planner.models import RaceGoal, RunnerLevel
from volume_planner.analysis.runner_level import (
    determine_runner_level,
    parse_race_time_to_minutes,
    peak_long_run,
    peak_volume_for_level,
)


class TestParseRaceTime:
    """Test H:MM:SS parsing."""

    def test_valid_formats(self):
        assert parse_race_time_to_minutes("3:30:00") == 210
        assert parse_race_time_to_minutes("03:30:00") == 210
        assert parse_race_time_to_minutes("4:05:30") == pytest.approx(245.5)
        assert parse_race_time_to_minutes("0:45:00") == 45

    @pytest.mark.parametrize("text", ["3:30", "1:2:3:4", "abc", "3:xx:00", "::", ""])
    def test_invalid_formats(self, text):
        assert parse_race_time_to_minutes(text) is None


class TestDetermineRunnerLevel:
    """Test classification against distance-specific thresholds."""

    def test_marathon_boundaries(self):
        assert determine_runner_level(RaceGoal.FULL_MARATHON, "4:30:00") == RunnerLevel.BEGINNER
        assert determine_runner_level(RaceGoal.FULL_MARATHON, "4:29:59") == RunnerLevel.INTERMEDIATE
        assert determine_runner_level(RaceGoal.FULL_MARATHON, "3:30:00") == RunnerLevel.INTERMEDIATE
        assert determine_runner_level(RaceGoal.FULL_MARATHON, "3:29:59") == RunnerLevel.ADVANCED

    def test_half_marathon(self):
        assert determine_runner_level(RaceGoal.HALF_MARATHON, "2:15:00") == RunnerLevel.BEGINNER
        assert determine_runner_level(RaceGoal.HALF_MARATHON, "1:45:00") == RunnerLevel.INTERMEDIATE
        assert determine_runner_level(RaceGoal.HALF_MARATHON, "1:30:00") == RunnerLevel.ADVANCED

    def test_ten_k(self):
        assert determine_runner_level(RaceGoal.TEN_K, "1:00:00") == RunnerLevel.BEGINNER
        assert determine_runner_level(RaceGoal.TEN_K, "0:50:00") == RunnerLevel.INTERMEDIATE
        assert determine_runner_level(RaceGoal.TEN_K, "0:44:59") == RunnerLevel.ADVANCED

    def test_same_time_means_different_levels_by_distance(self):
        """A 1:40 finish is intermediate for a half marathon but beginner for a 10K."""
        assert determine_runner_level(RaceGoal.HALF_MARATHON, "1:40:00") == RunnerLevel.INTERMEDIATE
        assert determine_runner_level(RaceGoal.TEN_K, "1:40:00") == RunnerLevel.BEGINNER

    @pytest.mark.parametrize("goal", [None, "", "   ", "abc", "3:30", "fast"])
    def test_missing_or_malformed_defaults_to_beginner(self, goal):
        assert determine_runner_level(RaceGoal.FULL_MARATHON, goal) == RunnerLevel.BEGINNER


class TestPeakTargets:
    """Test peak volume and long run lookup."""

    def test_peak_volume_by_level(self):
        assert peak_volume_for_level(RaceGoal.FULL_MARATHON, "3:30:00") == 85
        assert peak_volume_for_level(RaceGoal.FULL_MARATHON, "2:59:00") == 105
        assert peak_volume_for_level(RaceGoal.FULL_MARATHON) == 65
        assert peak_volume_for_level(RaceGoal.HALF_MARATHON, "1:30:00") == 80
        assert peak_volume_for_level(RaceGoal.TEN_K, None) == 35

    def test_peak_long_run(self):
        assert peak_long_run(RaceGoal.FULL_MARATHON) == 31.6
        assert peak_long_run(RaceGoal.HALF_MARATHON) == 15.8
        assert peak_long_run(RaceGoal.TEN_K) == 7.5
