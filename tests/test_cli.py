"""Tests for the command-line interface."""

import json
import pandas as pd
import pytest
from click.testing import CliRunner
from volume_planner.cli import cli
from volume_planner.config import Config

RACE_ARGS = ["--race-goal", "FullMarathon", "--race-date", "2025-05-21", "--today", "2025-01-01"]


def json_output(result):
    """Parse the JSON document printed by a command, skipping any log lines before it."""
    return json.loads(result.output[result.output.index("{"):])


@pytest.fixture
def runner(monkeypatch):
    """CLI runner with configured defaults cleared."""
    for name in ("RACE_GOAL", "RACE_DATE", "RACE_TIME_GOAL", "ACTIVITIES_FILE"):
        monkeypatch.setattr(Config, name, "")
    return CliRunner()


@pytest.fixture
def activities_file(tmp_path):
    path = tmp_path / "activities.json"
    path.write_text(json.dumps([
        {"id": "1", "type": "RoadRun", "date": "2024-12-23", "distanceInKm": 8, "durationInSeconds": 2880},
        {"id": "2", "type": "RoadRun", "date": "2024-12-28", "distanceInKm": 14, "durationInSeconds": 5040},
        {"id": "3", "type": "RoadCycle", "date": "2024-12-29", "distanceInKm": 60, "durationInSeconds": 7200},
    ]))
    return path


class TestLevelCommand:
    """Test runner level output."""

    def test_level(self, runner):
        result = runner.invoke(cli, ["level", "--race-goal", "FullMarathon", "--time-goal", "3:30:00"])

        assert result.exit_code == 0
        assert "intermediate" in result.output
        assert "85 km" in result.output
        assert "31.6 km" in result.output

    def test_unknown_goal(self, runner):
        result = runner.invoke(cli, ["level", "--race-goal", "Ultra"])

        assert result.exit_code == 1
        assert "Unknown race goal" in result.output

    def test_goal_from_config(self, runner, monkeypatch):
        monkeypatch.setattr(Config, "RACE_GOAL", "10K")

        result = runner.invoke(cli, ["level"])

        assert result.exit_code == 0
        assert "beginner" in result.output
        assert "35 km" in result.output


class TestRecommendCommand:
    """Test weekly recommendation output."""

    def test_recommend(self, runner, activities_file):
        result = runner.invoke(cli, ["recommend", *RACE_ARGS, "--activities", str(activities_file)])

        assert result.exit_code == 0
        assert "10.0 km" in result.output
        assert "22.0 km" in result.output  # last week's running total, ride excluded

    def test_past_race(self, runner):
        result = runner.invoke(
            cli, ["recommend", "--race-goal", "10K", "--race-date", "2025-01-01", "--today", "2025-06-01"]
        )

        assert result.exit_code == 0
        assert "plan unavailable" in result.output

    def test_missing_race(self, runner):
        result = runner.invoke(cli, ["recommend"])

        assert result.exit_code == 1
        assert "RACE_GOAL" in result.output

    def test_bad_date(self, runner):
        result = runner.invoke(cli, ["recommend", "--race-goal", "10K", "--race-date", "soon"])

        assert result.exit_code == 1
        assert "Invalid race date" in result.output

    def test_missing_activity_file(self, runner, tmp_path):
        result = runner.invoke(cli, ["recommend", *RACE_ARGS, "--activities", str(tmp_path / "missing.json")])

        assert result.exit_code == 1
        assert "not found" in result.output

    def test_json(self, runner, activities_file):
        result = runner.invoke(cli, ["recommend", *RACE_ARGS, "--activities", str(activities_file), "--json"])

        assert result.exit_code == 0
        data = json_output(result)
        assert data["weekly_volume_km"] == 10.0
        assert data["last_week_volume_km"] == 22.0
        assert data["total_weeks"] == 21
        assert data["peak_volume_km"] == 65

    def test_race_from_config(self, runner, monkeypatch):
        monkeypatch.setattr(Config, "RACE_GOAL", "FullMarathon")
        monkeypatch.setattr(Config, "RACE_DATE", "2025-05-21")
        monkeypatch.setattr(Config, "RACE_TIME_GOAL", "3:30:00")

        result = runner.invoke(cli, ["recommend", "--today", "2025-01-01", "--json"])

        assert result.exit_code == 0
        data = json_output(result)
        assert data["weeks_until_race"] == 20
        assert data["peak_volume_km"] == 85

    def test_options_override_config(self, runner, monkeypatch):
        monkeypatch.setattr(Config, "RACE_GOAL", "10K")
        monkeypatch.setattr(Config, "RACE_DATE", "2025-03-01")

        result = runner.invoke(cli, ["recommend", *RACE_ARGS, "--json"])

        assert result.exit_code == 0
        data = json_output(result)
        assert data["total_weeks"] == 21
        assert data["peak_volume_km"] == 65

    def test_unknown_goal_in_config(self, runner, monkeypatch):
        monkeypatch.setattr(Config, "RACE_GOAL", "Ultra")
        monkeypatch.setattr(Config, "RACE_DATE", "2025-05-21")

        result = runner.invoke(cli, ["recommend", "--today", "2025-01-01"])

        assert result.exit_code == 1
        assert "RACE_GOAL" in result.output
        assert "RACE_DATE" not in result.output


class TestPlanCommand:
    """Test plan table and export."""

    def test_plan(self, runner):
        result = runner.invoke(cli, ["plan", *RACE_ARGS, "--time-goal", "3:30:00"])

        assert result.exit_code == 0
        assert "W1" in result.output
        assert "Race" in result.output
        assert "Peak" in result.output
        assert "Summary" in result.output

    def test_export(self, runner, tmp_path):
        export_path = tmp_path / "plan.csv"
        result = runner.invoke(
            cli, ["plan", *RACE_ARGS, "--time-goal", "3:30:00", "--export", str(export_path)]
        )

        assert result.exit_code == 0
        df = pd.read_csv(export_path)
        assert len(df) == 21
        assert df["week_label"].iloc[-1] == "Race"
        assert df.loc[df["is_peak_week"], "weekly_volume_km"].iloc[0] == 85
        assert df["week_type"].iloc[3] == "Cutback"

    def test_export_json(self, runner, tmp_path):
        export_path = tmp_path / "plan.json"
        result = runner.invoke(
            cli, ["plan", *RACE_ARGS, "--time-goal", "3:30:00", "--export", str(export_path)]
        )

        assert result.exit_code == 0
        data = json.loads(export_path.read_text())
        assert data["summary"]["weeks_remaining"] == 21
        assert data["summary"]["peak_volume_km"] == 85
        assert data["summary"]["peak_long_run_km"] == 31.6
        assert len(data["weeks"]) == 21
        assert data["weeks"][0]["week_start_date"] == "2024-12-30"
        assert data["weeks"][-1]["week_label"] == "Race"

    def test_starting_volume_from_activities(self, runner, activities_file, tmp_path):
        export_path = tmp_path / "plan.csv"
        result = runner.invoke(
            cli, ["plan", *RACE_ARGS, "--activities", str(activities_file), "--export", str(export_path)]
        )

        assert result.exit_code == 0
        assert pd.read_csv(export_path)["weekly_volume_km"].iloc[0] == 22.0

    def test_past_race(self, runner):
        result = runner.invoke(
            cli, ["plan", "--race-goal", "10K", "--race-date", "2025-01-01", "--today", "2025-06-01"]
        )

        assert result.exit_code == 0
        assert "plan unavailable" in result.output


class TestStatsCommand:
    """Test weekly stats output."""

    def test_stats(self, runner, activities_file):
        result = runner.invoke(cli, ["stats", "--activities", str(activities_file), "--week", "2024-12-25"])

        assert result.exit_code == 0
        assert "2024-12-23" in result.output
        assert "22.0 km" in result.output
        assert "14.0 km" in result.output

    def test_stats_json(self, runner, activities_file):
        result = runner.invoke(
            cli, ["stats", "--activities", str(activities_file), "--week", "2024-12-25", "--json"]
        )

        assert result.exit_code == 0
        assert json_output(result) == {
            "week_start_date": "2024-12-23",
            "total_distance_km": 22.0,
            "longest_run_km": 14.0,
            "run_count": 2,
        }
