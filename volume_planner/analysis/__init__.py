"""Training volume analysis: runner level, weekly stats, progression and plans."""

from .calendar import week_start, weeks_between
from .runner_level import determine_runner_level, peak_long_run, peak_volume_for_level
from .weekly_stats import weekly_running_stats
from .progression import ideal_week_volume, is_cutback_week
from .volume_plan import calculate_volume_recommendation, generate_training_plan, summarize_plan

__all__ = [
    "week_start",
    "weeks_between",
    "determine_runner_level",
    "peak_long_run",
    "peak_volume_for_level",
    "weekly_running_stats",
    "ideal_week_volume",
    "is_cutback_week",
    "calculate_volume_recommendation",
    "generate_training_plan",
    "summarize_plan",
]
