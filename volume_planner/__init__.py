"""Running volume planner: periodized weekly distance plans for race training."""

__version__ = "0.1.0"

from .models import (
    RaceGoal,
    RunnerLevel,
    ActivityType,
    CardioActivity,
    StrengthActivity,
    UserProfile,
    WeeklyStats,
    VolumeRecommendation,
    WeeklyVolumePlan,
    PlanSummary,
)
from .analysis import (
    calculate_volume_recommendation,
    generate_training_plan,
    summarize_plan,
    weekly_running_stats,
)

__all__ = [
    "RaceGoal",
    "RunnerLevel",
    "ActivityType",
    "CardioActivity",
    "StrengthActivity",
    "UserProfile",
    "WeeklyStats",
    "VolumeRecommendation",
    "WeeklyVolumePlan",
    "PlanSummary",
    "calculate_volume_recommendation",
    "generate_training_plan",
    "summarize_plan",
    "weekly_running_stats",
]
