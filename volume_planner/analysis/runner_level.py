"""Runner level classification and peak training targets."""

import logging
from typing import Dict, Optional

from ..models import RaceGoal, RunnerLevel, RACE_DISTANCES_KM, round_half_up

logger = logging.getLogger(__name__)

# Peak weekly volume (km) by race goal and runner level.
# Beginner ~ Hal Higdon Novice, intermediate ~ Pfitzinger 18/55, advanced ~ high mileage plans.
PEAK_VOLUMES_BY_LEVEL: Dict[RaceGoal, Dict[RunnerLevel, float]] = {
    RaceGoal.TEN_K: {
        RunnerLevel.BEGINNER: 35,
        RunnerLevel.INTERMEDIATE: 50,
        RunnerLevel.ADVANCED: 65,
    },
    RaceGoal.HALF_MARATHON: {
        RunnerLevel.BEGINNER: 50,
        RunnerLevel.INTERMEDIATE: 65,
        RunnerLevel.ADVANCED: 80,
    },
    RaceGoal.FULL_MARATHON: {
        RunnerLevel.BEGINNER: 65,
        RunnerLevel.INTERMEDIATE: 85,
        RunnerLevel.ADVANCED: 105,
    },
}

# Finish-time thresholds in minutes. At or above beginner_max = beginner,
# at or above intermediate_max = intermediate, faster = advanced.
LEVEL_TIME_THRESHOLDS: Dict[RaceGoal, Dict[str, float]] = {
    RaceGoal.TEN_K: {"beginner_max": 55, "intermediate_max": 45},
    RaceGoal.HALF_MARATHON: {"beginner_max": 120, "intermediate_max": 95},
    RaceGoal.FULL_MARATHON: {"beginner_max": 270, "intermediate_max": 210},
}

# Long run reaches 75% of race distance at peak
PEAK_LONG_RUN_RATIO = 0.75


def parse_race_time_to_minutes(race_time_goal: str) -> Optional[float]:
    """Parse an ``H:MM:SS`` / ``HH:MM:SS`` time to total minutes.

    Returns None when the string does not have three numeric segments.
    """
    parts = race_time_goal.split(":")
    if len(parts) != 3:
        return None

    try:
        hours, minutes, seconds = (int(part.strip()) for part in parts)
    except ValueError:
        return None

    return hours * 60 + minutes + seconds / 60


def determine_runner_level(race_goal: RaceGoal, race_time_goal: Optional[str] = None) -> RunnerLevel:
    """Classify the runner from the target finish time.

    Args:
        race_goal: Race distance
        race_time_goal: Target time as H:MM:SS, may be missing

    Returns:
        RunnerLevel, BEGINNER when the time is absent or cannot be parsed
    """
    if not race_time_goal or not race_time_goal.strip():
        return RunnerLevel.BEGINNER

    time_in_minutes = parse_race_time_to_minutes(race_time_goal)
    if time_in_minutes is None:
        logger.debug(f"Could not parse race time goal '{race_time_goal}', assuming beginner")
        return RunnerLevel.BEGINNER

    thresholds = LEVEL_TIME_THRESHOLDS[race_goal]
    if time_in_minutes >= thresholds["beginner_max"]:
        return RunnerLevel.BEGINNER
    if time_in_minutes >= thresholds["intermediate_max"]:
        return RunnerLevel.INTERMEDIATE
    return RunnerLevel.ADVANCED


def peak_volume_for_level(race_goal: RaceGoal, race_time_goal: Optional[str] = None) -> float:
    """Peak weekly volume (km) for the race goal and the runner's level."""
    level = determine_runner_level(race_goal, race_time_goal)
    return PEAK_VOLUMES_BY_LEVEL[race_goal][level]


def peak_long_run(race_goal: RaceGoal) -> float:
    """Peak long run distance (km), rounded to one decimal."""
    return round_half_up(RACE_DISTANCES_KM[race_goal] * PEAK_LONG_RUN_RATIO, 1)
