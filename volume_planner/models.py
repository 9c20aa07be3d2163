"""Domain types for race goals, activities and volume plans."""

import math
from dataclasses import dataclass, field, asdict
from datetime import date
from enum import Enum
from typing import Dict, List, Optional, Union


class RaceGoal(Enum):
    """Supported race distances."""

    TEN_K = "10K"
    HALF_MARATHON = "HalfMarathon"
    FULL_MARATHON = "FullMarathon"

    @classmethod
    def from_string(cls, value: str) -> "RaceGoal":
        """Resolve a race goal from its value or member name (case-insensitive)."""
        normalized = (value or "").strip().lower()
        for goal in cls:
            if normalized in (goal.value.lower(), goal.name.lower()):
                return goal
        valid = ", ".join(goal.value for goal in cls)
        raise ValueError(f"Unknown race goal '{value}' (expected one of: {valid})")


RACE_DISTANCES_KM: Dict[RaceGoal, float] = {
    RaceGoal.TEN_K: 10.0,
    RaceGoal.HALF_MARATHON: 21.0975,
    RaceGoal.FULL_MARATHON: 42.195,
}


class RunnerLevel(Enum):
    """Runner experience level derived from the race time goal."""

    BEGINNER = "beginner"          # "to-finish" or first-time runners
    INTERMEDIATE = "intermediate"  # moderate time goals
    ADVANCED = "advanced"          # PR hunting, competitive runners


class ActivityType(Enum):
    """Activity tags as recorded by the training log."""

    ROAD_RUN = "RoadRun"
    TREADMILL_RUN = "TreadmillRun"
    POOL_SWIM = "PoolSwim"
    SEA_SWIM = "SeaSwim"
    ROAD_CYCLE = "RoadCycle"
    INDOOR_CYCLE = "IndoorCycle"
    STRENGTH_TRAINING_LEGS = "StrengthTrainingLegs"
    STRENGTH_TRAINING_ARMS = "StrengthTrainingArms"
    STRENGTH_TRAINING_CORE = "StrengthTrainingCore"
    STRENGTH_TRAINING_SHOULDERS = "StrengthTrainingShoulders"
    STRENGTH_TRAINING_BACK = "StrengthTrainingBack"
    STRENGTH_TRAINING_CHEST = "StrengthTrainingChest"

    @property
    def is_cardio(self) -> bool:
        return self in CARDIO_ACTIVITY_TYPES


CARDIO_ACTIVITY_TYPES = frozenset({
    ActivityType.ROAD_RUN,
    ActivityType.TREADMILL_RUN,
    ActivityType.POOL_SWIM,
    ActivityType.SEA_SWIM,
    ActivityType.ROAD_CYCLE,
    ActivityType.INDOOR_CYCLE,
})

RUNNING_ACTIVITY_TYPES = frozenset({ActivityType.ROAD_RUN, ActivityType.TREADMILL_RUN})


@dataclass(frozen=True)
class Repetition:
    """A single strength exercise within a session."""

    type: str
    count: int
    series: int
    weight_kg: float


@dataclass(frozen=True)
class CardioActivity:
    """Distance-based activity (runs, swims, rides)."""

    id: str
    type: ActivityType
    date: date
    duration_in_seconds: int
    distance_in_km: float
    effort: Optional[str] = None  # easy, moderate, hard, race


@dataclass(frozen=True)
class StrengthActivity:
    """Gym session made of repetitions; carries no distance."""

    id: str
    type: ActivityType
    date: date
    duration_in_seconds: int
    repetitions: List[Repetition] = field(default_factory=list)


Activity = Union[CardioActivity, StrengthActivity]


def activity_from_dict(record: Dict) -> Activity:
    """Build an activity from an exported record.

    Args:
        record: Mapping using the export field names (``type``, ``date``,
            ``durationInSeconds``, ``distanceInKm``, ``repetitions``)

    Returns:
        CardioActivity or StrengthActivity depending on the type tag

    Raises:
        ValueError: If the type tag is unknown or the date is unparseable
    """
    activity_type = ActivityType(record["type"])
    activity_date = date.fromisoformat(str(record["date"])[:10])
    activity_id = str(record.get("id", ""))
    duration = int(record.get("durationInSeconds") or 0)

    if activity_type.is_cardio:
        return CardioActivity(
            id=activity_id,
            type=activity_type,
            date=activity_date,
            duration_in_seconds=duration,
            distance_in_km=float(record.get("distanceInKm") or 0.0),
            effort=record.get("effort"),
        )

    repetitions = [
        Repetition(
            type=rep["type"],
            count=int(rep.get("count", 0)),
            series=int(rep.get("series", 0)),
            weight_kg=float(rep.get("weightKg", 0.0)),
        )
        for rep in record.get("repetitions") or []
    ]
    return StrengthActivity(
        id=activity_id,
        type=activity_type,
        date=activity_date,
        duration_in_seconds=duration,
        repetitions=repetitions,
    )


@dataclass
class UserProfile:
    """Planning-relevant part of the runner's profile."""

    race_goal: Optional[RaceGoal] = None
    race_date: Optional[date] = None
    race_time_goal: Optional[str] = None

    @property
    def has_race(self) -> bool:
        return self.race_goal is not None and self.race_date is not None


@dataclass(frozen=True)
class WeeklyStats:
    """Running totals for one calendar week."""

    total_distance_km: float
    longest_run_km: float
    run_count: int

    def to_dict(self) -> Dict:
        return asdict(self)


@dataclass(frozen=True)
class VolumeRecommendation:
    """Target volume for the current week plus context for display."""

    weekly_volume_km: float
    long_run_km: float
    weeks_until_race: int
    current_week: int
    total_weeks: int
    is_cutback_week: bool
    is_taper_week: bool
    peak_week: int
    last_week_volume_km: float
    last_week_long_run_km: float
    peak_volume_km: float

    def to_dict(self) -> Dict:
        return asdict(self)


@dataclass(frozen=True)
class WeeklyVolumePlan:
    """One week of the periodized plan."""

    week_number: int
    week_label: str
    weekly_volume_km: float
    long_run_km: float
    is_cutback_week: bool
    is_taper_week: bool
    is_peak_week: bool
    is_current_week: bool
    week_start_date: date

    @property
    def week_type(self) -> str:
        if self.is_peak_week:
            return "Peak"
        if self.is_taper_week:
            return "Taper"
        if self.is_cutback_week:
            return "Cutback"
        return "Build"

    def to_dict(self) -> Dict:
        data = asdict(self)
        data["week_type"] = self.week_type
        data["week_start_date"] = self.week_start_date.isoformat()
        return data


@dataclass(frozen=True)
class PlanSummary:
    """Headline numbers for a generated plan."""

    weeks_remaining: int
    current_volume_km: float
    peak_volume_km: float
    total_plan_volume_km: int
    peak_long_run_km: float

    def to_dict(self) -> Dict:
        return asdict(self)


def round_half_up(value: float, decimals: int = 1) -> float:
    """Round halves away from zero for positive values (63.75 -> 63.8)."""
    factor = 10 ** decimals
    return math.floor(value * factor + 0.5) / factor
