"""Weekly volume recommendation and full training plan generation."""

import logging
from datetime import timedelta
from typing import Iterable, List, Optional, Tuple

from ..models import (
    Activity,
    PlanSummary,
    RaceGoal,
    VolumeRecommendation,
    WeeklyVolumePlan,
    round_half_up,
)
from .calendar import DateLike, to_date, week_start, weeks_between
from .progression import (
    CUTBACK_RATIO,
    MAX_VOLUME_INCREASE_RATIO,
    MIN_WEEKLY_VOLUME,
    ideal_week_volume,
    is_cutback_week,
    taper_volume,
)
from .runner_level import peak_long_run, peak_volume_for_level
from .weekly_stats import weekly_running_stats

logger = logging.getLogger(__name__)

# Long run as share of weekly volume (typical guidance 25-30%)
LONG_RUN_WEEKLY_RATIO = 0.3

# Peak occurs this many weeks before race week
WEEKS_BEFORE_RACE_FOR_PEAK = 2

# Long run as share of peak long run during taper
FIRST_TAPER_LONG_RUN_RATIO = 0.6
LATE_TAPER_LONG_RUN_RATIO = 0.5


def _plan_weeks(weeks_until_race: int) -> Tuple[int, int, int]:
    """Return (total_weeks, peak_week, current_week) for a race ``weeks_until_race`` away."""
    total_weeks = weeks_until_race + 1  # current week counts
    peak_week = max(1, total_weeks - WEEKS_BEFORE_RACE_FOR_PEAK)
    current_week = total_weeks - weeks_until_race
    return total_weeks, peak_week, current_week


def _taper_long_run(peak_long_run_km: float, weeks_after_peak: int) -> float:
    ratio = FIRST_TAPER_LONG_RUN_RATIO if weeks_after_peak == 1 else LATE_TAPER_LONG_RUN_RATIO
    return peak_long_run_km * ratio


def calculate_volume_recommendation(
    today: DateLike,
    race_goal: RaceGoal,
    race_date: DateLike,
    activities: Iterable[Activity],
    race_time_goal: Optional[str] = None,
) -> Optional[VolumeRecommendation]:
    """Recommend this week's running volume and long run.

    Build-week growth is bounded by what the runner actually ran last week;
    a runner behind the ideal curve is not put straight back onto it.

    Args:
        today: Current date, supplied by the caller
        race_goal: Race distance
        race_date: Race day (date, datetime or ISO string)
        activities: Logged activities; only last week's runs are used
        race_time_goal: Optional target time (H:MM:SS) used to pick the runner level

    Returns:
        VolumeRecommendation, or None when the race is already in the past
    """
    weeks_until_race = weeks_between(today, race_date)
    if weeks_until_race < 0:
        logger.info(f"Race date {to_date(race_date)} is in the past, no recommendation")
        return None

    peak_volume_km = peak_volume_for_level(race_goal, race_time_goal)
    peak_long_run_km = peak_long_run(race_goal)
    total_weeks, peak_week, current_week = _plan_weeks(weeks_until_race)

    last_week_stats = weekly_running_stats(activities, to_date(today) - timedelta(days=7))

    is_current_cutback = is_cutback_week(current_week, peak_week)
    is_taper_week = current_week > peak_week

    baseline_volume = (
        last_week_stats.total_distance_km
        if last_week_stats.total_distance_km > 0
        else MIN_WEEKLY_VOLUME
    )

    if is_taper_week:
        weekly_volume_km = taper_volume(peak_volume_km, current_week - peak_week)
    elif current_week == peak_week:
        weekly_volume_km = peak_volume_km
    elif is_current_cutback:
        # Cutbacks react to what was actually run, not to the ideal curve
        weekly_volume_km = baseline_volume * CUTBACK_RATIO
    else:
        target_with_increase = baseline_volume * (1 + MAX_VOLUME_INCREASE_RATIO)
        ideal_volume = ideal_week_volume(current_week, peak_week, peak_volume_km, MIN_WEEKLY_VOLUME)
        weekly_volume_km = min(target_with_increase, ideal_volume)
        weekly_volume_km = max(weekly_volume_km, MIN_WEEKLY_VOLUME)
        weekly_volume_km = min(weekly_volume_km, peak_volume_km)

    if current_week == peak_week:
        long_run_km = peak_long_run_km
    elif is_taper_week:
        long_run_km = _taper_long_run(peak_long_run_km, current_week - peak_week)
    else:
        long_run_km = weekly_volume_km * LONG_RUN_WEEKLY_RATIO
        # 10% rule applies to the long run too
        if last_week_stats.longest_run_km > 0:
            long_run_km = min(long_run_km, last_week_stats.longest_run_km * (1 + MAX_VOLUME_INCREASE_RATIO))
        long_run_km = min(long_run_km, peak_long_run_km)

    logger.debug(
        f"Week {current_week}/{total_weeks} (peak week {peak_week}): "
        f"baseline {baseline_volume} km -> {weekly_volume_km:.1f} km, long run {long_run_km:.1f} km"
    )

    return VolumeRecommendation(
        weekly_volume_km=round_half_up(weekly_volume_km, 1),
        long_run_km=round_half_up(long_run_km, 1),
        weeks_until_race=weeks_until_race,
        current_week=current_week,
        total_weeks=total_weeks,
        is_cutback_week=is_current_cutback,
        is_taper_week=is_taper_week,
        peak_week=peak_week,
        last_week_volume_km=last_week_stats.total_distance_km,
        last_week_long_run_km=last_week_stats.longest_run_km,
        peak_volume_km=peak_volume_km,
    )


def generate_training_plan(
    today: DateLike,
    race_goal: RaceGoal,
    race_date: DateLike,
    starting_volume_km: Optional[float] = None,
    plan_start_date: Optional[DateLike] = None,
    race_time_goal: Optional[str] = None,
) -> Optional[List[WeeklyVolumePlan]]:
    """Generate the week-by-week plan through race week.

    Args:
        today: Current date, supplied by the caller
        race_goal: Race distance
        race_date: Race day (date, datetime or ISO string)
        starting_volume_km: Week 1 volume, usually last week's actual total;
            defaults to MIN_WEEKLY_VOLUME when omitted
        plan_start_date: Optional earlier date to start displaying the plan from
        race_time_goal: Optional target time (H:MM:SS) used to pick the runner level

    Returns:
        List of WeeklyVolumePlan from the display start week to race week,
        or None when the race is already in the past
    """
    weeks_until_race = weeks_between(today, race_date)
    if weeks_until_race < 0:
        logger.info(f"Race date {to_date(race_date)} is in the past, no plan generated")
        return None

    peak_volume_km = peak_volume_for_level(race_goal, race_time_goal)
    peak_long_run_km = peak_long_run(race_goal)
    total_weeks, peak_week, current_week = _plan_weeks(weeks_until_race)

    display_start = plan_start_date if plan_start_date is not None else today
    display_start_week = max(1, total_weeks - weeks_between(display_start, race_date))

    if starting_volume_km is None:
        starting_volume_km = MIN_WEEKLY_VOLUME
    base_start_volume = max(starting_volume_km, MIN_WEEKLY_VOLUME)
    today_date = to_date(today)

    plan = []
    for week in range(display_start_week, total_weeks + 1):
        week_start_date = week_start(today_date + timedelta(weeks=week - current_week))

        is_week_peak = week == peak_week
        is_week_taper = week > peak_week

        weekly_volume_km = ideal_week_volume(week, peak_week, peak_volume_km, base_start_volume)

        if is_week_peak:
            long_run_km = peak_long_run_km
        elif is_week_taper:
            long_run_km = _taper_long_run(peak_long_run_km, week - peak_week)
        else:
            long_run_km = min(weekly_volume_km * LONG_RUN_WEEKLY_RATIO, peak_long_run_km)

        plan.append(WeeklyVolumePlan(
            week_number=week,
            week_label="Race" if week == total_weeks else f"W{week}",
            weekly_volume_km=round_half_up(weekly_volume_km, 1),
            long_run_km=round_half_up(long_run_km, 1),
            is_cutback_week=is_cutback_week(week, peak_week),
            is_taper_week=is_week_taper,
            is_peak_week=is_week_peak,
            is_current_week=week == current_week,
            week_start_date=week_start_date,
        ))

    logger.debug(
        f"Generated {len(plan)}-week plan for {race_goal.value}: "
        f"peak {peak_volume_km} km in week {peak_week}, start {base_start_volume} km"
    )
    return plan


def summarize_plan(plan: Optional[List[WeeklyVolumePlan]]) -> Optional[PlanSummary]:
    """Headline figures for a plan: weeks left, this week, peak and total volume."""
    if not plan:
        return None

    peak = next((week for week in plan if week.is_peak_week), None)
    current = next((week for week in plan if week.is_current_week), None)
    total_volume = sum(week.weekly_volume_km for week in plan)

    return PlanSummary(
        weeks_remaining=len(plan),
        current_volume_km=current.weekly_volume_km if current else 0.0,
        peak_volume_km=peak.weekly_volume_km if peak else 0.0,
        total_plan_volume_km=int(round_half_up(total_volume, 0)),
        peak_long_run_km=peak.long_run_km if peak else 0.0,
    )
