"""Aggregate logged runs into weekly totals."""

from datetime import timedelta
from typing import Iterable

from ..models import Activity, CardioActivity, WeeklyStats, RUNNING_ACTIVITY_TYPES, round_half_up
from .calendar import DateLike, to_date, week_start


def is_running_activity(activity: Activity) -> bool:
    """Road and treadmill runs count towards running volume; nothing else does."""
    return isinstance(activity, CardioActivity) and activity.type in RUNNING_ACTIVITY_TYPES


def weekly_running_stats(activities: Iterable[Activity], week_start_date: DateLike) -> WeeklyStats:
    """Running stats for the Monday-to-Sunday week containing ``week_start_date``.

    Args:
        activities: Logged activities in any order; only runs are counted
        week_start_date: Any day within the target week

    Returns:
        WeeklyStats with distances rounded to two decimals
    """
    monday = week_start(week_start_date)
    next_monday = monday + timedelta(days=7)

    total_distance_km = 0.0
    longest_run_km = 0.0
    run_count = 0

    for activity in activities:
        if not is_running_activity(activity):
            continue
        if monday <= to_date(activity.date) < next_monday:
            total_distance_km += activity.distance_in_km
            longest_run_km = max(longest_run_km, activity.distance_in_km)
            run_count += 1

    return WeeklyStats(
        total_distance_km=round_half_up(total_distance_km, 2),
        longest_run_km=round_half_up(longest_run_km, 2),
        run_count=run_count,
    )
