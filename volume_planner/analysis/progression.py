"""Ideal weekly volume progression: compound build, cutback weeks and taper.

Week numbers are 1-based from the start of the plan. Build weeks compound
from the starting volume at no more than 10% per week. Every fourth build
week is a cutback. Weeks after the peak follow a fixed taper table.
"""

import logging

from ..models import round_half_up

logger = logging.getLogger(__name__)

# Minimum sensible weekly volume in km
MIN_WEEKLY_VOLUME = 10.0

# Maximum recommended weekly volume increase (10% rule)
MAX_VOLUME_INCREASE_RATIO = 0.10

# Every 4th week is a cutback week (weeks 4, 8, 12, ...)
CUTBACK_INTERVAL = 4
CUTBACK_RATIO = 0.75

# Volume reduction from peak for the weeks after the peak week
TAPER_REDUCTIONS = (0.25, 0.40)
TAPER_FALLBACK_RATIO = 0.5


def is_cutback_week(week_number: int, peak_week: int) -> bool:
    """Whether ``week_number`` is a recovery week in the 3-up/1-down pattern.

    The peak week and the taper never count as cutbacks.
    """
    if week_number >= peak_week:
        return False
    return week_number > 0 and week_number % CUTBACK_INTERVAL == 0


def taper_volume(peak_volume_km: float, weeks_after_peak: int) -> float:
    """Un-rounded taper volume for the given week after the peak."""
    if 1 <= weeks_after_peak <= len(TAPER_REDUCTIONS):
        return peak_volume_km * (1 - TAPER_REDUCTIONS[weeks_after_peak - 1])
    return peak_volume_km * TAPER_FALLBACK_RATIO


def progression_weeks(peak_week: int) -> int:
    """Build weeks that advance the compounding, i.e. excluding week 1 and cutbacks."""
    weeks_to_grow = peak_week - 1
    cutback_weeks = weeks_to_grow // CUTBACK_INTERVAL
    return weeks_to_grow - cutback_weeks


def growth_rate(starting_volume_km: float, peak_volume_km: float, weeks: int) -> float:
    """Weekly compound growth rate from start to peak, capped at the 10% rule.

    Args:
        starting_volume_km: Volume of week 1
        peak_volume_km: Target volume at the peak week
        weeks: Number of progression weeks available

    Returns:
        Growth rate as a fraction; 0.0 when there is nothing to grow over
    """
    if weeks <= 0 or starting_volume_km <= 0:
        return 0.0

    rate = (peak_volume_km / starting_volume_km) ** (1 / weeks) - 1
    if rate > MAX_VOLUME_INCREASE_RATIO:
        logger.debug(
            f"Growth rate {rate:.3f} exceeds {MAX_VOLUME_INCREASE_RATIO:.2f}, capping; "
            f"peak of {peak_volume_km} km will be reached by a final jump"
        )
        return MAX_VOLUME_INCREASE_RATIO
    return rate


def ideal_week_volume(
    week_number: int,
    peak_week: int,
    peak_volume_km: float,
    starting_volume_km: float,
) -> float:
    """Theoretical volume (km) for a week of an ideal progression.

    Args:
        week_number: 1-based week of the plan
        peak_week: Week number of the peak
        peak_volume_km: Volume targeted at the peak week
        starting_volume_km: Volume of week 1

    Returns:
        Weekly volume in km, rounded to one decimal (the peak week is returned as is)
    """
    if week_number <= 0:
        return starting_volume_km

    # Taper phase
    if week_number > peak_week:
        weeks_after_peak = week_number - peak_week
        if weeks_after_peak <= len(TAPER_REDUCTIONS):
            return round_half_up(taper_volume(peak_volume_km, weeks_after_peak), 1)
        return peak_volume_km * TAPER_FALLBACK_RATIO

    if week_number == peak_week:
        return peak_volume_km

    # Build phase
    weeks = progression_weeks(peak_week)
    if weeks <= 0 or starting_volume_km <= 0:
        logger.debug(f"No room to progress before week {peak_week}, holding {starting_volume_km} km")
        return starting_volume_km

    rate = growth_rate(starting_volume_km, peak_volume_km, weeks)

    # Cutback weeks do not advance the compounding index
    progression_count = sum(
        1 for week in range(2, week_number + 1) if not is_cutback_week(week, peak_week)
    )
    volume = starting_volume_km * (1 + rate) ** progression_count

    if is_cutback_week(week_number, peak_week):
        volume *= CUTBACK_RATIO

    return round_half_up(volume, 1)
