"""Configuration management for the running volume planner."""

import logging
import os
from typing import Optional
from dotenv import load_dotenv

from .analysis.calendar import to_date
from .models import RaceGoal, UserProfile

load_dotenv()

logger = logging.getLogger(__name__)


class Config:
    """Application configuration."""

    # Runner profile defaults (used when CLI options are omitted)
    RACE_GOAL: str = os.getenv("RACE_GOAL", "")  # 10K, HalfMarathon, FullMarathon
    RACE_DATE: str = os.getenv("RACE_DATE", "")  # ISO date, e.g. 2026-04-15
    RACE_TIME_GOAL: str = os.getenv("RACE_TIME_GOAL", "")  # H:MM:SS

    # Activity export (.json or .csv)
    ACTIVITIES_FILE: str = os.getenv("ACTIVITIES_FILE", "")

    # Application
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")

    @classmethod
    def validate(cls, profile: Optional[UserProfile] = None) -> bool:
        """Validate that a race is configured.

        Args:
            profile: Profile to check, with any overrides applied; defaults to
                the one built from the environment

        Raises:
            ValueError: If the race goal or race date is missing or invalid
        """
        if profile is None:
            profile = cls.get_user_profile()
        if profile.has_race:
            return True

        missing = []
        if profile.race_goal is None:
            missing.append("RACE_GOAL")
        if profile.race_date is None:
            missing.append("RACE_DATE")
        raise ValueError(f"Missing required configuration: {', '.join(missing)}")

    @classmethod
    def get_race_goal(cls) -> Optional[RaceGoal]:
        """Parse RACE_GOAL, returning None if unset or unknown."""
        if not cls.RACE_GOAL:
            return None
        try:
            return RaceGoal.from_string(cls.RACE_GOAL)
        except ValueError as e:
            logger.warning(f"Ignoring RACE_GOAL: {e}")
            return None

    @classmethod
    def get_user_profile(cls) -> UserProfile:
        """Build the runner profile from configuration."""
        race_date = None
        if cls.RACE_DATE:
            try:
                race_date = to_date(cls.RACE_DATE)
            except ValueError:
                logger.warning(f"Ignoring unparseable RACE_DATE '{cls.RACE_DATE}'")

        return UserProfile(
            race_goal=cls.get_race_goal(),
            race_date=race_date,
            race_time_goal=cls.RACE_TIME_GOAL or None,
        )


config = Config()
