"""Week boundary helpers. Weeks start on Monday (ISO)."""

from datetime import date, datetime, timedelta
from typing import Union

DateLike = Union[date, datetime, str]


def to_date(value: DateLike) -> date:
    """Normalize a date, datetime or ISO string to a calendar date.

    Raises:
        ValueError: If a string cannot be parsed as an ISO date
    """
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        text = value.strip()
        try:
            return datetime.fromisoformat(text).date()
        except ValueError:
            # fromisoformat on older interpreters rejects a trailing "Z"
            if text.endswith("Z"):
                return datetime.fromisoformat(text[:-1]).date()
            return date.fromisoformat(text[:10])
    raise ValueError(f"Unsupported date value: {value!r}")


def week_start(value: DateLike) -> date:
    """Return the Monday of the week containing ``value``.

    Sunday belongs to the week that began six days earlier.
    """
    day = to_date(value)
    return day - timedelta(days=day.weekday())


def weeks_between(start: DateLike, end: DateLike) -> int:
    """Number of week boundaries from ``start`` to ``end``; negative if ``end`` is earlier."""
    delta = week_start(end) - week_start(start)
    return delta.days // 7
