# app/services/formatting.py
"""
Small formatting and clock helpers shared by the estimator and fare calculator.
"""

import math
import re
from typing import Tuple

_CLOCK_RE = re.compile(r"^(\d{1,2}):(\d{2})$")

MINUTES_PER_DAY = 24 * 60


def parse_clock(value: str) -> Tuple[int, int]:
    """
    Parse a 24-hour "HH:MM" time of day into (hours, minutes).

    Raises ValueError for anything that is not a valid time of day.
    """
    match = _CLOCK_RE.match(value.strip()) if isinstance(value, str) else None
    if match is None:
        raise ValueError(f"Time must be in HH:MM 24-hour format, got {value!r}")

    hours, minutes = int(match.group(1)), int(match.group(2))
    if hours > 23 or minutes > 59:
        raise ValueError(f"Time must be in HH:MM 24-hour format, got {value!r}")
    return hours, minutes


def add_hours_to_clock(start_time: str, duration_hours: float) -> Tuple[str, int]:
    """
    Add a (fractional) duration to a time of day.

    Returns the wrapped "HH:MM" end time and the number of midnights crossed.
    """
    hours, minutes = parse_clock(start_time)
    end_minutes = hours * 60 + minutes + round_half_up(duration_hours * 60)

    day_offset, minute_of_day = divmod(end_minutes, MINUTES_PER_DAY)
    return f"{minute_of_day // 60:02d}:{minute_of_day % 60:02d}", day_offset


def round_half_up(value: float) -> int:
    # Python's round() is banker's rounding; display values round .5 upward
    return int(math.floor(value + 0.5))


def format_duration(hours: float) -> str:
    """
    Format a duration in hours as "<H> hours <M> mins", dropping a zero component.
    """
    whole_hours = int(math.floor(hours))
    minutes = round_half_up((hours - whole_hours) * 60)
    if minutes == 60:
        whole_hours += 1
        minutes = 0

    if whole_hours > 0 and minutes > 0:
        return f"{whole_hours} hours {minutes} mins"
    if whole_hours > 0:
        return f"{whole_hours} hours"
    return f"{minutes} mins"


def format_number(value: float) -> str:
    """Thousands-separated number, without a trailing .0 for whole values."""
    if float(value).is_integer():
        return f"{int(value):,}"
    return f"{value:,.2f}".rstrip("0").rstrip(".")


def format_currency(amount: float, prefix: str = "Rs.") -> str:
    if not prefix:
        return format_number(amount)
    return f"{prefix} {format_number(amount)}"
