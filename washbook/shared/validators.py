"""Shared validation utilities"""

import re
from datetime import date

CLOCK_PATTERN = re.compile(r"^([01]?\d|2[0-3]):([0-5]\d)$")


def validate_clock_time(value: str) -> str:
    """
    Validate and normalize a time of day to HH:MM.

    Args:
        value: Time string such as "8:00" or "08:00"

    Returns:
        Zero padded "HH:MM"

    Raises:
        ValueError: If the value is not a valid 24h time of day
    """
    match = CLOCK_PATTERN.match((value or "").strip())
    if not match:
        raise ValueError("Time must be in HH:MM format")
    return f"{int(match.group(1)):02d}:{match.group(2)}"


def parse_booking_date(value: str) -> date:
    """
    Parse a YYYY-MM-DD query value into a date.

    Raises:
        ValueError: On wrong segment count, non-numeric segments or an impossible date
    """
    parts = value.split("-")
    if len(parts) != 3 or not all(p.strip().isdigit() for p in parts):
        raise ValueError("Invalid date format")

    year, month, day = (int(p) for p in parts)
    return date(year, month, day)
