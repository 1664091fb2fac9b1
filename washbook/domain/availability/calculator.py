"""
Free-time calculation for a single working day.

Bookings are turned into minute offsets from midnight and walked in the order
the bookings read returns them (scheduled time ascending). Gaps between the
running end of occupied time and the next booking become free intervals.
Overlapping bookings are not merged.
"""

from typing import NamedTuple

from ...shared.validators import validate_clock_time


def clock_to_minutes(value: str) -> int:
    """Convert "HH:MM" to minutes since midnight."""
    hours, minutes = validate_clock_time(value).split(":")
    return int(hours) * 60 + int(minutes)


def minutes_to_clock(minutes: int) -> str:
    """Convert minutes since midnight to "HH:MM" (no wrap past 24:00)."""
    return f"{minutes // 60:02d}:{minutes % 60:02d}"


class BusinessHours(NamedTuple):
    start: str
    end: str

    @property
    def start_minutes(self) -> int:
        return clock_to_minutes(self.start)

    @property
    def end_minutes(self) -> int:
        return clock_to_minutes(self.end)

    @property
    def total_minutes(self) -> int:
        return self.end_minutes - self.start_minutes


class BookedInterval(NamedTuple):
    start_minutes: int
    duration_minutes: int

    @property
    def end_minutes(self) -> int:
        return self.start_minutes + self.duration_minutes

    def to_dict(self) -> dict:
        return {
            "start": minutes_to_clock(self.start_minutes),
            "end": minutes_to_clock(self.end_minutes),
            "startMinutes": self.start_minutes,
            "endMinutes": self.end_minutes,
            "durationMinutes": self.duration_minutes,
        }


class FreeInterval(NamedTuple):
    start_minutes: int
    end_minutes: int

    @property
    def duration_minutes(self) -> int:
        return self.end_minutes - self.start_minutes

    def to_dict(self) -> dict:
        return {
            "start": minutes_to_clock(self.start_minutes),
            "end": minutes_to_clock(self.end_minutes),
            "durationMinutes": self.duration_minutes,
        }


class DayAvailability(NamedTuple):
    free_intervals: list[FreeInterval]
    booked_intervals: list[BookedInterval]
    max_available_minutes: int

    @property
    def has_bookings(self) -> bool:
        return bool(self.booked_intervals)


def compute_free_intervals(
    hours: BusinessHours, booked: list[BookedInterval]
) -> DayAvailability:
    """
    Subtract booked intervals from business hours.

    Args:
        hours: Opening hours for the day
        booked: Booked intervals in ascending start order

    Returns:
        DayAvailability with the free gaps and the largest gap in minutes
    """
    work_start = hours.start_minutes
    work_end = hours.end_minutes

    if not booked:
        whole_day = FreeInterval(work_start, work_end)
        return DayAvailability([whole_day], [], whole_day.duration_minutes)

    free = []
    current = work_start
    for interval in booked:
        if current < interval.start_minutes:
            free.append(FreeInterval(current, interval.start_minutes))
        current = max(current, interval.end_minutes)

    if current < work_end:
        free.append(FreeInterval(current, work_end))

    max_available = max((f.duration_minutes for f in free), default=0)
    return DayAvailability(free, list(booked), max_available)


def find_start_times(
    day_start: int,
    day_end: int,
    duration: int,
    busy: list[tuple[int, int]],
    step: int = 30,
    last_start: int | None = None,
) -> list[str]:
    """
    List "HH:MM" start times where a job of `duration` minutes fits.

    Candidates run every `step` minutes from `day_start` while before `last_start`
    (defaults to `day_end`). A candidate must finish by `day_end` and must not
    overlap any busy (start, end) pair.
    """
    last_start = day_end if last_start is None else last_start
    times = []
    for start in range(day_start, last_start, step):
        end = start + duration
        if end > day_end:
            continue
        if any(start < busy_end and end > busy_start for busy_start, busy_end in busy):
            continue
        times.append(minutes_to_clock(start))
    return times
