"""Availability service - Free time and start times for a booking date"""

import logging
from datetime import date, datetime
from typing import Optional
from zoneinfo import ZoneInfo

from fastapi import HTTPException
from sqlalchemy.orm import Session

from ...config import SHOP_TIMEZONE
from ...models import Booking
from ...shared.validators import parse_booking_date
from ..settings.service import SettingsService
from .calculator import (
    BookedInterval,
    BusinessHours,
    compute_free_intervals,
    find_start_times,
)
from .repository import AvailabilityRepository

logger = logging.getLogger(__name__)

# Services longer than this may run past closing time
LONG_SERVICE_MINUTES = 6 * 60
LONG_SERVICE_EXTENSION_MINUTES = 2 * 60
LONG_SERVICE_LATEST_END_MINUTES = 20 * 60
START_TIME_STEP_MINUTES = 30


def minutes_since_midnight(moment: datetime) -> int:
    return moment.hour * 60 + moment.minute


def to_booked_interval(booking: Booking) -> BookedInterval:
    return BookedInterval(minutes_since_midnight(booking.scheduled_time), booking.total_duration)


def parse_date_param(value: Optional[str]) -> date:
    """Validate the ?date= query value, raising 400 on any problem"""
    if not value:
        raise HTTPException(status_code=400, detail="Date parameter is required")
    try:
        return parse_booking_date(value)
    except ValueError:
        raise HTTPException(status_code=400, detail="Invalid date format") from None


class AvailabilityService:
    """Service layer for availability lookups"""

    def __init__(self, db: Session):
        self.db = db
        self.repo = AvailabilityRepository()
        self.settings = SettingsService(db)

    def check_day(self, date_param: Optional[str]) -> dict:
        """Free intervals and the largest free block for a date"""
        day = parse_date_param(date_param)

        try:
            hours = self.settings.get_business_hours()
            bookings = self.repo.get_occupying_bookings(self.db, day)
        except Exception:
            logger.exception(f"Error checking availability for {date_param}")
            raise HTTPException(status_code=500, detail="Could not check availability") from None

        result = compute_free_intervals(hours, [to_booked_interval(b) for b in bookings])
        logger.debug(
            f"Availability {date_param}: {len(bookings)} booking(s), "
            f"max free {result.max_available_minutes} min"
        )

        response = {
            "date": date_param,
            "hasBookings": result.has_bookings,
            "maxAvailableMinutes": result.max_available_minutes,
            "availableSlots": [f.to_dict() for f in result.free_intervals],
            "bookedSlots": [b.to_dict() for b in result.booked_intervals],
        }
        if result.has_bookings:
            response["workingHours"] = {
                "start": hours.start,
                "end": hours.end,
                "totalMinutes": hours.total_minutes,
            }
        return response

    def list_start_times(
        self, date_param: Optional[str], duration: int, today: Optional[date] = None
    ) -> dict:
        """Start times on a date where a job of `duration` minutes fits"""
        day = parse_date_param(date_param)

        try:
            today = today or datetime.now(ZoneInfo(SHOP_TIMEZONE)).date()
            if day < today:
                return {"availableTimes": []}
            hours = self.settings.get_business_hours()
            bookings = self.repo.get_active_bookings(self.db, day)
        except Exception:
            logger.exception(f"Error fetching start times for {date_param}")
            raise HTTPException(status_code=500, detail="Could not fetch available times") from None

        day_end = self._closing_minutes(hours, duration)
        max_duration = day_end - hours.start_minutes
        if duration > max_duration:
            logger.info(f"Duration {duration} min exceeds day capacity {max_duration} min on {date_param}")
            return {
                "availableTimes": [],
                "message": (
                    f"A combination of services lasting {duration // 60}h {duration % 60}min "
                    "is too long for one day. Book the services on separate days or contact us."
                ),
                "duration": duration,
                "maxDuration": max_duration,
            }

        busy = [
            (minutes_since_midnight(b.scheduled_time), self._end_minutes(b, day))
            for b in bookings
        ]
        times = find_start_times(
            hours.start_minutes,
            day_end,
            duration,
            busy,
            step=START_TIME_STEP_MINUTES,
            last_start=hours.end_minutes,
        )
        logger.debug(f"Start times {date_param} ({duration} min): {len(times)} available")
        return {"availableTimes": times}

    @staticmethod
    def _closing_minutes(hours: BusinessHours, duration: int) -> int:
        if duration > LONG_SERVICE_MINUTES:
            return min(hours.end_minutes + LONG_SERVICE_EXTENSION_MINUTES, LONG_SERVICE_LATEST_END_MINUTES)
        return hours.end_minutes

    @staticmethod
    def _end_minutes(booking: Booking, day: date) -> int:
        # A job running past midnight blocks the rest of the day
        if booking.estimated_end.date() > day:
            return 24 * 60
        return minutes_since_midnight(booking.estimated_end)
