"""Availability repository - Booking reads used by the availability calculations"""

from datetime import date

from sqlalchemy.orm import Session

from ...models import (
    BOOKING_CANCELLED,
    BOOKING_CONFIRMED,
    BOOKING_IN_PROGRESS,
    BOOKING_NO_SHOW,
    BOOKING_PENDING,
    Booking,
)

# Statuses that never occupy the calendar
EXCLUDED_STATUSES = (BOOKING_CANCELLED, BOOKING_NO_SHOW)

# Statuses that block a new start time
ACTIVE_STATUSES = (BOOKING_PENDING, BOOKING_CONFIRMED, BOOKING_IN_PROGRESS)


class AvailabilityRepository:
    """Repository for availability database reads"""

    @staticmethod
    def get_occupying_bookings(db: Session, day: date) -> list[Booking]:
        """Get bookings on a date that are not cancelled or no-show, earliest first"""
        return (
            db.query(Booking)
            .filter(Booking.scheduled_date == day, Booking.status.notin_(EXCLUDED_STATUSES))
            .order_by(Booking.scheduled_time.asc())
            .all()
        )

    @staticmethod
    def get_active_bookings(db: Session, day: date) -> list[Booking]:
        """Get pending, confirmed and in-progress bookings on a date"""
        return (
            db.query(Booking)
            .filter(Booking.scheduled_date == day, Booking.status.in_(ACTIVE_STATUSES))
            .order_by(Booking.scheduled_time.asc())
            .all()
        )
