"""Booking service - Schedule reads and status changes"""

import logging
from typing import Optional

from fastapi import HTTPException
from sqlalchemy.orm import Session

from ...models import Booking, User
from ...services.connection_registry import ConnectionRegistry, booking_update_event
from ..availability.service import parse_date_param
from .repository import BookingRepository
from .schemas import BookingResponse, BookingStatusUpdate

logger = logging.getLogger(__name__)


def to_response(booking: Booking) -> BookingResponse:
    return BookingResponse(
        id=booking.id,
        customerId=booking.customer_id,
        scheduledDate=booking.scheduled_date,
        scheduledTime=booking.scheduled_time,
        estimatedEnd=booking.estimated_end,
        totalDuration=booking.total_duration,
        status=booking.status,
        totalPrice=booking.total_price,
        customerNotes=booking.customer_notes,
        adminNotes=booking.admin_notes,
    )


class BookingService:
    """Service layer for booking operations"""

    def __init__(self, db: Session, registry: Optional[ConnectionRegistry] = None):
        self.db = db
        self.registry = registry
        self.repo = BookingRepository()

    def get_bookings_for_date(self, date_param: Optional[str]) -> list[Booking]:
        day = parse_date_param(date_param)
        return self.repo.get_bookings_for_date(self.db, day)

    def update_status(self, booking_id: int, data: BookingStatusUpdate, user: User) -> Booking:
        booking = self.repo.get_booking_by_id(self.db, booking_id)
        if not booking:
            raise HTTPException(status_code=404, detail="Booking not found")

        previous = booking.status
        booking = self.repo.update_booking(
            self.db, booking, status=data.status, admin_notes=data.adminNotes
        )
        logger.info(f"Booking {booking.id} status {previous} -> {booking.status} by user {user.id}")

        if self.registry is not None:
            self.registry.broadcast(booking_update_event(booking.id))
        return booking
