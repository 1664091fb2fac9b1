"""Booking domain schemas - Pydantic models for validation"""

from datetime import date, datetime
from typing import Optional

from pydantic import BaseModel, field_validator

from ...models import BOOKING_STATUSES


class BookingStatusUpdate(BaseModel):
    """Schema for changing a booking's status"""

    status: str
    adminNotes: Optional[str] = None

    @field_validator("status")
    @classmethod
    def validate_status(cls, v):
        status = v.strip().upper()
        if status not in BOOKING_STATUSES:
            raise ValueError(f"Status must be one of: {', '.join(BOOKING_STATUSES)}")
        return status


class BookingResponse(BaseModel):
    id: int
    customerId: Optional[int] = None
    scheduledDate: date
    scheduledTime: datetime
    estimatedEnd: datetime
    totalDuration: int
    status: str
    totalPrice: Optional[float] = None
    customerNotes: Optional[str] = None
    adminNotes: Optional[str] = None
