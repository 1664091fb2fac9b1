"""Availability domain schemas - Pydantic models for responses"""

from typing import Optional

from pydantic import BaseModel


class FreeSlot(BaseModel):
    start: str
    end: str
    durationMinutes: int


class BookedSlot(BaseModel):
    start: str
    end: str
    startMinutes: int
    endMinutes: int
    durationMinutes: int


class WorkingHours(BaseModel):
    start: str
    end: str
    totalMinutes: int


class AvailabilityCheckResponse(BaseModel):
    """Free time on a date and the largest free block"""

    date: str
    hasBookings: bool
    maxAvailableMinutes: int
    availableSlots: list[FreeSlot]
    bookedSlots: list[BookedSlot]
    workingHours: Optional[WorkingHours] = None


class StartTimesResponse(BaseModel):
    """Start times at which a job of the requested duration fits"""

    availableTimes: list[str]
    message: Optional[str] = None
    duration: Optional[int] = None
    maxDuration: Optional[int] = None
