"""Availability router - Public endpoints used by the booking form"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from ...database import get_db
from .schemas import AvailabilityCheckResponse, StartTimesResponse
from .service import AvailabilityService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/availability", tags=["Availability"])


def get_availability_service(db: Session = Depends(get_db)) -> AvailabilityService:
    """Dependency injection for AvailabilityService"""
    return AvailabilityService(db)


@router.get("", response_model=StartTimesResponse, response_model_exclude_none=True)
async def get_available_times(
    date: Optional[str] = Query(None, description="YYYY-MM-DD"),
    duration: int = Query(60, gt=0, description="Job length in minutes"),
    service: AvailabilityService = Depends(get_availability_service),
):
    """List start times where a job of the given duration fits"""
    return service.list_start_times(date, duration)


@router.get("/check", response_model=AvailabilityCheckResponse, response_model_exclude_none=True)
async def check_availability(
    date: Optional[str] = Query(None, description="YYYY-MM-DD"),
    service: AvailabilityService = Depends(get_availability_service),
):
    """
    Free time remaining on a date.

    Returns the free intervals between opening and closing time after removing
    existing bookings, plus the longest free interval in minutes.
    """
    return service.check_day(date)
