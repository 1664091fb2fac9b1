"""Booking router - Staff schedule endpoints and the live update stream"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, Query, Request
from fastapi.responses import StreamingResponse
from sqlalchemy.orm import Session

from ...authorization import CAP_MANAGE_BOOKINGS, CAP_VIEW_SCHEDULE, require_capability
from ...config import SSE_HEARTBEAT_SECONDS
from ...database import get_db
from ...models import User
from ...services.connection_registry import ConnectionRegistry, event_stream
from .schemas import BookingResponse, BookingStatusUpdate
from .service import BookingService, to_response

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/bookings", tags=["Bookings"])


def get_connection_registry(request: Request) -> ConnectionRegistry:
    return request.app.state.connection_registry


def get_booking_service(
    db: Session = Depends(get_db),
    registry: ConnectionRegistry = Depends(get_connection_registry),
) -> BookingService:
    """Dependency injection for BookingService"""
    return BookingService(db, registry)


@router.get("", response_model=list[BookingResponse])
async def get_bookings(
    date: Optional[str] = Query(None, description="YYYY-MM-DD"),
    _: User = Depends(require_capability(CAP_VIEW_SCHEDULE)),
    service: BookingService = Depends(get_booking_service),
):
    """Get all bookings on a date, earliest first"""
    return [to_response(b) for b in service.get_bookings_for_date(date)]


@router.get("/stream")
async def stream_booking_updates(
    current_user: User = Depends(require_capability(CAP_VIEW_SCHEDULE)),
    registry: ConnectionRegistry = Depends(get_connection_registry),
):
    """Server-sent events stream of booking changes for staff calendars"""
    client_id, queue = registry.register()
    logger.debug(f"User {current_user.id} opened booking stream {client_id}")
    return StreamingResponse(
        event_stream(registry, client_id, queue, SSE_HEARTBEAT_SECONDS),
        media_type="text/event-stream",
        headers={
            "Cache-Control": "no-cache",
            "Connection": "keep-alive",
            "X-Accel-Buffering": "no",  # For nginx
        },
    )


@router.patch("/{booking_id}/status", response_model=BookingResponse)
async def update_booking_status(
    booking_id: int,
    data: BookingStatusUpdate,
    current_user: User = Depends(require_capability(CAP_MANAGE_BOOKINGS)),
    service: BookingService = Depends(get_booking_service),
):
    """Change a booking's status and notify open calendars"""
    return to_response(service.update_status(booking_id, data, current_user))
