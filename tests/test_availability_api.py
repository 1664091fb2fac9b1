"""
API tests for the availability endpoints.

Run with: pytest tests/ -v
"""

from unittest.mock import patch
from zoneinfo import ZoneInfoNotFoundError

from sqlalchemy.exc import SQLAlchemyError

from washbook.domain.availability.repository import AvailabilityRepository
from washbook.models import (
    BOOKING_CANCELLED,
    BOOKING_COMPLETED,
    BOOKING_NO_SHOW,
    BOOKING_PENDING,
)

DAY = "2030-05-10"


class TestAvailabilityCheck:
    """Tests for GET /api/availability/check."""

    def test_empty_day(self, client):
        """No bookings: whole business day free, no workingHours block."""
        response = client.get("/api/availability/check", params={"date": DAY})

        assert response.status_code == 200
        assert response.json() == {
            "date": DAY,
            "hasBookings": False,
            "maxAvailableMinutes": 480,
            "availableSlots": [{"start": "08:00", "end": "16:00", "durationMinutes": 480}],
            "bookedSlots": [],
        }

    def test_single_booking(self, client, add_booking):
        add_booking(DAY, "10:00", 60)

        data = client.get("/api/availability/check", params={"date": DAY}).json()

        assert data["hasBookings"] is True
        assert data["maxAvailableMinutes"] == 300
        assert data["availableSlots"] == [
            {"start": "08:00", "end": "10:00", "durationMinutes": 120},
            {"start": "11:00", "end": "16:00", "durationMinutes": 300},
        ]
        assert data["bookedSlots"] == [
            {
                "start": "10:00",
                "end": "11:00",
                "startMinutes": 600,
                "endMinutes": 660,
                "durationMinutes": 60,
            }
        ]
        assert data["workingHours"] == {"start": "08:00", "end": "16:00", "totalMinutes": 480}

    def test_two_bookings(self, client, add_booking):
        # Inserted out of order; the read orders by scheduled time
        add_booking(DAY, "13:00", 30)
        add_booking(DAY, "09:00", 90)

        data = client.get("/api/availability/check", params={"date": DAY}).json()

        assert [(s["start"], s["end"], s["durationMinutes"]) for s in data["availableSlots"]] == [
            ("08:00", "09:00", 60),
            ("10:30", "13:00", 150),
            ("13:30", "16:00", 150),
        ]
        assert data["maxAvailableMinutes"] == 150

    def test_cancelled_and_no_show_ignored(self, client, add_booking):
        add_booking(DAY, "09:00", 60, status=BOOKING_CANCELLED)
        add_booking(DAY, "12:00", 60, status=BOOKING_NO_SHOW)

        data = client.get("/api/availability/check", params={"date": DAY}).json()

        assert data["hasBookings"] is False
        assert data["maxAvailableMinutes"] == 480

    def test_completed_booking_still_occupies(self, client, add_booking):
        add_booking(DAY, "08:00", 480, status=BOOKING_COMPLETED)

        data = client.get("/api/availability/check", params={"date": DAY}).json()

        assert data["availableSlots"] == []
        assert data["maxAvailableMinutes"] == 0

    def test_other_dates_ignored(self, client, add_booking):
        add_booking("2030-05-11", "10:00", 60)

        data = client.get("/api/availability/check", params={"date": DAY}).json()

        assert data["hasBookings"] is False

    def test_configured_business_hours(self, client, add_booking, set_business_hours):
        set_business_hours("09:00", "17:00")
        add_booking(DAY, "09:00", 60)

        data = client.get("/api/availability/check", params={"date": DAY}).json()

        assert data["availableSlots"] == [{"start": "10:00", "end": "17:00", "durationMinutes": 420}]
        assert data["workingHours"] == {"start": "09:00", "end": "17:00", "totalMinutes": 480}

    def test_malformed_setting_falls_back_to_default(self, client, set_business_hours):
        set_business_hours("nine", "16:00")

        data = client.get("/api/availability/check", params={"date": DAY}).json()

        assert data["availableSlots"][0]["start"] == "08:00"

    def test_repeated_calls_identical(self, client, add_booking):
        add_booking(DAY, "09:00", 90)

        first = client.get("/api/availability/check", params={"date": DAY}).json()
        second = client.get("/api/availability/check", params={"date": DAY}).json()

        assert first == second


class TestAvailabilityCheckErrors:
    """Error responses for GET /api/availability/check."""

    def test_missing_date(self, client):
        response = client.get("/api/availability/check")

        assert response.status_code == 400
        assert response.json() == {"message": "Date parameter is required"}

    def test_wrong_segment_count(self, client):
        response = client.get("/api/availability/check", params={"date": "2025-13"})

        assert response.status_code == 400
        assert response.json() == {"message": "Invalid date format"}

    def test_invalid_dates(self, client):
        for value in ["2025-aa-01", "23.10.2025", "2025-02-30", "2025-10-23-1"]:
            response = client.get("/api/availability/check", params={"date": value})
            assert response.status_code == 400, f"Expected 400 for date: {value}"
            assert "message" in response.json()

    def test_database_failure(self, client):
        with patch.object(
            AvailabilityRepository,
            "get_occupying_bookings",
            side_effect=SQLAlchemyError("connection lost"),
        ):
            response = client.get("/api/availability/check", params={"date": DAY})

        assert response.status_code == 500
        assert response.json() == {"message": "Could not check availability"}


class TestStartTimes:
    """Tests for GET /api/availability."""

    def test_empty_day_default_duration(self, client):
        response = client.get("/api/availability", params={"date": DAY})

        assert response.status_code == 200
        times = response.json()["availableTimes"]
        assert times[0] == "08:00"
        assert times[-1] == "15:00"
        assert len(times) == 15

    def test_booking_blocks_overlapping_starts(self, client, add_booking):
        add_booking(DAY, "10:00", 60)

        times = client.get("/api/availability", params={"date": DAY, "duration": 60}).json()[
            "availableTimes"
        ]

        assert "09:00" in times
        assert "09:30" not in times
        assert "10:00" not in times
        assert "10:30" not in times
        assert "11:00" in times
        assert len(times) == 12

    def test_only_active_bookings_block(self, client, add_booking):
        add_booking(DAY, "10:00", 60, status=BOOKING_COMPLETED)
        add_booking(DAY, "12:00", 60, status=BOOKING_CANCELLED)
        add_booking(DAY, "14:00", 60, status=BOOKING_PENDING)

        times = client.get("/api/availability", params={"date": DAY}).json()["availableTimes"]

        assert "10:00" in times
        assert "12:00" in times
        assert "14:00" not in times

    def test_long_service_may_end_after_closing(self, client):
        times = client.get("/api/availability", params={"date": DAY, "duration": 420}).json()[
            "availableTimes"
        ]

        assert times == ["08:00", "08:30", "09:00", "09:30", "10:00", "10:30", "11:00"]

    def test_too_long_for_one_day(self, client):
        data = client.get("/api/availability", params={"date": DAY, "duration": 700}).json()

        assert data["availableTimes"] == []
        assert data["duration"] == 700
        assert data["maxDuration"] == 600
        assert "too long" in data["message"]

    def test_past_date_has_no_times(self, client):
        data = client.get("/api/availability", params={"date": "2020-01-01"}).json()

        assert data == {"availableTimes": []}

    def test_missing_date(self, client):
        response = client.get("/api/availability")

        assert response.status_code == 400
        assert response.json()["message"] == "Date parameter is required"

    def test_non_positive_duration_rejected(self, client):
        response = client.get("/api/availability", params={"date": DAY, "duration": 0})

        assert response.status_code == 422
        assert response.json()["message"] == "Invalid request"
        assert response.json()["detail"][0]["loc"] == ["query", "duration"]

    def test_timezone_failure_returns_message(self, client):
        with patch(
            "washbook.domain.availability.service.ZoneInfo",
            side_effect=ZoneInfoNotFoundError("Europe/Nowhere"),
        ):
            response = client.get("/api/availability", params={"date": DAY})

        assert response.status_code == 500
        assert response.json() == {"message": "Could not fetch available times"}
