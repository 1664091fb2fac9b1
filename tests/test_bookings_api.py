"""
API tests for the staff booking endpoints.
"""

from washbook.models import BOOKING_CANCELLED, ROLE_ADMIN, ROLE_CUSTOMER, ROLE_STAFF

DAY = "2030-05-10"


class TestListBookings:
    """Tests for GET /api/bookings."""

    def test_staff_sees_bookings_in_time_order(self, client, login_as, add_booking):
        login_as(ROLE_STAFF)
        later = add_booking(DAY, "13:00", 30)
        earlier = add_booking(DAY, "09:00", 90)
        add_booking("2030-05-11", "09:00", 60)

        response = client.get("/api/bookings", params={"date": DAY})

        assert response.status_code == 200
        data = response.json()
        assert [b["id"] for b in data] == [earlier.id, later.id]
        assert data[0]["totalDuration"] == 90
        assert data[0]["scheduledDate"] == DAY

    def test_customer_forbidden(self, client, login_as):
        login_as(ROLE_CUSTOMER)

        response = client.get("/api/bookings", params={"date": DAY})

        assert response.status_code == 403

    def test_invalid_date(self, client, login_as):
        login_as(ROLE_ADMIN)

        response = client.get("/api/bookings", params={"date": "2030-05"})

        assert response.status_code == 400
        assert response.json() == {"message": "Invalid date format"}


class TestUpdateBookingStatus:
    """Tests for PATCH /api/bookings/{id}/status."""

    def test_cancel_frees_the_slot(self, client, login_as, add_booking):
        login_as(ROLE_STAFF)
        booking = add_booking(DAY, "10:00", 60)

        response = client.patch(f"/api/bookings/{booking.id}/status", json={"status": "cancelled"})

        assert response.status_code == 200
        assert response.json()["status"] == BOOKING_CANCELLED

        data = client.get("/api/availability/check", params={"date": DAY}).json()
        assert data["hasBookings"] is False

    def test_status_change_notifies_stream_clients(self, client, login_as, add_booking):
        login_as(ROLE_ADMIN)
        booking = add_booking(DAY, "10:00", 60)
        registry = client.app.state.connection_registry
        client_id, queue = registry.register()

        client.patch(f"/api/bookings/{booking.id}/status", json={"status": "CONFIRMED"})

        event = queue.get_nowait()
        assert event["type"] == "booking_update"
        assert event["bookingId"] == booking.id
        registry.unregister(client_id)

    def test_admin_notes_saved(self, client, login_as, add_booking):
        login_as(ROLE_ADMIN)
        booking = add_booking(DAY, "10:00", 60)

        data = client.patch(
            f"/api/bookings/{booking.id}/status",
            json={"status": "IN_PROGRESS", "adminNotes": "Started early"},
        ).json()

        assert data["status"] == "IN_PROGRESS"
        assert data["adminNotes"] == "Started early"

    def test_admin_notes_cleared_with_empty_string(self, client, login_as, add_booking):
        login_as(ROLE_ADMIN)
        booking = add_booking(DAY, "10:00", 60)
        url = f"/api/bookings/{booking.id}/status"
        client.patch(url, json={"status": "CONFIRMED", "adminNotes": "Call ahead"})

        data = client.patch(url, json={"status": "CONFIRMED", "adminNotes": ""}).json()

        assert data["adminNotes"] == ""

    def test_omitted_admin_notes_left_unchanged(self, client, login_as, add_booking):
        login_as(ROLE_ADMIN)
        booking = add_booking(DAY, "10:00", 60)
        url = f"/api/bookings/{booking.id}/status"
        client.patch(url, json={"status": "CONFIRMED", "adminNotes": "Call ahead"})

        data = client.patch(url, json={"status": "IN_PROGRESS"}).json()

        assert data["adminNotes"] == "Call ahead"

    def test_unknown_status_rejected(self, client, login_as, add_booking):
        login_as(ROLE_ADMIN)
        booking = add_booking(DAY, "10:00", 60)

        response = client.patch(f"/api/bookings/{booking.id}/status", json={"status": "LOST"})

        assert response.status_code == 422

    def test_unknown_booking(self, client, login_as):
        login_as(ROLE_ADMIN)

        response = client.patch("/api/bookings/9999/status", json={"status": "CONFIRMED"})

        assert response.status_code == 404
        assert response.json() == {"message": "Booking not found"}

    def test_customer_forbidden(self, client, login_as, add_booking):
        login_as(ROLE_CUSTOMER)
        booking = add_booking(DAY, "10:00", 60)

        response = client.patch(f"/api/bookings/{booking.id}/status", json={"status": "CANCELLED"})

        assert response.status_code == 403
