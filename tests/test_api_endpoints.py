"""
API endpoint tests (httpx + ASGITransport over the in-memory store).
"""

from decimal import Decimal
from unittest.mock import AsyncMock

import pytest
import pytest_asyncio

from carrental.domain.constants import BOOKINGS, LEADS, VEHICLES
from carrental.domain.errors import TransientStoreError


@pytest.fixture
def booking_payload():
    return {
        "vehicle_id": "V1",
        "renter": {
            "full_name": "Maria Santos",
            "email": "A@B.com",
            "phone_number": "+639171234567",
        },
        "trip": {
            "pickup_location": "Cebu City",
            "dropoff_location": "AR Car Rentals Office",
            "pickup_date": "2026-02-10",
            "return_date": "2026-02-12",
            "pickup_time": "09:00",
        },
        "drive_option": "self-drive",
        "terms_agreed": True,
        "payment": {"amount": "9050", "payment_method": "gcash"},
    }


@pytest_asyncio.fixture
async def created_booking(api_client, seeded_vehicle, booking_payload):
    response = await api_client.post("/api/v1/bookings", json=booking_payload)
    assert response.status_code == 201, response.text
    return response.json()["booking"]


class TestHealth:
    @pytest.mark.asyncio
    async def test_health(self, api_client):
        response = await api_client.get("/health")
        assert response.status_code == 200
        assert response.json()["status"] == "ok"

    @pytest.mark.asyncio
    async def test_ready(self, api_client):
        response = await api_client.get("/health/ready")
        assert response.status_code == 200
        assert response.json()["checks"]["persistence"] == "healthy"


class TestQuotes:
    @pytest.mark.asyncio
    async def test_quote_breakdown(self, api_client):
        response = await api_client.post(
            "/api/v1/quotes",
            json={
                "vehicle_price_per_day": "4300",
                "pickup_date": "2026-02-10",
                "return_date": "2026-02-12",
                "pickup_location": "Cebu City",
                "dropoff_location": "AR Car Rentals Office",
                "drive_option": "with-driver",
            },
        )

        assert response.status_code == 200
        data = response.json()
        assert data["rental_days"] == 2
        assert Decimal(data["total"]) == Decimal("9050")
        assert Decimal(data["driver_fee"]) == Decimal("1000")
        assert data["line_items"][-1]["label"] == "Pay to driver"
        assert data["line_items"][-1]["payable"] is False

    @pytest.mark.asyncio
    async def test_quote_without_dates_is_one_day(self, api_client):
        response = await api_client.post("/api/v1/quotes", json={"vehicle_price_per_day": "4300"})

        assert response.json()["rental_days"] == 1
        assert Decimal(response.json()["total"]) == Decimal("4300")


class TestLeads:
    @pytest.mark.asyncio
    async def test_save_lead(self, api_client, persistence):
        response = await api_client.post(
            "/api/v1/leads",
            json={"email": " Lead@Example.com ", "vehicle_id": "V1", "lead_name": "Maria"},
        )

        assert response.status_code == 202
        assert response.json()["success"] is True
        lead = await persistence.find_one(LEADS, {"id": response.json()["lead_id"]})
        assert lead["email"] == "lead@example.com"

    @pytest.mark.asyncio
    async def test_lead_without_email_not_saved(self, api_client, persistence):
        response = await api_client.post("/api/v1/leads", json={"vehicle_id": "V1"})

        assert response.status_code == 202
        assert response.json()["success"] is False
        assert persistence.count(LEADS) == 0


class TestBookings:
    @pytest.mark.asyncio
    async def test_create_booking(self, created_booking, persistence):
        assert created_booking["booking_status"] == "pending"
        assert created_booking["booking_reference"].startswith("AR-")
        assert Decimal(created_booking["total_amount"]) == Decimal("9050")

    @pytest.mark.asyncio
    async def test_price_comes_from_stored_vehicle(self, api_client, persistence, seeded_vehicle, booking_payload):
        await persistence.update(VEHICLES, "V1", {"price_per_day": Decimal("5000")})

        response = await api_client.post("/api/v1/bookings", json=booking_payload)

        assert Decimal(response.json()["quote"]["total"]) == Decimal("10450")

    @pytest.mark.asyncio
    async def test_unknown_vehicle(self, api_client, booking_payload):
        response = await api_client.post("/api/v1/bookings", json=booking_payload)

        assert response.status_code == 404
        assert response.json()["code"] == "NOT_FOUND"

    @pytest.mark.asyncio
    async def test_terms_not_agreed(self, api_client, seeded_vehicle, booking_payload):
        booking_payload["terms_agreed"] = False

        response = await api_client.post("/api/v1/bookings", json=booking_payload)

        assert response.status_code == 422
        assert response.json()["field"] == "terms_agreed"

    @pytest.mark.asyncio
    async def test_phone_without_country_code(self, api_client, seeded_vehicle, booking_payload):
        booking_payload["renter"]["phone_number"] = "09171234567"

        response = await api_client.post("/api/v1/bookings", json=booking_payload)

        assert response.status_code == 422
        assert response.json()["field"] == "renter.phone_number"

    @pytest.mark.asyncio
    async def test_tracking_by_reference(self, api_client, created_booking):
        reference = created_booking["booking_reference"]

        response = await api_client.get(f"/api/v1/bookings/{reference.lower()}")

        assert response.status_code == 200
        assert response.json()["booking"]["id"] == created_booking["id"]
        assert response.json()["payment_status"] == "pending"

    @pytest.mark.asyncio
    async def test_tracking_unknown_reference(self, api_client):
        response = await api_client.get("/api/v1/bookings/AR-NOPE0000")
        assert response.status_code == 404

    @pytest.mark.asyncio
    async def test_tracking_store_failure_is_503(self, api_client, persistence, created_booking):
        persistence.find_one = AsyncMock(side_effect=TransientStoreError("find_one", BOOKINGS, "down"))

        response = await api_client.get(f"/api/v1/bookings/{created_booking['booking_reference']}")

        assert response.status_code == 503
        assert response.json()["code"] == "TRANSIENT_STORE_ERROR"


class TestAdmin:
    @pytest.mark.asyncio
    async def test_accept_and_invalid_transition(self, api_client, created_booking):
        url = f"/api/v1/admin/bookings/{created_booking['id']}/transitions"

        accepted = await api_client.post(url, json={"action": "accept"})
        completed = await api_client.post(url, json={"action": "complete"})
        rejected = await api_client.post(url, json={"action": "cancel", "reason": "late"})

        assert accepted.json()["booking_status"] == "confirmed"
        assert completed.json()["booking_status"] == "completed"
        assert rejected.status_code == 409
        assert rejected.json()["code"] == "INVALID_TRANSITION"

    @pytest.mark.asyncio
    async def test_refund_proof_requires_reference(self, api_client, created_booking):
        url = f"/api/v1/admin/bookings/{created_booking['id']}/transitions"

        response = await api_client.post(url, json={"action": "attach_refund_proof"})

        assert response.status_code == 422

    @pytest.mark.asyncio
    async def test_delete_booking(self, api_client, created_booking):
        response = await api_client.delete(f"/api/v1/admin/bookings/{created_booking['id']}")
        assert response.status_code == 204

        tracking = await api_client.get(f"/api/v1/bookings/{created_booking['booking_reference']}")
        assert tracking.status_code == 404

    @pytest.mark.asyncio
    async def test_bookings_list_with_filters(self, api_client, created_booking):
        response = await api_client.get(
            "/api/v1/admin/bookings", params={"tab": "pending", "q": "maria", "page": 1}
        )

        assert response.status_code == 200
        data = response.json()
        assert data["total"] == 1
        assert data["items"][0]["customer_email"] == "a@b.com"
        assert data["stats"]["total"] == 1

    @pytest.mark.asyncio
    async def test_unknown_list_and_tab(self, api_client):
        assert (await api_client.get("/api/v1/admin/payouts")).status_code == 404
        assert (await api_client.get("/api/v1/admin/leads", params={"tab": "refunds"})).status_code == 422

    @pytest.mark.asyncio
    async def test_booking_recovers_lead(self, api_client, seeded_vehicle, booking_payload):
        await api_client.post("/api/v1/leads", json={"email": "a@b.com", "vehicle_id": "V1"})
        await api_client.post("/api/v1/bookings", json=booking_payload)

        response = await api_client.get("/api/v1/admin/leads", params={"tab": "recovered"})

        assert response.json()["total"] == 1
        assert response.json()["stats"]["conversion_rate"] == "100.0"

    @pytest.mark.asyncio
    async def test_expire_leads(self, api_client):
        response = await api_client.post("/api/v1/admin/leads/expire")

        assert response.status_code == 200
        assert response.json() == {"expired": 0}
