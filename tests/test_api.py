# tests/test_api.py
import pytest
from fastapi.testclient import TestClient

from app.api.v1 import routes_fares, routes_routing, routes_trips
from app.main import app
from app.services.distance_provider import NoRouteError
from app.services.route_estimator import RouteEstimator
from app.services.trip_quote_service import TripQuoteService

client = TestClient(app)


@pytest.fixture
def fake_routing(monkeypatch, sri_lanka_provider):
    estimator = RouteEstimator(provider=sri_lanka_provider)
    monkeypatch.setattr(routes_routing, "route_estimator", estimator)
    monkeypatch.setattr(
        routes_trips,
        "trip_quote_service",
        TripQuoteService(route_estimator=estimator, fare_calculator=routes_fares.fare_calculator),
    )
    return sri_lanka_provider


def test_route_estimate(fake_routing):
    payload = {
        "stops": ["Colombo", "Kandy", "Ella"],
        "options": {"is_round_trip": False, "start_time": "09:00", "dwell_hours_per_intermediate_stop": 3},
    }

    response = client.post("/route/estimate", json=payload)
    assert response.status_code == 200

    data = response.json()
    assert data["total_distance_km"] == 255
    assert data["total_duration_hours"] == 10
    assert data["schedule"]["days_needed"] == 1
    assert data["schedule"]["estimated_end_time"] == "19:00"
    assert [s["to_stop"] for s in data["segments"]] == ["Kandy", "Ella"]
    assert data["segments"][0]["distance_km"] == 115
    assert data["feasibility"]["stop_time"] == "3 hours"


def test_route_estimate_with_unreachable_leg(fake_routing):
    fake_routing.legs[("Kandy", "Ella")] = NoRouteError("No driving route found (ZERO_RESULTS)")

    response = client.post("/route/estimate", json={"stops": ["Colombo", "Kandy", "Ella"]})

    assert response.status_code == 502
    data = response.json()
    assert data["error"] == "segment_unavailable"
    assert data["from"] == "Kandy"
    assert data["to"] == "Ella"
    assert "ZERO_RESULTS" in data["cause"]


def test_route_estimate_rejects_single_stop(fake_routing):
    response = client.post("/route/estimate", json={"stops": ["Colombo"]})

    assert response.status_code == 422
    assert response.json()["error"] == "invalid_route_input"
    assert fake_routing.calls == []


def test_route_estimate_rejects_bad_start_time(fake_routing):
    response = client.post(
        "/route/estimate",
        json={"stops": ["Colombo", "Kandy"], "options": {"start_time": "25:00"}},
    )
    assert response.status_code == 422


def test_list_vehicles():
    response = client.get("/vehicles/")
    assert response.status_code == 200
    assert len(response.json()) == 5

    response = client.get("/vehicles/", params={"passengers": 3})
    assert [v["id"] for v in response.json()] == ["cars"]

    response = client.get("/vehicles/", params={"passengers": 999})
    assert response.json() == []


def test_fare_quote():
    payload = {
        "map_distance_km": 115,
        "vehicle_category_id": "cars",
        "trip_duration_days": 3,
        "accommodation_provided": False,
    }

    response = client.post("/fare/quote", json=payload)
    assert response.status_code == 200

    data = response.json()
    assert data["rounded_distance_km"] == 130
    assert data["base_cost"] == 16900
    assert data["accommodation_cost"] == 5000
    assert data["total_cost"] == 21900
    assert data["breakdown"]["accommodation"]["nights"] == 2


def test_fare_quote_unknown_vehicle():
    response = client.post(
        "/fare/quote", json={"map_distance_km": 115, "vehicle_category_id": "tuk_tuk"}
    )
    assert response.status_code == 404
    assert response.json()["error"] == "unknown_vehicle_category"


def test_fare_quote_negative_distance():
    response = client.post(
        "/fare/quote", json={"map_distance_km": -5, "vehicle_category_id": "cars"}
    )
    assert response.status_code == 422
    assert response.json()["error"] == "invalid_fare_input"


def test_trip_quote_builds_booking_draft(fake_routing):
    payload = {
        "pickup_location": "Colombo",
        "destinations": ["Kandy", "Ella", "  "],
        "trip_type": "return",
        "start_date": "2026-03-01",
        "start_time": "08:00",
        "travelers_count": 8,
        "vehicle_category_id": "kdh_high_roof",
        "accommodation_provided": False,
    }

    response = client.post("/trips/quote", json=payload)
    assert response.status_code == 200

    data = response.json()
    route, fare, booking = data["route"], data["fare"], data["booking"]

    # 115 + 140 + 200 km, 13 h driving + 2 dwell stops
    assert route["total_distance_km"] == 455
    assert route["total_duration_hours"] == 19
    assert route["schedule"]["days_needed"] == 2
    assert route["schedule"]["estimated_end_date"] == "2026-03-02"

    assert fare["rounded_distance_km"] == 470
    assert fare["accommodation_cost"] == 3000
    assert fare["total_cost"] == 470 * 160 + 3000

    assert booking["destinations"] == ["Kandy", "Ella"]
    assert booking["selected_category_id"] == 3
    assert booking["total_distance_km"] == 470
    assert booking["calculated_distance_km"] == 455
    assert booking["trip_cost"] == 470 * 160
    assert booking["total_cost"] == fare["total_cost"]
    assert booking["trip_duration_days"] == 2
    assert booking["driver_accommodation_provided"] is False


def test_trip_quote_rejects_vehicle_too_small(fake_routing):
    payload = {
        "pickup_location": "Colombo",
        "destinations": ["Kandy"],
        "travelers_count": 8,
        "vehicle_category_id": "cars",
    }

    response = client.post("/trips/quote", json=payload)

    assert response.status_code == 422
    assert response.json()["error"] == "invalid_fare_input"
    assert fake_routing.calls == []


def test_trip_quote_requires_a_destination(fake_routing):
    payload = {
        "pickup_location": "Colombo",
        "destinations": ["", " "],
        "vehicle_category_id": "cars",
    }

    response = client.post("/trips/quote", json=payload)

    assert response.status_code == 422
    assert response.json()["detail"] == "Please enter at least one destination"
