# app/api/v1/routes_fares.py
from typing import List, Optional

from fastapi import APIRouter, Query

from app.models.fare import CostBreakdown, FareQuoteRequest, VehicleCategory
from app.services.fare_calculator import FareCalculator
from app.services.vehicle_catalog import VehicleCatalog

router = APIRouter(tags=["fares"])

# Single shared instances
vehicle_catalog = VehicleCatalog()
fare_calculator = FareCalculator(catalog=vehicle_catalog)


@router.get(
    "/vehicles/",
    response_model=List[VehicleCategory],
    summary="List vehicle categories, optionally only those seating a party",
)
async def list_vehicles(
    passengers: Optional[int] = Query(default=None, description="Party size to filter by"),
) -> List[VehicleCategory]:
    if passengers is None:
        return vehicle_catalog.all()
    return vehicle_catalog.suitable_categories(passengers)


@router.post(
    "/fare/quote",
    response_model=CostBreakdown,
    summary="Price a trip distance for a vehicle category",
)
async def quote_fare(request: FareQuoteRequest) -> CostBreakdown:
    return fare_calculator.calculate_fare(
        request.map_distance_km,
        request.vehicle_category_id,
        request.trip_duration_days,
        request.accommodation_provided,
    )
