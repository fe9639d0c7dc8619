# app/models/trip.py

from datetime import date
from typing import List, Literal, Optional

from pydantic import BaseModel, Field, field_validator

from app.models.fare import CostBreakdown
from app.models.routing import RouteResult
from app.services.formatting import parse_clock


class TripQuoteRequest(BaseModel):
    """
    Request body for the /trips/quote endpoint, as submitted by the trip planner.
    """
    pickup_location: str
    destinations: List[str]
    trip_type: Literal["one-way", "return"] = "one-way"
    start_date: Optional[date] = None
    start_time: str = "09:00"
    travelers_count: int = Field(default=2, ge=1)
    vehicle_category_id: str
    accommodation_provided: bool = True
    special_requirements: Optional[str] = None

    @field_validator("start_time")
    @classmethod
    def _check_start_time(cls, value: str) -> str:
        hours, minutes = parse_clock(value)
        return f"{hours:02d}:{minutes:02d}"


class BookingDraft(BaseModel):
    """
    Values handed to booking persistence. Distances and costs are copied
    from the route estimate and the fare, never recomputed.
    """
    pickup_location: str
    destinations: List[str]
    trip_type: Literal["one-way", "return"]
    start_date: Optional[date]
    start_time: str
    travelers_count: int
    selected_category_id: int
    total_distance_km: int
    calculated_distance_km: float
    trip_cost: float
    accommodation_cost: float
    total_cost: float
    driver_accommodation_provided: bool
    trip_duration_days: int
    special_requirements: Optional[str] = None


class TripQuote(BaseModel):
    route: RouteResult
    fare: CostBreakdown
    booking: BookingDraft
