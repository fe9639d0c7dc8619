# app/models/fare.py

from typing import List, Literal

from pydantic import BaseModel, ConfigDict


class VehicleCategory(BaseModel):
    """
    Fixed class of vehicle with its passenger range and per-km rates.

    system_rate_per_km is what the tourist is charged; driver_rate_per_km is
    the driver payout rate and is not used when quoting.
    """
    model_config = ConfigDict(frozen=True)

    id: str
    category_id: int
    name: str
    vehicle_type: str
    min_passengers: int
    max_passengers: int
    system_rate_per_km: float
    driver_rate_per_km: float
    features: List[str] = []
    examples: List[str] = []
    description: str = ""

    def seats(self, passenger_count: int) -> bool:
        return self.min_passengers <= passenger_count <= self.max_passengers


class DistanceStep(BaseModel):
    map_distance_km: float
    padding_km: int
    practical_distance_km: float
    rounding_unit_km: int
    rounded_distance_km: int
    description: str


class RateStep(BaseModel):
    vehicle_category_id: str
    vehicle_name: str
    rate_per_km: float
    description: str


class BaseCostStep(BaseModel):
    rounded_distance_km: int
    rate_per_km: float
    base_cost: float
    description: str


class AccommodationStep(BaseModel):
    """
    tier is "none" when nothing is charged, "table" for the fixed 1-3 night
    prices and "fallback" for the per-night rate beyond the table.
    """
    provided_by_tourist: bool
    trip_duration_days: int
    nights: int
    tier: Literal["none", "table", "fallback"]
    amount: float
    description: str


class TotalStep(BaseModel):
    base_cost: float
    accommodation_cost: float
    total_cost: float
    description: str


class FareBreakdown(BaseModel):
    distance: DistanceStep
    rate: RateStep
    calculation: BaseCostStep
    accommodation: AccommodationStep
    total: TotalStep


class CostBreakdown(BaseModel):
    """
    Itemised fare for one (distance, vehicle, duration, accommodation) tuple.
    """
    map_distance_km: float
    practical_distance_km: float
    rounded_distance_km: int
    vehicle_category_id: str
    vehicle_name: str
    rate_per_km: float
    base_cost: float
    nights: int
    accommodation_cost: float
    total_cost: float
    breakdown: FareBreakdown


class FareQuoteRequest(BaseModel):
    """
    Request body for the /fare/quote endpoint.
    """
    map_distance_km: float
    vehicle_category_id: str
    trip_duration_days: int = 1
    accommodation_provided: bool = True
