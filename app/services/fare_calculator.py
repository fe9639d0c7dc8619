# app/services/fare_calculator.py

import math
from numbers import Real
from typing import Dict, Optional, Tuple

from app.core.config import settings
from app.core.errors import FareInputError
from app.core.logger import logger
from app.models.fare import (
    AccommodationStep,
    BaseCostStep,
    CostBreakdown,
    DistanceStep,
    FareBreakdown,
    RateStep,
    TotalStep,
)
from app.services.formatting import format_currency, format_number
from app.services.vehicle_catalog import VehicleCatalog


class FareCalculator:
    """
    Deterministic fare quote for a route distance and vehicle category.

    - pad the map distance, then round it up to the billing unit
    - multiply by the category's system rate
    - add driver accommodation for multi-day trips the tourist does not host
    """

    def __init__(
        self,
        catalog: VehicleCatalog | None = None,
        padding_km: int | None = None,
        rounding_unit_km: int | None = None,
        accommodation_costs: Dict[int, float] | None = None,
        fallback_per_night: float | None = None,
        currency_prefix: str | None = None,
    ) -> None:
        self.catalog = catalog or VehicleCatalog()
        self.padding_km = settings.PRACTICAL_DISTANCE_PADDING_KM if padding_km is None else padding_km
        self.rounding_unit_km = settings.ROUNDING_UNIT_KM if rounding_unit_km is None else rounding_unit_km
        self.accommodation_costs = dict(
            settings.ACCOMMODATION_COSTS if accommodation_costs is None else accommodation_costs
        )
        self.fallback_per_night = (
            settings.ACCOMMODATION_FALLBACK_PER_NIGHT if fallback_per_night is None else fallback_per_night
        )
        self.currency_prefix = settings.CURRENCY_PREFIX if currency_prefix is None else currency_prefix
        if self.rounding_unit_km <= 0:
            raise ValueError("rounding_unit_km must be positive")
        # Nights covered by the fixed price table; longer stays use the fallback rate
        self.table_max_nights = max(self.accommodation_costs, default=0)

    # ------------------------------------------------------------------ #
    # Public API
    # ------------------------------------------------------------------ #

    def calculate_fare(
        self,
        map_distance_km: float,
        vehicle_category_id: str,
        trip_duration_days: int = 1,
        accommodation_provided_by_tourist: bool = True,
    ) -> CostBreakdown:
        """
        Price a trip. Raises FareInputError or UnknownVehicleCategoryError.
        """
        self._validate(map_distance_km, trip_duration_days)
        vehicle = self.catalog.get(vehicle_category_id)

        practical_km = self.practical_distance_km(map_distance_km)
        rounded_km = self.rounded_distance_km(map_distance_km)
        rate = vehicle.system_rate_per_km
        base_cost = rounded_km * rate

        nights, tier, accommodation_cost = self.accommodation_cost(
            trip_duration_days, accommodation_provided_by_tourist
        )
        total_cost = base_cost + accommodation_cost

        money = self._money
        if accommodation_provided_by_tourist:
            accommodation_text = "Provided by tourist"
        elif nights == 0:
            accommodation_text = "Not required for a single-day trip"
        else:
            accommodation_text = f"{money(accommodation_cost)} for {nights} night(s)"

        breakdown = FareBreakdown(
            distance=DistanceStep(
                map_distance_km=map_distance_km,
                padding_km=self.padding_km,
                practical_distance_km=practical_km,
                rounding_unit_km=self.rounding_unit_km,
                rounded_distance_km=rounded_km,
                description=(
                    f"{format_number(map_distance_km)} km (map) + {self.padding_km} km (practical) = "
                    f"{format_number(practical_km)} km → {rounded_km} km (rounded)"
                ),
            ),
            rate=RateStep(
                vehicle_category_id=vehicle.id,
                vehicle_name=vehicle.name,
                rate_per_km=rate,
                description=f"{money(rate)} per km",
            ),
            calculation=BaseCostStep(
                rounded_distance_km=rounded_km,
                rate_per_km=rate,
                base_cost=base_cost,
                description=f"{rounded_km} km × {money(rate)} = {money(base_cost)}",
            ),
            accommodation=AccommodationStep(
                provided_by_tourist=accommodation_provided_by_tourist,
                trip_duration_days=trip_duration_days,
                nights=nights,
                tier=tier,
                amount=accommodation_cost,
                description=accommodation_text,
            ),
            total=TotalStep(
                base_cost=base_cost,
                accommodation_cost=accommodation_cost,
                total_cost=total_cost,
                description=money(total_cost),
            ),
        )

        logger.info(
            f"Fare for {vehicle.id}: {map_distance_km} km -> {rounded_km} km x {rate:g} "
            f"= {base_cost:g} + accommodation {accommodation_cost:g} ({tier}) = {total_cost:g}"
        )

        return CostBreakdown(
            map_distance_km=map_distance_km,
            practical_distance_km=practical_km,
            rounded_distance_km=rounded_km,
            vehicle_category_id=vehicle.id,
            vehicle_name=vehicle.name,
            rate_per_km=rate,
            base_cost=base_cost,
            nights=nights,
            accommodation_cost=accommodation_cost,
            total_cost=total_cost,
            breakdown=breakdown,
        )

    def practical_distance_km(self, map_distance_km: float) -> float:
        return map_distance_km + self.padding_km

    def rounded_distance_km(self, map_distance_km: float) -> int:
        # Always rounds up so a trip is never billed below its practical distance
        practical_km = self.practical_distance_km(map_distance_km)
        return math.ceil(practical_km / self.rounding_unit_km) * self.rounding_unit_km

    def accommodation_cost(
        self,
        trip_duration_days: int,
        accommodation_provided_by_tourist: bool,
    ) -> Tuple[int, str, float]:
        """
        Driver accommodation as (nights, tier, amount).

        Two tiers: up to table_max_nights the fixed table price applies; beyond
        it every night is charged at the fallback rate.
        """
        if accommodation_provided_by_tourist or trip_duration_days <= 1:
            return max(0, trip_duration_days - 1), "none", 0.0

        nights = trip_duration_days - 1
        if nights > self.table_max_nights:
            return nights, "fallback", nights * self.fallback_per_night
        if nights not in self.accommodation_costs:
            # Gap inside a custom table
            raise FareInputError(f"No accommodation price configured for {nights} night(s)")
        return nights, "table", float(self.accommodation_costs[nights])

    # ------------------------------------------------------------------ #
    # Internal helpers
    # ------------------------------------------------------------------ #

    @staticmethod
    def _validate(map_distance_km: float, trip_duration_days: int) -> None:
        if isinstance(map_distance_km, bool) or not isinstance(map_distance_km, Real):
            raise FareInputError("Map distance must be a number of kilometres")
        if not math.isfinite(map_distance_km) or map_distance_km < 0:
            raise FareInputError("Map distance must be a non-negative finite number")
        if isinstance(trip_duration_days, bool) or not isinstance(trip_duration_days, int):
            raise FareInputError("Trip duration must be a whole number of days")
        if trip_duration_days < 1:
            raise FareInputError("Trip duration must be at least 1 day")

    def _money(self, amount: float) -> str:
        return format_currency(amount, self.currency_prefix)
