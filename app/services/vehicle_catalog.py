# app/services/vehicle_catalog.py

from typing import Dict, Iterable, List, Optional

from app.core.errors import UnknownVehicleCategoryError
from app.core.logger import logger
from app.models.fare import VehicleCategory

DEFAULT_VEHICLE_CATEGORIES = (
    VehicleCategory(
        id="cars",
        category_id=1,
        name="Cars",
        vehicle_type="car",
        min_passengers=1,
        max_passengers=4,
        system_rate_per_km=130,
        driver_rate_per_km=110,
        features=[
            "Fuel efficient",
            "Comfortable for small groups",
            "Suitable for city travel",
            "Air Conditioning",
        ],
        examples=[
            "Toyota Corolla, Axio, Prius, Aqua, Vitz",
            "Suzuki Alto, Wagon R, Swift, Maruti, Celerio",
            "Honda Fit (Jazz), Grace",
            "Nissan Leaf, March, Sunny, X-Trail",
        ],
        description="Comfortable sedans suitable for small groups",
    ),
    VehicleCategory(
        id="kdh_flat_roof",
        category_id=2,
        name="KDH Flat Roof",
        vehicle_type="van",
        min_passengers=6,
        max_passengers=10,
        system_rate_per_km=145,
        driver_rate_per_km=125,
        features=[
            "Spacious interior",
            "Comfortable for long journeys",
            "Ample luggage space",
            "Air Conditioning",
        ],
        examples=["Toyota HiAce KDH", "Hyundai H1"],
        description="Spacious vans ideal for medium-sized groups",
    ),
    VehicleCategory(
        id="kdh_high_roof",
        category_id=3,
        name="KDH High Roof",
        vehicle_type="van",
        min_passengers=6,
        max_passengers=12,
        system_rate_per_km=160,
        driver_rate_per_km=135,
        features=[
            "Spacious interior",
            "Comfortable for long journeys",
            "Ample luggage space",
            "Air Conditioning",
        ],
        examples=["Toyota HiAce KDH", "Hyundai H1"],
        description="Spacious vans ideal for medium-sized groups",
    ),
    VehicleCategory(
        id="other_vans",
        category_id=4,
        name="Other Vans",
        vehicle_type="van",
        min_passengers=6,
        max_passengers=10,
        system_rate_per_km=145,
        driver_rate_per_km=120,
        features=[
            "Spacious interior",
            "Comfortable for long journeys",
            "Ample luggage space",
            "Air Conditioning",
        ],
        examples=[
            "Toyota Noah, Vellfire, Alphard",
            "Suzuki Every",
            "Mercedes V-Class, Sprinter",
            "Nissan Caravan",
        ],
        description="Spacious vans ideal for medium-sized groups",
    ),
    VehicleCategory(
        id="mini_buses",
        category_id=5,
        name="Mini Buses",
        vehicle_type="mini_bus",
        min_passengers=12,
        max_passengers=25,
        system_rate_per_km=210,
        driver_rate_per_km=180,
        features=[
            "Large seating capacity",
            "Comfortable for group travel",
            "Spacious luggage area",
            "Air Conditioning",
        ],
        examples=[
            "Mitsubishi Rosa, Fuso Rosa",
            "Toyota Coaster",
            "Nissan Civilian",
            "Hyundai County",
        ],
        description="Large buses perfect for big groups and long trips",
    ),
)


class VehicleCatalog:
    """
    Read-only table of vehicle categories, looked up by slug id or by the
    integer category_id that bookings store.
    """

    def __init__(self, categories: Optional[Iterable[VehicleCategory]] = None) -> None:
        self._categories: List[VehicleCategory] = list(
            DEFAULT_VEHICLE_CATEGORIES if categories is None else categories
        )
        self._by_id: Dict[str, VehicleCategory] = {}
        self._by_category_id: Dict[int, VehicleCategory] = {}

        for category in self._categories:
            if category.id in self._by_id or category.category_id in self._by_category_id:
                raise ValueError(f"Duplicate vehicle category: {category.id}")
            self._by_id[category.id] = category
            self._by_category_id[category.category_id] = category

        logger.info(f"VehicleCatalog loaded with {len(self._categories)} categories")

    def all(self) -> List[VehicleCategory]:
        return list(self._categories)

    def get(self, category_id: str) -> VehicleCategory:
        try:
            return self._by_id[category_id]
        except (KeyError, TypeError):
            raise UnknownVehicleCategoryError(category_id) from None

    def get_by_category_id(self, category_id: int) -> VehicleCategory:
        try:
            return self._by_category_id[category_id]
        except (KeyError, TypeError):
            raise UnknownVehicleCategoryError(category_id) from None

    def suitable_categories(self, passenger_count: int) -> List[VehicleCategory]:
        """
        Categories whose passenger range includes passenger_count, in catalog order.

        An empty list means no vehicle fits; it is not an error.
        """
        return [category for category in self._categories if category.seats(passenger_count)]
