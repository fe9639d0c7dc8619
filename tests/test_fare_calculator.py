# tests/test_fare_calculator.py
import math

import pytest

from app.core.errors import FareInputError, UnknownVehicleCategoryError
from app.models.fare import VehicleCategory
from app.services.fare_calculator import FareCalculator
from app.services.vehicle_catalog import VehicleCatalog


@pytest.fixture
def calculator():
    return FareCalculator()


def test_single_day_fare_with_accommodation_provided(calculator):
    fare = calculator.calculate_fare(115, "cars", 1, True)

    assert fare.practical_distance_km == 125
    assert fare.rounded_distance_km == 130
    assert fare.rate_per_km == 130
    assert fare.base_cost == 16900
    assert fare.accommodation_cost == 0
    assert fare.total_cost == 16900


def test_two_nights_use_the_table_price(calculator):
    fare = calculator.calculate_fare(115, "cars", 3, False)

    assert fare.nights == 2
    assert fare.accommodation_cost == 5000
    assert fare.total_cost == 21900
    assert fare.breakdown.accommodation.tier == "table"


@pytest.mark.parametrize("days, expected", [(2, 3000), (3, 5000), (4, 7000)])
def test_accommodation_table(calculator, days, expected):
    fare = calculator.calculate_fare(115, "cars", days, False)
    assert fare.accommodation_cost == expected


def test_more_than_three_nights_use_per_night_fallback(calculator):
    fare = calculator.calculate_fare(115, "cars", 5, False)

    assert fare.nights == 4
    assert fare.accommodation_cost == 4 * 2500
    assert fare.total_cost == 16900 + 10000
    assert fare.breakdown.accommodation.tier == "fallback"


@pytest.mark.parametrize("days", [1, 2, 5, 10])
@pytest.mark.parametrize("category", ["cars", "kdh_high_roof", "mini_buses"])
def test_no_accommodation_charge_when_tourist_hosts_driver(calculator, days, category):
    fare = calculator.calculate_fare(250.4, category, days, True)
    assert fare.accommodation_cost == 0
    assert fare.breakdown.accommodation.tier == "none"


def test_no_accommodation_charge_for_single_day_trip(calculator):
    fare = calculator.calculate_fare(80, "mini_buses", 1, False)

    assert fare.accommodation_cost == 0
    assert fare.breakdown.accommodation.description == "Not required for a single-day trip"


def test_rounded_distance_is_padded_and_rounded_up(calculator):
    distance = 0.0
    while distance <= 300:
        rounded = calculator.rounded_distance_km(distance)
        assert rounded >= distance + 10
        assert rounded % 10 == 0
        assert rounded - (distance + 10) < 10
        distance += 0.7


def test_exact_multiple_is_not_rounded_further(calculator):
    assert calculator.rounded_distance_km(110) == 120
    assert calculator.rounded_distance_km(0) == 10


def test_total_never_decreases_with_distance(calculator):
    previous = 0
    for tenth_km in range(0, 3000, 7):
        total = calculator.calculate_fare(tenth_km / 10, "kdh_flat_roof", 2, False).total_cost
        assert total >= previous
        previous = total


def test_total_never_decreases_with_rate():
    rates = [100, 130, 130.5, 210]
    catalog = VehicleCatalog(
        VehicleCategory(
            id=f"rate_{index}",
            category_id=index,
            name=f"Rate {rate}",
            vehicle_type="car",
            min_passengers=1,
            max_passengers=4,
            system_rate_per_km=rate,
            driver_rate_per_km=rate - 20,
        )
        for index, rate in enumerate(rates, start=1)
    )
    calculator = FareCalculator(catalog=catalog)

    totals = [calculator.calculate_fare(182, f"rate_{i}", 3, False).total_cost for i in range(1, 5)]

    assert totals == sorted(totals)


def test_breakdown_descriptions(calculator):
    breakdown = calculator.calculate_fare(115, "cars", 3, False).breakdown

    assert breakdown.distance.description == (
        "115 km (map) + 10 km (practical) = 125 km → 130 km (rounded)"
    )
    assert breakdown.rate.description == "Rs. 130 per km"
    assert breakdown.calculation.description == "130 km × Rs. 130 = Rs. 16,900"
    assert breakdown.accommodation.description == "Rs. 5,000 for 2 night(s)"
    assert breakdown.total.description == "Rs. 21,900"


def test_breakdown_fields_match_top_level_values(calculator):
    fare = calculator.calculate_fare(42.3, "other_vans", 2, False)
    breakdown = fare.breakdown

    assert breakdown.distance.practical_distance_km == fare.practical_distance_km
    assert breakdown.distance.rounded_distance_km == fare.rounded_distance_km == 60
    assert breakdown.calculation.base_cost == fare.base_cost == 60 * 145
    assert breakdown.total.total_cost == fare.total_cost == 60 * 145 + 3000


def test_same_inputs_give_same_fare(calculator):
    first = calculator.calculate_fare(333.3, "kdh_high_roof", 4, False)
    second = calculator.calculate_fare(333.3, "kdh_high_roof", 4, False)
    assert first == second


def test_unknown_vehicle_category(calculator):
    with pytest.raises(UnknownVehicleCategoryError) as excinfo:
        calculator.calculate_fare(100, "tuk_tuk", 1, True)
    assert excinfo.value.category_id == "tuk_tuk"


@pytest.mark.parametrize(
    "distance, days",
    [
        (-1, 1),
        (math.nan, 1),
        (math.inf, 1),
        ("100", 1),
        (True, 1),
        (100, 0),
        (100, 1.5),
        (100, True),
    ],
)
def test_malformed_inputs_are_rejected(calculator, distance, days):
    with pytest.raises(FareInputError):
        calculator.calculate_fare(distance, "cars", days, True)


def test_custom_policy_values():
    calculator = FareCalculator(
        padding_km=0,
        rounding_unit_km=5,
        accommodation_costs={1: 1000},
        fallback_per_night=800,
        currency_prefix="LKR",
    )

    fare = calculator.calculate_fare(12, "cars", 3, False)

    assert fare.rounded_distance_km == 15
    assert fare.accommodation_cost == 1600
    assert fare.breakdown.total.description == "LKR 3,550"


def test_empty_currency_prefix_is_kept():
    calculator = FareCalculator(currency_prefix="")

    breakdown = calculator.calculate_fare(115, "cars", 1, True).breakdown

    assert breakdown.rate.description == "130 per km"
    assert breakdown.total.description == "16,900"


def test_zero_rounding_unit_is_rejected():
    with pytest.raises(ValueError):
        FareCalculator(rounding_unit_km=0)
