# app/services/trip_quote_service.py

from app.core.config import settings
from app.core.errors import FareInputError, InvalidRouteInputError
from app.core.logger import logger
from app.models.routing import RouteOptions
from app.models.trip import BookingDraft, TripQuote, TripQuoteRequest
from app.services.fare_calculator import FareCalculator
from app.services.route_estimator import RouteEstimator


class TripQuoteService:
    """
    Booking-workflow helper: route estimate, then fare, then the booking draft
    that persistence stores as plain numbers.
    """

    def __init__(
        self,
        route_estimator: RouteEstimator | None = None,
        fare_calculator: FareCalculator | None = None,
    ) -> None:
        self.route_estimator = route_estimator or RouteEstimator()
        self.fare_calculator = fare_calculator or FareCalculator()

    async def quote_trip(self, request: TripQuoteRequest) -> TripQuote:
        pickup = request.pickup_location.strip()
        if not pickup:
            raise InvalidRouteInputError("Please enter a pickup location")

        destinations = [dest.strip() for dest in request.destinations if dest and dest.strip()]
        if not destinations:
            raise InvalidRouteInputError("Please enter at least one destination")

        # Check the vehicle before spending provider calls on the route
        vehicle = self.fare_calculator.catalog.get(request.vehicle_category_id)
        if not vehicle.seats(request.travelers_count):
            raise FareInputError(
                f"{vehicle.name} seats {vehicle.min_passengers}-{vehicle.max_passengers} "
                f"passengers, not {request.travelers_count}"
            )

        options = RouteOptions(
            is_round_trip=request.trip_type == "return",
            start_time=request.start_time,
            start_date=request.start_date,
            dwell_hours_per_intermediate_stop=settings.DWELL_HOURS_PER_INTERMEDIATE_STOP,
        )
        route = await self.route_estimator.estimate_route([pickup, *destinations], options)

        fare = self.fare_calculator.calculate_fare(
            route.total_distance_km,
            vehicle.id,
            route.schedule.days_needed,
            request.accommodation_provided,
        )

        booking = BookingDraft(
            pickup_location=pickup,
            destinations=destinations,
            trip_type=request.trip_type,
            start_date=request.start_date,
            start_time=options.start_time,
            travelers_count=request.travelers_count,
            selected_category_id=vehicle.category_id,
            total_distance_km=fare.rounded_distance_km,
            calculated_distance_km=fare.map_distance_km,
            trip_cost=fare.base_cost,
            accommodation_cost=fare.accommodation_cost,
            total_cost=fare.total_cost,
            driver_accommodation_provided=request.accommodation_provided,
            trip_duration_days=route.schedule.days_needed,
            special_requirements=request.special_requirements,
        )

        logger.info(
            f"Trip quote: {pickup} -> {destinations[-1]} ({request.trip_type}), "
            f"{vehicle.name}, total {fare.total_cost:g}"
        )
        return TripQuote(route=route, fare=fare, booking=booking)
