# app/api/v1/routes_trips.py
from fastapi import APIRouter

from app.api.v1.routes_fares import fare_calculator
from app.api.v1.routes_routing import route_estimator
from app.models.trip import TripQuote, TripQuoteRequest
from app.services.trip_quote_service import TripQuoteService

router = APIRouter(
    prefix="/trips",
    tags=["trips"],
)

trip_quote_service = TripQuoteService(
    route_estimator=route_estimator,
    fare_calculator=fare_calculator,
)


@router.post(
    "/quote",
    response_model=TripQuote,
    summary="Estimate and price a trip, returning the booking draft",
)
async def quote_trip(request: TripQuoteRequest) -> TripQuote:
    """
    Runs the route estimate, prices it for the chosen vehicle and returns the
    values the booking record is created from. Nothing is stored here.
    """
    return await trip_quote_service.quote_trip(request)
