# app/api/v1/routes_routing.py
from fastapi import APIRouter

from app.models.routing import RouteEstimateRequest, RouteResult
from app.services.distance_provider import DistanceMatrixClient
from app.services.route_estimator import RouteEstimator

router = APIRouter(
    prefix="/route",
    tags=["routing"],
)

# Single shared instances
distance_provider = DistanceMatrixClient()
route_estimator = RouteEstimator(provider=distance_provider)


@router.post(
    "/estimate",
    response_model=RouteResult,
    summary="Estimate distance, duration and schedule for a multi-stop trip",
)
async def estimate_route(request: RouteEstimateRequest) -> RouteResult:
    """
    Estimate a route through the given stops, in the order given.

    - One distance lookup per consecutive pair of stops.
    - Intermediate stops add the configured dwell time.
    - A single unresolvable leg fails the whole estimate.
    """
    return await route_estimator.estimate_route(request.stops, request.options)
