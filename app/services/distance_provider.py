# app/services/distance_provider.py
"""
Distance provider: driving distance and duration between two free-text places.

DistanceMatrixClient talks to a Google Distance Matrix compatible HTTP API.
Anything implementing DistanceProvider can stand in for it (tests use
in-memory fakes).
"""

from dataclasses import dataclass
from typing import Any, Dict, Optional, Protocol

import httpx

from app.core.config import settings
from app.core.logger import logger

TRAVEL_MODE = "driving"

# Top-level statuses worth retrying later
TRANSIENT_STATUSES = {"OVER_QUERY_LIMIT", "UNKNOWN_ERROR"}
# Element statuses meaning the two places are not connected by road
NO_ROUTE_STATUSES = {"NOT_FOUND", "ZERO_RESULTS"}


@dataclass(frozen=True)
class SegmentDistance:
    distance_m: int
    duration_s: int


class DistanceProviderError(Exception):
    """Provider could not answer. retryable tells callers whether a retry may help."""

    retryable = False


class NoRouteError(DistanceProviderError):
    pass


class ProviderTransientError(DistanceProviderError):
    retryable = True


class DistanceProvider(Protocol):
    async def segment_distance(self, origin: str, destination: str) -> SegmentDistance:
        ...


class DistanceMatrixClient:
    """
    Client for the Distance Matrix API, one origin/destination pair per request.

    Does not retry; the route estimator decides what a failure means.
    """

    def __init__(
        self,
        base_url: Optional[str] = None,
        api_key: Optional[str] = None,
        timeout: Optional[float] = None,
        client: Optional[httpx.AsyncClient] = None,
    ) -> None:
        self.base_url = base_url or settings.DISTANCE_MATRIX_URL
        self.api_key = api_key if api_key is not None else settings.DISTANCE_MATRIX_API_KEY
        self.timeout = timeout if timeout is not None else settings.SEGMENT_TIMEOUT_SECONDS
        # Optional shared client (tests inject one with a MockTransport)
        self._client = client

    async def segment_distance(self, origin: str, destination: str) -> SegmentDistance:
        if not self.api_key:
            raise DistanceProviderError("Distance Matrix API key is not configured")

        params = {
            "origins": origin,
            "destinations": destination,
            "mode": TRAVEL_MODE,
            "key": self.api_key,
        }

        logger.debug("Distance Matrix request: {} -> {}", origin, destination)

        try:
            if self._client is not None:
                response = await self._client.get(self.base_url, params=params, timeout=self.timeout)
            else:
                async with httpx.AsyncClient(timeout=self.timeout) as client:
                    response = await client.get(self.base_url, params=params)
            response.raise_for_status()
        except httpx.TimeoutException as e:
            raise ProviderTransientError(f"Distance Matrix request timed out: {e}") from e
        except httpx.HTTPStatusError as e:
            status_code = e.response.status_code
            if status_code == 429 or status_code >= 500:
                raise ProviderTransientError(f"Distance Matrix HTTP {status_code}") from e
            raise DistanceProviderError(f"Distance Matrix HTTP {status_code}") from e
        except httpx.HTTPError as e:
            raise ProviderTransientError(f"Network error while calculating distance: {e}") from e

        try:
            data = response.json()
        except ValueError as e:
            raise DistanceProviderError("Distance Matrix returned invalid JSON") from e

        return self._parse_response(data)

    @staticmethod
    def _parse_response(data: Dict[str, Any]) -> SegmentDistance:
        if not isinstance(data, dict):
            raise DistanceProviderError("Distance Matrix response is not a JSON object")

        status = data.get("status")
        if status != "OK":
            message = data.get("error_message") or status or "missing status"
            if status in TRANSIENT_STATUSES:
                raise ProviderTransientError(f"Distance Matrix status {status}: {message}")
            raise DistanceProviderError(f"Distance Matrix status {status}: {message}")

        try:
            element = data["rows"][0]["elements"][0]
        except (KeyError, IndexError, TypeError) as e:
            raise DistanceProviderError("Distance Matrix response has no result element") from e
        if not isinstance(element, dict):
            raise DistanceProviderError("Distance Matrix result element is not an object")

        element_status = element.get("status")
        if element_status in NO_ROUTE_STATUSES:
            raise NoRouteError(f"No driving route found ({element_status})")
        if element_status != "OK":
            raise DistanceProviderError(f"Distance Matrix element status {element_status}")

        try:
            return SegmentDistance(
                distance_m=int(element["distance"]["value"]),
                duration_s=int(element["duration"]["value"]),
            )
        except (KeyError, TypeError, ValueError) as e:
            raise DistanceProviderError("Distance Matrix element is missing distance/duration") from e
