# app/core/errors.py
"""
Error taxonomy for route estimation and fare calculation.

Every error is local to one estimate or quote request. The API layer maps
each class to an HTTP response in app/main.py.
"""


class TripQuoteError(Exception):
    """Base class for all user-facing estimation/pricing errors."""

    code: str = "trip_quote_error"

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message

    def to_dict(self) -> dict:
        return {"error": self.code, "detail": self.message}


# ---------------------------------------------------------------------- #
# Route estimation
# ---------------------------------------------------------------------- #


class RouteError(TripQuoteError):
    code = "route_error"


class InvalidRouteInputError(RouteError):
    """Malformed stop list or options; raised before any provider call."""

    code = "invalid_route_input"


class SegmentUnavailableError(RouteError):
    """One leg of the route could not be resolved by the distance provider."""

    code = "segment_unavailable"

    def __init__(self, from_stop: str, to_stop: str, cause: str) -> None:
        super().__init__(f"Could not find a route from '{from_stop}' to '{to_stop}': {cause}")
        self.from_stop = from_stop
        self.to_stop = to_stop
        self.cause = cause

    def to_dict(self) -> dict:
        data = super().to_dict()
        data.update({"from": self.from_stop, "to": self.to_stop, "cause": self.cause})
        return data


# ---------------------------------------------------------------------- #
# Fare calculation
# ---------------------------------------------------------------------- #


class FareError(TripQuoteError):
    code = "fare_error"


class FareInputError(FareError):
    code = "invalid_fare_input"


class UnknownVehicleCategoryError(FareError):
    code = "unknown_vehicle_category"

    def __init__(self, category_id: object) -> None:
        super().__init__(f"Vehicle category '{category_id}' not found")
        self.category_id = category_id
