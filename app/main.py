# app/main.py

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from app.api.v1 import routes_fares, routes_health, routes_routing, routes_trips
from app.core.config import settings
from app.core.errors import (
    FareInputError,
    InvalidRouteInputError,
    SegmentUnavailableError,
    TripQuoteError,
    UnknownVehicleCategoryError,
)
from app.core.logger import logger
from app.core.logging_config import setup_logging

# Most specific class first
ERROR_STATUS_CODES = (
    (InvalidRouteInputError, 422),
    (FareInputError, 422),
    (UnknownVehicleCategoryError, 404),
    (SegmentUnavailableError, 502),
)


def status_code_for(error: TripQuoteError) -> int:
    for error_type, status_code in ERROR_STATUS_CODES:
        if isinstance(error, error_type):
            return status_code
    return 400


def create_app() -> FastAPI:
    setup_logging()

    app = FastAPI(
        title=settings.APP_NAME,
        version=settings.APP_VERSION,
        description="Route estimation and fare quotes for multi-stop driver-hire trips.",
    )

    # Routers
    app.include_router(routes_health.router, prefix="", tags=["health"])
    app.include_router(routes_routing.router, prefix="", tags=["routing"])
    app.include_router(routes_fares.router, prefix="", tags=["fares"])
    app.include_router(routes_trips.router, prefix="", tags=["trips"])

    @app.exception_handler(TripQuoteError)
    async def trip_quote_error_handler(request: Request, exc: TripQuoteError) -> JSONResponse:
        status_code = status_code_for(exc)
        logger.warning(f"{request.method} {request.url.path} -> {status_code}: {exc.message}")
        return JSONResponse(status_code=status_code, content=exc.to_dict())

    return app


app = create_app()
