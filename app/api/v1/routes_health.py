# app/api/v1/routes_health.py
from fastapi import APIRouter
from app.core.config import settings
from app.api.v1.routes_fares import vehicle_catalog

router = APIRouter(
    prefix="/health",
    tags=["health"],
)


@router.get("/", summary="Health check")
async def health_check():
    """
    Reports whether the quote API is up and can reach a distance provider.

    Route estimates fail with 502 while distance_provider_configured is false;
    fare quotes and vehicle listings keep working.
    """
    return {
        "status": "ok",
        "app": settings.APP_NAME,
        "version": settings.APP_VERSION,
        "environment": settings.ENVIRONMENT,
        "distance_provider_configured": bool(settings.DISTANCE_MATRIX_API_KEY),
        "vehicle_categories": len(vehicle_catalog.all()),
    }
