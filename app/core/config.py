# app/core/config.py
from typing import Dict, Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables (.env file).

    Pricing and scheduling policy values live here too, so every rule the
    estimator and fare calculator apply comes from one place.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
    )

    APP_NAME: str = "Trip Quote API"
    APP_VERSION: str = "0.1.0"
    ENVIRONMENT: str = "development"
    LOG_LEVEL: str = "INFO"

    # Google Distance Matrix compatible endpoint (GoMaps.pro mirrors the Google API)
    DISTANCE_MATRIX_URL: str = "https://maps.gomaps.pro/maps/api/distancematrix/json"
    DISTANCE_MATRIX_API_KEY: Optional[str] = None

    SEGMENT_TIMEOUT_SECONDS: float = Field(default=10.0, gt=0)
    MAX_CONCURRENT_SEGMENTS: int = Field(default=6, ge=1)

    # Route schedule policy
    DWELL_HOURS_PER_INTERMEDIATE_STOP: float = Field(default=3.0, ge=0)
    DAILY_DRIVING_BUDGET_HOURS: float = Field(default=12.0, gt=0)
    MAX_SINGLE_TRIP_HOURS: float = Field(default=24.0, gt=0)

    # Fare policy
    PRACTICAL_DISTANCE_PADDING_KM: int = Field(default=10, ge=0)
    ROUNDING_UNIT_KM: int = Field(default=10, ge=1)
    # Driver accommodation by number of nights; beyond the table the fallback rate applies
    ACCOMMODATION_COSTS: Dict[int, float] = {1: 3000.0, 2: 5000.0, 3: 7000.0}
    ACCOMMODATION_FALLBACK_PER_NIGHT: float = Field(default=2500.0, ge=0)
    CURRENCY_PREFIX: str = "Rs."


settings = Settings()
