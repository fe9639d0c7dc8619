# app/models/routing.py

from datetime import date
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, computed_field, field_validator

from app.core.config import settings
from app.services.formatting import parse_clock, round_half_up


class RouteOptions(BaseModel):
    """
    Trip options that shape the route estimate.

    If is_round_trip is set, the first stop is appended as an implicit final stop.
    """
    is_round_trip: bool = False
    start_time: str = "09:00"
    # Optional calendar date, only used to report the end date of multi-day trips.
    start_date: Optional[date] = None
    dwell_hours_per_intermediate_stop: float = Field(
        default_factory=lambda: settings.DWELL_HOURS_PER_INTERMEDIATE_STOP,
        ge=0,
    )

    @field_validator("start_time")
    @classmethod
    def _check_start_time(cls, value: str) -> str:
        hours, minutes = parse_clock(value)
        return f"{hours:02d}:{minutes:02d}"


class Segment(BaseModel):
    """
    One leg of the route between two consecutive stops, as reported by the
    distance provider. Never mutated after creation.
    """
    model_config = ConfigDict(frozen=True)

    index: int
    from_stop: str
    to_stop: str
    distance_m: int
    duration_s: int

    @computed_field
    @property
    def distance_km(self) -> int:
        return round_half_up(self.distance_m / 1000)

    @computed_field
    @property
    def duration_minutes(self) -> int:
        return round_half_up(self.duration_s / 60)


class Schedule(BaseModel):
    """
    Derived trip schedule.

    estimated_end_time wraps around midnight; end_day_offset says how many
    midnights were crossed, and estimated_end_date is filled in when the
    trip's start date is known.
    """
    start_time: str
    estimated_end_time: str
    end_day_offset: int = 0
    estimated_end_date: Optional[date] = None
    days_needed: int


class Feasibility(BaseModel):
    """
    Driving time vs. stop time vs. total, both as numbers and display strings.
    """
    trip_type: str
    distance: str
    driving_hours: float
    stop_hours: float
    total_hours: float
    driving_time: str
    stop_time: str
    total_duration: str
    within_one_day: bool
    recommendation: str


class RouteResult(BaseModel):
    """
    Aggregate of all segments for one route estimate.

    total_duration_hours = driving time of all segments + dwell overhead.
    """
    stops: List[str]
    is_round_trip: bool
    segments: List[Segment]
    total_distance_m: int
    total_distance_km: int
    total_duration_hours: float
    dwell_hours: float
    schedule: Schedule
    feasibility: Feasibility


class RouteEstimateRequest(BaseModel):
    """
    Request body for the /route/estimate endpoint.
    """
    stops: List[str]
    options: RouteOptions = Field(default_factory=RouteOptions)
