# app/services/route_estimator.py

import asyncio
import math
from datetime import timedelta
from time import perf_counter
from typing import List, Optional, Sequence

from app.core.config import settings
from app.core.errors import InvalidRouteInputError, SegmentUnavailableError
from app.core.logger import logger
from app.models.routing import Feasibility, RouteOptions, RouteResult, Schedule, Segment
from app.services.distance_provider import (
    DistanceMatrixClient,
    DistanceProvider,
    DistanceProviderError,
)
from app.services.formatting import (
    add_hours_to_clock,
    format_duration,
    parse_clock,
    round_half_up,
)


class RouteEstimator:
    """
    Route segmentation and schedule estimation:
    - validates the stop list
    - asks the distance provider for every consecutive pair of stops
    - adds dwell overhead for intermediate stops
    - derives schedule (end time, days needed) and feasibility
    """

    def __init__(
        self,
        provider: DistanceProvider | None = None,
        segment_timeout_s: float | None = None,
        max_concurrent_segments: int | None = None,
        daily_budget_hours: float | None = None,
        max_single_trip_hours: float | None = None,
    ) -> None:
        self.provider = provider or DistanceMatrixClient()
        self.segment_timeout_s = (
            settings.SEGMENT_TIMEOUT_SECONDS if segment_timeout_s is None else segment_timeout_s
        )
        self.max_concurrent_segments = (
            settings.MAX_CONCURRENT_SEGMENTS
            if max_concurrent_segments is None
            else max_concurrent_segments
        )
        self.daily_budget_hours = (
            settings.DAILY_DRIVING_BUDGET_HOURS if daily_budget_hours is None else daily_budget_hours
        )
        self.max_single_trip_hours = (
            settings.MAX_SINGLE_TRIP_HOURS if max_single_trip_hours is None else max_single_trip_hours
        )

        if self.segment_timeout_s <= 0:
            raise ValueError("segment_timeout_s must be positive")
        if self.max_concurrent_segments < 1:
            raise ValueError("max_concurrent_segments must be at least 1")
        if self.daily_budget_hours <= 0:
            raise ValueError("daily_budget_hours must be positive")

    # ------------------------------------------------------------------ #
    # Public API
    # ------------------------------------------------------------------ #

    async def estimate_route(
        self,
        stops: Sequence[str],
        options: Optional[RouteOptions] = None,
    ) -> RouteResult:
        """
        Estimate distance, duration and schedule for an ordered list of stops.

        1. Validate stops and options (no provider call on bad input).
        2. Append the origin for round trips.
        3. Resolve every leg through the provider, concurrently, keeping order.
        4. Add dwell time for each intermediate stop.
        5. Derive schedule and feasibility.

        Raises InvalidRouteInputError or SegmentUnavailableError.
        """
        options = options or RouteOptions()
        t0 = perf_counter()

        route_stops = self._validate_stops(stops)
        self._validate_options(options)

        if options.is_round_trip:
            route_stops.append(route_stops[0])

        logger.info(
            f"Estimating {'return' if options.is_round_trip else 'one-way'} route "
            f"through {len(route_stops)} stops: {' -> '.join(route_stops)}"
        )

        segments = await self._resolve_segments(route_stops)

        intermediate_stops = max(0, len(route_stops) - 2)
        dwell_hours = options.dwell_hours_per_intermediate_stop * intermediate_stops

        total_distance_m = sum(seg.distance_m for seg in segments)
        driving_s = sum(seg.duration_s for seg in segments)
        total_duration_s = driving_s + dwell_hours * 3600

        total_distance_km = round_half_up(total_distance_m / 1000)
        total_duration_hours = total_duration_s / 3600
        driving_hours = driving_s / 3600

        schedule = self._build_schedule(options, total_duration_hours)
        feasibility = self._build_feasibility(
            options.is_round_trip,
            total_distance_km,
            driving_hours,
            dwell_hours,
            total_duration_hours,
        )

        logger.info(
            f"Route summary: {total_distance_km} km, {total_duration_hours:.2f} h "
            f"({dwell_hours:g} h dwell), {schedule.days_needed} day(s), "
            f"computed in {(perf_counter() - t0) * 1000.0:.2f} ms"
        )

        return RouteResult(
            stops=route_stops,
            is_round_trip=options.is_round_trip,
            segments=segments,
            total_distance_m=total_distance_m,
            total_distance_km=total_distance_km,
            total_duration_hours=total_duration_hours,
            dwell_hours=dwell_hours,
            schedule=schedule,
            feasibility=feasibility,
        )

    def days_needed(self, total_duration_hours: float) -> int:
        if total_duration_hours > self.daily_budget_hours:
            return math.ceil(total_duration_hours / self.daily_budget_hours)
        return 1

    # ------------------------------------------------------------------ #
    # Internal helpers
    # ------------------------------------------------------------------ #

    @staticmethod
    def _validate_stops(stops: Sequence[str]) -> List[str]:
        if stops is None or len(stops) < 2:
            raise InvalidRouteInputError("At least origin and one destination are required")

        cleaned: List[str] = []
        for position, stop in enumerate(stops):
            text = stop.strip() if isinstance(stop, str) else ""
            if not text:
                if position == 0:
                    raise InvalidRouteInputError("Please enter a pickup location")
                raise InvalidRouteInputError(f"Destination {position} is empty")
            cleaned.append(text)
        return cleaned

    @staticmethod
    def _validate_options(options: RouteOptions) -> None:
        try:
            parse_clock(options.start_time)
        except ValueError as e:
            raise InvalidRouteInputError(str(e)) from e

        dwell = options.dwell_hours_per_intermediate_stop
        if not math.isfinite(dwell) or dwell < 0:
            raise InvalidRouteInputError("Dwell hours per stop must be a non-negative number")

    async def _resolve_segments(self, route_stops: List[str]) -> List[Segment]:
        """
        Fetch every leg concurrently. The first failure cancels the legs still
        in flight; the earliest failing leg in route order is reported.
        """
        semaphore = asyncio.Semaphore(self.max_concurrent_segments)
        tasks = [
            asyncio.create_task(self._fetch_segment(index, origin, destination, semaphore))
            for index, (origin, destination) in enumerate(
                zip(route_stops[:-1], route_stops[1:]), start=1
            )
        ]

        try:
            await asyncio.wait(tasks, return_when=asyncio.FIRST_EXCEPTION)
        finally:
            pending = [task for task in tasks if not task.done()]
            for task in pending:
                task.cancel()
            if pending:
                await asyncio.gather(*pending, return_exceptions=True)

        for task in tasks:
            if task.cancelled():
                continue
            error = task.exception()
            if error is not None:
                logger.warning(f"Route estimate aborted: {error}")
                raise error

        return [task.result() for task in tasks]

    async def _fetch_segment(
        self,
        index: int,
        origin: str,
        destination: str,
        semaphore: asyncio.Semaphore,
    ) -> Segment:
        async with semaphore:
            t0 = perf_counter()
            try:
                result = await asyncio.wait_for(
                    self.provider.segment_distance(origin, destination),
                    timeout=self.segment_timeout_s,
                )
            except asyncio.TimeoutError:
                raise SegmentUnavailableError(
                    origin, destination, f"timed out after {self.segment_timeout_s:g} s"
                ) from None
            except DistanceProviderError as e:
                raise SegmentUnavailableError(origin, destination, str(e)) from e
            except Exception as e:
                # Anything else the provider raises still names the leg
                raise SegmentUnavailableError(
                    origin, destination, str(e) or type(e).__name__
                ) from e

        logger.info(
            f"Segment {index}: {origin} -> {destination} = {result.distance_m} m, "
            f"{result.duration_s} s ({(perf_counter() - t0) * 1000.0:.2f} ms)"
        )
        return Segment(
            index=index,
            from_stop=origin,
            to_stop=destination,
            distance_m=result.distance_m,
            duration_s=result.duration_s,
        )

    def _build_schedule(self, options: RouteOptions, total_duration_hours: float) -> Schedule:
        end_time, day_offset = add_hours_to_clock(options.start_time, total_duration_hours)
        end_date = None
        if options.start_date is not None:
            end_date = options.start_date + timedelta(days=day_offset)

        return Schedule(
            start_time=options.start_time,
            estimated_end_time=end_time,
            end_day_offset=day_offset,
            estimated_end_date=end_date,
            days_needed=self.days_needed(total_duration_hours),
        )

    def _build_feasibility(
        self,
        is_round_trip: bool,
        total_distance_km: int,
        driving_hours: float,
        dwell_hours: float,
        total_duration_hours: float,
    ) -> Feasibility:
        if total_duration_hours > self.daily_budget_hours:
            recommendation = "This trip will require overnight accommodation"
        else:
            recommendation = "This trip can be completed in one day"

        return Feasibility(
            trip_type="Return Trip" if is_round_trip else "One-way Trip",
            distance=f"{total_distance_km} km",
            driving_hours=driving_hours,
            stop_hours=dwell_hours,
            total_hours=total_duration_hours,
            driving_time=format_duration(driving_hours),
            stop_time=format_duration(dwell_hours),
            total_duration=format_duration(total_duration_hours),
            within_one_day=total_duration_hours <= self.max_single_trip_hours,
            recommendation=recommendation,
        )
