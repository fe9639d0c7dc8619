# tests/conftest.py
import asyncio
import os
import sys

import pytest

# Add the project root directory to sys.path so that "import app" works
PROJECT_ROOT = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
if PROJECT_ROOT not in sys.path:
    sys.path.insert(0, PROJECT_ROOT)

from app.services.distance_provider import SegmentDistance  # noqa: E402


class FakeDistanceProvider:
    """
    In-memory distance provider.

    legs maps (origin, destination) to a SegmentDistance or an exception to
    raise; delays maps the same keys to seconds to sleep before answering.
    """

    def __init__(self, legs, delays=None):
        self.legs = legs
        self.delays = delays or {}
        self.calls = []
        self.cancelled = []

    async def segment_distance(self, origin, destination):
        key = (origin, destination)
        self.calls.append(key)
        try:
            delay = self.delays.get(key)
            if delay:
                await asyncio.sleep(delay)
        except asyncio.CancelledError:
            self.cancelled.append(key)
            raise

        outcome = self.legs[key]
        if isinstance(outcome, Exception):
            raise outcome
        return outcome


# Sri Lanka legs used across tests: (metres, seconds)
SRI_LANKA_LEGS = {
    ("Colombo", "Kandy"): SegmentDistance(distance_m=115_000, duration_s=10_800),
    ("Kandy", "Ella"): SegmentDistance(distance_m=140_000, duration_s=14_400),
    ("Kandy", "Colombo"): SegmentDistance(distance_m=115_000, duration_s=10_800),
    ("Ella", "Colombo"): SegmentDistance(distance_m=200_000, duration_s=21_600),
}


@pytest.fixture
def sri_lanka_provider():
    return FakeDistanceProvider(dict(SRI_LANKA_LEGS))


@pytest.fixture
def make_provider():
    return FakeDistanceProvider
