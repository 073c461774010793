"""
Shared fixtures for TraceVis tests
"""

import asyncio
from typing import Optional, Union

import pytest

from tracevis.models import GeoLookupError, LocationRecord


HEADER = "traceroute to example.com (93.184.216.34), 30 hops max, 60 byte packets"


def make_record(address: str = "93.184.216.34", latitude: float = 37.0,
                longitude: float = -122.0, **extra) -> LocationRecord:
    return LocationRecord(address=address, latitude=latitude,
                          longitude=longitude, **extra)


class StubResolver:
    """Resolver returning canned outcomes per address"""

    def __init__(self, outcomes: dict[str, Union[LocationRecord, Exception, None]],
                 delay: float = 0.0):
        self.outcomes = outcomes
        self.delay = delay
        self.calls: list[str] = []
        self.in_flight = 0
        self.max_in_flight = 0

    async def resolve(self, ip: str) -> Optional[LocationRecord]:
        self.calls.append(ip)
        self.in_flight += 1
        self.max_in_flight = max(self.max_in_flight, self.in_flight)
        try:
            if self.delay:
                await asyncio.sleep(self.delay)
            outcome = self.outcomes.get(ip)
            if outcome is None:
                return None
            if isinstance(outcome, Exception):
                raise outcome
            return outcome
        finally:
            self.in_flight -= 1

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        return False


@pytest.fixture
def example_record() -> LocationRecord:
    return make_record()


@pytest.fixture
def two_hop_resolver() -> StubResolver:
    return StubResolver({
        "10.0.0.99": GeoLookupError("10.0.0.99", "HTTP 404"),
        "93.184.216.34": make_record(),
    })


@pytest.fixture
def two_hop_lines() -> list[str]:
    return [
        HEADER,
        " 1  gateway (10.0.0.99)  1.100 ms  1.020 ms  0.990 ms",
        " 2  * * *",
        " 3  edge.example.net (93.184.216.34)  12.300 ms  12.100 ms  12.500 ms",
    ]
