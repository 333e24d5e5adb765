"""Fixtures for market feed tests.

Provides a small fixed seed table, a recording channel that stands in for a
client connection, and a controllable millisecond clock.
"""

import asyncio
from datetime import datetime, timezone
from typing import Any

import pytest

from tickfeed.market.interface import MessageChannel
from tickfeed.market.store import InstrumentStore

SMALL_SEED = {
    "AAPL": {"open": 228.5, "high": 232.4, "low": 227.9, "close": 231.85, "volume": 58_200_000},
    "TSLA": {"open": 405.2, "high": 410.1, "low": 404.1, "close": 409.35, "volume": 23_400_000},
    "MSFT": {"open": 167.8, "high": 170.25, "low": 167.1, "close": 169.95, "volume": 26_800_000},
    "GOOG": {"open": 148.5, "high": 152.3, "low": 147.9, "close": 151.75, "volume": 51_200_000},
    "JPM": {"open": 410.2, "high": 417.4, "low": 409.8, "close": 416.25, "volume": 3_600_000},
}

# 12:00 IST
OPEN_TIME = datetime(2024, 5, 1, 6, 30, tzinfo=timezone.utc)
# 20:00 IST
CLOSED_TIME = datetime(2024, 5, 1, 14, 30, tzinfo=timezone.utc)


class FakeChannel(MessageChannel):
    """Records every sent (event, data) pair."""

    def __init__(self) -> None:
        self.sent: list[tuple[str, Any]] = []

    async def send(self, event: str, data: Any) -> None:
        self.sent.append((event, data))

    def events(self, name: str) -> list[Any]:
        return [data for event, data in self.sent if event == name]


class FailingChannel(MessageChannel):
    """Channel whose transport is already gone."""

    async def send(self, event: str, data: Any) -> None:
        raise ConnectionError("socket closed")


class StalledChannel(MessageChannel):
    """Channel whose sends never complete, like a socket stuck under backpressure."""

    async def send(self, event: str, data: Any) -> None:
        await asyncio.Event().wait()


class YieldingChannel(FakeChannel):
    """Recording channel that gives up control before each send lands."""

    async def send(self, event: str, data: Any) -> None:
        await asyncio.sleep(0)
        await super().send(event, data)


class ManualClock:
    """Millisecond clock that only moves when told to."""

    def __init__(self, start: int = 1_700_000_000_000) -> None:
        self.now = start

    def __call__(self) -> int:
        return self.now

    def advance(self, ms: int) -> None:
        self.now += ms


@pytest.fixture
def store():
    return InstrumentStore(SMALL_SEED, trading_date="2024-05-01", now=OPEN_TIME)


@pytest.fixture
def channel():
    return FakeChannel()


@pytest.fixture
def clock():
    return ManualClock()


@pytest.fixture
def open_time():
    return OPEN_TIME


@pytest.fixture
def closed_time():
    return CLOSED_TIME


@pytest.fixture
def make_channel():
    """Factory for additional recording channels."""
    return FakeChannel


@pytest.fixture
def failing_channel():
    return FailingChannel()


@pytest.fixture
def stalled_channel():
    return StalledChannel()


@pytest.fixture
def yielding_channel():
    return YieldingChannel()
