"""Pytest configuration and fixtures."""

from unittest.mock import MagicMock

import pytest

from forex_converter.services import (
    BidirectionalController,
    ConversionEngine,
    RateCache,
    Scheduler,
)


class FakeClock:
    """Monotonic clock the tests move by hand (seconds)."""

    def __init__(self) -> None:
        self.ms = 0

    def __call__(self) -> float:
        return self.ms / 1000

    def set_ms(self, ms: int) -> None:
        self.ms = ms

    def advance_ms(self, ms: int) -> None:
        self.ms += ms


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def scheduler(clock):
    return Scheduler(clock=clock)


@pytest.fixture
def cache():
    """Fresh cache per test."""
    return RateCache()


@pytest.fixture
def fetcher():
    """Fetcher double quoting GBP->USD at 1.27, EUR->USD at 1.08 and their inverses."""
    rates = {("GBP", "USD"): 1.27, ("EUR", "USD"): 1.08}

    def fetch_rate(source, target):
        if (source, target) in rates:
            return rates[(source, target)]
        return 1 / rates[(target, source)]

    mock = MagicMock()
    mock.fetch_rate.side_effect = fetch_rate
    return mock


@pytest.fixture
def engine(cache, fetcher):
    return ConversionEngine(cache, fetcher)


@pytest.fixture
def controller(engine, scheduler):
    return BidirectionalController(
        engine,
        scheduler=scheduler,
        debounce_ms=300,
        source_currency="GBP",
        target_currency="USD",
    )
