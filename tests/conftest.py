"""
Shared fixtures and fakes for the converter tests.
"""

import fnmatch
from datetime import datetime, timedelta, timezone

import pytest

from unit_converter.entities import CurrencyUnit, FetchedRates, RateTable
from unit_converter.errors import ApiError
from unit_converter.services import CurrencyRateCache

START = datetime(2024, 6, 1, 12, 0, tzinfo=timezone.utc)

SAMPLE_RATES = {
    CurrencyUnit.USD: 1.0,
    CurrencyUnit.EUR: 0.92,
    CurrencyUnit.JPY: 156.5,
    CurrencyUnit.KRW: 1370.0,
    CurrencyUnit.GBP: 0.79,
    CurrencyUnit.AUD: 1.51,
}


class FakeClock:
    """Controllable replacement for the wall clock."""

    def __init__(self, now: datetime = START) -> None:
        self.now = now

    def __call__(self) -> datetime:
        return self.now

    def advance(self, delta: timedelta) -> None:
        self.now += delta


class FakeRateSource:
    """RateSource that counts calls.

    Each call pops the next queued response (FetchedRates or an exception);
    with nothing queued it returns SAMPLE_RATES stamped with the clock.
    """

    def __init__(self, clock: FakeClock) -> None:
        self.clock = clock
        self.calls = 0
        self.queue: list[FetchedRates | Exception] = []

    def fetch_latest(self) -> FetchedRates:
        self.calls += 1
        if self.queue:
            response = self.queue.pop(0)
            if isinstance(response, Exception):
                raise response
            return response
        return FetchedRates(rates=dict(SAMPLE_RATES), published_at=self.clock())


class InMemoryRateStore:
    """RateStore keeping the last saved table in memory."""

    def __init__(self, table: RateTable | None = None) -> None:
        self.table = table
        self.saves = 0
        self.fail_on_save = False
        self.fail_on_load = False

    def save(self, table: RateTable) -> None:
        if self.fail_on_save:
            raise ConnectionError("store unavailable")
        self.saves += 1
        self.table = table

    def load(self) -> RateTable | None:
        if self.fail_on_load:
            raise ConnectionError("store unavailable")
        return self.table

    def health_check(self) -> bool:
        return not (self.fail_on_save or self.fail_on_load)


class FakeRedis:
    """The subset of redis.Redis used by RedisRateRepository.

    Keys and values are stored as bytes, like a client created with
    decode_responses=False.
    """

    def __init__(self) -> None:
        self.hashes: dict[bytes, dict[bytes, bytes]] = {}

    @staticmethod
    def _bytes(value) -> bytes:
        return value if isinstance(value, bytes) else str(value).encode()

    def hset(self, key, mapping) -> int:
        stored = self.hashes.setdefault(self._bytes(key), {})
        for field, value in mapping.items():
            stored[self._bytes(field)] = self._bytes(value)
        return len(mapping)

    def hgetall(self, key) -> dict[bytes, bytes]:
        return dict(self.hashes.get(self._bytes(key), {}))

    def scan_iter(self, match: str):
        for key in list(self.hashes):
            if fnmatch.fnmatchcase(key.decode(), match):
                yield key

    def delete(self, key) -> int:
        return 1 if self.hashes.pop(self._bytes(key), None) is not None else 0

    def pipeline(self) -> "FakeRedis":
        return self

    def execute(self) -> list:
        return []

    def ping(self) -> bool:
        return True


class StaticRates:
    """RateLookup over a fixed mapping."""

    def __init__(self, rates: dict[CurrencyUnit, float]) -> None:
        self.rates = rates

    def get_base_rate(self, currency: CurrencyUnit) -> float:
        if currency not in self.rates:
            raise ApiError(f"No rate found for currency {currency}")
        return self.rates[currency]


@pytest.fixture
def clock():
    """A clock frozen at START."""
    return FakeClock()


@pytest.fixture
def source(clock):
    """A counting fake pricing source."""
    return FakeRateSource(clock)


@pytest.fixture
def store():
    """An empty in-memory snapshot store."""
    return InMemoryRateStore()


@pytest.fixture
def cache(source, store, clock):
    """A stale cache with a one-week freshness window."""
    return CurrencyRateCache(
        source=source,
        store=store,
        expire_after=timedelta(weeks=1),
        clock=clock,
        strict_timestamps=False,
    )
