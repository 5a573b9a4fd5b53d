"""Exchange rate table domain entities."""

from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import datetime, timedelta
from types import MappingProxyType

from unit_converter.entities.units import CurrencyUnit


@dataclass(frozen=True)
class RateTable:
    """Every known rate against the base currency, refreshed as one unit.

    The whole table shares a single ``last_refreshed`` timestamp. A table
    that was never refreshed has ``last_refreshed = None`` and no rates.

    Attributes:
        rates: Units of each currency per one unit of the base currency
        last_refreshed: When the pricing source published these rates (UTC)
    """

    rates: Mapping[CurrencyUnit, float] = field(default_factory=dict)
    last_refreshed: datetime | None = None

    def __post_init__(self) -> None:
        if self.last_refreshed is None and self.rates:
            raise ValueError("A rate table without a refresh timestamp must be empty")
        object.__setattr__(self, "rates", MappingProxyType(dict(self.rates)))

    @classmethod
    def empty(cls) -> "RateTable":
        return cls()

    def is_fresh(self, now: datetime, expire_after: timedelta) -> bool:
        """True when refreshed less than ``expire_after`` before ``now``."""
        if self.last_refreshed is None:
            return False
        return now - self.last_refreshed < expire_after

    def get(self, currency: CurrencyUnit) -> float | None:
        return self.rates.get(currency)

    def __len__(self) -> int:
        return len(self.rates)


@dataclass(frozen=True)
class FetchedRates:
    """The parsed result of one request to the pricing source.

    Attributes:
        rates: Recognized currencies and their rates
        published_at: Source timestamp, or None when missing or unparsable
    """

    rates: Mapping[CurrencyUnit, float]
    published_at: datetime | None = None


@dataclass
class CacheStats:
    """Counters for rate cache activity."""

    lookups: int = 0
    hits: int = 0
    misses: int = 0
    refreshes: int = 0
    refresh_failures: int = 0
    persist_failures: int = 0

    @property
    def hit_rate(self) -> float:
        """Fraction of lookups answered without a refresh."""
        if self.lookups == 0:
            return 0.0
        return self.hits / self.lookups

    def record_hit(self) -> None:
        self.lookups += 1
        self.hits += 1

    def record_miss(self) -> None:
        self.lookups += 1
        self.misses += 1

    def to_dict(self) -> dict[str, float | int]:
        return {
            "lookups": self.lookups,
            "hits": self.hits,
            "misses": self.misses,
            "hit_rate": self.hit_rate,
            "refreshes": self.refreshes,
            "refresh_failures": self.refresh_failures,
            "persist_failures": self.persist_failures,
        }
