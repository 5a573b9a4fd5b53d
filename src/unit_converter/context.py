"""Application context: the single owner of the rate cache.

The REPL and the HTTP API each build one context at startup and pass the
cache down explicitly, so there is no module-level cache instance.
"""

from dataclasses import dataclass

from unit_converter.config import Settings, get_redis_client, get_settings
from unit_converter.protocols import RateStore
from unit_converter.repositories import OpenExchangeRatesSource, RedisRateRepository
from unit_converter.services import CurrencyRateCache


@dataclass
class AppContext:
    """Everything a front end needs to run commands."""

    settings: Settings
    rate_cache: CurrencyRateCache

    @classmethod
    def create(cls, settings: Settings | None = None) -> "AppContext":
        """Build the pricing source, the optional store and the cache.

        The cache is seeded from the snapshot store when persistence is
        enabled; an unreachable store only means starting with no rates.
        """
        settings = settings or get_settings()

        source = OpenExchangeRatesSource(base_url=settings.rates_api_url)
        store: RateStore | None = None
        if settings.persistence_enabled:
            store = RedisRateRepository(
                redis_client=get_redis_client(settings),
                key_prefix=settings.rates_key_prefix,
            )

        rate_cache = CurrencyRateCache.create(
            source=source,
            store=store,
            expire_after=settings.expire_after,
            strict_timestamps=settings.rates_strict_timestamp,
        )
        return cls(settings=settings, rate_cache=rate_cache)

    def close(self) -> None:
        """Release network clients held by the pricing source."""
        close = getattr(self.rate_cache.source, "close", None)
        if callable(close):
            close()
