"""Currency rate cache service.

Holds the latest exchange rate table, decides when it is stale, refreshes
it from the pricing source and writes snapshots to the durable store.

The table is refreshed as a whole: any stale lookup, or a lookup for a
currency missing from a fresh table, replaces every rate with one request.
"""

import logging
import threading
from collections.abc import Callable
from datetime import datetime, timedelta, timezone

from unit_converter.config import settings
from unit_converter.entities import CacheStats, CurrencyUnit, FetchedRates, RateTable
from unit_converter.errors import ApiError, InvalidTimestampError, RateNotFoundError
from unit_converter.protocols import RateSource, RateStore

logger = logging.getLogger(__name__)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class CurrencyRateCache:
    """Time-expiring cache of exchange rates against the base currency.

    This service depends on PROTOCOLS, not concrete implementations:
    - RateSource: openexchangerates.org or any "latest rates" API
    - RateStore: Redis or any key-value snapshot store (optional)

    Two locks keep refreshes and reads apart:
    - the refresh lock serializes network refreshes, so concurrent callers
      wait for one request instead of issuing their own
    - the state lock guards only the table swap and the counters

    Example:
        ```python
        from unit_converter.repositories import OpenExchangeRatesSource, RedisRateRepository
        from unit_converter.services import CurrencyRateCache

        cache = CurrencyRateCache.create(
            source=OpenExchangeRatesSource.create(),
            store=RedisRateRepository.create(),
        )
        eur_per_usd = cache.get_base_rate(CurrencyUnit.EUR)
        ```
    """

    def __init__(
        self,
        source: RateSource,
        store: RateStore | None = None,
        expire_after: timedelta | None = None,
        clock: Callable[[], datetime] | None = None,
        strict_timestamps: bool | None = None,
    ) -> None:
        """Initialize an empty (stale) cache.

        Args:
            source: Pricing source used for refreshes (required).
            store: Durable snapshot store. None disables persistence.
            expire_after: Freshness window. Defaults to settings.
            clock: Returns the current aware UTC time. Defaults to the wall clock.
            strict_timestamps: Fail refreshes whose timestamp is unusable
                instead of falling back to the clock. Defaults to settings.
        """
        self._source = source
        self._store = store
        self._expire_after = settings.expire_after if expire_after is None else expire_after
        self._clock = clock or _utcnow
        self._strict_timestamps = (
            settings.rates_strict_timestamp if strict_timestamps is None else strict_timestamps
        )

        self._table = RateTable.empty()
        self._stats = CacheStats()
        self._state_lock = threading.Lock()
        self._refresh_lock = threading.Lock()

    @classmethod
    def create(
        cls,
        source: RateSource,
        store: RateStore | None = None,
        expire_after: timedelta | None = None,
        clock: Callable[[], datetime] | None = None,
        strict_timestamps: bool | None = None,
    ) -> "CurrencyRateCache":
        """Factory method: build the cache and seed it from the store.

        Args:
            source: Pricing source (required).
            store: Snapshot store. If given, its last snapshot is loaded.
            expire_after: Freshness window. If None, uses settings.
            clock: Current time source. If None, uses the wall clock.
            strict_timestamps: Timestamp policy. If None, uses settings.

        Returns:
            Configured CurrencyRateCache, Fresh if a recent snapshot existed
        """
        cache = cls(
            source=source,
            store=store,
            expire_after=expire_after,
            clock=clock,
            strict_timestamps=strict_timestamps,
        )
        cache.load_snapshot()
        return cache

    def load_snapshot(self) -> bool:
        """Replace the table with the store's last snapshot.

        Missing, unreadable or unreachable snapshots leave the cache as it
        is, which for a new cache means Stale with no rates.

        Returns:
            True if a snapshot was loaded
        """
        if self._store is None:
            return False

        try:
            table = self._store.load()
        except Exception as e:
            logger.warning("Could not load rate snapshot, starting empty: %s", e)
            return False

        if table is None:
            logger.info("No rate snapshot found, rates will be fetched on first use")
            return False

        with self._state_lock:
            self._table = table
        logger.info("Loaded %d rates from snapshot published at %s", len(table), table.last_refreshed)
        return True

    def get_base_rate(self, currency: CurrencyUnit) -> float:
        """Return units of ``currency`` per one unit of the base currency.

        Refreshes the whole table first when it is stale or does not
        contain ``currency``.

        Args:
            currency: The currency to price

        Returns:
            The exchange rate

        Raises:
            RateNotFoundError: If a fresh refresh still has no rate for it
            ApiError: If the refresh fails
        """
        seen = self.table
        rate = seen.get(currency)
        if rate is not None and seen.is_fresh(self._clock(), self._expire_after):
            with self._state_lock:
                self._stats.record_hit()
            return rate

        with self._state_lock:
            self._stats.record_miss()

        with self._refresh_lock:
            current = self.table
            if current is not seen and current.is_fresh(self._clock(), self._expire_after):
                # Refreshed by another caller while we waited for the lock.
                table = current
            else:
                table = self._refresh_locked()

        rate = table.get(currency)
        if rate is None:
            raise RateNotFoundError(currency)
        return rate

    def refresh(self) -> RateTable:
        """Fetch the whole table from the pricing source now.

        Returns:
            The new table

        Raises:
            ApiError: If fetching or parsing fails; the previous table is kept
        """
        with self._refresh_lock:
            return self._refresh_locked()

    def _refresh_locked(self) -> RateTable:
        try:
            fetched = self._source.fetch_latest()
            published_at = self._published_at(fetched)
        except ApiError as e:
            with self._state_lock:
                self._stats.refresh_failures += 1
            logger.warning("Rate refresh failed: %s", e)
            raise

        table = RateTable(rates=fetched.rates, last_refreshed=published_at)
        with self._state_lock:
            self._table = table
            self._stats.refreshes += 1
        logger.info("Refreshed %d rates published at %s", len(table), published_at)

        self._persist(table)
        return table

    def _published_at(self, fetched: FetchedRates) -> datetime:
        if fetched.published_at is not None:
            return fetched.published_at
        if self._strict_timestamps:
            raise InvalidTimestampError("Pricing response has no usable timestamp")
        logger.warning("Pricing response has no usable timestamp, using local time")
        return self._clock()

    def _persist(self, table: RateTable) -> None:
        if self._store is None:
            return
        try:
            self._store.save(table)
        except Exception as e:
            with self._state_lock:
                self._stats.persist_failures += 1
            logger.warning("Could not persist rate snapshot: %s", e)

    def is_fresh(self) -> bool:
        """Whether the table is inside its freshness window right now."""
        return self.table.is_fresh(self._clock(), self._expire_after)

    def get_stats(self) -> dict:
        """Get cache statistics.

        Returns:
            Dictionary with counters and table state
        """
        table = self.table
        with self._state_lock:
            stats: dict = self._stats.to_dict()
        stats["currencies"] = len(table)
        stats["last_refreshed"] = table.last_refreshed.timestamp() if table.last_refreshed else None
        stats["is_fresh"] = self.is_fresh()
        stats["expire_after_seconds"] = int(self._expire_after.total_seconds())
        stats["persistence"] = self._store is not None
        return stats

    @property
    def table(self) -> RateTable:
        """The current rate table snapshot."""
        with self._state_lock:
            return self._table

    @property
    def last_refreshed(self) -> datetime | None:
        return self.table.last_refreshed

    @property
    def expire_after(self) -> timedelta:
        return self._expire_after

    @property
    def stats(self) -> CacheStats:
        return self._stats

    @property
    def source(self) -> RateSource:
        """Get the underlying pricing source (for testing)."""
        return self._source

    @property
    def store(self) -> RateStore | None:
        """Get the underlying snapshot store (for testing)."""
        return self._store
