"""Redis implementation of RateStore.

Each currency of the latest snapshot is stored in its own hash:

    <prefix>:<CODE>  ->  {"rate": "<float>", "last_update": "<unix seconds>"}

On load, the newest ``last_update`` found becomes the table's refresh time.
"""

from datetime import datetime, timezone

import redis

from unit_converter.config import get_redis_client, settings
from unit_converter.entities import CurrencyUnit, RateTable


def _text(raw: bytes | str) -> str:
    return raw.decode() if isinstance(raw, bytes) else raw


class RedisRateRepository:
    """Redis implementation of the RateStore protocol.

    This class satisfies the RateStore protocol through structural
    typing - no explicit inheritance needed.
    """

    def __init__(
        self,
        redis_client: redis.Redis | None = None,
        key_prefix: str | None = None,
    ) -> None:
        """Initialize the Redis rate repository.

        Args:
            redis_client: Redis client instance. If None, creates default.
            key_prefix: Prefix for the per-currency hashes.
        """
        self._client = redis_client or get_redis_client()
        self._prefix = key_prefix or settings.rates_key_prefix

    @classmethod
    def create(cls, key_prefix: str | None = None) -> "RedisRateRepository":
        """Factory method to create RedisRateRepository with defaults.

        Args:
            key_prefix: Hash key prefix. If None, uses settings.

        Returns:
            Configured RedisRateRepository
        """
        return cls(key_prefix=key_prefix)

    def _key(self, currency: CurrencyUnit) -> str:
        return f"{self._prefix}:{currency.code}"

    def save(self, table: RateTable) -> None:
        """Replace the stored snapshot with the table in one pipeline.

        Hashes of the previous snapshot are deleted in the same transaction,
        so currencies missing from ``table`` do not survive the save.

        Args:
            table: A refreshed rate table
        """
        if table.last_refreshed is None:
            raise ValueError("Cannot persist a rate table that was never refreshed")

        last_update = str(table.last_refreshed.timestamp())
        previous = list(self._client.scan_iter(match=f"{self._prefix}:*"))
        pipe = self._client.pipeline()
        for key in previous:
            pipe.delete(key)
        for currency, rate in table.rates.items():
            pipe.hset(
                self._key(currency),
                mapping={
                    "rate": repr(rate),
                    "last_update": last_update,
                },
            )
        pipe.execute()

    def load(self) -> RateTable | None:
        """Read every stored currency hash back into a table.

        Returns:
            The stored table, or None if no known currency is stored

        Raises:
            ValueError: If a stored hash is incomplete or not numeric
        """
        rates: dict[CurrencyUnit, float] = {}
        newest: float | None = None

        for key in self._client.scan_iter(match=f"{self._prefix}:*"):
            code = _text(key).rsplit(":", 1)[-1]
            currency = CurrencyUnit.from_code(code)
            if currency is None:
                continue

            fields = {_text(k): _text(v) for k, v in self._client.hgetall(key).items()}  # type: ignore[union-attr]
            if "rate" not in fields or "last_update" not in fields:
                raise ValueError(f"Incomplete rate snapshot for {code}")

            rates[currency] = float(fields["rate"])
            last_update = float(fields["last_update"])
            newest = last_update if newest is None else max(newest, last_update)

        if not rates or newest is None:
            return None
        return RateTable(rates=rates, last_refreshed=datetime.fromtimestamp(newest, tz=timezone.utc))

    def clear_all(self) -> int:
        """Delete every stored currency hash.

        Returns:
            Number of hashes deleted
        """
        count = 0
        for key in self._client.scan_iter(match=f"{self._prefix}:*"):
            if self._client.delete(key):
                count += 1
        return count

    def health_check(self) -> bool:
        """Check if Redis is accessible.

        Returns:
            True if healthy, False otherwise
        """
        try:
            result = self._client.ping()
            return bool(result)
        except Exception:
            return False

    @property
    def client(self) -> redis.Redis:
        """Get the Redis client."""
        return self._client
