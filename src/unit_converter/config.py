import os
from dataclasses import dataclass
from datetime import timedelta
from functools import lru_cache

import redis
from dotenv import load_dotenv

load_dotenv()

# Read at request time by the pricing source, never stored in Settings.
CREDENTIAL_ENV_VAR = "OPENEXCHANGERATES_APP_ID"


@dataclass(frozen=True)
class Settings:
    """Application settings loaded from environment variables."""

    # Pricing source
    rates_api_url: str = os.getenv("RATES_API_URL", "https://openexchangerates.org/api/latest.json")
    rates_expire_after: int = int(os.getenv("RATES_EXPIRE_AFTER", "604800"))  # 7 days default
    rates_strict_timestamp: bool = os.getenv("RATES_STRICT_TIMESTAMP", "false").lower() == "true"

    # Snapshot store: "redis" or "none"
    rates_store: str = os.getenv("RATES_STORE", "redis")
    rates_key_prefix: str = os.getenv("RATES_KEY_PREFIX", "currency_rates")

    # Redis
    redis_url: str = os.getenv("REDIS_URL", "redis://localhost:6379")
    redis_password: str | None = os.getenv("REDIS_PASSWORD")

    # API
    api_host: str = os.getenv("API_HOST", "0.0.0.0")
    api_port: int = int(os.getenv("API_PORT", "8000"))
    api_reload: bool = os.getenv("API_RELOAD", "true").lower() == "true"

    log_level: str = os.getenv("LOG_LEVEL", "WARNING").upper()

    @property
    def expire_after(self) -> timedelta:
        """Freshness window of the rate table."""
        return timedelta(seconds=self.rates_expire_after)

    @property
    def persistence_enabled(self) -> bool:
        return self.rates_store == "redis"

    def __post_init__(self) -> None:
        """Validate settings after initialization."""
        if self.rates_expire_after <= 0:
            raise ValueError("RATES_EXPIRE_AFTER must be a positive number of seconds")

        if self.rates_store not in ("redis", "none"):
            raise ValueError(f"RATES_STORE must be one of ['redis', 'none'], got {self.rates_store!r}")


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


# Global settings instance
settings = get_settings()


def get_redis_client(config: Settings | None = None) -> redis.Redis:
    """Create a Redis client instance.

    Args:
        config: Settings holding the Redis URL and password. If None, uses
            the global settings.
    """
    config = config or settings
    return redis.from_url(
        config.redis_url,
        password=config.redis_password,
        decode_responses=False,
    )
