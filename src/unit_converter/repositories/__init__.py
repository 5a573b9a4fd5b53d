"""Repository layer for data access.

This layer abstracts external dependencies (the pricing API, Redis) behind
protocol-based interfaces. This enables:
- Easy swapping of implementations
- Unit testing with fake implementations
- Clear separation of concerns

The repositories are protocol-based (structural typing), not inheritance-based.
Any class implementing the required methods will satisfy the protocol.
"""

from unit_converter.protocols import RateSource, RateStore

from .openexchangerates_source import OpenExchangeRatesSource
from .redis_repository import RedisRateRepository

__all__ = [
    "RateSource",
    "RateStore",
    "OpenExchangeRatesSource",
    "RedisRateRepository",
]
