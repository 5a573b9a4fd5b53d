"""Protocol interfaces for swappable implementations.

This package contains protocol definitions using structural typing.
Protocols enable:
- Easy swapping of implementations (openexchangerates → another pricing API,
  Redis → SQLite, etc.)
- Unit testing with fake implementations
- Clear separation of concerns

Usage:
    ```python
    from unit_converter.protocols import RateSource, RateStore

    source: RateSource = OpenExchangeRatesSource.create()
    store: RateStore = RedisRateRepository.create()
    ```
"""

from .rate_lookup import RateLookup
from .rate_source import RateSource
from .rate_store import RateStore

__all__ = [
    "RateLookup",
    "RateSource",
    "RateStore",
]
