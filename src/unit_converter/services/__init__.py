"""Service layer for business logic.

This layer contains the core business logic and orchestration.
Services depend on protocols (interfaces), not concrete implementations,
making them testable and flexible.

Architecture:
    Handler / CLI -> Command layer -> Entities -> CurrencyRateCache -> Repositories
    (HTTP / REPL)    (Parsing)        (Arithmetic)  (Freshness)        (API, Redis)

Usage:
    ```python
    from unit_converter.services import CurrencyRateCache

    cache = CurrencyRateCache.create(source=source, store=store)
    ```
"""

from .rate_cache import CurrencyRateCache

__all__ = [
    "CurrencyRateCache",
]
