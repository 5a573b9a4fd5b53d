"""Unit Converter - length, mass and currency conversion from text expressions.

This package provides a layered architecture around a conversion engine:

Layers:
    - entities: Unit families, units, values and the rate table
    - protocols: Interface contracts (RateSource, RateStore, RateLookup)
    - repositories: Pricing source and snapshot store implementations
    - services: The currency rate cache
    - commands: The text command language
    - handlers / api: HTTP endpoints
    - cli: The interactive prompt

Usage:
    ```python
    from unit_converter import AppContext, run_command

    context = AppContext.create()
    print(run_command("100 m -> km", context.rate_cache))  # 0.1 kilometer (km)
    ```

For HTTP API:
    ```python
    from unit_converter.api.app import app
    ```
"""

from unit_converter.commands import parse_command, run_command
from unit_converter.config import get_redis_client, settings
from unit_converter.context import AppContext
from unit_converter.entities import CurrencyUnit, LengthUnit, MassUnit, Unit, UnitFamily, Value, get_all_units
from unit_converter.errors import ApiError, ConversionError, ConverterError, ParseError
from unit_converter.protocols import RateLookup, RateSource, RateStore
from unit_converter.repositories import OpenExchangeRatesSource, RedisRateRepository
from unit_converter.services import CurrencyRateCache

__all__ = [
    # Configuration
    "settings",
    "get_redis_client",
    "AppContext",
    # Entities
    "Unit",
    "UnitFamily",
    "LengthUnit",
    "MassUnit",
    "CurrencyUnit",
    "Value",
    "get_all_units",
    # Commands
    "parse_command",
    "run_command",
    # Errors
    "ConverterError",
    "ParseError",
    "ConversionError",
    "ApiError",
    # Protocols (interfaces)
    "RateLookup",
    "RateSource",
    "RateStore",
    # Services (business logic)
    "CurrencyRateCache",
    # Repositories (data access)
    "OpenExchangeRatesSource",
    "RedisRateRepository",
]
