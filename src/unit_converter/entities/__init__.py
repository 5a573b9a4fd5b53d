"""Domain entities for internal representation.

Pure Python types used by services, repositories and the command layer.
They are NOT used for API contracts - use DTOs from the dto package for
that.

Entities should have:
- No JSON serialization logic
- No Pydantic validation
- No I/O
"""

from .rate_table import CacheStats, FetchedRates, RateTable
from .units import (
    BASE_CURRENCY,
    CurrencyUnit,
    LengthUnit,
    MassUnit,
    NamedUnit,
    Unit,
    UnitFamily,
    get_all_units,
    units_by_family,
)
from .value import Value, format_magnitude

__all__ = [
    "BASE_CURRENCY",
    "CacheStats",
    "CurrencyUnit",
    "FetchedRates",
    "LengthUnit",
    "MassUnit",
    "NamedUnit",
    "RateTable",
    "Unit",
    "UnitFamily",
    "Value",
    "format_magnitude",
    "get_all_units",
    "units_by_family",
]
