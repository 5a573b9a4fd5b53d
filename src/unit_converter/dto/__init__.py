"""Data Transfer Objects for API contracts.

These Pydantic models define the external contracts: the HTTP API and the
pricing source's response body. They are used for validation and
serialization.

Internal domain logic should use entities from the entities package.
"""

from .pricing import LatestRatesPayload
from .requests import CommandRequest, ConvertRequest
from .responses import (
    CommandResponse,
    ConvertResponse,
    HealthCheckResponse,
    RatesResponse,
    UnitItem,
    UnitsResponse,
)

__all__ = [
    "LatestRatesPayload",
    "ConvertRequest",
    "CommandRequest",
    "ConvertResponse",
    "CommandResponse",
    "UnitItem",
    "UnitsResponse",
    "RatesResponse",
    "HealthCheckResponse",
]
