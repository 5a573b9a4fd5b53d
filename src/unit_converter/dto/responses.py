"""Response DTOs for API endpoints."""

from pydantic import BaseModel, Field


class ConvertResponse(BaseModel):
    """Response DTO for a conversion."""

    value: float = Field(..., description="The converted magnitude")
    unit: str = Field(..., description="Display name of the target unit")
    display: str = Field(..., description="Rendered result, e.g. '0.1 kilometer (km)'")


class CommandResponse(BaseModel):
    """Response DTO for a text command."""

    output: str = Field(..., description="Exactly what the interactive prompt would print")


class UnitItem(BaseModel):
    """Single unit in a listing."""

    family: str = Field(..., description="Unit family: length, mass or currency")
    long_name: str = Field(..., description="Long name, e.g. 'kilometer'")
    short_name: str = Field(..., description="Short name, e.g. 'km'")
    is_base: bool = Field(..., description="Whether this is the family's base unit")


class UnitsResponse(BaseModel):
    """Response DTO for the unit listing."""

    units: list[UnitItem] = Field(
        default_factory=list,
        description="Every unit, grouped by family in declaration order",
    )


class RatesResponse(BaseModel):
    """Response DTO for the cached rate table."""

    base: str = Field(..., description="Currency all rates are priced against")
    rates: dict[str, float] = Field(default_factory=dict, description="Currency code to rate")
    last_refreshed: float | None = Field(
        None,
        description="When the table was published (Unix timestamp), null if never refreshed",
    )
    is_fresh: bool = Field(..., description="Whether the table is inside its freshness window")
    expire_after_seconds: int = Field(..., description="Length of the freshness window", ge=1)


class HealthCheckResponse(BaseModel):
    """Response DTO for health check."""

    status: str = Field(..., description="Health status: 'healthy' or 'degraded'")
    rates_fresh: bool = Field(..., description="Whether the rate table is currently fresh")
    store_healthy: bool | None = Field(
        None,
        description="Whether the snapshot store is reachable, null when persistence is disabled",
    )
