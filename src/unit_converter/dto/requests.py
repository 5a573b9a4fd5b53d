"""Request DTOs for API endpoints."""

from pydantic import BaseModel, Field


class ConvertRequest(BaseModel):
    """Request DTO for converting a value.

    The handler will parse both unit names and convert through the entities.
    """

    value: float = Field(..., description="The magnitude to convert", ge=0.0)
    from_unit: str = Field(..., description="Long or short name of the source unit", min_length=1)
    to_unit: str = Field(..., description="Long or short name of the target unit", min_length=1)


class CommandRequest(BaseModel):
    """Request DTO for running one line of the text command language."""

    input: str = Field(
        ...,
        description="A command such as '100 m -> km' or 'units'",
        min_length=1,
    )
