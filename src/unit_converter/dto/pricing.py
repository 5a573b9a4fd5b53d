"""DTOs for the pricing source's response body."""

from typing import Any

from pydantic import BaseModel, StrictFloat, StrictInt


class LatestRatesPayload(BaseModel):
    """Body of the pricing source's "latest rates" endpoint.

    Every entry in ``rates`` must be a JSON number; strings and booleans
    fail validation for the whole payload. ``timestamp`` is kept raw so the
    caller decides how to treat a missing or malformed value.
    """

    timestamp: Any = None
    base: str | None = None
    rates: dict[str, StrictFloat | StrictInt]

    model_config = {"extra": "allow"}
