"""HTTP handlers for conversion and rate operations.

Handlers convert between DTOs (API contracts) and entity/service calls.
They handle HTTP concerns like status codes and error mapping.
"""

from fastapi import HTTPException, status

from unit_converter.commands import run_command
from unit_converter.dto import (
    CommandRequest,
    CommandResponse,
    ConvertRequest,
    ConvertResponse,
    HealthCheckResponse,
    RatesResponse,
    UnitItem,
    UnitsResponse,
)
from unit_converter.entities import BASE_CURRENCY, RateTable, Unit, Value, get_all_units
from unit_converter.errors import ApiError, ConversionError, CurrencyRateError, ParseError
from unit_converter.services import CurrencyRateCache


class ConversionHandler:
    """HTTP handlers for the converter.

    This handler delegates business logic to the entities and the
    CurrencyRateCache and handles HTTP-specific concerns like:
    - Converting entities to DTOs
    - Setting appropriate status codes
    - Error handling and responses

    Error mapping:
    - ParseError -> 400
    - CurrencyRateError / ApiError -> 502 (the pricing source failed)
    - ConversionError -> 422
    """

    def __init__(self, rate_cache: CurrencyRateCache) -> None:
        """Initialize the conversion handler.

        Args:
            rate_cache: The process-wide rate cache (required).
        """
        self._rates = rate_cache

    def convert(self, request: ConvertRequest) -> ConvertResponse:
        """Handle POST /convert requests.

        Raises:
            HTTPException: 400 for unknown units, 422 for impossible
                conversions, 502 when currency rates are unavailable
        """
        try:
            source = Unit.parse(request.from_unit)
            target = Unit.parse(request.to_unit)
            result = Value(request.value, source).convert_to(target, self._rates)
        except ParseError as e:
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e)) from e
        except CurrencyRateError as e:
            raise HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail=str(e)) from e
        except ConversionError as e:
            raise HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=str(e)) from e

        return ConvertResponse(
            value=result.magnitude,
            unit=str(result.unit),
            display=str(result),
        )

    def run_command(self, request: CommandRequest) -> CommandResponse:
        """Handle POST /command requests.

        Always 200: errors are part of the rendered output, as in the REPL.
        """
        return CommandResponse(output=run_command(request.input, self._rates))

    def list_units(self) -> UnitsResponse:
        """Handle GET /units requests."""
        return UnitsResponse(
            units=[
                UnitItem(
                    family=unit.family.value,
                    long_name=unit.member.long_name,
                    short_name=unit.member.short_name,
                    is_base=unit.is_base,
                )
                for unit in get_all_units()
            ]
        )

    def get_rates(self) -> RatesResponse:
        """Handle GET /rates requests without triggering a refresh."""
        return self._rates_response(self._rates.table)

    def refresh_rates(self) -> RatesResponse:
        """Handle POST /rates/refresh requests.

        Raises:
            HTTPException: 502 if the pricing source fails
        """
        try:
            table = self._rates.refresh()
        except ApiError as e:
            raise HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail=str(e)) from e
        return self._rates_response(table)

    def _rates_response(self, table: RateTable) -> RatesResponse:
        return RatesResponse(
            base=BASE_CURRENCY.code,
            rates={currency.code: rate for currency, rate in table.rates.items()},
            last_refreshed=table.last_refreshed.timestamp() if table.last_refreshed else None,
            is_fresh=self._rates.is_fresh(),
            expire_after_seconds=int(self._rates.expire_after.total_seconds()),
        )

    def health_check(self) -> HealthCheckResponse:
        """Handle GET /health requests.

        The service is degraded, not down, when the snapshot store is
        unreachable: conversions still work from memory.
        """
        store = self._rates.store
        store_healthy = store.health_check() if store is not None else None

        return HealthCheckResponse(
            status="degraded" if store_healthy is False else "healthy",
            rates_fresh=self._rates.is_fresh(),
            store_healthy=store_healthy,
        )
