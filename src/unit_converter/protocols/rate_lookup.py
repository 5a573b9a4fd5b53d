"""Rate lookup protocol.

The narrow interface the conversion path needs from the rate cache.
"""

from typing import Protocol, runtime_checkable

from unit_converter.entities.units import CurrencyUnit


@runtime_checkable
class RateLookup(Protocol):
    """Anything that can price a currency against the base currency."""

    def get_base_rate(self, currency: CurrencyUnit) -> float:
        """Return units of ``currency`` per one unit of the base currency.

        Args:
            currency: The currency to price

        Returns:
            The exchange rate

        Raises:
            ApiError: If the rate cannot be obtained
        """
        ...
