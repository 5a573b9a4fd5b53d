"""Pricing source protocol.

Defines the interface for any remote service that publishes the latest
exchange rates for all currencies in a single request.

Implementations can include:
- openexchangerates.org (default)
- Any "latest, all rates" endpoint priced against one base currency
"""

from typing import Protocol, runtime_checkable

from unit_converter.entities import FetchedRates


@runtime_checkable
class RateSource(Protocol):
    """Protocol for remote pricing sources.

    Example:
        ```python
        from unit_converter.protocols import RateSource

        source: RateSource = OpenExchangeRatesSource.create()
        fetched = source.fetch_latest()
        ```
    """

    def fetch_latest(self) -> FetchedRates:
        """Fetch the whole rate table in one request.

        Returns:
            FetchedRates with every recognized currency and the source timestamp

        Raises:
            MissingCredentialError: If the credential is not configured
            InvalidRateFormatError: If any rate entry is not a number
            ApiError: On transport errors, non-2xx responses or malformed bodies
        """
        ...
