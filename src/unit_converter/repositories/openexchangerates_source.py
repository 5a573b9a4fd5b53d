"""openexchangerates.org pricing source.

Fetches the latest rates for every currency in one request:

    GET https://openexchangerates.org/api/latest.json?app_id=<APP_ID>

Response body:

    {"timestamp": 1717000000, "base": "USD", "rates": {"EUR": 0.92, ...}}

Key points:
- The credential is read from the environment on every request, so a key
  exported after startup is picked up on the next refresh
- Currencies the converter does not know are skipped
- A single non-numeric entry fails the whole response, as does a
  non-positive or out-of-range rate for a known currency
"""

import logging
import math
import os
from datetime import datetime, timezone
from typing import Any

import httpx
from pydantic import ValidationError

from unit_converter.config import CREDENTIAL_ENV_VAR, settings
from unit_converter.dto import LatestRatesPayload
from unit_converter.entities import CurrencyUnit, FetchedRates
from unit_converter.errors import ApiError, InvalidRateFormatError, MissingCredentialError

logger = logging.getLogger(__name__)


def parse_timestamp(raw: Any) -> datetime | None:
    """Interpret the payload timestamp as Unix seconds.

    Returns:
        An aware UTC datetime, or None if ``raw`` is not an integral number
    """
    if isinstance(raw, bool) or not isinstance(raw, (int, float)):
        return None
    if isinstance(raw, float) and not raw.is_integer():
        return None
    try:
        return datetime.fromtimestamp(int(raw), tz=timezone.utc)
    except (OverflowError, OSError, ValueError):
        return None


def _positive_rate(code: str, rate: float | int) -> float:
    try:
        value = float(rate)
    except OverflowError as e:
        raise InvalidRateFormatError(f"Rate for {code} is out of range") from e
    if not math.isfinite(value) or value <= 0:
        raise InvalidRateFormatError(f"Non-positive or non-finite rate for {code}: {value}")
    return value


class OpenExchangeRatesSource:
    """openexchangerates.org implementation of the RateSource protocol.

    This class satisfies the RateSource protocol through structural
    typing - no explicit inheritance needed.

    Example:
        ```python
        source = OpenExchangeRatesSource.create()
        fetched = source.fetch_latest()
        print(fetched.rates[CurrencyUnit.EUR])
        ```
    """

    def __init__(
        self,
        base_url: str | None = None,
        app_id: str | None = None,
        credential_env_var: str = CREDENTIAL_ENV_VAR,
        client: httpx.Client | None = None,
    ) -> None:
        """Initialize the pricing source.

        Args:
            base_url: Endpoint URL. Defaults to settings.rates_api_url.
            app_id: Explicit credential. If None, read from the environment per request.
            credential_env_var: Environment variable holding the credential.
            client: httpx client to use. If None, one is created lazily.
        """
        self._base_url = base_url or settings.rates_api_url
        self._app_id = app_id
        self._credential_env_var = credential_env_var
        self._client = client

    @classmethod
    def create(cls, base_url: str | None = None) -> "OpenExchangeRatesSource":
        """Factory method to create OpenExchangeRatesSource with defaults.

        Args:
            base_url: Endpoint URL. If None, uses settings.

        Returns:
            Configured OpenExchangeRatesSource
        """
        return cls(base_url=base_url)

    @property
    def client(self) -> httpx.Client:
        """Lazy-load the HTTP client.

        Returns:
            The httpx.Client instance
        """
        if self._client is None:
            self._client = httpx.Client()
        return self._client

    @property
    def base_url(self) -> str:
        return self._base_url

    def _credential(self) -> str:
        app_id = self._app_id or os.getenv(self._credential_env_var)
        if not app_id:
            raise MissingCredentialError(self._credential_env_var)
        return app_id

    def fetch_latest(self) -> FetchedRates:
        """Fetch and validate the latest rate table.

        Returns:
            FetchedRates with every recognized currency

        Raises:
            MissingCredentialError: If no credential is configured
            InvalidRateFormatError: If a rate is non-numeric, or not positive and finite
            ApiError: On transport failure, non-2xx status or malformed body
        """
        params = {"app_id": self._credential()}

        try:
            response = self.client.get(self._base_url, params=params)
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            raise ApiError(
                f"Pricing source returned HTTP {e.response.status_code}: {e.response.text[:200]}"
            ) from e
        except httpx.HTTPError as e:
            raise ApiError(f"Could not reach pricing source: {e.__class__.__name__}: {e}") from e

        return self.parse_payload(response.content)

    @staticmethod
    def parse_payload(body: bytes | str) -> FetchedRates:
        """Validate a response body and keep the currencies we know.

        Args:
            body: Raw JSON response body

        Returns:
            FetchedRates; ``published_at`` is None when the timestamp is unusable

        Raises:
            InvalidRateFormatError: If any rate entry is non-numeric, or a known
                currency has a rate that is not positive and finite
            ApiError: If the body is not JSON or has no ``rates`` object
        """
        try:
            payload = LatestRatesPayload.model_validate_json(body)
        except ValidationError as e:
            bad_entries = [err["loc"][1] for err in e.errors() if len(err["loc"]) > 1 and err["loc"][0] == "rates"]
            if bad_entries:
                raise InvalidRateFormatError(
                    f"Non-numeric rate for {', '.join(sorted({str(code) for code in bad_entries}))}"
                ) from e
            raise ApiError(f"Malformed pricing response: {e.error_count()} validation error(s)") from e

        rates: dict[CurrencyUnit, float] = {}
        for code, rate in payload.rates.items():
            currency = CurrencyUnit.from_code(code)
            if currency is None:
                continue
            rates[currency] = _positive_rate(code, rate)

        logger.debug("Parsed %d of %d rates from pricing response", len(rates), len(payload.rates))
        return FetchedRates(rates=rates, published_at=parse_timestamp(payload.timestamp))

    def close(self) -> None:
        """Close the HTTP client.

        Should be called when shutting down the application.
        """
        if self._client is not None:
            self._client.close()
            self._client = None
