"""Exception hierarchy for parsing, conversion and rate fetching.

Every error carries a human-readable ``message`` and renders as plain text,
so the command layer and the HTTP handlers can report it without a traceback.

Hierarchy:
    ConverterError
    ├── ParseError
    ├── ConversionError
    │   ├── EmptyValueError
    │   ├── IncompatibleUnitsError
    │   └── CurrencyRateError
    └── ApiError
        ├── MissingCredentialError
        ├── RateNotFoundError
        ├── InvalidRateFormatError
        └── InvalidTimestampError
"""


class ConverterError(Exception):
    """Base class for all recoverable errors raised by the converter."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message

    def __str__(self) -> str:
        return self.message


class ParseError(ConverterError):
    """Malformed expression or unknown unit name."""


class ConversionError(ConverterError):
    """A value could not be converted to the requested unit."""

    def __str__(self) -> str:
        return f"Conversion error: {self.message}"


class EmptyValueError(ConversionError):
    """The value being converted has no magnitude."""

    def __init__(self) -> None:
        super().__init__("Value is None")


class IncompatibleUnitsError(ConversionError):
    """Source and target units belong to different families."""

    def __init__(self, source: object, target: object) -> None:
        super().__init__(f"Cannot convert from {source} to {target}")
        self.source = source
        self.target = target


class CurrencyRateError(ConversionError):
    """An exchange rate needed for a currency conversion is unavailable."""


class ApiError(ConverterError):
    """A refresh from the pricing source failed."""

    def __str__(self) -> str:
        return f"API error: {self.message}"


class MissingCredentialError(ApiError):
    """The pricing source credential is not configured."""

    def __init__(self, env_var: str) -> None:
        super().__init__(f"No API key found. Please set the {env_var} environment variable.")
        self.env_var = env_var


class RateNotFoundError(ApiError):
    """The pricing source did not include the requested currency."""

    def __init__(self, currency: object) -> None:
        super().__init__(f"No rate found for currency {currency}")
        self.currency = currency


class InvalidRateFormatError(ApiError):
    """A rate entry in the pricing response is not a number."""


class InvalidTimestampError(ApiError):
    """The pricing response timestamp could not be parsed."""
