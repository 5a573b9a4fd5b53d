"""HTTP handlers layer.

Handlers convert between DTOs (API contracts) and service calls.
They handle HTTP concerns like status codes, validation, and error handling.
"""

from .conversion_handler import ConversionHandler

__all__ = [
    "ConversionHandler",
]
