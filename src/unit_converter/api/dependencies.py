"""Dependency injection configuration for FastAPI app.

Uses FastAPI's app.state pattern for storing service instances.

Pattern:
    - AppContext built (or injected) during lifespan
    - Dependency functions retrieve from request.app.state
    - Clean separation, no global mutable state
"""

from contextlib import asynccontextmanager
from typing import Annotated

from fastapi import Depends, FastAPI, Request

from unit_converter.context import AppContext
from unit_converter.handlers import ConversionHandler
from unit_converter.services import CurrencyRateCache


def get_rate_cache(request: Request) -> CurrencyRateCache:
    """Dependency injection for CurrencyRateCache from app.state.

    Args:
        request: FastAPI Request object

    Returns:
        The CurrencyRateCache owned by the application context

    Raises:
        RuntimeError: If the context is not initialized
    """
    context = getattr(request.app.state, "context", None)
    if context is None:
        raise RuntimeError("AppContext not initialized. Check lifespan setup.")
    return context.rate_cache


def get_handler(request: Request) -> ConversionHandler:
    """Dependency injection for ConversionHandler from app.state.

    Args:
        request: FastAPI Request object

    Returns:
        The ConversionHandler instance from app.state

    Raises:
        RuntimeError: If handler is not initialized
    """
    handler = getattr(request.app.state, "conversion_handler", None)
    if handler is None:
        raise RuntimeError("ConversionHandler not initialized. Check lifespan setup.")
    return handler


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Lifespan context manager for FastAPI app.

    Initializes all layers and stores in app.state:
    1. AppContext (settings, pricing source, snapshot store, rate cache),
       unless one was injected with create_app(context=...)
    2. Handler (HTTP endpoints) - stored in app.state.conversion_handler

    Args:
        app: The FastAPI application instance

    Yields:
        None

    Cleanup:
        Closes the pricing client and removes services from app.state
    """
    context: AppContext | None = getattr(app.state, "context", None)
    owns_context = context is None
    if context is None:
        context = AppContext.create()
        app.state.context = context

    app.state.conversion_handler = ConversionHandler(rate_cache=context.rate_cache)

    print("✓ Rate cache initialized")
    print(f"✓ Freshness window: {context.rate_cache.expire_after}")
    print(f"✓ Rates fresh: {context.rate_cache.is_fresh()}")

    yield

    del app.state.conversion_handler
    if owns_context:
        context.close()
        del app.state.context
    print("✓ Rate cache shut down")


# Type aliases for cleaner dependency injection
HandlerDep = Annotated[ConversionHandler, Depends(get_handler)]
RateCacheDep = Annotated[CurrencyRateCache, Depends(get_rate_cache)]
