from typing import Any

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from unit_converter.api.dependencies import HandlerDep, RateCacheDep, lifespan
from unit_converter.config import settings
from unit_converter.context import AppContext
from unit_converter.dto import (
    CommandRequest,
    CommandResponse,
    ConvertRequest,
    ConvertResponse,
    HealthCheckResponse,
    RatesResponse,
    UnitsResponse,
)

API_NAME = "Unit Converter API"
API_VERSION = "0.1.0"


def create_app(context: AppContext | None = None) -> FastAPI:
    """Build the FastAPI application.

    Args:
        context: Pre-built application context. If None, the lifespan
            builds one from settings at startup.

    Returns:
        The configured FastAPI app
    """
    app = FastAPI(
        title=API_NAME,
        description="Length, mass and currency conversion with a cached exchange rate table",
        version=API_VERSION,
        lifespan=lifespan,
    )
    if context is not None:
        app.state.context = context

    app.add_middleware(
        CORSMiddleware,  # type: ignore[arg-type]
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.get("/")
    def root() -> dict[str, Any]:
        """Root endpoint with API information."""
        return {
            "name": API_NAME,
            "version": API_VERSION,
            "endpoints": {
                "convert": "/convert",
                "command": "/command",
                "units": "/units",
                "rates": "/rates",
                "stats": "/stats",
                "health": "/health",
                "docs": "/docs",
            },
        }

    @app.get("/health", response_model=HealthCheckResponse)
    def health(handler: HandlerDep) -> HealthCheckResponse:
        """Health check endpoint."""
        return handler.health_check()

    @app.get("/units", response_model=UnitsResponse)
    def list_units(handler: HandlerDep) -> UnitsResponse:
        """List every unit grouped by family."""
        return handler.list_units()

    @app.post("/convert", response_model=ConvertResponse)
    def convert(request: ConvertRequest, handler: HandlerDep) -> ConvertResponse:
        """
        Convert a value between two units of the same family.

        Args:
            request: Value plus source and target unit names.

        Returns:
            The converted value and its rendered form.
        """
        return handler.convert(request)

    @app.post("/command", response_model=CommandResponse)
    def command(request: CommandRequest, handler: HandlerDep) -> CommandResponse:
        """Run one line of the text command language."""
        return handler.run_command(request)

    @app.get("/rates", response_model=RatesResponse)
    def get_rates(handler: HandlerDep) -> RatesResponse:
        """Get the cached rate table without refreshing it."""
        return handler.get_rates()

    @app.post("/rates/refresh", response_model=RatesResponse)
    def refresh_rates(handler: HandlerDep) -> RatesResponse:
        """Force a refresh from the pricing source."""
        return handler.refresh_rates()

    @app.get("/stats", response_model=dict[str, Any])
    def get_stats(rate_cache: RateCacheDep) -> dict[str, Any]:
        """Get rate cache statistics."""
        return rate_cache.get_stats()

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "unit_converter.api.app:app",
        host=settings.api_host,
        port=settings.api_port,
        reload=settings.api_reload,
    )
