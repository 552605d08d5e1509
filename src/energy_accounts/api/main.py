"""FastAPI application entry point for the Energy Accounts API."""

from contextlib import asynccontextmanager
from datetime import datetime, timezone
from typing import AsyncIterator, Optional

import structlog
from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from energy_accounts import __version__
from energy_accounts.api.dependencies import ServiceContainer, build_services
from energy_accounts.api.routes.accounts import router as accounts_router
from energy_accounts.api.routes.payments import router as payments_router
from energy_accounts.config import Settings, settings
from energy_accounts.logging_config import configure_logging

# Configure logging at module level
configure_logging()

logger = structlog.get_logger()


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Application lifespan manager."""
    services: ServiceContainer = app.state.services
    logger.info(
        "starting_energy_accounts_api",
        environment=services.settings.environment,
        ledger_size=len(services.ledger),
    )

    yield

    logger.info("energy_accounts_api_shutdown_complete", ledger_size=len(services.ledger))


def create_app(
    app_settings: Optional[Settings] = None,
    services: Optional[ServiceContainer] = None,
) -> FastAPI:
    """Create the FastAPI application.

    Args:
        app_settings: Settings to build services from (defaults to global settings)
        services: Pre-built services; overrides ``app_settings`` wiring

    Returns:
        Configured FastAPI application
    """
    app_settings = app_settings or settings
    services = services or build_services(app_settings)

    app = FastAPI(
        title="Energy Accounts API",
        description="API for managing energy accounts and payments",
        version=__version__,
        docs_url="/api-docs",
        redoc_url=None,
        lifespan=lifespan,
    )
    app.state.services = services

    app.add_middleware(
        CORSMiddleware,
        allow_origins=services.settings.cors_allow_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(accounts_router)
    app.include_router(payments_router)

    @app.get("/health")
    async def health_check() -> dict[str, str]:
        """Health check endpoint."""
        return {"status": "UP", "timestamp": datetime.now(timezone.utc).isoformat()}

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(
        request: Request, exc: StarletteHTTPException
    ) -> JSONResponse:
        if exc.status_code == status.HTTP_404_NOT_FOUND:
            return JSONResponse(status_code=exc.status_code, content={"message": "Route not found"})
        return JSONResponse(status_code=exc.status_code, content={"message": str(exc.detail)})

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"error": "Invalid request", "details": jsonable_encoder(exc.errors())},
        )

    @app.exception_handler(Exception)
    async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
        logger.error("unhandled_error", path=request.url.path, error=str(exc), exc_info=exc)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"message": "Internal server error", "error": str(exc)},
        )

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "energy_accounts.api.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug,
        log_level="debug" if settings.debug else "info",
    )
