from __future__ import annotations

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

import uvicorn
from dishka import AsyncContainer
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from services.graphql_gateway_service.app.middleware import CorrelationIDMiddleware
from services.graphql_gateway_service.app.startup_setup import (
    create_di_container,
    log_startup_banner,
    setup_dependency_injection,
    shutdown_services,
)
from services.graphql_gateway_service.config import Settings
from services.graphql_gateway_service.routers import graphql_routes
from services.graphql_gateway_service.routers.health_routes import router as health_router
from storefront_service_libs.error_handling.fastapi import (
    register_error_handlers as register_fastapi_error_handlers,
)
from storefront_service_libs.logging_utils import configure_service_logging


def create_app(
    settings: Settings | None = None, container: AsyncContainer | None = None
) -> FastAPI:
    settings = settings or Settings()
    configure_service_logging(
        settings.SERVICE_NAME,
        environment=settings.ENVIRONMENT.value,
        log_level=settings.LOG_LEVEL,
    )

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        log_startup_banner(settings)
        yield
        await shutdown_services(app)

    app = FastAPI(
        title=settings.SERVICE_NAME,
        version="1.0.0",
        description=(
            "Storefront GraphQL Gateway - single GraphQL endpoint in front of the "
            "auth and products services"
        ),
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
        lifespan=lifespan,
    )

    # Register error handlers
    register_fastapi_error_handlers(app)

    # Add Correlation ID Middleware (must be early in chain)
    app.add_middleware(CorrelationIDMiddleware)

    # Add CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=settings.CORS_ALLOW_CREDENTIALS,
        allow_methods=settings.CORS_ALLOW_METHODS,
        allow_headers=settings.CORS_ALLOW_HEADERS,
    )

    # Include routers
    app.include_router(health_router, tags=["Health"])
    app.include_router(graphql_routes.router, tags=["GraphQL"])

    # Setup Dishka DI
    if container is None:
        container = create_di_container(settings)
    setup_dependency_injection(app, container)

    return app


def main() -> None:
    """Run the gateway with uvicorn."""
    settings = Settings()
    uvicorn.run(
        create_app(settings),
        host=settings.HTTP_HOST,
        port=settings.HTTP_PORT,
        log_config=None,
    )


if __name__ == "__main__":
    main()
