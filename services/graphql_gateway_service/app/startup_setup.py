"""Startup setup for GraphQL Gateway Service."""

from __future__ import annotations

from dishka import AsyncContainer, make_async_container
from dishka.integrations.fastapi import FastapiProvider, setup_dishka
from fastapi import FastAPI

from services.graphql_gateway_service.app.di import GatewayProvider, RequestProvider
from services.graphql_gateway_service.config import Settings
from storefront_service_libs.logging_utils import create_service_logger

logger = create_service_logger("graphql_gateway.startup")


def create_di_container(settings: Settings) -> AsyncContainer:
    """Create and configure the DI container."""
    try:
        logger.info("Creating DI container...")
        container = make_async_container(
            GatewayProvider(settings),
            RequestProvider(),
            FastapiProvider(),  # Provides Request object to context
        )
        logger.info("DI container created successfully")
        return container
    except Exception as e:
        logger.critical(f"Failed to create DI container: {e}", exc_info=True)
        raise


def setup_dependency_injection(app: FastAPI, container: AsyncContainer) -> None:
    """Setup Dishka integration with FastAPI."""
    try:
        logger.info("Setting up dependency injection...")
        setup_dishka(container, app)
        logger.info("Dependency injection setup completed")
    except Exception as e:
        logger.critical(f"Failed to setup dependency injection: {e}", exc_info=True)
        raise


def log_startup_banner(settings: Settings) -> None:
    """Log where the gateway listens and which backends it fronts."""
    base_url = f"http://localhost:{settings.HTTP_PORT}"
    logger.info(
        f"Gateway ready at {base_url}/graphql",
        mode=settings.GATEWAY_MODE.value,
        health_url=f"{base_url}/health",
        auth_service_url=settings.AUTH_SERVICE_URL,
        products_service_url=settings.PRODUCTS_SERVICE_URL,
    )


async def shutdown_services(app: FastAPI) -> None:
    """Gracefully shutdown all services."""
    container = getattr(app.state, "dishka_container", None)
    if container is not None:
        await container.close()
    logger.info("GraphQL Gateway Service shutdown completed")
