"""Health and metrics routes for GraphQL Gateway Service."""

from __future__ import annotations

import asyncio

from dishka import FromDishka
from dishka.integrations.fastapi import inject
from fastapi import APIRouter
from fastapi.responses import PlainTextResponse
from prometheus_client import CONTENT_TYPE_LATEST, CollectorRegistry, generate_latest

from services.graphql_gateway_service.config import Settings
from services.graphql_gateway_service.models import Backend
from services.graphql_gateway_service.protocols import BackendClientProtocol
from storefront_service_libs.logging_utils import create_service_logger

router = APIRouter(tags=["Health"])
logger = create_service_logger("graphql_gateway.routers.health")


@router.get("/health")
@inject
async def health_check(
    settings: FromDishka[Settings],
    backend_client: FromDishka[BackendClientProtocol],
) -> dict[str, str | dict]:
    """Liveness document; each backend is probed with a `{ __typename }` query."""
    backends = (Backend.AUTH, Backend.PRODUCTS)
    probes = await asyncio.gather(
        *(
            backend_client.probe(
                backend, settings.backend_url(backend), settings.HEALTH_PROBE_TIMEOUT_SECONDS
            )
            for backend in backends
        )
    )

    services = {
        backend.value: {
            "url": settings.backend_url(backend),
            "status": "up" if is_up else "down",
        }
        for backend, is_up in zip(backends, probes)
    }
    overall_status = "ok" if all(probes) else "degraded"
    if overall_status != "ok":
        logger.warning("Health check found unavailable backends", services=services)

    return {"status": overall_status, "services": services}


@router.get("/metrics", response_class=PlainTextResponse)
@inject
async def metrics(registry: FromDishka[CollectorRegistry]):
    """Prometheus metrics endpoint."""
    try:
        metrics_data = generate_latest(registry)
        return PlainTextResponse(content=metrics_data, media_type=CONTENT_TYPE_LATEST)
    except Exception as e:
        logger.error(f"Error generating metrics: {e}", exc_info=True)
        return PlainTextResponse(content="Error generating metrics", status_code=500)
