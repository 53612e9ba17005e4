from __future__ import annotations

from collections.abc import AsyncIterator
from dataclasses import dataclass

import httpx
import strawberry
from dishka import Provider, Scope, provide
from fastapi import Request
from prometheus_client import REGISTRY, CollectorRegistry

from services.graphql_gateway_service.app.metrics import GatewayMetrics
from services.graphql_gateway_service.config import GatewayMode, Settings
from services.graphql_gateway_service.implementations.backend_client import HttpBackendClient
from services.graphql_gateway_service.implementations.passthrough_dispatcher import (
    PassThroughDispatcher,
)
from services.graphql_gateway_service.implementations.stitched_dispatcher import (
    StitchedDispatcher,
)
from services.graphql_gateway_service.protocols import (
    BackendClientProtocol,
    DispatcherProtocol,
    MetricsProtocol,
)
from services.graphql_gateway_service.stitching.schema import build_schema


@dataclass(frozen=True)
class InboundCredentials:
    """Authorization header of the inbound request, relayed verbatim."""

    authorization: str | None = None


class GatewayProvider(Provider):
    scope = Scope.APP

    def __init__(self, settings: Settings) -> None:
        super().__init__()
        self._settings = settings

    @provide
    def get_config(self) -> Settings:
        return self._settings

    @provide
    async def get_httpx_client(self, config: Settings) -> AsyncIterator[httpx.AsyncClient]:
        # The per-call deadline in the backend client is authoritative
        async with httpx.AsyncClient(
            timeout=httpx.Timeout(config.BACKEND_TIMEOUT_SECONDS)
        ) as httpx_client:
            yield httpx_client

    @provide
    def provide_registry(self) -> CollectorRegistry:
        return REGISTRY

    @provide
    def provide_metrics(self, registry: CollectorRegistry) -> MetricsProtocol:
        return GatewayMetrics(registry=registry)

    @provide
    def get_backend_client(
        self, httpx_client: httpx.AsyncClient, metrics: MetricsProtocol
    ) -> BackendClientProtocol:
        return HttpBackendClient(httpx_client, metrics)

    @provide
    def provide_schema(self) -> strawberry.Schema:
        return build_schema()

    @provide
    def get_dispatcher(
        self,
        config: Settings,
        backend_client: BackendClientProtocol,
        metrics: MetricsProtocol,
        schema: strawberry.Schema,
    ) -> DispatcherProtocol:
        if config.GATEWAY_MODE is GatewayMode.PASSTHROUGH:
            return PassThroughDispatcher(config, backend_client, metrics)
        return StitchedDispatcher(config, backend_client, schema)


class RequestProvider(Provider):
    """Provider for per-request dependencies; Request comes from FastapiProvider."""

    @provide(scope=Scope.REQUEST)
    def provide_inbound_credentials(self, request: Request) -> InboundCredentials:
        return InboundCredentials(authorization=request.headers.get("Authorization") or None)
