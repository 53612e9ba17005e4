"""
Protocols for GraphQL Gateway Service.

Defines the interfaces used for dependency injection. Routers and
dispatchers depend on these protocols, not on concrete implementations.
"""

from __future__ import annotations

from typing import Protocol

from prometheus_client import Counter, Histogram

from services.graphql_gateway_service.models import (
    Backend,
    BackendResult,
    DispatchResponse,
    ForwardEnvelope,
    GraphQLRequest,
)


class BackendClientProtocol(Protocol):
    """Protocol for the single forward-and-parse call to one backend."""

    async def call(
        self,
        backend: Backend,
        url: str,
        envelope: ForwardEnvelope,
        timeout_seconds: float,
    ) -> BackendResult:
        """POST the envelope and return the parsed JSON body.

        Raises:
            UpstreamTimeout: no response within ``timeout_seconds``
            UpstreamUnreachable: connection could not be established
            UpstreamBadResponse: non-2xx status or non-JSON body
        """
        ...

    async def probe(self, backend: Backend, url: str, timeout_seconds: float) -> bool:
        """Send a minimal ``{ __typename }`` query; True when the backend answered."""
        ...


class DispatcherProtocol(Protocol):
    """Protocol for one /graphql dispatch strategy."""

    async def dispatch(
        self, request: GraphQLRequest, authorization: str | None
    ) -> DispatchResponse:
        """Produce the transport status and body for one client request."""
        ...


class MetricsProtocol(Protocol):
    """Protocol for metrics collection matching GatewayMetrics exactly."""

    @property
    def http_requests_total(self) -> Counter:
        """Total HTTP requests counter."""
        ...

    @property
    def http_request_duration_seconds(self) -> Histogram:
        """HTTP request duration histogram."""
        ...

    @property
    def route_decisions_total(self) -> Counter:
        """Routing decisions counter."""
        ...

    @property
    def downstream_service_calls_total(self) -> Counter:
        """Downstream service calls counter."""
        ...

    @property
    def downstream_service_call_duration_seconds(self) -> Histogram:
        """Downstream service call duration histogram."""
        ...

    @property
    def api_errors_total(self) -> Counter:
        """API errors counter."""
        ...
