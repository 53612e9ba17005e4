"""Schema-stitched dispatch strategy.

Executes the unified schema; each resolved field forwards its own fixed
sub-query to the backend it is pinned to. Field resolutions are independent
and may interleave. Errors, operation-level or upstream, come back inside a
200 GraphQL envelope after the schema's error-formatting hook has shaped them.
"""

from __future__ import annotations

from typing import Any

import strawberry

from services.graphql_gateway_service.config import Settings
from services.graphql_gateway_service.models import DispatchResponse, GraphQLRequest
from services.graphql_gateway_service.protocols import BackendClientProtocol, DispatcherProtocol
from services.graphql_gateway_service.stitching.forwarding import GatewayContext
from storefront_service_libs.logging_utils import create_service_logger

logger = create_service_logger("graphql_gateway.stitched_dispatcher")


def client_error(formatted: dict[str, Any]) -> dict[str, Any]:
    """Lift ``extensions.userMessage`` to the top level, as raw mode shapes errors."""
    user_message = (formatted.get("extensions") or {}).get("userMessage")
    if user_message is None:
        return formatted
    return {**formatted, "userMessage": user_message}


class StitchedDispatcher(DispatcherProtocol):
    """Resolve a client operation against the unified schema."""

    def __init__(
        self,
        settings: Settings,
        backend_client: BackendClientProtocol,
        schema: strawberry.Schema,
    ) -> None:
        self._settings = settings
        self._backend_client = backend_client
        self._schema = schema

    async def dispatch(
        self, request: GraphQLRequest, authorization: str | None
    ) -> DispatchResponse:
        context = GatewayContext(
            settings=self._settings,
            backend_client=self._backend_client,
            authorization=authorization,
        )
        result = await self._schema.execute(
            request.query or "",
            variable_values=request.variables,
            context_value=context,
            operation_name=request.operation_name,
        )

        body: dict[str, Any] = {"data": result.data}
        if result.errors:
            body["errors"] = [client_error(error.formatted) for error in result.errors]
            logger.debug(
                "Stitched operation returned errors",
                operation_name=request.operation_name,
                error_count=len(result.errors),
            )
        return DispatchResponse(status_code=200, body=body)
