"""Field forwarding for the stitched schema.

Every unified-schema field is pinned, when it is declared, to one backend
and one fixed sub-query document. Resolving the field sends that document
with the field arguments as variables and hands back
``result["data"][field_name]``.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from graphql import GraphQLError

from services.graphql_gateway_service.config import Settings
from services.graphql_gateway_service.models import Backend, ForwardEnvelope
from services.graphql_gateway_service.normalizer import normalize
from services.graphql_gateway_service.protocols import BackendClientProtocol
from storefront_service_libs.logging_utils import create_service_logger

logger = create_service_logger("graphql_gateway.stitching.forwarding")


@dataclass(frozen=True)
class StitchedField:
    """A unified-schema field and the backend sub-query that resolves it."""

    backend: Backend
    field_name: str
    document: str


@dataclass(frozen=True)
class GatewayContext:
    """Per-request context handed to every resolver."""

    settings: Settings
    backend_client: BackendClientProtocol
    authorization: str | None = None


def backend_error_to_graphql_error(field: StitchedField, error: Any) -> GraphQLError:
    """Re-raise a backend error through the execution engine, keeping its fields."""
    if not isinstance(error, dict):
        return GraphQLError(str(error), extensions={"backend": field.backend.value})

    extensions = dict(error.get("extensions") or {})
    extensions.setdefault("backend", field.backend.value)
    if "userMessage" in error:
        extensions.setdefault("userMessage", error["userMessage"])
    return GraphQLError(str(error.get("message", "Unknown backend error")), extensions=extensions)


async def resolve_stitched_field(
    context: GatewayContext,
    field: StitchedField,
    variables: dict[str, Any] | None = None,
) -> Any:
    """Forward ``field``'s sub-query and return its slice of the backend data."""
    envelope = ForwardEnvelope.build(
        field.document, variables or {}, authorization=context.authorization
    )
    result = await context.backend_client.call(
        field.backend,
        context.settings.backend_url(field.backend),
        envelope,
        context.settings.BACKEND_TIMEOUT_SECONDS,
    )
    result = normalize(result)

    errors = result.get("errors")
    if errors:
        error = backend_error_to_graphql_error(field, errors[0])
        if len(errors) > 1:
            # One field resolves to one GraphQL error; the rest ride along on it
            error.extensions["errors"] = list(errors[1:])
            logger.info(
                f"{field.backend.value} backend returned {len(errors)} errors",
                field=field.field_name,
            )
        raise error

    data = result.get("data") or {}
    return data.get(field.field_name)
