"""Error-formatting hook for the stitched schema.

Runs after every operation and shapes each error the execution engine
collected, whatever raised it:
- backend domain errors get the same ``userMessage``/``code`` enrichment
  the normalizer gives raw responses;
- upstream failures get the dispatch-level ``code`` and ``details``.
"""

from __future__ import annotations

from collections.abc import Iterator
from typing import Any

from graphql import GraphQLError
from strawberry.extensions import SchemaExtension

from services.graphql_gateway_service.exceptions import UpstreamError
from services.graphql_gateway_service.normalizer import match_rule
from storefront_service_libs.logging_utils import create_service_logger

logger = create_service_logger("graphql_gateway.stitching.error_extension")


def _upstream_cause(error: GraphQLError) -> UpstreamError | None:
    cause: Any = error.original_error
    # located_error may wrap the raised error in another GraphQLError
    while isinstance(cause, GraphQLError) and cause.original_error is not None:
        cause = cause.original_error
    return cause if isinstance(cause, UpstreamError) else None


def format_gateway_error(error: GraphQLError) -> GraphQLError:
    """Return ``error`` with gateway extensions added; existing ones are kept."""
    extensions = dict(error.extensions or {})

    upstream = _upstream_cause(error)
    if upstream is not None:
        extensions.setdefault("code", upstream.error_code.value)
        extensions.setdefault("details", upstream.details)
        extensions.setdefault("backend", upstream.backend.value)
    else:
        rule = match_rule(error.message)
        if rule is None:
            return error
        extensions.setdefault("userMessage", rule.user_message)
        extensions.setdefault("code", rule.code.value)

    if extensions == error.extensions:
        return error

    return GraphQLError(
        error.message,
        nodes=error.nodes,
        source=error.source,
        positions=error.positions,
        path=error.path,
        original_error=error.original_error,
        extensions=extensions,
    )


class GatewayErrorExtension(SchemaExtension):
    """Apply gateway error shaping to every error of an operation."""

    def on_operation(self) -> Iterator[None]:
        yield
        result = self.execution_context.result
        if result and result.errors:
            result.errors = [format_gateway_error(error) for error in result.errors]
            logger.info(
                "GraphQL operation completed with errors",
                error_count=len(result.errors),
                codes=[(error.extensions or {}).get("code") for error in result.errors],
            )
