"""Raw pass-through dispatch strategy.

Classifies the raw operation, forwards it unchanged to the one backend that
owns it and returns the normalized backend answer. Dispatch-level failures
are raised as GatewayServiceError and rendered by the registered FastAPI
error handlers (504 / 503 / 500). No retries: one failed call fails the
request.
"""

from __future__ import annotations

from services.graphql_gateway_service.classifier import classify
from services.graphql_gateway_service.config import Settings
from services.graphql_gateway_service.exceptions import (
    UpstreamBadResponse,
    UpstreamTimeout,
    UpstreamUnreachable,
)
from services.graphql_gateway_service.models import (
    DispatchResponse,
    ForwardEnvelope,
    GraphQLRequest,
)
from services.graphql_gateway_service.normalizer import normalize
from services.graphql_gateway_service.protocols import (
    BackendClientProtocol,
    DispatcherProtocol,
    MetricsProtocol,
)
from storefront_service_libs.error_handling import (
    raise_gateway_timeout_error,
    raise_internal_server_error,
    raise_invalid_response_error,
    raise_service_unavailable_error,
)
from storefront_service_libs.logging_utils import create_service_logger

logger = create_service_logger("graphql_gateway.passthrough_dispatcher")

GRAPHQL_PATH = "/graphql"


class PassThroughDispatcher(DispatcherProtocol):
    """Classify, forward and normalize one raw GraphQL operation."""

    def __init__(
        self,
        settings: Settings,
        backend_client: BackendClientProtocol,
        metrics: MetricsProtocol,
    ) -> None:
        self._settings = settings
        self._backend_client = backend_client
        self._metrics = metrics

    async def dispatch(
        self, request: GraphQLRequest, authorization: str | None
    ) -> DispatchResponse:
        operation = request.query or ""
        decision = classify(operation)
        self._metrics.route_decisions_total.labels(backend=decision.backend.value).inc()

        url = self._settings.backend_url(decision.backend)
        logger.info(
            f"Routing operation to {decision.backend.value} backend",
            reason=decision.reason,
            operation_name=request.operation_name,
        )

        envelope = ForwardEnvelope.build(
            operation,
            request.variables,
            authorization=authorization,
            operation_name=request.operation_name,
        )

        operation_label = f"forward_to_{decision.backend.value}"
        service = self._settings.SERVICE_NAME
        try:
            result = await self._backend_client.call(
                decision.backend, url, envelope, self._settings.BACKEND_TIMEOUT_SECONDS
            )
        except UpstreamTimeout as e:
            raise_gateway_timeout_error(
                service, operation_label, details=e.details, path=GRAPHQL_PATH
            )
        except UpstreamUnreachable as e:
            raise_service_unavailable_error(
                service, operation_label, details=e.details, path=GRAPHQL_PATH
            )
        except UpstreamBadResponse as e:
            if e.parse_error:
                raise_invalid_response_error(
                    service, operation_label, details=e.details, path=GRAPHQL_PATH
                )
            raise_internal_server_error(
                service, operation_label, details=e.details, path=GRAPHQL_PATH
            )
        except Exception as e:
            logger.error(f"Unexpected error forwarding operation: {e}", exc_info=True)
            raise_internal_server_error(
                service, operation_label, details=str(e), path=GRAPHQL_PATH
            )

        # Operation-level errors stay inside a 200 envelope
        return DispatchResponse(status_code=200, body=normalize(result))
