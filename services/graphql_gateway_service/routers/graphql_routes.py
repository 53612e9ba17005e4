"""GraphQL endpoint for GraphQL Gateway Service.

Parses the client body and hands it to whichever dispatch strategy the
deployment configured; the strategy decides status and body.
"""

from __future__ import annotations

import json

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse
from pydantic import ValidationError

from services.graphql_gateway_service.app.di import InboundCredentials
from services.graphql_gateway_service.config import Settings
from services.graphql_gateway_service.models import GraphQLRequest
from services.graphql_gateway_service.protocols import DispatcherProtocol, MetricsProtocol
from storefront_service_libs.error_handling import GatewayServiceError, raise_bad_request_error
from storefront_service_libs.logging_utils import create_service_logger

router = APIRouter(route_class=DishkaRoute)
logger = create_service_logger("graphql_gateway.graphql_routes")

ENDPOINT = "/graphql"


async def parse_graphql_request(request: Request, service: str) -> GraphQLRequest:
    """Read the JSON body as a GraphQLRequest, raising BAD_REQUEST otherwise."""
    try:
        payload = await request.json()
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        raise_bad_request_error(
            service, "parse_graphql_request", details=f"body is not valid JSON: {e}", path=ENDPOINT
        )

    if not isinstance(payload, dict):
        raise_bad_request_error(
            service,
            "parse_graphql_request",
            details=f"expected a JSON object, got {type(payload).__name__}",
            path=ENDPOINT,
        )

    try:
        return GraphQLRequest.model_validate(payload)
    except ValidationError as e:
        raise_bad_request_error(
            service, "parse_graphql_request", details=str(e), path=ENDPOINT
        )


@router.post(
    ENDPOINT,
    summary="GraphQL endpoint",
    description="Single GraphQL endpoint fronting the auth and products services",
)
async def graphql_endpoint(
    request: Request,
    dispatcher: FromDishka[DispatcherProtocol],
    credentials: FromDishka[InboundCredentials],
    metrics: FromDishka[MetricsProtocol],
    settings: FromDishka[Settings],
) -> JSONResponse:
    with metrics.http_request_duration_seconds.labels(method="POST", endpoint=ENDPOINT).time():
        try:
            graphql_request = await parse_graphql_request(request, settings.SERVICE_NAME)
            response = await dispatcher.dispatch(graphql_request, credentials.authorization)
        except GatewayServiceError as e:
            metrics.http_requests_total.labels(
                method="POST", endpoint=ENDPOINT, http_status=str(e.status_code)
            ).inc()
            metrics.api_errors_total.labels(
                endpoint=ENDPOINT, error_type=e.error_code.value.lower()
            ).inc()
            raise

    metrics.http_requests_total.labels(
        method="POST", endpoint=ENDPOINT, http_status=str(response.status_code)
    ).inc()
    return JSONResponse(status_code=response.status_code, content=response.body)
