"""
Unit tests for PassThroughDispatcher.

Uses FakeBackendClient so routing, envelope construction and the mapping
of upstream failures to GatewayServiceError can be asserted directly.
"""

from __future__ import annotations

import pytest
from prometheus_client import CollectorRegistry

from services.graphql_gateway_service.app.metrics import GatewayMetrics
from services.graphql_gateway_service.config import Settings
from services.graphql_gateway_service.exceptions import (
    UpstreamBadResponse,
    UpstreamTimeout,
    UpstreamUnreachable,
)
from services.graphql_gateway_service.implementations.passthrough_dispatcher import (
    PassThroughDispatcher,
)
from services.graphql_gateway_service.models import Backend, GraphQLRequest
from services.graphql_gateway_service.tests.gateway_test_providers import (
    AUTH_URL,
    PRODUCTS_URL,
    FakeBackendClient,
)
from storefront_service_libs.error_handling import ErrorCode, GatewayServiceError

LOGIN_MUTATION = "mutation Login($input: LoginInput!) { login(input: $input) { token } }"
PRODUCT_QUERY = "query Product($id: ID!) { product(id: $id) { id name } }"


@pytest.fixture
def dispatcher(
    passthrough_settings: Settings,
    fake_backend_client: FakeBackendClient,
    metrics: GatewayMetrics,
) -> PassThroughDispatcher:
    return PassThroughDispatcher(passthrough_settings, fake_backend_client, metrics)


class TestRouting:
    """Operations reach the backend that owns them."""

    async def test_login_is_forwarded_to_auth_unchanged(
        self, dispatcher: PassThroughDispatcher, fake_backend_client: FakeBackendClient
    ) -> None:
        # Arrange
        backend_body = {"data": {"login": {"token": "t-1"}}}
        fake_backend_client.enqueue(Backend.AUTH, backend_body)
        request = GraphQLRequest(
            query=LOGIN_MUTATION,
            variables={"input": {"email": "a@b.c", "password": "x"}},
            operationName="Login",
        )

        # Act
        response = await dispatcher.dispatch(request, "Bearer abc")

        # Assert
        assert response.status_code == 200
        assert response.body == backend_body

        backend, url, envelope, timeout = fake_backend_client.calls[0]
        assert backend is Backend.AUTH
        assert url == AUTH_URL
        assert envelope.query == LOGIN_MUTATION
        assert envelope.variables == {"input": {"email": "a@b.c", "password": "x"}}
        assert envelope.operation_name == "Login"
        assert envelope.headers == {"Authorization": "Bearer abc"}
        assert timeout == 2.0

    async def test_products_operation_goes_to_products(
        self, dispatcher: PassThroughDispatcher, fake_backend_client: FakeBackendClient
    ) -> None:
        fake_backend_client.enqueue(Backend.PRODUCTS, {"data": {"products": []}})

        await dispatcher.dispatch(GraphQLRequest(query="{ products { id } }"), None)

        backend, url, envelope, _ = fake_backend_client.calls[0]
        assert backend is Backend.PRODUCTS
        assert url == PRODUCTS_URL
        assert envelope.headers == {}

    async def test_route_decision_is_counted(
        self,
        dispatcher: PassThroughDispatcher,
        fake_backend_client: FakeBackendClient,
        registry: CollectorRegistry,
    ) -> None:
        fake_backend_client.enqueue(Backend.AUTH, {"data": {"me": None}})

        await dispatcher.dispatch(GraphQLRequest(query="{ me { id } }"), None)

        assert (
            registry.get_sample_value("gateway_route_decisions_total", {"backend": "auth"})
            == 1.0
        )

    async def test_missing_query_falls_back_to_products(
        self, dispatcher: PassThroughDispatcher, fake_backend_client: FakeBackendClient
    ) -> None:
        fake_backend_client.enqueue(Backend.PRODUCTS, {"errors": [{"message": "no query"}]})

        response = await dispatcher.dispatch(GraphQLRequest(), None)

        assert response.status_code == 200
        assert fake_backend_client.calls[0][0] is Backend.PRODUCTS


class TestNormalization:
    """Operation-level errors stay in a 200 envelope, enriched."""

    async def test_product_not_found_is_enriched(
        self, dispatcher: PassThroughDispatcher, fake_backend_client: FakeBackendClient
    ) -> None:
        fake_backend_client.enqueue(
            Backend.PRODUCTS,
            {"data": {"product": None}, "errors": [{"message": "Product not found"}]},
        )

        response = await dispatcher.dispatch(GraphQLRequest(query=PRODUCT_QUERY), None)

        assert response.status_code == 200
        assert response.body["data"] == {"product": None}
        error = response.body["errors"][0]
        assert error["message"] == "Product not found"
        assert error["userMessage"] == "resource not found, verify input and retry"
        assert error["extensions"]["code"] == "NOT_FOUND"


class TestUpstreamFailures:
    """Dispatch-level failures become GatewayServiceError."""

    @pytest.mark.parametrize(
        "failure, expected_code, expected_status",
        [
            (
                UpstreamTimeout(Backend.PRODUCTS, PRODUCTS_URL, 2.0),
                ErrorCode.GATEWAY_TIMEOUT,
                504,
            ),
            (
                UpstreamUnreachable(Backend.PRODUCTS, PRODUCTS_URL, "connection refused"),
                ErrorCode.SERVICE_UNAVAILABLE,
                503,
            ),
            (
                UpstreamBadResponse(
                    Backend.PRODUCTS, PRODUCTS_URL, "not json", parse_error=True
                ),
                ErrorCode.INVALID_RESPONSE,
                500,
            ),
            (
                UpstreamBadResponse(
                    Backend.PRODUCTS, PRODUCTS_URL, "HTTP 502", status_code=502
                ),
                ErrorCode.INTERNAL_SERVER_ERROR,
                500,
            ),
            (RuntimeError("unexpected"), ErrorCode.INTERNAL_SERVER_ERROR, 500),
        ],
    )
    async def test_failure_maps_to_gateway_error(
        self,
        dispatcher: PassThroughDispatcher,
        fake_backend_client: FakeBackendClient,
        failure: Exception,
        expected_code: ErrorCode,
        expected_status: int,
    ) -> None:
        fake_backend_client.enqueue(Backend.PRODUCTS, failure)

        with pytest.raises(GatewayServiceError) as exc_info:
            await dispatcher.dispatch(GraphQLRequest(query=PRODUCT_QUERY), None)

        error = exc_info.value
        assert error.error_code is expected_code
        assert error.status_code == expected_status
        assert error.error_detail.path == "/graphql"
        assert error.error_detail.operation == "forward_to_products"
        assert error.error_detail.details

    async def test_timeout_details_name_the_backend_url(
        self, dispatcher: PassThroughDispatcher, fake_backend_client: FakeBackendClient
    ) -> None:
        fake_backend_client.enqueue(Backend.AUTH, UpstreamTimeout(Backend.AUTH, AUTH_URL, 2.0))

        with pytest.raises(GatewayServiceError) as exc_info:
            await dispatcher.dispatch(GraphQLRequest(query="{ me { id } }"), None)

        assert AUTH_URL in exc_info.value.error_detail.details
