"""
End-to-end tests for POST /graphql in both dispatch modes.

The app runs in-process over ASGITransport with the real DI graph; the
backends are mocked at the HTTP layer with respx, so the whole path from
request parsing through backend client to error rendering is exercised.
"""

from __future__ import annotations

import json
from uuid import UUID

import httpx
from httpx import AsyncClient, Response
from respx import MockRouter

from services.graphql_gateway_service.tests.gateway_test_providers import AUTH_URL, PRODUCTS_URL

LOGIN_BODY = {
    "query": "mutation Login($input: LoginInput!) { login(input: $input) { token } }",
    "variables": {"input": {"email": "ana@example.com", "password": "secret"}},
}
PRODUCT_BODY = {"query": "query Product($id: ID!) { product(id: $id) { id name } }"}


async def test_passthrough_login_is_relayed_unchanged(
    passthrough_client: AsyncClient, respx_mock: MockRouter
) -> None:
    # Arrange
    backend_body = {"data": {"login": {"token": "t-1"}}}
    auth_route = respx_mock.post(AUTH_URL).mock(return_value=Response(200, json=backend_body))

    # Act
    response = await passthrough_client.post(
        "/graphql", json=LOGIN_BODY, headers={"Authorization": "Bearer abc"}
    )

    # Assert
    assert response.status_code == 200
    assert response.json() == backend_body

    forwarded = auth_route.calls.last.request
    assert forwarded.headers["Authorization"] == "Bearer abc"
    assert json.loads(forwarded.content) == LOGIN_BODY


async def test_passthrough_not_found_is_normalized(
    passthrough_client: AsyncClient, respx_mock: MockRouter
) -> None:
    respx_mock.post(PRODUCTS_URL).mock(
        return_value=Response(
            200, json={"data": {"product": None}, "errors": [{"message": "Product not found"}]}
        )
    )

    response = await passthrough_client.post("/graphql", json=PRODUCT_BODY)

    assert response.status_code == 200
    error = response.json()["errors"][0]
    assert error["message"] == "Product not found"
    assert error["userMessage"] == "resource not found, verify input and retry"
    assert error["extensions"]["code"] == "NOT_FOUND"


async def test_passthrough_timeout_is_504(
    passthrough_client: AsyncClient, respx_mock: MockRouter
) -> None:
    respx_mock.post(PRODUCTS_URL).mock(side_effect=httpx.ReadTimeout)

    response = await passthrough_client.post("/graphql", json=PRODUCT_BODY)

    assert response.status_code == 504
    error = response.json()["errors"][0]
    assert error["code"] == "GATEWAY_TIMEOUT"
    assert error["path"] == "/graphql"
    assert PRODUCTS_URL in error["details"]


async def test_passthrough_unreachable_backend_is_503(
    passthrough_client: AsyncClient, respx_mock: MockRouter
) -> None:
    respx_mock.post(AUTH_URL).mock(side_effect=httpx.ConnectError)

    response = await passthrough_client.post("/graphql", json=LOGIN_BODY)

    assert response.status_code == 503
    error = response.json()["errors"][0]
    assert error["code"] == "SERVICE_UNAVAILABLE"
    assert error["message"] == "The backend service is unavailable"


async def test_passthrough_invalid_backend_json_is_500(
    passthrough_client: AsyncClient, respx_mock: MockRouter
) -> None:
    respx_mock.post(PRODUCTS_URL).mock(return_value=Response(200, text="<html>"))

    response = await passthrough_client.post("/graphql", json=PRODUCT_BODY)

    assert response.status_code == 500
    assert response.json()["errors"][0]["code"] == "INVALID_RESPONSE"


async def test_malformed_body_is_400(passthrough_client: AsyncClient) -> None:
    response = await passthrough_client.post(
        "/graphql", content=b"{not json", headers={"Content-Type": "application/json"}
    )

    assert response.status_code == 400
    assert response.json()["errors"][0]["code"] == "BAD_REQUEST"


async def test_non_object_body_is_400(stitched_client: AsyncClient) -> None:
    response = await stitched_client.post("/graphql", json=["not", "an", "object"])

    assert response.status_code == 400
    assert response.json()["errors"][0]["code"] == "BAD_REQUEST"


async def test_stitched_login_returns_schema_shape(
    stitched_client: AsyncClient, respx_mock: MockRouter
) -> None:
    auth_route = respx_mock.post(AUTH_URL).mock(
        return_value=Response(
            200,
            json={
                "data": {
                    "login": {
                        "token": "t-1",
                        "user": {
                            "id": "u-1",
                            "name": "Ana",
                            "email": "ana@example.com",
                            "role": "customer",
                            "favorites": [],
                        },
                    }
                }
            },
        )
    )

    response = await stitched_client.post(
        "/graphql", json=LOGIN_BODY, headers={"Authorization": "Bearer abc"}
    )

    assert response.status_code == 200
    assert response.json() == {"data": {"login": {"token": "t-1"}}}
    assert auth_route.calls.last.request.headers["Authorization"] == "Bearer abc"


async def test_stitched_upstream_timeout_is_a_graphql_error(
    stitched_client: AsyncClient, respx_mock: MockRouter
) -> None:
    respx_mock.post(PRODUCTS_URL).mock(side_effect=httpx.ReadTimeout)

    response = await stitched_client.post(
        "/graphql", json={**PRODUCT_BODY, "variables": {"id": "p-1"}}
    )

    assert response.status_code == 200
    body = response.json()
    assert body["data"] == {"product": None}
    assert body["errors"][0]["extensions"]["code"] == "GATEWAY_TIMEOUT"


async def test_correlation_id_is_echoed(
    passthrough_client: AsyncClient, respx_mock: MockRouter
) -> None:
    respx_mock.post(AUTH_URL).mock(return_value=Response(200, json={"data": {"me": None}}))
    correlation_id = "0b6f7a36-9a47-4d0c-8c76-1d5d8a1f0f11"

    response = await passthrough_client.post(
        "/graphql",
        json={"query": "{ me { id } }"},
        headers={"X-Correlation-ID": correlation_id},
    )

    assert response.headers["X-Correlation-ID"] == correlation_id


async def test_correlation_id_is_minted_when_invalid(
    passthrough_client: AsyncClient, respx_mock: MockRouter
) -> None:
    respx_mock.post(AUTH_URL).mock(return_value=Response(200, json={"data": {"me": None}}))

    response = await passthrough_client.post(
        "/graphql",
        json={"query": "{ me { id } }"},
        headers={"X-Correlation-ID": "not-a-uuid"},
    )

    assert UUID(response.headers["X-Correlation-ID"])


async def test_stitched_not_found_carries_top_level_user_message(
    stitched_client: AsyncClient, respx_mock: MockRouter
) -> None:
    respx_mock.post(PRODUCTS_URL).mock(
        return_value=Response(
            200, json={"data": {"products": None}, "errors": [{"message": "Product not found"}]}
        )
    )

    response = await stitched_client.post("/graphql", json={"query": "{ products { id } }"})

    assert response.status_code == 200
    error = response.json()["errors"][0]
    assert error["message"] == "Product not found"
    assert error["userMessage"] == "resource not found, verify input and retry"
    assert error["extensions"]["code"] == "NOT_FOUND"
