"""
Tests for health and metrics routes in GraphQL Gateway Service.

Backends are probed over HTTP; respx decides which of them answer.
"""

from __future__ import annotations

import httpx
from httpx import AsyncClient, Response
from respx import MockRouter

from services.graphql_gateway_service.tests.gateway_test_providers import AUTH_URL, PRODUCTS_URL


def typename_ok() -> Response:
    return Response(200, json={"data": {"__typename": "Query"}})


async def test_health_is_ok_when_both_backends_answer(
    stitched_client: AsyncClient, respx_mock: MockRouter
) -> None:
    # Arrange
    auth_route = respx_mock.post(AUTH_URL).mock(return_value=typename_ok())
    respx_mock.post(PRODUCTS_URL).mock(return_value=typename_ok())

    # Act
    response = await stitched_client.get("/health")

    # Assert
    assert response.status_code == 200
    assert response.json() == {
        "status": "ok",
        "services": {
            "auth": {"url": AUTH_URL, "status": "up"},
            "products": {"url": PRODUCTS_URL, "status": "up"},
        },
    }
    assert b"__typename" in auth_route.calls.last.request.content


async def test_health_is_degraded_when_a_backend_is_down(
    stitched_client: AsyncClient, respx_mock: MockRouter
) -> None:
    respx_mock.post(AUTH_URL).mock(return_value=typename_ok())
    respx_mock.post(PRODUCTS_URL).mock(side_effect=httpx.ConnectError)

    response = await stitched_client.get("/health")

    assert response.status_code == 200
    body = response.json()
    assert body["status"] == "degraded"
    assert body["services"]["auth"]["status"] == "up"
    assert body["services"]["products"]["status"] == "down"


async def test_health_treats_server_errors_as_down(
    passthrough_client: AsyncClient, respx_mock: MockRouter
) -> None:
    respx_mock.post(AUTH_URL).mock(return_value=Response(500, text="boom"))
    respx_mock.post(PRODUCTS_URL).mock(side_effect=httpx.ReadTimeout)

    response = await passthrough_client.get("/health")

    assert response.status_code == 200
    body = response.json()
    assert body["status"] == "degraded"
    assert body["services"]["auth"]["status"] == "down"
    assert body["services"]["products"]["status"] == "down"


async def test_metrics_exposes_gateway_counters(
    passthrough_client: AsyncClient, respx_mock: MockRouter
) -> None:
    respx_mock.post(PRODUCTS_URL).mock(return_value=Response(200, json={"data": {"products": []}}))
    await passthrough_client.post("/graphql", json={"query": "{ products { id } }"})

    response = await passthrough_client.get("/metrics")

    assert response.status_code == 200
    assert "gateway_route_decisions_total" in response.text
    # Label order in the exposition format varies across prometheus_client releases
    samples = [
        line
        for line in response.text.splitlines()
        if line.startswith("gateway_downstream_service_calls_total{")
    ]
    assert any(
        'service="products"' in line and 'outcome="success"' in line and line.endswith(" 1.0")
        for line in samples
    )
