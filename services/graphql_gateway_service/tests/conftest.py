"""
Unified test configuration for GraphQL Gateway Service.

Every app-level fixture builds its own DI container from the test
providers, so each test gets fresh metrics and a fresh HTTP client.
"""

from __future__ import annotations

from collections.abc import AsyncIterator

import httpx
import pytest
from prometheus_client import CollectorRegistry

from services.graphql_gateway_service.app.main import create_app
from services.graphql_gateway_service.app.metrics import GatewayMetrics
from services.graphql_gateway_service.config import GatewayMode, Settings
from services.graphql_gateway_service.tests.gateway_test_providers import (
    FakeBackendClient,
    make_container,
    make_settings,
)


@pytest.fixture
def registry() -> CollectorRegistry:
    return CollectorRegistry()


@pytest.fixture
def metrics(registry: CollectorRegistry) -> GatewayMetrics:
    """GatewayMetrics bound to an isolated registry."""
    return GatewayMetrics(registry=registry)


@pytest.fixture
def fake_backend_client() -> FakeBackendClient:
    return FakeBackendClient()


@pytest.fixture
def stitched_settings() -> Settings:
    return make_settings(GatewayMode.STITCHED)


@pytest.fixture
def passthrough_settings() -> Settings:
    return make_settings(GatewayMode.PASSTHROUGH)


@pytest.fixture
async def stitched_client(stitched_settings: Settings) -> AsyncIterator[httpx.AsyncClient]:
    """In-process client for an app serving the unified schema."""
    container = make_container(stitched_settings)
    app = create_app(stitched_settings, container=container)
    async with httpx.AsyncClient(
        transport=httpx.ASGITransport(app=app), base_url="http://test"
    ) as client:
        yield client
    await container.close()


@pytest.fixture
async def passthrough_client(passthrough_settings: Settings) -> AsyncIterator[httpx.AsyncClient]:
    """In-process client for an app forwarding raw operations."""
    container = make_container(passthrough_settings)
    app = create_app(passthrough_settings, container=container)
    async with httpx.AsyncClient(
        transport=httpx.ASGITransport(app=app), base_url="http://test"
    ) as client:
        yield client
    await container.close()
