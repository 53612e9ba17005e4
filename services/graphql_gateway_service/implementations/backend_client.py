"""Backend client implementation for GraphQL Gateway Service.

This module provides the single outbound unit of work of the gateway: POST
one GraphQL envelope to one backend and parse the JSON answer, bounded by a
hard deadline. The deadline cancels the in-flight request; httpx closes the
connection on cancellation, so nothing keeps talking to the backend after
the gateway has given up.
"""

from __future__ import annotations

import asyncio
import json

import httpx

from services.graphql_gateway_service.exceptions import (
    UpstreamBadResponse,
    UpstreamError,
    UpstreamTimeout,
    UpstreamUnreachable,
)
from services.graphql_gateway_service.models import Backend, BackendResult, ForwardEnvelope
from services.graphql_gateway_service.protocols import BackendClientProtocol, MetricsProtocol
from storefront_service_libs.logging_utils import create_service_logger

logger = create_service_logger("graphql_gateway.backend_client")

DEFAULT_BACKEND_TIMEOUT_SECONDS = 10.0

TYPENAME_PROBE_QUERY = "{ __typename }"


class HttpBackendClient(BackendClientProtocol):
    """Backend client over a shared httpx AsyncClient."""

    def __init__(self, client: httpx.AsyncClient, metrics: MetricsProtocol) -> None:
        """Initialize the backend client.

        Args:
            client: The underlying httpx AsyncClient to use
            metrics: Gateway metrics for downstream call accounting
        """
        self._client = client
        self._metrics = metrics

    async def call(
        self,
        backend: Backend,
        url: str,
        envelope: ForwardEnvelope,
        timeout_seconds: float = DEFAULT_BACKEND_TIMEOUT_SECONDS,
    ) -> BackendResult:
        """POST ``envelope`` to ``url`` and return the parsed JSON body.

        Args:
            backend: Which backend ``url`` belongs to (for errors and metrics)
            url: Backend GraphQL endpoint
            envelope: Query, variables and forwarded Authorization header
            timeout_seconds: Hard deadline for the whole exchange

        Returns:
            The backend's JSON object, ``{"data": ..., "errors": [...]}``

        Raises:
            UpstreamTimeout: No complete response before the deadline
            UpstreamUnreachable: Connection refused or name resolution failed
            UpstreamBadResponse: Non-2xx status or a body that is not a JSON object
        """
        headers = {"Content-Type": "application/json", **envelope.headers}
        logger.debug(
            f"Forwarding operation to {backend.value} backend",
            url=url,
            headers=headers,
            timeout_seconds=timeout_seconds,
        )

        outcome = "success"
        with self._metrics.downstream_service_call_duration_seconds.labels(
            service=backend.value
        ).time():
            try:
                result = await self._post(backend, url, envelope, headers, timeout_seconds)
            except UpstreamError as e:
                outcome = e.error_code.value.lower()
                raise
            finally:
                self._metrics.downstream_service_calls_total.labels(
                    service=backend.value, outcome=outcome
                ).inc()
        return result

    async def _post(
        self,
        backend: Backend,
        url: str,
        envelope: ForwardEnvelope,
        headers: dict[str, str],
        timeout_seconds: float,
    ) -> BackendResult:
        try:
            async with asyncio.timeout(timeout_seconds):
                response = await self._client.post(
                    url, json=envelope.to_json_body(), headers=headers
                )
        except (TimeoutError, httpx.TimeoutException) as e:
            logger.warning(
                f"{backend.value} backend timed out",
                url=url,
                timeout_seconds=timeout_seconds,
            )
            raise UpstreamTimeout(backend, url, timeout_seconds) from e
        except httpx.ConnectError as e:
            logger.warning(f"{backend.value} backend unreachable: {e}", url=url)
            raise UpstreamUnreachable(backend, url, f"cannot connect to {url}: {e}") from e
        except httpx.HTTPError as e:
            logger.warning(f"{backend.value} backend transport error: {e}", url=url)
            raise UpstreamBadResponse(backend, url, f"transport error: {e}") from e

        if not response.is_success:
            raise UpstreamBadResponse(
                backend,
                url,
                f"backend answered with HTTP {response.status_code}",
                status_code=response.status_code,
            )

        try:
            payload = response.json()
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            raise UpstreamBadResponse(
                backend,
                url,
                f"response body is not valid JSON: {e}",
                status_code=response.status_code,
                parse_error=True,
            ) from e

        if not isinstance(payload, dict):
            raise UpstreamBadResponse(
                backend,
                url,
                f"expected a JSON object, got {type(payload).__name__}",
                status_code=response.status_code,
                parse_error=True,
            )
        return payload

    async def probe(self, backend: Backend, url: str, timeout_seconds: float) -> bool:
        try:
            await self.call(
                backend, url, ForwardEnvelope.build(TYPENAME_PROBE_QUERY), timeout_seconds
            )
        except UpstreamError as e:
            logger.info(f"{backend.value} backend probe failed: {e.details}", url=url)
            return False
        return True
