"""Upstream failure exceptions for GraphQL Gateway Service."""

from __future__ import annotations

from services.graphql_gateway_service.models import Backend
from storefront_service_libs.error_handling import ErrorCode


class UpstreamError(Exception):
    """Base exception: a backend call produced no usable response."""

    error_code: ErrorCode = ErrorCode.INTERNAL_SERVER_ERROR

    def __init__(self, backend: Backend, url: str, details: str) -> None:
        super().__init__(f"{backend.value} backend call failed: {details}")
        self.backend = backend
        self.url = url
        self.details = details


class UpstreamTimeout(UpstreamError):
    """Raised when no response arrived before the deadline."""

    error_code = ErrorCode.GATEWAY_TIMEOUT

    def __init__(self, backend: Backend, url: str, timeout_seconds: float) -> None:
        super().__init__(
            backend, url, f"no response from {url} within {timeout_seconds:g} seconds"
        )
        self.timeout_seconds = timeout_seconds


class UpstreamUnreachable(UpstreamError):
    """Raised when the connection could not be established."""

    error_code = ErrorCode.SERVICE_UNAVAILABLE


class UpstreamBadResponse(UpstreamError):
    """Raised on a non-2xx status or a body that is not JSON."""

    def __init__(
        self,
        backend: Backend,
        url: str,
        details: str,
        *,
        status_code: int | None = None,
        parse_error: bool = False,
    ) -> None:
        super().__init__(backend, url, details)
        self.status_code = status_code
        self.parse_error = parse_error
        self.error_code = (
            ErrorCode.INVALID_RESPONSE if parse_error else ErrorCode.INTERNAL_SERVER_ERROR
        )
