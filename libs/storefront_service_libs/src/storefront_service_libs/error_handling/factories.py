"""
Factory functions that build and raise GatewayServiceError.

Each factory takes the service/operation that failed plus the underlying
cause, so the outward error keeps enough detail for a caller to tell a
transient timeout from a hard outage.
"""

from __future__ import annotations

from typing import Any, NoReturn

from storefront_service_libs.error_handling.error_enums import ErrorCode
from storefront_service_libs.error_handling.error_models import ErrorDetail
from storefront_service_libs.error_handling.gateway_error import GatewayServiceError


def create_error_detail(
    error_code: ErrorCode,
    message: str,
    service: str,
    operation: str,
    details: str = "",
    path: str = "",
    correlation_id: str | None = None,
    **context: Any,
) -> ErrorDetail:
    return ErrorDetail(
        error_code=error_code,
        message=message,
        details=details,
        path=path,
        service=service,
        operation=operation,
        correlation_id=correlation_id,
        context=context,
    )


def raise_gateway_timeout_error(
    service: str,
    operation: str,
    details: str,
    path: str = "",
    correlation_id: str | None = None,
    **context: Any,
) -> NoReturn:
    raise GatewayServiceError(
        create_error_detail(
            ErrorCode.GATEWAY_TIMEOUT,
            "The backend service did not respond in time",
            service,
            operation,
            details=details,
            path=path,
            correlation_id=correlation_id,
            **context,
        )
    )


def raise_service_unavailable_error(
    service: str,
    operation: str,
    details: str,
    path: str = "",
    correlation_id: str | None = None,
    **context: Any,
) -> NoReturn:
    raise GatewayServiceError(
        create_error_detail(
            ErrorCode.SERVICE_UNAVAILABLE,
            "The backend service is unavailable",
            service,
            operation,
            details=details,
            path=path,
            correlation_id=correlation_id,
            **context,
        )
    )


def raise_invalid_response_error(
    service: str,
    operation: str,
    details: str,
    path: str = "",
    correlation_id: str | None = None,
    **context: Any,
) -> NoReturn:
    raise GatewayServiceError(
        create_error_detail(
            ErrorCode.INVALID_RESPONSE,
            "The backend service returned an invalid response",
            service,
            operation,
            details=details,
            path=path,
            correlation_id=correlation_id,
            **context,
        )
    )


def raise_internal_server_error(
    service: str,
    operation: str,
    details: str,
    path: str = "",
    correlation_id: str | None = None,
    **context: Any,
) -> NoReturn:
    raise GatewayServiceError(
        create_error_detail(
            ErrorCode.INTERNAL_SERVER_ERROR,
            "Internal server error",
            service,
            operation,
            details=details,
            path=path,
            correlation_id=correlation_id,
            **context,
        )
    )


def raise_bad_request_error(
    service: str,
    operation: str,
    details: str,
    path: str = "",
    correlation_id: str | None = None,
    **context: Any,
) -> NoReturn:
    raise GatewayServiceError(
        create_error_detail(
            ErrorCode.BAD_REQUEST,
            "Malformed GraphQL request",
            service,
            operation,
            details=details,
            path=path,
            correlation_id=correlation_id,
            **context,
        )
    )
