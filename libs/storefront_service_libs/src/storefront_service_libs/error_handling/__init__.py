"""Error handling utilities for storefront services."""

from .error_enums import HTTP_STATUS_BY_ERROR_CODE, ErrorCode
from .error_models import ErrorDetail
from .factories import (
    create_error_detail,
    raise_bad_request_error,
    raise_gateway_timeout_error,
    raise_internal_server_error,
    raise_invalid_response_error,
    raise_service_unavailable_error,
)
from .gateway_error import GatewayServiceError

__all__ = [
    "ErrorCode",
    "ErrorDetail",
    "GatewayServiceError",
    "HTTP_STATUS_BY_ERROR_CODE",
    "create_error_detail",
    "raise_bad_request_error",
    "raise_gateway_timeout_error",
    "raise_internal_server_error",
    "raise_invalid_response_error",
    "raise_service_unavailable_error",
]
