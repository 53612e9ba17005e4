"""
storefront_service_libs.error_handling.error_enums - Centralized error codes.
"""

from __future__ import annotations

from enum import Enum


class ErrorCode(str, Enum):
    # Dispatch-level: the gateway could not obtain a backend response
    GATEWAY_TIMEOUT = "GATEWAY_TIMEOUT"
    SERVICE_UNAVAILABLE = "SERVICE_UNAVAILABLE"
    INVALID_RESPONSE = "INVALID_RESPONSE"
    INTERNAL_SERVER_ERROR = "INTERNAL_SERVER_ERROR"
    BAD_REQUEST = "BAD_REQUEST"

    # Operation-level: backend domain errors, as classified for end users
    NOT_FOUND = "NOT_FOUND"
    ALREADY_EXISTS = "ALREADY_EXISTS"
    UNAUTHENTICATED = "UNAUTHENTICATED"
    FORBIDDEN = "FORBIDDEN"


HTTP_STATUS_BY_ERROR_CODE: dict[ErrorCode, int] = {
    ErrorCode.GATEWAY_TIMEOUT: 504,
    ErrorCode.SERVICE_UNAVAILABLE: 503,
    ErrorCode.INVALID_RESPONSE: 500,
    ErrorCode.INTERNAL_SERVER_ERROR: 500,
    ErrorCode.BAD_REQUEST: 400,
}
