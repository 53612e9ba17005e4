"""
Core exception carrying a structured ErrorDetail.

Raised by gateway code paths that could not obtain a backend response and
rendered by the FastAPI handlers into the outward GatewayError shape.
"""

from __future__ import annotations

from typing import Any

from storefront_service_libs.error_handling.error_enums import (
    HTTP_STATUS_BY_ERROR_CODE,
    ErrorCode,
)
from storefront_service_libs.error_handling.error_models import ErrorDetail


class GatewayServiceError(Exception):
    """Exception wrapping an ErrorDetail with a transport status."""

    def __init__(self, error_detail: ErrorDetail) -> None:
        super().__init__(error_detail.message)
        self.error_detail = error_detail

    @property
    def error_code(self) -> ErrorCode:
        return self.error_detail.error_code

    @property
    def status_code(self) -> int:
        return HTTP_STATUS_BY_ERROR_CODE.get(self.error_detail.error_code, 500)

    def to_response_body(self) -> dict[str, Any]:
        """Render the `{errors: [{message, details, code, path}]}` envelope."""
        return {
            "errors": [
                {
                    "message": self.error_detail.message,
                    "details": self.error_detail.details,
                    "code": self.error_detail.error_code.value,
                    "path": self.error_detail.path,
                }
            ]
        }

    def __str__(self) -> str:
        return f"[{self.error_detail.error_code.value}] {self.error_detail.message}"
