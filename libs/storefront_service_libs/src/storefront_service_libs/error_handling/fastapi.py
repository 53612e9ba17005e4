"""FastAPI integration for storefront error handling."""

from __future__ import annotations

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from storefront_service_libs.error_handling.error_enums import ErrorCode
from storefront_service_libs.error_handling.gateway_error import GatewayServiceError
from storefront_service_libs.logging_utils import create_service_logger

logger = create_service_logger("storefront_service_libs.error_handling.fastapi")

CORRELATION_ID_HEADER = "X-Correlation-ID"


def register_error_handlers(app: FastAPI) -> None:
    """Register handlers rendering every failure as a GatewayError body."""

    @app.exception_handler(GatewayServiceError)
    async def handle_gateway_service_error(
        request: Request, exc: GatewayServiceError
    ) -> JSONResponse:
        detail = exc.error_detail
        logger.warning(
            "Dispatch-level error",
            error_code=detail.error_code.value,
            service=detail.service,
            operation=detail.operation,
            details=detail.details,
            path=request.url.path,
        )
        return JSONResponse(status_code=exc.status_code, content=exc.to_response_body())

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception) -> JSONResponse:
        logger.error(f"Unhandled error on {request.url.path}: {exc}", exc_info=True)
        # Rendered outside the request middlewares, so echo the correlation id here
        correlation_id = getattr(request.state, "correlation_id", None)
        headers = {CORRELATION_ID_HEADER: str(correlation_id)} if correlation_id else None
        return JSONResponse(
            status_code=500,
            headers=headers,
            content={
                "errors": [
                    {
                        "message": "Internal server error",
                        "details": str(exc),
                        "code": ErrorCode.INTERNAL_SERVER_ERROR.value,
                        "path": request.url.path,
                    }
                ]
            },
        )
