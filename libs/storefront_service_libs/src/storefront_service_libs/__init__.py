"""
Storefront Service Libraries Package.

Shared utilities used across the storefront services: structured logging
and the gateway error taxonomy.
"""

from .logging_utils import configure_service_logging, create_service_logger

__all__ = [
    "configure_service_logging",
    "create_service_logger",
]

# Framework-specific error handlers should be imported directly from:
# - storefront_service_libs.error_handling.fastapi
