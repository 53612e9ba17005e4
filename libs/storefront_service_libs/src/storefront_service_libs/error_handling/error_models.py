"""
Standardized, PURE error data models shared by storefront services.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from storefront_service_libs.error_handling.error_enums import ErrorCode


class ErrorDetail(BaseModel):
    """
    The canonical data model for a gateway-originated error.
    This model contains only data fields and no behavior.
    """

    error_code: ErrorCode
    message: str
    details: str = ""
    path: str = ""
    service: str
    operation: str
    correlation_id: str | None = None
    timestamp: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    context: dict[str, Any] = Field(default_factory=dict)

    model_config = ConfigDict(frozen=True)
