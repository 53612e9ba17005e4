"""
Data models for GraphQL Gateway Service.

Backend results are kept as plain JSON mappings so that fields the gateway
does not know about travel through untouched.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

# Parsed JSON returned by a backend: {"data": ..., "errors": [...]}
BackendResult = dict[str, Any]
# One entry of BackendResult["errors"]: {"message", "extensions", "path", ...}
BackendError = dict[str, Any]


class Backend(str, Enum):
    """The two GraphQL services sitting behind the gateway."""

    AUTH = "auth"
    PRODUCTS = "products"


@dataclass(frozen=True)
class RouteDecision:
    """Which backend owns an operation, and why."""

    backend: Backend
    reason: str


class GraphQLRequest(BaseModel):
    """Inbound GraphQL request body."""

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")

    query: str | None = None
    variables: dict[str, Any] | None = None
    operation_name: str | None = Field(default=None, alias="operationName")


@dataclass(frozen=True)
class ForwardEnvelope:
    """Outbound payload for one backend call."""

    query: str
    variables: dict[str, Any] | None = None
    operation_name: str | None = None
    # At most an Authorization entry, copied verbatim from the inbound request
    headers: dict[str, str] = field(default_factory=dict)

    @classmethod
    def build(
        cls,
        query: str,
        variables: dict[str, Any] | None = None,
        authorization: str | None = None,
        operation_name: str | None = None,
    ) -> ForwardEnvelope:
        headers = {"Authorization": authorization} if authorization else {}
        return cls(
            query=query,
            variables=variables,
            operation_name=operation_name,
            headers=headers,
        )

    def to_json_body(self) -> dict[str, Any]:
        body: dict[str, Any] = {"query": self.query, "variables": self.variables or {}}
        if self.operation_name:
            body["operationName"] = self.operation_name
        return body


@dataclass(frozen=True)
class DispatchResponse:
    """Transport status plus JSON body produced by a dispatcher."""

    status_code: int
    body: dict[str, Any]
