"""
Anti-Corruption Layer transformers for the stitched schema.

Backend payloads arrive as camelCase JSON; the unified schema exposes
strawberry types. These functions map one onto the other so the client
contract stays stable while the backends evolve, and turn strawberry input
objects back into camelCase variables for the sub-queries.
"""

from __future__ import annotations

import dataclasses
from typing import Any

from strawberry.utils.str_converters import to_camel_case

from services.graphql_gateway_service.stitching.types import (
    AuthPayload,
    Category,
    Order,
    OrderItem,
    Product,
    User,
)
from storefront_service_libs.logging_utils import create_service_logger

logger = create_service_logger("graphql_gateway.acl_transformers")


def _camelize(value: Any) -> Any:
    if isinstance(value, dict):
        return {
            to_camel_case(key): _camelize(item) for key, item in value.items() if item is not None
        }
    if isinstance(value, list):
        return [_camelize(item) for item in value]
    return value


def input_to_variables(input_object: Any) -> dict[str, Any]:
    """
    Convert a strawberry input object into backend variables.

    Optional fields left as None are omitted so partial updates only send
    what the client set.
    """
    return _camelize(dataclasses.asdict(input_object))


def _optional_str(value: Any) -> str | None:
    return None if value is None else str(value)


def to_user(payload: dict[str, Any] | None) -> User | None:
    if payload is None:
        return None
    return User(
        id=str(payload["id"]),
        name=payload.get("name", ""),
        email=payload.get("email", ""),
        role=payload.get("role", ""),
        favorites=[str(product_id) for product_id in payload.get("favorites") or []],
    )


def to_auth_payload(payload: dict[str, Any] | None) -> AuthPayload | None:
    if payload is None:
        return None
    return AuthPayload(token=payload["token"], user=to_user(payload.get("user")))


def to_category(payload: dict[str, Any] | None) -> Category | None:
    if payload is None:
        return None
    return Category(
        id=str(payload["id"]),
        name=payload.get("name", ""),
        description=payload.get("description"),
    )


def to_product(payload: dict[str, Any] | None) -> Product | None:
    if payload is None:
        return None
    return Product(
        id=str(payload["id"]),
        name=payload.get("name", ""),
        description=payload.get("description"),
        price=float(payload.get("price") or 0),
        stock=int(payload.get("stock") or 0),
        image_url=payload.get("imageUrl"),
        vendor_id=_optional_str(payload.get("vendorId")),
        category=to_category(payload.get("category")),
        created_at=_optional_str(payload.get("createdAt")),
    )


def to_order_item(payload: dict[str, Any]) -> OrderItem:
    return OrderItem(
        product_id=str(payload["productId"]),
        quantity=int(payload.get("quantity") or 0),
        price=float(payload.get("price") or 0),
    )


def to_order(payload: dict[str, Any] | None) -> Order | None:
    if payload is None:
        return None
    return Order(
        id=str(payload["id"]),
        user_id=str(payload["userId"]),
        items=[to_order_item(item) for item in payload.get("items") or []],
        total=float(payload.get("total") or 0),
        status=payload.get("status", ""),
        created_at=_optional_str(payload.get("createdAt")),
    )


def to_list(payload: list[dict[str, Any]] | None, transform: Any) -> list[Any]:
    """Apply ``transform`` to every entry, dropping entries it maps to None."""
    if not payload:
        return []
    items = [transform(entry) for entry in payload]
    dropped = items.count(None)
    if dropped:
        logger.warning(f"Dropped {dropped} null entries from backend list payload")
    return [item for item in items if item is not None]
