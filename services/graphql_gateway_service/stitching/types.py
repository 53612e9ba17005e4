"""Unified schema types exposed by the gateway in stitched mode."""

from __future__ import annotations

import strawberry


@strawberry.type(description="Registered account, owned by the auth service")
class User:
    id: strawberry.ID
    name: str
    email: str
    role: str
    favorites: list[strawberry.ID]


@strawberry.type
class AuthPayload:
    token: str
    user: User | None


@strawberry.type
class Category:
    id: strawberry.ID
    name: str
    description: str | None


@strawberry.type(description="Catalog item, owned by the products service")
class Product:
    id: strawberry.ID
    name: str
    description: str | None
    price: float
    stock: int
    image_url: str | None
    vendor_id: strawberry.ID | None
    category: Category | None
    created_at: str | None


@strawberry.type
class OrderItem:
    product_id: strawberry.ID
    quantity: int
    price: float


@strawberry.type
class Order:
    id: strawberry.ID
    user_id: strawberry.ID
    items: list[OrderItem]
    total: float
    status: str
    created_at: str | None


@strawberry.input
class LoginInput:
    email: str
    password: str


@strawberry.input
class RegisterInput:
    name: str
    email: str
    password: str


@strawberry.input
class CategoryInput:
    name: str
    description: str | None = None


@strawberry.input
class ProductInput:
    name: str
    price: float
    stock: int
    category_id: strawberry.ID
    description: str | None = None
    image_url: str | None = None


@strawberry.input
class ProductUpdateInput:
    name: str | None = None
    price: float | None = None
    stock: int | None = None
    category_id: strawberry.ID | None = None
    description: str | None = None
    image_url: str | None = None


@strawberry.input
class OrderItemInput:
    product_id: strawberry.ID
    quantity: int


@strawberry.input
class OrderInput:
    items: list[OrderItemInput]
