"""Unified GraphQL schema served by the gateway in stitched mode.

Each resolver is a thin adapter: it forwards its pinned sub-query to the
owning backend and reshapes the returned slice through the ACL transformers.
"""

from __future__ import annotations

import strawberry
from strawberry.types import Info

from services.graphql_gateway_service.acl_transformers import (
    input_to_variables,
    to_auth_payload,
    to_category,
    to_list,
    to_order,
    to_product,
    to_user,
)
from services.graphql_gateway_service.stitching import documents
from services.graphql_gateway_service.stitching.error_extension import GatewayErrorExtension
from services.graphql_gateway_service.stitching.forwarding import resolve_stitched_field
from services.graphql_gateway_service.stitching.types import (
    AuthPayload,
    Category,
    CategoryInput,
    LoginInput,
    Order,
    OrderInput,
    Product,
    ProductInput,
    ProductUpdateInput,
    RegisterInput,
    User,
)


@strawberry.type
class Query:
    @strawberry.field(description="The authenticated user")
    async def me(self, info: Info) -> User | None:
        return to_user(await resolve_stitched_field(info.context, documents.ME))

    @strawberry.field
    async def products(self, info: Info) -> list[Product]:
        payload = await resolve_stitched_field(info.context, documents.PRODUCTS)
        return to_list(payload, to_product)

    @strawberry.field
    async def product(self, info: Info, id: strawberry.ID) -> Product | None:
        payload = await resolve_stitched_field(info.context, documents.PRODUCT, {"id": id})
        return to_product(payload)

    @strawberry.field
    async def categories(self, info: Info) -> list[Category]:
        payload = await resolve_stitched_field(info.context, documents.CATEGORIES)
        return to_list(payload, to_category)

    @strawberry.field
    async def category(self, info: Info, id: strawberry.ID) -> Category | None:
        payload = await resolve_stitched_field(info.context, documents.CATEGORY, {"id": id})
        return to_category(payload)

    @strawberry.field(description="Orders visible to the authenticated user")
    async def orders(self, info: Info) -> list[Order]:
        payload = await resolve_stitched_field(info.context, documents.ORDERS)
        return to_list(payload, to_order)

    @strawberry.field
    async def order(self, info: Info, id: strawberry.ID) -> Order | None:
        payload = await resolve_stitched_field(info.context, documents.ORDER, {"id": id})
        return to_order(payload)


@strawberry.type
class Mutation:
    @strawberry.mutation
    async def login(self, info: Info, input: LoginInput) -> AuthPayload | None:
        payload = await resolve_stitched_field(
            info.context, documents.LOGIN, {"input": input_to_variables(input)}
        )
        return to_auth_payload(payload)

    @strawberry.mutation
    async def register(self, info: Info, input: RegisterInput) -> AuthPayload | None:
        payload = await resolve_stitched_field(
            info.context, documents.REGISTER, {"input": input_to_variables(input)}
        )
        return to_auth_payload(payload)

    @strawberry.mutation
    async def register_admin(self, info: Info, input: RegisterInput) -> AuthPayload | None:
        payload = await resolve_stitched_field(
            info.context, documents.REGISTER_ADMIN, {"input": input_to_variables(input)}
        )
        return to_auth_payload(payload)

    @strawberry.mutation
    async def register_vendor(self, info: Info, input: RegisterInput) -> AuthPayload | None:
        payload = await resolve_stitched_field(
            info.context, documents.REGISTER_VENDOR, {"input": input_to_variables(input)}
        )
        return to_auth_payload(payload)

    @strawberry.mutation
    async def add_to_favorites(self, info: Info, product_id: strawberry.ID) -> User | None:
        payload = await resolve_stitched_field(
            info.context, documents.ADD_TO_FAVORITES, {"productId": product_id}
        )
        return to_user(payload)

    @strawberry.mutation
    async def remove_from_favorites(self, info: Info, product_id: strawberry.ID) -> User | None:
        payload = await resolve_stitched_field(
            info.context, documents.REMOVE_FROM_FAVORITES, {"productId": product_id}
        )
        return to_user(payload)

    @strawberry.mutation
    async def create_category(self, info: Info, input: CategoryInput) -> Category | None:
        payload = await resolve_stitched_field(
            info.context, documents.CREATE_CATEGORY, {"input": input_to_variables(input)}
        )
        return to_category(payload)

    @strawberry.mutation
    async def create_product(self, info: Info, input: ProductInput) -> Product | None:
        payload = await resolve_stitched_field(
            info.context, documents.CREATE_PRODUCT, {"input": input_to_variables(input)}
        )
        return to_product(payload)

    @strawberry.mutation
    async def update_product(
        self, info: Info, id: strawberry.ID, input: ProductUpdateInput
    ) -> Product | None:
        payload = await resolve_stitched_field(
            info.context,
            documents.UPDATE_PRODUCT,
            {"id": id, "input": input_to_variables(input)},
        )
        return to_product(payload)

    @strawberry.mutation
    async def delete_product(self, info: Info, id: strawberry.ID) -> bool:
        payload = await resolve_stitched_field(info.context, documents.DELETE_PRODUCT, {"id": id})
        return bool(payload)

    @strawberry.mutation
    async def create_order(self, info: Info, input: OrderInput) -> Order | None:
        payload = await resolve_stitched_field(
            info.context, documents.CREATE_ORDER, {"input": input_to_variables(input)}
        )
        return to_order(payload)

    @strawberry.mutation
    async def update_order_status(
        self, info: Info, id: strawberry.ID, status: str
    ) -> Order | None:
        payload = await resolve_stitched_field(
            info.context, documents.UPDATE_ORDER_STATUS, {"id": id, "status": status}
        )
        return to_order(payload)


def build_schema() -> strawberry.Schema:
    """Build the unified schema with the gateway error-formatting hook."""
    return strawberry.Schema(
        query=Query,
        mutation=Mutation,
        extensions=[GatewayErrorExtension],
    )
