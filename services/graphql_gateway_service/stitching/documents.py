"""Fixed backend sub-queries, one per unified-schema field."""

from __future__ import annotations

from services.graphql_gateway_service.models import Backend
from services.graphql_gateway_service.stitching.forwarding import StitchedField

USER_FIELDS = "id name email role favorites"
CATEGORY_FIELDS = "id name description"
PRODUCT_FIELDS = (
    "id name description price stock imageUrl vendorId createdAt "
    f"category {{ {CATEGORY_FIELDS} }}"
)
ORDER_FIELDS = "id userId total status createdAt items { productId quantity price }"
AUTH_PAYLOAD_FIELDS = f"token user {{ {USER_FIELDS} }}"

# Auth service

ME = StitchedField(Backend.AUTH, "me", f"query Me {{ me {{ {USER_FIELDS} }} }}")

LOGIN = StitchedField(
    Backend.AUTH,
    "login",
    "mutation Login($input: LoginInput!) "
    f"{{ login(input: $input) {{ {AUTH_PAYLOAD_FIELDS} }} }}",
)

REGISTER = StitchedField(
    Backend.AUTH,
    "register",
    "mutation Register($input: RegisterInput!) "
    f"{{ register(input: $input) {{ {AUTH_PAYLOAD_FIELDS} }} }}",
)

REGISTER_ADMIN = StitchedField(
    Backend.AUTH,
    "registerAdmin",
    "mutation RegisterAdmin($input: RegisterInput!) "
    f"{{ registerAdmin(input: $input) {{ {AUTH_PAYLOAD_FIELDS} }} }}",
)

REGISTER_VENDOR = StitchedField(
    Backend.AUTH,
    "registerVendor",
    "mutation RegisterVendor($input: RegisterInput!) "
    f"{{ registerVendor(input: $input) {{ {AUTH_PAYLOAD_FIELDS} }} }}",
)

ADD_TO_FAVORITES = StitchedField(
    Backend.AUTH,
    "addToFavorites",
    "mutation AddToFavorites($productId: ID!) "
    f"{{ addToFavorites(productId: $productId) {{ {USER_FIELDS} }} }}",
)

REMOVE_FROM_FAVORITES = StitchedField(
    Backend.AUTH,
    "removeFromFavorites",
    "mutation RemoveFromFavorites($productId: ID!) "
    f"{{ removeFromFavorites(productId: $productId) {{ {USER_FIELDS} }} }}",
)

# Products service

PRODUCTS = StitchedField(
    Backend.PRODUCTS, "products", f"query Products {{ products {{ {PRODUCT_FIELDS} }} }}"
)

PRODUCT = StitchedField(
    Backend.PRODUCTS,
    "product",
    f"query Product($id: ID!) {{ product(id: $id) {{ {PRODUCT_FIELDS} }} }}",
)

CATEGORIES = StitchedField(
    Backend.PRODUCTS,
    "categories",
    f"query Categories {{ categories {{ {CATEGORY_FIELDS} }} }}",
)

CATEGORY = StitchedField(
    Backend.PRODUCTS,
    "category",
    f"query Category($id: ID!) {{ category(id: $id) {{ {CATEGORY_FIELDS} }} }}",
)

ORDERS = StitchedField(
    Backend.PRODUCTS, "orders", f"query Orders {{ orders {{ {ORDER_FIELDS} }} }}"
)

ORDER = StitchedField(
    Backend.PRODUCTS,
    "order",
    f"query Order($id: ID!) {{ order(id: $id) {{ {ORDER_FIELDS} }} }}",
)

CREATE_CATEGORY = StitchedField(
    Backend.PRODUCTS,
    "createCategory",
    "mutation CreateCategory($input: CategoryInput!) "
    f"{{ createCategory(input: $input) {{ {CATEGORY_FIELDS} }} }}",
)

CREATE_PRODUCT = StitchedField(
    Backend.PRODUCTS,
    "createProduct",
    "mutation CreateProduct($input: ProductInput!) "
    f"{{ createProduct(input: $input) {{ {PRODUCT_FIELDS} }} }}",
)

UPDATE_PRODUCT = StitchedField(
    Backend.PRODUCTS,
    "updateProduct",
    "mutation UpdateProduct($id: ID!, $input: ProductUpdateInput!) "
    f"{{ updateProduct(id: $id, input: $input) {{ {PRODUCT_FIELDS} }} }}",
)

DELETE_PRODUCT = StitchedField(
    Backend.PRODUCTS,
    "deleteProduct",
    "mutation DeleteProduct($id: ID!) { deleteProduct(id: $id) }",
)

CREATE_ORDER = StitchedField(
    Backend.PRODUCTS,
    "createOrder",
    "mutation CreateOrder($input: OrderInput!) "
    f"{{ createOrder(input: $input) {{ {ORDER_FIELDS} }} }}",
)

UPDATE_ORDER_STATUS = StitchedField(
    Backend.PRODUCTS,
    "updateOrderStatus",
    "mutation UpdateOrderStatus($id: ID!, $status: String!) "
    f"{{ updateOrderStatus(id: $id, status: $status) {{ {ORDER_FIELDS} }} }}",
)
