"""
Operation classifier for raw pass-through dispatch.

Decides which backend owns a GraphQL operation by inspecting its raw text.
This is a keyword heuristic over the query string, not a parse of the
operation: the pattern tables and the ordered tie-break below are the
routing contract.

Order (first match wins):
1. auth keywords matched and products keywords not matched -> auth
2. products keywords matched (with or without auth keywords) -> products
3. the substring "me" anywhere in the text -> auth ("me query")
4. otherwise -> products ("default fallback")
"""

from __future__ import annotations

import re

from services.graphql_gateway_service.models import Backend, RouteDecision
from storefront_service_libs.logging_utils import create_service_logger

logger = create_service_logger("graphql_gateway.classifier")

AUTH_KEYWORDS: tuple[str, ...] = (
    "login",
    "register",
    "registerAdmin",
    "registerVendor",
    "token",
    "me",
    "password",
    "addToFavorites",
    "removeFromFavorites",
)

PRODUCTS_KEYWORDS: tuple[str, ...] = (
    "Product",
    "Order",
    "Category",
    "categories",
    "products",
    "createCategory",
    "createProduct",
    "updateProduct",
    "deleteProduct",
)

# Products win ties so an ambiguous operation lands on the products backend
AUTH_PATTERN = re.compile(r"\b(" + "|".join(AUTH_KEYWORDS) + r")\b")
PRODUCTS_PATTERN = re.compile(r"\b(" + "|".join(PRODUCTS_KEYWORDS) + r")\b")

UNMATCHED_LOG_PREVIEW_CHARS = 100

ME_QUERY_REASON = "me query"
DEFAULT_FALLBACK_REASON = "default fallback"


def classify(raw_query_text: str | None) -> RouteDecision:
    """Return the backend owning ``raw_query_text``. Never raises."""
    text = raw_query_text if isinstance(raw_query_text, str) else ""

    auth_match = AUTH_PATTERN.search(text)
    products_match = PRODUCTS_PATTERN.search(text)

    if auth_match and not products_match:
        return RouteDecision(Backend.AUTH, f"auth keyword: {auth_match.group(1)}")
    if products_match:
        return RouteDecision(Backend.PRODUCTS, f"products keyword: {products_match.group(1)}")

    if "me" in text:
        return RouteDecision(Backend.AUTH, ME_QUERY_REASON)

    logger.warning(
        "No routing keyword matched, using default backend",
        backend=Backend.PRODUCTS.value,
        operation_preview=text[:UNMATCHED_LOG_PREVIEW_CHARS],
        operation_length=len(text),
    )
    return RouteDecision(Backend.PRODUCTS, DEFAULT_FALLBACK_REASON)
