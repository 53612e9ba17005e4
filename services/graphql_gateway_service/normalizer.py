"""
Response normalizer for backend GraphQL errors.

Backends phrase domain errors in English or Spanish. Each error message is
matched, case-insensitively and in table order, against substring rules; the
first matching rule adds a user-facing ``userMessage`` and, when the backend
sent none, an ``extensions.code``. Every field the backend sent is kept as-is,
and errors no rule matches are returned untouched.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from services.graphql_gateway_service.models import BackendError, BackendResult
from storefront_service_libs.error_handling import ErrorCode


@dataclass(frozen=True)
class NormalizationRule:
    needles: tuple[str, ...]
    user_message: str
    code: ErrorCode

    def matches(self, message: str) -> bool:
        lowered = message.lower()
        return any(needle in lowered for needle in self.needles)


NORMALIZATION_RULES: tuple[NormalizationRule, ...] = (
    NormalizationRule(
        ("not found", "no encontrado"),
        "resource not found, verify input and retry",
        ErrorCode.NOT_FOUND,
    ),
    NormalizationRule(
        ("already exists", "ya existe"),
        "resource already exists, use a different identifier",
        ErrorCode.ALREADY_EXISTS,
    ),
    NormalizationRule(
        ("unauthenticated", "no autenticado"),
        "session not started or expired, log in again",
        ErrorCode.UNAUTHENTICATED,
    ),
    NormalizationRule(
        ("forbidden", "no autorizado"),
        "insufficient permission for this action",
        ErrorCode.FORBIDDEN,
    ),
)


def match_rule(message: Any) -> NormalizationRule | None:
    """First rule whose needles occur in ``message``, or None."""
    if not isinstance(message, str):
        return None
    for rule in NORMALIZATION_RULES:
        if rule.matches(message):
            return rule
    return None


def normalize_error(error: BackendError) -> BackendError:
    """Enrich a single backend error; unmatched errors are returned unchanged."""
    if not isinstance(error, Mapping):
        return error
    rule = match_rule(error.get("message"))
    if rule is None:
        return error

    enriched = dict(error)
    enriched["userMessage"] = rule.user_message

    extensions = error.get("extensions")
    if extensions is None:
        enriched["extensions"] = {"code": rule.code.value}
    elif isinstance(extensions, Mapping) and "code" not in extensions:
        enriched["extensions"] = {**extensions, "code": rule.code.value}
    return enriched


def normalize(result: BackendResult) -> BackendResult:
    """Return ``result`` with every recognised error enriched. Never raises."""
    if not isinstance(result, Mapping):
        return result
    errors = result.get("errors")
    if not isinstance(errors, list) or not errors:
        return result

    normalized = dict(result)
    normalized["errors"] = [normalize_error(error) for error in errors]
    return normalized
