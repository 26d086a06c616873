from __future__ import annotations

import math
from typing import Any

from ..catalog.models import CatalogIndex
from .errors import SearchValidationError, ValidationErrorKind
from .models import SearchRequest

PRICE_TYPE_MESSAGE = "minPrice and maxPrice must be numbers"
QUERY_TYPE_MESSAGE = "query must be a string"
BODY_TYPE_MESSAGE = "Request body must be a JSON object"
RANGE_MESSAGE = "Min price cannot exceed max price"
TAG_MESSAGE = "Invalid tags selected"


def _is_number(value: Any) -> bool:
    # bool is an int subclass; JSON true/false are not prices
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return False
    try:
        # ints beyond float range cannot be held by SearchRequest
        return not math.isnan(float(value))
    except OverflowError:
        return False


def validate_request(payload: Any, catalog: CatalogIndex) -> SearchRequest:
    """
    Check a decoded request body and return a ``SearchRequest``.

    Absent keys get defaults (``query=""``, ``minPrice=0``, ``maxPrice=inf``,
    ``selectedTags=[]``). Raises ``SearchValidationError`` on bad types,
    an inverted price range, or tags outside the catalog vocabulary.
    """
    if not isinstance(payload, dict):
        raise SearchValidationError(ValidationErrorKind.TYPE, BODY_TYPE_MESSAGE)

    query = payload.get("query", "")
    min_price = payload.get("minPrice", 0)
    max_price = payload.get("maxPrice", math.inf)
    selected_tags = payload.get("selectedTags", [])

    if not _is_number(min_price) or not _is_number(max_price):
        raise SearchValidationError(ValidationErrorKind.TYPE, PRICE_TYPE_MESSAGE)

    if not isinstance(query, str):
        raise SearchValidationError(ValidationErrorKind.TYPE, QUERY_TYPE_MESSAGE)

    if min_price > max_price:
        raise SearchValidationError(ValidationErrorKind.RANGE, RANGE_MESSAGE)

    if not isinstance(selected_tags, list) or not all(
        isinstance(tag, str) and tag in catalog.allowed_tags for tag in selected_tags
    ):
        raise SearchValidationError(ValidationErrorKind.TAG, TAG_MESSAGE)

    return SearchRequest(
        query=query,
        min_price=min_price,
        max_price=max_price,
        selected_tags=tuple(selected_tags),
    )
