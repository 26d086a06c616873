from __future__ import annotations

import json

from pydantic import ValidationError

from .errors import ParseError, SchemaError
from .models import ModelReply, Recommendation


def parse_response(raw: str) -> list[Recommendation]:
    """
    Turn the raw LLM reply into typed recommendations.

    Raises ``ParseError`` when the text is not JSON and ``SchemaError`` when
    it is JSON of the wrong shape. Catalog membership is not checked here.
    A blank reply yields an empty list.
    """
    if not raw or not raw.strip():
        return []

    try:
        parsed = json.loads(raw)
    except (TypeError, ValueError) as exc:
        raise ParseError("LLM reply is not valid JSON") from exc

    try:
        reply = ModelReply.model_validate(parsed)
    except ValidationError as exc:
        raise SchemaError(f"LLM reply does not match the results schema: {exc}") from exc

    return reply.results
