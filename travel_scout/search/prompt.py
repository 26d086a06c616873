from __future__ import annotations

import json
import math
from dataclasses import dataclass

from ..catalog.models import CatalogIndex
from .models import SearchRequest

SEARCH_INSTRUCTIONS = """\
You are a travel recommendation assistant.

You MUST:
- Only return items from the provided inventory.
- Never invent destinations.
- Only return IDs that exist in the inventory.
- Respect min/max price and selected tags.
- If nothing matches, return empty results.

Return ONLY valid JSON in this exact format:
{
  "results": [
    { "id": <number>, "reason": "<short explanation>" }
  ]
}"""


@dataclass(frozen=True)
class PromptPayload:
    instructions: str
    context: str


def _format_price(value: float) -> str:
    if math.isinf(value):
        return "Infinity" if value > 0 else "-Infinity"
    return json.dumps(value)


def build_prompt(request: SearchRequest, catalog: CatalogIndex) -> PromptPayload:
    """
    Render the instructions and per-request context for the LLM.

    The whole catalog is serialised as-is so the reply can later be checked
    against exactly the list the model was shown.
    """
    lines = [
        f"User query: {json.dumps(request.query, ensure_ascii=False)}",
        f"Min price: {_format_price(request.min_price)}, "
        f"Max price: {_format_price(request.max_price)}",
        f"Selected tags: {json.dumps(list(request.selected_tags), ensure_ascii=False)}",
        "",
        f"Inventory: {json.dumps(catalog.to_records(), ensure_ascii=False)}",
    ]
    return PromptPayload(instructions=SEARCH_INSTRUCTIONS, context="\n".join(lines))
