from __future__ import annotations

import math

from pydantic import BaseModel, ConfigDict, Field


class SearchRequest(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    query: str = ""
    min_price: float = Field(default=0.0, alias="minPrice")
    max_price: float = Field(default=math.inf, alias="maxPrice")
    selected_tags: tuple[str, ...] = Field(default=(), alias="selectedTags")


class Recommendation(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: int = Field(..., strict=True)
    reason: str = Field(..., strict=True)


class ModelReply(BaseModel):
    """Shape the LLM is instructed to answer with."""

    results: list[Recommendation]


class SearchResponse(BaseModel):
    results: list[Recommendation] = Field(default_factory=list)
    error: str | None = None


class SearchOutcome(BaseModel):
    status_code: int
    response: SearchResponse
