from __future__ import annotations

import logging
from typing import Any, Iterable

from ..catalog.models import CatalogIndex
from .models import Recommendation

logger = logging.getLogger(__name__)

FALLBACK_REASON = "No exact match, showing first item as fallback"


def _catalog_id(candidate: Any, valid_ids: frozenset[int]) -> int | None:
    rid = getattr(candidate, "id", None)
    if isinstance(rid, bool) or not isinstance(rid, int):
        return None
    return rid if rid in valid_ids else None


def enforce_guardrail(
    candidates: Iterable[Recommendation] | None,
    catalog: CatalogIndex,
) -> list[Recommendation]:
    """
    Keep only candidates whose id exists in the catalog, in the order given.

    When nothing survives, return a single fallback pointing at the first
    catalog item. Never raises: anything that does not look like a
    recommendation for a known item is dropped.
    """
    kept: list[Recommendation] = []
    dropped = 0
    try:
        for candidate in candidates or ():
            if _catalog_id(candidate, catalog.ids) is None or not isinstance(
                getattr(candidate, "reason", None), str
            ):
                dropped += 1
                continue
            kept.append(Recommendation(id=candidate.id, reason=candidate.reason))
    except Exception:
        logger.warning("Candidate list could not be iterated, discarding it", exc_info=True)
        kept = []

    if dropped:
        logger.info("Guardrail dropped %d candidate(s) not in the catalog", dropped)

    if kept:
        return kept

    first = catalog.first
    if first is None:
        return []
    return [Recommendation(id=first.id, reason=FALLBACK_REASON)]
