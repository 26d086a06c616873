from __future__ import annotations

import json
import logging
import math
from pathlib import Path
from typing import Any

import pandas as pd
from pydantic import ValidationError

from ..search.errors import CatalogError
from .config import DEFAULT_CATALOG_CONFIG, CatalogConfig
from .models import CatalogIndex, CatalogItem

logger = logging.getLogger(__name__)

_catalog: CatalogIndex | None = None


def _is_missing(value: Any) -> bool:
    return value is None or (isinstance(value, float) and math.isnan(value))


def _to_item(record: dict[str, Any]) -> CatalogItem:
    # Rows lacking an optional descriptive field come back as NaN
    cleaned = {key: value for key, value in record.items() if not _is_missing(value)}
    try:
        return CatalogItem.model_validate(cleaned)
    except ValidationError as exc:
        raise CatalogError(f"Invalid catalog item {record.get('id')!r}: {exc}") from exc


def load_catalog(
    path: Path | str | None = None,
    config: CatalogConfig = DEFAULT_CATALOG_CONFIG,
) -> CatalogIndex:
    """Read a JSON array of items and build an immutable ``CatalogIndex``."""
    source = Path(path) if path is not None else config.path
    try:
        with source.open(encoding="utf-8") as fh:
            records = json.load(fh)
    except (OSError, ValueError) as exc:
        raise CatalogError(f"Could not read catalog from {source}") from exc

    if not isinstance(records, list) or not all(isinstance(r, dict) for r in records):
        raise CatalogError(f"Catalog at {source} must be a JSON array of objects")

    # object dtype keeps every value exactly as written in the file
    df = pd.DataFrame(records, dtype=object)

    if df.empty:
        raise CatalogError(f"Catalog at {source} is empty")

    missing = [col for col in config.required_columns if col not in df.columns]
    if missing:
        raise CatalogError(f"Catalog at {source} is missing columns: {', '.join(missing)}")

    if df["id"].isna().any():
        raise CatalogError(f"Catalog at {source} has items without an id")
    if df["price"].isna().any():
        raise CatalogError(f"Catalog at {source} has items without a price")

    items = tuple(_to_item(record) for record in df.to_dict(orient="records"))

    ids = pd.Series([item.id for item in items])
    duplicated = ids[ids.duplicated()].unique().tolist()
    if duplicated:
        raise CatalogError(f"Catalog at {source} has duplicate ids: {duplicated}")

    catalog = CatalogIndex(items=items)
    logger.info(
        "Loaded %d catalog items with %d tags from %s",
        len(catalog), len(catalog.allowed_tags), source,
    )
    return catalog


def get_catalog() -> CatalogIndex:
    """Return the process-wide catalog, loading it on first call."""
    global _catalog
    if _catalog is None:
        _catalog = load_catalog()
    return _catalog
