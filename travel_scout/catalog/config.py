from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

load_dotenv(Path(__file__).resolve().parent.parent.parent / ".env")

_DEFAULT_CATALOG_PATH = Path(__file__).resolve().parent / "data" / "catalog.json"


@dataclass(frozen=True)
class CatalogConfig:
    path: Path = Path(os.getenv("TRAVEL_SCOUT_CATALOG_PATH") or _DEFAULT_CATALOG_PATH)
    required_columns: tuple[str, ...] = ("id", "tags", "price")


DEFAULT_CATALOG_CONFIG = CatalogConfig()
