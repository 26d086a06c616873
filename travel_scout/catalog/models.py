from __future__ import annotations

from dataclasses import dataclass, field

from pydantic import BaseModel, ConfigDict


class CatalogItem(BaseModel):
    """One recommendable travel experience.

    Descriptive fields (name, location, description, ...) are kept as extras
    so the item can be handed to the LLM exactly as it appears in the file.
    """

    model_config = ConfigDict(frozen=True, extra="allow")

    id: int
    tags: tuple[str, ...]
    price: float


@dataclass(frozen=True)
class CatalogIndex:
    """Read-only view over the loaded catalog.

    ``ids`` and ``allowed_tags`` are derived once from ``items``.
    """

    items: tuple[CatalogItem, ...]
    ids: frozenset[int] = field(init=False)
    allowed_tags: frozenset[str] = field(init=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "ids", frozenset(item.id for item in self.items))
        object.__setattr__(
            self,
            "allowed_tags",
            frozenset(tag for item in self.items for tag in item.tags),
        )

    def __len__(self) -> int:
        return len(self.items)

    @property
    def first(self) -> CatalogItem | None:
        return self.items[0] if self.items else None

    def sorted_tags(self) -> list[str]:
        return sorted(self.allowed_tags)

    def price_bounds(self) -> tuple[float, float] | None:
        if not self.items:
            return None
        prices = [item.price for item in self.items]
        return min(prices), max(prices)

    def to_records(self) -> list[dict]:
        """Serialise every item, every field, in catalog order."""
        return [item.model_dump(mode="json") for item in self.items]
