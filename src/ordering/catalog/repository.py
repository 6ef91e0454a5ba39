"""Repository for the Item aggregate."""

from dataclasses import dataclass

from ordering.catalog.item import Item
from ordering.domain import ordering
from ordering.utils.queries import fetch_all


@dataclass(frozen=True)
class CatalogRow:
    """The slice of an Item that order placement is allowed to see."""

    item_id: str
    item_name: str
    price_in_paise: int
    available_qty: int


@ordering.repository(part_of=Item)
class ItemRepository:
    def find_catalog_rows(self, item_ids: list[str]) -> list[CatalogRow]:
        """Fetch, in one query, the catalog rows for exactly ``item_ids``."""
        unique_ids = list(dict.fromkeys(item_ids))
        items = self._dao.query.filter(id__in=unique_ids).limit(len(unique_ids)).all().items
        return [
            CatalogRow(
                item_id=str(item.id),
                item_name=item.item_name,
                price_in_paise=item.price_in_paise,
                available_qty=item.available_qty or 0,
            )
            for item in items
        ]

    def all_items(self) -> list[Item]:
        return fetch_all(self._dao.query)
