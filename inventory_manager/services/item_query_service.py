"""
Read-only item queries: listing, single lookup and name search.

Nothing here writes to the database or the audit log.
"""

import logging

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from inventory_manager.errors import (
    NotFoundError,
    StoreError,
    ValidationError,
    parse_item_id,
)
from inventory_manager.models.enums import ItemCategory
from inventory_manager.models.item import Item
from inventory_manager.schemas.item import normalize_category

logger = logging.getLogger(__name__)


def parse_category(value: str | ItemCategory | None) -> ItemCategory | None:
    """Normalize an optional category filter."""
    if value is None or isinstance(value, ItemCategory):
        return value
    try:
        return ItemCategory(normalize_category(value))
    except ValueError:
        allowed = ", ".join(c.value for c in ItemCategory)
        raise ValidationError(
            f"Category must be one of: {allowed}", ["category"]
        ) from None


class ItemQueryService:

    def __init__(self, db: Session):
        self.db = db

    def _fetch_all(self, stmt) -> list[Item]:
        try:
            return list(self.db.execute(stmt).scalars().all())
        except SQLAlchemyError as e:
            logger.error("Item query failed: %s", e)
            raise StoreError("Could not read items") from e

    def list_items(self, category=None) -> list[Item]:
        """Return all items, most recently created first."""
        category = parse_category(category)
        stmt = select(Item).order_by(Item.created_at.desc())
        if category is not None:
            stmt = stmt.where(Item.category == category)
        return self._fetch_all(stmt)

    def get_item(self, item_id) -> Item:
        """Return a single item or raise NotFoundError."""
        parsed_id = parse_item_id(item_id)
        try:
            item = self.db.get(Item, parsed_id)
        except SQLAlchemyError as e:
            logger.error("Item lookup for %s failed: %s", parsed_id, e)
            raise StoreError(f"Could not read item {parsed_id}") from e
        if not item:
            raise NotFoundError(f"Item {parsed_id} not found")
        return item

    def search_by_name(self, term: str | None, category=None) -> list[Item]:
        """
        Case-insensitive substring search on item names.

        % and _ in the term match literally. The result may be empty.
        """
        term = (term or "").strip()
        if not term:
            raise ValidationError("Item name is required", ["name"])
        category = parse_category(category)

        stmt = (
            select(Item)
            .where(Item.name.icontains(term, autoescape=True))
            .order_by(Item.created_at.desc())
        )
        if category is not None:
            stmt = stmt.where(Item.category == category)
        return self._fetch_all(stmt)

    def find_by_name(self, term: str | None) -> Item:
        """Return the newest item whose name contains term."""
        matches = self.search_by_name(term)
        if not matches:
            raise NotFoundError(f"No item matching '{term.strip()}'")
        return matches[0]
