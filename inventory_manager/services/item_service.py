"""
Item service: creates, updates and deletes inventory items.

Each operation:
1. Validates and normalizes the input (nothing is written on failure)
2. Resolves the target item (update/delete)
3. Applies the change and commits it
4. Records an audit entry through AuditLogger.record()

Step 4 is best-effort. The item commit in step 3 is final by the
time the audit entry is attempted, and a failed audit write never
changes what the caller gets back.
"""

import logging
import uuid
from collections.abc import Mapping
from typing import Any

from pydantic import BaseModel, ValidationError as SchemaValidationError
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from inventory_manager.errors import (
    NotFoundError,
    StoreError,
    ValidationError,
    parse_item_id,
)
from inventory_manager.models.enums import AuditAction
from inventory_manager.models.item import Item
from inventory_manager.schemas.item import (
    ItemCreate,
    ItemDeleteResponse,
    ItemUpdate,
    snapshot_item,
)
from inventory_manager.services.audit_logger import AuditLogger

logger = logging.getLogger(__name__)


def validate_payload(schema: type[BaseModel], payload):
    """Coerce a raw mapping into a schema, raising ValidationError."""
    if isinstance(payload, schema):
        return payload
    if not isinstance(payload, Mapping):
        raise ValidationError("Request body must be a JSON object")
    try:
        return schema.model_validate(dict(payload))
    except SchemaValidationError as e:
        raise ValidationError.from_schema_error(e) from e


class ItemService:
    """
    The only writer of items and audit entries.

    Commits the item change itself. The audit entry is written
    only after that commit, in a separate transaction.
    """

    def __init__(self, db: Session, audit_logger: AuditLogger | None = None):
        self.db = db
        self.audit_logger = audit_logger or AuditLogger(db)

    def _get_or_raise(self, item_id: uuid.UUID) -> Item:
        try:
            item = self.db.get(Item, item_id)
        except SQLAlchemyError as e:
            logger.error("Item lookup for %s failed: %s", item_id, e)
            raise StoreError(f"Could not read item {item_id}") from e
        if not item:
            raise NotFoundError(f"Item {item_id} not found")
        return item

    def _commit(self, operation: str) -> None:
        try:
            self.db.commit()
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error("Failed to %s: %s", operation, e)
            raise StoreError(f"Failed to {operation}") from e

    def create_item(self, payload: ItemCreate | Mapping[str, Any]) -> Item:
        """
        Create a new item.

        Raises ValidationError if any of the five business fields
        is missing or invalid.
        """
        data = validate_payload(ItemCreate, payload)

        item = Item(**data.model_dump())
        self.db.add(item)
        self._commit("create item")
        logger.info("Created item %s (%s)", item.id, item.name)

        self.audit_logger.record(
            AuditAction.ADD_ITEM,
            item.id,
            item.name,
            {"addedData": data.model_dump(mode="json", by_alias=True)},
        )
        return item

    def update_item(
        self, item_id, payload: ItemUpdate | Mapping[str, Any]
    ) -> Item:
        """
        Apply a partial update to an existing item.

        Only the fields present in the payload are changed. An empty
        payload issues no write but is still recorded in the audit log.
        """
        parsed_id = parse_item_id(item_id)
        changes = validate_payload(ItemUpdate, payload)
        item = self._get_or_raise(parsed_id)

        original = snapshot_item(item)
        fields = changes.model_dump(exclude_unset=True)
        if fields:
            for field, value in fields.items():
                setattr(item, field, value)
            self._commit(f"update item {parsed_id}")
            logger.info(
                "Updated item %s: %s", parsed_id, ", ".join(sorted(fields))
            )

        self.audit_logger.record(
            AuditAction.UPDATE_ITEM,
            parsed_id,
            item.name,
            {
                "originalData": original,
                "updatedFields": changes.model_dump(
                    mode="json", by_alias=True, exclude_unset=True
                ),
            },
        )
        return item

    def delete_item(self, item_id) -> ItemDeleteResponse:
        """
        Remove an item.

        The full pre-delete state is kept in the audit entry so
        the record can be reconstructed afterwards.
        """
        parsed_id = parse_item_id(item_id)
        item = self._get_or_raise(parsed_id)

        deleted = snapshot_item(item)
        self.db.delete(item)
        self._commit(f"delete item {parsed_id}")
        logger.info("Deleted item %s (%s)", parsed_id, deleted["name"])

        self.audit_logger.record(
            AuditAction.DELETE_ITEM,
            parsed_id,
            deleted["name"],
            {"deletedData": deleted},
        )
        return ItemDeleteResponse(id=parsed_id, name=deleted["name"])
