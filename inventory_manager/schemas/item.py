"""
Pydantic schemas for inventory items.

These define the API contract. Field names are snake_case in
Python and camelCase on the wire (expiryDate, createdAt, ...).
Both forms are accepted on input.
"""

import uuid
from datetime import date, datetime
from decimal import ROUND_HALF_UP, Decimal
from typing import Annotated

from pydantic import (
    AfterValidator,
    BaseModel,
    BeforeValidator,
    Field,
    PlainSerializer,
    field_validator,
)
from pydantic.alias_generators import to_camel

from inventory_manager.models.enums import ItemCategory


# Prices are kept to the cent; the column holds up to 8 integer digits.
PRICE_STEP = Decimal("0.01")
PRICE_LIMIT = Decimal("100000000")


def round_price(value: Decimal) -> Decimal:
    """Round a positive price to cents, half up."""
    rounded = value.quantize(PRICE_STEP, rounding=ROUND_HALF_UP)
    if rounded <= 0:
        raise ValueError("price must be at least 0.01")
    if rounded >= PRICE_LIMIT:
        raise ValueError(f"price must be less than {PRICE_LIMIT}")
    return rounded


def reject_bool(value):
    """JSON true/false is not a number here."""
    if isinstance(value, bool):
        raise ValueError("must be a number, not a boolean")
    return value


# Stored as an exact decimal, emitted as a JSON number.
Price = Annotated[
    Decimal,
    Field(gt=0),
    BeforeValidator(reject_bool),
    AfterValidator(round_price),
    PlainSerializer(float, return_type=float, when_used="json"),
]

Quantity = Annotated[int, Field(gt=0), BeforeValidator(reject_bool)]

SCHEMA_CONFIG = {
    "alias_generator": to_camel,
    "populate_by_name": True,
    "str_strip_whitespace": True,
}


def normalize_category(value):
    """Trim and lowercase a category before enum validation."""
    if isinstance(value, str):
        return value.strip().lower()
    return value


# --- Request Schemas ---

class ItemCreate(BaseModel):
    """A new item. All five business fields are required."""
    name: str = Field(min_length=1, max_length=200)
    price: Price
    quantity: Quantity
    expiry_date: date
    category: ItemCategory

    model_config = SCHEMA_CONFIG

    @field_validator("category", mode="before")
    @classmethod
    def category_is_normalized(cls, v):
        return normalize_category(v)


class ItemUpdate(BaseModel):
    """
    A partial update.

    Absent fields are left untouched. A field that is present
    must be valid; an explicit null is rejected.
    """
    name: str | None = Field(default=None, min_length=1, max_length=200)
    price: Price | None = None
    quantity: Quantity | None = None
    expiry_date: date | None = None
    category: ItemCategory | None = None

    model_config = SCHEMA_CONFIG

    @field_validator("name", "price", "quantity", "expiry_date", mode="before")
    @classmethod
    def not_null(cls, v):
        if v is None:
            raise ValueError("must not be null")
        return v

    @field_validator("category", mode="before")
    @classmethod
    def category_is_normalized(cls, v):
        if v is None:
            raise ValueError("must not be null")
        return normalize_category(v)


# --- Response Schemas ---

class ItemResponse(BaseModel):
    """Item in API responses and audit snapshots."""
    id: uuid.UUID
    name: str
    price: float
    quantity: int
    expiry_date: date
    category: ItemCategory
    created_at: datetime
    updated_at: datetime

    model_config = {
        "from_attributes": True,
        "alias_generator": to_camel,
        "populate_by_name": True,
    }


class ItemDeleteResponse(BaseModel):
    """Confirmation that an item was removed."""
    message: str = "Item deleted successfully"
    id: uuid.UUID
    name: str


def snapshot_item(item) -> dict:
    """JSON-ready copy of an item's current state, in wire form."""
    return ItemResponse.model_validate(item).model_dump(mode="json", by_alias=True)
