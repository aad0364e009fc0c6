"""
Tests for ItemQueryService.
"""

from datetime import datetime, timedelta

import pytest

from inventory_manager.errors import NotFoundError, ValidationError
from inventory_manager.models.enums import ItemCategory
from inventory_manager.services.item_query_service import ItemQueryService
from inventory_manager.services.item_service import ItemService


def add(db_session, name, category="fruit", age_minutes=0):
    """Create an item and backdate it so ordering is deterministic."""
    item = ItemService(db_session).create_item({
        "name": name,
        "price": 1.25,
        "quantity": 5,
        "expiryDate": "2030-06-01",
        "category": category,
    })
    item.created_at = datetime.utcnow() - timedelta(minutes=age_minutes)
    db_session.commit()
    return item


class TestListItems:

    def test_newest_first(self, db_session):
        old = add(db_session, "Banana", age_minutes=10)
        new = add(db_session, "Cherry", age_minutes=1)

        items = ItemQueryService(db_session).list_items()
        assert [i.id for i in items] == [new.id, old.id]

    def test_empty_store(self, db_session):
        assert ItemQueryService(db_session).list_items() == []

    def test_filter_by_category(self, db_session):
        add(db_session, "Banana")
        carrot = add(db_session, "Carrot", category="vegetable")

        items = ItemQueryService(db_session).list_items(category=" Vegetable")
        assert [i.id for i in items] == [carrot.id]

    def test_unknown_category_rejected(self, db_session):
        with pytest.raises(ValidationError) as exc_info:
            ItemQueryService(db_session).list_items(category="meat")
        assert exc_info.value.fields == ["category"]


class TestGetItem:

    def test_get_existing(self, db_session):
        item = add(db_session, "Banana")
        found = ItemQueryService(db_session).get_item(str(item.id))
        assert found.name == "Banana"
        assert found.category == ItemCategory.FRUIT

    def test_missing_item(self, db_session):
        with pytest.raises(NotFoundError):
            ItemQueryService(db_session).get_item(
                "00000000-0000-4000-8000-000000000000"
            )

    def test_malformed_id(self, db_session):
        with pytest.raises(ValidationError):
            ItemQueryService(db_session).get_item("abc")


class TestSearch:

    def test_case_insensitive_substring(self, db_session):
        add(db_session, "Green Apple", age_minutes=5)
        add(db_session, "Pineapple", age_minutes=1)
        add(db_session, "Carrot", category="vegetable")

        names = [i.name for i in ItemQueryService(db_session).search_by_name("APPLE")]
        assert names == ["Pineapple", "Green Apple"]

    def test_no_match_returns_empty(self, db_session):
        add(db_session, "Banana")
        assert ItemQueryService(db_session).search_by_name("kiwi") == []

    def test_wildcards_are_literal(self, db_session):
        add(db_session, "Banana")
        assert ItemQueryService(db_session).search_by_name("%") == []

    def test_search_within_category(self, db_session):
        add(db_session, "Red Pepper", category="vegetable")
        add(db_session, "Pepper Fruit", category="fruit")

        items = ItemQueryService(db_session).search_by_name(
            "pepper", category="vegetable"
        )
        assert [i.name for i in items] == ["Red Pepper"]

    @pytest.mark.parametrize("term", [None, "", "   "])
    def test_blank_term_rejected(self, db_session, term):
        with pytest.raises(ValidationError) as exc_info:
            ItemQueryService(db_session).search_by_name(term)
        assert exc_info.value.fields == ["name"]

    def test_find_by_name_returns_newest(self, db_session):
        add(db_session, "Blood Orange", age_minutes=5)
        add(db_session, "Orange", age_minutes=1)

        item = ItemQueryService(db_session).find_by_name("orange")
        assert item.name == "Orange"

    def test_find_by_name_not_found(self, db_session):
        with pytest.raises(NotFoundError):
            ItemQueryService(db_session).find_by_name("durian")
