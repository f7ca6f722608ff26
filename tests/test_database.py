# tests/test_database.py
import asyncio
import json

import pytest

from fullstock.database import JsonStore
from fullstock.errors import ServerError
from fullstock.models import Cart, CartItem
from fullstock.seed import CATEGORIES, PRODUCTS


def test_missing_file_is_seeded(tmp_path):
    path = tmp_path / "nested" / "data.json"
    s = JsonStore(path)
    doc = s.load()

    assert path.exists()
    assert len(doc.categories) == len(CATEGORIES)
    assert len(doc.products) == len(PRODUCTS)
    assert doc.carts == [] and doc.orders == []


def test_missing_file_without_seeding_is_a_server_error(tmp_path):
    s = JsonStore(tmp_path / "data.json", seed_if_missing=False)
    with pytest.raises(ServerError):
        s.load()


def test_corrupt_file_is_a_server_error(tmp_path):
    path = tmp_path / "data.json"
    path.write_text("{not json", encoding="utf-8")
    with pytest.raises(ServerError) as exc:
        JsonStore(path).load()
    assert exc.value.status_code == 500


def test_saved_document_uses_camel_case_and_keeps_unknown_keys(store):
    raw = json.loads(store.path.read_text(encoding="utf-8"))
    raw["products"][0]["description"] = "cotton"
    raw["banner"] = "sale"
    store.path.write_text(json.dumps(raw), encoding="utf-8")

    doc = store.load()
    doc.put_cart(Cart(id=1, items=[CartItem(product_id=1, quantity=2)]))
    store.save(doc)

    saved = json.loads(store.path.read_text(encoding="utf-8"))
    assert saved["banner"] == "sale"
    assert saved["products"][0]["description"] == "cotton"
    assert saved["products"][0]["categoryId"] == 1
    assert saved["carts"] == [{"id": 1, "items": [{"productId": 1, "quantity": 2}]}]


def test_save_leaves_no_temp_files(store):
    store.save(store.load())
    assert [p.name for p in store.path.parent.iterdir()] == ["data.json"]


def test_transaction_discards_changes_on_error(store):
    async def scenario():
        with pytest.raises(RuntimeError):
            async with store.transaction() as doc:
                doc.put_cart(Cart(id=1, items=[CartItem(product_id=1)]))
                raise RuntimeError("boom")

    asyncio.run(scenario())
    assert store.load().carts == []


def test_document_lookups(store):
    doc = store.load()
    assert doc.product(4).name == "Taza JS"
    assert doc.product(99) is None
    assert doc.category_by_slug("TAZAS").id == 2
    assert [p.id for p in doc.products_in(1)] == [1, 2, 3]
    assert doc.cart(1).items == []
    assert doc.next_order_id() == 1
