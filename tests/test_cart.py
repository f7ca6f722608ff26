# tests/test_cart.py
import asyncio

import pytest

from fullstock.core import parse_id, parse_quantity
from fullstock.errors import NotFound, ValidationError
from fullstock.logic import add_item_logic, cart_view_logic, remove_item_logic, update_item_logic
from fullstock.models import Cart, CartItem


def items(store):
    return [(i.product_id, i.quantity) for i in store.load().cart(1).items]


def test_add_creates_line_with_quantity_one(store):
    asyncio.run(add_item_logic(store, 1, "1"))
    assert items(store) == [(1, 1)]

    view = cart_view_logic(store.load(), 1)
    assert view["items"][0]["subtotal"] == 15.0
    assert view["total"] == 15.0
    assert view["total_cents"] == 1500


def test_adding_twice_increments_one_line(store):
    asyncio.run(add_item_logic(store, 1, 2))
    asyncio.run(add_item_logic(store, 1, 2))
    asyncio.run(add_item_logic(store, 1, 2))
    assert items(store) == [(2, 3)]


def test_add_keeps_insertion_order(store):
    for pid in (3, 1, 3):
        asyncio.run(add_item_logic(store, 1, pid))
    assert items(store) == [(3, 2), (1, 1)]


@pytest.mark.parametrize("pid", ["99", "abc", ""])
def test_add_unknown_product_is_not_found(store, pid):
    with pytest.raises(NotFound):
        asyncio.run(add_item_logic(store, 1, pid))
    assert store.load().carts == []


def test_update_sets_quantity(store):
    asyncio.run(add_item_logic(store, 1, 1))
    asyncio.run(update_item_logic(store, 1, "1", "5"))
    assert items(store) == [(1, 5)]


@pytest.mark.parametrize("qty", ["0", "-2"])
def test_update_to_zero_or_less_removes_line(store, qty):
    asyncio.run(add_item_logic(store, 1, 1))
    asyncio.run(add_item_logic(store, 1, 2))
    asyncio.run(update_item_logic(store, 1, 1, qty))
    assert items(store) == [(2, 1)]


def test_update_missing_line_is_a_no_op(store):
    asyncio.run(add_item_logic(store, 1, 1))
    assert asyncio.run(update_item_logic(store, 1, 2, "4")) is None
    assert items(store) == [(1, 1)]


def test_update_rejects_non_integer_quantity(store):
    asyncio.run(add_item_logic(store, 1, 1))
    with pytest.raises(ValidationError):
        asyncio.run(update_item_logic(store, 1, 1, "two"))
    assert items(store) == [(1, 1)]


def test_remove_line(store):
    asyncio.run(add_item_logic(store, 1, 1))
    asyncio.run(add_item_logic(store, 1, 2))
    asyncio.run(remove_item_logic(store, 1, "1"))
    assert items(store) == [(2, 1)]

    asyncio.run(remove_item_logic(store, 1, "1"))
    assert items(store) == [(2, 1)]


def test_view_skips_orphaned_items_but_keeps_them_stored(store):
    doc = store.load()
    doc.put_cart(Cart(id=1, items=[CartItem(product_id=2, quantity=2), CartItem(product_id=77, quantity=1)]))
    store.save(doc)

    view = cart_view_logic(store.load(), 1)
    assert [line["product_id"] for line in view["items"]] == [2]
    assert view["total_cents"] == 4000
    assert view["total"] == 40.0
    assert items(store) == [(2, 2), (77, 1)]


def test_view_of_absent_cart_is_empty(store):
    view = cart_view_logic(store.load(), 1)
    assert view == {"cart_id": 1, "items": [], "total_cents": 0, "total": 0.0}


def test_update_missing_line_ignores_bad_quantity(store):
    asyncio.run(add_item_logic(store, 1, 1))
    assert asyncio.run(update_item_logic(store, 1, 3, "lots")) is None
    assert items(store) == [(1, 1)]


@pytest.mark.parametrize("pid", ["1_0", "١", "1.0", " "])
def test_ids_must_be_plain_integers(pid):
    assert parse_id(pid) is None


def test_id_parsing_accepts_padding():
    assert parse_id(" 7 ") == 7
    assert parse_id(7) == 7
    assert parse_quantity(" -2 ") == -2
    with pytest.raises(ValidationError):
        parse_quantity("1_0")
