# tests/test_concurrency.py
import asyncio

import httpx

from fullstock.main import app, get_store


async def _add(ac, product_id):
    return await ac.post("/cart/add-product", data={"productId": str(product_id)})


def test_concurrent_adds_lose_no_update(store):
    app.dependency_overrides[get_store] = lambda: store

    async def scenario():
        transport = httpx.ASGITransport(app=app)
        async with httpx.AsyncClient(transport=transport, base_url="http://test") as ac:
            return await asyncio.gather(*(_add(ac, 1) for _ in range(15)), *(_add(ac, 4) for _ in range(5)))

    try:
        results = asyncio.run(scenario())
    finally:
        app.dependency_overrides.clear()

    assert all(r.status_code == 303 for r in results)
    cart = store.load().cart(1)
    assert sorted((i.product_id, i.quantity) for i in cart.items) == [(1, 15), (4, 5)]


def test_concurrent_checkouts_create_one_order(store, customer_form):
    app.dependency_overrides[get_store] = lambda: store

    async def scenario():
        transport = httpx.ASGITransport(app=app)
        async with httpx.AsyncClient(transport=transport, base_url="http://test") as ac:
            await _add(ac, 2)
            return await asyncio.gather(*(ac.post("/checkout", data=customer_form) for _ in range(3)))

    try:
        results = asyncio.run(scenario())
    finally:
        app.dependency_overrides.clear()

    locations = sorted(r.headers["location"] for r in results)
    assert locations.count("/order-confirmation/1") == 1
    assert [o.id for o in store.load().orders] == [1]
