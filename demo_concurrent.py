import asyncio

import httpx

from sdk.pystore import StoreClient


async def main():
    c = StoreClient(base_url="http://127.0.0.1:3000")

    product_id = c.list_category(c.list_categories()[0]["slug"])["products"][0]["id"]
    c.remove_item(product_id)

    # Fire concurrent adds for the same product; the store lock serializes them
    print(f"\n⚡ Adding product {product_id} 20 times concurrently...")
    async with httpx.AsyncClient(timeout=c.timeout) as client:
        await asyncio.gather(*(c.add_to_cart_async(product_id, client=client) for _ in range(20)))

    cart = c.view_cart()
    line = next(it for it in cart["cart_items"] if it["product_id"] == product_id)
    print(f"🛒 Quantity in cart: {line['quantity']} (expected 20)")


if __name__ == "__main__":
    asyncio.run(main())
