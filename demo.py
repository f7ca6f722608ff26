#!/usr/bin/env python
from sdk.pystore import StoreClient, StoreClientError


def main():
    c = StoreClient(base_url="http://127.0.0.1:3000")

    print("Health:", c.health())

    # -----------------------------
    # Browse
    # -----------------------------
    print("\nCategories...")
    categories = c.list_categories()
    print(categories)

    slug = categories[0]["slug"]
    print(f"\nProducts in '{slug}' between 15 and 21...")
    view = c.list_category(slug, min_price="15", max_price="21")
    for p in view["products"]:
        print(f"  {p['id']}: {p['name']} ${p['price'] / 100:.2f}")

    print("\nAn invalid filter still lists the category...")
    view = c.list_category(slug, min_price="abc")
    print(view["error"], len(view["products"]), "products")

    # -----------------------------
    # Cart
    # -----------------------------
    product_id = view["products"][0]["id"]
    print(f"\nAdding product {product_id} twice...")
    c.add_to_cart(product_id)
    c.add_to_cart(product_id)
    cart = c.view_cart()
    print(cart["cart_items"], "total:", cart["total"])

    print("\nSetting quantity to 3...")
    cart = c.update_item(product_id, 3)
    print("total:", cart["total"])

    # -----------------------------
    # Checkout
    # -----------------------------
    print("\nPlacing order...")
    confirmation = c.place_order({
        "email": "ada@example.com",
        "firstName": "Ada",
        "lastName": "Lovelace",
        "address": "12 Analytical St",
        "city": "London",
        "country": "UK",
        "region": "Greater London",
        "zipCode": "N1 9GU",
        "phone": "+44 20 0000 0000",
    })
    order = confirmation["order"]
    print(f"Order #{order['id']} total ${order['total']:.2f}")
    print("Cart after checkout:", c.view_cart()["cart_items"])

    try:
        c.get_order(order["id"] + 1000)
    except StoreClientError as e:
        print("\nUnknown order ->", e)


if __name__ == "__main__":
    main()
