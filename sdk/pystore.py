# sdk/pystore.py
from typing import Any, Dict, Optional

import httpx
import requests


class StoreClientError(Exception):
    """An error page returned by the storefront."""

    def __init__(self, status_code: int, view: Dict[str, Any]):
        self.status_code = status_code
        self.view = view
        self.title = view.get("title", f"HTTP {status_code}")
        self.message = view.get("message", "")
        super().__init__(f"{self.title}: {self.message}" if self.message else self.title)


def _view(r) -> Dict[str, Any]:
    # works for both requests and httpx responses
    try:
        data = r.json()
    except ValueError:
        data = {"title": f"HTTP {r.status_code}", "message": r.text}
    if r.status_code >= 400:
        raise StoreClientError(r.status_code, data)
    return data


class StoreClient:
    """
    Thin client for the storefront.

    POST routes answer with a redirect; the session follows it, so each
    mutating call returns the view the browser would land on.
    """

    def __init__(self, base_url: str = "http://localhost:3000", timeout: int = 10):
        self.base_url = base_url.rstrip("/")
        self.session = requests.Session()
        self.timeout = timeout

    def _get(self, path: str, params: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        r = self.session.get(f"{self.base_url}{path}", params=params, timeout=self.timeout)
        return _view(r)

    def _post(self, path: str, data: Dict[str, Any]) -> Dict[str, Any]:
        r = self.session.post(f"{self.base_url}{path}", data=data, timeout=self.timeout)
        return _view(r)

    def health(self):
        return self._get("/health")

    # Catalog
    def home(self):
        return self._get("/")

    def list_categories(self):
        return self.home().get("categories", [])

    def list_category(self, slug: str, min_price: Optional[str] = None, max_price: Optional[str] = None):
        params = {}
        if min_price is not None:
            params["minPrice"] = min_price
        if max_price is not None:
            params["maxPrice"] = max_price
        return self._get(f"/category/{slug}", params=params)

    def get_product(self, product_id: int):
        return self._get(f"/product/{product_id}")

    # Cart
    def add_to_cart(self, product_id: int, path_product: Optional[str] = None):
        return self._post("/cart/add-product", {
            "productId": product_id,
            "pathProduct": path_product or f"/product/{product_id}",
        })

    def view_cart(self):
        return self._get("/cart")

    def update_item(self, product_id: int, quantity: int):
        return self._post("/cart/update-item", {"productId": product_id, "quantity": quantity})

    def remove_item(self, product_id: int):
        return self._post("/cart/delete-item", {"productId": product_id})

    # Checkout
    def checkout_view(self):
        return self._get("/checkout")

    def place_order(self, customer: Dict[str, str]):
        """Submit the checkout form; returns the order confirmation view (or the cart view if it was empty)."""
        return self._post("/checkout", customer)

    def get_order(self, order_id: int):
        return self._get(f"/order-confirmation/{order_id}")

    # Async add (used to exercise concurrent cart updates)
    async def add_to_cart_async(self, product_id: int, client: Optional[httpx.AsyncClient] = None):
        data = {"productId": str(product_id), "pathProduct": f"/product/{product_id}"}
        if client is not None:
            return _view(await client.post(f"{self.base_url}/cart/add-product", data=data, follow_redirects=True))
        async with httpx.AsyncClient(timeout=self.timeout) as ac:
            return _view(await ac.post(f"{self.base_url}/cart/add-product", data=data, follow_redirects=True))


if __name__ == "__main__":
    import argparse
    from rich import print

    parser = argparse.ArgumentParser(description="Full Stock storefront client")
    parser.add_argument("--base-url", default="http://127.0.0.1:3000")
    subparsers = parser.add_subparsers(dest="command", required=True)

    subparsers.add_parser("categories", help="List categories")

    lc = subparsers.add_parser("category", help="List products of a category")
    lc.add_argument("--slug", required=True)
    lc.add_argument("--min-price", help="Minimum price in currency units")
    lc.add_argument("--max-price", help="Maximum price in currency units")

    gp = subparsers.add_parser("get-product", help="Get a product by its ID")
    gp.add_argument("--product-id", type=int, required=True)

    add = subparsers.add_parser("add-to-cart", help="Add one unit of a product to the cart")
    add.add_argument("--product-id", type=int, required=True)

    up = subparsers.add_parser("update-item", help="Set the quantity of a cart line")
    up.add_argument("--product-id", type=int, required=True)
    up.add_argument("--qty", type=int, required=True)

    rm = subparsers.add_parser("remove-item", help="Remove a line from the cart")
    rm.add_argument("--product-id", type=int, required=True)

    subparsers.add_parser("view-cart", help="View cart contents")

    po = subparsers.add_parser("place-order", help="Check out the cart")
    po.add_argument("--email", required=True)
    po.add_argument("--first-name", required=True)
    po.add_argument("--last-name", required=True)
    po.add_argument("--address", required=True)
    po.add_argument("--city", required=True)
    po.add_argument("--country", required=True)
    po.add_argument("--region", required=True)
    po.add_argument("--zip-code", required=True)
    po.add_argument("--phone", required=True)

    go = subparsers.add_parser("get-order", help="Show an order confirmation")
    go.add_argument("--order-id", type=int, required=True)

    args = parser.parse_args()
    c = StoreClient(base_url=args.base_url)

    try:
        if args.command == "categories":
            print(c.list_categories())
        elif args.command == "category":
            print(c.list_category(args.slug, args.min_price, args.max_price))
        elif args.command == "get-product":
            print(c.get_product(args.product_id))
        elif args.command == "add-to-cart":
            print(c.add_to_cart(args.product_id))
        elif args.command == "update-item":
            print(c.update_item(args.product_id, args.qty))
        elif args.command == "remove-item":
            print(c.remove_item(args.product_id))
        elif args.command == "view-cart":
            print(c.view_cart())
        elif args.command == "place-order":
            print(c.place_order({
                "email": args.email,
                "firstName": args.first_name,
                "lastName": args.last_name,
                "address": args.address,
                "city": args.city,
                "country": args.country,
                "region": args.region,
                "zipCode": args.zip_code,
                "phone": args.phone,
            }))
        elif args.command == "get-order":
            print(c.get_order(args.order_id))
    except StoreClientError as e:
        print(f"[red]{e}[/red]")
        raise SystemExit(1)
