"""
Cart and checkout operations behind the HTTP routes.

Mutating operations take the ``JsonStore`` and run inside one transaction.
Read-only views take a document snapshot and never write. All money is kept
in integer cents; views also carry the amount in display units.
"""
import logging
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional, Tuple

from fullstock.core import parse_id, parse_quantity
from fullstock.database import JsonStore
from fullstock.errors import NotFound
from fullstock.models import Cart, CartItem, Customer, Document, Order, OrderLine, Product
from fullstock.pricing import to_units

logger = logging.getLogger(__name__)


def _resolve(doc: Document, cart: Cart) -> List[Tuple[CartItem, Product]]:
    # lines whose product has left the catalog stay stored but are not priced
    lines = []
    for item in cart.items:
        product = doc.product(item.product_id)
        if product is None:
            logger.debug("Skipping orphaned cart item", extra={"product_id": item.product_id})
            continue
        if item.quantity < 1:
            continue
        lines.append((item, product))
    return lines


def _line_view(item: CartItem, product: Product) -> Dict[str, Any]:
    subtotal_cents = product.price * item.quantity
    return {
        "product_id": item.product_id,
        "quantity": item.quantity,
        "product": product.model_dump(mode="json"),
        "subtotal_cents": subtotal_cents,
        "subtotal": to_units(subtotal_cents),
    }


# Cart
async def add_item_logic(store: JsonStore, cart_id: int, product_id: Any) -> CartItem:
    pid = parse_id(product_id)
    async with store.transaction() as doc:
        product = doc.product(pid)
        if product is None:
            raise NotFound(
                title="Product not found",
                message="The selected product is not available",
            )
        cart = doc.cart(cart_id)
        item = cart.find(pid)
        if item is not None:
            item.quantity += 1
        else:
            item = CartItem(product_id=pid, quantity=1)
            cart.items.append(item)
        doc.put_cart(cart)

    logger.info("Added product to cart", extra={"cart_id": cart_id, "product_id": pid, "quantity": item.quantity})
    return item


async def update_item_logic(store: JsonStore, cart_id: int, product_id: Any, quantity: Any) -> Optional[CartItem]:
    """
    Set the quantity of a cart line.

    Unknown lines are left alone, whatever the quantity. A quantity of zero
    or less removes the line.
    """
    pid = parse_id(product_id)
    async with store.transaction() as doc:
        cart = doc.cart(cart_id)
        item = cart.find(pid)
        if item is None:
            return None
        qty = parse_quantity(quantity)
        if qty <= 0:
            cart.remove(pid)
            item = None
        else:
            item.quantity = qty
        doc.put_cart(cart)

    logger.info("Updated cart item", extra={"cart_id": cart_id, "product_id": pid, "quantity": qty})
    return item


async def remove_item_logic(store: JsonStore, cart_id: int, product_id: Any) -> None:
    pid = parse_id(product_id)
    async with store.transaction() as doc:
        cart = doc.cart(cart_id)
        if cart.find(pid) is None:
            return
        cart.remove(pid)
        doc.put_cart(cart)

    logger.info("Removed product from cart", extra={"cart_id": cart_id, "product_id": pid})


def cart_view_logic(doc: Document, cart_id: int) -> Dict[str, Any]:
    lines = [_line_view(item, product) for item, product in _resolve(doc, doc.cart(cart_id))]
    total_cents = sum(line["subtotal_cents"] for line in lines)
    return {
        "cart_id": cart_id,
        "items": lines,
        "total_cents": total_cents,
        "total": to_units(total_cents),
    }


# Checkout
def prepare_checkout_logic(doc: Document, cart_id: int) -> Optional[Dict[str, Any]]:
    """Checkout summary, or None when there is nothing to buy."""
    view = cart_view_logic(doc, cart_id)
    if not view["items"]:
        return None
    return view


async def place_order_logic(store: JsonStore, cart_id: int, customer: Customer) -> Optional[Order]:
    """
    Turn the cart into an order and empty the cart.

    Prices and names are copied from the catalog at this moment, so later
    catalog edits never change the order. Returns None for an empty cart.
    """
    async with store.transaction() as doc:
        cart = doc.cart(cart_id)
        lines = [
            OrderLine(product_id=product.id, name=product.name, price=product.price, quantity=item.quantity)
            for item, product in _resolve(doc, cart)
        ]
        if not lines:
            return None

        order = Order(
            id=doc.next_order_id(),
            customer=customer,
            items=lines,
            total=sum(line.price * line.quantity for line in lines),
            created_at=datetime.now(timezone.utc),
        )
        doc.orders.append(order)
        cart.items = []
        doc.put_cart(cart)

    logger.info("Order placed", extra={"order_id": order.id, "total_cents": order.total, "lines": len(lines)})
    return order


def get_order_logic(doc: Document, order_id: Any) -> Order:
    order = doc.order(parse_id(order_id))
    if order is None:
        raise NotFound(title="Page not found", message="Order not found")
    return order


def order_view_logic(order: Order) -> Dict[str, Any]:
    data = order.model_dump(mode="json")
    for line in data["items"]:
        line["subtotal_cents"] = line["price"] * line["quantity"]
        line["subtotal"] = to_units(line["subtotal_cents"])
    data["total_cents"] = order.total
    data["total"] = to_units(order.total)
    return data
