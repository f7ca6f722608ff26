# fullstock/models.py
from datetime import datetime
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, PrivateAttr, field_validator
from pydantic.alias_generators import to_camel


class StoreModel(BaseModel):
    # camelCase on disk, snake_case in Python; unknown keys survive a rewrite
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="allow")


class Category(StoreModel):
    id: int
    slug: str
    name: str


class Product(StoreModel):
    id: int
    name: str
    price: int  # cents
    category_id: int
    img_src: Optional[str] = None


class CartItem(StoreModel):
    product_id: int
    quantity: int = 1


class Cart(StoreModel):
    id: int
    items: List[CartItem] = Field(default_factory=list)

    def find(self, product_id: Optional[int]) -> Optional[CartItem]:
        for item in self.items:
            if item.product_id == product_id:
                return item
        return None

    def remove(self, product_id: Optional[int]) -> None:
        self.items = [item for item in self.items if item.product_id != product_id]

    def count(self) -> int:
        return sum(item.quantity for item in self.items)


class Customer(StoreModel):
    model_config = ConfigDict(extra="ignore")

    email: str
    first_name: str
    last_name: str
    address: str
    city: str
    country: str
    region: str
    zip_code: str
    phone: str

    @field_validator("*", mode="before")
    @classmethod
    def _strip(cls, value: Any) -> Any:
        if isinstance(value, str):
            value = value.strip()
            if not value:
                raise ValueError("must not be blank")
        return value

    @field_validator("email")
    @classmethod
    def _email(cls, value: str) -> str:
        local, _, domain = value.partition("@")
        if not local or not domain:
            raise ValueError("must be a valid email address")
        return value


class OrderLine(StoreModel):
    model_config = ConfigDict(frozen=True)

    product_id: int
    name: str
    price: int  # cents, as charged at checkout
    quantity: int


class Order(StoreModel):
    model_config = ConfigDict(frozen=True)

    id: int
    customer: Customer
    items: List[OrderLine]
    total: int  # cents
    created_at: datetime


class Document(StoreModel):
    """The whole data file: seed catalog plus carts and the order log."""

    categories: List[Category] = Field(default_factory=list)
    products: List[Product] = Field(default_factory=list)
    carts: List[Cart] = Field(default_factory=list)
    orders: List[Order] = Field(default_factory=list)

    _products_by_id: Dict[int, Product] = PrivateAttr(default_factory=dict)
    _categories_by_slug: Dict[str, Category] = PrivateAttr(default_factory=dict)

    def model_post_init(self, __context: Any) -> None:
        # the catalog is seed data and never mutated, so the indexes stay valid
        self._products_by_id = {p.id: p for p in self.products}
        self._categories_by_slug = {c.slug.lower(): c for c in self.categories}

    def product(self, product_id: Optional[int]) -> Optional[Product]:
        return self._products_by_id.get(product_id)

    def category_by_slug(self, slug: str) -> Optional[Category]:
        return self._categories_by_slug.get(slug.lower())

    def products_in(self, category_id: int) -> List[Product]:
        return [p for p in self.products if p.category_id == category_id]

    def cart(self, cart_id: int) -> Cart:
        for cart in self.carts:
            if cart.id == cart_id:
                return cart
        return Cart(id=cart_id)

    def put_cart(self, cart: Cart) -> None:
        for index, existing in enumerate(self.carts):
            if existing.id == cart.id:
                self.carts[index] = cart
                return
        self.carts.append(cart)

    def order(self, order_id: Optional[int]) -> Optional[Order]:
        for order in self.orders:
            if order.id == order_id:
                return order
        return None

    def next_order_id(self) -> int:
        return max((o.id for o in self.orders), default=0) + 1
