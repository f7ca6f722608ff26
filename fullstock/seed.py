# fullstock/seed.py
from fullstock.models import Document

CATEGORIES = [
    {"id": 1, "slug": "polos", "name": "Polos"},
    {"id": 2, "slug": "tazas", "name": "Tazas"},
    {"id": 3, "slug": "stickers", "name": "Stickers"},
]

PRODUCTS = [
    {"id": 1, "name": "Polo React", "price": 2000, "categoryId": 1, "imgSrc": "/images/polos/polo-react.png"},
    {"id": 2, "name": "Polo JavaScript", "price": 2000, "categoryId": 1, "imgSrc": "/images/polos/polo-js.png"},
    {"id": 3, "name": "Polo Node.js", "price": 2200, "categoryId": 1, "imgSrc": "/images/polos/polo-node.png"},
    {"id": 4, "name": "Polo Git", "price": 1800, "categoryId": 1, "imgSrc": "/images/polos/polo-git.png"},
    {"id": 5, "name": "Taza JavaScript", "price": 1400, "categoryId": 2, "imgSrc": "/images/tazas/taza-js.png"},
    {"id": 6, "name": "Taza React", "price": 1400, "categoryId": 2, "imgSrc": "/images/tazas/taza-react.png"},
    {"id": 7, "name": "Taza Git", "price": 1500, "categoryId": 2, "imgSrc": "/images/tazas/taza-git.png"},
    {"id": 8, "name": "Sticker JavaScript", "price": 299, "categoryId": 3, "imgSrc": "/images/stickers/sticker-js.png"},
    {"id": 9, "name": "Sticker React", "price": 249, "categoryId": 3, "imgSrc": "/images/stickers/sticker-react.png"},
    {"id": 10, "name": "Sticker Git", "price": 199, "categoryId": 3, "imgSrc": "/images/stickers/sticker-git.png"},
]


def seed_document() -> Document:
    """Fresh catalog with no carts and no orders."""
    return Document.model_validate({
        "categories": CATEGORIES,
        "products": PRODUCTS,
        "carts": [],
        "orders": [],
    })
