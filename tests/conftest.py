# tests/conftest.py
import pytest
from fastapi.testclient import TestClient

from fullstock.database import JsonStore
from fullstock.main import app, get_store
from fullstock.models import Document

CATALOG = {
    "categories": [
        {"id": 1, "slug": "polos", "name": "Polos"},
        {"id": 2, "slug": "Tazas", "name": "Tazas"},
    ],
    "products": [
        {"id": 1, "name": "Polo React", "price": 1500, "categoryId": 1, "imgSrc": "/images/polo-react.png"},
        {"id": 2, "name": "Polo Git", "price": 2000, "categoryId": 1, "imgSrc": "/images/polo-git.png"},
        {"id": 3, "name": "Polo Node", "price": 4500, "categoryId": 1, "imgSrc": "/images/polo-node.png"},
        {"id": 4, "name": "Taza JS", "price": 999, "categoryId": 2, "imgSrc": "/images/taza-js.png"},
    ],
    "carts": [],
    "orders": [],
}

CUSTOMER = {
    "email": "ada@example.com",
    "firstName": "Ada",
    "lastName": "Lovelace",
    "address": "12 Analytical St",
    "city": "London",
    "country": "UK",
    "region": "Greater London",
    "zipCode": "N1 9GU",
    "phone": "555-0100",
}


@pytest.fixture
def store(tmp_path) -> JsonStore:
    """A store backed by a fresh data file holding the test catalog."""
    s = JsonStore(tmp_path / "data.json", seed_if_missing=False)
    s.save(Document.model_validate(CATALOG))
    return s


@pytest.fixture
def client(store):
    app.dependency_overrides[get_store] = lambda: store
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def customer_form():
    return dict(CUSTOMER)
