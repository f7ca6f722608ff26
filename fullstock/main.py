# fullstock/main.py
import logging
import time
import uuid
from contextlib import asynccontextmanager
from typing import Any, Dict, List, Optional

import uvicorn
from fastapi import Depends, FastAPI, Form, Query, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse, RedirectResponse
from pydantic import BaseModel
from starlette.exceptions import HTTPException as StarletteHTTPException

from fullstock import __version__
from fullstock.config import settings
from fullstock.core import parse_customer, parse_id
from fullstock.database import JsonStore
from fullstock.errors import ErrorKind, NotFound, ServerError, StoreError, ValidationError
from fullstock.logging_config import bind_request_id, reset_request_id, setup_logging
from fullstock.logic import (
    add_item_logic, cart_view_logic, get_order_logic, order_view_logic,
    place_order_logic, prepare_checkout_logic, remove_item_logic, update_item_logic,
)
from fullstock.models import Document
from fullstock.pricing import filter_products

setup_logging(settings.LOG_LEVEL, settings.LOG_JSON)
logger = logging.getLogger(__name__)

PAGE_TITLES = {
    "/": "Home",
    "/cart": "Cart",
    "/checkout": "Checkout",
    "/order-confirmation": "Order confirmation",
    "/about": "About us",
    "/terms": "Terms and conditions",
    "/privacy": "Privacy policy",
}

# ---------------------------
# Store wiring
# ---------------------------
_store: Optional[JsonStore] = None


def get_store() -> JsonStore:
    global _store
    if _store is None:
        _store = JsonStore(settings.DATA_PATH, seed_if_missing=settings.SEED_IF_MISSING)
    return _store


def get_cart_id() -> int:
    # one shared cart until sessions exist
    return settings.CART_ID


@asynccontextmanager
async def lifespan(app: FastAPI):
    app.dependency_overrides.get(get_store, get_store)().init()
    logger.info("Storefront ready", extra={"data_path": str(settings.DATA_PATH)})
    yield
    logger.info("Storefront shutting down")


app = FastAPI(title="fullstock storefront", version=__version__, lifespan=lifespan)


# ---------------------------
# Helpers
# ---------------------------
def _dump(models: List[BaseModel]) -> List[Dict[str, Any]]:
    return [m.model_dump(mode="json") for m in models]


def _render(request: Request, doc: Document, cart_id: int, page: str, name_page: Optional[str] = None, **data) -> JSONResponse:
    view = {
        "page": page,
        "name_page": name_page or PAGE_TITLES.get(request.url.path, settings.STORE_NAME),
        "cart_count": doc.cart(cart_id).count(),
    }
    view.update(data)
    return JSONResponse(view)


def _redirect(url: str, status_code: int = 303) -> RedirectResponse:
    return RedirectResponse(url, status_code=status_code)


# ---------------------------
# Middleware and error pages
# ---------------------------
@app.middleware("http")
async def log_requests(request: Request, call_next):
    request_id = request.headers.get("X-Request-ID") or uuid.uuid4().hex
    token = bind_request_id(request_id)
    start_time = time.time()
    try:
        response = await call_next(request)
        duration = (time.time() - start_time) * 1000
        logger.info(
            f'"{request.method} {request.url.path}" {response.status_code}',
            extra={
                "method": request.method,
                "path": request.url.path,
                "status_code": response.status_code,
                "duration_ms": round(duration, 2),
            },
        )
        response.headers["X-Request-ID"] = request_id
        return response
    finally:
        reset_request_id(token)


@app.exception_handler(StoreError)
async def store_error_handler(request: Request, exc: StoreError):
    if exc.kind is ErrorKind.SERVER:
        logger.error("Request failed", extra={"path": request.url.path, "reason": exc.message})
    else:
        logger.warning("Request rejected", extra={"path": request.url.path, "kind": exc.kind.value, "title": exc.title})
    return JSONResponse(exc.to_view(), status_code=exc.status_code)


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    problems = []
    for err in exc.errors():
        field = ".".join(str(part) for part in err["loc"] if part not in ("body", "query", "path"))
        problems.append(f"{field or 'request'}: {err['msg']}")
    return await store_error_handler(
        request,
        ValidationError(title="Invalid request", message="; ".join(problems), path=request.url.path),
    )


@app.exception_handler(StarletteHTTPException)
async def http_error_handler(request: Request, exc: StarletteHTTPException):
    if exc.status_code == 404:
        view = NotFound(title="404 - Page not found").to_view()
    else:
        view = StoreError(title=f"{exc.status_code} - Error", message=str(exc.detail)).to_view()
        view["status_code"] = exc.status_code
    return JSONResponse(view, status_code=exc.status_code, headers=getattr(exc, "headers", None))


@app.exception_handler(Exception)
async def unhandled_error_handler(request: Request, exc: Exception):
    logger.error(
        f"Unhandled exception: {exc}",
        extra={"path": request.url.path, "method": request.method, "error_type": type(exc).__name__},
        exc_info=exc,
    )
    return JSONResponse(ServerError().to_view(), status_code=500)


# ---------------------------
# Catalog
# ---------------------------
@app.get("/health")
async def health():
    return {"status": "healthy"}


@app.get("/")
async def home(request: Request, store: JsonStore = Depends(get_store), cart_id: int = Depends(get_cart_id)):
    doc = await store.snapshot()
    return _render(request, doc, cart_id, "index", categories=_dump(doc.categories))


@app.get("/category/{slug}")
async def category(
    request: Request,
    slug: str,
    min_price: Optional[str] = Query(None, alias="minPrice"),
    max_price: Optional[str] = Query(None, alias="maxPrice"),
    error: Optional[str] = None,
    store: JsonStore = Depends(get_store),
    cart_id: int = Depends(get_cart_id),
):
    doc = await store.snapshot()
    found = doc.category_by_slug(slug)
    if found is None:
        raise NotFound(title="Page not found", message="Category not found")

    result = filter_products(doc.products_in(found.id), min_price, max_price)
    if error == "true" and result.error is not None:
        raise ValidationError(title=result.error.title, message=result.error.message, path=request.url.path)

    return _render(
        request, doc, cart_id, "category",
        name_page=found.name,
        category=found.model_dump(mode="json"),
        products=_dump(result.products),
        min_price=min_price or "",
        max_price=max_price or "",
        error=result.error.model_dump() if result.error else None,
    )


@app.get("/product/{product_id}")
async def product_detail(
    request: Request,
    product_id: str,
    store: JsonStore = Depends(get_store),
    cart_id: int = Depends(get_cart_id),
):
    doc = await store.snapshot()
    found = doc.product(parse_id(product_id))
    if found is None:
        raise NotFound(title="Page not found", message="Product not found")
    return _render(request, doc, cart_id, "product", name_page="Product", product=found.model_dump(mode="json"))


# ---------------------------
# Cart
# ---------------------------
@app.post("/cart/add-product")
async def cart_add(
    product_id: str = Form(..., alias="productId"),
    path_product: Optional[str] = Form(None, alias="pathProduct"),
    store: JsonStore = Depends(get_store),
    cart_id: int = Depends(get_cart_id),
):
    try:
        item = await add_item_logic(store, cart_id, product_id)
    except NotFound as e:
        e.path = path_product or "/"
        raise
    return _redirect(f"/product/{item.product_id}")


@app.get("/cart")
async def view_cart(request: Request, store: JsonStore = Depends(get_store), cart_id: int = Depends(get_cart_id)):
    doc = await store.snapshot()
    view = cart_view_logic(doc, cart_id)
    return _render(request, doc, cart_id, "cart", cart_items=view["items"], total=view["total"], total_cents=view["total_cents"])


@app.post("/cart/update-item")
async def cart_update(
    product_id: str = Form(..., alias="productId"),
    quantity: str = Form(...),
    store: JsonStore = Depends(get_store),
    cart_id: int = Depends(get_cart_id),
):
    await update_item_logic(store, cart_id, product_id, quantity)
    return _redirect("/cart")


@app.post("/cart/delete-item")
async def cart_delete(
    product_id: str = Form(..., alias="productId"),
    store: JsonStore = Depends(get_store),
    cart_id: int = Depends(get_cart_id),
):
    await remove_item_logic(store, cart_id, product_id)
    return _redirect("/cart")


# ---------------------------
# Checkout and orders
# ---------------------------
@app.get("/checkout")
async def checkout_view(request: Request, store: JsonStore = Depends(get_store), cart_id: int = Depends(get_cart_id)):
    doc = await store.snapshot()
    view = prepare_checkout_logic(doc, cart_id)
    if view is None:
        return _redirect("/cart", status_code=302)
    return _render(request, doc, cart_id, "checkout", cart_items=view["items"], total=view["total"], total_cents=view["total_cents"])


@app.post("/checkout")
async def checkout(request: Request, store: JsonStore = Depends(get_store), cart_id: int = Depends(get_cart_id)):
    doc = await store.snapshot()
    if prepare_checkout_logic(doc, cart_id) is None:
        return _redirect("/cart")

    customer = parse_customer(await request.form())
    order = await place_order_logic(store, cart_id, customer)
    if order is None:
        # emptied by another request in between
        return _redirect("/cart")
    return _redirect(f"/order-confirmation/{order.id}")


@app.get("/order-confirmation/{order_id}")
async def order_confirmation(
    request: Request,
    order_id: str,
    store: JsonStore = Depends(get_store),
    cart_id: int = Depends(get_cart_id),
):
    doc = await store.snapshot()
    order = get_order_logic(doc, order_id)
    return _render(
        request, doc, cart_id, "order-confirmation",
        name_page=PAGE_TITLES["/order-confirmation"],
        order=order_view_logic(order),
    )


# ---------------------------
# Static pages
# ---------------------------
@app.get("/about")
async def about(request: Request, store: JsonStore = Depends(get_store), cart_id: int = Depends(get_cart_id)):
    return _render(request, await store.snapshot(), cart_id, "about")


@app.get("/terms")
async def terms(request: Request, store: JsonStore = Depends(get_store), cart_id: int = Depends(get_cart_id)):
    return _render(request, await store.snapshot(), cart_id, "terms")


@app.get("/privacy")
async def privacy(request: Request, store: JsonStore = Depends(get_store), cart_id: int = Depends(get_cart_id)):
    return _render(request, await store.snapshot(), cart_id, "privacy")


def run() -> None:
    uvicorn.run("fullstock.main:app", host=settings.HOST, port=settings.PORT)


if __name__ == "__main__":
    run()
