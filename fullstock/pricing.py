"""Price range filter for category listings."""
import logging
import math
import re
from typing import List, Optional, Sequence

from pydantic import BaseModel

from fullstock.models import Product

logger = logging.getLogger(__name__)

# plain ASCII decimal, optionally signed, with optional exponent
PRICE_RE = re.compile(r"[+-]?([0-9]+\.?[0-9]*|\.[0-9]+)([eE][+-]?[0-9]+)?")


class PriceError(BaseModel):
    title: str
    message: str


class FilterResult(BaseModel):
    products: List[Product]
    error: Optional[PriceError] = None


def to_units(cents: int) -> float:
    return cents / 100


def format_price(cents: int) -> str:
    return f"${cents / 100:.2f}"


def _present(raw: Optional[str]) -> bool:
    return raw is not None and raw.strip() != ""


def _parse(raw: str) -> Optional[float]:
    text = raw.strip()
    if not PRICE_RE.fullmatch(text):
        return None
    value = float(text)
    # huge exponents overflow to inf
    return value if math.isfinite(value) else None


def validate_prices(min_raw: Optional[str], max_raw: Optional[str]) -> Optional[PriceError]:
    """
    Check the raw minPrice/maxPrice query values.

    Absent or blank values are ignored. The first failing check wins:
    minimum, then maximum, then the relation between them.
    """
    low = _parse(min_raw) if _present(min_raw) else None
    high = _parse(max_raw) if _present(max_raw) else None

    if _present(min_raw) and (low is None or low < 0):
        return PriceError(
            title="invalid minimum price",
            message=f'The minimum price must be a non-negative number, got "{min_raw}"',
        )
    if _present(max_raw) and (high is None or high < 0):
        return PriceError(
            title="invalid maximum price",
            message=f'The maximum price must be a non-negative number, got "{max_raw}"',
        )
    if low is not None and high is not None and low > high:
        return PriceError(
            title="minimum exceeds maximum",
            message="The minimum price must not be greater than the maximum price",
        )
    return None


def filter_products(products: Sequence[Product], min_raw: Optional[str], max_raw: Optional[str]) -> FilterResult:
    """Keep products whose display price lies in [min, max]; invalid bounds leave the list unfiltered."""
    if not _present(min_raw) and not _present(max_raw):
        return FilterResult(products=list(products))

    error = validate_prices(min_raw, max_raw)
    if error is not None:
        logger.warning("Rejected price filter", extra={"min_price": min_raw, "max_price": max_raw, "reason": error.title})
        return FilterResult(products=list(products), error=error)

    low = _parse(min_raw) if _present(min_raw) else -math.inf
    high = _parse(max_raw) if _present(max_raw) else math.inf
    return FilterResult(products=[p for p in products if low <= to_units(p.price) <= high])
