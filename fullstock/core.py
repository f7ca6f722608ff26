# fullstock/core.py
import re
from typing import Any, Mapping, Optional

from pydantic import ValidationError as SchemaError

from fullstock.errors import ValidationError
from fullstock.models import Customer

CUSTOMER_FIELDS = ("email", "firstName", "lastName", "address", "city", "country", "region", "zipCode", "phone")

INT_RE = re.compile(r"[+-]?[0-9]+")


def parse_id(raw: Any) -> Optional[int]:
    """Integer id from a path or form value, or None when it is not one."""
    if isinstance(raw, int):
        return raw
    text = str(raw).strip()
    return int(text) if INT_RE.fullmatch(text) else None


def parse_quantity(raw: Any, path: str = "/cart") -> int:
    text = str(raw).strip()
    if not INT_RE.fullmatch(text):
        raise ValidationError(
            title="Invalid quantity",
            message=f'The quantity must be a whole number, got "{raw}"',
            path=path,
        )
    return int(text)


def parse_customer(form: Mapping[str, Any], path: str = "/checkout") -> Customer:
    data = {field: form.get(field) for field in CUSTOMER_FIELDS if form.get(field) is not None}
    try:
        return Customer.model_validate(data)
    except SchemaError as e:
        problems = []
        for err in e.errors():
            field = ".".join(str(part) for part in err["loc"]) or "form"
            problems.append(f"{field}: {err['msg']}")
        raise ValidationError(
            title="Invalid checkout details",
            message="; ".join(problems),
            path=path,
        ) from e
