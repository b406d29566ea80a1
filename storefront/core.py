import re
from typing import Any, Dict, Optional, Type, TypeVar

from fastapi.exceptions import RequestValidationError
from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from .models import Product

M = TypeVar("M", bound=BaseModel)

# Request bodies. Every field is optional so that presence checks happen in the
# handlers and produce the service's own 400 messages.


class SignupIn(BaseModel):
    username: Optional[str] = None
    password: Optional[str] = None


class LoginIn(BaseModel):
    username: Optional[str] = None
    password: Optional[str] = None


class ItemIn(BaseModel):
    name: Any = None
    price: Any = None
    category: Any = None


class AddToCartIn(BaseModel):
    itemId: Any = None
    quantity: Any = None


def _make_product_dict(product_id: int, p: ItemIn) -> Dict[str, Any]:
    return Product(id=product_id, name=p.name, price=p.price, category=p.category).model_dump()


def _load_body(model: Type[M], body: Any) -> M:
    # a missing or non-object body reads as an empty one
    if not isinstance(body, dict):
        return model()
    try:
        return model.model_validate(body)
    except PydanticValidationError as e:
        raise RequestValidationError(e.errors()) from e


def _is_missing(value: Any) -> bool:
    # empty lists and objects count as present
    return value is None or value is False or (isinstance(value, (str, int, float)) and not value)


_INT_PREFIX = re.compile(r"\s*([+-]?[0-9]+)")
_FLOAT_PREFIX = re.compile(r"\s*([+-]?(?:(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][+-]?[0-9]+)?|Infinity))")


def _parse_id(raw: str) -> Optional[int]:
    """Read the leading integer of ``raw``: ``"12abc"`` and ``"1.5"`` give 12 and 1."""
    m = _INT_PREFIX.match(raw or "")
    return int(m.group(1)) if m else None


def _parse_price(raw: str) -> float:
    # leading number only; a bound with none filters everything out
    m = _FLOAT_PREFIX.match(raw or "")
    return float(m.group(1).replace("Infinity", "inf")) if m else float("nan")
