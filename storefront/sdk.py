from typing import Any, Dict, List, Optional

from fastapi.concurrency import run_in_threadpool

from .config import Settings
from .core import AddToCartIn, ItemIn, LoginIn, SignupIn, _is_missing, _make_product_dict, _parse_id, _parse_price
from .database import CatalogStore, CredentialStore
from .errors import AuthenticationFailure, NotFoundError, ValidationError
from .logging import get_logger
from .models import User
from .security import hash_password, issue_token, verify_password

# This file contains the core logic for all API endpoints. Stores and settings
# are passed in by the caller; nothing here touches module-level state.

logger = get_logger(__name__)


# Auth endpoints
async def signup_logic(payload: SignupIn, users: CredentialStore, settings: Settings) -> str:
    if not payload.username or not payload.password:
        raise ValidationError("Username and password are required.")

    password_hash = await run_in_threadpool(hash_password, payload.password, settings.bcrypt_rounds)
    users.add(User(username=payload.username, password_hash=password_hash))
    logger.info("user_created", username=payload.username)
    return "User created successfully."


async def login_logic(payload: LoginIn, users: CredentialStore, settings: Settings) -> Dict[str, str]:
    user = users.find(payload.username)
    if user is None:
        logger.info("login_failed", reason="unknown_user", username=payload.username)
        raise AuthenticationFailure("Cannot find user.", status_code=400)

    if not await run_in_threadpool(verify_password, payload.password, user.password_hash):
        logger.info("login_failed", reason="bad_password", username=user.username)
        raise AuthenticationFailure("Incorrect password.")

    token = issue_token({"name": user.username}, settings)
    logger.info("login_succeeded", username=user.username)
    return {"accessToken": token, "username": user.username}


# Item endpoints
def _price_of(p: Dict[str, Any]) -> float:
    try:
        return float(p.get("price"))
    except (TypeError, ValueError):
        return float("nan")


async def list_items_logic(
    catalog: CatalogStore,
    category: Optional[str] = None,
    min_price: Optional[str] = None,
    max_price: Optional[str] = None,
) -> List[Dict[str, Any]]:
    out = catalog.snapshot()
    if category:
        out = [p for p in out if p.get("category") == category]
    if min_price:
        lo = _parse_price(min_price)
        out = [p for p in out if _price_of(p) >= lo]
    if max_price:
        hi = _parse_price(max_price)
        out = [p for p in out if _price_of(p) <= hi]
    return out


async def create_item_logic(payload: ItemIn, catalog: CatalogStore) -> Dict[str, Any]:
    if _is_missing(payload.name) or _is_missing(payload.price) or _is_missing(payload.category):
        raise ValidationError("Name, price, and category are required.")
    item = catalog.create(lambda new_id: _make_product_dict(new_id, payload))
    logger.info("item_created", item_id=item["id"], name=item["name"])
    return item


async def update_item_logic(raw_id: str, fields: Dict[str, Any], catalog: CatalogStore) -> Dict[str, Any]:
    item = catalog.update(_parse_id(raw_id), fields)
    if item is None:
        raise NotFoundError()
    logger.info("item_updated", item_id=raw_id, fields=sorted(fields))
    return item


async def delete_item_logic(raw_id: str, catalog: CatalogStore) -> None:
    if not catalog.delete(_parse_id(raw_id)):
        raise NotFoundError()
    logger.info("item_deleted", item_id=raw_id)


# Cart endpoints
async def cart_add_logic(payload: AddToCartIn, claims: Dict[str, Any]) -> str:
    # nothing is stored; the action is only recorded in the log
    logger.info(
        "cart_item_added",
        username=claims.get("name"),
        item_id=payload.itemId,
        quantity=payload.quantity,
    )
    return "Item added to cart successfully."
