# storefront/models.py
from typing import Any

from pydantic import BaseModel, ConfigDict


class User(BaseModel):
    username: str
    password_hash: str


class Product(BaseModel):
    # update-item merges arbitrary fields over a product, so extras are kept
    model_config = ConfigDict(extra="allow")

    id: int
    name: Any
    price: Any
    category: Any
