# storefront/config.py
from functools import lru_cache
from typing import Any, Dict, List, Literal, Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_PRODUCTS: List[Dict[str, Any]] = [
    {"id": 1, "name": "Vintage Camera", "price": 299, "category": "Electronics"},
    {"id": 2, "name": "Leather Jacket", "price": 150, "category": "Apparel"},
    {"id": 3, "name": "Coffee Maker", "price": 75, "category": "Home Goods"},
    {"id": 4, "name": "Stylish Backpack", "price": 80, "category": "Accessories"},
    {"id": 5, "name": "Wireless Headphones", "price": 120, "category": "Electronics"},
    {"id": 6, "name": "Running Shoes", "price": 95, "category": "Apparel"},
]


class Settings(BaseSettings):
    """Process-wide settings. Every field can be overridden with a STOREFRONT_ env var."""

    model_config = SettingsConfigDict(env_prefix="STOREFRONT_", case_sensitive=False, extra="ignore")

    app_name: str = "storefront (in-memory demo)"
    host: str = "0.0.0.0"
    port: int = 3000

    # tokens
    secret_key: str = "your_super_secret_key"
    jwt_algorithm: str = "HS256"
    # None keeps tokens valid forever
    token_expire_minutes: Optional[int] = Field(default=None, ge=1)

    bcrypt_rounds: int = Field(default=10, ge=4, le=31)

    cors_origins: List[str] = ["*"]

    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"
    log_format: Literal["console", "json"] = "console"

    seed_products: List[Dict[str, Any]] = Field(default_factory=lambda: [dict(p) for p in DEFAULT_PRODUCTS])


@lru_cache
def get_settings() -> Settings:
    return Settings()
