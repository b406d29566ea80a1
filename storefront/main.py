# storefront/main.py
import time
from contextlib import asynccontextmanager
from typing import Any, Dict, List, Optional

from fastapi import Body, Depends, FastAPI, Header, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import PlainTextResponse, Response

from .config import Settings, get_settings
from .core import AddToCartIn, ItemIn, LoginIn, SignupIn, _load_body
from .database import CatalogStore, CredentialStore
from .errors import ForbiddenToken, InvalidToken, MissingToken, StoreError
from .logging import clear_context, configure_logging, get_logger, set_request_id
from .sdk import (
    cart_add_logic,
    create_item_logic,
    delete_item_logic,
    list_items_logic,
    login_logic,
    signup_logic,
    update_item_logic,
)
from .security import verify_token

logger = get_logger(__name__)


# ---------------------------
# Dependencies
# ---------------------------
def get_app_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_users(request: Request) -> CredentialStore:
    return request.app.state.users


def get_catalog(request: Request) -> CatalogStore:
    return request.app.state.catalog


def require_user(
    request: Request,
    authorization: Optional[str] = Header(None),
    settings: Settings = Depends(get_app_settings),
) -> Dict[str, Any]:
    """Auth gate: the token is the second space-separated part of the Authorization header."""
    parts = authorization.split(" ") if authorization else []
    token = parts[1] if len(parts) > 1 else None
    if token is None:
        raise MissingToken()
    try:
        claims = verify_token(token, settings)
    except InvalidToken as e:
        logger.info("token_rejected", error=str(e), path=request.url.path)
        raise ForbiddenToken() from e
    request.state.user = claims
    return claims


# ---------------------------
# App factory
# ---------------------------
def create_app(settings: Optional[Settings] = None) -> FastAPI:
    settings = settings or get_settings()
    configure_logging(settings)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logger.info("application_starting", port=settings.port, items=len(app.state.catalog))
        yield
        logger.info("application_shutting_down")

    app = FastAPI(title=settings.app_name, lifespan=lifespan)
    app.state.settings = settings
    app.state.users = CredentialStore()
    app.state.catalog = CatalogStore(settings.seed_products)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        set_request_id(request.headers.get("X-Request-ID"))
        start = time.perf_counter()
        try:
            response = await call_next(request)
            logger.info(
                "request_handled",
                method=request.method,
                path=request.url.path,
                status=response.status_code,
                duration_ms=round((time.perf_counter() - start) * 1000, 2),
            )
            return response
        finally:
            clear_context()

    # ---------------------------
    # Error handlers
    # ---------------------------
    @app.exception_handler(StoreError)
    async def store_error_handler(request: Request, exc: StoreError):
        return PlainTextResponse(exc.message, status_code=exc.status_code)

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError):
        logger.warning("invalid_request_body", path=request.url.path, errors=exc.errors())
        return PlainTextResponse("Invalid request body.", status_code=400)

    # ---------------------------
    # Auth endpoints
    # ---------------------------
    @app.post("/api/signup", status_code=201, response_class=PlainTextResponse)
    async def signup(
        body: Any = Body(None),
        users: CredentialStore = Depends(get_users),
        settings: Settings = Depends(get_app_settings),
    ):
        return await signup_logic(_load_body(SignupIn, body), users, settings)

    @app.post("/api/login")
    async def login(
        body: Any = Body(None),
        users: CredentialStore = Depends(get_users),
        settings: Settings = Depends(get_app_settings),
    ):
        return await login_logic(_load_body(LoginIn, body), users, settings)

    # ---------------------------
    # Item endpoints
    # ---------------------------
    @app.get("/api/items")
    async def list_items(
        category: Optional[str] = None,
        minPrice: Optional[str] = None,
        maxPrice: Optional[str] = None,
        catalog: CatalogStore = Depends(get_catalog),
    ) -> List[Dict[str, Any]]:
        return await list_items_logic(catalog, category, minPrice, maxPrice)

    @app.post("/api/items", status_code=201)
    async def create_item(
        body: Any = Body(None),
        claims: Dict[str, Any] = Depends(require_user),
        catalog: CatalogStore = Depends(get_catalog),
    ):
        return await create_item_logic(_load_body(ItemIn, body), catalog)

    @app.put("/api/items/{item_id}")
    async def update_item(
        item_id: str,
        body: Any = Body(None),
        claims: Dict[str, Any] = Depends(require_user),
        catalog: CatalogStore = Depends(get_catalog),
    ):
        return await update_item_logic(item_id, body if isinstance(body, dict) else {}, catalog)

    @app.delete("/api/items/{item_id}", status_code=204)
    async def delete_item(
        item_id: str,
        claims: Dict[str, Any] = Depends(require_user),
        catalog: CatalogStore = Depends(get_catalog),
    ):
        await delete_item_logic(item_id, catalog)
        return Response(status_code=204)

    # ---------------------------
    # Cart endpoints
    # ---------------------------
    @app.post("/api/cart/add", response_class=PlainTextResponse)
    async def cart_add(
        body: Any = Body(None),
        claims: Dict[str, Any] = Depends(require_user),
    ):
        return await cart_add_logic(_load_body(AddToCartIn, body), claims)

    # ---------------------------
    # Health
    # ---------------------------
    @app.get("/health")
    async def health(
        users: CredentialStore = Depends(get_users),
        catalog: CatalogStore = Depends(get_catalog),
    ):
        return {"status": "ok", "items": len(catalog), "users": len(users)}

    return app


app = create_app()


def run() -> None:
    import uvicorn

    settings = get_settings()
    uvicorn.run("storefront.main:app", host=settings.host, port=settings.port)
