# app/main.py
import time
from datetime import datetime, timezone
from typing import Optional

from fastapi import APIRouter, Depends, FastAPI, Header, Query, Request
from fastapi.middleware.cors import CORSMiddleware
from starlette.exceptions import HTTPException as StarletteHTTPException

from .config import Settings
from .core import check_api_key
from .database import ProductStore
from .errors import ApiError, ErrorKind, error_response, validation_error
from .logger import get_logger, set_level
from .sdk import (
    create_product_logic, delete_product_logic, get_product_logic,
    list_products_logic, product_stats_logic, search_products_logic,
    update_product_logic,
)

log = get_logger("api")

# ---------------------------
# Dependencies
# ---------------------------
def get_store(request: Request) -> ProductStore:
    return request.app.state.store


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def require_api_key(
    x_api_key: Optional[str] = Header(None),
    settings: Settings = Depends(get_settings),
) -> None:
    check_api_key(x_api_key, settings.api_key)


async def _read_payload(request: Request):
    try:
        return await request.json()
    except ValueError:
        raise validation_error("Request body must be a JSON object")

# ---------------------------
# Product endpoints
# ---------------------------
router = APIRouter(prefix="/api/products")

@router.get("")
async def list_products(
    category: Optional[str] = None,
    in_stock: Optional[str] = Query(None, alias="inStock"),
    page: Optional[str] = None,
    limit: Optional[str] = None,
    store: ProductStore = Depends(get_store),
    settings: Settings = Depends(get_settings),
):
    return list_products_logic(
        store, category=category, in_stock=in_stock, page=page, limit=limit,
        default_limit=settings.default_page_limit,
    )

# search and stats must be registered before /{product_id}
@router.get("/search")
async def search_products(q: Optional[str] = None, store: ProductStore = Depends(get_store)):
    return search_products_logic(store, q)

@router.get("/stats")
async def product_stats(store: ProductStore = Depends(get_store)):
    return product_stats_logic(store)

@router.get("/{product_id}")
async def get_product(product_id: str, store: ProductStore = Depends(get_store)):
    return get_product_logic(store, product_id)

@router.post("", status_code=201, dependencies=[Depends(require_api_key)])
async def create_product(request: Request, store: ProductStore = Depends(get_store)):
    payload = await _read_payload(request)
    return create_product_logic(store, payload)

@router.put("/{product_id}", dependencies=[Depends(require_api_key)])
async def update_product(product_id: str, request: Request, store: ProductStore = Depends(get_store)):
    payload = await _read_payload(request)
    return update_product_logic(store, product_id, payload)

@router.delete("/{product_id}", dependencies=[Depends(require_api_key)])
async def delete_product(product_id: str, store: ProductStore = Depends(get_store)):
    return delete_product_logic(store, product_id)

# ---------------------------
# Error mapping
# ---------------------------
async def handle_api_error(request: Request, exc: ApiError):
    log.warning("%s %s -> %s: %s", request.method, request.url.path, exc.kind.status_code, exc.message)
    return error_response(exc.kind, exc.message)


async def handle_http_error(request: Request, exc: StarletteHTTPException):
    if exc.status_code in (404, 405):
        target = request.url.path
        if request.url.query:
            target += f"?{request.url.query}"
        return error_response(ErrorKind.NOT_FOUND, f"Route {request.method} {target} not found")
    return error_response(ErrorKind.INTERNAL)


async def handle_unexpected_error(request: Request, exc: Exception):
    log.exception("Unhandled error on %s %s", request.method, request.url.path)
    return error_response(ErrorKind.INTERNAL)

# ---------------------------
# Middleware
# ---------------------------
async def log_requests(request: Request, call_next):
    timestamp = datetime.now(timezone.utc).isoformat()
    target = request.url.path
    if request.url.query:
        target += f"?{request.url.query}"
    log.info("[%s] %s %s", timestamp, request.method, target)
    started = time.perf_counter()
    response = await call_next(request)
    log.info("%s %s -> %s (%.1f ms)", request.method, target, response.status_code,
             (time.perf_counter() - started) * 1000)
    return response

# ---------------------------
# Application factory
# ---------------------------
def create_app(settings: Optional[Settings] = None, store: Optional[ProductStore] = None) -> FastAPI:
    settings = settings or Settings.from_env()
    if store is None:
        store = ProductStore.seeded() if settings.seed_products else ProductStore()
    set_level(settings.log_level)

    app = FastAPI(title="Product Catalog API (in-memory)")
    app.state.settings = settings
    app.state.store = store

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.middleware("http")(log_requests)

    app.add_exception_handler(ApiError, handle_api_error)
    app.add_exception_handler(StarletteHTTPException, handle_http_error)
    app.add_exception_handler(Exception, handle_unexpected_error)

    @app.get("/")
    async def index():
        return {
            "message": "Welcome to the Product API!",
            "endpoints": {
                "GET /api/products": "Get all products",
                "GET /api/products/:id": "Get a specific product",
                "POST /api/products": "Create a new product",
                "PUT /api/products/:id": "Update a product",
                "DELETE /api/products/:id": "Delete a product",
                "GET /api/products/search?q=query": "Search products by name or description",
                "GET /api/products/stats": "Get product statistics",
            },
        }

    app.include_router(router)
    return app


app = create_app()


def run() -> None:
    import uvicorn

    settings = app.state.settings
    log.info("Server is running on http://%s:%s", settings.host, settings.port)
    uvicorn.run(app, host=settings.host, port=settings.port, log_level="warning")


if __name__ == "__main__":
    run()
