# storefront/main.py
import logging
from contextlib import asynccontextmanager
from typing import Optional, Dict, Any

from fastapi import Body, Depends, FastAPI, Header, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, Response

from .config import Settings, get_settings
from .core import NotFound, StoreError, authorize, parse_int
from .database import JsonStore
from .logic import (
    cart_add_logic, cart_remove_logic, create_product_logic,
    delete_product_logic, get_product_logic, list_products_logic,
    view_cart_logic
)
from .models import Mutation

logger = logging.getLogger("storefront")

# ---------------------------
# Dependencies
# ---------------------------
def get_store(request: Request) -> JsonStore:
    return request.app.state.store

def require_admin(request: Request, x_admin_key: Optional[str] = Header(None)) -> None:
    authorize(x_admin_key, request.app.state.settings.admin_api_key)

def _respond(mutation: Mutation, status_code: int) -> Response:
    headers = {"X-Persisted": "true" if mutation.persisted else "false"}
    if not mutation.persisted:
        logger.warning("responding %s without a durable write", status_code)
    if mutation.data is None:
        return Response(status_code=status_code, headers=headers)
    return JSONResponse(mutation.data, status_code=status_code, headers=headers)

# ---------------------------
# Error handlers
# ---------------------------
async def _store_error(request: Request, exc: StoreError):
    return JSONResponse({"error": exc.message}, status_code=exc.status_code)

async def _bad_request(request: Request, exc: RequestValidationError):
    return JSONResponse({"error": "Invalid request body"}, status_code=400)

async def _unexpected(request: Request, exc: Exception):
    logger.exception("unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse({"error": "Internal server error"}, status_code=500)

# ---------------------------
# App factory
# ---------------------------
def create_app(settings: Optional[Settings] = None) -> FastAPI:
    settings = settings or get_settings()
    logging.basicConfig(level=settings.log_level)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logger.info("Server running at port %s (environment=%s, data_dir=%s)",
                    settings.port, settings.environment, settings.data_dir)
        yield

    app = FastAPI(title="storefront", lifespan=lifespan)
    app.state.settings = settings
    app.state.store = JsonStore.from_settings(settings)

    # requests without an Origin header pass straight through
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.allowed_origins,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=["X-Persisted"],
    )
    app.add_exception_handler(StoreError, _store_error)
    app.add_exception_handler(RequestValidationError, _bad_request)
    app.add_exception_handler(Exception, _unexpected)

    # ---------------------------
    # Product endpoints
    # ---------------------------
    @app.get("/api/products")
    async def list_products(store: JsonStore = Depends(get_store)):
        return await list_products_logic(store)

    @app.get("/api/products/{product_id}")
    async def get_product(product_id: str, store: JsonStore = Depends(get_store)):
        pid = parse_int(product_id)
        if pid is None:
            raise NotFound("Product not found")
        return await get_product_logic(store, pid)

    # ---------------------------
    # Cart endpoints
    # ---------------------------
    @app.get("/api/cart")
    async def view_cart(store: JsonStore = Depends(get_store)):
        return await view_cart_logic(store)

    @app.post("/api/cart", status_code=201)
    async def cart_add(payload: Dict[str, Any] = Body(...), store: JsonStore = Depends(get_store)):
        return _respond(await cart_add_logic(store, payload), 201)

    @app.delete("/api/cart/{index}")
    async def cart_remove(index: str, store: JsonStore = Depends(get_store)):
        idx = parse_int(index)
        if idx is None:
            raise NotFound("Item not found")
        return _respond(await cart_remove_logic(store, idx), 200)

    # ---------------------------
    # Admin endpoints
    # ---------------------------
    @app.post("/api/admin/products", status_code=201, dependencies=[Depends(require_admin)])
    async def create_product(payload: Dict[str, Any] = Body(...), store: JsonStore = Depends(get_store)):
        return _respond(await create_product_logic(store, payload), 201)

    @app.delete("/api/admin/products/{product_id}", status_code=204, dependencies=[Depends(require_admin)])
    async def delete_product(product_id: str, store: JsonStore = Depends(get_store)):
        pid = parse_int(product_id)
        if pid is None:
            raise NotFound("Product not found")
        return _respond(await delete_product_logic(store, pid), 204)

    return app


if __name__ == "__main__":
    import uvicorn

    settings = get_settings()
    uvicorn.run(create_app(settings), host=settings.host, port=settings.port)
