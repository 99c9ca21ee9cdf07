# app/main.py
from typing import Any, Dict, Optional

import uvicorn
from fastapi import APIRouter, Depends, FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, PlainTextResponse, Response

from .auth import CredentialVerifier, StaticApiKeyVerifier, require_credentials
from .config import Settings, settings as default_settings
from .core import Err, ProductIn, Result
from .database import ProductStore
from .handlers import register_error_handlers
from .logging import configure_logging
from .logic import (
    create_product_logic, delete_product_logic, get_product_logic,
    list_products_logic, product_stats_logic, update_product_logic,
)
from .pipeline import get_store, log_requests, validated_create, validated_update

WELCOME = "Welcome to the Product API! Go to /api/products to see all products."


def _respond(result: Result) -> Response:
    if isinstance(result, Err):
        raise result.error
    if result.status_code == 204:
        return Response(status_code=204)
    return JSONResponse(status_code=result.status_code, content=result.value)


# ---------------------------
# Product endpoints
# ---------------------------
router = APIRouter(prefix="/api/products", tags=["products"])


@router.get("")
async def list_products(
    category: Optional[str] = None,
    search: Optional[str] = None,
    page: Optional[str] = None,
    limit: Optional[str] = None,
    store: ProductStore = Depends(get_store),
):
    return _respond(await list_products_logic(store, category, search, page, limit))


@router.get("/stats")
async def product_stats(store: ProductStore = Depends(get_store)):
    return _respond(await product_stats_logic(store))


@router.get("/{product_id}")
async def get_product(product_id: str, store: ProductStore = Depends(get_store)):
    return _respond(await get_product_logic(store, product_id))


@router.post("", status_code=201)
async def create_product(
    payload: ProductIn = Depends(validated_create),
    store: ProductStore = Depends(get_store),
):
    return _respond(await create_product_logic(store, payload))


@router.put("/{product_id}")
async def update_product(
    product_id: str,
    changes: Dict[str, Any] = Depends(validated_update),
    store: ProductStore = Depends(get_store),
):
    return _respond(await update_product_logic(store, product_id, changes))


@router.delete("/{product_id}", status_code=204)
async def delete_product(product_id: str, store: ProductStore = Depends(get_store)):
    return _respond(await delete_product_logic(store, product_id))


def create_app(
    settings: Optional[Settings] = None,
    store: Optional[ProductStore] = None,
    verifier: Optional[CredentialVerifier] = None,
) -> FastAPI:
    settings = settings or default_settings
    configure_logging(level=settings.log_level, request_level=settings.request_log_level)

    app = FastAPI(
        title=settings.project_name,
        version=settings.version,
        docs_url="/docs" if settings.debug else None,
        redoc_url="/redoc" if settings.debug else None,
        dependencies=[Depends(require_credentials)],
    )
    app.state.store = store if store is not None else ProductStore()
    app.state.verifier = verifier or StaticApiKeyVerifier(settings.api_key)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.middleware("http")(log_requests)

    register_error_handlers(app)

    @app.get("/", response_class=PlainTextResponse)
    async def root():
        return WELCOME

    app.include_router(router)
    return app


app = create_app()


def run() -> None:
    uvicorn.run("app.main:app", host=default_settings.host, port=default_settings.port)


if __name__ == "__main__":
    run()
