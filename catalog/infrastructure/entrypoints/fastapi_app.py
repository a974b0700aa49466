"""
FastAPI entry point.

This module is the Composition Root: create_app() wires the infrastructure
adapters (MySQL repository, lxml interpreter) and passes them to the
application use-cases. Tests inject their own repository/interpreter.

Run locally:
    uvicorn catalog.infrastructure.entrypoints.fastapi_app:app --reload --port 3000
"""

import os
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, HTTPException, Request, Response
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles
from loguru import logger
from starlette.exceptions import HTTPException as StarletteHTTPException

from catalog.application.use_cases.create_product import CreateProductUseCase
from catalog.application.use_cases.delete_product import DeleteProductUseCase
from catalog.application.use_cases.get_product import GetProductUseCase
from catalog.application.use_cases.list_products import ListProductsUseCase
from catalog.application.use_cases.update_product import UpdateProductUseCase
from catalog.domain.exceptions import ProductNotFoundError, StorageError
from catalog.domain.ports.historical_data_port import IHistoricalDataInterpreter
from catalog.domain.ports.product_repository_port import IProductRepository
from catalog.infrastructure.config.settings import Settings, load_settings
from catalog.infrastructure.entrypoints.schemas import (
    MessageResponse,
    ProductDetailResponse,
    ProductRequest,
    ProductResponse,
)
from catalog.infrastructure.historical_data.lxml_interpreter import LxmlHistoricalDataInterpreter
from catalog.infrastructure.logging.setup import configure_logging
from catalog.infrastructure.persistence.mysql_connection import MySQLConnectionProvider
from catalog.infrastructure.persistence.mysql_product_repository import MySQLProductRepository
from catalog.infrastructure.persistence.schema import ensure_schema

PRODUCT_NOT_FOUND = "Product not found."


def create_app(
    settings: Optional[Settings] = None,
    repository: Optional[IProductRepository] = None,
    interpreter: Optional[IHistoricalDataInterpreter] = None,
) -> FastAPI:
    """Build the catalog API.

    Args:
        settings:    Runtime configuration. Loaded from the environment if omitted.
        repository:  IProductRepository implementation. When omitted a MySQL
                     repository is built from *settings* and the products table
                     is created at startup if missing.
        interpreter: IHistoricalDataInterpreter implementation. Defaults to
                     LxmlHistoricalDataInterpreter.
    """
    settings = settings or load_settings()
    configure_logging(settings.log_level, settings.log_format)

    connection_provider: Optional[MySQLConnectionProvider] = None
    if repository is None:
        connection_provider = MySQLConnectionProvider(settings.mysql)
        repository = MySQLProductRepository(connection_provider)
    interpreter = interpreter or LxmlHistoricalDataInterpreter()

    list_uc = ListProductsUseCase(repository)
    get_uc = GetProductUseCase(repository, interpreter)
    create_uc = CreateProductUseCase(repository)
    update_uc = UpdateProductUseCase(repository)
    delete_uc = DeleteProductUseCase(repository)

    @asynccontextmanager
    async def lifespan(_: FastAPI):
        if connection_provider is not None:
            logger.info(
                "Connecting to MySQL database {!r} on {}:{}",
                settings.mysql.database,
                settings.mysql.host,
                settings.mysql.port,
            )
            ensure_schema(connection_provider)
        yield

    app = FastAPI(title="Product Catalog API", lifespan=lifespan)

    # ------------------------------------------------------------------
    # Error rendering: every failure body is {"error": "<message>"}
    # ------------------------------------------------------------------

    @app.exception_handler(StarletteHTTPException)
    async def http_error(_: Request, exc: StarletteHTTPException) -> JSONResponse:
        return JSONResponse(status_code=exc.status_code, content={"error": exc.detail})

    @app.exception_handler(RequestValidationError)
    async def validation_error(_: Request, exc: RequestValidationError) -> JSONResponse:
        messages = "; ".join(
            f"{'.'.join(str(p) for p in err['loc'])}: {err['msg']}" for err in exc.errors()
        )
        return JSONResponse(status_code=400, content={"error": messages})

    @app.exception_handler(StorageError)
    async def storage_error(_: Request, exc: StorageError) -> JSONResponse:
        return JSONResponse(status_code=500, content={"error": str(exc)})

    # ------------------------------------------------------------------
    # Routes. Plain `def` handlers run in the threadpool, so XML parsing
    # never runs on (or yields to) the event loop.
    # ------------------------------------------------------------------

    @app.get("/api/products", response_model=list[ProductResponse])
    def list_products():
        return [ProductResponse.from_domain(p) for p in list_uc.execute()]

    @app.get("/api/products/{product_id}", response_model=ProductDetailResponse)
    def get_product(product_id: int):
        try:
            details = get_uc.execute(product_id)
        except ProductNotFoundError as exc:
            raise HTTPException(status_code=404, detail=PRODUCT_NOT_FOUND) from exc
        return ProductDetailResponse.from_details(details)

    @app.post("/api/products", response_model=ProductResponse, status_code=201)
    def create_product(body: ProductRequest):
        try:
            product = create_uc.execute(body.to_domain())
        except ValueError as exc:
            raise HTTPException(status_code=400, detail=str(exc)) from exc
        return ProductResponse.from_domain(product)

    @app.put("/api/products/{product_id}", response_model=MessageResponse)
    def update_product(product_id: int, body: ProductRequest):
        try:
            update_uc.execute(product_id, body.to_domain())
        except ValueError as exc:
            raise HTTPException(status_code=400, detail=str(exc)) from exc
        except ProductNotFoundError as exc:
            raise HTTPException(status_code=404, detail=PRODUCT_NOT_FOUND) from exc
        return MessageResponse(message="Product updated successfully.")

    @app.delete("/api/products/{product_id}", status_code=204)
    def delete_product(product_id: int):
        try:
            delete_uc.execute(product_id)
        except ProductNotFoundError as exc:
            raise HTTPException(status_code=404, detail=PRODUCT_NOT_FOUND) from exc
        return Response(status_code=204)

    @app.get("/health")
    async def health():
        return {"status": "ok"}

    # Mounted last so the API routes above take precedence over "/".
    if os.path.isdir(settings.static_dir):
        app.mount("/", StaticFiles(directory=settings.static_dir, html=True), name="static")

    return app


app = create_app()
