# catalog/main.py
import logging
import time
from typing import Any, Dict, Optional

from fastapi import APIRouter, Body, FastAPI, Request, Response
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from .config import CORS_ORIGINS, LOG_LEVEL, SEED_ON_STARTUP
from .database import STORE, seed_products
from .errors import CatalogError
from .service import (
    create_product_logic,
    delete_product_logic,
    get_product_logic,
    list_categories_logic,
    list_products_logic,
    update_product_logic,
)

# Setup logging
logging.basicConfig(level=LOG_LEVEL, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
logger = logging.getLogger(__name__)

app = FastAPI(title="catalog-api (in-memory product catalog)", version="1.0.0")

app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["GET", "POST", "PATCH", "DELETE", "OPTIONS"],
    allow_headers=["Content-Type", "Authorization", "Accept"],
)

if SEED_ON_STARTUP:
    STORE.reset(seed_products())


@app.middleware("http")
async def log_requests(request: Request, call_next):
    start = time.perf_counter()
    response = await call_next(request)
    elapsed_ms = (time.perf_counter() - start) * 1000
    logger.info("%s %s %s %.1fms", request.method, request.url.path, response.status_code, elapsed_ms)
    return response


# ---------------------------
# Error mapping
# ---------------------------
@app.exception_handler(CatalogError)
async def catalog_error_handler(request: Request, exc: CatalogError):
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


@app.exception_handler(StarletteHTTPException)
async def http_error_handler(request: Request, exc: StarletteHTTPException):
    # any method/path pair without a handler is "Not found"
    if exc.status_code in (404, 405):
        return JSONResponse(status_code=404, content={"error": "Not found"})
    return JSONResponse(status_code=exc.status_code, content={"error": str(exc.detail)}, headers=exc.headers)


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    logger.debug("Malformed request to %s: %s", request.url.path, exc.errors())
    return JSONResponse(status_code=400, content={"error": "Request body must be a JSON object"})


@app.exception_handler(Exception)
async def unhandled_error_handler(request: Request, exc: Exception):
    # the server logs the traceback when the exception is re-raised
    logger.error("Unhandled error on %s %s: %r", request.method, request.url.path, exc)
    return JSONResponse(status_code=500, content={"error": "Internal server error"})


# ---------------------------
# Service endpoints
# ---------------------------
@app.get("/")
async def root():
    return {"status": "ok", "message": "Catalog API is running. Try /api/products"}


@app.get("/health")
async def health():
    return {"status": "ok"}


# ---------------------------
# Product endpoints
# ---------------------------
router = APIRouter(prefix="/api/products", tags=["products"])


@router.get("")
async def list_products(category: Optional[str] = None, q: Optional[str] = None):
    return [p.to_json() for p in await list_products_logic(category=category, q=q)]


@router.get("/categories")
async def list_categories():
    return await list_categories_logic()


@router.get("/{product_id}")
async def get_product(product_id: str):
    product = await get_product_logic(product_id)
    return product.to_json()


@router.post("", status_code=201)
async def create_product(payload: Optional[Dict[str, Any]] = Body(None)):
    product = await create_product_logic(payload or {})
    return product.to_json()


@router.patch("/{product_id}")
async def update_product(product_id: str, payload: Optional[Dict[str, Any]] = Body(None)):
    product = await update_product_logic(product_id, payload)
    return product.to_json()


@router.delete("/{product_id}", status_code=204)
async def delete_product(product_id: str):
    await delete_product_logic(product_id)
    return Response(status_code=204)


app.include_router(router)
